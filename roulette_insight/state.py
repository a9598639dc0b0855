"""
Process-wide dashboard state shared by the HTTP routes and SocketIO handlers.
"""

import logging

from roulette_insight.analysis.engine import AnalysisEngine
from roulette_insight.session.session_manager import SessionManager

logger = logging.getLogger(__name__)

engine = AnalysisEngine()
session_mgr = SessionManager()


def start_session(name=None):
    session_id = session_mgr.create_session(name)
    engine.reset()
    return session_id


def end_session():
    session_id = session_mgr.end_session()
    engine.reset()
    return session_id


def load_session(session_id):
    session = session_mgr.load_session(session_id)
    if session is not None:
        engine.load_history(session_mgr.get_numbers())
    return session


def _pattern_alerts(before, after):
    """Raise an alert for every pattern type that was not firing before."""
    seen = {p['type'] for p in before}
    for pattern in after:
        if pattern['type'] not in seen:
            session_mgr.add_alert(
                'pattern_detected', pattern['description'], pattern['suggestion'], 'info', pattern)


def record_result(number, source='manual'):
    """Store a result, feed the engine and return (result, new alerts).

    Raises InvalidNumberError before anything is stored.
    """
    before_patterns = engine.get_patterns()
    alerts_before = len(session_mgr.get_alerts())

    result = session_mgr.add_result(number, source)
    engine.update(result.number)

    _pattern_alerts(before_patterns, engine.get_patterns())
    alerts = session_mgr.get_alerts()
    new_alerts = alerts[:len(alerts) - alerts_before]
    logger.debug('[Result] %d recorded, %d new alerts', result.number, len(new_alerts))
    return result, new_alerts


def undo_result():
    removed = session_mgr.undo_last_result()
    if removed is not None:
        engine.undo_last()
    return removed


def import_numbers(numbers):
    imported = session_mgr.import_numbers(numbers)
    engine.load_history(session_mgr.get_numbers())
    return imported


def get_analysis():
    return engine.get_snapshot(session_mgr.get_enabled_bet_types())
