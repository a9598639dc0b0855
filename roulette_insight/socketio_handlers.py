"""
SocketIO Event Handlers - Real-time WebSocket events for the dashboard.
Handles result input, session management, bulk import and analysis refresh.
"""

import logging

from flask import request
from flask_socketio import emit

from roulette_insight import socketio, state
from roulette_insight.analysis.wheel import get_number_color
from roulette_insight.models import InvalidNumberError

logger = logging.getLogger(__name__)


def _require_session():
    if not state.session_mgr.active:
        emit('error', {'message': 'No active session. Start a session first.'})
        return False
    return True


def _parse_numbers(raw_text):
    """Parse roulette numbers from text (newline or comma separated)."""
    numbers = []
    lines = raw_text.replace(',', '\n').split('\n')
    for line in lines:
        line = line.strip()
        if not line:
            continue
        try:
            num = int(line)
        except ValueError:
            continue
        if 0 <= num <= 36:
            numbers.append(num)
    return numbers


@socketio.on('connect')
def handle_connect():
    emit('connected', {
        'message': 'Connected to Roulette Insight',
        'session_active': state.session_mgr.active,
        'session_id': state.session_mgr.session_id,
        'total_spins': len(state.engine.spin_history),
    })


@socketio.on('start_session')
def handle_start_session(data=None):
    name = (data or {}).get('name')
    session_id = state.start_session(name)
    emit('session_started', {
        'session_id': session_id,
        'strategies': state.session_mgr.get_strategies(),
        'betting_preferences': state.session_mgr.get_betting_preferences(),
        'analysis': state.get_analysis(),
    })


@socketio.on('end_session')
def handle_end_session():
    if not _require_session():
        return
    stats = state.session_mgr.get_session_stats()
    session_id = state.end_session()
    emit('session_ended', {'session_id': session_id, 'stats': stats})


@socketio.on('load_session')
def handle_load_session(data):
    session_id = (data or {}).get('session_id')
    if not session_id or state.load_session(session_id) is None:
        emit('error', {'message': f'Session {session_id} not found.'})
        return
    emit('session_loaded', {
        'session_id': session_id,
        'total_spins': len(state.engine.spin_history),
        'analysis': state.get_analysis(),
    })


@socketio.on('submit_result')
def handle_submit_result(data):
    if not _require_session():
        return

    data = data or {}
    try:
        result, alerts = state.record_result(data.get('number'), data.get('source', 'manual'))
    except InvalidNumberError:
        emit('error', {'message': 'Invalid number. Enter 0-36.'})
        return
    except ValueError as e:
        emit('error', {'message': str(e)})
        return

    emit('result_processed', {
        'result': result.to_dict(),
        'alerts': alerts,
        'strategies': state.session_mgr.get_strategies(),
        'analysis': state.get_analysis(),
    })


@socketio.on('undo_result')
def handle_undo_result():
    """Undo/revert the last entered result."""
    if not _require_session():
        return

    removed = state.undo_result()
    if removed is None:
        emit('error', {'message': 'No results to undo.'})
        return

    emit('result_undone', {
        'removed_number': removed.number,
        'removed_color': get_number_color(removed.number),
        'remaining_spins': len(state.engine.spin_history),
        'analysis': state.get_analysis(),
    })


@socketio.on('import_data')
def handle_import_data(data):
    """Append a pasted list of historical results to the current session."""
    if not _require_session():
        return

    raw_text = (data or {}).get('text', '')
    if not raw_text.strip():
        emit('error', {'message': 'No data provided.'})
        return

    numbers = _parse_numbers(raw_text)
    logger.info('[import_data] Parsed %d numbers', len(numbers))
    if not numbers:
        emit('error', {'message': 'No valid numbers (0-36) found in data.'})
        return

    sid = request.sid

    def _do_import():
        try:
            state.import_numbers(numbers)
            socketio.sleep(0)
            socketio.emit('import_complete', {
                'numbers_imported': len(numbers),
                'total_spins': len(state.engine.spin_history),
                'last_numbers': list(reversed(state.engine.spin_history[-10:])),
                'analysis': state.get_analysis(),
            }, to=sid)
        except Exception as e:
            logger.exception('[import_data] Import failed')
            socketio.emit('error', {'message': f'Import failed: {e}'}, to=sid)

    socketio.start_background_task(_do_import)


@socketio.on('get_analysis')
def handle_get_analysis():
    emit('analysis_update', state.get_analysis())


@socketio.on('get_suggestion')
def handle_get_suggestion(data):
    kind = (data or {}).get('type', 'straight_up')
    try:
        suggestion = state.engine.get_suggestion(kind)
    except ValueError as e:
        emit('error', {'message': str(e)})
        return
    emit('suggestion', suggestion)


@socketio.on('get_stats')
def handle_get_stats():
    emit('session_stats', state.session_mgr.get_session_stats())


@socketio.on('get_alerts')
def handle_get_alerts(data=None):
    unread_only = bool((data or {}).get('unread_only', False))
    emit('alerts_list', state.session_mgr.get_alerts(unread_only=unread_only))


@socketio.on('mark_alert_read')
def handle_mark_alert_read(data):
    alert_id = (data or {}).get('alert_id')
    if not state.session_mgr.mark_alert_read(alert_id):
        emit('error', {'message': f'Alert {alert_id} not found.'})
        return
    emit('alerts_list', state.session_mgr.get_alerts())


@socketio.on('update_strategy')
def handle_update_strategy(data):
    if not _require_session():
        return

    data = data or {}
    try:
        strategy = state.session_mgr.update_strategy(data.get('strategy_id'), data.get('updates', {}))
    except (TypeError, ValueError) as e:
        emit('error', {'message': f'Invalid strategy update: {e}'})
        return

    if strategy is None:
        emit('error', {'message': 'Strategy not found.'})
        return
    emit('strategies_list', state.session_mgr.get_strategies())


@socketio.on('update_preference')
def handle_update_preference(data):
    if not _require_session():
        return

    data = data or {}
    try:
        preference = state.session_mgr.update_preference(
            data.get('preference_id'), data.get('updates', {}))
    except (TypeError, ValueError) as e:
        emit('error', {'message': f'Invalid preference update: {e}'})
        return

    if preference is None:
        emit('error', {'message': 'Betting preference not found.'})
        return
    emit('preferences_list', {
        'betting_preferences': state.session_mgr.get_betting_preferences(),
        'analysis': state.get_analysis(),
    })


@socketio.on('get_sessions')
def handle_get_sessions():
    emit('sessions_list', state.session_mgr.get_all_sessions())
