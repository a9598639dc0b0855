"""
Session Manager - Persistent session storage for recorded results, tracked
strategies, alerts and betting preferences.

Each session is one JSON file under SESSIONS_DIR.
"""

import os
import json
import uuid
import logging
from datetime import datetime

from config import (
    SESSIONS_DIR, AUTOSAVE_INTERVAL, RESULTS_HISTORY_LIMIT,
    DEFAULT_STRATEGIES, DEFAULT_BETTING_PREFERENCES,
)
from roulette_insight.models import RouletteResult, validate_number
from roulette_insight.analysis.wheel import get_number_color

logger = logging.getLogger(__name__)

ALERT_SEVERITIES = ('info', 'warning', 'success', 'error')
STRATEGY_FIELDS = ('name', 'numbers', 'max_attempts', 'is_active')
PREFERENCE_FIELDS = ('name', 'enabled', 'priority')


def _now():
    return datetime.now().isoformat()


def _to_int(value, name):
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValueError(f'{name} must be a whole number, got {value!r}') from None


def _new_strategy(template):
    return {
        'id': uuid.uuid4().hex,
        'name': template['name'],
        'type': template['type'],
        'numbers': list(template['numbers']),
        'max_attempts': template.get('max_attempts', 5),
        'current_attempts': 0,
        'hits': 0,
        'checks': 0,
        'success_rate': 0.0,
        'is_active': template.get('is_active', True),
        'last_used': None,
        'created_at': _now(),
    }


def _new_preference(template):
    return {
        'id': uuid.uuid4().hex,
        'name': template['name'],
        'type': template['type'],
        'enabled': template.get('enabled', True),
        'priority': template.get('priority', 1),
        'updated_at': _now(),
    }


class SessionManager:
    def __init__(self, sessions_dir=SESSIONS_DIR):
        self.sessions_dir = sessions_dir
        os.makedirs(self.sessions_dir, exist_ok=True)
        self.current_session = None
        self.session_id = None
        self.results = []

    @property
    def active(self):
        return self.current_session is not None

    def create_session(self, name=None):
        """Start a new session with default strategies and preferences.

        A session that is still active is ended and saved first.
        """
        if self.current_session:
            self.end_session()

        self.session_id = datetime.now().strftime('%Y%m%d_%H%M%S_') + uuid.uuid4().hex[:6]
        self.results = []
        self.current_session = {
            'id': self.session_id,
            'name': name or 'Main session',
            'created_at': _now(),
            'updated_at': _now(),
            'status': 'active',
            'results': [],
            'alerts': [],
            'strategies': [_new_strategy(s) for s in DEFAULT_STRATEGIES],
            'betting_preferences': [_new_preference(p) for p in DEFAULT_BETTING_PREFERENCES],
        }
        self._save()
        logger.info('[Session] Created %s', self.session_id)
        return self.session_id

    def end_session(self):
        """End current session and save final state."""
        if not self.current_session:
            return None

        self.current_session['status'] = 'completed'
        self.current_session['ended_at'] = _now()
        self._save()

        session_id = self.session_id
        self.current_session = None
        self.session_id = None
        self.results = []
        logger.info('[Session] Ended %s', session_id)
        return session_id

    def _save(self):
        """Save current session to JSON file."""
        if not self.current_session:
            return

        self.current_session['results'] = [r.to_dict() for r in self.results]
        filepath = os.path.join(self.sessions_dir, f'session_{self.session_id}.json')
        with open(filepath, 'w') as f:
            json.dump(self.current_session, f, indent=2, default=str)

    def load_session(self, session_id):
        """Load a saved session and make it current. None if there is no such file.

        The active session, if any, is ended and saved before switching.
        """
        filepath = os.path.join(self.sessions_dir, f'session_{session_id}.json')
        if not os.path.exists(filepath):
            return None

        if self.current_session:
            self.end_session()

        with open(filepath, 'r') as f:
            session = json.load(f)

        session['status'] = 'active'
        session.pop('ended_at', None)
        self.current_session = session
        self.session_id = session_id
        self.results = [RouletteResult.from_dict(r) for r in session.get('results', [])]
        logger.info('[Session] Loaded %s with %d results', session_id, len(self.results))
        return self.current_session

    def get_all_sessions(self):
        """List all saved sessions, newest first."""
        sessions = []
        if not os.path.exists(self.sessions_dir):
            return sessions

        for filename in sorted(os.listdir(self.sessions_dir), reverse=True):
            if filename.startswith('session_') and filename.endswith('.json'):
                filepath = os.path.join(self.sessions_dir, filename)
                try:
                    with open(filepath, 'r') as f:
                        session = json.load(f)
                    sessions.append({
                        'id': session['id'],
                        'name': session.get('name'),
                        'created_at': session.get('created_at'),
                        'status': session.get('status'),
                        'total_spins': len(session.get('results', [])),
                        'alerts': len(session.get('alerts', [])),
                    })
                except (json.JSONDecodeError, KeyError) as e:
                    logger.warning('[Session] Skipping unreadable file %s: %s', filename, e)
                    continue

        return sessions

    def clear_all_sessions(self):
        """Delete all saved session JSON files."""
        if not os.path.exists(self.sessions_dir):
            return 0
        count = 0
        for filename in os.listdir(self.sessions_dir):
            if filename.startswith('session_') and filename.endswith('.json'):
                os.remove(os.path.join(self.sessions_dir, filename))
                count += 1
        self.current_session = None
        self.session_id = None
        self.results = []
        logger.info('[Session] Cleared %d session files', count)
        return count

    # ─── Results ─────────────────────────────────────────────────────

    def _require_session(self):
        if not self.current_session:
            self.create_session()

    def add_result(self, number, source='manual'):
        """Record a result and check it against the active strategies."""
        number = validate_number(number)
        self._require_session()

        result = RouletteResult(number=number, source=source)
        self.results.append(result)
        self._check_strategies(result)
        self.current_session['updated_at'] = _now()

        if len(self.results) % AUTOSAVE_INTERVAL == 0:
            self._save()
        return result

    def import_numbers(self, numbers):
        """Append a batch of imported numbers. Nothing is recorded if any is invalid."""
        validated = [validate_number(n) for n in numbers]
        self._require_session()
        imported = [RouletteResult(number=n, source='import') for n in validated]
        self.results.extend(imported)
        self.current_session['updated_at'] = _now()
        self._save()
        return imported

    def undo_last_result(self):
        """Remove the last recorded result. Strategy counters are not rewound."""
        if not self.results:
            return None

        removed = self.results.pop()
        self.current_session['updated_at'] = _now()
        self._save()
        return removed

    def get_results(self, limit=RESULTS_HISTORY_LIMIT):
        """Most recent results first."""
        return list(reversed(self.results))[:max(0, limit)]

    def get_numbers(self):
        """Spin numbers of the current session, oldest first."""
        return [r.number for r in self.results]

    # ─── Strategies ──────────────────────────────────────────────────

    def get_strategies(self):
        if not self.current_session:
            return []
        return self.current_session['strategies']

    def _find(self, collection, item_id):
        for item in self.current_session.get(collection, []) if self.current_session else []:
            if item['id'] == item_id:
                return item
        return None

    def update_strategy(self, strategy_id, updates):
        strategy = self._find('strategies', strategy_id)
        if strategy is None:
            return None

        if not isinstance(updates, dict):
            raise TypeError('updates must be an object')
        updates = {k: v for k, v in updates.items() if k in STRATEGY_FIELDS}
        if 'numbers' in updates:
            updates['numbers'] = [validate_number(n) for n in updates['numbers']]
        if 'max_attempts' in updates:
            updates['max_attempts'] = max(1, _to_int(updates['max_attempts'], 'max_attempts'))
        if updates.get('is_active') is False:
            strategy['current_attempts'] = 0

        strategy.update(updates)
        self._save()
        return strategy

    def _check_strategies(self, result):
        for strategy in self.get_strategies():
            if not strategy['is_active']:
                continue

            strategy['checks'] += 1
            strategy['last_used'] = result.timestamp

            if result.number in strategy['numbers']:
                strategy['hits'] += 1
                attempts = strategy['current_attempts'] + 1
                strategy['current_attempts'] = 0
                self.add_alert(
                    'strategy_hit',
                    f"{strategy['name']} hit",
                    f"{result.number} ({get_number_color(result.number)}) hit on attempt {attempts}",
                    'success',
                    {'strategy_id': strategy['id'], 'number': result.number, 'attempt': attempts},
                )
            else:
                strategy['current_attempts'] += 1
                if strategy['current_attempts'] >= strategy['max_attempts']:
                    strategy['current_attempts'] = 0
                    self.add_alert(
                        'strategy_miss',
                        f"{strategy['name']} missed",
                        f"No hit in {strategy['max_attempts']} attempts",
                        'warning',
                        {'strategy_id': strategy['id']},
                    )

            strategy['success_rate'] = round(strategy['hits'] / strategy['checks'] * 100, 1)

    # ─── Alerts ──────────────────────────────────────────────────────

    def add_alert(self, alert_type, title, message, severity='info', data=None):
        if severity not in ALERT_SEVERITIES:
            raise ValueError(f'Unknown alert severity {severity!r}')
        self._require_session()

        alert = {
            'id': uuid.uuid4().hex,
            'type': alert_type,
            'title': title,
            'message': message,
            'severity': severity,
            'data': data or {},
            'read': False,
            'timestamp': _now(),
        }
        self.current_session['alerts'].append(alert)
        return alert

    def get_alerts(self, limit=None, unread_only=False):
        """Newest first."""
        if not self.current_session:
            return []
        alerts = list(reversed(self.current_session['alerts']))
        if unread_only:
            alerts = [a for a in alerts if not a['read']]
        if limit is not None:
            alerts = alerts[:max(0, limit)]
        return alerts

    def mark_alert_read(self, alert_id):
        alert = self._find('alerts', alert_id)
        if alert is None:
            return False
        alert['read'] = True
        return True

    # ─── Betting preferences ─────────────────────────────────────────

    def get_betting_preferences(self):
        if not self.current_session:
            return []
        return sorted(self.current_session['betting_preferences'],
                      key=lambda p: p['priority'], reverse=True)

    def get_enabled_bet_types(self):
        if not self.current_session:
            return None
        return {p['type'] for p in self.current_session['betting_preferences'] if p['enabled']}

    def update_preference(self, preference_id, updates):
        preference = self._find('betting_preferences', preference_id)
        if preference is None:
            return None

        if not isinstance(updates, dict):
            raise TypeError('updates must be an object')
        updates = {k: v for k, v in updates.items() if k in PREFERENCE_FIELDS}
        if 'priority' in updates:
            updates['priority'] = min(5, max(1, _to_int(updates['priority'], 'priority')))
        if 'enabled' in updates:
            updates['enabled'] = bool(updates['enabled'])

        preference.update(updates)
        preference['updated_at'] = _now()
        self._save()
        return preference

    # ─── Statistics ──────────────────────────────────────────────────

    def get_session_stats(self):
        colors = {'red': 0, 'black': 0, 'green': 0}
        last_zero = None
        for result in self.results:
            colors[get_number_color(result.number)] += 1
            if result.number == 0:
                last_zero = result.timestamp

        strategies = self.get_strategies()
        checks = sum(s['checks'] for s in strategies)
        hits = sum(s['hits'] for s in strategies)

        summary = None
        if self.current_session:
            summary = {k: self.current_session[k] for k in ('id', 'name', 'created_at', 'status')}

        return {
            'session': summary,
            'total_spins': len(self.results),
            'last_zero': last_zero,
            'color_distribution': colors,
            'alerts': len(self.get_alerts()),
            'unread_alerts': len(self.get_alerts(unread_only=True)),
            'strategy_success_rate': round(hits / checks * 100, 1) if checks else 0,
        }
