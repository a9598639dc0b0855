"""
HTTP Routes - health check and read/write JSON endpoints for the dashboard.
"""

import logging

from flask import Blueprint, jsonify, request

from config import RESULTS_HISTORY_LIMIT
from roulette_insight import state

logger = logging.getLogger(__name__)

main_bp = Blueprint('main', __name__)


@main_bp.route('/health')
def health():
    return jsonify({'status': 'ok', 'service': 'Roulette Insight'})


@main_bp.route('/api/results', methods=['GET'])
def list_results():
    limit = request.args.get('limit', RESULTS_HISTORY_LIMIT, type=int)
    return jsonify([r.to_dict() for r in state.session_mgr.get_results(limit)])


@main_bp.route('/api/results', methods=['POST'])
def add_result():
    if not state.session_mgr.active:
        return jsonify({'error': 'No active session. Start a session first.'}), 409

    body = request.get_json(silent=True) or {}
    try:
        result, alerts = state.record_result(body.get('number'), body.get('source', 'api'))
    except ValueError as e:
        # InvalidNumberError or an unknown source
        logger.warning('[API] Rejected result: %s', e)
        return jsonify({'error': str(e)}), 400

    return jsonify({'result': result.to_dict(), 'alerts': alerts}), 201


@main_bp.route('/api/session/stats')
def session_stats():
    return jsonify(state.session_mgr.get_session_stats())


@main_bp.route('/api/analysis')
def analysis():
    return jsonify(state.get_analysis())


@main_bp.route('/api/suggestions/<kind>')
def suggestion(kind):
    try:
        return jsonify(state.engine.get_suggestion(kind))
    except ValueError as e:
        return jsonify({'error': str(e)}), 400


@main_bp.route('/api/alerts')
def alerts():
    unread_only = request.args.get('unread', '').lower() in ('1', 'true', 'yes')
    return jsonify(state.session_mgr.get_alerts(unread_only=unread_only))
