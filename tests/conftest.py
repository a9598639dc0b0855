"""
Shared fixtures. Session files go to a throwaway data dir, set before
config is first imported.
"""
import os
import sys
import tempfile

import pytest

PROJECT_ROOT = os.path.join(os.path.dirname(__file__), '..')
sys.path.insert(0, PROJECT_ROOT)

os.environ['ROULETTE_INSIGHT_DATA_DIR'] = tempfile.mkdtemp(prefix='roulette_insight_test_')

# Hardcoded subset of recorded spins, oldest first
SAMPLE_DATA = [18, 26, 28, 35, 16, 28, 22, 35, 1, 20, 3, 35, 20, 23, 7, 24, 22, 2, 33, 35,
               12, 30, 27, 11, 9, 10, 9, 20, 16, 31, 4, 3, 16, 20, 34, 13, 28, 3, 15, 33,
               12, 11, 26, 23, 15, 36, 1, 25, 28, 32, 14, 6, 12, 16, 3, 6, 1, 35, 18, 8,
               30, 21, 29, 4, 8, 28, 1, 30, 4, 10, 30, 23, 36, 29, 28, 13, 3, 34, 9, 31,
               1, 2, 18, 25, 32, 6, 16, 16, 19, 35, 16, 32, 30, 21, 25, 36, 21, 27, 7, 6]


@pytest.fixture
def sample_data():
    return list(SAMPLE_DATA)


@pytest.fixture(scope='session')
def app():
    # The SocketIO handlers register on import, so the app is built once.
    from roulette_insight import create_app
    return create_app(async_mode='threading', testing=True)


@pytest.fixture
def clean_state(app):
    from roulette_insight import state
    state.end_session()
    yield state
    state.end_session()


@pytest.fixture
def http_client(app, clean_state):
    return app.test_client()


@pytest.fixture
def socket_client(app, clean_state):
    from roulette_insight import socketio
    client = socketio.test_client(app)
    yield client
    if client.is_connected():
        client.disconnect()
