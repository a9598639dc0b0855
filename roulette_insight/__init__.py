"""
Flask Application Factory with SocketIO initialization.
"""

from flask import Flask
from flask_socketio import SocketIO

from config import SECRET_KEY, ASYNC_MODE

socketio = SocketIO()


def create_app(async_mode=ASYNC_MODE, testing=False):
    app = Flask(__name__)

    app.config['SECRET_KEY'] = SECRET_KEY
    app.config['TESTING'] = testing

    from roulette_insight.routes import main_bp
    app.register_blueprint(main_bp)

    socketio.init_app(app, cors_allowed_origins="*", async_mode=async_mode)

    from roulette_insight import socketio_handlers  # noqa: F401

    @app.after_request
    def add_no_cache_headers(response):
        """Dashboard data is live; never let the browser cache API responses."""
        if response.content_type and 'application/json' in response.content_type:
            response.headers['Cache-Control'] = 'no-cache, no-store, must-revalidate'
            response.headers['Pragma'] = 'no-cache'
            response.headers['Expires'] = '0'
        return response

    return app
