#!/usr/bin/env python3
"""
Roulette Insight - Entry Point
Start the Flask + SocketIO server.
"""

import logging

from config import HOST, PORT, DEBUG, DATA_DIR, LOG_LEVEL

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)
logger = logging.getLogger('roulette_insight')

from roulette_insight import create_app, socketio  # noqa: E402

app = create_app()

if __name__ == '__main__':
    logger.info('Roulette Insight on http://localhost:%d (data dir %s, debug %s)', PORT, DATA_DIR, DEBUG)
    socketio.run(app, host=HOST, port=PORT, debug=DEBUG, use_reloader=False)
