"""
Karaoke queue server.

Serves the display, join, request and dashboard pages from public/, the
catalog/request JSON API, and the Socket.IO channel that keeps every
screen in sync with the shared queue.
"""

import logging
import sys
from flask import Flask, jsonify

from karaoke.routes.requests import requests_bp
from karaoke.routes.songs import songs_bp
from karaoke.routes.system import system_bp
from karaoke.services.catalog import CatalogService, RequestLogService
from karaoke.services.queue_engine import QueueEngine
from karaoke.storage import create_storage
from karaoke.utils import config
from karaoke.utils.errors import KaraokeError, PersistenceError
from karaoke.utils.network import get_local_ip
from karaoke.websockets.handlers import init_socketio

logger = logging.getLogger(__name__)


def handle_karaoke_error(error):
    return jsonify(error.to_dict()), error.status_code


def create_app(config_overrides=None):
    """Build the Flask app, its store and the Socket.IO server.

    Raises PersistenceError when the configured store cannot be prepared.
    """
    app = Flask(__name__, static_folder="public", static_url_path="")
    app.cache = config.init_app(app, config_overrides)

    storage = create_storage(app.config)
    storage.init()

    app.storage = storage
    app.catalog = CatalogService(storage)
    app.request_log = RequestLogService(storage)
    app.queue_engine = QueueEngine(storage, app.catalog)

    app.register_blueprint(songs_bp, url_prefix="/api/songs")
    app.register_blueprint(requests_bp, url_prefix="/api/requests")
    app.register_blueprint(system_bp)
    app.register_error_handler(KaraokeError, handle_karaoke_error)

    app.socketio = init_socketio(app, app.queue_engine)
    return app


def print_banner(port):
    ip = get_local_ip()
    print("")
    print("  🎤 Karaoke Server is running!")
    print("")
    print(f"  Display (open on TV):  http://localhost:{port}")
    print(f"  Join (for phones):     http://{ip}:{port}/join.html")
    print(f"  Request songs:         http://{ip}:{port}/request.html")
    print(f"  Admin dashboard:       http://localhost:{port}/dashboard.html")
    print("")


def main():
    try:
        app = create_app()
    except PersistenceError as e:
        logger.error(f"Failed to initialize storage: {e.message}")
        sys.exit(1)

    port = app.config["PORT"]
    print_banner(port)
    app.socketio.run(app, host="0.0.0.0", port=port, debug=False, allow_unsafe_werkzeug=True)


# Run the Flask app
if __name__ == "__main__":
    main()
