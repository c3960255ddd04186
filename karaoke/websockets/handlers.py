"""
Socket.IO event handlers for the karaoke server.
Pushes the shared queue state to every screen and applies queue edits from clients.
"""

import logging
from flask import request
from flask_socketio import SocketIO, emit

logger = logging.getLogger(__name__)


def init_socketio(app, queue_engine):
    """Initialize Socket.IO with the Flask app and wire it to the queue engine"""
    socketio = SocketIO(
        app,
        cors_allowed_origins="*",
        ping_timeout=120,
        ping_interval=30,
        manage_session=False,
        engineio_logger=False,
        logger=False,
        async_mode=app.config["SOCKETIO_ASYNC_MODE"]
    )

    # Every mutation fans out to all clients of this server only
    def broadcast_state(state):
        socketio.emit("state", state)

    def broadcast_qr_visible(visible):
        socketio.emit("qrVisible", visible)

    queue_engine.subscribe(broadcast_state)
    queue_engine.subscribe_qr(broadcast_qr_visible)

    register_handlers(socketio, queue_engine)

    return socketio


def _parse_id(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def register_handlers(socketio, queue_engine):
    """Register all Socket.IO event handlers"""

    @socketio.on("connect")
    def handle_connect(auth=None):
        """Send the current state to the new client only"""
        logger.info(f"Client connected (sid: {request.sid})")
        emit("state", queue_engine.snapshot())
        if queue_engine.storage.supports_qr:
            emit("qrVisible", queue_engine.qr_visible)


    @socketio.on("disconnect")
    def handle_disconnect(reason=None):
        logger.info(f"Client disconnected (sid: {request.sid}, reason: {reason})")


    @socketio.on_error_default
    def default_error_handler(e):
        """Default error handler for all events"""
        logger.error(f"Socket error in event '{request.event.get('message')}': {e}")
        return False


    @socketio.on("setQrVisible")
    def handle_set_qr_visible(visible=False):
        queue_engine.set_qr_visible(visible)


    @socketio.on("addToQueue")
    def handle_add_to_queue(data=None):
        """Queue a catalog song for a singer; bad payloads are dropped silently"""
        if not isinstance(data, dict):
            return

        song_id = _parse_id(data.get("songId"))
        if song_id is None:
            return

        queue_engine.enqueue(song_id, data.get("name"))


    @socketio.on("nextSong")
    def handle_next_song(*args):
        queue_engine.advance()


    @socketio.on("removeSong")
    def handle_remove_song(entry_id=None):
        # Only pending entries are removed; the current song is left alone
        queue_engine.remove_entry(entry_id)


    @socketio.on("clearQueue")
    def handle_clear_queue(*args):
        queue_engine.clear()
