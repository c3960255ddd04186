"""
Server info routes: health, local address for the join screen, live state snapshot.
"""

from flask import Blueprint, jsonify, current_app

from karaoke.utils.network import get_local_ip


system_bp = Blueprint('system', __name__)


@system_bp.route("/health")
def health():
    return jsonify({"status": "ok", "storage": current_app.storage.name})


@system_bp.route("/api/ip")
def local_ip():
    """Address phones should use to reach this server"""
    cache = current_app.cache
    ip = cache.get("local_ip")
    if ip is None:
        ip = get_local_ip()
        cache.set("local_ip", ip, timeout=current_app.config["IP_CACHE_TIMEOUT"])
    return jsonify({"ip": ip, "port": current_app.config["PORT"]})


@system_bp.route("/api/state")
def session_state():
    """Current queue and song on screen (read-only; changes go through Socket.IO)"""
    return jsonify(current_app.queue_engine.snapshot())


@system_bp.route("/")
def index():
    return current_app.send_static_file("index.html")
