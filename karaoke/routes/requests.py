"""
Free-text song request log routes.
"""

from flask import Blueprint, request, jsonify, current_app


requests_bp = Blueprint('requests', __name__)


@requests_bp.route("", methods=["GET"])
def list_requests():
    return jsonify(current_app.request_log.list_requests())


@requests_bp.route("", methods=["POST"])
def create_request():
    """Log a song request from the request page"""
    data = request.get_json(silent=True)
    song_request = current_app.request_log.append_request(data if isinstance(data, dict) else {})
    return jsonify(song_request)
