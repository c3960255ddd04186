"""
Song catalog routes.
Handles listing, adding, editing and deleting songs in the catalog.
"""

from flask import Blueprint, request, jsonify, current_app


songs_bp = Blueprint('songs', __name__)


def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@songs_bp.route("", methods=["GET"])
def list_songs():
    """List every song in the catalog, ordered by id"""
    return jsonify(current_app.catalog.list_songs())


@songs_bp.route("", methods=["POST"])
def create_song():
    """Add a song to the catalog - title and artist required"""
    song = current_app.catalog.create_song(_json_body())
    return jsonify(song)


@songs_bp.route("/<int:song_id>", methods=["PATCH"])
def update_song(song_id):
    """Update only the fields present in the body"""
    song = current_app.catalog.update_song(song_id, _json_body())
    return jsonify(song)


@songs_bp.route("/<int:song_id>", methods=["DELETE"])
def delete_song(song_id):
    current_app.catalog.delete_song(song_id)
    return jsonify({"ok": True})
