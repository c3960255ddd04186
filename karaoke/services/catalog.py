"""
Song catalog and request log services.

Both sit between the HTTP routes and whichever store is configured and
hold the little validation the API performs.
"""

import logging

from karaoke.storage import SONG_FIELDS
from karaoke.utils.errors import ValidationError, NotFoundError
from karaoke.utils.fields import coerce_key

logger = logging.getLogger(__name__)


def _clean_field(name, value):
    if name == "favorite":
        return bool(value)
    if name == "key":
        return coerce_key(value)
    if name in ("youtube", "category"):
        return value or ""
    return value


class CatalogService:
    def __init__(self, storage):
        self.storage = storage

    def list_songs(self):
        return self.storage.load_catalog()

    def get_song(self, song_id):
        return self.storage.get_song(song_id)

    def create_song(self, data):
        data = data or {}
        title = data.get("title")
        artist = data.get("artist")
        if not title or not artist:
            raise ValidationError("title and artist required")

        song = {
            "title": title,
            "artist": artist,
            "youtube": data.get("youtube") or "",
            "category": data.get("category") or "",
            "favorite": bool(data.get("favorite")),
            "key": coerce_key(data.get("key")),
        }
        created = self.storage.create_song(song)
        logger.info(f"Added song {created['id']}: {created['title']} - {created['artist']}")
        return created

    def update_song(self, song_id, data):
        data = data or {}
        # null counts as supplied: favorite -> False, key -> 0, youtube/category -> ""
        fields = {
            name: _clean_field(name, data[name])
            for name in SONG_FIELDS
            if name in data
        }
        if not fields:
            raise ValidationError("no fields to update")
        if any(name in fields and fields[name] is None for name in ("title", "artist")):
            raise ValidationError("title and artist cannot be null")

        updated = self.storage.update_song(song_id, fields)
        if updated is None:
            raise NotFoundError("song not found")
        logger.info(f"Updated song {song_id}: {', '.join(sorted(fields))}")
        return updated

    def delete_song(self, song_id):
        if not self.storage.delete_song(song_id):
            raise NotFoundError("song not found")
        logger.info(f"Deleted song {song_id}")


class RequestLogService:
    def __init__(self, storage):
        self.storage = storage

    def list_requests(self):
        return self.storage.load_requests()

    def append_request(self, data):
        song = (data or {}).get("song")
        if not song:
            raise ValidationError("song required")
        request = self.storage.append_request(song)
        logger.info(f"New song request: {song}")
        return request
