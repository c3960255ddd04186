"""
Relational backing store (SQLite or PostgreSQL through SQLAlchemy).
"""

import json
import logging
import os
from sqlalchemy.exc import SQLAlchemyError

from karaoke.models import init_db, get_db, Song, SongRequest, AppState
from karaoke.storage.base import Storage
from karaoke.utils.errors import PersistenceError
from karaoke.utils.fields import coerce_key

logger = logging.getLogger(__name__)

DEFAULT_STATE = {
    "queue": [],
    "currentSong": None,
    "qrVisible": False,
}


class DatabaseStorage(Storage):
    name = "database"
    supports_qr = True

    def __init__(self, database_url, seed_file=None):
        self.database_url = database_url
        self.seed_file = seed_file

    def init(self):
        try:
            init_db(self.database_url)
            self._seed_catalog()
            self._init_state_keys()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to initialize database: {e}") from e
        logger.info("Database storage ready")

    def _seed_catalog(self):
        """Fill an empty songs table from the seed file, if there is one"""
        with get_db() as db:
            if db.query(Song).count() > 0:
                return

            if not self.seed_file or not os.path.exists(self.seed_file):
                logger.info("No songs.json to seed from")
                return

            try:
                with open(self.seed_file, encoding="utf-8") as f:
                    seeds = json.load(f)
                seeded = 0
                for s in seeds:
                    if not s.get("title") or not s.get("artist"):
                        logger.warning(f"Skipping seed entry without title and artist: {s!r}")
                        continue
                    db.add(Song(
                        title=s["title"],
                        artist=s["artist"],
                        youtube=s.get("youtube") or "",
                        category=s.get("category") or "",
                        favorite=bool(s.get("favorite")),
                        key_seconds=coerce_key(s.get("key")),
                    ))
                    seeded += 1
                db.flush()
            except (OSError, ValueError, KeyError, TypeError, AttributeError, SQLAlchemyError) as e:
                db.rollback()
                logger.warning(f"Could not seed songs from {self.seed_file}: {e}")
                return

            logger.info(f"Seeded {seeded} songs from {self.seed_file}")

    def _init_state_keys(self):
        with get_db() as db:
            for key, value in DEFAULT_STATE.items():
                if db.get(AppState, key) is None:
                    db.add(AppState(key=key, value=value))

    def _get_state(self, key):
        with get_db() as db:
            row = db.get(AppState, key)
            return row.value if row is not None else None

    def _set_states(self, **values):
        with get_db() as db:
            for key, value in values.items():
                row = db.get(AppState, key)
                if row is None:
                    db.add(AppState(key=key, value=value))
                else:
                    row.value = value

    # Catalog
    def load_catalog(self):
        with get_db() as db:
            return [song.to_dict() for song in db.query(Song).order_by(Song.id).all()]

    def get_song(self, song_id):
        with get_db() as db:
            song = db.get(Song, song_id)
            return song.to_dict() if song else None

    def create_song(self, song):
        with get_db() as db:
            row = Song(
                title=song["title"],
                artist=song["artist"],
                youtube=song["youtube"],
                category=song["category"],
                favorite=song["favorite"],
                key_seconds=song["key"],
            )
            db.add(row)
            db.flush()
            return row.to_dict()

    def update_song(self, song_id, fields):
        with get_db() as db:
            song = db.get(Song, song_id)
            if song is None:
                return None
            for name, value in fields.items():
                setattr(song, "key_seconds" if name == "key" else name, value)
            db.flush()
            return song.to_dict()

    def delete_song(self, song_id):
        with get_db() as db:
            deleted = db.query(Song).filter(Song.id == song_id).delete()
            return deleted > 0

    # Request log
    def load_requests(self):
        with get_db() as db:
            return [r.to_dict() for r in db.query(SongRequest).order_by(SongRequest.id).all()]

    def append_request(self, song):
        with get_db() as db:
            request = SongRequest(song=song)
            db.add(request)
            db.flush()
            return request.to_dict()

    # Session state
    def load_session(self):
        return {
            "queue": self._get_state("queue") or [],
            "currentSong": self._get_state("currentSong") or None,
        }

    def save_session(self, queue, current_song):
        self._set_states(queue=queue, currentSong=current_song)

    def load_qr_visible(self):
        return bool(self._get_state("qrVisible"))

    def save_qr_visible(self, visible):
        self._set_states(qrVisible=bool(visible))
