"""
Flat-file backing store: songs.json, requests.json and state.json in one directory.
"""

import json
import logging
import os
import threading
from datetime import datetime, timezone

from karaoke.storage.base import Storage, EMPTY_SESSION
from karaoke.utils.errors import PersistenceError

logger = logging.getLogger(__name__)


class FileStorage(Storage):
    name = "files"
    supports_qr = False

    def __init__(self, data_dir):
        self.data_dir = data_dir
        self.songs_file = os.path.join(data_dir, "songs.json")
        self.requests_file = os.path.join(data_dir, "requests.json")
        self.state_file = os.path.join(data_dir, "state.json")
        self._lock = threading.Lock()

    def init(self):
        try:
            os.makedirs(self.data_dir, exist_ok=True)
            for path, default in (
                (self.songs_file, []),
                (self.requests_file, []),
                (self.state_file, EMPTY_SESSION),
            ):
                if not os.path.exists(path):
                    self._write(path, default)
                else:
                    self._read(path)
        except (OSError, ValueError) as e:
            raise PersistenceError(f"Failed to initialize data directory {self.data_dir}: {e}") from e
        logger.info(f"File storage ready in {self.data_dir}")

    def _read(self, path):
        with open(path, encoding="utf-8") as f:
            return json.load(f)

    def _write(self, path, data):
        # Write to a temp file and swap it in
        tmp_path = path + ".tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        os.replace(tmp_path, path)

    @staticmethod
    def _next_id(items):
        return max((item["id"] for item in items), default=0) + 1

    # Catalog
    def load_catalog(self):
        with self._lock:
            return sorted(self._read(self.songs_file), key=lambda s: s["id"])

    def get_song(self, song_id):
        with self._lock:
            for song in self._read(self.songs_file):
                if song["id"] == song_id:
                    return song
        return None

    def create_song(self, song):
        with self._lock:
            songs = self._read(self.songs_file)
            song = dict(song, id=self._next_id(songs))
            songs.append(song)
            self._write(self.songs_file, songs)
            return song

    def update_song(self, song_id, fields):
        with self._lock:
            songs = self._read(self.songs_file)
            for song in songs:
                if song["id"] == song_id:
                    song.update(fields)
                    self._write(self.songs_file, songs)
                    return song
        return None

    def delete_song(self, song_id):
        with self._lock:
            songs = self._read(self.songs_file)
            remaining = [s for s in songs if s["id"] != song_id]
            if len(remaining) == len(songs):
                return False
            self._write(self.songs_file, remaining)
            return True

    # Request log
    def load_requests(self):
        with self._lock:
            return self._read(self.requests_file)

    def append_request(self, song):
        with self._lock:
            requests = self._read(self.requests_file)
            request = {
                "id": self._next_id(requests),
                "song": song,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }
            requests.append(request)
            self._write(self.requests_file, requests)
            return request

    # Session state
    def load_session(self):
        with self._lock:
            state = self._read(self.state_file)
        return {
            "queue": state.get("queue") or [],
            "currentSong": state.get("currentSong") or None,
        }

    def save_session(self, queue, current_song):
        with self._lock:
            self._write(self.state_file, {"queue": queue, "currentSong": current_song})
