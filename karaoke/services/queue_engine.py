"""
Live session state for the karaoke night: the pending queue and the
song currently on screen.

One QueueEngine owns the state for the whole process. Every mutation
runs under a lock, is persisted, and then the full snapshot is handed to
each subscriber (the Socket.IO layer subscribes a broadcaster).
"""

import copy
import logging
import threading
import time

logger = logging.getLogger(__name__)


class QueueEngine:
    def __init__(self, storage, catalog):
        self.storage = storage
        self.catalog = catalog
        self._lock = threading.Lock()
        self._subscribers = []
        self._qr_subscribers = []
        self._last_entry_id = 0

        session = storage.load_session()
        self.queue = list(session["queue"])
        self.current_song = session["currentSong"]
        self.qr_visible = storage.load_qr_visible() if storage.supports_qr else False

        for entry in self.queue + ([self.current_song] if self.current_song else []):
            if isinstance(entry.get("id"), int):
                self._last_entry_id = max(self._last_entry_id, entry["id"])

    def subscribe(self, callback):
        """Call `callback(state)` after every session mutation"""
        self._subscribers.append(callback)

    def subscribe_qr(self, callback):
        """Call `callback(visible)` whenever the QR flag changes"""
        self._qr_subscribers.append(callback)

    def snapshot(self):
        with self._lock:
            return self._snapshot()

    def _snapshot(self):
        return {
            "queue": copy.deepcopy(self.queue),
            "currentSong": copy.deepcopy(self.current_song),
        }

    def _next_entry_id(self):
        entry_id = int(time.time() * 1000)
        if entry_id <= self._last_entry_id:
            entry_id = self._last_entry_id + 1
        self._last_entry_id = entry_id
        return entry_id

    def _commit(self):
        """Persist and publish the current state. Caller holds the lock."""
        state = self._snapshot()
        try:
            self.storage.save_session(state["queue"], state["currentSong"])
        except Exception:
            logger.exception("Failed to persist session state")

        for callback in self._subscribers:
            callback(copy.deepcopy(state))
        return state

    def enqueue(self, song_id, requested_by):
        """Queue a snapshot of a catalog song. Unknown ids are ignored (returns None)."""
        song = self.catalog.get_song(song_id)
        if song is None:
            logger.info(f"Ignoring request for unknown song id {song_id!r}")
            return None

        with self._lock:
            entry = {
                "song": copy.deepcopy(song),
                "requestedBy": requested_by,
                "id": self._next_entry_id(),
            }
            self.queue.append(entry)

            if not self.current_song:
                self.current_song = self.queue.pop(0)

            logger.info(f"{requested_by} queued '{song['title']}' (queue length {len(self.queue)})")
            return self._commit()

    def advance(self):
        with self._lock:
            self.current_song = self.queue.pop(0) if self.queue else None
            if self.current_song:
                logger.info(f"Now singing: '{self.current_song['song']['title']}'")
            else:
                logger.info("Queue finished, no current song")
            return self._commit()

    def remove_entry(self, entry_id):
        """Drop a pending entry by id.

        Only the pending queue is searched. The current song stays put even
        if its id matches; use advance() to skip it.
        """
        with self._lock:
            before = len(self.queue)
            self.queue = [e for e in self.queue if e.get("id") != entry_id]
            if len(self.queue) < before:
                logger.info(f"Removed entry {entry_id} from queue")
            return self._commit()

    def clear(self):
        with self._lock:
            self.queue = []
            self.current_song = None
            logger.info("Queue cleared")
            return self._commit()

    def set_qr_visible(self, visible):
        """Toggle the join QR code. Returns None when the store cannot keep it."""
        if not self.storage.supports_qr:
            return None

        with self._lock:
            self.qr_visible = bool(visible)
            try:
                self.storage.save_qr_visible(self.qr_visible)
            except Exception:
                logger.exception("Failed to persist QR visibility")

            for callback in self._qr_subscribers:
                callback(self.qr_visible)
            return self.qr_visible
