"""
Persistence contract shared by the relational and flat-file stores.

Songs, requests and queue entries cross this boundary as plain dicts
shaped exactly like the JSON the API returns.
"""

EMPTY_SESSION = {"queue": [], "currentSong": None}

SONG_FIELDS = ("title", "artist", "youtube", "category", "favorite", "key")


class Storage:
    """Base class for backing stores"""

    name = "base"
    supports_qr = False

    def init(self):
        """Prepare the store (create tables/files). Raises PersistenceError."""
        raise NotImplementedError

    # Catalog
    def load_catalog(self):
        raise NotImplementedError

    def get_song(self, song_id):
        raise NotImplementedError

    def create_song(self, song):
        raise NotImplementedError

    def update_song(self, song_id, fields):
        """Apply `fields` to the song. Returns the updated song or None."""
        raise NotImplementedError

    def delete_song(self, song_id):
        """Returns True when a song was deleted."""
        raise NotImplementedError

    # Request log
    def load_requests(self):
        raise NotImplementedError

    def append_request(self, song):
        raise NotImplementedError

    # Session state
    def load_session(self):
        raise NotImplementedError

    def save_session(self, queue, current_song):
        raise NotImplementedError

    def load_qr_visible(self):
        return False

    def save_qr_visible(self, visible):
        pass
