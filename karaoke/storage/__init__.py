"""
Swappable backing stores for the karaoke server
"""

import logging
import os

from karaoke.storage.base import Storage, EMPTY_SESSION, SONG_FIELDS
from karaoke.storage.database import DatabaseStorage
from karaoke.storage.files import FileStorage
from karaoke.utils.errors import PersistenceError

logger = logging.getLogger(__name__)


def create_storage(config):
    """Build the store named by STORAGE_BACKEND"""
    backend = config["STORAGE_BACKEND"]
    data_dir = config["DATA_DIR"]

    if backend == "database":
        storage = DatabaseStorage(
            config["DATABASE_URL"],
            seed_file=os.path.join(data_dir, "songs.json"),
        )
    elif backend == "files":
        storage = FileStorage(data_dir)
    else:
        raise PersistenceError(f"Unknown storage backend: {backend}")

    logger.info(f"Using {backend} storage")
    return storage


__all__ = [
    'Storage', 'DatabaseStorage', 'FileStorage', 'create_storage',
    'EMPTY_SESSION', 'SONG_FIELDS'
]
