"""
Database models for the karaoke server
"""

from .database_config import Base, SessionLocal, init_db, get_db, normalize_database_url
from .song_models import Song, SongRequest
from .state_models import AppState

__all__ = [
    'Base', 'SessionLocal', 'init_db', 'get_db', 'normalize_database_url',
    'Song', 'SongRequest', 'AppState'
]
