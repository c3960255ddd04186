"""
Song catalog and request log models.
"""

from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text
from .database_config import Base


class Song(Base):
    __tablename__ = "songs"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(Text, nullable=False)
    artist = Column(Text, nullable=False)
    youtube = Column(Text, default="")
    category = Column(Text, default="")
    favorite = Column(Boolean, default=False)
    key_seconds = Column(Integer, default=0)

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "artist": self.artist,
            "youtube": self.youtube or "",
            "category": self.category or "",
            "favorite": bool(self.favorite),
            "key": self.key_seconds or 0,
        }

    def __repr__(self):
        return f"<Song {self.title} by {self.artist}>"


class SongRequest(Base):
    __tablename__ = "requests"

    id = Column(Integer, primary_key=True, index=True)
    song = Column(String, nullable=False)
    timestamp = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    def to_dict(self):
        timestamp = self.timestamp
        if timestamp is not None and timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        return {
            "id": self.id,
            "song": self.song,
            "timestamp": timestamp.isoformat() if timestamp else None,
        }

    def __repr__(self):
        return f"<SongRequest {self.song}>"
