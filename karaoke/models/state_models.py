"""
Shared session state model: a key -> JSON blob store.
"""

from sqlalchemy import Column, String, JSON
from .database_config import Base


class AppState(Base):
    __tablename__ = "app_state"

    key = Column(String, primary_key=True)
    value = Column(JSON, nullable=True)

    def __repr__(self):
        return f"<AppState {self.key}>"
