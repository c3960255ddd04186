"""
Database configuration and session management for the karaoke server.
"""

from contextlib import contextmanager
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base


Base = declarative_base()
SessionLocal = sessionmaker(autoflush=False)
engine = None


def normalize_database_url(database_url):
    """Rewrite Heroku/Railway style postgres:// URLs for SQLAlchemy"""
    if database_url and database_url.startswith("postgres://"):
        return database_url.replace("postgres://", "postgresql://", 1)
    return database_url


def init_db(database_url):
    """Create the engine, bind the session factory and create missing tables"""
    global engine
    database_url = normalize_database_url(database_url)

    if engine is not None:
        engine.dispose()

    engine = create_engine(
        database_url,
        echo=False,
        pool_pre_ping=True,
        connect_args={"check_same_thread": False} if database_url.startswith("sqlite") else {}
    )
    SessionLocal.configure(bind=engine)
    Base.metadata.create_all(bind=engine)
    return engine


@contextmanager
def get_db():
    """Context manager for database sessions with automatic commit/rollback"""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
