"""
Configuration module for the karaoke server.
Loads settings from the environment into app.config and sets up logging and caching.
"""

import logging
import os
from flask_caching import Cache
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _default_storage_backend():
    explicit = os.getenv("KARAOKE_STORAGE")
    if explicit:
        return explicit.lower()
    return "database" if os.getenv("DATABASE_URL") else "files"


def load_config(overrides=None):
    """Collect configuration from the environment, then apply overrides"""
    data_dir = os.getenv("KARAOKE_DATA_DIR", "data")
    config = {
        "SECRET_KEY": os.getenv("SECRET_KEY", "karaoke-dev-secret-change-me"),
        "STORAGE_BACKEND": _default_storage_backend(),
        "DATA_DIR": data_dir,
        "DATABASE_URL": os.getenv("DATABASE_URL"),
        "PORT": int(os.getenv("PORT", 3000)),
        "SOCKETIO_ASYNC_MODE": os.getenv("FLASK_SOCKETIO_ASYNC_MODE", "threading"),
        "LOG_LEVEL": os.getenv("LOG_LEVEL", "INFO").upper(),
        "CACHE_TYPE": "SimpleCache",
        "CACHE_DEFAULT_TIMEOUT": 300,
        "IP_CACHE_TIMEOUT": 300,
    }
    config.update(overrides or {})

    if not config["DATABASE_URL"]:
        config["DATABASE_URL"] = "sqlite:///" + os.path.join(
            os.path.abspath(config["DATA_DIR"]), "karaoke.db"
        )
    return config


def configure_logging(level):
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger().setLevel(level)


def init_app(app, overrides=None):
    """Initialize Flask app with configuration and return cache instance"""
    app.config.update(load_config(overrides))
    configure_logging(app.config["LOG_LEVEL"])

    if app.config["STORAGE_BACKEND"] == "database" and app.config["DATABASE_URL"].startswith("sqlite:///"):
        os.makedirs(app.config["DATA_DIR"], exist_ok=True)

    cache = Cache(app)
    return cache
