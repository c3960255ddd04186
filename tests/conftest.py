import json
import pytest

from app import create_app


def make_app(tmp_path, backend):
    overrides = {
        "STORAGE_BACKEND": backend,
        "DATA_DIR": str(tmp_path / "data"),
        "SOCKETIO_ASYNC_MODE": "threading",
    }
    if backend == "database":
        overrides["DATABASE_URL"] = f"sqlite:///{tmp_path / 'karaoke.db'}"

    app = create_app(overrides)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def file_app(tmp_path):
    """App backed by JSON files in a temp directory"""
    return make_app(tmp_path, "files")


@pytest.fixture
def db_app(tmp_path):
    """App backed by a SQLite file in a temp directory"""
    return make_app(tmp_path, "database")


@pytest.fixture(params=["files", "database"])
def app(request, tmp_path):
    """Run a test against both backing stores"""
    return make_app(tmp_path, request.param)


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture
def add_song(client):
    """Create a catalog song through the API and return it"""
    def _add_song(title="Bohemian Rhapsody", artist="Queen", **extra):
        response = client.post('/api/songs', json=dict(title=title, artist=artist, **extra))
        assert response.status_code == 200
        return json.loads(response.data)
    return _add_song
