"""
Socket.IO tests for the karaoke server, using Flask-SocketIO's in-process test client
"""

import pytest

from app import create_app


def events(sio_client, name):
    """Payloads of every received event called `name` (drains the client's queue)"""
    return [e['args'][0] for e in sio_client.get_received() if e['name'] == name]


@pytest.fixture
def sio(app):
    clients = []

    def _connect():
        sio_client = app.socketio.test_client(app)
        clients.append(sio_client)
        return sio_client

    yield _connect

    for sio_client in clients:
        if sio_client.is_connected():
            sio_client.disconnect()


@pytest.fixture
def song(app):
    return app.catalog.create_song({'title': 'Dancing Queen', 'artist': 'ABBA'})


class TestConnect:

    def test_client_can_connect(self, sio):
        sio_client = sio()
        assert sio_client.is_connected()

    def test_connect_sends_current_state(self, app, sio, song):
        app.queue_engine.enqueue(song['id'], 'Ana')
        sio_client = sio()

        states = events(sio_client, 'state')
        assert len(states) == 1
        assert states[0]['currentSong']['requestedBy'] == 'Ana'
        assert states[0]['queue'] == []

    def test_connect_does_not_broadcast(self, sio):
        first = sio()
        first.get_received()
        sio()
        assert first.get_received() == []

    def test_connect_sends_qr_flag_for_database(self, db_app):
        sio_client = db_app.socketio.test_client(db_app)
        received = sio_client.get_received()
        assert [e['name'] for e in received] == ['state', 'qrVisible']
        assert received[1]['args'][0] is False
        sio_client.disconnect()

    def test_connect_skips_qr_flag_for_files(self, file_app):
        sio_client = file_app.socketio.test_client(file_app)
        assert [e['name'] for e in sio_client.get_received()] == ['state']
        sio_client.disconnect()


class TestQueueEvents:

    def test_add_to_queue_broadcasts_to_all_clients(self, sio, song):
        host, phone = sio(), sio()
        host.get_received()
        phone.get_received()

        phone.emit('addToQueue', {'songId': song['id'], 'name': 'Ana'})

        for sio_client in (host, phone):
            states = events(sio_client, 'state')
            assert len(states) == 1
            assert states[0]['currentSong']['song'] == song
            assert states[0]['currentSong']['requestedBy'] == 'Ana'

    def test_song_id_as_string_is_accepted(self, sio, song):
        sio_client = sio()
        sio_client.get_received()
        sio_client.emit('addToQueue', {'songId': str(song['id']), 'name': 'Ana'})
        assert events(sio_client, 'state')[0]['currentSong']['song'] == song

    @pytest.mark.parametrize("payload", [
        {'songId': 999, 'name': 'Ana'},
        {'songId': 'abc', 'name': 'Ana'},
        {'name': 'Ana'},
        'not a dict',
    ])
    def test_invalid_add_is_dropped_silently(self, app, sio, song, payload):
        sio_client = sio()
        sio_client.get_received()

        sio_client.emit('addToQueue', payload)

        assert sio_client.get_received() == []
        assert app.queue_engine.snapshot() == {'queue': [], 'currentSong': None}

    def test_next_song(self, sio, song):
        sio_client = sio()
        sio_client.emit('addToQueue', {'songId': song['id'], 'name': 'Ana'})
        sio_client.emit('addToQueue', {'songId': song['id'], 'name': 'Ben'})
        sio_client.get_received()

        sio_client.emit('nextSong')
        states = events(sio_client, 'state')
        assert len(states) == 1
        assert states[0]['currentSong']['requestedBy'] == 'Ben'
        assert states[0]['queue'] == []

    def test_remove_song_leaves_current(self, sio, song):
        sio_client = sio()
        sio_client.emit('addToQueue', {'songId': song['id'], 'name': 'Ana'})
        sio_client.emit('addToQueue', {'songId': song['id'], 'name': 'Ben'})
        state = events(sio_client, 'state')[-1]
        current = state['currentSong']
        pending = state['queue'][0]

        sio_client.emit('removeSong', current['id'])
        state = events(sio_client, 'state')[0]
        assert state['currentSong'] == current
        assert state['queue'] == [pending]

        sio_client.emit('removeSong', pending['id'])
        state = events(sio_client, 'state')[0]
        assert state['currentSong'] == current
        assert state['queue'] == []

    def test_clear_queue_broadcasts_empty_state(self, sio, song):
        host, screen = sio(), sio()
        host.emit('addToQueue', {'songId': song['id'], 'name': 'Ana'})
        host.emit('addToQueue', {'songId': song['id'], 'name': 'Ben'})
        host.get_received()
        screen.get_received()

        host.emit('clearQueue')
        for sio_client in (host, screen):
            assert events(sio_client, 'state') == [{'queue': [], 'currentSong': None}]

    def test_late_joiner_gets_latest_state(self, sio, song):
        host = sio()
        host.emit('addToQueue', {'songId': song['id'], 'name': 'Ana'})
        host.emit('addToQueue', {'songId': song['id'], 'name': 'Ben'})
        latest = events(host, 'state')[-1]

        late = sio()
        assert events(late, 'state') == [latest]


class TestQrEvents:

    def test_set_qr_visible_broadcasts(self, db_app):
        admin = db_app.socketio.test_client(db_app)
        screen = db_app.socketio.test_client(db_app)
        admin.get_received()
        screen.get_received()

        admin.emit('setQrVisible', True)
        for sio_client in (admin, screen):
            assert events(sio_client, 'qrVisible') == [True]

        late = db_app.socketio.test_client(db_app)
        assert events(late, 'qrVisible') == [True]

        for sio_client in (admin, screen, late):
            sio_client.disconnect()

    def test_set_qr_visible_ignored_for_files(self, file_app):
        sio_client = file_app.socketio.test_client(file_app)
        sio_client.get_received()
        sio_client.emit('setQrVisible', True)
        assert sio_client.get_received() == []
        sio_client.disconnect()


class TestSeparateApps:

    def test_each_app_broadcasts_only_to_its_own_clients(self, tmp_path):
        first = create_app({"STORAGE_BACKEND": "files", "DATA_DIR": str(tmp_path / "first")})
        second = create_app({"STORAGE_BACKEND": "files", "DATA_DIR": str(tmp_path / "second")})
        song = first.catalog.create_song({'title': 'Africa', 'artist': 'Toto'})

        first_client = first.socketio.test_client(first)
        second_client = second.socketio.test_client(second)
        first_client.get_received()
        second_client.get_received()

        first.queue_engine.enqueue(song['id'], 'Ana')
        assert len(events(first_client, 'state')) == 1
        assert second_client.get_received() == []

        first_client.emit('addToQueue', {'songId': song['id'], 'name': 'Ben'})
        assert len(first.queue_engine.snapshot()['queue']) == 1
        assert second.queue_engine.snapshot() == {'queue': [], 'currentSong': None}
        assert second_client.get_received() == []

        first_client.disconnect()
        second_client.disconnect()
