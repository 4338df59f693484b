import re

import pytest

from app import create_app
from tests.conftest import WORD, ManualTimerFactory


class TestConfig:
    overrides = {
        'TESTING': True,
        'SECRET_KEY': 'test-secret',
        'ASYNC_MODE': 'threading',
        'CORS_ORIGINS': '*',
        'GRACE_PERIOD_SECONDS': 30,
        'GAME_OVER_DELAY_SECONDS': 10,
    }


@pytest.fixture()
def sio_timers():
    return ManualTimerFactory()


@pytest.fixture()
def server(sio_timers):
    app, socketio = create_app(TestConfig.overrides, timer_factory=sio_timers)
    return app, socketio


@pytest.fixture()
def connect(server):
    app, socketio = server
    clients = []

    def _connect():
        client = socketio.test_client(app, flask_test_client=app.test_client())
        clients.append(client)
        return client

    yield _connect
    for client in clients:
        if client.is_connected():
            client.disconnect()


def payloads(client, event):
    return [pkt['args'][0] for pkt in client.get_received() if pkt['name'] == event]


def split(client):
    """Group everything a client has received by event name."""
    grouped = {}
    for pkt in client.get_received():
        grouped.setdefault(pkt['name'], []).append(pkt['args'][0])
    return grouped


@pytest.fixture()
def lobby(connect):
    """Host plus three guests seated in one room."""
    host = connect()
    host.emit('create_room', {'playerName': 'Ann'})
    created = payloads(host, 'room_created')[0]
    code = created['roomCode']

    guests = []
    for name in ['Ben', 'Cid', 'Dee']:
        guest = connect()
        guest.emit('join_room', {'roomCode': code.lower(), 'playerName': name})
        guests.append(guest)

    clients = [host] + guests
    ids = {}
    for client in clients:
        received = split(client)
        roster = (received.get('update_players') or [])[-1]
        ids.update({p['name']: p['id'] for p in roster['players']})
    return code, clients, ids


def test_create_room_emits_code(connect):
    host = connect()
    host.emit('create_room', {'playerName': 'Ann'})

    created = payloads(host, 'room_created')[0]
    assert re.fullmatch(r'[A-Z]{4}', created['roomCode'])
    assert created['isHost'] is True
    assert created['players'][0]['name'] == 'Ann'
    assert created['hostId'] == created['players'][0]['id']


def test_create_room_accepts_bare_string(connect):
    host = connect()
    host.emit('create_room', 'Ann')

    assert payloads(host, 'room_created')


def test_blank_name_reports_error(connect):
    host = connect()
    host.emit('create_room', {'playerName': '  '})

    errors = payloads(host, 'error_message')
    assert errors[0]['error'] == 'invalid_input'


def test_join_errors_go_to_requester_only(lobby, connect):
    code, clients, _ = lobby
    intruder = connect()

    intruder.emit('join_room', {'roomCode': code, 'playerName': 'ANN'})
    intruder.emit('join_room', {'roomCode': 'QQQQ', 'playerName': 'Zed'})

    errors = payloads(intruder, 'error_message')
    assert [e['error'] for e in errors] == ['name_taken', 'room_not_found']
    for client in clients:
        assert payloads(client, 'error_message') == []


def test_full_round_over_sockets(lobby):
    code, clients, ids = lobby
    host = clients[0]

    host.emit('start_game', {'roomCode': code, 'wordData': WORD, 'impostorCount': 1})
    roles = [payloads(client, 'game_started') for client in clients]
    assert all(len(r) == 1 for r in roles)
    roles = [r[0] for r in roles]
    assert sum(1 for r in roles if r['role'] == 'impostor') == 1

    host.emit('start_voting', {'roomCode': code})
    for client in clients:
        candidates = payloads(client, 'voting_phase_started')[0]['candidates']
        assert len(candidates) == 4

    citizen_index = next(i for i, r in enumerate(roles) if r['role'] == 'citizen')
    target = ids[['Ann', 'Ben', 'Cid', 'Dee'][citizen_index]]
    for client in clients:
        client.emit('cast_vote', {'roomCode': code, 'targetId': target})

    for index, client in enumerate(clients):
        received = split(client)
        eliminated = received['player_eliminated']
        assert len(eliminated) == 1
        assert eliminated[0]['eliminatedId'] == target
        assert eliminated[0]['isYou'] is (index == citizen_index)
        assert eliminated[0]['wasImpostor'] is False
        assert received['next_round'][0]['startingPlayer'] in {'Ann', 'Ben', 'Cid', 'Dee'}


def test_non_host_cannot_start(lobby):
    code, clients, _ = lobby
    guest = clients[1]

    guest.emit('start_game', {'roomCode': code, 'wordData': WORD, 'impostorCount': 1})

    assert payloads(guest, 'error_message')[0]['error'] == 'unauthorized'
    assert payloads(clients[0], 'game_started') == []


def test_disconnect_and_rejoin_keeps_role(lobby, connect, sio_timers):
    code, clients, _ = lobby
    host, ben = clients[0], clients[1]
    host.emit('start_game', {'roomCode': code, 'wordData': WORD, 'impostorCount': 1})
    ben_role = payloads(ben, 'game_started')[0]
    host.get_received()

    ben.disconnect()
    update = payloads(host, 'update_players')[-1]
    assert next(p for p in update['players'] if p['name'] == 'Ben')['connected'] is False
    assert len(sio_timers.pending) == 1

    returning = connect()
    returning.emit('rejoin_room', {'roomCode': code, 'playerName': 'Ben'})

    assert payloads(returning, 'game_started') == [ben_role]
    assert sio_timers.pending == []


def test_grace_expiry_over_sockets(lobby, connect, sio_timers):
    code, clients, _ = lobby
    host, ben = clients[0], clients[1]
    ben.disconnect()
    host.get_received()

    sio_timers.fire_all()

    update = payloads(host, 'update_players')[-1]
    assert [p['name'] for p in update['players']] == ['Ann', 'Cid', 'Dee']

    late = connect()
    late.emit('rejoin_room', {'roomCode': code, 'playerName': 'Ben'})
    assert payloads(late, 'error_message')[0]['error'] == 'recovery_failed'


def test_leave_room_migrates_host(lobby):
    code, clients, ids = lobby
    host, ben = clients[0], clients[1]

    host.emit('leave_room', {'roomCode': code})

    update = payloads(ben, 'update_players')[-1]
    assert update['hostId'] == ids['Ben']
    assert [p['name'] for p in update['players']] == ['Ben', 'Cid', 'Dee']


def test_chat_broadcast(lobby):
    code, clients, _ = lobby

    clients[2].emit('send_chat', {'roomCode': code, 'message': 'who is it?', 'playerName': 'Spoof'})

    for client in clients:
        assert payloads(client, 'receive_chat') == [{'name': 'Cid', 'message': 'who is it?'}]


def test_http_endpoints(server, lobby):
    app, _ = server
    code, _, _ = lobby
    http = app.test_client()

    health = http.get('/api/health').get_json()
    assert health['status'] == 'healthy'
    assert health['active_rooms'] == 1

    summary = http.get(f'/api/rooms/{code}').get_json()
    assert summary['player_count'] == 4
    assert summary['phase'] == 'lobby'

    assert http.get('/api/rooms/QQQQ').status_code == 404
