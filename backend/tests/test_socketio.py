from conftest import ScriptedDice, MISS, TRIPLE
from dicecricket.services.match import RuleSet


def _events(sio, name):
    return [pkt['args'][0] if pkt['args'] else None
            for pkt in sio.get_received('/ws') if pkt['name'] == name]


def _start_match(sio_factory, room='den'):
    host = sio_factory()
    guest = sio_factory()
    host.emit('createRoom', {'roomId': room, 'playerName': 'Alice'}, namespace='/ws')
    created = _events(host, 'roomCreated')
    assert created and created[0]['roomId'] == room
    guest.emit('joinRoom', {'roomId': room, 'playerName': 'Bob'}, namespace='/ws')
    host_start = _events(host, 'gameStart')
    guest_start = _events(guest, 'gameStart')
    assert len(host_start) == 1 and len(guest_start) == 1
    assert host_start[0] == guest_start[0]
    assert host_start[0]['players'][0]['id'] == created[0]['playerId']
    return host, guest, host_start[0]


def test_connect(sio_factory):
    sio = sio_factory()
    assert sio.is_connected('/ws')


def test_create_room_requires_name(sio_factory):
    sio = sio_factory()
    sio.emit('createRoom', {'roomId': 'den'}, namespace='/ws')
    errors = _events(sio, 'errorMsg')
    assert errors == [{'text': 'Please enter your name.'}]


def test_duplicate_room_reports_error(sio_factory):
    first, second = sio_factory(), sio_factory()
    first.emit('createRoom', {'roomId': 'den', 'playerName': 'Alice'}, namespace='/ws')
    second.emit('createRoom', {'roomId': 'den', 'playerName': 'Cara'}, namespace='/ws')
    assert _events(second, 'errorMsg') == [{'text': 'That room name is already taken.'}]


def test_join_unknown_room_reports_error(sio_factory):
    sio = sio_factory()
    sio.emit('joinRoom', {'roomId': 'nowhere', 'playerName': 'Bob'}, namespace='/ws')
    assert _events(sio, 'errorMsg') == [{'text': 'That room does not exist.'}]


def test_full_room_reports_error(sio_factory):
    _start_match(sio_factory)
    third = sio_factory()
    third.emit('joinRoom', {'roomId': 'den', 'playerName': 'Cara'}, namespace='/ws')
    assert _events(third, 'errorMsg') == [{'text': 'That room is full.'}]


def test_game_start_snapshot(sio_factory):
    _, _, state = _start_match(sio_factory)
    assert state['TARGETS'] == ['20', '19', '18', '17', '16', '15', 'bull']
    assert state['MAX_ROUNDS'] == 15
    assert state['currentPlayerIndex'] == 0
    assert state['rollsLeft'] == 3
    assert [p['name'] for p in state['players']] == ['Alice', 'Bob']


def test_roll_broadcasts_to_both_players(flask_app, sio_factory):
    flask_app.extensions['dicecricket']['rng'] = ScriptedDice([TRIPLE])
    host, guest, _ = _start_match(sio_factory)
    host.emit('rollDice', {'target': '20'}, namespace='/ws')
    host_updates = _events(host, 'updateState')
    guest_updates = _events(guest, 'updateState')
    assert host_updates == guest_updates
    assert host_updates[0]['players'][0]['marks']['20'] == 3
    assert host_updates[0]['rollsLeft'] == 2


def test_out_of_turn_roll_is_silent(sio_factory):
    host, guest, _ = _start_match(sio_factory)
    guest.emit('rollDice', {'target': '20'}, namespace='/ws')
    assert guest.get_received('/ws') == []
    assert host.get_received('/ws') == []


def test_game_over_broadcasts_winner_and_clears_room(flask_app, sio_factory, client):
    flask_app.extensions['dicecricket']['rules'] = RuleSet(max_rounds=1)
    flask_app.extensions['dicecricket']['rng'] = ScriptedDice([MISS])
    host, guest, _ = _start_match(sio_factory)
    for _ in range(3):
        host.emit('rollDice', {'target': '19'}, namespace='/ws')
    for _ in range(3):
        guest.emit('rollDice', {'target': 'bull'}, namespace='/ws')
    over = _events(host, 'gameOver')
    assert len(over) == 1
    assert over[0]['winner'] is None
    assert over[0]['finalState']['isGameOver'] is True
    assert client.get('/api/rooms/den').status_code == 404


def test_disconnect_notifies_opponent(sio_factory, client):
    host, guest, _ = _start_match(sio_factory)
    host.disconnect(namespace='/ws')
    assert _events(guest, 'opponentLeft') == [{}]
    assert client.get('/api/rooms/den').status_code == 404
