def test_index(client):
    res = client.get('/')
    assert res.status_code == 200
    data = res.get_json()
    assert data['namespace'] == '/ws'
    assert data['max_rounds'] == 15
    assert 'bull' in data['targets']


def test_room_state_not_found(client):
    res = client.get('/api/rooms/nowhere')
    assert res.status_code == 404


def test_room_state_after_create(sio_factory, client):
    sio = sio_factory()
    sio.emit('createRoom', {'roomId': 'den', 'playerName': 'Alice'}, namespace='/ws')
    res = client.get('/api/rooms/den')
    assert res.status_code == 200
    data = res.get_json()
    assert data['status'] == 'waiting'
    assert data['players'][0]['name'] == 'Alice'
    assert data['gameState'] is None


def test_db_reset_command(flask_app):
    runner = flask_app.test_cli_runner()
    result = runner.invoke(args=['db-reset'])
    assert 'Database has been reset!' in result.output
