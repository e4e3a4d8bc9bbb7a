from flask_socketio import join_room, close_room, emit
from flask import current_app, request
from dicecricket import socketio
from dicecricket.services import rooms
from dicecricket.services.errors import IllegalMoveAttempt, InfrastructureFailure, UserInputError
from dicecricket.services.registry import RoomRegistry

registry = RoomRegistry()


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _namespace() -> str:
    return current_app.config.get('SOCKETIO_NAMESPACE', '/ws')


def _channel(room_id: str) -> str:
    return f"room:{room_id}"


def _rules():
    return current_app.extensions['dicecricket']['rules']


def _rng():
    return current_app.extensions['dicecricket']['rng']


def _report_failure(exc: InfrastructureFailure) -> None:
    emit('errorMsg', {'text': exc.public_message})


def handle_connect():
    current_app.logger.debug(f"[connect] sid={_get_sid()}")


def handle_disconnect(reason=None):
    sid = _get_sid()
    ns = _namespace()

    def publish(room_id):
        socketio.emit('opponentLeft', {}, to=_channel(room_id), skip_sid=sid, namespace=ns)
        close_room(_channel(room_id), namespace=ns)

    try:
        rooms.leave(registry, sid, publish=publish)
    except InfrastructureFailure:
        current_app.logger.warning(f"[room-teardown-failed] sid={sid}")


def handle_create_room(data):
    data = data or {}
    sid = _get_sid()
    try:
        record = rooms.create_room(registry, sid, data.get('roomId'), data.get('playerName'))
    except UserInputError as exc:
        emit('errorMsg', {'text': str(exc)})
        return
    except InfrastructureFailure as exc:
        _report_failure(exc)
        return
    room_id = record['id']
    join_room(_channel(room_id))
    emit('roomCreated', {'roomId': room_id, 'playerId': sid})


def handle_join_room(data):
    data = data or {}
    sid = _get_sid()
    ns = _namespace()

    def publish(room_id, state):
        join_room(_channel(room_id))
        socketio.emit('gameStart', state, to=_channel(room_id), namespace=ns)

    try:
        rooms.join_room(registry, _rules(), sid, data.get('roomId'), data.get('playerName'), publish=publish)
    except UserInputError as exc:
        emit('errorMsg', {'text': str(exc)})
    except InfrastructureFailure as exc:
        _report_failure(exc)


def handle_roll_dice(data):
    data = data or {}
    sid = _get_sid()
    ns = _namespace()

    def publish(outcome):
        channel = _channel(outcome.room_id)
        socketio.emit('updateState', outcome.state, to=channel, namespace=ns)
        if outcome.state['isGameOver']:
            socketio.emit('gameOver', {'winner': outcome.winner, 'finalState': outcome.state}, to=channel, namespace=ns)
            close_room(channel, namespace=ns)

    try:
        rooms.roll_dice(registry, _rules(), _rng(), sid, data.get('target'), publish=publish)
    except IllegalMoveAttempt as exc:
        current_app.logger.debug(f"[roll-ignored] sid={sid} reason={exc}")
    except InfrastructureFailure as exc:
        _report_failure(exc)


def register_socketio_handlers(namespace: str = '/ws') -> None:
    """Register the game protocol handlers on ``namespace``."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('createRoom', handle_create_room, namespace=namespace)
    socketio.on_event('joinRoom', handle_join_room, namespace=namespace)
    socketio.on_event('rollDice', handle_roll_dice, namespace=namespace)
