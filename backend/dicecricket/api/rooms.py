from flask import Blueprint, jsonify
from dicecricket.socketio_events import registry

rooms = Blueprint('rooms', __name__)


@rooms.route('/<string:room_id>', methods=['GET'])
def get_room(room_id):
    """Read-only view of a room record and its match snapshot."""
    record = registry.get(room_id)
    if record is None:
        return jsonify({'error': 'Room not found'}), 404
    return jsonify(record)
