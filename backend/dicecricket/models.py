from dicecricket import db
from datetime import datetime, timezone
import json


def _utcnow():
    return datetime.now(timezone.utc)


# Room status values. A room that does not exist is EMPTY; a finished match
# is deleted in the transaction that ends it.
WAITING = 'waiting'
ACTIVE = 'active'


class Room(db.Model):
    __tablename__ = 'room'
    id = db.Column(db.String(64), primary_key=True)
    status = db.Column(db.String(16), nullable=False, default=WAITING)
    players = db.Column(db.Text, nullable=False, default='[]')  # JSON-encoded list of seat dicts
    game_state = db.Column(db.Text, nullable=True)  # JSON-encoded match state once both seats are taken
    created_at = db.Column(db.DateTime, nullable=False, default=_utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=_utcnow, onupdate=_utcnow)
    seats = db.relationship('Seat', back_populates='room', cascade='all, delete-orphan')

    @staticmethod
    def _decode(text, default):
        try:
            return json.loads(text) if text else default
        except ValueError:
            return default

    def to_dict(self):
        players = self._decode(self.players, [])
        return {
            'id': self.id,
            'status': self.status,
            'players': players,
            'gameState': self._decode(self.game_state, None),
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }


class Seat(db.Model):
    """Participant id -> room index, so a connection finds its room directly."""
    __tablename__ = 'seat'
    participant_id = db.Column(db.String(64), primary_key=True)
    room_id = db.Column(db.String(64), db.ForeignKey('room.id', ondelete='CASCADE'), nullable=False, index=True)
    player_number = db.Column(db.Integer, nullable=False)
    room = db.relationship('Room', back_populates='seats')
