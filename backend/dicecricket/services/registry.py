"""Room registry: key-value access to room records backed by SQLAlchemy.

Records are plain dicts shaped like ``Room.to_dict()``. Writes only touch the
session; ``transaction()`` commits one logical step or rolls all of it back.
"""
from contextlib import contextmanager
from typing import Optional
import json

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from dicecricket import db
from dicecricket.models import Room, Seat, WAITING
from .errors import InfrastructureFailure


class RoomRegistry:

    def __init__(self, session=None):
        self._session = session

    @property
    def session(self):
        return self._session or db.session

    @contextmanager
    def transaction(self):
        try:
            yield self
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            current_app.logger.exception(f"[registry-error] {exc.__class__.__name__}: {exc}")
            raise InfrastructureFailure(str(exc)) from exc
        except Exception:
            self.session.rollback()
            raise

    def get(self, room_id: str) -> Optional[dict]:
        room = self.session.get(Room, room_id)
        return room.to_dict() if room else None

    def exists(self, room_id: str) -> bool:
        return self.session.get(Room, room_id) is not None

    def set(self, room_id: str, record: dict) -> None:
        room = self.session.get(Room, room_id)
        if room is None:
            room = Room(id=room_id)
            self.session.add(room)
        room.status = record.get('status') or WAITING
        self._write_players(room, record.get('players') or [])
        self._write_state(room, record.get('gameState'))
        self.session.flush()

    def update(self, room_id: str, partial: dict) -> None:
        room = self.session.get(Room, room_id)
        if room is None:
            raise KeyError(room_id)
        if 'status' in partial:
            room.status = partial['status']
        if 'players' in partial:
            self._write_players(room, partial['players'])
        if 'gameState' in partial:
            self._write_state(room, partial['gameState'])
        self.session.flush()

    def delete(self, room_id: str) -> None:
        room = self.session.get(Room, room_id)
        if room is not None:
            self.session.delete(room)
            self.session.flush()

    def find_room_of(self, participant_id: str) -> Optional[str]:
        seat = self.session.get(Seat, participant_id)
        return seat.room_id if seat else None

    def _write_players(self, room: Room, players: list) -> None:
        room.players = json.dumps(players)
        wanted = {p['id']: p['playerNumber'] for p in players}
        for seat in list(room.seats):
            if seat.participant_id not in wanted:
                room.seats.remove(seat)
        seated = {s.participant_id for s in room.seats}
        for participant_id, number in wanted.items():
            if participant_id not in seated:
                room.seats.append(Seat(participant_id=participant_id, player_number=number))

    @staticmethod
    def _write_state(room: Room, state) -> None:
        room.game_state = json.dumps(state) if state is not None else None
