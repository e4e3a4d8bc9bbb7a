"""Room lifecycle: create, join, roll and teardown against the room registry.

Each operation runs under the room's lock and inside one registry
transaction, and hands its result to ``publish`` while still holding the
lock so clients see broadcasts in the order they were applied.
"""
from contextlib import contextmanager
from typing import Callable, Dict, NamedTuple, Optional, Tuple
import threading

from flask import current_app

from dicecricket.models import ACTIVE, WAITING
from .errors import IllegalMoveAttempt, UserInputError
from .match import RollResult, RuleSet, new_match_state, roll, winner_of
from .registry import RoomRegistry

# key -> [lock, number of callers holding or waiting on it]
_locks: Dict[Tuple[str, str], list] = {}
_locks_guard = threading.Lock()


@contextmanager
def _keyed_lock(key: Tuple[str, str]):
    with _locks_guard:
        entry = _locks.setdefault(key, [threading.Lock(), 0])
        entry[1] += 1
    try:
        with entry[0]:
            yield
    finally:
        with _locks_guard:
            entry[1] -= 1
            if entry[1] == 0:
                del _locks[key]


def room_lock(room_id: str):
    return _keyed_lock(('room', room_id))


def participant_lock(participant_id: str):
    """Held around seat changes so one connection never takes two seats."""
    return _keyed_lock(('participant', participant_id))


class RollOutcome(NamedTuple):
    room_id: str
    state: dict
    result: RollResult
    winner: Optional[dict]


def _clean(value) -> str:
    return value.strip() if isinstance(value, str) else ''


def _noop(*_args):
    pass


def create_room(registry: RoomRegistry, participant_id: str, room_id, player_name) -> dict:
    room_id = _clean(room_id)
    player_name = _clean(player_name)
    if not room_id:
        raise UserInputError('Please enter a room name.')
    if not player_name:
        raise UserInputError('Please enter your name.')

    with participant_lock(participant_id), room_lock(room_id):
        with registry.transaction():
            if registry.find_room_of(participant_id):
                raise UserInputError('You are already in a room.')
            if registry.exists(room_id):
                raise UserInputError('That room name is already taken.')
            record = {
                'id': room_id,
                'status': WAITING,
                'players': [{'id': participant_id, 'name': player_name, 'playerNumber': 1}],
                'gameState': None,
            }
            registry.set(room_id, record)
    current_app.logger.info(f"[room-create] room={room_id} player={participant_id}")
    return record


def join_room(registry: RoomRegistry, rules: RuleSet, participant_id: str, room_id, player_name,
              publish: Callable[[str, dict], None] = _noop) -> dict:
    """Take the second seat and start the match. ``publish(room_id, state)`` fires after commit."""
    room_id = _clean(room_id)
    player_name = _clean(player_name)
    if not room_id:
        raise UserInputError('Please enter a room name.')
    if not player_name:
        raise UserInputError('Please enter your name.')

    with participant_lock(participant_id), room_lock(room_id):
        with registry.transaction():
            if registry.find_room_of(participant_id):
                raise UserInputError('You are already in a room.')
            record = registry.get(room_id)
            if record is None:
                raise UserInputError('That room does not exist.')
            players = record['players']
            if len(players) >= 2:
                raise UserInputError('That room is full.')
            players = players + [{'id': participant_id, 'name': player_name, 'playerNumber': 2}]
            state = new_match_state(players, rules)
            registry.update(room_id, {'status': ACTIVE, 'players': players, 'gameState': state})
        current_app.logger.info(f"[room-join] room={room_id} player={participant_id}")
        publish(room_id, state)
    return state


def roll_dice(registry: RoomRegistry, rules: RuleSet, rng, participant_id: str, target,
              publish: Callable[[RollOutcome], None] = _noop) -> RollOutcome:
    """Throw for ``participant_id`` in whatever room they sit in.

    Raises IllegalMoveAttempt, with nothing written, for stale requests.
    A finished match is removed in the same transaction as its last roll,
    before ``publish`` broadcasts the final state.
    """
    with registry.transaction():
        room_id = registry.find_room_of(participant_id)
    if room_id is None:
        raise IllegalMoveAttempt('participant has no room')

    with room_lock(room_id):
        with registry.transaction():
            record = registry.get(room_id)
            state = record['gameState'] if record else None
            if state is None:
                raise IllegalMoveAttempt('match has not started')
            result = roll(state, participant_id, target, rules, rng)
            winner = winner_of(state)
            if state['isGameOver']:
                registry.delete(room_id)
            else:
                registry.update(room_id, {'gameState': state})
        current_app.logger.info(
            f"[roll] room={room_id} player={participant_id} target={target} "
            f"hit={result.hit_mark} round={state['round']} rolls_left={state['rollsLeft']}"
        )
        outcome = RollOutcome(room_id, state, result, winner)
        if state['isGameOver']:
            current_app.logger.info(
                f"[game-over] room={room_id} winner={winner['id'] if winner else 'draw'}"
            )
        publish(outcome)
    return outcome


def leave(registry: RoomRegistry, participant_id: str,
          publish: Callable[[str], None] = _noop) -> Optional[str]:
    """Tear down the participant's room, waiting or active. Returns its id, if any."""
    with registry.transaction():
        room_id = registry.find_room_of(participant_id)
    if room_id is None:
        return None
    with room_lock(room_id):
        with registry.transaction():
            registry.delete(room_id)
        current_app.logger.info(f"[room-teardown] room={room_id} left_by={participant_id}")
        publish(room_id)
    return room_id
