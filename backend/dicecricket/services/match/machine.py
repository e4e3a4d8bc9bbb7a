"""Match state machine.

A match is a plain JSON-able dict so it can be stored in the room registry
and broadcast to both clients as-is. Every mutation goes through the
transitions in this module.
"""
from typing import List

from dicecricket.services.errors import IllegalMoveAttempt
from .endgame import get_winner
from .rules import RuleSet
from .scoring import RollResult
from .turns import advance_turn_if_exhausted, apply_roll


def new_player_state(participant: dict, rules: RuleSet) -> dict:
    return {
        'id': participant['id'],
        'name': participant['name'],
        'playerNumber': participant['playerNumber'],
        'score': 0,
        'marks': {t: 0 for t in rules.targets},
        'stats': {'totalThrows': 0, 'totalHits': 0, 'totalHitValue': 0, 'marksScored': 0},
    }


def new_match_state(participants: List[dict], rules: RuleSet) -> dict:
    """Initial state once the second seat is filled. Seat 1 always throws first."""
    if len(participants) != 2:
        raise ValueError('a match needs exactly two players')
    ordered = sorted(participants, key=lambda p: p['playerNumber'])
    return {
        'TARGETS': list(rules.targets),
        'MAX_ROUNDS': rules.max_rounds,
        'players': [new_player_state(p, rules) for p in ordered],
        'currentPlayerIndex': 0,
        'round': 1,
        'rollsLeft': rules.rolls_per_turn,
        'isGameOver': False,
        'lastRoll': None,
    }


def current_player(state: dict) -> dict:
    return state['players'][state['currentPlayerIndex']]


def check_roll_allowed(state: dict, participant_id: str, target, rules: RuleSet) -> None:
    if state['isGameOver']:
        raise IllegalMoveAttempt('match is over')
    if current_player(state)['id'] != participant_id:
        raise IllegalMoveAttempt('not this player\'s turn')
    if state['rollsLeft'] <= 0:
        raise IllegalMoveAttempt('no rolls left')
    if not rules.is_target(target):
        raise IllegalMoveAttempt(f'unknown target {target!r}')


def roll(state: dict, participant_id: str, target: str, rules: RuleSet, rng) -> RollResult:
    """Throw for ``participant_id`` and settle the turn.

    Raises IllegalMoveAttempt without touching ``state`` when the request
    is stale: wrong player, finished match or no rolls left.
    """
    check_roll_allowed(state, participant_id, target, rules)
    result = apply_roll(state, target, rules, rng)
    advance_turn_if_exhausted(state, rules)
    return result


def winner_of(state: dict):
    if not state['isGameOver']:
        return None
    return get_winner(state)
