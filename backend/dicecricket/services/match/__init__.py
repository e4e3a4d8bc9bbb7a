"""Dice cricket rules: scoring engine, turn controller and match state machine.

Pure functions over a JSON-able match dict. No Flask, database or socket
imports here so the rules can be exercised directly in tests.
"""
from .endgame import get_winner, hits_per_throw, is_match_over
from .machine import new_match_state, roll, winner_of
from .rules import BULL, DEFAULT_RULES, TARGETS, RuleSet
from .scoring import RollResult, apply_hit, resolve_roll
from .turns import advance_turn_if_exhausted, apply_roll
