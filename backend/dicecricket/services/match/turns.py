from .endgame import is_match_over
from .rules import RuleSet
from .scoring import apply_hit, resolve_roll, RollResult


def format_last_roll(player: dict, target: str, result: RollResult) -> str:
    return f"{player['name']}: {target.upper()} -> {result.description}"


def apply_roll(state: dict, target: str, rules: RuleSet, rng) -> RollResult:
    """Throw once at ``target`` for the acting player and spend one roll."""
    player = state['players'][state['currentPlayerIndex']]
    stats = player['stats']
    stats['totalThrows'] += 1
    result = resolve_roll(target, rng)
    stats['totalHitValue'] += result.hit_mark
    if result.hit_mark > 0:
        stats['totalHits'] += 1
        apply_hit(state, target, result.hit_mark, rules)
    state['lastRoll'] = format_last_roll(player, target, result)
    state['rollsLeft'] = max(0, state['rollsLeft'] - 1)
    return result


def advance_turn_if_exhausted(state: dict, rules: RuleSet) -> bool:
    """Hand the turn over once the acting player is out of rolls.

    Returns True when control changed hands. Sets ``isGameOver`` instead
    when the end-of-match conditions hold.
    """
    if state['rollsLeft'] != 0:
        return False
    if is_match_over(state, rules):
        state['isGameOver'] = True
        return False
    state['currentPlayerIndex'] = 1 - state['currentPlayerIndex']
    state['rollsLeft'] = rules.rolls_per_turn
    if state['currentPlayerIndex'] == 0:
        state['round'] += 1
    return True
