from typing import Optional

from .rules import RuleSet


def all_closed(player: dict, rules: RuleSet) -> bool:
    return all(player['marks'][t] >= rules.marks_to_close for t in rules.targets)


def is_match_over(state: dict, rules: RuleSet) -> bool:
    """End-of-match test, meaningful only once the acting player has no rolls left.

    A player who has closed every target wins only if not trailing on score.
    The round cap ends the match only after player index 1 has thrown, so
    both players always get the same number of turns.
    """
    p1, p2 = state['players']
    if all_closed(p1, rules) and p1['score'] >= p2['score']:
        return True
    if all_closed(p2, rules) and p2['score'] >= p1['score']:
        return True
    return state['round'] >= rules.max_rounds and state['currentPlayerIndex'] == 1


def hits_per_throw(player: dict) -> float:
    stats = player['stats']
    if not stats['totalThrows']:
        return 0.0
    return stats['totalHitValue'] / stats['totalThrows']


def get_winner(state: dict) -> Optional[dict]:
    """Higher score wins; ties go to the better hits-per-throw rate. None is a draw."""
    p1, p2 = state['players']
    if p1['score'] != p2['score']:
        return p1 if p1['score'] > p2['score'] else p2
    r1, r2 = hits_per_throw(p1), hits_per_throw(p2)
    if r1 != r2:
        return p1 if r1 > r2 else p2
    return None
