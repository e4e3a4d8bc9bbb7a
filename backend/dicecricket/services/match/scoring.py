from typing import NamedTuple

from .rules import BULL, RuleSet

# One entry per face of a fair die: (hit_mark, description).
# Keep the face counts, not only the ratios: the draw is a single fair pick.
BULL_FACES = (
    (0, 'miss'), (0, 'miss'),
    (1, 'single bull'), (1, 'single bull'), (1, 'single bull'),
    (2, 'double bull'),
)
NUMBER_FACES = (
    (0, 'miss'), (0, 'miss'),
    (1, 'single'), (1, 'single'), (1, 'single'),
    (1, 'single'), (1, 'single'), (1, 'single'),
    (2, 'double'),
    (3, 'triple'), (3, 'triple'), (3, 'triple'),
)


class RollResult(NamedTuple):
    hit_mark: int
    description: str


def resolve_roll(target: str, rng) -> RollResult:
    """Draw one outcome for a throw at ``target``.

    ``rng`` is any object with a ``randrange`` method (normally a
    ``random.Random``); nothing else about the match is read.
    """
    faces = BULL_FACES if target == BULL else NUMBER_FACES
    hit_mark, description = faces[rng.randrange(len(faces))]
    return RollResult(hit_mark, description)


def apply_hit(state: dict, target: str, hit_mark: int, rules: RuleSet) -> int:
    """Apply ``hit_mark`` on ``target`` for the acting player.

    Marks close at ``rules.marks_to_close``; whatever is left over scores,
    but only while the opponent still has the target open. Returns the
    points awarded after the lead cap.
    """
    idx = state['currentPlayerIndex']
    player = state['players'][idx]
    opponent = state['players'][1 - idx]

    current = player['marks'][target]
    added = max(0, min(hit_mark, rules.marks_to_close - current))
    player['marks'][target] = current + added
    player['stats']['marksScored'] += added

    leftover = hit_mark - added
    if leftover <= 0:
        return 0
    if player['marks'][target] != rules.marks_to_close:
        return 0
    if opponent['marks'][target] >= rules.marks_to_close:
        return 0

    before = player['score']
    potential = before + leftover * rules.point_value(target)
    player['score'] = min(potential, opponent['score'] + rules.score_cap)
    return player['score'] - before
