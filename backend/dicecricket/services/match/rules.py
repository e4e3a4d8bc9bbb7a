from dataclasses import dataclass
from typing import Tuple

BULL = 'bull'
TARGETS: Tuple[str, ...] = ('20', '19', '18', '17', '16', '15', BULL)
MARKS_TO_CLOSE = 3


@dataclass(frozen=True)
class RuleSet:
    """Immutable rule constants handed to every scoring and turn call."""

    targets: Tuple[str, ...] = TARGETS
    bull_value: int = 25
    score_cap: int = 200
    max_rounds: int = 15
    rolls_per_turn: int = 3
    marks_to_close: int = MARKS_TO_CLOSE

    @classmethod
    def from_config(cls, config) -> 'RuleSet':
        return cls(
            bull_value=int(config.get('BULL_VALUE', 25)),
            score_cap=int(config.get('SCORE_CAP', 200)),
            max_rounds=int(config.get('MAX_ROUNDS', 15)),
            rolls_per_turn=int(config.get('ROLLS_PER_TURN', 3)),
        )

    def point_value(self, target: str) -> int:
        if target == BULL:
            return self.bull_value
        return int(target)

    def is_target(self, target) -> bool:
        return isinstance(target, str) and target in self.targets


DEFAULT_RULES = RuleSet()
