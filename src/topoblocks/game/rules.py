from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from .state import GameState, Mode


@dataclass(frozen=True)
class ScoringRules:
    base_multiplier: int = 100
    lines_per_level: int = 10
    base_interval_ms: int = 1000
    interval_step_ms: int = 50
    min_interval_ms: int = 100


LINEAR_RULES = ScoringRules()
MIRROR_RULES = ScoringRules(base_multiplier=150)
CIRCULAR_RULES = ScoringRules(
    base_multiplier=200,
    lines_per_level=5,
    base_interval_ms=1500,
    interval_step_ms=100,
    min_interval_ms=200,
)

RULES_BY_MODE: Dict[Mode, ScoringRules] = {
    Mode.CLASSIC: LINEAR_RULES,
    Mode.TRIO: LINEAR_RULES,
    Mode.PENTO: LINEAR_RULES,
    Mode.GRAVITY_FLIP: LINEAR_RULES,
    Mode.MIRROR: MIRROR_RULES,
    Mode.CIRCULAR: CIRCULAR_RULES,
}


def rules_for(mode: Mode | str) -> ScoringRules:
    return RULES_BY_MODE[Mode(mode)]


def score_for_clear(cleared: int, level: int, rules: ScoringRules) -> int:
    if cleared <= 0:
        return 0
    return cleared * rules.base_multiplier * level


def level_for_lines(total_lines: int, rules: ScoringRules) -> int:
    return total_lines // rules.lines_per_level + 1


def drop_interval_for_level(level: int, rules: ScoringRules) -> int:
    return max(rules.min_interval_ms, rules.base_interval_ms - level * rules.interval_step_ms)


def apply_clear(state: GameState, cleared: int, rules: ScoringRules) -> Tuple[int, int, int, int]:
    """Return (score, level, lines, drop_interval_ms) after clearing `cleared` lines.

    The score delta is computed at the level held before the clear.
    """
    score = state.score + score_for_clear(cleared, state.level, rules)
    lines = state.lines + cleared
    level = max(state.level, level_for_lines(lines, rules))
    return score, level, lines, drop_interval_for_level(level, rules)
