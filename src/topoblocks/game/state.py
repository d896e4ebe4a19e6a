from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class Mode(str, Enum):
    CLASSIC = "classic"
    TRIO = "trio"
    PENTO = "pento"
    CIRCULAR = "circular"
    GRAVITY_FLIP = "gravity-flip"
    MIRROR = "mirror"


class Phase(Enum):
    SPAWNING = "spawning"
    ACTIVE = "active"
    LOCKING = "locking"
    CLEARING = "clearing"
    GAME_OVER = "game_over"
    DESTROYED = "destroyed"


@dataclass
class GameState:
    mode: Mode
    score: int = 0
    level: int = 1
    lines: int = 0
    game_over: bool = False

    def snapshot(self) -> "GameState":
        return replace(self)


def format_status(state: GameState) -> str:
    text = f"Score: {state.score} | Level: {state.level} | Lines: {state.lines}"
    if state.game_over:
        text += " | GAME OVER"
    return text
