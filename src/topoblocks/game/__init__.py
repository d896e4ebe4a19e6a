"""Game module for topoblocks.

Exports the falling-block engine and its supporting classes:
- Shape catalogs and the shape library helpers
- Topologies: LinearTopology, RingTopology, MirrorDualTopology
- Board: occupancy storage and line/ring clearing
- ScoringRules: per-mode scoring, leveling and drop timing
- BlockGame / MirrorGame: piece controllers
- GameSession: mode switching
"""

from .board import Board, ClearResult, InvariantError
from .core import (
    Action,
    ActivePiece,
    BlockGame,
    GameConfig,
    MirrorGame,
    create_game,
    topology_for,
)
from .events import CellAttributes, GameListener
from .rules import (
    RULES_BY_MODE,
    ScoringRules,
    apply_clear,
    drop_interval_for_level,
    level_for_lines,
    rules_for,
    score_for_clear,
)
from .session import GameSession
from .shapes import (
    CLASSIC_SHAPES,
    PENTO_SHAPES,
    TRIO_SHAPES,
    Shape,
    negate_x,
    random_shape,
    rotate_offsets,
    shapes_for,
)
from .state import GameState, Mode, Phase, format_status
from .topology import LinearTopology, MirrorDualTopology, RingTopology, Topology

__all__ = [
    "Action",
    "ActivePiece",
    "BlockGame",
    "Board",
    "CLASSIC_SHAPES",
    "CellAttributes",
    "ClearResult",
    "GameConfig",
    "GameListener",
    "GameSession",
    "GameState",
    "InvariantError",
    "LinearTopology",
    "MirrorDualTopology",
    "MirrorGame",
    "Mode",
    "PENTO_SHAPES",
    "Phase",
    "RULES_BY_MODE",
    "RingTopology",
    "ScoringRules",
    "Shape",
    "TRIO_SHAPES",
    "Topology",
    "apply_clear",
    "create_game",
    "drop_interval_for_level",
    "format_status",
    "level_for_lines",
    "negate_x",
    "random_shape",
    "rotate_offsets",
    "rules_for",
    "score_for_clear",
    "shapes_for",
    "topology_for",
]
