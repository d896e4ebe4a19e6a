from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .state import Mode


Offset = Tuple[int, int]
Offsets = Tuple[Offset, ...]


@dataclass(frozen=True)
class Shape:
    name: str
    offsets: Offsets
    color: int
    kind: int  # 1-based index inside its catalog

    @property
    def size(self) -> int:
        return len(self.offsets)


def rotate_offsets(offsets: Offsets, clockwise: bool = True) -> Offsets:
    """Rotate offsets by 90 degrees around the anchor, returning a new tuple."""
    if clockwise:
        return tuple((-y, x) for x, y in offsets)
    return tuple((y, -x) for x, y in offsets)


def negate_x(offsets: Offsets) -> Offsets:
    return tuple((-x, y) for x, y in offsets)


def _catalog(*entries: Tuple[str, int, Offsets]) -> Tuple[Shape, ...]:
    return tuple(
        Shape(name=name, offsets=offsets, color=color, kind=i + 1)
        for i, (name, color, offsets) in enumerate(entries)
    )


CLASSIC_SHAPES = _catalog(
    ("I", 0x00FFFF, ((0, 0), (1, 0), (2, 0), (3, 0))),
    ("O", 0xFFFF00, ((0, 0), (1, 0), (0, 1), (1, 1))),
    ("T", 0xFF00FF, ((1, 0), (0, 1), (1, 1), (2, 1))),
    ("S", 0x00FF00, ((1, 0), (2, 0), (0, 1), (1, 1))),
    ("Z", 0xFF0000, ((0, 0), (1, 0), (1, 1), (2, 1))),
    ("J", 0x0000FF, ((0, 0), (0, 1), (1, 1), (2, 1))),
    ("L", 0xFF8800, ((2, 0), (0, 1), (1, 1), (2, 1))),
)

TRIO_SHAPES = _catalog(
    ("I3", 0x00FFFF, ((0, 0), (1, 0), (2, 0))),
    ("L3", 0xFF00FF, ((0, 0), (0, 1), (1, 1))),
)

PENTO_SHAPES = _catalog(
    ("F", 0xFF1493, ((1, 0), (2, 0), (0, 1), (1, 1), (1, 2))),
    ("I5", 0x00FFFF, ((0, 0), (1, 0), (2, 0), (3, 0), (4, 0))),
    ("L5", 0xFF8800, ((0, 0), (0, 1), (0, 2), (0, 3), (1, 3))),
    ("N", 0x9370DB, ((1, 0), (2, 0), (0, 1), (1, 1), (0, 2))),
    ("P", 0x00FF00, ((0, 0), (1, 0), (0, 1), (1, 1), (0, 2))),
    ("T5", 0xFF00FF, ((0, 0), (1, 0), (2, 0), (1, 1), (1, 2))),
    ("U", 0xFFD700, ((0, 0), (2, 0), (0, 1), (1, 1), (2, 1))),
    ("V", 0xFF6347, ((0, 0), (0, 1), (0, 2), (1, 2), (2, 2))),
    ("W", 0x4169E1, ((0, 0), (0, 1), (1, 1), (1, 2), (2, 2))),
    ("X", 0xFF1493, ((1, 0), (0, 1), (1, 1), (2, 1), (1, 2))),
    ("Y", 0x00CED1, ((1, 0), (0, 1), (1, 1), (1, 2), (1, 3))),
    ("Z5", 0xFF0000, ((0, 0), (1, 0), (1, 1), (1, 2), (2, 2))),
)

CATALOG_BY_MODE: Dict[Mode, Tuple[Shape, ...]] = {
    Mode.CLASSIC: CLASSIC_SHAPES,
    Mode.TRIO: TRIO_SHAPES,
    Mode.PENTO: PENTO_SHAPES,
    Mode.CIRCULAR: CLASSIC_SHAPES,
    Mode.GRAVITY_FLIP: CLASSIC_SHAPES,
    Mode.MIRROR: CLASSIC_SHAPES,
}


def shapes_for(mode: Mode | str) -> Tuple[Shape, ...]:
    return CATALOG_BY_MODE[Mode(mode)]


def random_shape(mode: Mode | str, rng: Optional[random.Random] = None) -> Shape:
    rng = rng or random.Random()
    return rng.choice(shapes_for(mode))
