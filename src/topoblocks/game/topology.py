"""Board geometries.

A topology maps a piece anchor plus shape offsets onto cell coordinates and
decides which coordinates block movement. Every topology also exposes a
``(line, slot)`` view of its cells so a single :class:`~topoblocks.game.board.Board`
can store occupancy and clear full lines for all of them:

- ``line`` runs along the gravity axis (rows for linear boards, rings for the
  circular board),
- ``slot`` runs across it (columns, angular positions).

Pieces enter at ``source_line`` and fall toward ``sink_line``.
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import Tuple

from .shapes import Offset


Coordinate = Tuple[int, int]


class Topology(ABC):
    gravity_sign: int = 1
    rotates_pieces: bool = True

    def __init__(self, line_count: int, line_length: int) -> None:
        self.line_count = int(line_count)
        self.line_length = int(line_length)

    @property
    def source_line(self) -> int:
        return 0 if self.gravity_sign > 0 else self.line_count - 1

    @property
    def sink_line(self) -> int:
        return self.line_count - 1 if self.gravity_sign > 0 else 0

    @abstractmethod
    def cell_key(self, anchor: Coordinate, offset: Offset) -> Coordinate:
        """Project one shape offset relative to `anchor`."""

    @abstractmethod
    def within_bounds(self, coord: Coordinate) -> bool:
        """False when the coordinate blocks movement."""

    @abstractmethod
    def line_of(self, coord: Coordinate) -> int: ...

    @abstractmethod
    def slot_of(self, coord: Coordinate) -> int: ...

    @abstractmethod
    def coord_for(self, line: int, slot: int) -> Coordinate: ...

    @abstractmethod
    def advance(self, anchor: Coordinate) -> Coordinate:
        """Anchor after one gravity step."""

    @abstractmethod
    def shift(self, anchor: Coordinate, direction: int) -> Coordinate:
        """Anchor after one lateral step (`direction` is -1 or +1)."""

    @abstractmethod
    def entry_anchor(self, rng: random.Random) -> Coordinate: ...

    def is_out_of_bounds(self, coord: Coordinate) -> bool:
        return not self.within_bounds(coord)

    def on_board(self, coord: Coordinate) -> bool:
        return 0 <= self.line_of(coord) < self.line_count and 0 <= self.slot_of(coord) < self.line_length


class LinearTopology(Topology):
    """Rectangular grid addressed by (x, y); gravity moves along y by `gravity_sign`."""

    def __init__(self, width: int = 10, height: int = 20, gravity_sign: int = -1) -> None:
        if gravity_sign not in (-1, 1):
            raise ValueError(f"gravity_sign must be -1 or 1, got {gravity_sign}")
        super().__init__(line_count=height, line_length=width)
        self.width = int(width)
        self.height = int(height)
        self.gravity_sign = gravity_sign

    def cell_key(self, anchor: Coordinate, offset: Offset) -> Coordinate:
        ax, ay = anchor
        ox, oy = offset
        return ax + ox, ay + self.gravity_sign * oy

    def within_bounds(self, coord: Coordinate) -> bool:
        x, y = coord
        if not 0 <= x < self.width:
            return False
        # Only the sink edge blocks; cells past the source edge stay hidden.
        if self.gravity_sign > 0:
            return y < self.height
        return y >= 0

    def line_of(self, coord: Coordinate) -> int:
        return coord[1]

    def slot_of(self, coord: Coordinate) -> int:
        return coord[0]

    def coord_for(self, line: int, slot: int) -> Coordinate:
        return slot, line

    def advance(self, anchor: Coordinate) -> Coordinate:
        return anchor[0], anchor[1] + self.gravity_sign

    def shift(self, anchor: Coordinate, direction: int) -> Coordinate:
        return anchor[0] + direction, anchor[1]

    def entry_anchor(self, rng: random.Random) -> Coordinate:
        return self.width // 2 - 1, self.source_line


class RingTopology(Topology):
    """Concentric rings addressed by (ring, slot); ring 0 is the outermost.

    Pieces fall inward (increasing ring index). Slots wrap around, so there is
    no lateral bound. Rotation commands shift the piece around the ring instead
    of turning the shape.
    """

    gravity_sign = 1
    rotates_pieces = False

    def __init__(self, ring_count: int = 12, slots_per_ring: int = 16) -> None:
        super().__init__(line_count=ring_count, line_length=slots_per_ring)
        self.ring_count = int(ring_count)
        self.slots_per_ring = int(slots_per_ring)

    def cell_key(self, anchor: Coordinate, offset: Offset) -> Coordinate:
        ring, slot = anchor
        ox, oy = offset
        return ring + oy, (slot + ox) % self.slots_per_ring

    def within_bounds(self, coord: Coordinate) -> bool:
        return 0 <= coord[0] < self.ring_count

    def line_of(self, coord: Coordinate) -> int:
        return coord[0]

    def slot_of(self, coord: Coordinate) -> int:
        return coord[1] % self.slots_per_ring

    def coord_for(self, line: int, slot: int) -> Coordinate:
        return line, slot

    def advance(self, anchor: Coordinate) -> Coordinate:
        return anchor[0] + 1, anchor[1]

    def shift(self, anchor: Coordinate, direction: int) -> Coordinate:
        return anchor[0], (anchor[1] + direction) % self.slots_per_ring

    def entry_anchor(self, rng: random.Random) -> Coordinate:
        return 0, rng.randrange(self.slots_per_ring)


class MirrorDualTopology(LinearTopology):
    """Linear grid shared by two pieces reflected about the vertical centre line."""

    def __init__(self, width: int = 10, height: int = 20) -> None:
        super().__init__(width=width, height=height, gravity_sign=-1)

    def mirror_x(self, x: int) -> int:
        return self.width - 1 - x

    def mirror(self, coord: Coordinate) -> Coordinate:
        return self.mirror_x(coord[0]), coord[1]

    def entry_anchor(self, rng: random.Random) -> Coordinate:
        # Left piece; the right piece enters at the mirrored anchor.
        return 1, self.source_line
