from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence, Tuple

import numpy as np

from .topology import Coordinate, Topology


class InvariantError(RuntimeError):
    """Raised when board or piece bookkeeping is inconsistent; fatal to the game."""


@dataclass
class ClearResult:
    lines: Tuple[int, ...] = ()
    removed_ids: Tuple[int, ...] = ()
    moved: Dict[int, Coordinate] = field(default_factory=dict)

    @property
    def count(self) -> int:
        return len(self.lines)


class Board:
    """Occupancy storage for any topology.

    Cells are kept in a ``(line_count, line_length)`` array of logical cell ids,
    0 meaning empty. The array is authoritative for collision; display data for
    an id lives with the controller.
    """

    def __init__(self, topology: Topology) -> None:
        self.topology = topology
        self.line_count = topology.line_count
        self.line_length = topology.line_length
        self.grid = np.zeros((self.line_count, self.line_length), dtype=np.int64)

    def reset(self) -> None:
        self.grid.fill(0)

    def _index(self, coord: Coordinate) -> Tuple[int, int]:
        return self.topology.line_of(coord), self.topology.slot_of(coord)

    def within_bounds(self, coord: Coordinate) -> bool:
        return self.topology.within_bounds(coord)

    def occupied(self, coord: Coordinate) -> bool:
        if not self.topology.on_board(coord):
            return False
        return bool(self.grid[self._index(coord)] != 0)

    def collides(self, cells: Iterable[Coordinate]) -> bool:
        for coord in cells:
            if not self.within_bounds(coord) or self.occupied(coord):
                return True
        return False

    def lock(self, coord: Coordinate, cell_id: int) -> None:
        if cell_id <= 0:
            raise InvariantError(f"cell id must be positive, got {cell_id}")
        if not self.topology.on_board(coord):
            raise InvariantError(f"cannot lock cell {cell_id} outside the board at {coord}")
        if self.occupied(coord):
            raise InvariantError(f"cell {coord} is already occupied")
        if np.any(self.grid == cell_id):
            raise InvariantError(f"cell id {cell_id} is already on the board")
        self.grid[self._index(coord)] = cell_id

    def find_full_lines(self) -> List[int]:
        """Full lines ordered from the sink edge toward the source edge."""
        full = [int(i) for i in np.where(np.all(self.grid != 0, axis=1))[0]]
        if self.topology.gravity_sign > 0:
            full.reverse()
        return full

    def _positions(self) -> Dict[int, Tuple[int, int]]:
        return {int(self.grid[line, slot]): (int(line), int(slot)) for line, slot in np.argwhere(self.grid != 0)}

    def collapse(self, lines: Sequence[int]) -> ClearResult:
        """Remove `lines` and shift everything on their source side toward the sink.

        Removing several lines at once leaves the same board as clearing them
        one after another, so empty lines are simply inserted at the source edge.
        """
        lines = sorted(set(int(line) for line in lines))
        if not lines:
            return ClearResult()
        before = self._positions()
        removed = tuple(int(cid) for cid in self.grid[lines].ravel() if cid != 0)
        kept = np.delete(self.grid, lines, axis=0)
        fresh = np.zeros((len(lines), self.line_length), dtype=self.grid.dtype)
        if self.topology.gravity_sign > 0:
            self.grid = np.vstack((fresh, kept))
        else:
            self.grid = np.vstack((kept, fresh))
        if self.grid.shape[0] != self.line_count:
            raise InvariantError(f"collapse changed the line count to {self.grid.shape[0]}")
        moved = {
            cid: self.topology.coord_for(*pos)
            for cid, pos in self._positions().items()
            if before[cid] != pos
        }
        ordered = tuple(sorted(lines, reverse=self.topology.gravity_sign > 0))
        return ClearResult(lines=ordered, removed_ids=removed, moved=moved)

    def clear_full_lines(self) -> ClearResult:
        return self.collapse(self.find_full_lines())

    def cell_ids(self) -> List[int]:
        return [int(cid) for cid in self.grid[self.grid != 0]]

    def coords_of(self, ids: Iterable[int]) -> List[Coordinate]:
        positions = self._positions()
        return [self.topology.coord_for(*positions[cid]) for cid in ids]

    def line_fill(self, line: int) -> int:
        return int(np.count_nonzero(self.grid[line]))

    def remove_all(self) -> List[int]:
        ids = self.cell_ids()
        self.reset()
        return ids

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
