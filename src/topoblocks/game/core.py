from __future__ import annotations

import itertools
import logging
import random
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from .board import Board, ClearResult, InvariantError
from .events import CellAttributes, GameListener
from .rules import ScoringRules, apply_clear, rules_for
from .shapes import Offsets, Shape, negate_x, rotate_offsets, shapes_for
from .state import GameState, Mode, Phase
from .topology import (
    Coordinate,
    LinearTopology,
    MirrorDualTopology,
    RingTopology,
    Topology,
)


logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE_CW = 2
    ROTATE_CCW = 3
    SOFT_DROP = 4
    HARD_DROP = 5
    NONE = 6


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    ring_count: int = 12
    slots_per_ring: int = 16
    random_seed: Optional[int] = None


def topology_for(mode: Mode | str, config: Optional[GameConfig] = None) -> Topology:
    mode = Mode(mode)
    config = config or GameConfig()
    if mode is Mode.CIRCULAR:
        return RingTopology(config.ring_count, config.slots_per_ring)
    if mode is Mode.MIRROR:
        return MirrorDualTopology(config.width, config.height)
    if mode is Mode.GRAVITY_FLIP:
        return LinearTopology(config.width, config.height, gravity_sign=1)
    return LinearTopology(config.width, config.height, gravity_sign=-1)


@dataclass(frozen=True)
class ActivePiece:
    shape: Shape
    anchor: Coordinate
    offsets: Offsets
    cell_ids: Tuple[int, ...]


class BlockGame:
    """Piece controller for single-piece modes (linear and ring boards).

    Drives spawn -> move/rotate -> lock -> clear -> respawn. Rejected commands
    return False and leave the game untouched; once the game is over every
    command is a no-op.
    """

    _paired = False

    def __init__(
        self,
        mode: Mode | str = Mode.CLASSIC,
        config: Optional[GameConfig] = None,
        listener: Optional[GameListener] = None,
        shapes: Optional[Sequence[Shape]] = None,
        rules: Optional[ScoringRules] = None,
    ) -> None:
        self.mode = Mode(mode)
        if self.mode is Mode.MIRROR and not self._paired:
            raise ValueError("mirror mode needs MirrorGame; use create_game()")
        self.config = config or GameConfig()
        self.rules = rules or rules_for(self.mode)
        self.rng = random.Random(self.config.random_seed)
        self.listener = listener or GameListener()
        self.shapes: Tuple[Shape, ...] = tuple(shapes) if shapes is not None else shapes_for(self.mode)
        self.topology = topology_for(self.mode, self.config)
        self.board = Board(self.topology)
        self.state = GameState(mode=self.mode)
        self.phase = Phase.SPAWNING
        self.active_piece: Optional[ActivePiece] = None
        self.drop_interval = self.rules.base_interval_ms
        self.drop_counter = 0.0
        self.last_clear = ClearResult()
        self._last_time: Optional[float] = None
        self._attributes: Dict[int, CellAttributes] = {}
        self._ids = itertools.count(1)
        self._destroyed = False
        self._spawn_piece()

    # ---------- Queries ----------
    @property
    def game_over(self) -> bool:
        return self.state.game_over

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    @property
    def accepting(self) -> bool:
        return not self.state.game_over and not self._destroyed and self.active_piece is not None

    def get_state(self) -> GameState:
        return self.state.snapshot()

    def attributes_of(self, cell_id: int) -> CellAttributes:
        return self._attributes[cell_id]

    def piece_cells(self) -> List[Coordinate]:
        if self.active_piece is None:
            return []
        return self._piece_cells(self.active_piece.anchor, self.active_piece.offsets)

    def occupancy_grid(self) -> np.ndarray:
        """(line, slot) array: locked cells hold +kind, the falling piece -kind."""
        grid = np.zeros((self.topology.line_count, self.topology.line_length), dtype=np.int8)
        for line, slot in np.argwhere(self.board.grid != 0):
            grid[line, slot] = self._attributes[int(self.board.grid[line, slot])].kind
        if self.active_piece is not None:
            for coord in self.piece_cells():
                if self.topology.on_board(coord):
                    grid[self.topology.line_of(coord), self.topology.slot_of(coord)] = -self.active_piece.shape.kind
        return grid

    # ---------- Geometry hooks ----------
    def _cells_per_piece(self, shape: Shape) -> int:
        return shape.size

    def _piece_cells(self, anchor: Coordinate, offsets: Offsets) -> List[Coordinate]:
        return [self.topology.cell_key(anchor, offset) for offset in offsets]

    def _collides(self, anchor: Coordinate, offsets: Offsets) -> bool:
        cells = self._piece_cells(anchor, offsets)
        # Wrapped ring slots or the two mirror halves can land on the same cell.
        if len(set(cells)) != len(cells):
            return True
        return self.board.collides(cells)

    def _attribute_groups(self, piece: ActivePiece, locked: bool) -> List[Tuple[Tuple[int, ...], CellAttributes]]:
        attrs = CellAttributes(piece.shape.name, piece.shape.color, piece.shape.kind, locked=locked)
        return [(piece.cell_ids, attrs)]

    def _check_invariants(self) -> None:
        piece = self.active_piece
        if piece is None:
            return
        cells = self._piece_cells(piece.anchor, piece.offsets)
        if len(cells) != len(piece.cell_ids):
            raise InvariantError("active piece cells and ids are out of step")
        if len(set(cells)) != len(cells):
            raise InvariantError(f"active piece overlaps itself at {cells}")
        if self.board.collides(cells):
            raise InvariantError(f"active piece overlaps the board at {cells}")

    # ---------- Lifecycle ----------
    def _announce(self, piece: ActivePiece, locked: bool, exclude: Sequence[int] = ()) -> None:
        for ids, attrs in self._attribute_groups(piece, locked):
            ids = tuple(cid for cid in ids if cid not in exclude)
            if not ids:
                continue
            for cid in ids:
                self._attributes[cid] = attrs
            self.listener.notify_cells_added(ids, attrs)

    def _spawn_piece(self) -> None:
        if self.state.game_over or self._destroyed:
            return
        self.phase = Phase.SPAWNING
        shape = self.rng.choice(self.shapes)
        anchor = self.topology.entry_anchor(self.rng)
        if self._collides(anchor, shape.offsets):
            self.active_piece = None
            self.state.game_over = True
            self.phase = Phase.GAME_OVER
            logger.info(
                "Game over (%s): score=%d level=%d lines=%d",
                self.mode.value, self.state.score, self.state.level, self.state.lines,
            )
            return
        ids = tuple(next(self._ids) for _ in range(self._cells_per_piece(shape)))
        self.active_piece = ActivePiece(shape=shape, anchor=anchor, offsets=shape.offsets, cell_ids=ids)
        self.phase = Phase.ACTIVE
        self._announce(self.active_piece, locked=False)
        self._check_invariants()

    def _try_place(self, anchor: Coordinate, offsets: Offsets) -> bool:
        assert self.active_piece is not None
        if self._collides(anchor, offsets):
            return False
        self.active_piece = replace(self.active_piece, anchor=anchor, offsets=offsets)
        self.listener.notify_cells_moved(self.active_piece.cell_ids, self._piece_cells(anchor, offsets))
        self._check_invariants()
        return True

    def _shift(self, direction: int) -> bool:
        if not self.accepting:
            return False
        piece = self.active_piece
        return self._try_place(self.topology.shift(piece.anchor, direction), piece.offsets)

    def _rotate(self, clockwise: bool) -> bool:
        if not self.accepting:
            return False
        if not self.topology.rotates_pieces:
            return self._shift(1 if clockwise else -1)
        piece = self.active_piece
        return self._try_place(piece.anchor, rotate_offsets(piece.offsets, clockwise))

    def _gravity_step(self) -> bool:
        piece = self.active_piece
        return self._try_place(self.topology.advance(piece.anchor), piece.offsets)

    def _lock_piece(self) -> None:
        piece = self.active_piece
        assert piece is not None
        self.phase = Phase.LOCKING
        discarded: List[int] = []
        for coord, cid in zip(self._piece_cells(piece.anchor, piece.offsets), piece.cell_ids):
            if self.topology.on_board(coord):
                self.board.lock(coord, cid)
            else:
                # Past the source edge; nothing stores it.
                discarded.append(cid)
        self.active_piece = None
        if discarded:
            for cid in discarded:
                self._attributes.pop(cid, None)
            self.listener.notify_cells_removed(tuple(discarded))
        self._announce(piece, locked=True, exclude=discarded)
        logger.debug("Locked %s at %s", piece.shape.name, piece.anchor)

        self.phase = Phase.CLEARING
        self.last_clear = self._clear_lines()
        self._spawn_piece()

    def _clear_lines(self) -> ClearResult:
        result = self.board.clear_full_lines()
        if result.count == 0:
            return result
        for cid in result.removed_ids:
            self._attributes.pop(cid, None)
        self.listener.notify_cells_removed(result.removed_ids)
        if result.moved:
            ids = tuple(result.moved)
            self.listener.notify_cells_moved(ids, [result.moved[cid] for cid in ids])
        score, level, lines, interval = apply_clear(self.state, result.count, self.rules)
        self.state.score = score
        self.state.level = level
        self.state.lines = lines
        self.drop_interval = interval
        logger.debug("Cleared %d line(s) %s; score=%d level=%d", result.count, result.lines, score, level)
        return result

    # ---------- Commands ----------
    def move_left(self) -> bool:
        return self._shift(-1)

    def move_right(self) -> bool:
        return self._shift(1)

    def rotate(self) -> bool:
        return self._rotate(clockwise=True)

    def rotate_counter_clockwise(self) -> bool:
        return self._rotate(clockwise=False)

    def move_down(self) -> bool:
        """One gravity step; locks the piece when blocked. True if the piece moved."""
        if not self.accepting:
            return False
        if self._gravity_step():
            return True
        self._lock_piece()
        return False

    def hard_drop(self) -> int:
        """Drop until blocked and lock. Returns the number of steps fallen."""
        if not self.accepting:
            return 0
        steps = 0
        while self._gravity_step():
            steps += 1
        self._lock_piece()
        return steps

    def update(self, time_ms: float) -> None:
        """Frame tick: apply a gravity step once the drop interval has elapsed."""
        if not self.accepting:
            return
        if self._last_time is None:
            self._last_time = time_ms
            return
        delta = time_ms - self._last_time
        self._last_time = time_ms
        self.drop_counter += delta
        if self.drop_counter > self.drop_interval:
            self.move_down()
            self.drop_counter = 0.0

    def step(self, action: Action) -> bool:
        if not self.accepting:
            return False
        action = Action(action)
        if action == Action.LEFT:
            return self.move_left()
        elif action == Action.RIGHT:
            return self.move_right()
        elif action == Action.ROTATE_CW:
            return self.rotate()
        elif action == Action.ROTATE_CCW:
            return self.rotate_counter_clockwise()
        elif action == Action.SOFT_DROP:
            self.move_down()
            return True
        elif action == Action.HARD_DROP:
            self.hard_drop()
            return True
        return True

    def destroy(self) -> None:
        if self._destroyed:
            return
        ids: List[int] = list(self.active_piece.cell_ids) if self.active_piece is not None else []
        ids.extend(self.board.remove_all())
        self.active_piece = None
        self._attributes.clear()
        self._destroyed = True
        self.phase = Phase.DESTROYED
        if ids:
            self.listener.notify_cells_removed(tuple(ids))
        logger.debug("Destroyed %s game", self.mode.value)


class MirrorGame(BlockGame):
    """Two pieces reflected about the vertical centre of one shared grid.

    The left piece is stored; the right piece is derived from it on demand, so
    both always move, rotate and spawn together.
    """

    _paired = True
    topology: MirrorDualTopology

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        listener: Optional[GameListener] = None,
        shapes: Optional[Sequence[Shape]] = None,
        rules: Optional[ScoringRules] = None,
    ) -> None:
        super().__init__(Mode.MIRROR, config=config, listener=listener, shapes=shapes, rules=rules)

    @property
    def left_piece(self) -> Optional[ActivePiece]:
        piece = self.active_piece
        if piece is None:
            return None
        return replace(piece, cell_ids=piece.cell_ids[: len(piece.offsets)])

    @property
    def right_piece(self) -> Optional[ActivePiece]:
        piece = self.active_piece
        if piece is None:
            return None
        ax, ay = piece.anchor
        return ActivePiece(
            shape=piece.shape,
            anchor=(self.topology.mirror_x(ax), ay),
            offsets=negate_x(piece.offsets),
            cell_ids=piece.cell_ids[len(piece.offsets):],
        )

    def _cells_per_piece(self, shape: Shape) -> int:
        return 2 * shape.size

    def _piece_cells(self, anchor: Coordinate, offsets: Offsets) -> List[Coordinate]:
        left = [self.topology.cell_key(anchor, offset) for offset in offsets]
        mirrored_anchor = (self.topology.mirror_x(anchor[0]), anchor[1])
        right = [self.topology.cell_key(mirrored_anchor, offset) for offset in negate_x(offsets)]
        return left + right

    def _attribute_groups(self, piece: ActivePiece, locked: bool) -> List[Tuple[Tuple[int, ...], CellAttributes]]:
        n = len(piece.offsets)
        shape = piece.shape
        return [
            (piece.cell_ids[:n], CellAttributes(shape.name, shape.color, shape.kind, locked=locked)),
            (piece.cell_ids[n:], CellAttributes(shape.name, shape.color, shape.kind, locked=locked, mirrored=True)),
        ]

    def _check_invariants(self) -> None:
        super()._check_invariants()
        left, right = self.left_piece, self.right_piece
        if left is None or right is None:
            return
        if right.anchor[0] != self.topology.mirror_x(left.anchor[0]) or right.anchor[1] != left.anchor[1]:
            raise InvariantError(f"mirror anchors diverged: {left.anchor} vs {right.anchor}")
        if right.offsets != negate_x(left.offsets):
            raise InvariantError("mirror offsets diverged")
        cells = self.piece_cells()
        n = len(left.offsets)
        for l_cell, r_cell in zip(cells[:n], cells[n:]):
            if r_cell != self.topology.mirror(l_cell):
                raise InvariantError(f"mirror cells diverged: {l_cell} vs {r_cell}")


def create_game(
    mode: Mode | str = Mode.CLASSIC,
    config: Optional[GameConfig] = None,
    listener: Optional[GameListener] = None,
    shapes: Optional[Sequence[Shape]] = None,
) -> BlockGame:
    if Mode(mode) is Mode.MIRROR:
        return MirrorGame(config=config, listener=listener, shapes=shapes)
    return BlockGame(mode, config=config, listener=listener, shapes=shapes)
