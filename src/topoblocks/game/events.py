from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .topology import Coordinate


@dataclass(frozen=True)
class CellAttributes:
    shape_name: str
    color: int
    kind: int
    locked: bool = False
    mirrored: bool = False


class GameListener:
    """Receives visual notifications keyed by logical cell id.

    Subclass and override what you need; every hook defaults to a no-op.
    ``notify_cells_added`` fires on spawn and again on lock for the same ids,
    so consumers should treat it as an upsert.
    """

    def notify_cells_added(self, ids: Sequence[int], attributes: CellAttributes) -> None:
        pass

    def notify_cells_moved(self, ids: Sequence[int], coords: Sequence[Coordinate]) -> None:
        pass

    def notify_cells_removed(self, ids: Sequence[int]) -> None:
        pass

    def notify_session_started(self, mode: str) -> None:
        pass

    def notify_session_ended(self) -> None:
        pass
