from __future__ import annotations

from typing import List, Tuple

import pytest

from topoblocks.game import CLASSIC_SHAPES, GameListener, Shape


O_SHAPE = next(s for s in CLASSIC_SHAPES if s.name == "O")
I_SHAPE = next(s for s in CLASSIC_SHAPES if s.name == "I")
DOT = Shape(name="dot", offsets=((0, 0),), color=0xFFFFFF, kind=1)


class RecordingListener(GameListener):
    def __init__(self) -> None:
        self.events: List[Tuple] = []

    def notify_cells_added(self, ids, attributes) -> None:
        self.events.append(("added", tuple(ids), attributes))

    def notify_cells_moved(self, ids, coords) -> None:
        self.events.append(("moved", tuple(ids), tuple(coords)))

    def notify_cells_removed(self, ids) -> None:
        self.events.append(("removed", tuple(ids)))

    def notify_session_started(self, mode) -> None:
        self.events.append(("started", mode))

    def notify_session_ended(self) -> None:
        self.events.append(("ended",))

    def of(self, kind: str) -> List[Tuple]:
        return [e for e in self.events if e[0] == kind]


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()
