from __future__ import annotations

import logging
from typing import Optional

from .core import BlockGame, GameConfig, create_game
from .events import GameListener
from .state import GameState, Mode


logger = logging.getLogger(__name__)


class GameSession:
    """Owns at most one running game and handles switching between modes.

    Switching destroys the current game before the next one is built; nothing
    carries over between games.
    """

    def __init__(self, listener: Optional[GameListener] = None, config: Optional[GameConfig] = None) -> None:
        self.listener = listener or GameListener()
        self.config = config or GameConfig()
        self.game: Optional[BlockGame] = None
        self.mode: Optional[Mode] = None

    def start(self, mode: Mode | str = Mode.CLASSIC) -> BlockGame:
        mode = Mode(mode)
        self._end_current()
        self.mode = mode
        # Announce the session before the first piece spawns.
        self.listener.notify_session_started(mode.value)
        self.game = create_game(mode, config=self.config, listener=self.listener)
        logger.info("Session started in %s mode", mode.value)
        return self.game

    def switch_mode(self, mode: Mode | str) -> BlockGame:
        mode = Mode(mode)
        if self.game is not None and mode is self.mode:
            return self.game
        return self.start(mode)

    def restart(self) -> BlockGame:
        return self.start(self.mode or Mode.CLASSIC)

    def get_state(self) -> Optional[GameState]:
        return self.game.get_state() if self.game is not None else None

    def _end_current(self) -> None:
        if self.game is None:
            return
        self.game.destroy()
        self.game = None
        self.listener.notify_session_ended()
        logger.info("Session ended (%s mode)", self.mode.value if self.mode else "?")

    def destroy(self) -> None:
        self._end_current()
        self.mode = None
