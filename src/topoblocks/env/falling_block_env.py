from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from topoblocks.game import Action, BlockGame, GameConfig, Mode, create_game, shapes_for


class FallingBlockEnv(gym.Env):
    """Falling-block game for any mode with a small discrete action space.

    Actions (7 total), see :class:`topoblocks.game.Action`:
      0: Move Left   1: Move Right   2: Rotate CW   3: Rotate CCW
      4: Soft Drop   5: Hard Drop    6: No-op

    Every step applies the action and then advances a virtual clock by
    ``frame_ms`` through ``BlockGame.update``, so gravity follows the same
    drop-interval curve a human player sees.
    """

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 30}

    def __init__(
        self,
        mode: Mode | str = Mode.CLASSIC,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        frame_ms: float = 100.0,
        step_penalty: float = 0.0,
        terminal_penalty: float = 0.0,
        reward_scale: float = 0.01,
        max_episode_steps: int = 10000,
    ) -> None:
        super().__init__()
        self.mode = Mode(mode)
        self.config = config or GameConfig()
        self.render_mode = render_mode
        self.frame_ms = float(frame_ms)
        self.step_penalty = float(step_penalty)
        self.terminal_penalty = float(terminal_penalty)
        self.reward_scale = float(reward_scale)
        self.max_episode_steps = int(max_episode_steps)

        self.game: BlockGame = create_game(self.mode, self.config)
        self._clock = 0.0
        self._steps = 0
        self._renderer = None

        n_kinds = len(shapes_for(self.mode))
        lines = self.game.topology.line_count
        slots = self.game.topology.line_length
        # Observation: locked cells +kind, falling cells -kind, current piece kind (0 when none)
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=-n_kinds, high=n_kinds, shape=(lines, slots), dtype=np.int8),
                "piece": spaces.Discrete(n_kinds + 1),
            }
        )
        self.action_space = spaces.Discrete(len(Action))

    def _get_obs(self) -> Dict[str, Any]:
        piece = self.game.active_piece
        return {
            "board": self.game.occupancy_grid(),
            "piece": int(piece.shape.kind) if piece is not None else 0,
        }

    def _get_info(self) -> Dict[str, Any]:
        state = self.game.get_state()
        return {
            "score": state.score,
            "level": state.level,
            "lines": state.lines,
            "steps": self._steps,
            "phase": self.game.phase.value,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.destroy()
        game_seed = int(self.np_random.integers(0, 2**31 - 1))
        self.game = create_game(self.mode, replace(self.config, random_seed=game_seed))
        self._clock = 0.0
        self._steps = 0
        self.game.update(self._clock)
        return self._get_obs(), self._get_info()

    def step(self, action):
        score_before = self.game.state.score
        accepted = self.game.step(Action(int(action)))
        self._clock += self.frame_ms
        self.game.update(self._clock)
        self._steps += 1

        terminated = bool(self.game.game_over)
        truncated = self._steps >= self.max_episode_steps and not terminated

        reward_components: Dict[str, float] = {
            "score": self.reward_scale * float(self.game.state.score - score_before),
            "step": self.step_penalty,
        }
        if terminated:
            reward_components["terminal"] = self.terminal_penalty
        reward = float(sum(reward_components.values()))

        info = self._get_info()
        info["accepted"] = accepted
        info["reward_components"] = reward_components
        info["lines_cleared"] = self.game.last_clear.count
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            grid = self.game.occupancy_grid()
            cell = 12
            h, w = grid.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for line in range(h):
                for slot in range(w):
                    v = int(grid[line, slot])
                    if v > 0:
                        color = (70, 200, 120)
                    elif v < 0:
                        color = (220, 200, 80)
                    else:
                        color = (30, 30, 36)
                    # Row 0 at the bottom of the image for downward boards.
                    row = h - 1 - line if self.game.topology.gravity_sign < 0 else line
                    img[row * cell : (row + 1) * cell, slot * cell : (slot + 1) * cell, :] = color
            return img
        if self.render_mode == "human":
            from topoblocks.visualization.renderer import Renderer
            import pygame

            if self._renderer is None:
                pygame.init()
                self._renderer = Renderer(cell_size=24)
                self._screen = pygame.display.set_mode(self._renderer.window_size(self.game))
            self._renderer.draw(self._screen, self.game)
            pygame.event.pump()
        return None

    def close(self) -> None:
        self.game.destroy()
        if self._renderer is not None:
            import pygame

            pygame.quit()
            self._renderer = None
