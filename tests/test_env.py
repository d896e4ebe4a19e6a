import gymnasium as gym
import numpy as np
import pytest

import topoblocks.env  # noqa: F401  (registers the environments)
from topoblocks.env import ENV_IDS
from topoblocks.env.falling_block_env import FallingBlockEnv
from topoblocks.game import Action, Mode


@pytest.mark.parametrize("env_id", sorted(ENV_IDS.values()))
def test_registered_envs_reset_inside_observation_space(env_id):
    env = gym.make(env_id)
    obs, info = env.reset(seed=0)
    assert env.observation_space.contains(obs)
    assert info["score"] == 0 and info["level"] == 1
    obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
    assert env.observation_space.contains(obs)
    assert isinstance(reward, float)
    env.close()


def test_hard_drops_end_classic_episode():
    env = FallingBlockEnv(Mode.CLASSIC)
    env.reset(seed=7)
    terminated = False
    for _ in range(500):
        _, _, terminated, truncated, info = env.step(int(Action.HARD_DROP))
        if terminated or truncated:
            break
    assert terminated
    assert info["phase"] == "game_over"
    env.close()


def test_reset_with_same_seed_is_reproducible():
    env = FallingBlockEnv(Mode.PENTO)
    first, _ = env.reset(seed=42)
    second, _ = env.reset(seed=42)
    assert np.array_equal(first["board"], second["board"])
    assert first["piece"] == second["piece"]
    env.close()


def test_truncates_at_step_limit():
    env = FallingBlockEnv(Mode.CIRCULAR, max_episode_steps=3)
    env.reset(seed=1)
    for _ in range(2):
        _, _, _, truncated, _ = env.step(int(Action.NONE))
        assert not truncated
    _, _, terminated, truncated, _ = env.step(int(Action.NONE))
    assert truncated and not terminated
    env.close()


def test_rgb_render_shape():
    env = FallingBlockEnv(Mode.GRAVITY_FLIP, render_mode="rgb_array")
    env.reset(seed=0)
    frame = env.render()
    assert frame.shape == (20 * 12, 10 * 12, 3)
    assert frame.dtype == np.uint8
    env.close()
