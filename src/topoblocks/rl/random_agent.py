from __future__ import annotations

import argparse

import gymnasium as gym

from topoblocks.env import ENV_IDS
from topoblocks.game import Mode


def run_random(mode: Mode | str = Mode.CLASSIC, steps: int = 2000, seed: int | None = None) -> float:
    env = gym.make(ENV_IDS[Mode(mode)])
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    episodes = 0
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            episodes += 1
            print(f"episode {episodes}: score={info['score']} level={info['level']} lines={info['lines']}")
            obs, info = env.reset()
    env.close()
    print(f"Random agent total reward: {total_reward:.2f}")
    return total_reward


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--mode", choices=[m.value for m in Mode], default=Mode.CLASSIC.value)
    p.add_argument("--steps", type=int, default=2000)
    p.add_argument("--seed", type=int, default=None)
    return p


if __name__ == "__main__":  # pragma: no cover
    args = build_parser().parse_args()
    run_random(args.mode, args.steps, args.seed)
