"""Gymnasium environments for topoblocks."""

from __future__ import annotations

from gymnasium.envs.registration import register

from topoblocks.game import Mode


ENV_IDS = {
    Mode.CLASSIC: "FallingBlocks-Classic-v0",
    Mode.TRIO: "FallingBlocks-Trio-v0",
    Mode.PENTO: "FallingBlocks-Pento-v0",
    Mode.CIRCULAR: "FallingBlocks-Circular-v0",
    Mode.GRAVITY_FLIP: "FallingBlocks-GravityFlip-v0",
    Mode.MIRROR: "FallingBlocks-Mirror-v0",
}

# One registration per mode, all backed by the same env class
for _mode, _env_id in ENV_IDS.items():
    register(
        id=_env_id,
        entry_point="topoblocks.env.falling_block_env:FallingBlockEnv",
        kwargs={"mode": _mode.value},
    )

__all__ = ["ENV_IDS"]
