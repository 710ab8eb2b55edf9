"""Gymnasium environments for blockfall."""

from __future__ import annotations

from gymnasium.envs.registration import register

register(
    id="Blockfall-v0",
    entry_point="blockfall.env.blockfall_env:BlockfallEnv",
)

# Time-attack variant: ten agent steps per second of game clock
register(
    id="BlockfallTimeAttack-v0",
    entry_point="blockfall.env.blockfall_env:BlockfallEnv",
    kwargs={"mode": "time-attack", "steps_per_second": 10},
)

__all__ = ["Blockfall-v0", "BlockfallTimeAttack-v0"]
