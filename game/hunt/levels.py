"""
Level configuration: (level, round) -> tuned round parameters
"""

from __future__ import annotations

from dataclasses import dataclass

from .constants import MAX_LEVELS, ROUNDS_PER_LEVEL, SPAWN_RATE_MS


@dataclass(frozen=True)
class LevelConfig:
    """Parameters for a single round"""
    id: int
    total_birds: int
    total_ammo: int
    spawn_rate: int  # ms
    speed_multiplier: float


def clamp_level(level: int) -> int:
    return max(1, min(int(level), MAX_LEVELS))


def get_level_config(level: int, round: int) -> LevelConfig:
    """
    Pure and deterministic, so a retried round reproduces the same difficulty.

    Quota grows with the level tier:
      levels 1-3 -> 1 bird, 4-6 -> 2 birds, 7-10 -> 3 birds
    Ammo leaves a margin of two shots plus one more every fourth level.
    """
    safe_level = clamp_level(level)

    total_birds = 1
    if safe_level >= 4:
        total_birds = 2
    if safe_level >= 7:
        total_birds = 3

    total_ammo = total_birds + 2 + safe_level // 4
    speed_multiplier = 0.8 + safe_level * 0.12

    return LevelConfig(
        id=(safe_level - 1) * ROUNDS_PER_LEVEL + round,
        total_birds=total_birds,
        total_ammo=total_ammo,
        spawn_rate=SPAWN_RATE_MS,
        speed_multiplier=speed_multiplier,
    )
