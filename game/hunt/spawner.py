"""
Probabilistic bird spawner
"""

from __future__ import annotations

import random
from typing import Optional, Sequence

from .constants import (
    SPAWN_CHANCE, MAX_ON_SCREEN, SPAWN_LEFT_X, SPAWN_RIGHT_X,
    SPAWN_Y_RANGE, SPAWN_SPEED_RANGE, SPAWN_VY_RANGE, FAST_BIRD_CHANCE,
)
from .entities import Bird, BirdType, RoundCounters
from .levels import LevelConfig


def live_count(birds: Sequence[Bird]) -> int:
    return sum(1 for b in birds if not b.is_dead)


def can_spawn(counters: RoundCounters, birds: Sequence[Bird], config: LevelConfig) -> bool:
    """Quota not yet fully spawned and room left on screen"""
    return counters.birds_spawned < config.total_birds and live_count(birds) < MAX_ON_SCREEN


def spawn_bird(bird_id: int, config: LevelConfig, rng: random.Random) -> Bird:
    # Enter from one of the two side edges, flying inward
    y = rng.uniform(*SPAWN_Y_RANGE)
    x = SPAWN_LEFT_X if rng.random() > 0.5 else SPAWN_RIGHT_X
    direction = 1.0 if x < 0 else -1.0

    speed = rng.uniform(*SPAWN_SPEED_RANGE) * config.speed_multiplier
    vy = rng.uniform(*SPAWN_VY_RANGE) * config.speed_multiplier

    kind = BirdType.FAST if rng.random() < FAST_BIRD_CHANCE else BirdType.NORMAL

    return Bird(id=bird_id, x=x, y=y, vx=speed * direction, vy=vy, kind=kind)


def try_spawn(
    counters: RoundCounters,
    birds: Sequence[Bird],
    config: LevelConfig,
    next_id: int,
    rng: random.Random,
) -> Optional[Bird]:
    """
    Roll for a spawn this frame.

    Spawning is a per-frame coin flip rather than a timer, so the wait for
    the next bird is geometrically distributed.
    """
    if not can_spawn(counters, birds, config):
        return None
    if rng.random() >= SPAWN_CHANCE:
        return None
    return spawn_bird(next_id, config, rng)
