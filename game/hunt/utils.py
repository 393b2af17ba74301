"""
Utility functions for game mechanics
"""

from __future__ import annotations
import math
import random
from typing import Tuple, Optional
import numpy as np

from .constants import (
    GAME_WIDTH, GAME_HEIGHT, KILL_BOUNTY, AMMO_BOUNTY,
    RANK_THRESHOLDS, DEFAULT_RANK,
)


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def aspect_distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Distance in the playfield with the vertical delta stretched to screen aspect"""
    dx = x1 - x2
    dy = (y1 - y2) * (GAME_WIDTH / GAME_HEIGHT)
    return math.hypot(dx, dy)


def joystick_vector(dx: float, dy: float, max_radius: float) -> Tuple[float, float]:
    """Map a raw drag offset to a joystick vector inside the unit disc"""
    dist = math.hypot(dx, dy)
    if dist > max_radius:
        ratio = max_radius / dist
        dx, dy = dx * ratio, dy * ratio
    return dx / max_radius, dy / max_radius


def round_bonus(kills: int, total_ammo: int, shots: int) -> int:
    """Bounty earned when a round is cleared"""
    return kills * KILL_BOUNTY + (total_ammo - shots) * AMMO_BOUNTY


def accuracy_percent(kills: int, shots: int) -> int:
    # Halves round up
    if shots <= 0:
        return 0
    return int(math.floor(kills * 100.0 / shots + 0.5))


def rank_for(accuracy: int) -> str:
    for threshold, name in RANK_THRESHOLDS:
        if accuracy > threshold:
            return name
    return DEFAULT_RANK


def seed_everything(py_seed: Optional[int]):
    """Seed all random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)
