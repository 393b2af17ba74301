"""
Game entity dataclasses
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Tuple


class GameState(str, Enum):
    """Session/round state, owned by the round state machine"""
    SPLASH = "SPLASH"
    HOME = "HOME"
    PLAYING = "PLAYING"
    PAUSED = "PAUSED"
    ROUND_WIN = "ROUND_WIN"
    LEVEL_WIN = "LEVEL_WIN"
    ROUND_LOSE = "ROUND_LOSE"
    SESSION_SUMMARY = "SESSION_SUMMARY"


class BirdType(str, Enum):
    NORMAL = "normal"
    FAST = "fast"
    ZIGZAG = "zigzag"  # reserved, never spawned


class LoseReason(str, Enum):
    ESCAPED = "escaped"
    OUT_OF_AMMO = "out of ammo"


@dataclass(frozen=True)
class Bird:
    """Target entity flying across the sky"""
    id: int
    x: float
    y: float
    vx: float
    vy: float
    is_dead: bool = False
    kind: BirdType = BirdType.NORMAL
    scale: float = 1.0  # visual only

    @property
    def facing(self) -> int:
        return 1 if self.vx >= 0 else -1

    def killed(self) -> "Bird":
        return replace(self, is_dead=True)


@dataclass(frozen=True)
class RoundCounters:
    """Per-round tally, replaced on every change"""
    birds_killed: int = 0
    birds_escaped: int = 0
    birds_spawned: int = 0
    shots_fired: int = 0


@dataclass(frozen=True)
class LevelStats:
    """Running totals across the rounds of the current level"""
    killed: int = 0
    shots: int = 0
    total_birds: int = 0

    def add(self, counters: RoundCounters, total_birds: int) -> "LevelStats":
        return LevelStats(
            killed=self.killed + counters.birds_killed,
            shots=self.shots + counters.shots_fired,
            total_birds=self.total_birds + total_birds,
        )


@dataclass(frozen=True)
class FrameInput:
    """Input sample for one frame: held direction keys + joystick vector"""
    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False
    joystick: Tuple[float, float] = (0.0, 0.0)
