"""
Immutable snapshot of a hunting session
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .constants import CROSSHAIR_START, WIN_COUNTDOWN
from .entities import Bird, GameState, LevelStats, LoseReason, RoundCounters
from .levels import LevelConfig, get_level_config


@dataclass(frozen=True)
class HuntState:
    """
    Everything the core owns, as one frozen value.

    Every command and every frame produces a new HuntState; presentation
    code only ever reads it.
    """
    state: GameState = GameState.SPLASH
    level: int = 1
    round: int = 1
    config: LevelConfig = field(default_factory=lambda: get_level_config(1, 1))
    counters: RoundCounters = field(default_factory=RoundCounters)
    birds: Tuple[Bird, ...] = ()
    reticle: Tuple[float, float] = CROSSHAIR_START
    level_stats: LevelStats = field(default_factory=LevelStats)
    bounty: int = 0
    lose_reason: Optional[LoseReason] = None
    next_bird_id: int = 1

    # Timers (seconds)
    splash_elapsed: float = 0.0
    win_elapsed: float = 0.0
    hit_marker: float = 0.0
    toast: Optional[str] = None
    toast_remaining: float = 0.0

    pause_confirm_quit: bool = False

    @property
    def ammo_left(self) -> int:
        return self.config.total_ammo - self.counters.shots_fired

    @property
    def live_birds(self) -> Tuple[Bird, ...]:
        return tuple(b for b in self.birds if not b.is_dead)

    @property
    def show_hit_marker(self) -> bool:
        return self.hit_marker > 0

    @property
    def win_countdown(self) -> int:
        """3, 2, 1, 0 over the first seconds of ROUND_WIN"""
        return max(0, WIN_COUNTDOWN - int(math.floor(self.win_elapsed)))
