"""
Read-only summaries for the end-of-round, end-of-level and end-of-session screens
"""

from __future__ import annotations

from typing import Any, Dict

from .constants import ROUNDS_PER_LEVEL
from .state import HuntState
from .utils import accuracy_percent, rank_for, round_bonus


def round_report(s: HuntState) -> Dict[str, Any]:
    c = s.counters
    return {
        "round": s.round,
        "accuracy": accuracy_percent(c.birds_killed, c.shots_fired),
        "bonus": round_bonus(c.birds_killed, s.config.total_ammo, c.shots_fired),
        "countdown": s.win_countdown,
    }


def level_report(s: HuntState) -> Dict[str, Any]:
    """Level totals including the round that was just cleared"""
    c = s.counters
    killed = s.level_stats.killed + c.birds_killed
    shots = s.level_stats.shots + c.shots_fired
    total_birds = s.level_stats.total_birds + s.config.total_birds
    accuracy = accuracy_percent(killed, shots)
    return {
        "level": s.level,
        "total_killed": killed,
        "total_shots": shots,
        "total_birds": total_birds,
        "accuracy": accuracy,
        "bounty": s.bounty,
        "rank": rank_for(accuracy),
    }


def lose_report(s: HuntState) -> Dict[str, Any]:
    c = s.counters
    return {
        "reason": s.lose_reason.value if s.lose_reason is not None else None,
        "birds_killed": c.birds_killed,
        "total_birds": s.config.total_birds,
        "shots_fired": c.shots_fired,
    }


def session_summary(s: HuntState) -> Dict[str, Any]:
    return {
        "level_reached": s.level,
        "rounds_cleared": (s.level - 1) * ROUNDS_PER_LEVEL + (s.round - 1),
        "bounty": s.bounty,
    }


def hud(s: HuntState) -> Dict[str, Any]:
    """Per-frame counters for the heads-up display"""
    return {
        "state": s.state.value,
        "level": s.level,
        "round": s.round,
        "rounds_per_level": ROUNDS_PER_LEVEL,
        "birds_killed": s.counters.birds_killed,
        "total_birds": s.config.total_birds,
        "shots_fired": s.counters.shots_fired,
        "total_ammo": s.config.total_ammo,
        "ammo_left": s.ammo_left,
        "reticle": s.reticle,
        "hit_marker": s.show_hit_marker,
        "toast": s.toast,
    }
