"""
Hit resolution for a single trigger pull
"""

from __future__ import annotations

from dataclasses import replace
from typing import List, Sequence, Tuple

from .constants import HITBOX_RADIUS, HIT_MARKER_DURATION
from .entities import Bird, GameState
from .state import HuntState
from .utils import aspect_distance


def resolve_hits(birds: Sequence[Bird], reticle: Tuple[float, float]) -> Tuple[List[Bird], bool]:
    """
    Mark every live bird under the reticle as dead.

    Distances are aspect-corrected so the round hitbox on a wide screen is
    round on the playfield too. All overlapping birds die, not just the
    nearest one.
    """
    hit = False
    updated: List[Bird] = []
    rx, ry = reticle

    for b in birds:
        if not b.is_dead and aspect_distance(b.x, b.y, rx, ry) < HITBOX_RADIUS:
            updated.append(b.killed())
            hit = True
        else:
            updated.append(b)

    return updated, hit


def can_fire(state: HuntState) -> bool:
    return (
        state.state == GameState.PLAYING
        and state.counters.shots_fired < state.config.total_ammo
    )


def fire(state: HuntState) -> Tuple[HuntState, bool]:
    """
    Pull the trigger.

    Misfires (not playing, or no ammo left) leave the state untouched.
    A valid shot always spends ammo; a shot that downs any number of
    birds counts as exactly one kill.
    """
    if not can_fire(state):
        return state, False

    counters = replace(state.counters, shots_fired=state.counters.shots_fired + 1)
    birds, hit = resolve_hits(state.birds, state.reticle)

    if not hit:
        return replace(state, counters=counters), False

    counters = replace(counters, birds_killed=counters.birds_killed + 1)
    return replace(
        state,
        counters=counters,
        birds=tuple(birds),
        hit_marker=HIT_MARKER_DURATION,
    ), True
