"""
Per-frame simulation step: reticle movement, bird flight, horizon bounce, escapes
"""

from __future__ import annotations

from dataclasses import replace
from typing import List, Sequence, Tuple

from .constants import (
    CROSSHAIR_SPEED, DIAGONAL_FACTOR, HORIZON_Y, ESCAPE_MIN_X, ESCAPE_MAX_X,
)
from .entities import Bird, FrameInput
from .levels import LevelConfig
from .utils import clamp

Reticle = Tuple[float, float]


def combine_input(frame_input: FrameInput) -> Tuple[float, float]:
    """Joystick vector with held keys overriding each axis"""
    move_x, move_y = frame_input.joystick

    if frame_input.up:
        move_y = -1.0
    if frame_input.down:
        move_y = 1.0
    if frame_input.left:
        move_x = -1.0
    if frame_input.right:
        move_x = 1.0

    # Equalize diagonal and axis-aligned speed
    if abs(move_x) == 1 and abs(move_y) == 1:
        move_x *= DIAGONAL_FACTOR
        move_y *= DIAGONAL_FACTOR

    return move_x, move_y


def move_reticle(reticle: Reticle, frame_input: FrameInput) -> Reticle:
    move_x, move_y = combine_input(frame_input)
    x = clamp(reticle[0] + move_x * CROSSHAIR_SPEED, 0.0, 100.0)
    y = clamp(reticle[1] + move_y * CROSSHAIR_SPEED, 0.0, 100.0)
    return x, y


def fly(bird: Bird) -> Bird:
    """Move one bird by its velocity, bouncing between the sky top and the horizon"""
    x = bird.x + bird.vx
    y = bird.y + bird.vy
    vy = bird.vy

    if y > HORIZON_Y:
        y = HORIZON_Y
        if vy > 0:
            vy = -vy
    if y < 0:
        y = 0.0
        if vy < 0:
            vy = -vy

    return replace(bird, x=x, y=y, vy=vy)


def is_out_of_bounds(bird: Bird) -> bool:
    return bird.x < ESCAPE_MIN_X or bird.x > ESCAPE_MAX_X


def advance_birds(birds: Sequence[Bird]) -> Tuple[List[Bird], int]:
    """
    Advance all birds one frame.

    Dead birds are dropped here: they stay visible for the frame in which
    they were shot and are never moved or counted again. A bird that
    crosses the side bounds is removed on the same frame and counted as
    an escape.
    """
    next_birds: List[Bird] = []
    escapes = 0

    for b in birds:
        if b.is_dead:
            continue
        moved = fly(b)
        if is_out_of_bounds(moved):
            escapes += 1
        else:
            next_birds.append(moved)

    return next_birds, escapes


def advance(
    birds: Sequence[Bird],
    reticle: Reticle,
    frame_input: FrameInput,
    config: LevelConfig,
) -> Tuple[List[Bird], Reticle, int]:
    """One deterministic simulation step (spawning is handled separately)"""
    # Level speed is already baked into each bird's velocity at spawn time
    next_reticle = move_reticle(reticle, frame_input)
    next_birds, escapes = advance_birds(birds)
    return next_birds, next_reticle, escapes
