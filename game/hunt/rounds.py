"""
Round state machine: pure transitions over HuntState
------------------------------------------------------

  SPLASH -> HOME -> PLAYING <-> PAUSED
  PLAYING -> ROUND_WIN -> (countdown) -> PLAYING (next round)
  PLAYING -> LEVEL_WIN -> (acknowledge) -> PLAYING (next level, round 1)
  PLAYING -> ROUND_LOSE -> PLAYING (retry) | SESSION_SUMMARY (give up)
  SESSION_SUMMARY -> HOME

Every function takes the current snapshot and returns the next one. A
command issued outside the state it applies to returns the snapshot
unchanged; nothing here raises.

Inside PLAYING a frame runs strictly in order:
  move reticle and birds (escapes counted) -> spawn roll -> outcome check
and the outcome check tests the win condition before either lose
condition.
"""

from __future__ import annotations

import random
from dataclasses import replace

from .combat import fire
from .constants import (
    CROSSHAIR_START, MAX_LEVELS, ROUNDS_PER_LEVEL, SPLASH_DURATION,
    TOAST_DURATION, WIN_COUNTDOWN, WIN_READY_DELAY,
)
from .entities import FrameInput, GameState, LevelStats, LoseReason, RoundCounters
from .levels import clamp_level, get_level_config
from .physics import advance
from .spawner import try_spawn
from .state import HuntState
from .utils import round_bonus

__all__ = [
    "initial_state", "start_round", "start_hunt", "pause", "resume",
    "request_quit", "cancel_quit", "quit_to_home", "cheat", "fire", "shoot",
    "evaluate_outcome", "advance_after_win", "acknowledge_level", "retry",
    "give_up", "return_home", "step", "show_toast", "decay_timers",
]


def initial_state() -> HuntState:
    return HuntState()


# ----------------------------
# Round setup
# ----------------------------

def start_round(state: HuntState, level: int, round: int) -> HuntState:
    """Enter PLAYING for (level, round) with fresh round counters"""
    level = clamp_level(level)
    round = max(1, min(int(round), ROUNDS_PER_LEVEL))
    level_stats = state.level_stats
    if round == 1:
        level_stats = LevelStats()

    return replace(
        state,
        state=GameState.PLAYING,
        level=level,
        round=round,
        config=get_level_config(level, round),
        counters=RoundCounters(),
        birds=(),
        reticle=CROSSHAIR_START,
        level_stats=level_stats,
        lose_reason=None,
        win_elapsed=0.0,
        hit_marker=0.0,
        toast=None,
        toast_remaining=0.0,
        pause_confirm_quit=False,
    )


def start_hunt(state: HuntState) -> HuntState:
    if state.state != GameState.HOME:
        return state
    return start_round(state, 1, 1)


def show_toast(state: HuntState, message: str) -> HuntState:
    return replace(state, toast=message, toast_remaining=TOAST_DURATION)


# ----------------------------
# Pause menu
# ----------------------------

def pause(state: HuntState) -> HuntState:
    if state.state != GameState.PLAYING:
        return state
    return replace(state, state=GameState.PAUSED, pause_confirm_quit=False)


def resume(state: HuntState) -> HuntState:
    if state.state != GameState.PAUSED:
        return state
    return replace(state, state=GameState.PLAYING, pause_confirm_quit=False)


def request_quit(state: HuntState) -> HuntState:
    if state.state != GameState.PAUSED:
        return state
    return replace(state, pause_confirm_quit=True)


def cancel_quit(state: HuntState) -> HuntState:
    if state.state != GameState.PAUSED:
        return state
    return replace(state, pause_confirm_quit=False)


def quit_to_home(state: HuntState) -> HuntState:
    if state.state != GameState.PAUSED:
        return state
    return _go_home(state)


def _go_home(state: HuntState) -> HuntState:
    # Home wipes everything the session earned
    return replace(
        state,
        state=GameState.HOME,
        bounty=0,
        level_stats=LevelStats(),
        birds=(),
        lose_reason=None,
        pause_confirm_quit=False,
    )


# ----------------------------
# Outcomes
# ----------------------------

def _win_state(state: HuntState) -> GameState:
    if state.round >= ROUNDS_PER_LEVEL:
        return GameState.LEVEL_WIN
    return GameState.ROUND_WIN


def evaluate_outcome(state: HuntState) -> HuntState:
    """Win before lose: a frame that fills the quota and lets a bird escape is a win"""
    if state.state != GameState.PLAYING:
        return state

    c = state.counters
    cfg = state.config

    if c.birds_killed >= cfg.total_birds:
        return replace(state, state=_win_state(state), win_elapsed=0.0)

    if c.birds_escaped > 0:
        return replace(state, state=GameState.ROUND_LOSE, lose_reason=LoseReason.ESCAPED, hit_marker=0.0)

    if c.shots_fired >= cfg.total_ammo and c.birds_killed < cfg.total_birds:
        return replace(state, state=GameState.ROUND_LOSE, lose_reason=LoseReason.OUT_OF_AMMO, hit_marker=0.0)

    return state


def cheat(state: HuntState) -> HuntState:
    """Debug shortcut: clear the round on the spot"""
    if state.state != GameState.PLAYING:
        return state

    counters = replace(
        state.counters,
        birds_killed=state.config.total_birds,
        birds_escaped=0,
    )
    state = replace(state, counters=counters, birds=())
    state = show_toast(state, "CHEAT: ROUND CLEARED")
    return replace(state, state=_win_state(state), win_elapsed=0.0)


def shoot(state: HuntState) -> HuntState:
    """Fire immediately, then settle the round if that shot decided it"""
    state, _ = fire(state)
    return evaluate_outcome(state)


# ----------------------------
# Progression
# ----------------------------

def advance_after_win(state: HuntState) -> HuntState:
    """Bank the cleared round and move on to the next round or level"""
    if state.state not in (GameState.ROUND_WIN, GameState.LEVEL_WIN):
        return state

    c = state.counters
    cfg = state.config
    state = replace(
        state,
        level_stats=state.level_stats.add(c, cfg.total_birds),
        bounty=state.bounty + round_bonus(c.birds_killed, cfg.total_ammo, c.shots_fired),
    )

    if state.round < ROUNDS_PER_LEVEL:
        return start_round(state, state.level, state.round + 1)
    if state.level < MAX_LEVELS:
        return start_round(state, state.level + 1, 1)
    # Beat the last level: the hunt loops back to the start
    return start_round(state, 1, 1)


def acknowledge_level(state: HuntState) -> HuntState:
    if state.state != GameState.LEVEL_WIN:
        return state
    return advance_after_win(state)


def retry(state: HuntState) -> HuntState:
    if state.state != GameState.ROUND_LOSE:
        return state
    return start_round(state, state.level, state.round)


def give_up(state: HuntState) -> HuntState:
    if state.state != GameState.ROUND_LOSE:
        return state
    return replace(state, state=GameState.SESSION_SUMMARY)


def return_home(state: HuntState) -> HuntState:
    if state.state != GameState.SESSION_SUMMARY:
        return state
    return _go_home(state)


# ----------------------------
# Frame step
# ----------------------------

def decay_timers(state: HuntState, dt: float) -> HuntState:
    """Count down the hit marker and toast; valid in every state"""
    hit_marker = max(0.0, state.hit_marker - dt)
    toast, toast_remaining = state.toast, state.toast_remaining
    if toast is not None:
        toast_remaining -= dt
        if toast_remaining <= 0:
            toast, toast_remaining = None, 0.0
    if (hit_marker, toast, toast_remaining) == (state.hit_marker, state.toast, state.toast_remaining):
        return state
    return replace(state, hit_marker=hit_marker, toast=toast, toast_remaining=toast_remaining)


def _tick_splash(state: HuntState, dt: float) -> HuntState:
    elapsed = state.splash_elapsed + dt
    if elapsed >= SPLASH_DURATION:
        return replace(state, state=GameState.HOME, splash_elapsed=elapsed)
    return replace(state, splash_elapsed=elapsed)


def _tick_round_win(state: HuntState, dt: float) -> HuntState:
    elapsed = state.win_elapsed + dt
    state = replace(state, win_elapsed=elapsed)
    if elapsed >= WIN_COUNTDOWN + WIN_READY_DELAY:
        return advance_after_win(state)
    return state


def _tick_playing(state: HuntState, frame_input: FrameInput, rng: random.Random) -> HuntState:
    # 1. Move reticle and birds, count escapes
    birds, reticle, escapes = advance(state.birds, state.reticle, frame_input, state.config)
    counters = state.counters
    if escapes:
        counters = replace(counters, birds_escaped=counters.birds_escaped + escapes)

    # 2. Spawn roll
    next_id = state.next_bird_id
    bird = try_spawn(counters, birds, state.config, next_id, rng)
    if bird is not None:
        birds.append(bird)
        counters = replace(counters, birds_spawned=counters.birds_spawned + 1)
        next_id += 1

    state = replace(
        state,
        birds=tuple(birds),
        reticle=reticle,
        counters=counters,
        next_bird_id=next_id,
    )

    # 3. Win / lose
    return evaluate_outcome(state)


def step(
    state: HuntState,
    frame_input: FrameInput,
    dt: float,
    rng: random.Random,
) -> HuntState:
    """
    Advance the session by one display frame.

    Bird and reticle motion is measured per frame; dt (seconds) only
    drives the splash, round-win, hit-marker and toast timers.
    """
    state = decay_timers(state, dt)

    if state.state == GameState.SPLASH:
        return _tick_splash(state, dt)
    if state.state == GameState.PLAYING:
        return _tick_playing(state, frame_input, rng)
    if state.state == GameState.ROUND_WIN:
        return _tick_round_win(state, dt)
    return state
