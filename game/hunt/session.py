"""
HuntSession - the stateful owner of a hunting session.

Wraps the pure transitions in ``rounds`` around a single live HuntState.
Input components talk to the session through its command methods only;
presentation reads ``session.state`` (a frozen snapshot) once per frame.

State transitions are detected by comparing successive snapshots and are
recorded in ``session.events``:
  - ``state_change``: any change of the GameState value
  - ``shot``: a valid trigger pull (hit or miss)
"""

from __future__ import annotations

import random
from dataclasses import replace
from typing import Any, Callable, Dict, List, Optional

from . import rounds
from .combat import fire as resolve_fire
from .entities import FrameInput, GameState
from .state import HuntState

Listener = Callable[[HuntState, HuntState], None]


class HuntSession:
    """Round/level/session state machine with a replayable RNG"""

    def __init__(
        self,
        seed: Optional[int] = None,
        verbose: int = 0,
        skip_splash: bool = False,
        max_events: int = 1000,
    ):
        self.verbose = verbose
        self.max_events = max_events
        self.rng = random.Random(seed)
        self.state: HuntState = rounds.initial_state()
        self.events: List[Dict[str, Any]] = []
        self._listeners: List[Listener] = []

        if skip_splash:
            self.state = replace(self.state, state=GameState.HOME)

    # ----------------------------
    # Observation
    # ----------------------------

    @property
    def game_state(self) -> GameState:
        return self.state.state

    @property
    def is_playing(self) -> bool:
        return self.state.state == GameState.PLAYING

    def add_listener(self, listener: Listener) -> None:
        """Call ``listener(old, new)`` whenever the GameState value changes"""
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ----------------------------
    # Frame
    # ----------------------------

    def tick(self, frame_input: Optional[FrameInput] = None, dt: float = 0.0) -> HuntState:
        """Advance one display frame"""
        if frame_input is None:
            frame_input = FrameInput()
        return self._apply(rounds.step(self.state, frame_input, dt, self.rng), "tick")

    def decay_timers(self, dt: float) -> HuntState:
        """Run down the toast and hit marker while no frames are being simulated"""
        return self._apply(rounds.decay_timers(self.state, dt), "timers")

    # ----------------------------
    # Commands
    # ----------------------------

    def start(self) -> HuntState:
        return self._apply(rounds.start_hunt(self.state), "start")

    def fire(self) -> bool:
        """Pull the trigger now; returns True if any bird was hit"""
        before = self.state
        after, hit = resolve_fire(before)
        if after is before:
            return False
        self._record({
            "type": "shot",
            "hit": hit,
            "shots_fired": after.counters.shots_fired,
            "birds_killed": after.counters.birds_killed,
        })
        self._apply(rounds.evaluate_outcome(after), "fire", previous=before)
        return hit

    def pause(self) -> HuntState:
        return self._apply(rounds.pause(self.state), "pause")

    def resume(self) -> HuntState:
        return self._apply(rounds.resume(self.state), "resume")

    def toggle_pause(self) -> HuntState:
        if self.state.state == GameState.PAUSED:
            return self.resume()
        return self.pause()

    def request_quit(self) -> HuntState:
        return self._apply(rounds.request_quit(self.state), "request_quit")

    def cancel_quit(self) -> HuntState:
        return self._apply(rounds.cancel_quit(self.state), "cancel_quit")

    def quit_to_home(self) -> HuntState:
        return self._apply(rounds.quit_to_home(self.state), "quit")

    def cheat(self) -> HuntState:
        return self._apply(rounds.cheat(self.state), "cheat")

    def retry(self) -> HuntState:
        return self._apply(rounds.retry(self.state), "retry")

    def give_up(self) -> HuntState:
        return self._apply(rounds.give_up(self.state), "give_up")

    def acknowledge_level(self) -> HuntState:
        return self._apply(rounds.acknowledge_level(self.state), "acknowledge")

    def return_home(self) -> HuntState:
        return self._apply(rounds.return_home(self.state), "return_home")

    def start_round(self, level: int, round: int) -> HuntState:
        """Jump straight into a round (used by the agent harness)"""
        return self._apply(rounds.start_round(self.state, level, round), "start_round")

    # ----------------------------
    # Internals
    # ----------------------------

    def _apply(self, new: HuntState, cause: str, previous: Optional[HuntState] = None) -> HuntState:
        old = self.state if previous is None else previous
        self.state = new

        if new.state != old.state:
            self._record({
                "type": "state_change",
                "from": old.state.value,
                "to": new.state.value,
                "cause": cause,
                "level": new.level,
                "round": new.round,
                "reason": new.lose_reason.value if new.lose_reason is not None else None,
            })
            if self.verbose > 0:
                msg = f"[HuntSession] {old.state.value} -> {new.state.value} ({cause}) L{new.level} R{new.round}"
                if new.state == GameState.ROUND_LOSE and new.lose_reason is not None:
                    msg += f" reason={new.lose_reason.value}"
                print(msg)
            for listener in list(self._listeners):
                listener(old, new)

        return new

    def _record(self, event: Dict[str, Any]) -> None:
        self.events.append(event)
        if len(self.events) > self.max_events:
            del self.events[: len(self.events) - self.max_events]
