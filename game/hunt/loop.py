"""
Frame loop driver.

The host (a window, a test, a headless runner) provides a TickSource that
calls back once per display refresh with a monotonic timestamp in
seconds. The driver asks for one frame at a time and only keeps the chain
alive while the session is in a state that needs frames:

  - PLAYING: full simulation step
  - SPLASH, ROUND_WIN: timers only

Leaving those states cancels the pending frame immediately; a command
that moves the session back into one of them re-arms the chain.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional, Protocol

from .entities import FrameInput, GameState
from .session import HuntSession
from .state import HuntState

FrameCallback = Callable[[float], None]

TICKING_STATES = (GameState.SPLASH, GameState.PLAYING, GameState.ROUND_WIN)


class TickSource(Protocol):
    def request_frame(self, callback: FrameCallback) -> int:
        ...

    def cancel_frame(self, handle: int) -> None:
        ...


class ManualTickSource:
    """Tick source advanced by hand, for tests and headless runs"""

    def __init__(self, start: float = 0.0):
        self.now = start
        self._pending: Dict[int, FrameCallback] = {}
        self._next_handle = 1

    @property
    def pending(self) -> int:
        return len(self._pending)

    def request_frame(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._pending.pop(handle, None)

    def advance(self, dt: float) -> int:
        """Move the clock forward and deliver one frame; returns callbacks fired"""
        self.now += dt
        callbacks = list(self._pending.values())
        self._pending.clear()
        for cb in callbacks:
            cb(self.now)
        return len(callbacks)

    def run(self, frames: int, dt: float = 1 / 60) -> int:
        fired = 0
        for _ in range(frames):
            fired += self.advance(dt)
        return fired


class GameLoopDriver:
    """Per-frame scheduler for a HuntSession"""

    def __init__(
        self,
        session: HuntSession,
        tick_source: TickSource,
        input_provider: Optional[Callable[[], FrameInput]] = None,
        max_dt: float = 0.25,
    ):
        assert max_dt > 0, "max_dt must be positive"
        self.session = session
        self.tick_source = tick_source
        self.input_provider = input_provider or FrameInput
        self.max_dt = max_dt

        self.frames = 0
        self.closed = False
        self._handle: Optional[int] = None
        self._last_time: Optional[float] = None

        session.add_listener(self._on_state_change)

    @property
    def running(self) -> bool:
        return self._handle is not None

    def start(self) -> None:
        self._schedule()

    def close(self) -> None:
        """Tear down: no frame stays scheduled after this"""
        self.closed = True
        self._cancel()
        self.session.remove_listener(self._on_state_change)

    # ----------------------------
    # Internals
    # ----------------------------

    def _schedule(self) -> None:
        if self.closed or self._handle is not None:
            return
        if self.session.game_state not in TICKING_STATES:
            return
        self._handle = self.tick_source.request_frame(self._on_frame)

    def _cancel(self) -> None:
        if self._handle is not None:
            self.tick_source.cancel_frame(self._handle)
            self._handle = None
        self._last_time = None

    def _on_frame(self, timestamp: float) -> None:
        self._handle = None
        if self.closed or self.session.game_state not in TICKING_STATES:
            self._last_time = None
            return

        if self._last_time is None:
            dt = 0.0
        else:
            dt = min(max(0.0, timestamp - self._last_time), self.max_dt)
        self._last_time = timestamp

        self.session.tick(self.input_provider(), dt)
        self.frames += 1
        self._schedule()

    def _on_state_change(self, old: HuntState, new: HuntState) -> None:
        if new.state in TICKING_STATES:
            self._schedule()
        else:
            self._cancel()
