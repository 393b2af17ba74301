"""Unit tests for the frame loop driver."""

from __future__ import annotations

import pytest

from game.hunt import GameLoopDriver, HuntSession, ManualTickSource
from game.hunt.entities import FrameInput, GameState

pytestmark = pytest.mark.unit


@pytest.fixture
def home():
    session = HuntSession(seed=5, skip_splash=True)
    source = ManualTickSource()
    driver = GameLoopDriver(session, source)
    driver.start()
    return session, source, driver


class TestManualTickSource:
    def test_request_and_cancel(self):
        source = ManualTickSource()
        stamps = []
        h = source.request_frame(stamps.append)
        source.request_frame(stamps.append)
        source.cancel_frame(h)
        assert source.pending == 1
        assert source.advance(0.5) == 1
        assert stamps == [0.5]
        assert source.pending == 0

    def test_cancel_unknown_handle(self):
        ManualTickSource().cancel_frame(99)


class TestScheduling:
    def test_splash_runs_then_stops_on_home(self):
        session = HuntSession()
        source = ManualTickSource()
        driver = GameLoopDriver(session, source)
        driver.start()
        assert driver.running

        fired = source.run(240, dt=1 / 60)
        assert session.game_state == GameState.HOME
        assert not driver.running
        assert source.pending == 0
        assert fired == driver.frames
        assert fired < 240

    def test_idle_on_home(self, home):
        session, source, driver = home
        assert not driver.running
        assert source.advance(1 / 60) == 0

    def test_start_command_arms_loop(self, home):
        session, source, driver = home
        session.start()
        assert driver.running
        assert source.advance(1 / 60) == 1
        assert driver.running

    def test_pause_cancels_and_resume_rearms(self, home):
        session, source, driver = home
        session.start()
        source.advance(1 / 60)
        session.pause()
        assert not driver.running
        assert source.pending == 0
        assert source.run(10) == 0
        session.resume()
        assert driver.running
        assert source.advance(1 / 60) == 1

    def test_round_lose_stops(self, home):
        session, source, driver = home
        session.start()
        for _ in range(3):
            session.fire()
        assert session.game_state == GameState.ROUND_LOSE
        assert not driver.running
        session.retry()
        assert driver.running

    def test_round_win_keeps_ticking_into_next_round(self, home):
        session, source, driver = home
        session.start()
        source.advance(1 / 60)
        session.cheat()
        assert session.game_state == GameState.ROUND_WIN
        assert driver.running
        source.run(300, dt=1 / 60)
        assert session.game_state == GameState.PLAYING
        assert session.state.round == 2

    def test_level_win_waits(self, home):
        session, source, driver = home
        session.start_round(1, 7)
        session.cheat()
        assert session.game_state == GameState.LEVEL_WIN
        assert not driver.running
        session.acknowledge_level()
        assert driver.running

    def test_close(self, home):
        session, source, driver = home
        session.start()
        driver.close()
        assert driver.closed
        assert not driver.running
        assert source.pending == 0
        session.pause()
        session.resume()
        assert source.pending == 0


class TestFrameTiming:
    def test_first_frame_after_arming_has_zero_dt(self, home, monkeypatch):
        session, source, driver = home
        dts = []
        real_tick = session.tick

        def spy(frame_input=None, dt=0.0):
            dts.append(dt)
            return real_tick(frame_input, dt)

        monkeypatch.setattr(session, "tick", spy)
        session.start()
        source.advance(0.1)
        source.advance(0.1)
        session.pause()
        source.advance(5.0)
        session.resume()
        source.advance(0.1)
        assert dts == [0.0, pytest.approx(0.1), 0.0]

    def test_dt_is_capped(self, home):
        session, source, driver = home
        session.start()
        source.advance(1 / 60)
        session.cheat()
        source.advance(10.0)
        assert session.state.win_elapsed == pytest.approx(0.25)

    def test_input_provider(self):
        session = HuntSession(skip_splash=True)
        source = ManualTickSource()
        driver = GameLoopDriver(session, source, input_provider=lambda: FrameInput(right=True))
        driver.start()
        session.start()
        source.run(2)
        assert session.state.reticle == (53.0, 30.0)

    def test_rejects_bad_max_dt(self):
        with pytest.raises(AssertionError):
            GameLoopDriver(HuntSession(), ManualTickSource(), max_dt=0)
