"""Unit tests for score math and screen reports."""

from __future__ import annotations

import random

import numpy as np
import pytest

from game.hunt import rounds
from game.hunt.entities import GameState, LevelStats
from game.hunt.reports import hud, level_report, lose_report, round_report, session_summary
from game.hunt.state import HuntState
from game.hunt.utils import accuracy_percent, joystick_vector, rank_for, seed_everything

pytestmark = pytest.mark.unit


class TestAccuracy:
    @pytest.mark.parametrize("kills,shots,expected", [
        (0, 0, 0), (1, 3, 33), (2, 3, 67), (1, 2, 50), (1, 8, 13), (3, 3, 100),
    ])
    def test_rounding(self, kills, shots, expected):
        assert accuracy_percent(kills, shots) == expected

    def test_ranks(self):
        assert rank_for(100) == "SHERIFF"
        assert rank_for(81) == "SHERIFF"
        assert rank_for(80) == "DEPUTY"
        assert rank_for(51) == "DEPUTY"
        assert rank_for(50) == "ROOKIE"
        assert rank_for(0) == "ROOKIE"


class TestJoystick:
    def test_inside_radius(self):
        assert joystick_vector(20.0, -10.0, 40.0) == (0.5, -0.25)

    def test_clamped_to_unit_disc(self):
        x, y = joystick_vector(80.0, 0.0, 40.0)
        assert (x, y) == (1.0, 0.0)
        x, y = joystick_vector(30.0, 40.0, 10.0)
        assert x == pytest.approx(0.6)
        assert y == pytest.approx(0.8)


class TestReports:
    def test_round_report(self, playing_state):
        r = round_report(rounds.cheat(playing_state()))
        assert r == {"round": 1, "accuracy": 0, "bonus": 250, "countdown": 3}

    def test_level_report_includes_current_round(self, playing_state):
        s = playing_state(1, 7, bounty=2000, level_stats=LevelStats(killed=6, shots=8, total_birds=6))
        r = level_report(rounds.cheat(s))
        assert r["total_killed"] == 7
        assert r["total_shots"] == 8
        assert r["total_birds"] == 7
        assert r["accuracy"] == 88
        assert r["rank"] == "SHERIFF"
        assert r["bounty"] == 2000

    def test_lose_report(self, playing_state):
        s = playing_state()
        for _ in range(3):
            s = rounds.shoot(s)
        r = lose_report(s)
        assert r == {"reason": "out of ammo", "birds_killed": 0, "total_birds": 1, "shots_fired": 3}

    def test_session_summary(self):
        s = HuntState(state=GameState.SESSION_SUMMARY, level=2, round=3, bounty=900)
        assert session_summary(s) == {"level_reached": 2, "rounds_cleared": 9, "bounty": 900}

    def test_hud(self, playing_state):
        h = hud(rounds.shoot(playing_state(4, 1)))
        assert h["state"] == "PLAYING"
        assert h["ammo_left"] == 4
        assert h["total_birds"] == 2
        assert h["rounds_per_level"] == 7
        assert h["toast"] is None


class TestSeeding:
    def test_seed_everything_repeats(self):
        seed_everything(5)
        a = (random.random(), float(np.random.rand()))
        seed_everything(5)
        b = (random.random(), float(np.random.rand()))
        assert a == b

    def test_none_leaves_state_alone(self):
        random.seed(1)
        state = random.getstate()
        seed_everything(None)
        assert random.getstate() == state
