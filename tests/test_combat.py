"""Unit tests for firing and hit resolution."""

from __future__ import annotations

from dataclasses import replace

import pytest

from game.hunt.combat import can_fire, fire, resolve_hits
from game.hunt.entities import Bird, GameState, RoundCounters
from game.hunt.state import HuntState
from game.hunt.utils import aspect_distance

pytestmark = pytest.mark.unit


def _bird_at(x, y, i=1, dead=False):
    return Bird(id=i, x=x, y=y, vx=0.2, vy=0.0, is_dead=dead)


class TestMisfire:
    def test_not_playing_is_noop(self):
        s = HuntState(state=GameState.HOME)
        out, hit = fire(s)
        assert out is s
        assert not hit

    def test_paused_is_noop(self, playing_state):
        s = replace(playing_state(), state=GameState.PAUSED)
        assert fire(s)[0] is s

    def test_empty_gun_is_noop(self, playing_state):
        s = playing_state(counters=RoundCounters(shots_fired=3))
        assert not can_fire(s)
        out, hit = fire(s)
        assert out is s
        assert out.counters.shots_fired == 3


class TestShot:
    def test_miss_spends_ammo(self, playing_state):
        s, hit = fire(playing_state())
        assert not hit
        assert s.counters.shots_fired == 1
        assert s.counters.birds_killed == 0
        assert s.ammo_left == 2
        assert not s.show_hit_marker

    def test_hit(self, playing_state):
        s = playing_state(birds=(_bird_at(50.0, 30.0),))
        s, hit = fire(s)
        assert hit
        assert s.counters.birds_killed == 1
        assert s.counters.shots_fired == 1
        assert s.birds[0].is_dead
        assert s.hit_marker == pytest.approx(0.2)
        assert s.live_birds == ()

    def test_multi_kill_counts_once(self, playing_state):
        s = playing_state(birds=(_bird_at(50.0, 30.0, 1), _bird_at(52.0, 30.5, 2)))
        s, hit = fire(s)
        assert hit
        assert all(b.is_dead for b in s.birds)
        assert s.counters.birds_killed == 1

    def test_dead_bird_cannot_be_hit_again(self, playing_state):
        s = playing_state(birds=(_bird_at(50.0, 30.0, dead=True),))
        s, hit = fire(s)
        assert not hit
        assert s.counters.shots_fired == 1
        assert s.counters.birds_killed == 0


class TestHitbox:
    def test_aspect_distance_stretches_vertical(self):
        assert aspect_distance(0, 0, 3, 0) == pytest.approx(3.0)
        assert aspect_distance(0, 0, 0, 4.28) == pytest.approx(10.0)

    def test_horizontal_edge_is_exclusive(self):
        _, hit = resolve_hits([_bird_at(55.9, 30.0)], (50.0, 30.0))
        assert hit
        _, hit = resolve_hits([_bird_at(56.0, 30.0)], (50.0, 30.0))
        assert not hit

    def test_vertical_reach_is_shorter(self):
        # 2 units down is ~4.7 on screen, 3 units is ~7.0
        _, hit = resolve_hits([_bird_at(50.0, 32.0)], (50.0, 30.0))
        assert hit
        _, hit = resolve_hits([_bird_at(50.0, 33.0)], (50.0, 30.0))
        assert not hit

    def test_untouched_birds_preserved(self):
        far = _bird_at(90.0, 10.0, 2)
        birds, _ = resolve_hits([_bird_at(50.0, 30.0, 1), far], (50.0, 30.0))
        assert birds[1] is far
