"""Unit tests for reticle and bird motion."""

from __future__ import annotations

import pytest

from game.hunt.entities import Bird, FrameInput
from game.hunt.physics import (
    advance, advance_birds, combine_input, fly, is_out_of_bounds, move_reticle,
)
from game.hunt.levels import get_level_config

pytestmark = pytest.mark.unit


class TestCombineInput:
    def test_idle(self):
        assert combine_input(FrameInput()) == (0.0, 0.0)

    def test_keys_override_joystick_per_axis(self):
        x, y = combine_input(FrameInput(left=True, joystick=(0.3, 0.4)))
        assert x == -1.0
        assert y == pytest.approx(0.4)

    def test_down_wins_over_up(self):
        assert combine_input(FrameInput(up=True, down=True))[1] == 1.0

    def test_right_wins_over_left(self):
        assert combine_input(FrameInput(left=True, right=True))[0] == 1.0

    def test_key_diagonal_is_normalized(self):
        x, y = combine_input(FrameInput(up=True, right=True))
        assert x == pytest.approx(0.7071)
        assert y == pytest.approx(-0.7071)

    def test_partial_joystick_diagonal_untouched(self):
        assert combine_input(FrameInput(joystick=(0.5, 0.5))) == (0.5, 0.5)


class TestMoveReticle:
    def test_moves_by_crosshair_speed(self):
        assert move_reticle((50.0, 30.0), FrameInput(up=True)) == (50.0, 28.5)
        assert move_reticle((50.0, 30.0), FrameInput(right=True)) == (51.5, 30.0)

    def test_clamped_to_playfield(self):
        assert move_reticle((0.5, 0.5), FrameInput(up=True, left=True)) == (0.0, 0.0)
        assert move_reticle((99.9, 99.9), FrameInput(down=True, right=True)) == (100.0, 100.0)

    def test_can_aim_below_horizon(self):
        x, y = move_reticle((50.0, 70.0), FrameInput(down=True))
        assert y == 71.5


class TestFly:
    def test_moves_by_velocity(self):
        b = fly(Bird(id=1, x=10.0, y=20.0, vx=0.5, vy=0.25))
        assert (b.x, b.y) == (10.5, 20.25)

    def test_bounces_off_horizon(self):
        b = fly(Bird(id=1, x=10.0, y=59.9, vx=0.2, vy=0.5))
        assert b.y == 60.0
        assert b.vy == -0.5

    def test_bounces_off_sky_top(self):
        b = fly(Bird(id=1, x=10.0, y=0.1, vx=0.2, vy=-0.5))
        assert b.y == 0.0
        assert b.vy == 0.5

    def test_horizontal_velocity_unchanged_by_bounce(self):
        b = fly(Bird(id=1, x=10.0, y=59.9, vx=-0.3, vy=0.5))
        assert b.vx == -0.3
        assert b.facing == -1


class TestEscapes:
    def test_bounds_are_strict(self):
        assert not is_out_of_bounds(Bird(id=1, x=115.0, y=10.0, vx=1.0, vy=0.0))
        assert not is_out_of_bounds(Bird(id=1, x=-15.0, y=10.0, vx=-1.0, vy=0.0))
        assert is_out_of_bounds(Bird(id=1, x=115.5, y=10.0, vx=1.0, vy=0.0))
        assert is_out_of_bounds(Bird(id=1, x=-15.5, y=10.0, vx=-1.0, vy=0.0))

    def test_spawn_edges_are_in_bounds(self):
        assert not is_out_of_bounds(Bird(id=1, x=-10.0, y=10.0, vx=0.2, vy=0.0))
        assert not is_out_of_bounds(Bird(id=1, x=110.0, y=10.0, vx=-0.2, vy=0.0))

    def test_escape_removed_and_counted_same_frame(self):
        birds, escapes = advance_birds([Bird(id=1, x=114.5, y=10.0, vx=1.0, vy=0.0)])
        assert birds == []
        assert escapes == 1

    def test_bird_on_boundary_stays(self):
        birds, escapes = advance_birds([Bird(id=1, x=114.0, y=10.0, vx=1.0, vy=0.0)])
        assert len(birds) == 1
        assert escapes == 0

    def test_dead_birds_dropped_not_counted(self):
        dead = Bird(id=1, x=114.5, y=10.0, vx=1.0, vy=0.0, is_dead=True)
        live = Bird(id=2, x=50.0, y=10.0, vx=0.2, vy=0.0)
        birds, escapes = advance_birds([dead, live])
        assert [b.id for b in birds] == [2]
        assert escapes == 0


class TestAdvance:
    def test_moves_reticle_and_birds(self):
        cfg = get_level_config(1, 1)
        birds, reticle, escapes = advance(
            [Bird(id=1, x=0.0, y=10.0, vx=1.0, vy=0.0)],
            (50.0, 30.0),
            FrameInput(left=True),
            cfg,
        )
        assert birds[0].x == 1.0
        assert reticle == (48.5, 30.0)
        assert escapes == 0
