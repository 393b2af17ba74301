"""Unit tests for the Gymnasium wrapper around a hunting round."""

from __future__ import annotations

import numpy as np
import pytest

from game.hunt import HuntEnv, run_random_episode

pytestmark = pytest.mark.unit

NOOP = np.array([0, 0])
FIRE = np.array([0, 1])


@pytest.fixture
def env():
    e = HuntEnv()
    yield e
    e.close()


class TestSpaces:
    def test_action_space(self, env):
        assert list(env.action_space.nvec) == [9, 2]

    def test_observation_space(self, env):
        assert env.observation_space.shape == (20,)
        assert HuntEnv(k_birds=1).observation_space.shape == (10,)

    def test_rejects_unknown_obs_mode(self):
        with pytest.raises(AssertionError):
            HuntEnv(obs_mode="pixels")


class TestReset:
    def test_starts_playing(self, env):
        obs, info = env.reset(seed=0)
        assert env.observation_space.contains(obs)
        assert info["state"] == "PLAYING"
        assert (info["level"], info["round"]) == (1, 1)
        assert info["shots_fired"] == 0

    def test_options_pick_round(self, env):
        _, info = env.reset(seed=0, options={"level": 4, "round": 2})
        assert (info["level"], info["round"]) == (4, 2)
        assert info["total_birds"] == 2
        assert info["total_ammo"] == 5

    def test_out_of_range_level_is_clamped(self, env):
        _, info = env.reset(seed=0, options={"level": 0, "round": 1})
        assert info["level"] == 1
        assert info["total_birds"] == 1

    def test_random_level(self):
        env = HuntEnv(random_level=True)
        for seed in range(5):
            _, info = env.reset(seed=seed)
            assert 1 <= info["level"] <= 10
            assert 1 <= info["round"] <= 7


class TestStep:
    def test_missed_shot_costs(self, env):
        env.reset(seed=0)
        obs, reward, terminated, truncated, info = env.step(FIRE)
        assert info["shots_fired"] == 1
        assert reward == pytest.approx(-0.05 - 0.001)
        assert not terminated
        assert not truncated

    def test_out_of_ammo_terminates(self, env):
        env.reset(seed=0)
        env.step(FIRE)
        env.step(FIRE)
        obs, reward, terminated, truncated, info = env.step(FIRE)
        assert terminated
        assert info["state"] == "ROUND_LOSE"
        assert info["lose_reason"] == "out of ammo"
        assert not info["round_cleared"]
        assert reward == pytest.approx(-0.05 - 0.001 - 1.0)

    def test_clear_pays(self, env):
        env.reset(seed=0)
        env.session.cheat()
        # Cheat already settled the round; the next step reports it
        obs, reward, terminated, truncated, info = env.step(NOOP)
        assert terminated
        assert info["round_cleared"]
        assert reward == pytest.approx(2.0 - 0.001)

    def test_truncation(self):
        env = HuntEnv(max_steps=5)
        env.reset(seed=0)
        for _ in range(4):
            _, _, terminated, truncated, _ = env.step(NOOP)
            assert not truncated
        _, _, terminated, truncated, info = env.step(NOOP)
        assert truncated
        assert not terminated
        assert info["step"] == 5

    def test_reward_override(self):
        env = HuntEnv(reward_config={"R_SHOT": 0.5})
        env.reset(seed=0)
        _, reward, _, _, _ = env.step(FIRE)
        assert reward == pytest.approx(-0.5 - 0.001)

    def test_observations_stay_in_bounds(self, env):
        obs, _ = env.reset(seed=3, options={"level": 9, "round": 1})
        env.action_space.seed(3)
        for _ in range(400):
            obs, _, terminated, truncated, _ = env.step(env.action_space.sample())
            assert env.observation_space.contains(obs)
            if terminated or truncated:
                break


class TestRender:
    def test_no_render_mode(self, env):
        env.reset(seed=0)
        assert env.render() is None

    def test_rgb_array(self):
        env = HuntEnv(render_mode="rgb_array", width=210, height=90)
        env.reset(seed=0)
        for _ in range(60):
            env.step(NOOP)
        frame = env.render()
        assert frame.shape == (90, 210, 3)
        assert frame.dtype == np.uint8


def test_run_random_episode():
    infos = run_random_episode(render=False, seed=0)
    last = infos[-1]
    assert last["state"] != "PLAYING" or last["step"] == 3000
