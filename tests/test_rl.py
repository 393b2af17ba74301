"""Unit tests for the training configuration and action wrapper."""

from __future__ import annotations

import numpy as np
import pytest

from game.hunt import HuntEnv
from rl.configs.hunt_config import (
    ENV_CONFIG, EXPERIMENT_CONFIG, REWARD_CONFIGS, TIMESTEP_CONFIGS, TRAINING_CONFIG,
    get_experiment_matrix, reward_params,
)
from rl.train import MultiDiscreteToDiscreteWrapper, experiment_runs, make_env, resolve_timesteps

pytestmark = pytest.mark.unit


class TestRewardConfigs:
    def test_presets_define_every_term(self):
        for name in REWARD_CONFIGS:
            params = reward_params(name)
            assert set(params) == {"R_KILL", "R_CLEAR", "R_SHOT", "R_ESCAPE", "R_OUT_OF_AMMO", "R_TIME"}

    def test_unknown_preset(self):
        with pytest.raises(ValueError):
            reward_params("nope")

    def test_env_accepts_preset(self):
        env = HuntEnv(reward_config=reward_params("sharpshooter"), **ENV_CONFIG)
        assert env.reward_config["R_SHOT"] == 0.3


class TestExperimentMatrix:
    def test_size(self):
        n = (len(EXPERIMENT_CONFIG["algorithms"])
             * len(EXPERIMENT_CONFIG["reward_configs"])
             * len(EXPERIMENT_CONFIG["timestep_configs"]))
        assert len(get_experiment_matrix()) == n

    def test_names_unique(self):
        names = [e["name"] for e in get_experiment_matrix()]
        assert len(set(names)) == len(names)


class TestExperimentRuns:
    def test_resolve_timesteps(self):
        assert resolve_timesteps(None, "short") == TIMESTEP_CONFIGS["short"]
        assert resolve_timesteps(1234, "long") == 1234
        assert resolve_timesteps() == TRAINING_CONFIG["total_timesteps"]

    def test_one_run_per_seed(self):
        runs = experiment_runs()
        assert len(runs) == len(get_experiment_matrix()) * len(EXPERIMENT_CONFIG["seeds"])
        assert {r["seed"] for r in runs} == set(EXPERIMENT_CONFIG["seeds"])

    def test_filter_by_timestep_config(self):
        runs = experiment_runs("short")
        assert len(runs) == 12
        assert {r["timesteps"] for r in runs} == {TIMESTEP_CONFIGS["short"]}

    def test_runs_get_their_own_dirs(self, tmp_path):
        runs = experiment_runs(base_dir=str(tmp_path))
        names = [r["run_name"] for r in runs]
        assert len(set(names)) == len(names)
        assert len({r["save_dir"] for r in runs}) == len(runs)
        for r in runs:
            assert r["save_dir"].startswith(str(tmp_path))
            assert r["run_name"] in r["log_dir"]
            assert r["run_name"] in r["tensorboard_log"]


class TestDiscreteWrapper:
    @pytest.fixture
    def wrapped(self):
        return MultiDiscreteToDiscreteWrapper(HuntEnv())

    def test_flattened_size(self, wrapped):
        assert wrapped.action_space.n == 18

    @pytest.mark.parametrize("flat,expected", [
        (0, [0, 0]), (1, [0, 1]), (5, [2, 1]), (17, [8, 1]),
    ])
    def test_unflatten(self, wrapped, flat, expected):
        assert np.array_equal(wrapped.action(flat), expected)

    def test_make_env_for_dqn(self):
        env = make_env(seed=0, wrap_for_dqn=True)()
        obs, info = env.reset(seed=0)
        obs, reward, terminated, truncated, info = env.step(1)
        assert info["shots_fired"] == 1
        env.close()
