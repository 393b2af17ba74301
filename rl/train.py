"""
Training script for the duck hunt environment using Stable-Baselines3
Supports PPO and DQN with round-outcome metrics tracking.
"""

import os
import argparse
from typing import Dict, List, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from stable_baselines3 import PPO, DQN
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize
from stable_baselines3.common.callbacks import CheckpointCallback, EvalCallback
from stable_baselines3.common.monitor import Monitor

from game.hunt import HuntEnv
from game.hunt.utils import seed_everything
from rl.configs.hunt_config import (
    ENV_CONFIG, PPO_CONFIG, DQN_CONFIG, TRAINING_CONFIG, REWARD_CONFIGS, TIMESTEP_CONFIGS,
    EXPERIMENT_CONFIG, get_experiment_matrix, reward_params,
)
from rl.metrics_callback import MetricsCallback, TensorboardMetricsCallback


class MultiDiscreteToDiscreteWrapper(gym.ActionWrapper):
    """
    Wrapper to convert MultiDiscrete action space to Discrete for DQN.
    Flattens MultiDiscrete([9, 2]) to Discrete(9*2=18).
    """

    def __init__(self, env):
        super().__init__(env)
        self.orig_action_space = env.action_space
        self._nvec = env.action_space.nvec
        self.n_total = int(np.prod(self._nvec))
        self.action_space = spaces.Discrete(self.n_total)

    def action(self, action):
        """Convert flat discrete action to MultiDiscrete."""
        indices = []
        remaining = int(action)
        for n in reversed(self._nvec):
            indices.append(remaining % n)
            remaining //= n
        return np.array(list(reversed(indices)), dtype=np.int64)


def make_env(render_mode: Optional[str] = None, seed: Optional[int] = None,
             wrap_for_dqn: bool = False, reward_config: Optional[Dict[str, float]] = None):
    """Factory function to create the environment"""
    def _init():
        env = HuntEnv(render_mode=render_mode, reward_config=reward_config, **ENV_CONFIG)
        if wrap_for_dqn:
            env = MultiDiscreteToDiscreteWrapper(env)
        env = Monitor(env, info_keywords=("round_cleared", "birds_killed", "shots_fired"))
        if seed is not None:
            env.reset(seed=seed)
        return env
    return _init


def _print_summary(algo: str, final_path: str, metrics_callback: MetricsCallback):
    print(f"\n{'='*60}")
    print(f"{algo.upper()} Training complete! Model saved to {final_path}")
    summary = metrics_callback.get_summary()
    if summary:
        print(f"Mean Reward: {summary['mean_reward']:.2f} ± {summary['std_reward']:.2f}")
        print(f"Clear Rate: {summary['clear_rate']:.1%}  Accuracy: {summary['accuracy']}%")
        print(f"Total Episodes: {summary['total_episodes']}")
    print(f"{'='*60}\n")


def train_ppo(
    total_timesteps: int = None,
    save_dir: str = "./models/ppo",
    log_dir: str = "./logs/ppo",
    tensorboard_log: str = "./tensorboard_logs/ppo",
    n_envs: int = 4,
    reward_config: str = "baseline",
    seed: int = 0,
    n_eval_episodes: int = EXPERIMENT_CONFIG["n_eval_episodes"],
):
    """Train PPO agent on the hunt environment"""

    if total_timesteps is None:
        total_timesteps = TRAINING_CONFIG["total_timesteps"]
    rewards = reward_params(reward_config)

    os.makedirs(save_dir, exist_ok=True)
    os.makedirs(log_dir, exist_ok=True)

    print(f"\n{'='*60}")
    print(f"Training PPO for {total_timesteps:,} timesteps...")
    print(f"Using {n_envs} parallel environments, reward config '{reward_config}'")
    print(f"{'='*60}\n")

    env = DummyVecEnv([make_env(seed=seed + i, reward_config=rewards) for i in range(n_envs)])
    env = VecNormalize(env, norm_obs=True, norm_reward=True)

    eval_env = DummyVecEnv([make_env(seed=seed + 100, reward_config=rewards)])
    eval_env = VecNormalize(eval_env, norm_obs=True, norm_reward=False, training=False)

    checkpoint_callback = CheckpointCallback(
        save_freq=TRAINING_CONFIG["save_freq"] // n_envs,
        save_path=save_dir,
        name_prefix="ppo_hunt",
    )

    eval_callback = EvalCallback(
        eval_env,
        best_model_save_path=save_dir,
        log_path=log_dir,
        n_eval_episodes=n_eval_episodes,
        eval_freq=TRAINING_CONFIG.get("eval_freq", 5000) // n_envs,
        deterministic=True,
        render=False,
    )

    metrics_callback = MetricsCallback(log_dir=log_dir, algo_name="ppo", verbose=1)
    tb_callback = TensorboardMetricsCallback(verbose=0)

    model = PPO(
        env=env,
        seed=seed,
        tensorboard_log=tensorboard_log,
        **PPO_CONFIG
    )

    model.learn(
        total_timesteps=total_timesteps,
        callback=[checkpoint_callback, eval_callback, metrics_callback, tb_callback],
    )

    final_path = os.path.join(save_dir, "ppo_hunt_final")
    model.save(final_path)
    env.save(os.path.join(save_dir, "vec_normalize.pkl"))

    _print_summary("ppo", final_path, metrics_callback)
    return model, metrics_callback


def train_dqn(
    total_timesteps: int = None,
    save_dir: str = "./models/dqn",
    log_dir: str = "./logs/dqn",
    tensorboard_log: str = "./tensorboard_logs/dqn",
    reward_config: str = "baseline",
    seed: int = 0,
    n_eval_episodes: int = EXPERIMENT_CONFIG["n_eval_episodes"],
):
    """Train DQN agent on the hunt environment"""

    if total_timesteps is None:
        total_timesteps = TRAINING_CONFIG["total_timesteps"]
    rewards = reward_params(reward_config)

    os.makedirs(save_dir, exist_ok=True)
    os.makedirs(log_dir, exist_ok=True)

    print(f"\n{'='*60}")
    print(f"Training DQN for {total_timesteps:,} timesteps...")
    print(f"Using MultiDiscrete->Discrete action wrapper (18 actions)")
    print(f"{'='*60}\n")

    env = DummyVecEnv([make_env(seed=seed, wrap_for_dqn=True, reward_config=rewards)])
    eval_env = DummyVecEnv([make_env(seed=seed + 100, wrap_for_dqn=True, reward_config=rewards)])

    checkpoint_callback = CheckpointCallback(
        save_freq=TRAINING_CONFIG["save_freq"],
        save_path=save_dir,
        name_prefix="dqn_hunt",
    )

    eval_callback = EvalCallback(
        eval_env,
        best_model_save_path=save_dir,
        log_path=log_dir,
        n_eval_episodes=n_eval_episodes,
        eval_freq=TRAINING_CONFIG.get("eval_freq", 10000),
        deterministic=True,
        render=False,
    )

    metrics_callback = MetricsCallback(log_dir=log_dir, algo_name="dqn", verbose=1)
    tb_callback = TensorboardMetricsCallback(verbose=0)

    model = DQN(
        env=env,
        seed=seed,
        tensorboard_log=tensorboard_log,
        **DQN_CONFIG
    )

    model.learn(
        total_timesteps=total_timesteps,
        callback=[checkpoint_callback, eval_callback, metrics_callback, tb_callback],
    )

    final_path = os.path.join(save_dir, "dqn_hunt_final")
    model.save(final_path)

    _print_summary("dqn", final_path, metrics_callback)
    return model, metrics_callback


def resolve_timesteps(timesteps: Optional[int] = None, timestep_config: Optional[str] = None) -> int:
    """Explicit count first, then a named preset, then the training default"""
    if timesteps is not None:
        return timesteps
    if timestep_config is not None:
        return TIMESTEP_CONFIGS[timestep_config]
    return TRAINING_CONFIG["total_timesteps"]


def experiment_runs(timestep_config: Optional[str] = None, base_dir: str = "./experiments") -> List[Dict]:
    """
    Expand the experiment matrix into one run per seed.
    Each run gets its own model, log and tensorboard directory.
    """
    runs = []
    for exp in get_experiment_matrix():
        if timestep_config is not None and exp["timestep_config"] != timestep_config:
            continue
        for seed in EXPERIMENT_CONFIG["seeds"]:
            run_name = f"{exp['name']}_s{seed}"
            runs.append({
                **exp,
                "seed": seed,
                "run_name": run_name,
                "save_dir": os.path.join(base_dir, "models", run_name),
                "log_dir": os.path.join(base_dir, "logs", run_name),
                "tensorboard_log": os.path.join(base_dir, "tensorboard_logs", run_name),
            })
    return runs


def run_experiments(timestep_config: Optional[str] = None, n_envs: int = 4, base_dir: str = "./experiments"):
    """Train every (algorithm, reward config, timesteps, seed) combination in turn"""
    runs = experiment_runs(timestep_config, base_dir)
    print(f"Running {len(runs)} experiments into {base_dir}")

    results = {}
    for i, run in enumerate(runs, 1):
        print(f"\n[Experiment {i}/{len(runs)}] {run['run_name']}")
        seed_everything(run["seed"])
        kwargs = dict(
            total_timesteps=run["timesteps"],
            save_dir=run["save_dir"],
            log_dir=run["log_dir"],
            tensorboard_log=run["tensorboard_log"],
            reward_config=run["reward_config"],
            seed=run["seed"],
        )
        if run["algorithm"] == "ppo":
            _, metrics = train_ppo(n_envs=n_envs, **kwargs)
        else:
            _, metrics = train_dqn(**kwargs)
        results[run["run_name"]] = metrics.get_summary()

    return results


def main():
    parser = argparse.ArgumentParser(description="Train RL agent on the duck hunt environment")
    parser.add_argument(
        "--algo",
        type=str,
        default="ppo",
        choices=["ppo", "dqn", "all"],
        help="RL algorithm to use (default: ppo)",
    )
    parser.add_argument(
        "--timesteps",
        type=int,
        default=None,
        help=f"Total timesteps to train (default: {TRAINING_CONFIG['total_timesteps']})",
    )
    parser.add_argument(
        "--n-envs",
        type=int,
        default=4,
        help="Number of parallel environments for PPO (default: 4)",
    )
    parser.add_argument(
        "--reward-config",
        type=str,
        default="baseline",
        choices=sorted(REWARD_CONFIGS),
        help="Reward shaping preset (default: baseline)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed python and numpy RNGs before training",
    )
    parser.add_argument(
        "--timestep-config",
        type=str,
        default=None,
        choices=sorted(TIMESTEP_CONFIGS),
        help="Named training length; --timesteps takes precedence",
    )
    parser.add_argument(
        "--experiment",
        type=str,
        default=None,
        choices=["all"],
        help="Run the full experiment matrix over every configured seed",
    )
    parser.add_argument(
        "--experiment-dir",
        type=str,
        default="./experiments",
        help="Output root for --experiment runs (default: ./experiments)",
    )

    args = parser.parse_args()

    if args.experiment == "all":
        run_experiments(args.timestep_config, n_envs=args.n_envs, base_dir=args.experiment_dir)
        return

    seed_everything(args.seed)
    seed = args.seed if args.seed is not None else 0
    timesteps = resolve_timesteps(args.timesteps, args.timestep_config)

    if args.algo == "ppo":
        train_ppo(total_timesteps=timesteps, n_envs=args.n_envs, reward_config=args.reward_config, seed=seed)
    elif args.algo == "dqn":
        train_dqn(total_timesteps=timesteps, reward_config=args.reward_config, seed=seed)
    elif args.algo == "all":
        print("Training all algorithms sequentially...")
        train_dqn(total_timesteps=timesteps, reward_config=args.reward_config, seed=seed)
        train_ppo(total_timesteps=timesteps, n_envs=args.n_envs, reward_config=args.reward_config, seed=seed)


if __name__ == "__main__":
    main()
