"""
Training configuration for the duck hunt environment
Reward shaping presets and algorithm hyperparameters
"""

# Environment parameters
ENV_CONFIG = {
    # "render_mode": None,  # Don't render during training - it's too slow with parallel envs
    "level": 1,
    "round": 1,
    "random_level": True,
    "dt": 1 / 60,
    "max_steps": 3000,  # 50 seconds at 60 FPS
    "k_birds": 3,
}

# ==============================================================================
# REWARD SHAPING CONFIGURATIONS
# ==============================================================================

# Reward Config 1: BASELINE
REWARD_CONFIG_BASELINE = {
    "name": "baseline",
    "description": "Balanced: kills and clears pay, wasted shots and escapes cost",
    "R_KILL": 1.0,         # Reward per hit-producing shot
    "R_CLEAR": 2.0,        # Round cleared
    "R_SHOT": 0.05,        # Ammo is scarce
    "R_ESCAPE": 2.0,       # Any escape loses the round
    "R_OUT_OF_AMMO": 1.0,  # Round lost on ammo
    "R_TIME": 0.001,       # Small time penalty
}

# Reward Config 2: SHARPSHOOTER (punish spraying)
REWARD_CONFIG_SHARPSHOOTER = {
    "name": "sharpshooter",
    "description": "Accuracy first - expensive shots, bigger clear bonus",
    "R_KILL": 1.0,
    "R_CLEAR": 3.0,
    "R_SHOT": 0.3,
    "R_ESCAPE": 2.0,
    "R_OUT_OF_AMMO": 2.0,
    "R_TIME": 0.0005,
}

REWARD_CONFIGS = {
    "baseline": REWARD_CONFIG_BASELINE,
    "sharpshooter": REWARD_CONFIG_SHARPSHOOTER,
}

# ==============================================================================
# TIMESTEP CONFIGURATIONS
# ==============================================================================

TIMESTEP_CONFIGS = {
    "short": 50_000,
    "medium": 500_000,
    "long": 1_600_000,
}

# ==============================================================================
# ALGORITHM HYPERPARAMETERS
# ==============================================================================

# PPO hyperparameters
PPO_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 3e-4,
    "n_steps": 1024,
    "batch_size": 256,
    "n_epochs": 10,
    "gamma": 0.99,
    "gae_lambda": 0.95,
    "clip_range": 0.2,
    "ent_coef": 0.01,
    "vf_coef": 0.5,
    "max_grad_norm": 0.5,
    "verbose": 1,
}

# DQN hyperparameters
DQN_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 1e-4,
    "buffer_size": 100_000,
    "learning_starts": 1000,
    "batch_size": 128,
    "tau": 1.0,
    "gamma": 0.99,
    "train_freq": 4,
    "gradient_steps": 1,
    "target_update_interval": 1000,
    "exploration_fraction": 0.1,
    "exploration_initial_eps": 1.0,
    "exploration_final_eps": 0.05,
    "verbose": 1,
}

# ==============================================================================
# TRAINING SETTINGS
# ==============================================================================

TRAINING_CONFIG = {
    "total_timesteps": 500_000,
    "save_freq": 10_000,
    "eval_freq": 5_000,
    "log_dir": "./logs",
    "model_dir": "./models",
    "tensorboard_log": "./tensorboard_logs",
}

# ==============================================================================
# EXPERIMENT CONFIGURATION
# ==============================================================================

EXPERIMENT_CONFIG = {
    "seeds": [42, 123, 456],
    "n_eval_episodes": 10,
    "algorithms": ["dqn", "ppo"],
    "reward_configs": ["baseline", "sharpshooter"],
    "timestep_configs": ["short", "medium", "long"],
}


def reward_params(name: str) -> dict:
    """Reward constants of a preset, without its name/description"""
    if name not in REWARD_CONFIGS:
        raise ValueError(f"Unknown reward config: {name}")
    return {k: v for k, v in REWARD_CONFIGS[name].items() if k.startswith("R_")}


def get_experiment_matrix():
    """
    Generate all experiment configurations.
    Returns list of dicts with: name, algorithm, reward_config, timesteps
    """
    experiments = []

    for reward_name in EXPERIMENT_CONFIG["reward_configs"]:
        for timestep_name in EXPERIMENT_CONFIG["timestep_configs"]:
            for algo in EXPERIMENT_CONFIG["algorithms"]:
                exp_name = f"{algo}_{reward_name}_{timestep_name}"
                experiments.append({
                    "name": exp_name,
                    "algorithm": algo,
                    "reward_config": reward_name,
                    "reward_params": reward_params(reward_name),
                    "timestep_config": timestep_name,
                    "timesteps": TIMESTEP_CONFIGS[timestep_name],
                })

    return experiments


if __name__ == "__main__":
    experiments = get_experiment_matrix()
    print(f"Total experiments: {len(experiments)}")
    print("\nExperiment Matrix:")
    print("-" * 70)
    for exp in experiments:
        print(f"  {exp['name']:35} | {exp['timesteps']:>10,} steps")
    print("-" * 70)
