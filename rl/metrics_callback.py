"""
Custom callback for tracking hunt metrics during training.
Records: rounds cleared, kills, escapes, shots, accuracy.
"""

import os
import csv
from typing import Dict, List, Any, Optional
from stable_baselines3.common.callbacks import BaseCallback

from game.hunt.utils import accuracy_percent


class MetricsCallback(BaseCallback):
    """
    Callback to track and log round outcomes per episode.
    Saves to CSV for easy plotting.
    """

    def __init__(
        self,
        log_dir: str,
        algo_name: str,
        verbose: int = 1,
    ):
        super().__init__(verbose)
        self.log_dir = log_dir
        self.algo_name = algo_name

        # Episode tracking
        self.episode_rewards: List[float] = []
        self.episode_lengths: List[int] = []
        self.episode_kills: List[int] = []
        self.episode_escapes: List[int] = []
        self.episode_shots: List[int] = []
        self.episode_clears: List[float] = []

        # CSV file
        self.csv_path: Optional[str] = None
        self.csv_file = None
        self.csv_writer = None

    def _on_training_start(self) -> None:
        """Initialize CSV file for logging."""
        os.makedirs(self.log_dir, exist_ok=True)
        self.csv_path = os.path.join(self.log_dir, f"{self.algo_name}_metrics.csv")

        self.csv_file = open(self.csv_path, "w", newline="")
        self.csv_writer = csv.writer(self.csv_file)
        self.csv_writer.writerow([
            "timestep", "episode", "reward", "length",
            "kills", "escapes", "shots", "accuracy", "clear_rate"
        ])
        self.csv_file.flush()

        if self.verbose > 0:
            print(f"[MetricsCallback] Logging to {self.csv_path}")

    def _on_step(self) -> bool:
        infos = self.locals.get("infos", [])
        dones = self.locals.get("dones", [])

        for info, done in zip(infos, dones):
            # Monitor wrapper adds episode info at episode end
            if done and "episode" in info:
                self.record_episode(info)

        return True

    def record_episode(self, info: Dict[str, Any]) -> None:
        ep_info = info["episode"]
        kills = int(info.get("birds_killed", 0))
        escapes = int(info.get("birds_escaped", 0))
        shots = int(info.get("shots_fired", 0))
        cleared = 1.0 if info.get("round_cleared", False) else 0.0

        self.episode_rewards.append(float(ep_info["r"]))
        self.episode_lengths.append(int(ep_info["l"]))
        self.episode_kills.append(kills)
        self.episode_escapes.append(escapes)
        self.episode_shots.append(shots)
        self.episode_clears.append(cleared)

        if self.csv_writer:
            self.csv_writer.writerow([
                self.num_timesteps,
                len(self.episode_rewards),
                ep_info["r"],
                ep_info["l"],
                kills,
                escapes,
                shots,
                accuracy_percent(kills, shots),
                cleared,
            ])
            self.csv_file.flush()

        if self.verbose > 0 and len(self.episode_rewards) % 10 == 0:
            avg_reward = sum(self.episode_rewards[-10:]) / 10
            clear_rate = sum(self.episode_clears[-10:]) / 10
            print(f"[{self.algo_name}] Episode {len(self.episode_rewards)}, "
                  f"Timestep {self.num_timesteps}, "
                  f"Avg Reward (10 ep): {avg_reward:.2f}, "
                  f"Clear Rate: {clear_rate:.0%}")

    def _on_training_end(self) -> None:
        """Cleanup CSV file."""
        if self.csv_file:
            self.csv_file.close()
            if self.verbose > 0:
                print(f"[MetricsCallback] Saved {len(self.episode_rewards)} episodes to {self.csv_path}")

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics."""
        if not self.episode_rewards:
            return {}

        import numpy as np
        return {
            "mean_reward": np.mean(self.episode_rewards),
            "std_reward": np.std(self.episode_rewards),
            "mean_length": np.mean(self.episode_lengths),
            "total_episodes": len(self.episode_rewards),
            "mean_kills": np.mean(self.episode_kills),
            "mean_escapes": np.mean(self.episode_escapes),
            "clear_rate": np.mean(self.episode_clears),
            "accuracy": accuracy_percent(sum(self.episode_kills), sum(self.episode_shots)),
        }


class TensorboardMetricsCallback(BaseCallback):
    """
    Logs round outcomes to TensorBoard.
    """

    def __init__(self, verbose: int = 0):
        super().__init__(verbose)
        self._episode_rewards = []
        self._episode_lengths = []

    def _on_step(self) -> bool:
        infos = self.locals.get("infos", [])
        dones = self.locals.get("dones", [])

        for info, done in zip(infos, dones):
            if done and "episode" in info:
                ep = info["episode"]
                self._episode_rewards.append(ep["r"])
                self._episode_lengths.append(ep["l"])

                if self.logger:
                    self.logger.record("custom/episode_reward", ep["r"])
                    self.logger.record("custom/episode_length", ep["l"])
                    self.logger.record("custom/round_cleared", float(info.get("round_cleared", False)))
                    self.logger.record("custom/birds_killed", info.get("birds_killed", 0))
                    self.logger.record("custom/shots_fired", info.get("shots_fired", 0))

        return True
