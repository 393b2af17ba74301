"""
Plotting script for hunt training runs.
Learning curves (reward, clear rate, accuracy, kills vs escapes) and an algorithm comparison.
"""

import os
import argparse
import pandas as pd
import numpy as np
import matplotlib.pyplot as plt
from typing import Dict, Optional

COLORS = {"dqn": "#2ecc71", "ppo": "#3498db"}


def load_metrics(log_dir: str, algo: str) -> Optional[pd.DataFrame]:
    """Load the MetricsCallback CSV for an algorithm."""
    for csv_path in (
        os.path.join(log_dir, algo, f"{algo}_metrics.csv"),
        os.path.join(log_dir, f"{algo}_metrics.csv"),
    ):
        if os.path.exists(csv_path):
            return pd.read_csv(csv_path)
    return None


def rolling(series: pd.Series, window: int) -> pd.Series:
    return series.rolling(window, min_periods=1).mean()


def plot_learning_curve(
    df: pd.DataFrame,
    algo: str,
    output_dir: str,
    window: int = 50,
):
    """Four-panel learning curve for one algorithm."""
    fig, axes = plt.subplots(2, 2, figsize=(14, 10))
    fig.suptitle(f"{algo.upper()} Learning Curves", fontsize=16, fontweight="bold")
    t = df["timestep"]

    ax = axes[0, 0]
    ax.plot(t, rolling(df["reward"], window), linewidth=2, color=COLORS.get(algo))
    ax.set_ylabel("Episode Reward")
    ax.set_title("Episode Reward vs Timesteps")

    ax = axes[0, 1]
    ax.plot(t, rolling(df["clear_rate"], window), linewidth=2, color="green")
    ax.set_ylim(0, 1.05)
    ax.set_ylabel("Clear Rate")
    ax.set_title("Rounds Cleared (rolling)")

    ax = axes[1, 0]
    ax.plot(t, rolling(df["accuracy"], window), linewidth=2, color="purple")
    ax.set_ylim(0, 105)
    ax.set_ylabel("Accuracy (%)")
    ax.set_title("Shot Accuracy")

    ax = axes[1, 1]
    ax.plot(t, rolling(df["kills"], window), linewidth=2, label="kills")
    ax.plot(t, rolling(df["escapes"], window), linewidth=2, label="escapes", color="red")
    ax.set_ylabel("Birds per Round")
    ax.set_title("Kills vs Escapes")
    ax.legend()

    for ax in axes.flat:
        ax.set_xlabel("Timesteps")
        ax.grid(True, alpha=0.3)

    plt.tight_layout()

    os.makedirs(output_dir, exist_ok=True)
    save_path = os.path.join(output_dir, f"{algo}_learning_curve.png")
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()

    print(f"Saved {algo} learning curve to {save_path}")
    return save_path


def plot_comparison(
    data: Dict[str, pd.DataFrame],
    output_dir: str,
    window: int = 50,
):
    """Overlay reward and clear rate of every algorithm."""
    fig, axes = plt.subplots(1, 2, figsize=(14, 5))
    fig.suptitle("Algorithm Comparison", fontsize=16, fontweight="bold")

    for algo, df in data.items():
        axes[0].plot(df["timestep"], rolling(df["reward"], window),
                     linewidth=2, label=algo.upper(), color=COLORS.get(algo))
        axes[1].plot(df["timestep"], rolling(df["clear_rate"], window),
                     linewidth=2, label=algo.upper(), color=COLORS.get(algo))

    axes[0].set_ylabel("Episode Reward")
    axes[1].set_ylabel("Clear Rate")
    axes[1].set_ylim(0, 1.05)
    for ax in axes:
        ax.set_xlabel("Timesteps")
        ax.legend()
        ax.grid(True, alpha=0.3)

    plt.tight_layout()

    os.makedirs(output_dir, exist_ok=True)
    save_path = os.path.join(output_dir, "algorithm_comparison.png")
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()

    print(f"Saved comparison plot to {save_path}")
    return save_path


def summarize(data: Dict[str, pd.DataFrame], last: int = 100) -> pd.DataFrame:
    """One row per algorithm, computed over the final episodes."""
    rows = []
    for algo, df in data.items():
        final = df.tail(last)
        rows.append({
            "algorithm": algo.upper(),
            "episodes": len(df),
            "timesteps": int(df["timestep"].max()),
            "mean_reward": final["reward"].mean(),
            "std_reward": final["reward"].std(),
            "clear_rate": final["clear_rate"].mean(),
            "accuracy": final["accuracy"].mean(),
            "mean_kills": final["kills"].mean(),
            "mean_escapes": final["escapes"].mean(),
        })
    return pd.DataFrame(rows)


def generate_summary_report(data: Dict[str, pd.DataFrame], output_dir: str):
    """Print and save the summary table."""
    table = summarize(data)
    report = "\n".join([
        "=" * 60,
        "HUNT TRAINING SUMMARY (last 100 episodes)",
        "=" * 60,
        table.to_string(index=False, float_format=lambda v: f"{v:.2f}"),
        "=" * 60,
    ])
    print(report)

    os.makedirs(output_dir, exist_ok=True)
    report_path = os.path.join(output_dir, "experiment_summary.txt")
    with open(report_path, "w") as f:
        f.write(report)
    table.to_csv(os.path.join(output_dir, "experiment_summary.csv"), index=False)

    print(f"\nSaved summary report to {report_path}")
    return report_path


def main():
    parser = argparse.ArgumentParser(description="Plot hunt training results")
    parser.add_argument("--log-dir", type=str, default="./logs", help="Directory containing log files")
    parser.add_argument("--output-dir", type=str, default="./plots", help="Directory to save plots")
    parser.add_argument("--window", type=int, default=50, help="Smoothing window size (default: 50)")
    parser.add_argument("--algos", nargs="+", default=["dqn", "ppo"], help="Algorithms to plot")

    args = parser.parse_args()

    print(f"Loading metrics from {args.log_dir}...")

    data = {}
    for algo in args.algos:
        df = load_metrics(args.log_dir, algo)
        if df is None or df.empty:
            print(f"  No data found for {algo}")
            continue
        print(f"  Loaded {algo}: {len(df)} episodes")
        data[algo] = df

    if not data:
        print("\nNo data found! Make sure training has generated metrics files.")
        return

    for algo, df in data.items():
        plot_learning_curve(df, algo, args.output_dir, args.window)

    if len(data) > 1:
        plot_comparison(data, args.output_dir, args.window)

    generate_summary_report(data, args.output_dir)

    print(f"\nAll plots saved to {args.output_dir}/")


if __name__ == "__main__":
    main()
