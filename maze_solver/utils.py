"""
Utility functions for training and evaluation.
"""

from __future__ import annotations

import os
import random
from typing import List, Optional

import numpy as np
import matplotlib.pyplot as plt

try:
    import torch
except ImportError as e:  # pragma: no cover
    raise ImportError("PyTorch is required. Install with: pip install torch") from e


def seed_everything(seed: int) -> None:
    """Seed python, numpy and torch so runs repeat."""
    random.seed(seed)
    np.random.seed(seed)
    torch.manual_seed(seed)


def _moving_average(values, window: int) -> np.ndarray:
    return np.convolve(values, np.ones(window) / window, mode="valid")


def _plot_series(ax, values, window: int, color: str, label: str, ylabel: str, title: str) -> None:
    ax.plot(values, alpha=0.3, color=color, label=label)
    if len(values) >= window:
        ax.plot(
            range(window - 1, len(values)),
            _moving_average(values, window),
            color="red",
            label=f"Moving Avg ({window})",
        )
    ax.set_xlabel("Episode")
    ax.set_ylabel(ylabel)
    ax.set_title(title)
    ax.legend()
    ax.grid(True, alpha=0.3)


def plot_training_stats(
    rewards: List[float],
    lengths: List[int],
    successes: Optional[List[bool]] = None,
    window: int = 10,
    save_path: str | None = None,
):
    """
    Plot per-episode training curves with a moving average.

    Args:
        rewards: Total reward of each episode.
        lengths: Steps taken in each episode.
        successes: Whether each episode reached the goal (adds a third panel).
        window: Window size for the moving average.
        save_path: Optional path to save the plot instead of showing it.
    """
    n_panels = 3 if successes is not None else 2
    fig, axes = plt.subplots(n_panels, 1, figsize=(10, 4 * n_panels))

    _plot_series(axes[0], rewards, window, "blue", "Episode Reward", "Reward", "Training Rewards")
    _plot_series(axes[1], lengths, window, "green", "Episode Length", "Steps", "Steps to Goal")
    if successes is not None:
        rate = [100.0 * float(s) for s in successes]
        _plot_series(axes[2], rate, window, "purple", "Reached Goal", "Success %", "Goal Reached")
        axes[2].set_ylim(-5, 105)

    plt.tight_layout()

    if save_path:
        directory = os.path.dirname(save_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        plt.savefig(save_path, dpi=150)
        print(f"Plot saved to {save_path}")
    else:
        plt.show()

    plt.close(fig)
