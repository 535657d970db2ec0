"""Schedules (epsilon, gradient steps per tick)."""

from __future__ import annotations


def linear_epsilon(episode: int, start: float, end: float, decay_episodes: int) -> float:
    """Linear epsilon decay with a floor.

    - At episode 0: epsilon = start
    - At episode decay_episodes: epsilon = end
    - After that: epsilon stays at end
    """
    episode = int(episode)
    decay_episodes = max(1, int(decay_episodes))
    t = episode / decay_episodes
    return float(max(end, start - t * (start - end)))


def train_iterations(episode: int, warm_episodes: int, warm_iterations: int, iterations: int) -> int:
    """Gradient steps per environment step: more of them in the first episodes."""
    return int(warm_iterations) if int(episode) < int(warm_episodes) else int(iterations)
