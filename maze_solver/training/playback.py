"""Playback loop.

Replays one episode from the start cell with either
  - the trained greedy policy (argmax over the online network), or
  - the distance-reducing heuristic, when no trained agent is available.

Both run behind the same anti-stall wrapper (3-step threshold by default).
An unreachable goal is not an error: the replay just ends at the step budget.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

from ..config import PLAY_CONFIG
from ..environment.maze import Maze, Position
from ..environment.maze_env import MazeEnv
from ..environment.wrappers import AntiStallWrapper
from .agent import DQNAgent
from .core import StepSnapshot, TrainingRun
from .policy import make_policy


@dataclass
class PlaybackResult:
    mode: str                                   # "learned" or "heuristic"
    path: list[Position] = field(default_factory=list)
    total_reward: float = 0.0
    steps: int = 0
    reached_goal: bool = False
    interventions: int = 0
    cancelled: bool = False
    final_position: Optional[Position] = None


def play(
    maze: Maze,
    agent: Optional[DQNAgent] = None,
    *,
    use_learned: bool = True,
    max_steps: int = PLAY_CONFIG["max_steps"],
    stall_threshold: int = PLAY_CONFIG["stall_threshold"],
    seed: Optional[int] = None,
    on_step: Optional[Callable[[StepSnapshot], None]] = None,
    should_stop: Optional[Callable[[], bool]] = None,
    log_interval: int = PLAY_CONFIG["log_interval"],
) -> PlaybackResult:
    """Replay the learned (or heuristic) path from start toward goal."""
    maze.validate_endpoints()
    if maze.editable:
        maze = maze.frozen()

    learned = agent is not None and use_learned
    policy = make_policy(maze, agent if learned else None)
    result = PlaybackResult(mode="learned" if learned else "heuristic")

    env = AntiStallWrapper(MazeEnv(maze, max_steps=max_steps), threshold=stall_threshold)
    env.reset(seed=seed)

    run = TrainingRun()
    run.begin_episode(1, 0.0, maze.start)
    done = False

    while not done:
        if should_stop is not None and should_stop():
            result.cancelled = True
            break

        action = policy(env.unwrapped.agent_pos)
        _, reward, terminated, truncated, _ = env.step(action)
        done = bool(terminated or truncated)
        run.record_step(env.unwrapped.agent_pos, reward, terminated, env)

        if log_interval > 0 and run.step % int(log_interval) == 0:
            print(
                f"  Step {run.step:>3d} │ "
                f"pos=({run.agent_pos[0]:>2d},{run.agent_pos[1]:>2d}) │ "
                f"score={run.total_reward:>7.1f}"
            )

        if on_step is not None:
            on_step(run.snapshot("playing", training_complete=learned, done=done))

    env.close()

    result.path = list(run.path)
    result.total_reward = run.total_reward
    result.steps = run.step
    result.final_position = run.agent_pos
    result.reached_goal = run.reached_goal
    result.interventions = env.interventions
    return result
