"""Core DQN training loop.

This module contains *only* the episode loop. Everything it drives lives in
its own module:
    * maze dynamics:      environment/transition.py, environment/maze_env.py
    * anti-stall:         environment/wrappers.py
    * state encoding:     training/encoder.py
    * replay storage:     training/replay.py
    * network update:     training/agent.py
    * bootstrap seeding:  training/warmup.py

Mutable per-run state is kept in a `TrainingRun` value that only this loop
touches. Observers get an immutable `StepSnapshot` after every transition via
the optional `on_step` hook; nothing here depends on the hook being set.

Cadences
--------
- epsilon decays per *episode*
- the target network syncs every `target_update_steps` *global steps*
"""

from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Optional

import numpy as np

from ..config import AGENT_CONFIG, TRAIN_CONFIG
from ..environment.maze import Maze, Position
from ..environment.maze_env import MazeEnv
from ..environment.transition import move_direction
from ..environment.wrappers import AntiStallWrapper
from ..utils import seed_everything
from .agent import DQNAgent
from .encoder import StateEncoder
from .replay import ReplayBuffer, Transition
from .schedules import linear_epsilon, train_iterations
from .warmup import bootstrap_memory


@dataclass(frozen=True)
class StepSnapshot:
    """What a renderer gets to see after each step."""

    phase: str                      # "training", "complete" or "playing"
    episode: int
    step: int
    agent_pos: Position
    path: tuple[Position, ...]
    score: float
    training_complete: bool
    done: bool = False
    direction: str = "None"


@dataclass
class TrainingRun:
    """Ephemeral state of one episode loop."""

    episode: int = 0
    step: int = 0
    epsilon: float = 0.0
    total_reward: float = 0.0
    agent_pos: Optional[Position] = None
    path: list[Position] = field(default_factory=list)
    last_position: Optional[Position] = None
    stuck_counter: int = 0
    global_step: int = 0
    reached_goal: bool = False

    def begin_episode(self, episode: int, epsilon: float, start: Position) -> None:
        self.episode = episode
        self.step = 0
        self.epsilon = epsilon
        self.total_reward = 0.0
        self.agent_pos = start
        self.path = []
        self.last_position = None
        self.stuck_counter = 0
        self.reached_goal = False

    def record_step(self, new_pos: Position, reward: float, reached_goal: bool, stall: AntiStallWrapper) -> None:
        self.step += 1
        self.global_step += 1
        self.total_reward += float(reward)
        # Only cells the agent actually moved into go on the path.
        if new_pos != self.agent_pos:
            self.path.append(new_pos)
        self.agent_pos = new_pos
        self.last_position = stall.last_position
        self.stuck_counter = stall.stuck_counter
        self.reached_goal = self.reached_goal or bool(reached_goal)

    def snapshot(self, phase: str, training_complete: bool, done: bool = False) -> StepSnapshot:
        prev = self.path[-2] if len(self.path) >= 2 else None
        cur = self.path[-1] if self.path else None
        return StepSnapshot(
            phase=phase,
            episode=self.episode,
            step=self.step,
            agent_pos=self.agent_pos,
            path=tuple(self.path),
            score=self.total_reward,
            training_complete=training_complete,
            done=done,
            direction=move_direction(prev, cur),
        )


@dataclass
class TrainingResult:
    """Summary of a training run."""

    agent: Optional[DQNAgent]
    episode_rewards: list[float] = field(default_factory=list)
    episode_lengths: list[int] = field(default_factory=list)
    successes: list[bool] = field(default_factory=list)
    epsilons: list[float] = field(default_factory=list)
    completed: bool = False
    cancelled: bool = False
    global_step: int = 0
    elapsed: float = 0.0

    @property
    def episodes(self) -> int:
        return len(self.episode_rewards)

    @property
    def success_rate(self) -> float:
        return sum(self.successes) / len(self.successes) if self.successes else 0.0


def train(
    maze: Maze,
    *,
    agent: Optional[DQNAgent] = None,
    # Budget
    n_episodes: int = TRAIN_CONFIG["n_episodes"],
    max_steps: int = TRAIN_CONFIG["max_steps"],
    # Exploration
    eps_start: float = TRAIN_CONFIG["eps_start"],
    eps_end: float = TRAIN_CONFIG["eps_end"],
    # DQN
    batch_size: int = AGENT_CONFIG["batch_size"],
    replay_size: int = AGENT_CONFIG["replay_size"],
    target_update_steps: int = AGENT_CONFIG["target_update_steps"],
    warm_episodes: int = TRAIN_CONFIG["warm_episodes"],
    warm_iterations: int = TRAIN_CONFIG["warm_iterations"],
    iterations: int = TRAIN_CONFIG["iterations"],
    # Anti-stall
    stall_threshold: int = TRAIN_CONFIG["stall_threshold"],
    # Reproducibility
    seed: Optional[int] = None,
    # Hooks
    on_step: Optional[Callable[[StepSnapshot], None]] = None,
    should_stop: Optional[Callable[[], bool]] = None,
    # Logging
    log_interval: int = TRAIN_CONFIG["log_interval"],
) -> TrainingResult:
    """Train a DQN agent to walk from the maze's start to its goal.

    Raises MissingEndpointsError before doing anything if the maze has no
    valid start/goal. `should_stop` is polled at every step boundary; when it
    returns True the run ends with `cancelled=True`.
    """
    maze.validate_endpoints()
    if maze.editable:
        maze = maze.frozen()

    if seed is not None:
        seed_everything(seed)

    if agent is None:
        agent = DQNAgent(StateEncoder.for_maze(maze))
    encoder = agent.encoder

    replay = ReplayBuffer(replay_size)
    bootstrap_memory(replay, encoder, maze)

    env = AntiStallWrapper(MazeEnv(maze, max_steps=max_steps), threshold=stall_threshold)

    run = TrainingRun()
    result = TrainingResult(agent=agent)

    # Rolling stats for logs.
    recent_rewards = deque(maxlen=max(1, int(log_interval)))
    recent_successes = deque(maxlen=max(1, int(log_interval)))
    recent_losses = deque(maxlen=500)

    start_time = time.time()
    cancelled = False

    for ep in range(1, int(n_episodes) + 1):
        eps = linear_epsilon(ep - 1, eps_start, eps_end, n_episodes)
        n_iters = train_iterations(ep - 1, warm_episodes, warm_iterations, iterations)

        # Seed the wrapper's RNG once; later resets keep drawing from it.
        obs, _ = env.reset(seed=seed if ep == 1 else None)
        run.begin_episode(ep, eps, maze.start)
        s = encoder.encode_obs(obs, maze)
        done = False

        while not done:
            if should_stop is not None and should_stop():
                cancelled = True
                break

            # --- Action selection (epsilon-greedy) ---------------------------
            action = agent.act(s, eps)

            # --- Env step (anti-stall may replace the action) ----------------
            next_obs, reward, terminated, truncated, info = env.step(action)
            done = bool(terminated or truncated)

            # --- Store transition --------------------------------------------
            s2 = encoder.encode_obs(next_obs, maze)
            replay.push(Transition(s=s, a=info["action"], r=reward, s2=s2, done=terminated))
            run.record_step(env.unwrapped.agent_pos, reward, terminated, env)

            # --- Learning update ---------------------------------------------
            if replay.can_sample(batch_size):
                for _ in range(n_iters):
                    batch = replay.sample(batch_size)
                    recent_losses.append(agent.learn(batch))

            # Hard update target network every N global steps.
            if run.global_step % int(target_update_steps) == 0:
                agent.sync_target()

            if on_step is not None:
                on_step(run.snapshot("training", training_complete=False, done=done))

            s = s2

        if cancelled:
            break

        # --- End of episode bookkeeping --------------------------------------
        result.episode_rewards.append(run.total_reward)
        result.episode_lengths.append(run.step)
        result.successes.append(run.reached_goal)
        result.epsilons.append(eps)
        recent_rewards.append(run.total_reward)
        recent_successes.append(1.0 if run.reached_goal else 0.0)

        # --- Logging ----------------------------------------------------------
        if log_interval > 0 and ep % int(log_interval) == 0:
            avg_r = float(np.mean(recent_rewards)) if recent_rewards else 0.0
            avg_succ = float(np.mean(recent_successes) * 100.0) if recent_successes else 0.0
            avg_loss = float(np.mean(recent_losses)) if recent_losses else 0.0

            print(
                f"  Ep {ep:>4d}/{n_episodes} │ "
                f"R={avg_r:>8.2f} │ "
                f"Succ={avg_succ:>5.1f}% │ "
                f"ε={eps:.3f} │ "
                f"Loss={avg_loss:.4f} │ "
                f"buf={len(replay):>5d}"
            )

    env.close()

    result.cancelled = cancelled
    result.completed = not cancelled
    result.global_step = run.global_step
    result.elapsed = float(time.time() - start_time)

    if result.completed and on_step is not None:
        # Hand control to playback: agent back on the start, empty path.
        run.begin_episode(run.episode, run.epsilon, maze.start)
        on_step(run.snapshot("complete", training_complete=True))

    return result
