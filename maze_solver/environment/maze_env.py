"""Maze Gymnasium environment (core dynamics only)."""

from __future__ import annotations

from typing import Any, Dict

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .constants import (
    UP, RIGHT, DOWN, LEFT,
    ACTION_DELTAS,
    N_ACTIONS,
    METADATA,
)
from .maze import Maze, Position
from .rendering import render_frame, render_text, close_window
from .transition import StepResult, manhattan, transition


class MazeEnv(gym.Env):
    # constants
    UP = UP
    RIGHT = RIGHT
    DOWN = DOWN
    LEFT = LEFT
    ACTION_DELTAS = ACTION_DELTAS

    metadata = METADATA

    def __init__(
        self,
        maze: Maze,
        max_steps: int = 100,
        render_mode: str | None = None,
    ):
        maze.validate_endpoints()
        # Training and playback never see later edits.
        self.maze = maze if not maze.editable else maze.frozen()
        self.max_steps = int(max_steps)
        self.render_mode = render_mode

        # Episode state
        self.steps: int = 0
        self.agent_pos: Position | None = None

        high = np.array([self.maze.rows - 1, self.maze.columns - 1], dtype=np.int32)
        self.action_space = spaces.Discrete(N_ACTIONS)
        self.observation_space = spaces.Dict({
            "agent_pos": spaces.Box(low=0, high=high, shape=(2,), dtype=np.int32),
            "goal_pos": spaces.Box(low=0, high=high, shape=(2,), dtype=np.int32),
        })

        # for rendering
        self.cell_size = 30
        self._window = None
        self._clock = None

    @property
    def start(self) -> Position:
        return self.maze.start

    @property
    def goal(self) -> Position:
        return self.maze.goal

    """
    Reset the agent onto the start cell.

    Returns:
        observation: Dict with agent_pos, goal_pos
        info: Dict with additional information
    """
    def reset(self, seed: int | None = None, options: dict | None = None
    ) -> tuple[Dict[str, Any], Dict[str, Any]]:

        super().reset(seed=seed)

        self.steps = 0
        self.agent_pos = self.maze.start

        obs = self._get_obs()
        info = self._get_info(moved=False)

        if self.render_mode == "human":
            self._render_human()

        return obs, info

    def _get_obs(self) -> Dict[str, Any]:
        assert self.agent_pos is not None
        return {
            "agent_pos": np.array(self.agent_pos, dtype=np.int32),
            "goal_pos": np.array(self.maze.goal, dtype=np.int32),
        }

    def _get_info(self, moved: bool) -> Dict[str, Any]:
        assert self.agent_pos is not None
        return {
            "steps": int(self.steps),
            "moved": bool(moved),
            "dist_to_goal": manhattan(self.agent_pos, self.maze.goal),
        }

    def _apply(self, origin: Position, action: int) -> tuple[Dict[str, Any], float, bool, bool, Dict[str, Any]]:
        result: StepResult = transition(self.maze, origin, action)
        self.agent_pos = result.position

        terminated = bool(result.done)
        truncated = self.steps >= self.max_steps and not terminated

        obs = self._get_obs()
        info = self._get_info(moved=result.position != origin)

        if self.render_mode == "human":
            self._render_human()

        return obs, float(result.reward), terminated, truncated, info

    def step(self, action: int) -> tuple[Dict[str, Any], float, bool, bool, Dict[str, Any]]:
        assert self.agent_pos is not None, "Call reset() before step()"
        assert self.action_space.contains(action), f"Invalid action: {action}"

        self.steps += 1
        return self._apply(self.agent_pos, int(action))

    def override_step(self, origin: Position, action: int) -> tuple[Dict[str, Any], float, bool, bool, Dict[str, Any]]:
        """Replace the last step with `action` taken from `origin`.

        The step budget is not charged again.
        """
        assert self.action_space.contains(action), f"Invalid action: {action}"
        return self._apply(origin, int(action))

    # -------------------- Rendering --------------------

    def render(self) -> str | None:
        assert self.agent_pos is not None

        if self.render_mode == "ansi":
            return render_text(self.maze, self.agent_pos)

        if self.render_mode == "human":
            self._render_human()
            return None

        return None

    def _render_human(self) -> None:
        assert self.agent_pos is not None
        self._window, self._clock = render_frame(
            self.maze,
            self.agent_pos,
            [],
            cell_size=self.cell_size,
            fps=self.metadata["render_fps"],
            window=self._window,
            clock=self._clock,
        )

    def close(self):
        self._window, self._clock = close_window(self._window, self._clock)
