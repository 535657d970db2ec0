"""Playback policies.

  - learned:   argmax over the online Q-network
  - heuristic: step along whichever axis (row or column) is farther from
               the goal; ties go to the column axis

The heuristic is what "Run" uses before any training has finished.
"""

from __future__ import annotations

from typing import Callable, Optional

from ..environment.constants import UP, RIGHT, DOWN, LEFT
from ..environment.maze import Maze, Position
from .agent import DQNAgent

Policy = Callable[[Position], int]


def heuristic_action(pos: Position, goal: Position) -> int:
    row_diff = goal[0] - pos[0]
    col_diff = goal[1] - pos[1]

    if abs(row_diff) > abs(col_diff):
        return DOWN if row_diff > 0 else UP
    return RIGHT if col_diff > 0 else LEFT


def make_policy(maze: Maze, agent: Optional[DQNAgent] = None) -> Policy:
    """Greedy policy over `agent` if given, else the heuristic."""
    goal = maze.goal

    if agent is None:
        return lambda pos: heuristic_action(pos, goal)

    def greedy(pos: Position) -> int:
        return agent.greedy_action(agent.encoder.encode(pos, goal, maze))

    return greedy
