"""Transition and reward function.

Rewards:
    -10   the move is blocked (wall or grid edge); the agent stays put
    +100  the move lands on the goal (terminal)
    -1    any other move

Distance-based shaping only appears in bootstrap seeding (training/warmup.py).
"""

from __future__ import annotations

from typing import NamedTuple

from .constants import (
    ACTION_DELTAS,
    ACTION_NAMES,
    REWARD_GOAL,
    REWARD_STEP,
    REWARD_WALL,
)
from .maze import Maze, Position


class StepResult(NamedTuple):
    position: Position
    reward: float
    done: bool


def destination(pos: Position, action: int) -> Position:
    """Cell one step from `pos` in the direction of `action` (may be off-grid)."""
    d_row, d_col = ACTION_DELTAS[int(action)]
    return pos[0] + d_row, pos[1] + d_col


def transition(maze: Maze, pos: Position, action: int) -> StepResult:
    """Apply `action` at `pos` against `maze` (whose goal must be set)."""
    new_pos = destination(pos, action)

    if maze.is_wall(new_pos):
        return StepResult((pos[0], pos[1]), REWARD_WALL, False)

    if new_pos == maze.goal:
        return StepResult(new_pos, REWARD_GOAL, True)

    return StepResult(new_pos, REWARD_STEP, False)


def manhattan(a: Position, b: Position) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def move_direction(prev: Position | None, cur: Position | None) -> str:
    """Label of the last one-cell move, "None" when there was no move."""
    if prev is None or cur is None or prev == cur:
        return "None"
    d_row = cur[0] - prev[0]
    d_col = cur[1] - prev[1]
    for action, delta in ACTION_DELTAS.items():
        if delta == (d_row, d_col):
            return ACTION_NAMES[action]
    return "None"
