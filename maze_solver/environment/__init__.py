"""Maze model, dynamics and the Gymnasium environment built on them."""

from .constants import UP, RIGHT, DOWN, LEFT, ACTION_DELTAS, ACTION_NAMES
from .maze import Maze, MissingEndpointsError, load_maze
from .transition import StepResult, transition, manhattan, move_direction
from .maze_env import MazeEnv
from .wrappers import AntiStallWrapper

__all__ = [
    "UP",
    "RIGHT",
    "DOWN",
    "LEFT",
    "ACTION_DELTAS",
    "ACTION_NAMES",
    "Maze",
    "MissingEndpointsError",
    "load_maze",
    "StepResult",
    "transition",
    "manhattan",
    "move_direction",
    "MazeEnv",
    "AntiStallWrapper",
]
