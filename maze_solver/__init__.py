"""
Maze Solver
===========
Draw a grid maze, train a DQN agent to walk from start to goal, then replay
the learned path (or a distance-reducing heuristic before training).

This package provides:
- Maze: the editable occupancy grid with start/goal cells
- MazeEnv: Gymnasium environment over a frozen maze
- train / play: the DQN training loop and the playback policy
- MazeSession: Drawing -> Training -> Playing state machine for front-ends

Usage:
    from maze_solver import Maze, train, play

    maze = Maze.from_text('''
        S....
        .....
        .....
        .....
        ....G
    ''')
    result = train(maze, seed=0)
    replay = play(maze, result.agent)
    print(replay.reached_goal, replay.total_reward)
"""

__version__ = "1.0.0"

from .environment.maze import Maze, MissingEndpointsError, load_maze
from .environment.maze_env import MazeEnv
from .training.core import train, TrainingResult, StepSnapshot
from .training.playback import play, PlaybackResult
from .session import MazeSession, GameState, Tool

__all__ = [
    "Maze",
    "MissingEndpointsError",
    "load_maze",
    "MazeEnv",
    "train",
    "TrainingResult",
    "StepSnapshot",
    "play",
    "PlaybackResult",
    "MazeSession",
    "GameState",
    "Tool",
]
