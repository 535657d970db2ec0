"""State encoding for the maze.

DQN expects a fixed-size vector, so (agent position, goal, local walls)
becomes 8 floats:
  - 2 normalized position scalars:      row / rows, col / columns
  - 2 normalized goal offsets:          (goal_row - row) / rows, (goal_col - col) / columns
  - 4 wall indicators in action order:  up, right, down, left
    (1.0 when that neighbour is a wall or off the grid)

The width is the same for every maze, so one network shape fits all.

This encoder is intentionally *pure*:
  - it does not touch PyTorch unless you ask for a tensor
  - it does not own any model parameters
"""

from __future__ import annotations

import numpy as np

try:
    import torch
except ImportError as e:  # pragma: no cover
    raise ImportError("PyTorch is required. Install with: pip install torch") from e

from ..environment.constants import ACTION_DELTAS, N_ACTIONS
from ..environment.maze import Maze, Position

FEATURE_DIM = 4 + N_ACTIONS


class StateEncoder:
    """Encodes (agent, goal, maze) into a flat float32 feature vector."""

    def __init__(self, rows: int, columns: int):
        self.rows = int(rows)
        self.columns = int(columns)
        self.feature_dim = FEATURE_DIM

    @classmethod
    def for_maze(cls, maze: Maze) -> "StateEncoder":
        return cls(maze.rows, maze.columns)

    def encode(self, agent_pos: Position, goal_pos: Position, maze: Maze) -> np.ndarray:
        """Return a 1D float32 feature vector of length `feature_dim`."""
        row, col = int(agent_pos[0]), int(agent_pos[1])
        goal_row, goal_col = int(goal_pos[0]), int(goal_pos[1])

        walls = [
            1.0 if maze.is_wall((row + d_row, col + d_col)) else 0.0
            for d_row, d_col in (ACTION_DELTAS[a] for a in range(N_ACTIONS))
        ]

        return np.array(
            [
                row / self.rows,
                col / self.columns,
                (goal_row - row) / self.rows,
                (goal_col - col) / self.columns,
                *walls,
            ],
            dtype=np.float32,
        )

    def encode_obs(self, obs: dict, maze: Maze) -> np.ndarray:
        """Encode a MazeEnv observation dict."""
        return self.encode(tuple(obs["agent_pos"]), tuple(obs["goal_pos"]), maze)

    def encode_tensor(self, agent_pos: Position, goal_pos: Position, maze: Maze, device="cpu"):
        """Encode and return a torch tensor shaped (1, D)."""
        x = self.encode(agent_pos, goal_pos, maze)
        return torch.tensor(x, dtype=torch.float32, device=device).unsqueeze(0)
