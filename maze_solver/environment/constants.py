"""Constants for the maze environment."""

from __future__ import annotations

from typing import Dict, Tuple

# Actions (clockwise from up)
UP: int = 0
RIGHT: int = 1
DOWN: int = 2
LEFT: int = 3

N_ACTIONS: int = 4

# (d_row, d_col)
ACTION_DELTAS: Dict[int, Tuple[int, int]] = {
    UP: (-1, 0),
    RIGHT: (0, 1),
    DOWN: (1, 0),
    LEFT: (0, -1),
}

ACTION_NAMES: Dict[int, str] = {
    UP: "Up",
    RIGHT: "Right",
    DOWN: "Down",
    LEFT: "Left",
}

# Tiles (grid[row, col])
TILE_FREE: int = 0
TILE_WALL: int = 1

# Rewards
REWARD_GOAL: float = 100.0
REWARD_WALL: float = -10.0
REWARD_STEP: float = -1.0

# Bootstrap seeding rewards (Manhattan progress from the start cell)
REWARD_CLOSER: float = 5.0
REWARD_FARTHER: float = -5.0

# Text layout symbols
SYMBOL_FREE = "."
SYMBOL_WALL = "#"
SYMBOL_START = "S"
SYMBOL_GOAL = "G"

METADATA = {
    "render_modes": ["human", "ansi"],
    "render_fps": 10,
}
