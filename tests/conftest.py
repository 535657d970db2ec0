"""
Pytest configuration for maze_solver tests.

Adds the repository root to sys.path so the tests run from a plain checkout
as well as from an editable install.
"""

import os
import sys
from pathlib import Path

import pytest

# Plots are written to files only.
os.environ.setdefault("MPLBACKEND", "Agg")

_root_path = str(Path(__file__).resolve().parent.parent)
if _root_path not in sys.path:
    sys.path.insert(0, _root_path)

from maze_solver.environment.maze import Maze  # noqa: E402


@pytest.fixture
def open_maze() -> Maze:
    """Empty 5x5 maze, start top-left, goal bottom-right."""
    return Maze(5, 5, start=(0, 0), goal=(4, 4))


@pytest.fixture
def walled_maze() -> Maze:
    """A full wall column separates start from goal."""
    return Maze.from_text(
        """
        S.#..
        ..#..
        ..#..
        ..#..
        ..#.G
        """
    )
