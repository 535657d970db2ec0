"""Grid maze model.

The maze is a fixed-size occupancy grid (`grid[row, col]`, 0 = free,
1 = wall) plus two distinguished cells: the start and the goal.

Queries (`in_bounds`, `is_wall`, `is_free`) never raise: an out-of-bounds
position simply reports as blocked, because every transition hits them.

Editing methods are what a maze editor calls while the user draws. They
refuse invalid placements (return False) instead of raising, the same way a
click on an illegal cell is ignored by the editor.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from .constants import (
    TILE_FREE,
    TILE_WALL,
    SYMBOL_FREE,
    SYMBOL_WALL,
    SYMBOL_START,
    SYMBOL_GOAL,
)

Position = Tuple[int, int]


class MissingEndpointsError(ValueError):
    """Raised when training or playback starts without a valid start and goal."""


class Maze:
    """Rectangular wall grid with a start and a goal cell."""

    def __init__(
        self,
        rows: int,
        columns: int,
        grid: np.ndarray | None = None,
        start: Optional[Position] = None,
        goal: Optional[Position] = None,
    ):
        self.rows = int(rows)
        self.columns = int(columns)
        if self.rows <= 0 or self.columns <= 0:
            raise ValueError(f"Maze dimensions must be positive, got {rows}x{columns}")

        if grid is None:
            grid = np.full((self.rows, self.columns), TILE_FREE, dtype=np.int8)
        else:
            grid = np.array(grid, dtype=np.int8)
            if grid.shape != (self.rows, self.columns):
                raise ValueError(
                    f"Grid shape {grid.shape} does not match {self.rows}x{self.columns}"
                )
        self.grid = grid

        self.start: Optional[Position] = None
        self.goal: Optional[Position] = None
        if start is not None and not self.set_start(*start):
            raise ValueError(f"Invalid start position: {start}")
        if goal is not None and not self.set_goal(*goal):
            raise ValueError(f"Invalid goal position: {goal}")

    # -------------------- Queries --------------------

    @property
    def shape(self) -> tuple[int, int]:
        return self.rows, self.columns

    def in_bounds(self, pos: Position) -> bool:
        row, col = pos
        return 0 <= row < self.rows and 0 <= col < self.columns

    def is_wall(self, pos: Position) -> bool:
        """True for wall cells and for anything off the grid."""
        if not self.in_bounds(pos):
            return True
        return int(self.grid[pos[0], pos[1]]) == TILE_WALL

    def is_free(self, pos: Position) -> bool:
        return self.in_bounds(pos) and not self.is_wall(pos)

    @property
    def has_endpoints(self) -> bool:
        return self.start is not None and self.goal is not None

    @property
    def editable(self) -> bool:
        return bool(self.grid.flags.writeable)

    def validate_endpoints(self) -> tuple[Position, Position]:
        """Return (start, goal) or raise MissingEndpointsError."""
        if self.start is None or self.goal is None:
            raise MissingEndpointsError("Please place start and goal points")
        for name, pos in (("start", self.start), ("goal", self.goal)):
            if not self.is_free(pos):
                raise MissingEndpointsError(f"The {name} cell {pos} is not a free cell")
        if self.start == self.goal:
            raise MissingEndpointsError("Start and goal must be different cells")
        return self.start, self.goal

    # -------------------- Editing --------------------

    def set_wall(self, row: int, col: int) -> bool:
        pos = (int(row), int(col))
        if not self.in_bounds(pos) or pos in (self.start, self.goal):
            return False
        self.grid[pos] = TILE_WALL
        return True

    def clear_cell(self, row: int, col: int) -> bool:
        """Erase a cell: removes the wall and any endpoint placed on it."""
        pos = (int(row), int(col))
        if not self.in_bounds(pos):
            return False
        self.grid[pos] = TILE_FREE
        if self.start == pos:
            self.start = None
        if self.goal == pos:
            self.goal = None
        return True

    def set_start(self, row: int, col: int) -> bool:
        pos = (int(row), int(col))
        if not self.is_free(pos) or pos == self.goal:
            return False
        self.start = pos
        return True

    def set_goal(self, row: int, col: int) -> bool:
        pos = (int(row), int(col))
        if not self.is_free(pos) or pos == self.start:
            return False
        self.goal = pos
        return True

    def clear(self) -> None:
        self.grid[:, :] = TILE_FREE
        self.start = None
        self.goal = None

    # -------------------- Copies --------------------

    def copy(self) -> "Maze":
        return Maze(self.rows, self.columns, self.grid.copy(), self.start, self.goal)

    def frozen(self) -> "Maze":
        """Read-only copy handed to training and playback."""
        maze = self.copy()
        maze.grid.flags.writeable = False
        return maze

    # -------------------- Text layouts --------------------

    @classmethod
    def from_text(cls, text: str) -> "Maze":
        """Parse a layout using `#` walls, `.` free, `S` start and `G` goal.

        Blank lines and surrounding whitespace are ignored, so layouts can be
        written as indented triple-quoted strings.
        """
        lines = [line.strip() for line in text.strip().splitlines() if line.strip()]
        if not lines:
            raise ValueError("Empty maze layout")
        width = len(lines[0])
        if any(len(line) != width for line in lines):
            raise ValueError("All maze rows must have the same length")

        grid = np.full((len(lines), width), TILE_FREE, dtype=np.int8)
        start = goal = None
        for r, line in enumerate(lines):
            for c, ch in enumerate(line):
                if ch == SYMBOL_WALL:
                    grid[r, c] = TILE_WALL
                elif ch == SYMBOL_START:
                    start = (r, c)
                elif ch == SYMBOL_GOAL:
                    goal = (r, c)
                elif ch != SYMBOL_FREE:
                    raise ValueError(f"Unknown maze symbol {ch!r} at row {r}, col {c}")

        return cls(len(lines), width, grid, start, goal)

    def to_text(self) -> str:
        lines = []
        for r in range(self.rows):
            row = ""
            for c in range(self.columns):
                if (r, c) == self.start:
                    row += SYMBOL_START
                elif (r, c) == self.goal:
                    row += SYMBOL_GOAL
                elif self.grid[r, c] == TILE_WALL:
                    row += SYMBOL_WALL
                else:
                    row += SYMBOL_FREE
            lines.append(row)
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Maze({self.rows}x{self.columns}, start={self.start}, goal={self.goal})"


def load_maze(filepath: str) -> Maze:
    """Read a text layout from disk."""
    with open(filepath, "r") as f:
        return Maze.from_text(f.read())
