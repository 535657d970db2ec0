"""Rendering helpers (pygame + ANSI) for the maze.

This file is the ONLY place that knows about pygame.
The Gym env and the trainer should not import pygame directly.
"""

from __future__ import annotations

from typing import Iterable, Optional

from .constants import TILE_WALL
from .maze import Maze, Position

# Colors
COLOR_BACKGROUND = (255, 255, 255)
COLOR_GRID = (221, 221, 221)
COLOR_WALL = (51, 51, 51)
COLOR_START = (76, 175, 80)
COLOR_GOAL = (233, 30, 99)
COLOR_AGENT = (33, 150, 243)
COLOR_PATH = (166, 208, 243)


def render_text(maze: Maze, agent_pos: Optional[Position], path: Iterable[Position] = ()) -> str:
    on_path = set(path)
    lines = []
    for r in range(maze.rows):
        row = ""
        for c in range(maze.columns):
            pos = (r, c)
            if pos == agent_pos:
                row += " A"
            elif pos == maze.goal:
                row += " G"
            elif pos == maze.start:
                row += " S"
            elif maze.grid[r, c] == TILE_WALL:
                row += " #"
            elif pos in on_path:
                row += " *"
            else:
                row += " ."
        lines.append(row)
    return "\n".join(lines)


def _require_pygame():
    try:
        import pygame  # type: ignore
    except ImportError as e:
        raise ImportError("pygame is required for the maze window. Install with: pip install pygame") from e
    return pygame


def _center(pos: Position, cell_size: int) -> tuple[int, int]:
    return pos[1] * cell_size + cell_size // 2, pos[0] * cell_size + cell_size // 2


def render_frame(
    maze: Maze,
    agent_pos: Optional[Position],
    path: list[Position],
    *,
    cell_size: int,
    fps: int,
    window: Optional[object],
    clock: Optional[object],
    caption: str = "Maze Solver",
) -> tuple[Optional[object], Optional[object]]:
    """Draw one frame into a pygame window, creating it on first use.

    Returns (window, clock).
    """
    pygame = _require_pygame()

    width = maze.columns * cell_size
    height = maze.rows * cell_size

    if window is None:
        pygame.init()
        pygame.display.init()
        window = pygame.display.set_mode((width, height))
    pygame.display.set_caption(caption)

    if clock is None:
        clock = pygame.time.Clock()

    canvas = pygame.Surface((width, height))
    canvas.fill(COLOR_BACKGROUND)

    for r in range(maze.rows):
        for c in range(maze.columns):
            rect = pygame.Rect(c * cell_size, r * cell_size, cell_size, cell_size)
            if maze.grid[r, c] == TILE_WALL:
                pygame.draw.rect(canvas, COLOR_WALL, rect)
            pygame.draw.rect(canvas, COLOR_GRID, rect, 1)

    # Path is drawn from the start through every visited cell.
    if path and maze.start is not None:
        points = [_center(maze.start, cell_size)] + [_center(p, cell_size) for p in path]
        if len(points) > 1:
            pygame.draw.lines(canvas, COLOR_PATH, False, points, max(1, cell_size // 4))

    if maze.start is not None:
        pygame.draw.circle(canvas, COLOR_START, _center(maze.start, cell_size), cell_size // 3)
    if maze.goal is not None:
        pygame.draw.circle(canvas, COLOR_GOAL, _center(maze.goal, cell_size), cell_size // 3)
    if agent_pos is not None:
        pygame.draw.circle(canvas, COLOR_AGENT, _center(agent_pos, cell_size), int(cell_size / 2.5))

    window.blit(canvas, (0, 0))
    pygame.event.pump()
    pygame.display.flip()
    clock.tick(fps)
    return window, clock


def close_window(window: Optional[object], clock: Optional[object]) -> tuple[Optional[object], Optional[object]]:
    if window is None:
        return None, None
    pygame = _require_pygame()
    pygame.display.quit()
    pygame.quit()
    return None, None


class PygameViewer:
    """Step callback that draws every snapshot it receives.

    Pass an instance as `on_step` to `train()` or `play()`.
    """

    def __init__(self, maze: Maze, cell_size: int = 30, fps: int = 30):
        self.maze = maze
        self.cell_size = int(cell_size)
        self.fps = int(fps)
        self._window = None
        self._clock = None

    def __call__(self, snapshot) -> None:
        caption = (
            f"Maze Solver - {snapshot.phase} │ "
            f"episode {snapshot.episode} │ score {snapshot.score:.0f}"
        )
        self._window, self._clock = render_frame(
            self.maze,
            snapshot.agent_pos,
            list(snapshot.path),
            cell_size=self.cell_size,
            fps=self.fps,
            window=self._window,
            clock=self._clock,
            caption=caption,
        )

    def close(self) -> None:
        self._window, self._clock = close_window(self._window, self._clock)
