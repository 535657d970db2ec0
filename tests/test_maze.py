import numpy as np
import pytest

from maze_solver.environment.constants import TILE_WALL
from maze_solver.environment.maze import Maze, MissingEndpointsError, load_maze


def test_queries_on_empty_maze(open_maze):
    assert open_maze.shape == (5, 5)
    assert open_maze.in_bounds((0, 0))
    assert open_maze.in_bounds((4, 4))
    assert open_maze.is_free((2, 3))
    assert not open_maze.is_wall((2, 3))


@pytest.mark.parametrize("pos", [(-1, 0), (0, -1), (5, 0), (0, 5), (10, 10)])
def test_out_of_bounds_reports_blocked(open_maze, pos):
    assert not open_maze.in_bounds(pos)
    assert open_maze.is_wall(pos)
    assert not open_maze.is_free(pos)


def test_wall_cells(open_maze):
    assert open_maze.set_wall(2, 2)
    assert open_maze.is_wall((2, 2))
    assert not open_maze.is_free((2, 2))
    assert open_maze.grid[2, 2] == TILE_WALL


def test_walls_cannot_cover_endpoints(open_maze):
    assert not open_maze.set_wall(0, 0)
    assert not open_maze.set_wall(4, 4)
    assert open_maze.is_free((0, 0))


def test_endpoint_placement_rules(open_maze):
    open_maze.set_wall(1, 1)
    assert not open_maze.set_start(1, 1)      # on a wall
    assert not open_maze.set_start(4, 4)      # on the goal
    assert not open_maze.set_goal(0, 0)       # on the start
    assert not open_maze.set_goal(7, 7)       # off the grid
    assert open_maze.set_start(2, 2)
    assert open_maze.start == (2, 2)


def test_eraser_clears_wall_and_endpoints(open_maze):
    open_maze.set_wall(1, 1)
    assert open_maze.clear_cell(1, 1)
    assert open_maze.is_free((1, 1))

    assert open_maze.clear_cell(0, 0)
    assert open_maze.start is None
    assert open_maze.goal == (4, 4)


def test_validate_endpoints(open_maze):
    assert open_maze.validate_endpoints() == ((0, 0), (4, 4))

    maze = Maze(3, 3)
    with pytest.raises(MissingEndpointsError):
        maze.validate_endpoints()

    maze.set_start(0, 0)
    with pytest.raises(MissingEndpointsError):
        maze.validate_endpoints()


def test_validate_rejects_endpoint_on_wall(open_maze):
    open_maze.grid[0, 0] = TILE_WALL
    with pytest.raises(MissingEndpointsError):
        open_maze.validate_endpoints()


def test_missing_endpoints_is_a_value_error():
    assert issubclass(MissingEndpointsError, ValueError)


def test_constructor_rejects_bad_input():
    with pytest.raises(ValueError):
        Maze(0, 5)
    with pytest.raises(ValueError):
        Maze(3, 3, grid=np.zeros((2, 2)))
    with pytest.raises(ValueError):
        Maze(3, 3, start=(5, 5))


def test_frozen_copy_is_read_only(open_maze):
    frozen = open_maze.frozen()
    assert not frozen.editable
    assert open_maze.editable
    with pytest.raises(ValueError):
        frozen.set_wall(2, 2)

    # Later edits to the source maze do not leak into the frozen copy.
    open_maze.set_wall(3, 3)
    assert frozen.is_free((3, 3))


def test_clear_resets_everything(open_maze):
    open_maze.set_wall(2, 2)
    open_maze.clear()
    assert open_maze.start is None and open_maze.goal is None
    assert not open_maze.grid.any()


def test_text_layout():
    maze = Maze.from_text(
        """
        S.#
        .##
        ..G
        """
    )
    assert maze.shape == (3, 3)
    assert maze.start == (0, 0)
    assert maze.goal == (2, 2)
    assert maze.is_wall((0, 2)) and maze.is_wall((1, 1)) and maze.is_wall((1, 2))
    assert maze.to_text() == "S.#\n.##\n..G"


def test_text_layout_errors():
    with pytest.raises(ValueError):
        Maze.from_text("")
    with pytest.raises(ValueError):
        Maze.from_text("S..\n..")
    with pytest.raises(ValueError):
        Maze.from_text("S.x\n..G")


def test_load_maze(tmp_path):
    path = tmp_path / "maze.txt"
    path.write_text("S..\n.#.\n..G\n")
    maze = load_maze(str(path))
    assert maze.start == (0, 0)
    assert maze.goal == (2, 2)
    assert maze.is_wall((1, 1))
