import itertools

import pytest

from maze_solver.environment.constants import (
    ACTION_DELTAS,
    DOWN,
    LEFT,
    N_ACTIONS,
    REWARD_GOAL,
    REWARD_STEP,
    REWARD_WALL,
    RIGHT,
    UP,
)
from maze_solver.environment.maze import Maze
from maze_solver.environment.transition import manhattan, move_direction, transition


def test_action_geometry():
    assert ACTION_DELTAS[UP] == (-1, 0)
    assert ACTION_DELTAS[RIGHT] == (0, 1)
    assert ACTION_DELTAS[DOWN] == (1, 0)
    assert ACTION_DELTAS[LEFT] == (0, -1)


@pytest.mark.parametrize("action", [UP, LEFT])
def test_pushing_against_the_edge(open_maze, action):
    result = transition(open_maze, (0, 0), action)
    assert result.position == (0, 0)
    assert result.reward == REWARD_WALL == -10
    assert result.done is False


def test_walking_into_a_wall():
    maze = Maze.from_text(
        """
        S#.
        ...
        ..G
        """
    )
    result = transition(maze, (0, 0), RIGHT)
    assert result == ((0, 0), REWARD_WALL, False)


def test_plain_move_and_goal(open_maze):
    assert transition(open_maze, (0, 0), RIGHT) == ((0, 1), REWARD_STEP, False)
    assert transition(open_maze, (3, 4), DOWN) == ((4, 4), REWARD_GOAL, True)


def test_every_transition_is_one_cell_or_none(walled_maze):
    rewards = {REWARD_WALL, REWARD_STEP, REWARD_GOAL}
    cells = itertools.product(range(walled_maze.rows), range(walled_maze.columns))
    for pos in cells:
        if walled_maze.is_wall(pos):
            continue
        for action in range(N_ACTIONS):
            new_pos, reward, done = transition(walled_maze, pos, action)
            assert reward in rewards
            assert done == (reward == REWARD_GOAL)
            assert walled_maze.is_free(new_pos)
            if new_pos == pos:
                assert reward == REWARD_WALL
            else:
                d_row, d_col = ACTION_DELTAS[action]
                assert new_pos == (pos[0] + d_row, pos[1] + d_col)


def test_manhattan():
    assert manhattan((0, 0), (4, 4)) == 8
    assert manhattan((2, 3), (2, 3)) == 0
    assert manhattan((4, 1), (1, 2)) == 4


def test_move_direction_labels():
    assert move_direction((1, 1), (0, 1)) == "Up"
    assert move_direction((1, 1), (1, 2)) == "Right"
    assert move_direction((1, 1), (2, 1)) == "Down"
    assert move_direction((1, 1), (1, 0)) == "Left"
    assert move_direction(None, (1, 1)) == "None"
    assert move_direction((1, 1), (1, 1)) == "None"
