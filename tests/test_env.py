import numpy as np
import pytest

from maze_solver.environment.constants import DOWN, REWARD_GOAL, RIGHT, UP
from maze_solver.environment.maze import Maze, MissingEndpointsError
from maze_solver.environment.maze_env import MazeEnv
from maze_solver.environment.wrappers import AntiStallWrapper


def test_reset_places_agent_on_start(open_maze):
    env = MazeEnv(open_maze)
    obs, info = env.reset(seed=0)
    assert env.agent_pos == (0, 0)
    np.testing.assert_array_equal(obs["agent_pos"], [0, 0])
    np.testing.assert_array_equal(obs["goal_pos"], [4, 4])
    assert info["steps"] == 0
    assert info["dist_to_goal"] == 8


def test_env_requires_endpoints():
    with pytest.raises(MissingEndpointsError):
        MazeEnv(Maze(3, 3))


def test_env_does_not_see_later_edits(open_maze):
    env = MazeEnv(open_maze)
    open_maze.set_wall(0, 1)
    env.reset()
    env.step(RIGHT)
    assert env.agent_pos == (0, 1)


def test_step_until_goal(open_maze):
    env = MazeEnv(open_maze)
    env.reset()
    for _ in range(4):
        env.step(RIGHT)
    for _ in range(3):
        _, _, terminated, _, _ = env.step(DOWN)
        assert not terminated
    _, reward, terminated, truncated, info = env.step(DOWN)
    assert reward == REWARD_GOAL
    assert terminated and not truncated
    assert info["dist_to_goal"] == 0


def test_truncation_at_step_budget(open_maze):
    env = MazeEnv(open_maze, max_steps=3)
    env.reset()
    truncated = [env.step(UP)[3] for _ in range(3)]
    assert truncated == [False, False, True]


def test_invalid_action_is_rejected(open_maze):
    env = MazeEnv(open_maze)
    env.reset()
    with pytest.raises(AssertionError):
        env.step(7)


def test_override_step_does_not_charge_budget(open_maze):
    env = MazeEnv(open_maze)
    env.reset()
    env.step(UP)
    env.override_step((0, 0), RIGHT)
    assert env.steps == 1
    assert env.agent_pos == (0, 1)


def test_ansi_render(open_maze):
    env = MazeEnv(open_maze, render_mode="ansi")
    env.reset()
    text = env.render()
    assert text.splitlines()[0].split()[0] == "A"
    assert "G" in text


def test_anti_stall_fires_on_fifth_blocked_step(open_maze):
    env = AntiStallWrapper(MazeEnv(open_maze), threshold=3)
    env.reset(seed=0)

    for _ in range(4):
        _, reward, _, _, info = env.step(UP)
        assert reward == -10
        assert not info["forced"]
        assert info["action"] == UP
    assert env.stuck_counter == 3

    _, _, _, _, info = env.step(UP)
    assert info["forced"]
    assert info["action"] != UP
    assert env.stuck_counter == 0
    assert env.interventions == 1


@pytest.mark.parametrize("seed", range(10))
def test_forced_action_differs_from_taken(open_maze, seed):
    env = AntiStallWrapper(MazeEnv(open_maze), threshold=0)
    env.reset(seed=seed)
    env.step(UP)
    _, reward, _, _, info = env.step(UP)
    assert info["forced"]
    assert info["action"] != UP
    # The forced move is applied from the cell the agent was stuck on.
    if info["action"] in (RIGHT, DOWN):
        assert env.unwrapped.agent_pos != (0, 0)
        assert reward == -1
    else:
        assert env.unwrapped.agent_pos == (0, 0)
        assert reward == -10


def test_moving_resets_the_stall_counter(open_maze):
    env = AntiStallWrapper(MazeEnv(open_maze), threshold=3)
    env.reset(seed=0)
    env.step(UP)
    env.step(UP)
    assert env.stuck_counter == 1
    env.step(RIGHT)
    assert env.stuck_counter == 0


def test_reset_clears_stall_state(open_maze):
    env = AntiStallWrapper(MazeEnv(open_maze), threshold=3)
    env.reset(seed=0)
    env.step(UP)
    env.step(UP)
    env.reset()
    assert env.last_position is None
    assert env.stuck_counter == 0
