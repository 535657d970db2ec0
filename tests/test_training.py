import pytest

from maze_solver.environment.maze import Maze, MissingEndpointsError
from maze_solver.training.agent import DQNAgent
from maze_solver.training.core import train
from maze_solver.training.encoder import StateEncoder
from maze_solver.training.playback import play


def test_requires_endpoints():
    with pytest.raises(MissingEndpointsError):
        train(Maze(5, 5), n_episodes=1, log_interval=0)


def test_trained_agent_reaches_goal_on_open_maze(open_maze):
    result = train(open_maze, seed=0, log_interval=0)
    assert result.completed
    assert result.episodes == 100

    replay = play(open_maze, result.agent, seed=0, log_interval=0)
    assert replay.mode == "learned"
    assert replay.reached_goal
    assert replay.total_reward > 0


def test_unreachable_goal_completes_budget(walled_maze):
    result = train(walled_maze, n_episodes=3, max_steps=100, seed=0, log_interval=0)
    assert result.completed
    assert result.successes == [False, False, False]
    assert result.episode_lengths == [100, 100, 100]

    replay = play(walled_maze, result.agent, seed=0, log_interval=0)
    assert not replay.reached_goal
    assert replay.steps == 100


def test_target_syncs_every_five_global_steps(open_maze):
    agent = DQNAgent(StateEncoder.for_maze(open_maze))
    seen = []

    def on_step(snapshot):
        if snapshot.phase == "training":
            seen.append(agent.syncs)

    train(open_maze, agent=agent, n_episodes=3, max_steps=12, seed=0, on_step=on_step, log_interval=0)
    assert seen == [k // 5 for k in range(1, len(seen) + 1)]


def test_snapshots(open_maze):
    snapshots = []
    result = train(open_maze, n_episodes=2, max_steps=10, seed=1, on_step=snapshots.append, log_interval=0)

    training = [s for s in snapshots if s.phase == "training"]
    assert len(training) == result.global_step
    assert {s.episode for s in training} == {1, 2}
    assert not any(s.training_complete for s in training)
    for s in training:
        # Path holds only cells actually moved into, each one step apart.
        steps = zip(((0, 0),) + s.path, s.path)
        assert all(abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1 for a, b in steps)

    final = snapshots[-1]
    assert final.phase == "complete"
    assert final.training_complete
    assert final.agent_pos == (0, 0)
    assert final.path == ()


def test_epsilon_schedule_is_recorded(open_maze):
    result = train(open_maze, n_episodes=4, max_steps=5, seed=0, log_interval=0)
    assert result.epsilons == pytest.approx([0.3, 0.25, 0.2, 0.15])


def test_should_stop_cancels_at_step_boundary(open_maze):
    polls = []

    def should_stop():
        polls.append(1)
        return len(polls) > 7

    snapshots = []
    result = train(
        open_maze, n_episodes=5, seed=0, on_step=snapshots.append, should_stop=should_stop, log_interval=0
    )
    assert result.cancelled and not result.completed
    assert result.global_step == 7
    assert result.episodes == 0
    assert all(s.phase == "training" for s in snapshots)


def test_seeded_runs_repeat(open_maze):
    first = train(open_maze, n_episodes=3, max_steps=20, seed=3, log_interval=0)
    second = train(open_maze, n_episodes=3, max_steps=20, seed=3, log_interval=0)
    assert first.episode_rewards == second.episode_rewards
    assert first.episode_lengths == second.episode_lengths


def test_training_leaves_maze_editable(open_maze):
    train(open_maze, n_episodes=1, max_steps=5, seed=0, log_interval=0)
    assert open_maze.editable
    assert open_maze.set_wall(2, 2)


def test_log_line(open_maze, capsys):
    train(open_maze, n_episodes=2, max_steps=5, seed=0, log_interval=1)
    out = capsys.readouterr().out
    assert "Ep    1/2" in out
    assert "Ep    2/2" in out
