"""
Main entry point for Maze Solver.
=================================

Commands:
    train   - Train the DQN agent on a maze, then replay the learned path
    run     - Replay the heuristic path without training
    show    - Print the maze layout

Usage:
    python -m maze_solver train --maze mazes/detour.txt
    python -m maze_solver train --rows 5 --cols 5 --start 0,0 --goal 4,4 --seed 0
    python -m maze_solver run --maze mazes/detour.txt
    python -m maze_solver show --maze mazes/detour.txt
    python -m maze_solver --help

Maze files use `#` for walls, `.` for free cells, `S` for the start and `G`
for the goal.
"""

from __future__ import annotations

import argparse
import sys

from .config import MAZE_CONFIG, TRAIN_CONFIG, PLAY_CONFIG
from .environment.maze import Maze, MissingEndpointsError, load_maze
from .environment.rendering import PygameViewer, render_text
from .session import MazeSession


def parse_position(text: str) -> tuple[int, int]:
    try:
        row, col = (int(v) for v in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected ROW,COL but got {text!r}")
    return row, col


def build_maze(args) -> Maze:
    if args.maze:
        maze = load_maze(args.maze)
    else:
        maze = Maze(args.rows, args.cols)
    if args.start is not None and not maze.set_start(*args.start):
        raise MissingEndpointsError(f"Cannot place start at {args.start}")
    if args.goal is not None and not maze.set_goal(*args.goal):
        raise MissingEndpointsError(f"Cannot place goal at {args.goal}")
    return maze


def print_playback(maze: Maze, result) -> None:
    print("\n" + render_text(maze, result.final_position, result.path))
    print(f"\n  Mode:           {result.mode}")
    print(f"  Reached goal:   {'YES' if result.reached_goal else 'NO'}")
    print(f"  Steps:          {result.steps}")
    print(f"  Score:          {result.total_reward:.1f}")
    print(f"  Forced moves:   {result.interventions}")


def train_command(args) -> int:
    """Train on the maze, then show the greedy solution."""
    session = MazeSession(maze=build_maze(args))
    maze = session.maze

    viewer = PygameViewer(maze) if args.render else None
    if viewer is not None:
        session.subscribe(viewer)

    print("=" * 70)
    print("  DQN TRAINING - Maze Solver")
    print("=" * 70)
    print(f"  Maze:              {maze.rows}×{maze.columns}")
    print(f"  Start / Goal:      {maze.start} → {maze.goal}")
    print(f"  Episodes:          {args.episodes}")
    print(f"  Max steps:         {args.max_steps}")
    print(f"  Seed:              {args.seed}")
    print("=" * 70 + "\n")

    try:
        result = session.start_training(
            n_episodes=args.episodes,
            max_steps=args.max_steps,
            seed=args.seed,
            log_interval=args.log_interval,
        )
        print(f"\n  Training finished in {result.elapsed:.1f}s │ "
              f"success rate {result.success_rate * 100:.1f}% │ "
              f"{result.global_step} steps\n")

        if args.plot:
            from .utils import plot_training_stats

            plot_training_stats(
                result.episode_rewards,
                result.episode_lengths,
                result.successes,
                save_path=args.plot,
            )

        replay = session.play(seed=args.seed, log_interval=0 if args.quiet else 1)
        print_playback(maze, replay)
    finally:
        if viewer is not None:
            viewer.close()

    return 0 if replay.reached_goal else 2


def run_command(args) -> int:
    """Heuristic playback without training ("Run" in the editor)."""
    session = MazeSession(maze=build_maze(args))

    viewer = PygameViewer(session.maze, fps=10) if args.render else None
    if viewer is not None:
        session.subscribe(viewer)

    try:
        replay = session.play(seed=args.seed, log_interval=0 if args.quiet else 1)
    finally:
        if viewer is not None:
            viewer.close()

    print_playback(session.maze, replay)
    return 0 if replay.reached_goal else 2


def show_command(args) -> int:
    maze = build_maze(args)
    print(render_text(maze, None))
    print(f"\n  {maze!r}")
    return 0


def add_maze_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--maze",
        type=str,
        default=None,
        help="Path to a maze layout file (# wall, . free, S start, G goal)",
    )
    parser.add_argument(
        "--rows",
        type=int,
        default=MAZE_CONFIG["rows"],
        help=f"Rows of an empty maze (default: {MAZE_CONFIG['rows']})",
    )
    parser.add_argument(
        "--cols",
        type=int,
        default=MAZE_CONFIG["columns"],
        help=f"Columns of an empty maze (default: {MAZE_CONFIG['columns']})",
    )
    parser.add_argument("--start", type=parse_position, default=None, help="Start cell as ROW,COL")
    parser.add_argument("--goal", type=parse_position, default=None, help="Goal cell as ROW,COL")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--render", action="store_true", help="Show the pygame window")
    parser.add_argument("--quiet", action="store_true", help="Do not print every playback step")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Maze Solver - DQN agent for hand-drawn mazes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m maze_solver train --rows 5 --cols 5 --start 0,0 --goal 4,4
  python -m maze_solver train --maze my_maze.txt --plot plots/training.png
  python -m maze_solver run --maze my_maze.txt --render
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Train command
    train_parser = subparsers.add_parser("train", help="Train, then replay the learned path")
    add_maze_arguments(train_parser)
    train_parser.add_argument(
        "--episodes",
        type=int,
        default=TRAIN_CONFIG["n_episodes"],
        help=f"Training episodes (default: {TRAIN_CONFIG['n_episodes']})",
    )
    train_parser.add_argument(
        "--max-steps",
        type=int,
        default=TRAIN_CONFIG["max_steps"],
        help=f"Max steps per episode (default: {TRAIN_CONFIG['max_steps']})",
    )
    train_parser.add_argument(
        "--log-interval",
        type=int,
        default=TRAIN_CONFIG["log_interval"],
        help=f"Print stats every N episodes (default: {TRAIN_CONFIG['log_interval']})",
    )
    train_parser.add_argument("--plot", type=str, default=None, help="Save training curves to this file")
    train_parser.set_defaults(func=train_command)

    # Run command
    run_parser = subparsers.add_parser(
        "run",
        help=f"Heuristic replay without training ({PLAY_CONFIG['max_steps']} step budget)",
    )
    add_maze_arguments(run_parser)
    run_parser.set_defaults(func=run_command)

    # Show command
    show_parser = subparsers.add_parser("show", help="Print the maze layout")
    add_maze_arguments(show_parser)
    show_parser.set_defaults(func=show_command)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except MissingEndpointsError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
