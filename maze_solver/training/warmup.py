"""Replay-buffer bootstrap.

Before the first episode the buffer is seeded with one transition per legal
move out of the start cell, labelled by Manhattan progress:
    +5  the move strictly reduces the distance to the goal
    -5  otherwise

Moves off the grid or into a wall are skipped. Without this, the first
gradient steps would only see one episode of mostly random-walk data.
"""

from __future__ import annotations

from ..environment.constants import N_ACTIONS, REWARD_CLOSER, REWARD_FARTHER
from ..environment.maze import Maze
from ..environment.transition import destination, manhattan
from .encoder import StateEncoder
from .replay import ReplayBuffer, Transition


def bootstrap_memory(replay: ReplayBuffer, encoder: StateEncoder, maze: Maze) -> int:
    """Seed `replay` with heuristically labelled moves from the start.

    Returns the number of transitions pushed.
    """
    start, goal = maze.validate_endpoints()
    s = encoder.encode(start, goal, maze)
    old_dist = manhattan(start, goal)

    pushed = 0
    for action in range(N_ACTIONS):
        dest = destination(start, action)
        if not maze.is_free(dest):
            continue

        reward = REWARD_CLOSER if manhattan(dest, goal) < old_dist else REWARD_FARTHER
        s2 = encoder.encode(dest, goal, maze)
        replay.push(Transition(s=s, a=action, r=reward, s2=s2, done=dest == goal))
        pushed += 1

    return pushed
