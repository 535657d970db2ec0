"""Anti-stall wrapper.

Wall bumps and greedy-policy cycles can pin the agent on one cell. The
wrapper counts consecutive steps that end on the same cell; once the count
exceeds `threshold` it replaces the step with a uniformly random action that
differs from the one just taken, then resets the count.

This sits on top of whatever policy picks the actions. It does not choose
actions itself unless the agent is stuck.
"""

from __future__ import annotations

from typing import Any, Dict

import gymnasium as gym

from .maze import Position


class AntiStallWrapper(gym.Wrapper):
    def __init__(self, env: gym.Env, threshold: int = 5):
        super().__init__(env)
        self.threshold = int(threshold)
        self.last_position: Position | None = None
        self.stuck_counter = 0
        self.interventions = 0

    def reset(self, **kwargs):
        obs, info = self.env.reset(**kwargs)
        self.last_position = None
        self.stuck_counter = 0
        return obs, info

    def forced_action(self, action: int) -> int:
        n = int(self.env.action_space.n)
        choices = [a for a in range(n) if a != int(action)]
        return int(self.np_random.choice(choices))

    def step(self, action: int):
        base = self.env.unwrapped
        origin = base.agent_pos

        obs, reward, terminated, truncated, info = self.env.step(action)
        applied = int(action)
        forced = False

        if self.last_position is not None and base.agent_pos == self.last_position:
            self.stuck_counter += 1
            if self.stuck_counter > self.threshold:
                applied = self.forced_action(action)
                obs, reward, terminated, truncated, info = base.override_step(origin, applied)
                self.stuck_counter = 0
                self.interventions += 1
                forced = True
        else:
            self.stuck_counter = 0

        self.last_position = base.agent_pos

        info: Dict[str, Any] = dict(info, action=applied, forced=forced)
        return obs, reward, terminated, truncated, info
