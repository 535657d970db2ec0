"""DQN training components for the maze."""

from .agent import DQNAgent
from .core import StepSnapshot, TrainingResult, TrainingRun, train
from .encoder import StateEncoder
from .network import QNetwork, copy_weights
from .playback import PlaybackResult, play
from .policy import heuristic_action, make_policy
from .replay import ReplayBuffer, Transition, stack_batch
from .schedules import linear_epsilon, train_iterations
from .warmup import bootstrap_memory

__all__ = [
    "DQNAgent",
    "StepSnapshot",
    "TrainingResult",
    "TrainingRun",
    "train",
    "StateEncoder",
    "QNetwork",
    "copy_weights",
    "PlaybackResult",
    "play",
    "heuristic_action",
    "make_policy",
    "ReplayBuffer",
    "Transition",
    "stack_batch",
    "linear_epsilon",
    "train_iterations",
    "bootstrap_memory",
]
