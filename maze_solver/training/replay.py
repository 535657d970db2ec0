"""Replay buffer utilities.

We keep the stored transition as NumPy arrays / Python primitives so that:
  - replay is device-agnostic
  - torch tensors are created only at the update step

Eviction is strict FIFO: once the buffer is full, every push drops the
oldest transition, regardless of how often it was sampled.
"""

from __future__ import annotations

import random
from collections import deque
from dataclasses import dataclass
from typing import Iterator, Optional

import numpy as np


@dataclass(frozen=True, slots=True)
class Transition:
    """A single experience tuple."""

    s: np.ndarray
    a: int
    r: float
    s2: np.ndarray
    done: bool


class ReplayBuffer:
    """Fixed-size FIFO replay buffer."""

    def __init__(self, capacity: int = 1000):
        if int(capacity) <= 0:
            raise ValueError(f"Replay capacity must be positive, got {capacity}")
        self.capacity = int(capacity)
        self._buf: deque[Transition] = deque(maxlen=self.capacity)

    def push(self, t: Transition) -> None:
        self._buf.append(t)

    def can_sample(self, batch_size: int) -> bool:
        return len(self._buf) >= int(batch_size)

    def sample(self, batch_size: int) -> Optional[list[Transition]]:
        """Uniform random sample of distinct transitions.

        Returns None when the buffer holds fewer than `batch_size` entries.
        """
        if not self.can_sample(batch_size):
            return None
        return random.sample(self._buf, int(batch_size))

    def clear(self) -> None:
        self._buf.clear()

    def __getitem__(self, idx: int) -> Transition:
        return self._buf[idx]

    def __iter__(self) -> Iterator[Transition]:
        return iter(self._buf)

    def __len__(self) -> int:
        return len(self._buf)


def stack_batch(batch: list[Transition]):
    """Stack a sampled batch into arrays.

    Returns:
        s:   (B, D) float32
        a:   (B,)   int64
        r:   (B,)   float32
        s2:  (B, D) float32
        done:(B,)   float32 (1.0 if done else 0.0)
    """
    s = np.stack([b.s for b in batch]).astype(np.float32, copy=False)
    a = np.array([b.a for b in batch], dtype=np.int64)
    r = np.array([b.r for b in batch], dtype=np.float32)
    s2 = np.stack([b.s2 for b in batch]).astype(np.float32, copy=False)
    done = np.array([b.done for b in batch], dtype=np.float32)
    return s, a, r, s2, done
