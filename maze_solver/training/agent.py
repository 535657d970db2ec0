"""DQN agent: online network, target network and the update rule.

Bellman targets are built the way a Keras-style `fit` on full action-value
vectors does it:
  - start from the online network's own prediction for every action
  - overwrite only the entry of the action actually taken with
        r                                   (terminal)
        r + gamma * max_a Q_target(s2)[a]   (otherwise)
  - regress the online network toward that vector with MSE

Untaken actions get a zero error, so only the taken action produces a
gradient.
"""

from __future__ import annotations

import random
from typing import Optional

import numpy as np

try:
    import torch
    import torch.nn as nn
    import torch.optim as optim
except ImportError as e:  # pragma: no cover
    raise ImportError("PyTorch is required. Install with: pip install torch") from e

from ..config import AGENT_CONFIG
from .encoder import StateEncoder
from .network import QNetwork, copy_weights
from .replay import Transition, stack_batch


class DQNAgent:
    """Owns the Q-networks and the optimizer for one maze session."""

    def __init__(
        self,
        encoder: StateEncoder,
        *,
        lr: float = AGENT_CONFIG["learning_rate"],
        gamma: float = AGENT_CONFIG["discount_factor"],
        hidden_size: int = AGENT_CONFIG["hidden_size"],
        n_actions: int = AGENT_CONFIG["n_actions"],
        q_net: Optional[QNetwork] = None,
        device: str = "cpu",
    ):
        self.encoder = encoder
        self.gamma = float(gamma)
        self.n_actions = int(n_actions)
        self.device = torch.device(device)

        if q_net is None:
            q_net = QNetwork(encoder.feature_dim, self.n_actions, hidden_size)

        # Shape mismatches are configuration errors: check once, here.
        if q_net.input_dim != encoder.feature_dim:
            raise ValueError(
                f"Encoder produces {encoder.feature_dim} features but the Q-network "
                f"expects {q_net.input_dim} inputs"
            )
        if q_net.n_actions != self.n_actions:
            raise ValueError(
                f"Q-network has {q_net.n_actions} outputs, expected {self.n_actions}"
            )

        self.q_net = q_net.to(self.device)
        self.target_net = self.q_net.clone()
        self.target_net.eval()

        self.optimizer = optim.Adam(self.q_net.parameters(), lr=float(lr))
        self.loss_fn = nn.MSELoss()
        self.updates = 0
        self.syncs = 0

    # -------------------- Acting --------------------

    @torch.no_grad()
    def q_values(self, state: np.ndarray) -> np.ndarray:
        st = torch.tensor(state, dtype=torch.float32, device=self.device).unsqueeze(0)
        return self.q_net(st).squeeze(0).cpu().numpy()

    def greedy_action(self, state: np.ndarray) -> int:
        # np.argmax returns the first maximum, so ties go to the lowest index.
        return int(np.argmax(self.q_values(state)))

    def act(self, state: np.ndarray, epsilon: float) -> int:
        """Epsilon-greedy action selection."""
        if random.random() < epsilon:
            return random.randrange(self.n_actions)
        return self.greedy_action(state)

    # -------------------- Learning --------------------

    def learn(self, batch: list[Transition]) -> float:
        """One gradient step toward the Bellman targets of `batch`."""
        bs, ba, br, bs2, bdone = stack_batch(batch)

        bs_t = torch.tensor(bs, dtype=torch.float32, device=self.device)
        ba_t = torch.tensor(ba, dtype=torch.long, device=self.device)
        br_t = torch.tensor(br, dtype=torch.float32, device=self.device)
        bs2_t = torch.tensor(bs2, dtype=torch.float32, device=self.device)
        bdone_t = torch.tensor(bdone, dtype=torch.float32, device=self.device)

        q_pred = self.q_net(bs_t)

        with torch.no_grad():
            next_max = self.target_net(bs2_t).max(dim=1).values
            taken = br_t + (1.0 - bdone_t) * self.gamma * next_max
            targets = q_pred.detach().clone()
            targets[torch.arange(len(batch), device=self.device), ba_t] = taken

        loss = self.loss_fn(q_pred, targets)

        self.optimizer.zero_grad(set_to_none=True)
        loss.backward()
        self.optimizer.step()

        self.updates += 1
        return float(loss.item())

    def sync_target(self) -> None:
        """Hard update of the target network."""
        copy_weights(self.q_net, self.target_net)
        self.syncs += 1

    def close(self) -> None:
        """Drop the networks and optimizer state."""
        self.optimizer.state.clear()
        self.q_net = None
        self.target_net = None
        self.optimizer = None
