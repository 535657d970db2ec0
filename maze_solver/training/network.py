"""Neural network definitions for DQN.

Keep networks in their own module so:
  - training loops stay readable
  - you can swap architectures without touching the algorithm code
"""

from __future__ import annotations

try:
    import torch
    import torch.nn as nn
except ImportError as e:  # pragma: no cover
    raise ImportError("PyTorch is required. Install with: pip install torch") from e


class QNetwork(nn.Module):
    """Small MLP Q-network.

    Two hidden ReLU layers (He-normal init) and a linear output layer
    (Glorot-normal init). Biases start at zero.

    Input:  D (8 for the maze encoder)
    Output: n_actions (default 4)
    """

    def __init__(self, input_dim: int, n_actions: int = 4, hidden_size: int = 64):
        super().__init__()
        self.input_dim = int(input_dim)
        self.n_actions = int(n_actions)
        self.hidden_size = int(hidden_size)

        self.net = nn.Sequential(
            nn.Linear(self.input_dim, self.hidden_size),
            nn.ReLU(),
            nn.Linear(self.hidden_size, self.hidden_size),
            nn.ReLU(),
            nn.Linear(self.hidden_size, self.n_actions),
        )
        self._init_weights()

    def _init_weights(self) -> None:
        linears = [m for m in self.net if isinstance(m, nn.Linear)]
        for layer in linears[:-1]:
            nn.init.kaiming_normal_(layer.weight, nonlinearity="relu")
            nn.init.zeros_(layer.bias)
        nn.init.xavier_normal_(linears[-1].weight)
        nn.init.zeros_(linears[-1].bias)

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        return self.net(x)

    def clone(self) -> "QNetwork":
        """Structurally identical network holding its own copy of the weights."""
        twin = self.__class__(self.input_dim, self.n_actions, self.hidden_size)
        twin.load_state_dict(self.state_dict())
        return twin.to(next(self.parameters()).device)


def copy_weights(src: nn.Module, dst: nn.Module) -> None:
    """Hard update: dst <- src."""
    dst.load_state_dict(src.state_dict())
