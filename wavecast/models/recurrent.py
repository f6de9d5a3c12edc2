"""Single-layer recurrent predictors (LSTM, GRU)."""

from __future__ import annotations

import torch
import torch.nn as nn

from wavecast.config import GRUConfig, LSTMConfig
from wavecast.models.base import Predictor
from wavecast.models.registry import register_model


class _RecurrentNetwork(nn.Module):
    """Recurrent encoder → linear head on the last time step."""

    def __init__(self, cell: type, hidden_size: int) -> None:
        super().__init__()
        self.rnn = cell(input_size=1, hidden_size=hidden_size, batch_first=True)
        self.fc = nn.Linear(hidden_size, 1)

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        out, _ = self.rnn(x)
        return self.fc(out[:, -1, :])


@register_model("lstm", LSTMConfig)
class LSTMPredictor(Predictor):
    """LSTM with ``hidden_size`` units feeding a single linear output."""

    def __init__(self, config: LSTMConfig | None = None) -> None:
        super().__init__(config or LSTMConfig())
        self.config: LSTMConfig

    def _build_network(self) -> nn.Module:
        return _RecurrentNetwork(nn.LSTM, self.config.hidden_size)


@register_model("gru", GRUConfig)
class GRUPredictor(Predictor):
    """GRU variant; fewer gates, same contract."""

    def __init__(self, config: GRUConfig | None = None) -> None:
        super().__init__(config or GRUConfig())
        self.config: GRUConfig

    def _build_network(self) -> nn.Module:
        return _RecurrentNetwork(nn.GRU, self.config.hidden_size)
