"""Base predictor class for sequence-to-one forecasting.

Provides the uniform ``compile`` / ``fit`` / ``predict`` contract the
training orchestrator drives.  ``fit`` is a coroutine so a predictor may
run in-process or delegate to an out-of-process service.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple, Union

import numpy as np
import torch

from wavecast.config import RecurrentConfig
from wavecast.models.training import FitCallbacks, fit_batches, make_loss, make_optimizer
from wavecast.utils.runtime import resolve_device

ArrayLike = Union[np.ndarray, torch.Tensor]


class Predictor:
    """Abstract base for every window → next-sample predictor.

    Parameters
    ----------
    config : RecurrentConfig
        Predictor configuration dataclass.

    Subclass contract
    -----------------
    Implement ``_build_network() → nn.Module`` mapping
    ``(batch, window, 1) → (batch, 1)``.  Compilation, the training loop
    and inference are handled here.
    """

    name: str = "base"

    def __init__(self, config: RecurrentConfig | None = None) -> None:
        self.config = config or RecurrentConfig()
        self.device = resolve_device(getattr(self.config, "device", "auto"))
        self.network: torch.nn.Module | None = None
        self.optimizer: torch.optim.Optimizer | None = None
        self.criterion: torch.nn.Module | None = None
        self.is_trained: bool = False
        self.history: List[Dict[str, Optional[float]]] = []

    # ── public API ────────────────────────────────────────────────────

    @property
    def is_compiled(self) -> bool:
        return self.network is not None and self.optimizer is not None

    def compile(
        self,
        optimizer: str = "adam",
        learning_rate: float | None = None,
        loss: str = "mse",
    ) -> "Predictor":
        """Build a freshly initialised network and bind optimiser and loss."""
        lr = self.config.learning_rate if learning_rate is None else learning_rate
        self.network = self._build_network().to(self.device)
        self.optimizer = make_optimizer(self.network.parameters(), optimizer, lr=lr)
        self.criterion = make_loss(loss)
        self.is_trained = False
        self.history = []
        return self

    async def fit(
        self,
        inputs: ArrayLike,
        labels: ArrayLike,
        *,
        epochs: int,
        batch_size: int,
        validation_data: Tuple[ArrayLike, ArrayLike] | None = None,
        callbacks: FitCallbacks | None = None,
        logger=None,
    ) -> List[Dict[str, Optional[float]]]:
        """Train the compiled network.

        Parameters
        ----------
        inputs : array-like
            Shape ``(k, window, 1)``.
        labels : array-like
            Shape ``(k, 1)``.
        epochs, batch_size : int
        validation_data : (inputs, labels) | None
            Scored once per epoch.
        callbacks : FitCallbacks | None
            Progress hooks; coroutine hooks are awaited.
        logger
            :class:`~wavecast.wandb_logger.WandbLogger` instance or *None*.

        Returns
        -------
        list[dict]
            Per-epoch ``{"epoch", "loss", "val_loss"}`` records.
        """
        if not self.is_compiled:
            raise RuntimeError(f"{self.name}: predictor must be compiled before fit")

        xs = self._as_tensor(inputs)
        ys = self._as_tensor(labels)
        val = None
        if validation_data is not None:
            val = (self._as_tensor(validation_data[0]), self._as_tensor(validation_data[1]))

        history = await fit_batches(
            self.network,
            xs,
            ys,
            optimizer=self.optimizer,
            criterion=self.criterion,
            epochs=epochs,
            batch_size=batch_size,
            validation_data=val,
            callbacks=callbacks,
            grad_clip=self.config.grad_clip,
            shuffle=self.config.shuffle,
            logger=logger,
            log_every=self.config.wandb_log_every,
            verbose=self.config.verbose,
            desc=f"Training {type(self).__name__}",
        )
        self.history.extend(history)
        self.is_trained = True
        return history

    def predict(self, inputs: ArrayLike) -> np.ndarray:
        """Return one prediction per input window, shape ``(k,)``."""
        if not self.is_trained:
            raise RuntimeError(f"{self.name}: model must be trained before prediction")

        xs = self._as_tensor(inputs)
        if xs.ndim == 2:
            xs = xs.unsqueeze(-1)

        self.network.eval()
        with torch.no_grad():
            pred = self.network(xs)
        return pred.reshape(-1).cpu().numpy().astype(np.float64)

    # ── abstract hooks ────────────────────────────────────────────────

    def _build_network(self) -> torch.nn.Module:
        """Return an uninitialised ``nn.Module``."""
        raise NotImplementedError

    # ── helpers ───────────────────────────────────────────────────────

    def _as_tensor(self, data: ArrayLike) -> torch.Tensor:
        if isinstance(data, torch.Tensor):
            return data.to(device=self.device, dtype=torch.float32)
        return torch.tensor(np.asarray(data, dtype=np.float32), device=self.device)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, trained={self.is_trained})"
