"""Shared training utilities for the PyTorch predictors.

Provides composable building blocks (optimizer and loss factories,
gradient norm) and an *async* mini-batch training loop that awaits
progress callbacks before each epoch, after each batch and after each
epoch, so a single-threaded host can repaint between steps.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Tuple, Union

import torch
import torch.nn as nn
from tqdm import tqdm


# ─────────────────────────────────────────────────────────────────────
# Small helpers
# ─────────────────────────────────────────────────────────────────────

def gradient_norm(parameters: Iterable[nn.Parameter]) -> float:
    """Return total ℓ₂ gradient norm across all parameters."""
    total = 0.0
    for p in parameters:
        if p.grad is not None:
            total += p.grad.data.norm(2).item() ** 2
    return total ** 0.5


async def _maybe_await(result: Any) -> None:
    if inspect.isawaitable(result):
        await result


# ─────────────────────────────────────────────────────────────────────
# Optimizer / loss factories
# ─────────────────────────────────────────────────────────────────────

_OPTIMIZERS = {
    "adam": torch.optim.Adam,
    "sgd": torch.optim.SGD,
    "rmsprop": torch.optim.RMSprop,
}

_LOSSES = {
    "mse": nn.MSELoss,
    "meansquarederror": nn.MSELoss,
    "mae": nn.L1Loss,
}


def make_optimizer(
    params: Iterable[nn.Parameter],
    name: str = "adam",
    lr: float = 1e-2,
) -> torch.optim.Optimizer:
    """Create an optimiser by name (``adam``, ``sgd``, ``rmsprop``)."""
    key = name.lower()
    if key not in _OPTIMIZERS:
        raise ValueError(
            f"Unknown optimizer '{name}'. Available: {', '.join(sorted(_OPTIMIZERS))}"
        )
    return _OPTIMIZERS[key](params, lr=lr)


def make_loss(name: str = "mse") -> nn.Module:
    key = name.lower().replace("_", "")
    if key not in _LOSSES:
        raise ValueError(
            f"Unknown loss '{name}'. Available: {', '.join(sorted(_LOSSES))}"
        )
    return _LOSSES[key]()


# ─────────────────────────────────────────────────────────────────────
# Progress callbacks
# ─────────────────────────────────────────────────────────────────────

MaybeAwaitable = Union[None, Awaitable[None]]


@dataclass
class FitCallbacks:
    """Hooks invoked by :func:`fit_batches`.

    Each hook may be a plain function or a coroutine function; coroutine
    results are awaited before training continues.

    Attributes:
        on_epoch_begin: ``(epoch)`` with a zero-based epoch index.
        on_batch_end: ``(batch, running_loss)`` with a zero-based batch
            index and the sample-weighted mean loss of the epoch so far.
        on_epoch_end: ``(epoch, loss, val_loss)``; ``val_loss`` is
            ``None`` without validation data.
    """

    on_epoch_begin: Optional[Callable[[int], MaybeAwaitable]] = None
    on_batch_end: Optional[Callable[[int, float], MaybeAwaitable]] = None
    on_epoch_end: Optional[Callable[[int, float, Optional[float]], MaybeAwaitable]] = None


# ─────────────────────────────────────────────────────────────────────
# Async mini-batch training loop
# ─────────────────────────────────────────────────────────────────────

async def fit_batches(
    model: nn.Module,
    inputs: torch.Tensor,
    labels: torch.Tensor,
    *,
    optimizer: torch.optim.Optimizer,
    criterion: nn.Module,
    epochs: int,
    batch_size: int,
    validation_data: Optional[Tuple[torch.Tensor, torch.Tensor]] = None,
    callbacks: Optional[FitCallbacks] = None,
    grad_clip: Optional[float] = None,
    shuffle: bool = True,
    logger=None,
    log_every: int = 1,
    verbose: bool = True,
    desc: str = "Training",
) -> List[Dict[str, Optional[float]]]:
    """Run *epochs* passes of mini-batch gradient descent.

    Epochs run strictly in order, batches within an epoch run strictly
    in order, and the validation pass of epoch *k* finishes before any
    batch of epoch *k + 1* starts.

    Parameters
    ----------
    model : nn.Module
        Network mapping ``(batch, window, 1) → (batch, 1)``.
    inputs, labels : torch.Tensor
        Training tensors with matching leading dimension.
    optimizer, criterion
        Already bound to ``model``'s parameters.
    epochs, batch_size : int
    validation_data : (Tensor, Tensor) | None
        Evaluated once at the end of every epoch.
    callbacks : FitCallbacks | None
    grad_clip : float | None
        Gradient norm clipping threshold.
    shuffle : bool
        Reshuffle sample order every epoch.
    logger : WandbLogger | None
        Receives ``train_loss``, ``val_loss``, ``grad_norm`` per epoch.
    log_every : int
        Log every N epochs.
    verbose : bool
        Show tqdm progress bar.
    desc : str
        Label for the progress bar.

    Returns
    -------
    list[dict]
        One ``{"epoch", "loss", "val_loss"}`` entry per epoch
        (``epoch`` is one-based).
    """
    if inputs.shape[0] != labels.shape[0]:
        raise ValueError(
            f"inputs and labels must have same length, got {inputs.shape[0]} "
            f"and {labels.shape[0]}"
        )
    callbacks = callbacks or FitCallbacks()
    n = inputs.shape[0]
    history: List[Dict[str, Optional[float]]] = []

    pbar = tqdm(range(epochs), desc=desc, disable=not verbose)
    for epoch in pbar:
        if callbacks.on_epoch_begin is not None:
            await _maybe_await(callbacks.on_epoch_begin(epoch))

        model.train()
        order = torch.randperm(n, device=inputs.device) if shuffle else torch.arange(n, device=inputs.device)
        total_loss = 0.0
        seen = 0
        for batch, start in enumerate(range(0, n, batch_size)):
            idx = order[start:start + batch_size]
            xb, yb = inputs[idx], labels[idx]

            optimizer.zero_grad()
            loss = criterion(model(xb), yb)
            loss.backward()
            if grad_clip is not None:
                nn.utils.clip_grad_norm_(model.parameters(), grad_clip)
            optimizer.step()

            total_loss += loss.item() * len(idx)
            seen += len(idx)
            if callbacks.on_batch_end is not None:
                await _maybe_await(callbacks.on_batch_end(batch, total_loss / seen))

        epoch_loss = total_loss / max(seen, 1)

        val_loss: Optional[float] = None
        if validation_data is not None:
            x_val, y_val = validation_data
            model.eval()
            with torch.no_grad():
                val_loss = criterion(model(x_val), y_val).item()

        history.append({"epoch": epoch + 1, "loss": epoch_loss, "val_loss": val_loss})

        if verbose and hasattr(pbar, "set_postfix"):
            postfix = {"loss": f"{epoch_loss:.6f}"}
            if val_loss is not None:
                postfix["val_loss"] = f"{val_loss:.6f}"
            pbar.set_postfix(postfix)

        if logger is not None and (epoch + 1) % log_every == 0:
            metrics: Dict[str, float] = {"train_loss": epoch_loss, "epoch": epoch}
            if val_loss is not None:
                metrics["val_loss"] = val_loss
            metrics["lr"] = optimizer.param_groups[0]["lr"]
            metrics["grad_norm"] = gradient_norm(model.parameters())
            logger.log_metrics(metrics, step=epoch)

        if callbacks.on_epoch_end is not None:
            await _maybe_await(callbacks.on_epoch_end(epoch, epoch_loss, val_loss))

    return history
