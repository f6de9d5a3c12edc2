"""Window/target datasets derived from generated sequences.

This module provides a thin data container plus the conversion into the
``(samples, window, features)`` tensor layout the recurrent predictors
consume.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple

import numpy as np
import torch

from wavecast.data.generator import SEQUENCE_LENGTH, WINDOW_SIZE, Sequence
from wavecast.errors import InsufficientLengthError, TensorConstructionError


@dataclass(frozen=True)
class WindowDataset:
    """Parallel arrays of input windows and scalar targets.

    Parameters
    ----------
    inputs : np.ndarray
        Shape ``(k, WINDOW_SIZE)``; row *i* holds the leading samples of
        the *i*-th source sequence.
    labels : np.ndarray
        Shape ``(k,)``; the final sample of each sequence.
    """

    inputs: np.ndarray
    labels: np.ndarray

    def __len__(self) -> int:
        return len(self.labels)

    @property
    def window_size(self) -> int:
        return self.inputs.shape[1] if self.inputs.ndim == 2 else 0

    def __repr__(self) -> str:
        return f"WindowDataset(n={len(self)}, window={self.window_size})"


def build_window_dataset(sequences: Iterable[Sequence]) -> WindowDataset:
    """Slice every sequence into ``(window, target)``.

    The window is the y-values of points ``0 .. N-2`` and the target the
    y-value of the last point.  Order is preserved.

    Raises
    ------
    InsufficientLengthError
        If any sequence has fewer than ``SEQUENCE_LENGTH`` points.
    """
    inputs = []
    labels = []
    for i, seq in enumerate(sequences):
        if len(seq) < SEQUENCE_LENGTH:
            raise InsufficientLengthError(
                f"sequence {i} has {len(seq)} points, need {SEQUENCE_LENGTH}"
            )
        ys = seq.ys
        inputs.append(ys[:WINDOW_SIZE])
        labels.append(ys[SEQUENCE_LENGTH - 1])

    if not inputs:
        return WindowDataset(
            inputs=np.zeros((0, WINDOW_SIZE)), labels=np.zeros(0)
        )
    return WindowDataset(inputs=np.stack(inputs), labels=np.asarray(labels))


def to_tensors(
    dataset: WindowDataset,
    device: str = "cpu",
) -> Tuple[torch.Tensor, torch.Tensor]:
    """Convert to ``(inputs [k, window, 1], labels [k, 1])`` float32 tensors.

    Raises
    ------
    TensorConstructionError
        On an empty dataset or inconsistent shapes.
    """
    n = len(dataset.labels)
    if n == 0:
        raise TensorConstructionError("cannot build tensors from an empty dataset")
    try:
        xs = torch.tensor(
            np.asarray(dataset.inputs, dtype=np.float32), device=device
        ).reshape(n, WINDOW_SIZE).unsqueeze(-1)
        ys = torch.tensor(
            np.asarray(dataset.labels, dtype=np.float32), device=device
        ).reshape(n, 1)
    except (RuntimeError, ValueError, TypeError) as exc:
        raise TensorConstructionError(str(exc)) from exc
    return xs, ys
