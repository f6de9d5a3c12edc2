"""Synthetic sine-wave generator.

Every sequence is sampled at ``SEQUENCE_LENGTH`` evenly spaced positions
``x_j = j / (N - 1)`` on ``[0, 1]``::

    y_j = sign * amplitude * sin(2π x_j / period)

with ``amplitude`` and ``period`` drawn uniformly from their ranges and
``sign`` flipped with a configurable percentage chance.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

import numpy as np

from wavecast.errors import InvalidParameterError

SEQUENCE_LENGTH: int = 50
"""Number of samples per generated sequence."""

WINDOW_SIZE: int = SEQUENCE_LENGTH - 1
"""Number of leading samples fed to the predictor."""


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class WaveParams:
    """Parameters a single sequence was drawn with."""

    amplitude: float
    period: float
    sign: int


@dataclass(frozen=True)
class Sequence:
    """Immutable, ordered run of :class:`Point` samples."""

    points: Tuple[Point, ...]
    params: Optional[WaveParams] = None

    def __len__(self) -> int:
        return len(self.points)

    def __getitem__(self, index):
        return self.points[index]

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    @property
    def xs(self) -> np.ndarray:
        return np.array([p.x for p in self.points], dtype=np.float64)

    @property
    def ys(self) -> np.ndarray:
        return np.array([p.y for p in self.points], dtype=np.float64)

    @classmethod
    def from_arrays(
        cls, x: np.ndarray, y: np.ndarray, params: Optional[WaveParams] = None
    ) -> "Sequence":
        x = np.asarray(x, dtype=np.float64).ravel()
        y = np.asarray(y, dtype=np.float64).ravel()
        if x.shape != y.shape:
            raise ValueError(
                f"x and y must have same length, got {x.shape[0]} and {y.shape[0]}"
            )
        return cls(
            points=tuple(Point(float(a), float(b)) for a, b in zip(x, y)),
            params=params,
        )


def sample_positions(n: int = SEQUENCE_LENGTH) -> np.ndarray:
    """Return ``[0, 1/(n-1), ..., 1]``."""
    return np.arange(n, dtype=np.float64) / (n - 1)


def generate_sine_waves(
    count: int,
    min_amp: float,
    max_amp: float,
    min_period: float,
    max_period: float,
    negative_probability: float = 50.0,
    *,
    rng: Optional[np.random.Generator] = None,
) -> List[Sequence]:
    """Draw *count* independent sine waves.

    Parameters
    ----------
    count : int
        Number of sequences (``>= 0``).
    min_amp, max_amp : float
        Amplitude range. ``min_amp <= max_amp`` is the caller's
        responsibility.
    min_period, max_period : float
        Period range, same precondition.
    negative_probability : float
        Percentage (0–100) chance that a sequence's sign is negated.
    rng : np.random.Generator | None
        Random source; a fresh default generator when omitted.

    Returns
    -------
    list[Sequence]
        Exactly *count* sequences of ``SEQUENCE_LENGTH`` points.
    """
    if count < 0:
        raise InvalidParameterError(f"count must be >= 0, got {count}")
    if not 0.0 <= negative_probability <= 100.0:
        raise InvalidParameterError(
            f"negative_probability must be within [0, 100], got {negative_probability}"
        )

    rng = rng if rng is not None else np.random.default_rng()
    x = sample_positions()

    waves: List[Sequence] = []
    for _ in range(count):
        amplitude = min_amp + rng.random() * (max_amp - min_amp)
        period = min_period + rng.random() * (max_period - min_period)
        sign = -1 if rng.random() * 100.0 < negative_probability else 1

        y = sign * amplitude * np.sin(2.0 * np.pi * x / period)
        waves.append(
            Sequence.from_arrays(x, y, WaveParams(float(amplitude), float(period), sign))
        )
    return waves
