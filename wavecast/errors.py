"""Exception taxonomy for the generation → training → evaluation pipeline."""

from __future__ import annotations


class WavecastError(Exception):
    """Base class for every pipeline error."""


class NoDataError(WavecastError, RuntimeError):
    """Training was requested before any sequences were generated."""


class TrainingBusyError(WavecastError, RuntimeError):
    """A training run is already in flight."""


class InsufficientLengthError(WavecastError, ValueError):
    """A sequence is shorter than window + target."""


class TensorConstructionError(WavecastError, ValueError):
    """Datasets could not be converted into predictor tensors."""


class InvalidParameterError(WavecastError, ValueError):
    """A generation parameter is outside its documented range."""
