"""Sequence generation and window datasets."""

from .dataset import WindowDataset, build_window_dataset, to_tensors
from .generator import (
    SEQUENCE_LENGTH,
    WINDOW_SIZE,
    Point,
    Sequence,
    WaveParams,
    generate_sine_waves,
    sample_positions,
)

__all__ = [
    "SEQUENCE_LENGTH",
    "WINDOW_SIZE",
    "Point",
    "Sequence",
    "WaveParams",
    "WindowDataset",
    "build_window_dataset",
    "generate_sine_waves",
    "sample_positions",
    "to_tensors",
]
