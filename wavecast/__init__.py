"""wavecast — synthetic sine waves, next-sample forecasting and diagnostics.

Public API
----------
::

    from wavecast.data import generate_sine_waves, build_window_dataset
    from wavecast.models import build_model, list_models
    from wavecast.training import TrainingOrchestrator, LossHistory
    from wavecast.visualization import CoordinateMapper, Canvas
    from wavecast.config import GenerationConfig, TrainingConfig
"""

# Eager-import models so decorators register
import wavecast.models  # noqa: F401

from wavecast.config import DisplayConfig, GenerationConfig, TrainingConfig
from wavecast.data import Sequence, WindowDataset, build_window_dataset, generate_sine_waves
from wavecast.errors import (
    InsufficientLengthError,
    InvalidParameterError,
    NoDataError,
    TensorConstructionError,
    TrainingBusyError,
    WavecastError,
)
from wavecast.models import build_model, list_models
from wavecast.training import LossHistory, TrainingOrchestrator, TrainingState
from wavecast.visualization import Canvas, CoordinateMapper
from wavecast.wandb_logger import WandbLogger

__all__ = [
    "Canvas",
    "CoordinateMapper",
    "DisplayConfig",
    "GenerationConfig",
    "InsufficientLengthError",
    "InvalidParameterError",
    "LossHistory",
    "NoDataError",
    "Sequence",
    "TensorConstructionError",
    "TrainingBusyError",
    "TrainingConfig",
    "TrainingOrchestrator",
    "TrainingState",
    "WandbLogger",
    "WavecastError",
    "WindowDataset",
    "build_model",
    "build_window_dataset",
    "generate_sine_waves",
    "list_models",
]
