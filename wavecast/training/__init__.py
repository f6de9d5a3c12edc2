"""Loss history and the cooperative training pipeline."""

from .history import EpochRecord, LossHistory
from .orchestrator import (
    EvaluationResult,
    TensorBundle,
    TrainingOrchestrator,
    TrainingState,
    yield_control,
)

__all__ = [
    "EpochRecord",
    "EvaluationResult",
    "LossHistory",
    "TensorBundle",
    "TrainingOrchestrator",
    "TrainingState",
    "yield_control",
]
