"""Predictor package — importing it triggers registration."""

# Import so @register_model decorators execute
from wavecast.models import recurrent  # noqa: F401

from wavecast.models.base import Predictor
from wavecast.models.recurrent import GRUPredictor, LSTMPredictor
from wavecast.models.registry import (
    build_model,
    get_config_class,
    get_model_class,
    is_registered,
    list_models,
    register_model,
)
from wavecast.models.training import FitCallbacks, fit_batches

__all__ = [
    "FitCallbacks",
    "GRUPredictor",
    "LSTMPredictor",
    "Predictor",
    "build_model",
    "fit_batches",
    "get_config_class",
    "get_model_class",
    "is_registered",
    "list_models",
    "register_model",
]
