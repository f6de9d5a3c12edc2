"""Predictor registry with decorator-based auto-registration.

Usage
-----
::

    from wavecast.config import LSTMConfig
    from wavecast.models.registry import register_model

    @register_model("lstm", LSTMConfig)
    class LSTMPredictor(Predictor):
        ...

Then later::

    from wavecast.models.registry import build_model

    predictor = build_model("lstm", hidden_size=50)
"""

from __future__ import annotations

from dataclasses import fields
from typing import Any, Dict, List, Tuple, Type

# Registry: name → (predictor_class, config_class)
_REGISTRY: Dict[str, Tuple[Type, Type]] = {}


def register_model(name: str, config_cls: Type):
    """Class decorator that registers a predictor under *name*."""
    def decorator(cls):
        if name in _REGISTRY:
            existing = _REGISTRY[name][0].__name__
            raise ValueError(
                f"Duplicate model registration: '{name}' already maps to "
                f"{existing}, cannot register {cls.__name__}"
            )
        _REGISTRY[name] = (cls, config_cls)
        cls.name = name
        cls._config_cls = config_cls
        return cls
    return decorator


def get_model_class(name: str) -> Type:
    """Return the predictor class registered under *name*."""
    if name not in _REGISTRY:
        raise KeyError(
            f"Unknown model '{name}'. Available: {', '.join(sorted(_REGISTRY))}"
        )
    return _REGISTRY[name][0]


def get_config_class(name: str) -> Type:
    """Return the config class for predictor *name*."""
    if name not in _REGISTRY:
        raise KeyError(
            f"Unknown model '{name}'. Available: {', '.join(sorted(_REGISTRY))}"
        )
    return _REGISTRY[name][1]


def build_model(name: str, **config_kwargs: Any):
    """Instantiate a registered predictor; unknown config keys are dropped."""
    model_cls = get_model_class(name)
    cfg_cls = get_config_class(name)
    valid = {f.name for f in fields(cfg_cls)}
    cfg = cfg_cls(**{k: v for k, v in config_kwargs.items() if k in valid})
    return model_cls(cfg)


def list_models() -> List[str]:
    """Return sorted list of registered predictor names."""
    return sorted(_REGISTRY.keys())


def is_registered(name: str) -> bool:
    return name in _REGISTRY
