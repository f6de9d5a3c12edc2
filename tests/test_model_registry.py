"""Tests for the predictor registry (decorator-based)."""

import pytest


def test_list_models_not_empty():
    """Registration decorators should have populated the registry."""
    from wavecast.models import list_models
    assert list_models() == ["gru", "lstm"]


def test_get_model_class():
    from wavecast.models import LSTMPredictor, get_model_class
    cls = get_model_class("lstm")
    assert cls is LSTMPredictor
    assert cls.name == "lstm"


def test_get_config_class():
    from wavecast.config import GRUConfig
    from wavecast.models import get_config_class
    assert get_config_class("gru") is GRUConfig


def test_build_model_applies_overrides():
    from wavecast.models import build_model
    predictor = build_model("lstm", hidden_size=12, device="cpu", not_a_field=1)
    assert predictor.config.hidden_size == 12
    assert predictor.is_trained is False


def test_build_unknown_model_raises():
    from wavecast.models import build_model
    with pytest.raises(KeyError):
        build_model("nonexistent_model")


def test_duplicate_registration_raises():
    from wavecast.config import LSTMConfig
    from wavecast.models import register_model

    with pytest.raises(ValueError):
        @register_model("lstm", LSTMConfig)
        class _Again:
            pass


def test_is_registered():
    from wavecast.models import is_registered
    assert is_registered("lstm")
    assert not is_registered("nonexistent")
