"""Configuration dataclasses for generation, display and training.

Each config is a plain dataclass that supports serialisation to/from
dicts so it can be logged to W&B or restored from a CLI namespace.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Optional


# ─────────────────────────────────────────────────────────────────────
# Base
# ─────────────────────────────────────────────────────────────────────

@dataclass
class BaseConfig:
    """Shared serialisation helpers."""

    def to_dict(self) -> Dict[str, Any]:
        """Recursively convert config to a plain dict."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]):
        """Create config from a dict, ignoring unknown keys."""
        valid = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in d.items() if k in valid})


# ─────────────────────────────────────────────────────────────────────
# Data generation / display
# ─────────────────────────────────────────────────────────────────────

@dataclass
class GenerationConfig(BaseConfig):
    """Sampling policy for synthetic sine waves.

    Attributes:
        num_sequences: Size of the generated pool.
        min_amp, max_amp: Amplitude range (``min_amp <= max_amp``).
        min_period, max_period: Period range in normalised x units.
        negative_probability: Percentage chance (0–100) that a wave is
            sign-flipped.
    """

    num_sequences: int = 100
    min_amp: float = 0.5
    max_amp: float = 1.5
    min_period: float = 1.0
    max_period: float = 2.0
    negative_probability: float = 50.0

    def generate(self, count: Optional[int] = None, rng=None):
        """Draw *count* sequences (defaults to ``num_sequences``)."""
        from wavecast.data.generator import generate_sine_waves

        return generate_sine_waves(
            self.num_sequences if count is None else count,
            self.min_amp,
            self.max_amp,
            self.min_period,
            self.max_period,
            self.negative_probability,
            rng=rng,
        )


@dataclass
class DisplayConfig(BaseConfig):
    start_index: int = 0
    num_to_show: int = 5


# ─────────────────────────────────────────────────────────────────────
# Training
# ─────────────────────────────────────────────────────────────────────

@dataclass
class TrainingConfig(BaseConfig):
    """Hyperparameters of a training run.

    Attributes:
        model: Registered predictor name (``"lstm"`` or ``"gru"``).
        hidden_size: Width of the single recurrent layer.
        learning_rate: Adam learning rate.
        epochs: Number of training epochs.
        batch_size: Mini-batch size.
        val_fraction: Validation pool size as a fraction of the training pool.
        min_val_sequences: Lower bound on the validation pool size.
        test_sequences: Number of fresh sequences scored after training.
        grad_clip: Maximum gradient norm; ``None`` disables clipping.
        shuffle: Reshuffle the training set every epoch.
        verbose: Show tqdm progress bars.
        device: Compute device (``"auto"``, ``"cpu"``, ``"cuda"``).
        seed: Random seed for reproducibility.
    """

    model: str = "lstm"
    hidden_size: int = 50
    learning_rate: float = 0.01
    epochs: int = 20
    batch_size: int = 32
    val_fraction: float = 0.2
    min_val_sequences: int = 20
    test_sequences: int = 5
    grad_clip: Optional[float] = None
    shuffle: bool = True
    verbose: bool = True
    device: str = "auto"
    seed: Optional[int] = None
    wandb_project: Optional[str] = None
    wandb_run_name: Optional[str] = None
    wandb_log_every: int = 1

    def validation_count(self, train_count: int) -> int:
        """``max(min_val_sequences, floor(val_fraction * train_count))``."""
        return max(self.min_val_sequences, int(train_count * self.val_fraction))


# ─────────────────────────────────────────────────────────────────────
# Predictors
# ─────────────────────────────────────────────────────────────────────

@dataclass
class RecurrentConfig(BaseConfig):
    """Single recurrent layer feeding one linear output unit."""

    window_size: int = 49
    hidden_size: int = 50
    learning_rate: float = 0.01
    grad_clip: Optional[float] = None
    shuffle: bool = True
    verbose: bool = True
    device: str = "auto"
    wandb_log_every: int = 1


@dataclass
class LSTMConfig(RecurrentConfig):
    pass


@dataclass
class GRUConfig(RecurrentConfig):
    pass
