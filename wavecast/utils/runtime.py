import random

import numpy as np
import torch


def resolve_device(device: str = "auto") -> str:
    """Resolve runtime device from an explicit value or auto-detection."""
    if device != "auto":
        return device

    if torch.cuda.is_available():
        print(f"Using GPU: {torch.cuda.get_device_name(0)}")
        return "cuda"

    print("Using CPU")
    return "cpu"


def seed_all(seed: int) -> np.random.Generator:
    """Seed supported random number generators.

    Returns a ``numpy`` generator seeded with the same value, for code
    that takes an explicit ``rng``.
    """
    random.seed(seed)
    torch.manual_seed(seed)
    np.random.seed(seed)
    return np.random.default_rng(seed)
