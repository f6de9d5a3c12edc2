"""Runtime helpers."""

from .runtime import resolve_device, seed_all

__all__ = ["resolve_device", "seed_all"]
