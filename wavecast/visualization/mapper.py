"""Affine data → pixel mapping shared by all views.

Pixel space has its origin at the top-left corner of the canvas, so the
y-axis is inverted: larger data-y maps to smaller pixel-y.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

TICK_EPS: float = 1e-4
"""Tolerance that keeps the last tick despite floating-point drift."""


@dataclass(frozen=True)
class Margins:
    top: float = 20.0
    bottom: float = 40.0
    left: float = 60.0
    right: float = 20.0


def pad_range(lo: float, hi: float, fraction: float = 0.1) -> Tuple[float, float]:
    """Expand ``[lo, hi]`` by *fraction* of its span on each side.

    A flat range (``lo == hi``) is widened by ±1 instead.
    """
    span = hi - lo
    if span == 0:
        return lo - 1.0, hi + 1.0
    return lo - span * fraction, hi + span * fraction


@dataclass(frozen=True)
class CoordinateMapper:
    """Map the data rectangle ``[x_min, x_max] × [y_min, y_max]`` onto the
    plot rectangle of a ``width × height`` canvas inset by *margins*.

    Degenerate ranges are widened by ±1 on construction so mapping
    never divides by zero.
    """

    x_min: float
    x_max: float
    y_min: float
    y_max: float
    width: float = 800.0
    height: float = 400.0
    margins: Margins = field(default_factory=Margins)

    def __post_init__(self) -> None:
        if self.x_max == self.x_min:
            object.__setattr__(self, "x_min", self.x_min - 1.0)
            object.__setattr__(self, "x_max", self.x_max + 1.0)
        if self.y_max == self.y_min:
            object.__setattr__(self, "y_min", self.y_min - 1.0)
            object.__setattr__(self, "y_max", self.y_max + 1.0)

    # ── pixel bounds ──────────────────────────────────────────────────

    @property
    def plot_width(self) -> float:
        return self.width - self.margins.left - self.margins.right

    @property
    def plot_height(self) -> float:
        return self.height - self.margins.top - self.margins.bottom

    @property
    def left(self) -> float:
        return self.margins.left

    @property
    def right(self) -> float:
        return self.width - self.margins.right

    @property
    def top(self) -> float:
        return self.margins.top

    @property
    def bottom(self) -> float:
        return self.height - self.margins.bottom

    # ── mapping ───────────────────────────────────────────────────────

    def map_x(self, x: float) -> float:
        return self.left + (x - self.x_min) / (self.x_max - self.x_min) * self.plot_width

    def map_y(self, y: float) -> float:
        return self.top + (self.y_max - y) / (self.y_max - self.y_min) * self.plot_height

    def map_point(self, x: float, y: float) -> Tuple[float, float]:
        return self.map_x(x), self.map_y(y)

    # ── ticks ─────────────────────────────────────────────────────────

    def y_ticks(self, step: float = 0.5) -> List[float]:
        """Ticks every *step* from ``ceil(y_min / step) * step`` to ``y_max``."""
        return _ticks(math.ceil(self.y_min / step) * step, self.y_max, step)

    def x_ticks(
        self,
        step: float,
        start: Optional[float] = None,
        clip: bool = False,
    ) -> List[float]:
        """Ticks every *step* up to ``x_max``.

        Parameters
        ----------
        step : float
        start : float | None
            First tick; defaults to ``ceil(x_min / step) * step``.
        clip : bool
            Keep only ticks whose pixel position lies strictly inside the
            plot rectangle.
        """
        if start is None:
            start = math.ceil(self.x_min / step) * step
        ticks = _ticks(start, self.x_max, step)
        if clip:
            ticks = [v for v in ticks if self.left < self.map_x(v) < self.right]
        return ticks


def _ticks(start: float, stop: float, step: float) -> List[float]:
    if step <= 0:
        raise ValueError(f"tick step must be positive, got {step}")
    out = []
    i = 0
    while True:
        val = start + i * step
        if val > stop + TICK_EPS:
            break
        out.append(val)
        i += 1
    return out
