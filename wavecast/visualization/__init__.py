"""Pixel-space rendering of waves, loss curves and evaluations."""

from .canvas import Canvas, hsl_color
from .mapper import CoordinateMapper, Margins, pad_range
from .plots import (
    EvaluationPlot,
    LegendEntry,
    LossPlot,
    SequencePlot,
    render_evaluation,
    render_loss,
    render_sequences,
)

__all__ = [
    "Canvas",
    "CoordinateMapper",
    "EvaluationPlot",
    "LegendEntry",
    "LossPlot",
    "Margins",
    "SequencePlot",
    "hsl_color",
    "pad_range",
    "render_evaluation",
    "render_loss",
    "render_sequences",
]
