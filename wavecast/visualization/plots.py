"""The three diagnostic views: generated waves, loss curve, evaluation.

Every renderer clears its canvas before drawing and keeps no state
between calls; what was drawn is returned as a small record.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Sequence as SequenceT, Tuple

import numpy as np

from wavecast.data.generator import SEQUENCE_LENGTH, WINDOW_SIZE, Sequence
from wavecast.visualization.canvas import Canvas, hsl_color
from wavecast.visualization.mapper import CoordinateMapper, Margins, pad_range

if TYPE_CHECKING:
    from wavecast.training.history import LossHistory

SEQUENCE_MARGINS = Margins(top=20, bottom=40, left=60, right=100)
EVAL_MARGINS = Margins(top=20, bottom=40, left=60, right=20)
LOSS_PADDING: float = 40.0

EVAL_POINTS: int = 15
"""Trailing positions shown by the evaluation view."""

TARGET_COLOR = "red"
PREDICTION_COLOR = "green"
TRAIN_COLOR = "orange"
VAL_COLOR = "blue"


@dataclass
class LegendEntry:
    label: str
    color: str


@dataclass
class SequencePlot:
    indices: List[int] = field(default_factory=list)
    legend: List[LegendEntry] = field(default_factory=list)
    mapper: Optional[CoordinateMapper] = None


@dataclass
class LossPlot:
    epochs: int = 0
    max_loss: float = 0.0
    tick_epochs: List[int] = field(default_factory=list)


@dataclass
class EvaluationPlot:
    """Pixel positions of the true-target and predicted markers."""

    targets: List[Tuple[float, float]] = field(default_factory=list)
    predictions: List[Tuple[float, float]] = field(default_factory=list)
    mapper: Optional[CoordinateMapper] = None


# ─────────────────────────────────────────────────────────────────────
# Shared axis drawing
# ─────────────────────────────────────────────────────────────────────

def _draw_axes(canvas: Canvas, mapper: CoordinateMapper) -> None:
    canvas.polyline(
        [(mapper.left, mapper.top), (mapper.left, mapper.bottom), (mapper.right, mapper.bottom)],
        width=1,
    )


def _draw_y_ticks(canvas: Canvas, mapper: CoordinateMapper, ticks: SequenceT[float]) -> None:
    for val in ticks:
        y = mapper.map_y(val)
        canvas.polyline([(mapper.left - 5, y), (mapper.left, y)], width=1)
        canvas.text(mapper.left - 10, y, f"{val:.1f}", ha="right", va="center")


def _draw_x_ticks(canvas: Canvas, mapper: CoordinateMapper, ticks: SequenceT[float]) -> None:
    for val in ticks:
        x = mapper.map_x(val)
        canvas.polyline([(x, mapper.bottom), (x, mapper.bottom + 5)], width=1)
        canvas.text(x, mapper.bottom + 10, f"{val:.2f}", ha="center", va="top")


# ─────────────────────────────────────────────────────────────────────
# Sequence view
# ─────────────────────────────────────────────────────────────────────

def render_sequences(
    canvas: Canvas,
    pool: SequenceT[Sequence],
    start_index: int = 0,
    count: int = 5,
) -> SequencePlot:
    """Draw ``pool[start_index : start_index + count]``.

    Each wave is a polyline over its input window with its target drawn
    as a labelled red dot.  Colours rotate evenly through the hue circle
    by position in the displayed subset.
    """
    canvas.clear()
    start = max(0, start_index)
    indices = list(range(start, min(start + count, len(pool))))
    if not indices:
        return SequencePlot()

    ys = np.concatenate([pool[i].ys for i in indices])
    y_min, y_max = pad_range(float(ys.min()), float(ys.max()))
    mapper = CoordinateMapper(
        0.0, 1.0, y_min, y_max,
        width=canvas.width, height=canvas.height, margins=SEQUENCE_MARGINS,
    )

    _draw_axes(canvas, mapper)
    _draw_y_ticks(canvas, mapper, mapper.y_ticks(0.5))
    _draw_x_ticks(canvas, mapper, mapper.x_ticks(0.25, start=0.0))

    legend: List[LegendEntry] = []
    for i in indices:
        color = hsl_color((i - start) * 360.0 / count, 1.0, 0.5)
        wave = pool[i]
        canvas.polyline(
            [mapper.map_point(p.x, p.y) for p in wave.points[:WINDOW_SIZE]],
            color=color, width=2, gid="wave",
        )

        target = wave[SEQUENCE_LENGTH - 1]
        tx, ty = mapper.map_point(target.x, target.y)
        canvas.circle(tx, ty, 5, TARGET_COLOR, gid="target")
        canvas.text(tx + 10, ty, f"target{i}")

        legend.append(LegendEntry(f"Wave {i}", color))

    canvas.legend([(e.label, e.color) for e in legend])
    return SequencePlot(indices=indices, legend=legend, mapper=mapper)


# ─────────────────────────────────────────────────────────────────────
# Loss view
# ─────────────────────────────────────────────────────────────────────

def _round_half_up(v: float) -> int:
    return int(math.floor(v + 0.5))


def render_loss(canvas: Canvas, history: LossHistory, max_ticks: int = 5) -> LossPlot:
    """Draw training (orange) and validation (blue) loss against epoch."""
    canvas.clear()
    n = len(history)
    if n == 0:
        return LossPlot()

    max_loss = history.max_loss()
    pad = LOSS_PADDING
    mapper = CoordinateMapper(
        0.0, float(max(n - 1, 1)), 0.0, max_loss if max_loss > 0 else 1.0,
        width=canvas.width, height=canvas.height,
        margins=Margins(top=pad, bottom=pad, left=pad, right=pad),
    )

    _draw_axes(canvas, mapper)
    canvas.text(canvas.width / 2, canvas.height - 10, "Epochs", ha="center")
    canvas.text(15, canvas.height / 2, "MSE Loss", ha="center", rotation=90)

    records = history.records
    canvas.polyline(
        [mapper.map_point(i, r.loss) for i, r in enumerate(records)],
        color=TRAIN_COLOR, width=2, gid="train_loss",
    )
    val_points = [
        mapper.map_point(i, r.val_loss) for i, r in enumerate(records) if r.val_loss is not None
    ]
    if val_points:
        canvas.polyline(val_points, color=VAL_COLOR, width=2, gid="val_loss")

    canvas.text(canvas.width - pad, pad, "Train", color=TRAIN_COLOR, ha="right")
    canvas.text(canvas.width - pad, pad + 15, "Val", color=VAL_COLOR, ha="right")

    canvas.text(pad - 5, pad, f"{max_loss:.4f}", ha="right")
    canvas.text(pad - 5, canvas.height - pad, "0", ha="right")

    num_ticks = min(n, max_ticks)
    tick_epochs: List[int] = []
    for i in range(num_ticks):
        index = _round_half_up(i / (num_ticks - 1 or 1) * (n - 1))
        x = mapper.map_x(index)
        canvas.polyline([(x, mapper.bottom), (x, mapper.bottom + 5)], width=1)
        canvas.text(x, mapper.bottom + 5, str(records[index].epoch), ha="center", va="top")
        tick_epochs.append(records[index].epoch)

    return LossPlot(epochs=n, max_loss=max_loss, tick_epochs=tick_epochs)


# ─────────────────────────────────────────────────────────────────────
# Evaluation view
# ─────────────────────────────────────────────────────────────────────

def render_evaluation(
    canvas: Canvas,
    test_sequences: SequenceT[Sequence],
    predictions: SequenceT[float],
    points_to_show: int = EVAL_POINTS,
) -> EvaluationPlot:
    """Zoom onto the trailing *points_to_show* positions and compare each
    true target (red) with its prediction (green).

    A thin dashed segment joins the two markers, so its length is the
    prediction error in plot units.
    """
    predictions = np.asarray(predictions, dtype=np.float64).ravel()
    if len(predictions) != len(test_sequences):
        raise ValueError(
            f"need one prediction per sequence, got {len(predictions)} "
            f"for {len(test_sequences)} sequences"
        )
    canvas.clear()
    if not test_sequences:
        return EvaluationPlot()

    start = SEQUENCE_LENGTH - points_to_show
    min_x = start / (SEQUENCE_LENGTH - 1)
    max_x = 1.0

    trailing = np.concatenate([seq.ys[start:] for seq in test_sequences])
    values = np.concatenate([trailing, predictions])
    y_min, y_max = pad_range(float(values.min()), float(values.max()))
    x_pad = (max_x - min_x) * 0.05
    mapper = CoordinateMapper(
        min_x, max_x + x_pad, y_min, y_max,
        width=canvas.width, height=canvas.height, margins=EVAL_MARGINS,
    )

    _draw_axes(canvas, mapper)
    _draw_y_ticks(canvas, mapper, mapper.y_ticks(0.5))
    _draw_x_ticks(canvas, mapper, mapper.x_ticks(0.05, clip=True))

    result = EvaluationPlot(mapper=mapper)
    n = len(test_sequences)
    for i, seq in enumerate(test_sequences):
        color = hsl_color(i * 360.0 / n, 0.7, 0.7)
        canvas.polyline(
            [mapper.map_point(p.x, p.y) for p in seq.points[start:WINDOW_SIZE]],
            color=color, width=2, gid="wave",
        )

        target = seq[SEQUENCE_LENGTH - 1]
        tx, ty = mapper.map_point(target.x, target.y)
        canvas.circle(tx, ty, 6, TARGET_COLOR, gid="target")

        px, py = tx, mapper.map_y(float(predictions[i]))
        canvas.circle(px, py, 6, PREDICTION_COLOR, gid="prediction")

        canvas.polyline([(tx, ty), (px, py)], color="black", width=1, dash=(2, 2), gid="error")

        result.targets.append((tx, ty))
        result.predictions.append((px, py))

    return result
