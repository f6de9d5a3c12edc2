"""Tests for the three renderers and the pixel canvas."""

import numpy as np
import pytest

from wavecast.data.generator import Sequence, generate_sine_waves
from wavecast.training.history import LossHistory
from wavecast.visualization.canvas import Canvas, hsl_color
from wavecast.visualization.plots import (
    render_evaluation,
    render_loss,
    render_sequences,
)


@pytest.fixture
def pool():
    return generate_sine_waves(10, 0.5, 1.5, 1.0, 2.0, 50, rng=np.random.default_rng(2))


@pytest.fixture
def canvas():
    return Canvas(800, 400)


def test_hsl_color():
    assert hsl_color(0, 1.0, 0.5) == "#ff0000"
    assert hsl_color(120, 1.0, 0.5) == "#00ff00"
    assert hsl_color(360, 1.0, 0.5) == "#ff0000"


class TestSequenceView:
    def test_draws_requested_subset(self, canvas, pool):
        plot = render_sequences(canvas, pool, start_index=2, count=3)
        assert plot.indices == [2, 3, 4]
        assert [e.label for e in plot.legend] == ["Wave 2", "Wave 3", "Wave 4"]
        assert len(canvas.lines("wave")) == 3
        assert len(canvas.markers("target")) == 3
        assert {"target2", "target3", "target4"} <= set(canvas.texts())

    def test_polyline_covers_window_only(self, canvas, pool):
        render_sequences(canvas, pool, 0, 1)
        (line,) = canvas.lines("wave")
        assert len(line.get_xdata()) == 49

    def test_clipped_to_pool(self, canvas, pool):
        plot = render_sequences(canvas, pool, start_index=8, count=5)
        assert plot.indices == [8, 9]
        assert len(canvas.markers("target")) == 2

    def test_distinct_hues(self, canvas, pool):
        plot = render_sequences(canvas, pool, 0, 5)
        colors = [e.color for e in plot.legend]
        assert len(set(colors)) == 5
        assert colors[0] == "#ff0000"

    def test_target_marker_at_last_point(self, canvas, pool):
        plot = render_sequences(canvas, pool, 0, 1)
        (marker,) = canvas.markers("target")
        assert marker.center == pytest.approx(plot.mapper.map_point(1.0, pool[0][49].y))

    def test_clears_between_calls(self, canvas, pool):
        render_sequences(canvas, pool, 0, 5)
        render_sequences(canvas, pool, 0, 2)
        assert len(canvas.lines("wave")) == 2
        assert len(canvas.markers()) == 2

    def test_empty_pool(self, canvas):
        plot = render_sequences(canvas, [], 0, 5)
        assert plot.indices == []
        assert canvas.lines() == []

    def test_flat_waves_do_not_crash(self, canvas):
        flat = [Sequence.from_arrays(np.linspace(0, 1, 50), np.zeros(50))]
        plot = render_sequences(canvas, flat, 0, 1)
        assert plot.mapper.y_min == -1.0
        assert plot.mapper.y_max == 1.0


class TestLossView:
    def _history(self, n, with_val=True):
        h = LossHistory()
        for e in range(1, n + 1):
            h.append(e, 1.0 / e, 1.2 / e if with_val else None)
        return h

    def test_two_series(self):
        canvas = Canvas(600, 300)
        plot = render_loss(canvas, self._history(20))
        assert plot.epochs == 20
        assert plot.max_loss == pytest.approx(1.2)
        assert len(canvas.lines("train_loss")) == 1
        assert len(canvas.lines("val_loss")) == 1
        texts = canvas.texts()
        assert {"Train", "Val", "Epochs", "MSE Loss", "1.2000", "0"} <= set(texts)

    def test_epoch_ticks(self):
        plot = render_loss(Canvas(600, 300), self._history(20))
        assert plot.tick_epochs == [1, 6, 11, 15, 20]

    def test_few_epochs(self):
        plot = render_loss(Canvas(600, 300), self._history(2))
        assert plot.tick_epochs == [1, 2]

    def test_single_epoch(self):
        canvas = Canvas(600, 300)
        plot = render_loss(canvas, self._history(1))
        assert plot.tick_epochs == [1]
        assert len(canvas.lines("train_loss")[0].get_xdata()) == 1

    def test_without_validation(self):
        canvas = Canvas(600, 300)
        render_loss(canvas, self._history(5, with_val=False))
        assert canvas.lines("val_loss") == []

    def test_max_loss_at_top(self):
        canvas = Canvas(600, 300)
        render_loss(canvas, self._history(4, with_val=False))
        (line,) = canvas.lines("train_loss")
        assert line.get_ydata()[0] == pytest.approx(40)
        assert line.get_xdata()[0] == pytest.approx(40)
        assert line.get_xdata()[-1] == pytest.approx(560)

    def test_empty_history(self):
        canvas = Canvas(600, 300)
        plot = render_loss(canvas, LossHistory())
        assert plot.epochs == 0
        assert canvas.lines() == []


class TestEvaluationView:
    def test_markers_pair_up(self, canvas, pool):
        tests = pool[:5]
        preds = [w[49].y + 0.1 for w in tests]
        plot = render_evaluation(canvas, tests, preds)
        assert len(canvas.markers("target")) == 5
        assert len(canvas.markers("prediction")) == 5
        assert len(canvas.lines("error")) == 5
        for (tx, ty), (px, py) in zip(plot.targets, plot.predictions):
            assert tx == px
            assert py < ty  # higher value → smaller pixel y

    def test_zoomed_domain(self, canvas, pool):
        plot = render_evaluation(canvas, pool[:3], [0.0, 0.0, 0.0])
        m = plot.mapper
        assert m.x_min == pytest.approx(35 / 49)
        assert m.x_max == pytest.approx(1 + (1 - 35 / 49) * 0.05)
        for line in canvas.lines("wave"):
            assert len(line.get_xdata()) == 14

    def test_y_range_from_trailing_points_and_predictions(self, canvas, pool):
        tests = pool[:2]
        plot = render_evaluation(canvas, tests, [5.0, -5.0])
        assert plot.mapper.y_max == pytest.approx(6.0)
        assert plot.mapper.y_min == pytest.approx(-6.0)

    def test_perfect_prediction_zero_length_segment(self, canvas, pool):
        tests = pool[:1]
        plot = render_evaluation(canvas, tests, [tests[0][49].y])
        assert plot.targets[0] == pytest.approx(plot.predictions[0])

    def test_prediction_count_mismatch(self, canvas, pool):
        with pytest.raises(ValueError):
            render_evaluation(canvas, pool[:3], [0.0])


def test_canvas_save(tmp_path, canvas, pool):
    render_sequences(canvas, pool, 0, 3)
    path = canvas.save(tmp_path / "nested" / "waves")
    assert path.suffix == ".png"
    assert path.exists()
