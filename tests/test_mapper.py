"""Tests for CoordinateMapper and tick generation."""

import math

import pytest

from wavecast.visualization.mapper import CoordinateMapper, Margins, pad_range


def _mapper(**kw):
    defaults = dict(x_min=0.0, x_max=1.0, y_min=-2.0, y_max=2.0,
                    width=800, height=400, margins=Margins(20, 40, 60, 100))
    defaults.update(kw)
    return CoordinateMapper(**defaults)


class TestMapping:
    def test_corners_hit_pixel_bounds(self):
        m = _mapper()
        assert m.map_x(0.0) == pytest.approx(60)
        assert m.map_x(1.0) == pytest.approx(700)
        assert m.map_y(2.0) == pytest.approx(20)
        assert m.map_y(-2.0) == pytest.approx(360)

    def test_plot_size(self):
        m = _mapper()
        assert m.plot_width == 640
        assert m.plot_height == 340
        assert (m.left, m.right, m.top, m.bottom) == (60, 700, 20, 360)

    def test_inverted_y_axis(self):
        m = _mapper()
        assert m.map_y(1.0) < m.map_y(0.0)

    def test_midpoint(self):
        m = _mapper()
        assert m.map_point(0.5, 0.0) == pytest.approx((380, 190))

    def test_degenerate_y_range(self):
        m = _mapper(y_min=0.7, y_max=0.7)
        top, bottom = m.map_y(m.y_max), m.map_y(m.y_min)
        assert math.isfinite(top) and math.isfinite(bottom)
        assert top != bottom
        assert (m.y_min, m.y_max) == pytest.approx((-0.3, 1.7))

    def test_degenerate_x_range(self):
        m = _mapper(x_min=3.0, x_max=3.0)
        assert math.isfinite(m.map_x(3.0))


class TestPadRange:
    def test_ten_percent(self):
        assert pad_range(-1.0, 1.0) == pytest.approx((-1.2, 1.2))

    def test_flat(self):
        assert pad_range(0.5, 0.5) == (-0.5, 1.5)

    def test_custom_fraction(self):
        assert pad_range(0.0, 10.0, 0.05) == pytest.approx((-0.5, 10.5))


class TestTicks:
    def test_y_ticks_half_steps(self):
        m = _mapper(y_min=-1.2, y_max=1.2)
        assert m.y_ticks() == pytest.approx([-1.0, -0.5, 0.0, 0.5, 1.0])

    def test_y_ticks_include_boundary(self):
        m = _mapper(y_min=-1.0, y_max=1.0)
        ticks = m.y_ticks()
        assert ticks[0] == pytest.approx(-1.0)
        assert ticks[-1] == pytest.approx(1.0)

    def test_x_ticks_quarter_steps_from_zero(self):
        m = _mapper()
        assert m.x_ticks(0.25, start=0.0) == pytest.approx([0, 0.25, 0.5, 0.75, 1.0])

    def test_x_ticks_epsilon_keeps_last(self):
        m =_mapper(x_min=0.0, x_max=1.0)
        assert m.x_ticks(0.05)[-1] == pytest.approx(1.0)

    def test_x_ticks_clipped(self):
        m = _mapper(x_min=35 / 49, x_max=1.0 + (1 - 35 / 49) * 0.05, margins=Margins(20, 40, 60, 20))
        ticks = m.x_ticks(0.05, clip=True)
        assert ticks == pytest.approx([0.75, 0.8, 0.85, 0.9, 0.95, 1.0])
        for t in ticks:
            assert m.left < m.map_x(t) < m.right

    def test_non_positive_step_rejected(self):
        with pytest.raises(ValueError):
            _mapper().y_ticks(0)
