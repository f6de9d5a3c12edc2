"""Fixed-size pixel drawing surface backed by a matplotlib figure.

The figure has a single frameless axes covering it completely, with
limits ``[0, width] × [height, 0]``, so data units are pixels and the
origin is the top-left corner.
"""

from __future__ import annotations

import colorsys
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from matplotlib.colors import to_hex
from matplotlib.figure import Figure
from matplotlib.lines import Line2D
from matplotlib.patches import Circle

DEFAULT_DPI: int = 100
FONT_PX: float = 12.0


def hsl_color(hue: float, saturation: float, lightness: float) -> str:
    """``hsl(hue°, saturation, lightness)`` → ``"#rrggbb"`` (fractions in [0, 1])."""
    r, g, b = colorsys.hls_to_rgb((hue % 360.0) / 360.0, lightness, saturation)
    return to_hex((r, g, b))


class Canvas:
    """A ``width × height`` pixel surface.

    Parameters
    ----------
    width, height : int
        Canvas size in pixels.
    dpi : int
        Resolution used to convert pixel sizes to matplotlib points.
    """

    def __init__(self, width: int = 800, height: int = 400, dpi: int = DEFAULT_DPI) -> None:
        self.width = width
        self.height = height
        self.dpi = dpi
        self.figure = Figure(figsize=(width / dpi, height / dpi), dpi=dpi)
        self.ax = self.figure.add_axes((0.0, 0.0, 1.0, 1.0))
        self.clear()

    def _pt(self, px: float) -> float:
        return px * 72.0 / self.dpi

    # ── drawing primitives ────────────────────────────────────────────

    def clear(self) -> None:
        """Erase everything drawn so far."""
        self.ax.cla()
        self.ax.set_xlim(0, self.width)
        self.ax.set_ylim(self.height, 0)
        self.ax.set_axis_off()

    def polyline(
        self,
        points: Iterable[Tuple[float, float]],
        color: str = "black",
        width: float = 2.0,
        dash: Optional[Tuple[float, float]] = None,
        gid: Optional[str] = None,
    ) -> Line2D:
        pts = list(points)
        xs = [p[0] for p in pts]
        ys = [p[1] for p in pts]
        linestyle = "-" if dash is None else (0, tuple(d / width for d in dash))
        (line,) = self.ax.plot(
            xs, ys, color=color, linewidth=self._pt(width), linestyle=linestyle
        )
        if gid is not None:
            line.set_gid(gid)
        return line

    def circle(
        self,
        x: float,
        y: float,
        radius: float,
        color: str,
        gid: Optional[str] = None,
    ) -> Circle:
        patch = Circle((x, y), radius, facecolor=color, edgecolor="none", zorder=3)
        if gid is not None:
            patch.set_gid(gid)
        self.ax.add_patch(patch)
        return patch

    def text(
        self,
        x: float,
        y: float,
        s: str,
        color: str = "black",
        ha: str = "left",
        va: str = "center",
        rotation: float = 0.0,
    ):
        return self.ax.text(
            x, y, s, color=color, ha=ha, va=va, rotation=rotation,
            fontsize=self._pt(FONT_PX),
        )

    def legend(self, entries: Sequence[Tuple[str, str]]) -> None:
        """Draw a ``(label, color)`` legend in the upper-right corner."""
        if not entries:
            return
        handles = [Line2D([], [], color=color, linewidth=4) for _, color in entries]
        self.ax.legend(
            handles, [label for label, _ in entries],
            loc="upper right", fontsize=self._pt(FONT_PX) * 0.8, frameon=False,
        )

    # ── inspection ────────────────────────────────────────────────────

    def markers(self, gid: Optional[str] = None) -> List[Circle]:
        """Circle markers, optionally filtered by group id."""
        return [
            p for p in self.ax.patches
            if isinstance(p, Circle) and (gid is None or p.get_gid() == gid)
        ]

    def lines(self, gid: Optional[str] = None) -> List[Line2D]:
        return [l for l in self.ax.lines if gid is None or l.get_gid() == gid]

    def texts(self) -> List[str]:
        return [t.get_text() for t in self.ax.texts]

    # ── output ────────────────────────────────────────────────────────

    def save(self, path: str | Path) -> Path:
        """Write a PNG to *path*, creating parent directories."""
        target = Path(path)
        if not target.suffix:
            target = target.with_suffix(".png")
        target.parent.mkdir(parents=True, exist_ok=True)
        self.figure.savefig(target, dpi=self.dpi)
        return target

    def __repr__(self) -> str:
        return f"Canvas({self.width}x{self.height})"
