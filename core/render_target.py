"""Headless matplotlib canvas used as the frame's render target.

Coordinates passed in are screen pixels with the origin at the top-left
and y growing downwards. A camera (zoom about the origin, then pan) is
applied to everything drawn, the same way a 2-D scene transform would
magnify both geometry and stroke widths.
"""

from typing import Sequence, Tuple

import numpy as np
from matplotlib.collections import LineCollection
from matplotlib.figure import Figure
from matplotlib.backends.backend_agg import FigureCanvasAgg

from .viewport import ScreenRect

DEFAULT_DPI = 100


class AggRenderTarget:
    """Agg canvas of ``width`` x ``height`` device pixels (offscreen unless a GUI figure is passed)"""

    def __init__(self, width: int, height: int, dpi: int = DEFAULT_DPI, figure: Figure = None):
        self.dpi = dpi
        self._owns_figure = figure is None
        if figure is None:
            figure = Figure(figsize=(width / dpi, height / dpi), dpi=dpi)
            FigureCanvasAgg(figure)
        self.figure = figure
        self.ax = figure.add_axes([0, 0, 1, 1])
        self.ax.set_axis_off()
        self.zoom = 1.0
        self.pan = (0.0, 0.0)
        self.resize(width, height)

    # ------------------------------------------------------------------
    # Camera / geometry
    # ------------------------------------------------------------------

    def resize(self, width: int, height: int):
        self.width = int(width)
        self.height = int(height)
        if self._owns_figure:
            self.figure.set_size_inches(max(self.width, 1) / self.dpi, max(self.height, 1) / self.dpi)
        self.ax.set_xlim(0, max(self.width, 1))
        self.ax.set_ylim(max(self.height, 1), 0)

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    @property
    def max_scaling(self) -> float:
        """Magnification the camera applies to strokes"""
        return self.zoom

    def set_camera(self, zoom: float = 1.0, pan=(0.0, 0.0)):
        if not zoom > 0:
            raise ValueError(f"camera zoom must be positive, got {zoom}")
        self.zoom = float(zoom)
        self.pan = (float(pan[0]), float(pan[1]))

    def zoom_at(self, factor: float, anchor):
        """Scale the camera by ``factor`` keeping the screen point ``anchor`` fixed"""
        ax_, ay_ = anchor
        new_zoom = self.zoom * factor
        px = ax_ - (ax_ - self.pan[0]) * factor
        py = ay_ - (ay_ - self.pan[1]) * factor
        self.set_camera(new_zoom, (px, py))

    def to_device(self, points) -> np.ndarray:
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        return pts * self.zoom + self.pan

    def _pixels_to_points(self, px: float) -> float:
        return px * 72.0 / self.dpi

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def clear(self, color=(0.2, 0.3, 0.4)):
        for artist in list(self.ax.images) + list(self.ax.collections):
            artist.remove()
        self.figure.patch.set_facecolor(color)
        self.ax.set_facecolor(color)

    def draw_image(self, image: np.ndarray, dest_rect):
        """Draw an RGBA image stretched over ``dest_rect`` (nearest neighbour)"""
        if dest_rect.is_empty:
            return None
        (x0, y0) = self.to_device([dest_rect.origin])[0]
        device_rect = ScreenRect(x0, y0, dest_rect.width * self.zoom, dest_rect.height * self.zoom)
        return self.ax.imshow(
            image,
            extent=device_rect.extent,
            origin="upper",
            interpolation="nearest",
            resample=False,
            aspect="auto",
            zorder=1,
        )

    def stroke_polylines(self, rings: Sequence[np.ndarray], affine, thickness: float, color):
        """Stroke closed rings given in (lon, -lat) through ``affine``.

        ``thickness`` is in screen pixels before the camera zoom.
        """
        segments = []
        for ring in rings:
            pts = affine.apply(ring)
            if len(pts) < 2:
                continue
            if not np.array_equal(pts[0], pts[-1]):
                pts = np.vstack([pts, pts[:1]])
            segments.append(self.to_device(pts))
        if not segments:
            return None

        lines = LineCollection(
            segments,
            colors=[color],
            linewidths=self._pixels_to_points(thickness * self.zoom),
            zorder=2,
        )
        self.ax.add_collection(lines)
        return lines

    def to_rgba(self) -> np.ndarray:
        """Render and return the (height, width, 4) uint8 frame buffer"""
        self.figure.canvas.draw()
        return np.asarray(self.figure.canvas.buffer_rgba()).copy()
