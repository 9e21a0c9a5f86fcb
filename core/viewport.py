"""Geo -> screen mapping for the raster and its vector overlay.

The raster is drawn as a texture stretched over a destination rectangle,
so each grid cell covers ``dest.size / (grid_w, grid_h)`` screen units.
Grid coordinates (lons/lats) are cell *centers*, so the affine map sends
the first cell's coordinate to the center of the first destination pixel
and the last cell's coordinate to the center of the last one. Using the
full rectangle span instead would shift coastlines by half a cell.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .errors import InvalidInputError


@dataclass(frozen=True)
class ScreenRect:
    """Destination rectangle in device pixels (origin top-left, y down)"""
    x: float
    y: float
    width: float
    height: float

    @property
    def origin(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @property
    def size(self) -> Tuple[float, float]:
        return (self.width, self.height)

    @property
    def is_empty(self) -> bool:
        return not (self.width > 0 and self.height > 0)

    @property
    def extent(self) -> Tuple[float, float, float, float]:
        """(left, right, bottom, top) in the y-down convention imshow expects"""
        return (self.x, self.x + self.width, self.y + self.height, self.y)


@dataclass(frozen=True)
class AffineMap2D:
    """Component-wise scale followed by translation, no rotation"""
    scale_x: float
    scale_y: float
    translate_x: float
    translate_y: float
    degenerate: bool = False

    def apply(self, points) -> np.ndarray:
        """Map an (N, 2) array of (lon, -lat) points to screen space"""
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        return pts * (self.scale_x, self.scale_y) + (self.translate_x, self.translate_y)


def _axis_scale(extent: float, pixel: float, span: float) -> float:
    # single row/column grids have no span; park them on the pixel center
    if span == 0 or not np.isfinite(span):
        return 0.0
    return (extent - pixel) / span


def derive_transform(geo_rect, dest_rect: ScreenRect, grid_width: int, grid_height: int) -> AffineMap2D:
    """Affine map from (lon, -lat) to screen with pixel-center alignment.

    Args:
        geo_rect: GeoRect of the grid (cell-center extrema)
        dest_rect: ScreenRect the raster is stretched over this frame
        grid_width: number of grid columns
        grid_height: number of grid rows

    Returns:
        AffineMap2D. A zero-area ``dest_rect`` yields a degenerate map with
        zero scale that drawing code treats as "draw nothing".
    """
    if grid_width < 1 or grid_height < 1:
        raise InvalidInputError(f"grid size must be positive, got {grid_width}x{grid_height}")

    if dest_rect.is_empty:
        return AffineMap2D(0.0, 0.0, float(dest_rect.x), float(dest_rect.y), degenerate=True)

    pixel_x = dest_rect.width / grid_width
    pixel_y = dest_rect.height / grid_height

    sx = _axis_scale(dest_rect.width, pixel_x, geo_rect.lon_max - geo_rect.lon_min)
    sy = _axis_scale(dest_rect.height, pixel_y, geo_rect.y_max - geo_rect.y_min)

    tx = (dest_rect.x + pixel_x * 0.5) - geo_rect.lon_min * sx
    ty = (dest_rect.y + pixel_y * 0.5) - geo_rect.y_min * sy
    return AffineMap2D(sx, sy, tx, ty)


def fit_dest_rect(window_size, grid_width: int, grid_height: int) -> ScreenRect:
    """Largest grid-aspect rectangle centered in the window"""
    win_w, win_h = window_size
    if grid_width < 1 or grid_height < 1:
        raise InvalidInputError(f"grid size must be positive, got {grid_width}x{grid_height}")

    draw_scale = min(win_w / float(grid_width), win_h / float(grid_height))
    draw_w = grid_width * draw_scale
    draw_h = grid_height * draw_scale
    return ScreenRect(win_w * 0.5 - draw_w * 0.5, win_h * 0.5 - draw_h * 0.5, draw_w, draw_h)
