"""Coastline / border overlay drawn on top of the pressure raster.

Features are culled once against the data extent when the overlay is
built; each frame only re-derives the geo -> screen transform for the
current destination rectangle and strokes what survived.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import numpy as np

from .bounds import GeoRect
from .viewport import derive_transform

logger = logging.getLogger(__name__)

DEFAULT_LINE_COLOR = (0.1, 0.1, 0.1, 0.85)


@dataclass(frozen=True, eq=False)
class PolygonFeature:
    """One polygon / multipolygon with rings in (lon, -lat) order"""
    name: str
    rings: Tuple[np.ndarray, ...]
    bbox: GeoRect = field(default=None)

    def __post_init__(self):
        rings = tuple(np.asarray(r, dtype=np.float64).reshape(-1, 2) for r in self.rings)
        for r in rings:
            r.setflags(write=False)
        object.__setattr__(self, "rings", rings)
        if self.bbox is None:
            verts = np.vstack(rings) if rings else np.empty((0, 2))
            object.__setattr__(self, "bbox", GeoRect.from_points(verts))

    @property
    def vertex_count(self) -> int:
        return sum(len(r) for r in self.rings)


class VectorOverlay:
    """Polygon features restricted to a fixed geographic view.

    Args:
        features: PolygonFeature sequence, typically from ``load_features``
        visible_rect: GeoRect the overlay will be shown over (the data extent)
        grid_width, grid_height: raster size the overlay is aligned with
        line_width: stroke width in screen pixels
        line_color: RGBA stroke color
    """

    def __init__(self, features: Sequence[PolygonFeature], visible_rect: GeoRect,
                 grid_width: int = 1, grid_height: int = 1,
                 line_width: float = 1.0, line_color=DEFAULT_LINE_COLOR):
        self.features: Tuple[PolygonFeature, ...] = tuple(features)
        self.visible_rect = visible_rect
        self.line_width = float(line_width)
        self.line_color = tuple(line_color)
        self.set_grid_size(grid_width, grid_height)

        self.visible_indices: Tuple[int, ...] = tuple(
            i for i, feat in enumerate(self.features) if feat.bbox.intersects(visible_rect)
        )
        logger.debug(f"Overlay: {len(self.visible_indices)}/{len(self.features)} features visible")

    def set_grid_size(self, width: int, height: int):
        self.grid_width = int(width)
        self.grid_height = int(height)

    @property
    def visible_features(self) -> List[PolygonFeature]:
        return [self.features[i] for i in self.visible_indices]

    def line_thickness(self, max_scaling: float) -> float:
        """Stroke width that stays ``line_width`` device pixels at any zoom"""
        if not max_scaling > 0:
            return self.line_width
        return self.line_width / max_scaling

    def draw(self, target, dest_rect, geo_rect: GeoRect):
        """Stroke every visible feature aligned with the raster in ``dest_rect``.

        Returns the artist created on the target, or None when nothing was drawn.
        """
        if not self.visible_indices:
            return None

        affine = derive_transform(geo_rect, dest_rect, self.grid_width, self.grid_height)
        if affine.degenerate:
            return None

        rings = [ring for feat in self.visible_features for ring in feat.rings]
        thickness = self.line_thickness(target.max_scaling)
        return target.stroke_polylines(rings, affine, thickness, self.line_color)
