# Scene assembly for the pressure viewer: everything computed once at load,
# plus the stateless per-frame draw.

import logging
import time
from dataclasses import dataclass
from typing import Optional

import numpy as np

from core.bounds import GeoRect, compute_bounds
from core.colormap_image import ColormapKind, orient_north_up, synthesize
from core.grid import GridField
from core.overlay import VectorOverlay
from core.range_analysis import DisplayRange, compute_display_range
from core.viewport import ScreenRect, fit_dest_rect
from .sources import load_features, load_grid

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class PressureScene:
    """Immutable products of one field load"""
    grid: GridField
    display_range: DisplayRange
    image: np.ndarray
    bounds: GeoRect
    overlay: Optional[VectorOverlay]
    colormap_kind: ColormapKind
    background: tuple = (0.2, 0.3, 0.4)

    def dest_rect(self, window_size) -> ScreenRect:
        return fit_dest_rect(window_size, self.grid.width, self.grid.height)


def build_scene(grid: GridField, features=None, colormap_kind=ColormapKind.TURBO,
                line_width: float = 1.0, line_color=None,
                background=(0.2, 0.3, 0.4)) -> PressureScene:
    """Run the load-time half of the pipeline on an in-memory grid"""
    kind = ColormapKind.parse(colormap_kind)

    display_range = compute_display_range(grid)
    logger.info(f"pmsl min: {display_range.low:.2f} pmsl max: {display_range.high:.2f}")

    # raster row 0 must be lat_max to line up with the (lon, -lat) overlay
    image = orient_north_up(synthesize(grid, display_range, kind), grid.lats, grid.lons)
    bounds = compute_bounds(grid)
    logger.debug(f"Bounds lon [{bounds.lon_min}, {bounds.lon_max}] "
                 f"lat [{bounds.lat_min}, {bounds.lat_max}]")

    overlay = None
    if features is not None:
        kwargs = {"line_width": line_width}
        if line_color is not None:
            kwargs["line_color"] = line_color
        overlay = VectorOverlay(features, bounds, grid.width, grid.height, **kwargs)

    return PressureScene(
        grid=grid,
        display_range=display_range,
        image=image,
        bounds=bounds,
        overlay=overlay,
        colormap_kind=kind,
        background=tuple(background),
    )


class PMSLProcessor:
    """Loads inputs named by a ViewerConfig and builds the PressureScene"""

    def __init__(self, config):
        self.config = config

    def load_grid(self) -> GridField:
        cfg = self.config
        return load_grid(cfg.grid_path, field_var=cfg.field_var, lat_var=cfg.lat_var,
                         lon_var=cfg.lon_var, scale_factor=cfg.scale_factor)

    def load_features(self):
        if self.config.features_path is None:
            logger.info("No feature file configured, overlay disabled")
            return None
        return load_features(self.config.features_path)

    def load_scene(self) -> PressureScene:
        cfg = self.config
        start = time.time()
        grid = self.load_grid()
        features = self.load_features()
        scene = build_scene(
            grid,
            features,
            colormap_kind=cfg.colormap_kind,
            line_width=cfg.line_width,
            line_color=cfg.line_color,
            background=cfg.background,
        )
        logger.info(f"Scene ready in {time.time() - start:.2f}s "
                    f"({grid.height}x{grid.width}, {cfg.colormap_kind.value})")
        return scene


def load_scene(config) -> PressureScene:
    return PMSLProcessor(config).load_scene()


def render_frame(scene: PressureScene, target) -> ScreenRect:
    """Draw one frame of ``scene`` on ``target`` for its current size.

    Returns the destination rectangle the raster was fitted into.
    """
    target.clear(scene.background)
    dest_rect = scene.dest_rect(target.size)
    target.draw_image(scene.image, dest_rect)
    if scene.overlay is not None:
        scene.overlay.draw(target, dest_rect, scene.bounds)
    return dest_rect
