"""False-color raster synthesis for a scalar grid.

Every cell is normalized against a DisplayRange, clamped to [0, 1] and
looked up in one of a closed set of color ramps. The result is a
(height, width, 4) uint8 RGBA array laid out exactly like the grid, so
row 0 of the image is row 0 of the field.
"""

import warnings
from enum import Enum
from functools import lru_cache

import matplotlib
import numpy as np

from config.colormaps import create_all_colormaps
from .errors import DegenerateRangeWarning

# t used for every cell when the display range has zero width
DEGENERATE_T = 0.5


class ColormapKind(Enum):
    """Named color ramps selectable for the raster"""
    TURBO = "turbo"
    VIRIDIS = "viridis"
    PLASMA = "plasma"
    INFERNO = "inferno"
    MAGMA = "magma"
    CIVIDIS = "cividis"
    JET = "jet"
    HOT = "hot"
    GRAY = "gray"
    TWILIGHT = "twilight"
    PARULA = "Parula"
    MSLP = "MSLP"

    @classmethod
    def parse(cls, name) -> "ColormapKind":
        if isinstance(name, cls):
            return name
        wanted = str(name).strip().lower()
        for kind in cls:
            if kind.value.lower() == wanted or kind.name.lower() == wanted:
                return kind
        choices = ", ".join(k.value.lower() for k in cls)
        raise ValueError(f"Unknown colormap '{name}'. Available: {choices}")


@lru_cache(maxsize=None)
def get_colormap(kind: ColormapKind):
    """Resolve a ColormapKind to a matplotlib Colormap (cached)"""
    custom = create_all_colormaps()
    if kind.value in custom:
        return custom[kind.value]
    return matplotlib.colormaps[kind.value]


def colormap_color(kind: ColormapKind, t: float) -> np.ndarray:
    """RGBA uint8 color of the ramp at a single normalized position"""
    return np.asarray(get_colormap(kind)(float(t), bytes=True), dtype=np.uint8)


def normalize(values, display_range) -> np.ndarray:
    """Map values to clamped [0, 1] positions along the ramp.

    A zero-width range maps every non-NaN cell to DEGENERATE_T and issues a
    DegenerateRangeWarning. NaN cells stay NaN.
    """
    values = np.asarray(values, dtype=np.float64)
    if display_range.is_degenerate:
        warnings.warn(
            f"display range [{display_range.low}, {display_range.high}] has zero width; "
            f"using constant t={DEGENERATE_T}",
            DegenerateRangeWarning,
            stacklevel=3,
        )
        t = np.full(values.shape, DEGENERATE_T)
        t[np.isnan(values)] = np.nan
        return t

    inv_range = 1.0 / (display_range.high - display_range.low)
    with np.errstate(invalid="ignore", over="ignore"):
        t = (values - display_range.low) * inv_range
    return np.clip(t, 0.0, 1.0)


def synthesize(grid, display_range, kind=ColormapKind.TURBO) -> np.ndarray:
    """Create the colormap image for a grid.

    Args:
        grid: GridField (or a bare 2-D array)
        display_range: DisplayRange used for normalization
        kind: ColormapKind or its name

    Returns:
        (height, width, 4) uint8 RGBA image in grid order. NaN cells get
        the ramp's "bad" color (fully transparent). With an inverted range
        (high < low) cells below ``low`` land on the t=1 end of the ramp.
    """
    values = getattr(grid, "values", grid)
    cmap = get_colormap(ColormapKind.parse(kind))
    t = normalize(values, display_range)
    return np.asarray(cmap(t, bytes=True), dtype=np.uint8)


def orient_north_up(image, lats, lons) -> np.ndarray:
    """Reorder image rows/columns so row 0 is the northernmost latitude and
    column 0 the westernmost longitude, matching the overlay transform.

    Mirrors the ``np.flipud`` applied before image overlays are handed to a map.
    """
    lats = np.asarray(lats)
    lons = np.asarray(lons)
    if len(lats) > 1 and lats[0] < lats[-1]:
        image = np.flipud(image)
    if len(lons) > 1 and lons[0] > lons[-1]:
        image = np.fliplr(image)
    return np.ascontiguousarray(image)
