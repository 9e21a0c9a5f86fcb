"""Display range for the pressure colormap.

The color floor ignores anything below 100 hPa: land-masked or fill cells
come through as ~0 and would otherwise stretch the ramp over nothing.
The ceiling is the plain maximum of the field.
"""

import logging
from dataclasses import dataclass

import numpy as np

from .common import MIN_VALID_PRESSURE_HPA, _dbg
from .errors import InvalidInputError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DisplayRange:
    """Normalization domain [low, high] for color mapping"""
    low: float
    high: float

    @property
    def span(self) -> float:
        return self.high - self.low

    @property
    def is_degenerate(self) -> bool:
        return self.high == self.low


def compute_display_range(grid, threshold: float = MIN_VALID_PRESSURE_HPA) -> DisplayRange:
    """Filtered-minimum / unfiltered-maximum range of a grid.

    Args:
        grid: GridField (or anything exposing a 2-D ``values`` array)
        threshold: cells below this value do not count towards the minimum

    Returns:
        DisplayRange with ``low`` = min of cells >= threshold (or
        ``threshold`` itself when none qualify) and ``high`` = max of all cells
    """
    values = np.asarray(getattr(grid, "values", grid), dtype=np.float64)
    if values.size == 0:
        raise InvalidInputError("cannot compute a display range for an empty grid")

    # NaN never compares, so it neither qualifies for the floor nor sets the ceiling
    qualifying = values[values >= threshold]
    if qualifying.size:
        low = float(qualifying.min())
    else:
        low = float(threshold)
        _dbg(f"no cell >= {threshold}; display floor falls back to {low}")

    comparable = values[~np.isnan(values)]
    if comparable.size:
        high = float(comparable.max())
    else:
        logger.warning("grid contains no comparable values; using a zero-width range")
        high = low

    return DisplayRange(low=low, high=high)
