"""In-memory scalar grid on a regular latitude/longitude mesh.

GridField is the hand-off point between the file readers in
``smart_pmsl.sources`` and every analysis/rendering step in ``core``.
It is built once per load and never written to afterwards; the arrays
are copied and flagged read-only so accidental in-place edits fail loudly.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .errors import DataSourceError


def _frozen(arr, ndim: int, label: str) -> np.ndarray:
    out = np.array(arr, dtype=np.float64, copy=True)
    if out.ndim != ndim:
        raise DataSourceError(f"{label} must be {ndim}-D, got shape {out.shape}")
    out.setflags(write=False)
    return out


@dataclass(frozen=True, eq=False)
class GridField:
    """2-D scalar field plus its geographic axes.

    Attributes:
        values: (height, width) array, row-major, one value per cell
        lons: longitude per column (width entries)
        lats: latitude per row (height entries), ascending or descending
        name: variable name the field was read from
        units: physical units of ``values``
    """
    values: np.ndarray
    lons: np.ndarray
    lats: np.ndarray
    name: str = "msl"
    units: str = "hPa"

    def __post_init__(self):
        values = _frozen(self.values, 2, "values")
        lons = _frozen(self.lons, 1, "lons")
        lats = _frozen(self.lats, 1, "lats")

        height, width = values.shape
        if len(lons) != width:
            raise DataSourceError(
                f"longitude axis has {len(lons)} entries but grid width is {width}")
        if len(lats) != height:
            raise DataSourceError(
                f"latitude axis has {len(lats)} entries but grid height is {height}")

        object.__setattr__(self, "values", values)
        object.__setattr__(self, "lons", lons)
        object.__setattr__(self, "lats", lats)

    @property
    def width(self) -> int:
        return self.values.shape[1]

    @property
    def height(self) -> int:
        return self.values.shape[0]

    @property
    def shape(self) -> Tuple[int, int]:
        return self.values.shape
