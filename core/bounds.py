"""Geographic bounding box of a grid"""

from dataclasses import dataclass

import numpy as np

from .errors import InvalidInputError


@dataclass(frozen=True)
class GeoRect:
    """Axis-aligned lon/lat box.

    Vector geometry is kept in a (lon, -lat) space so that screen y grows
    downwards with decreasing latitude; ``y_min``/``y_max`` expose the box
    in that convention.
    """
    lon_min: float
    lon_max: float
    lat_min: float
    lat_max: float

    @property
    def y_min(self) -> float:
        return -self.lat_max

    @property
    def y_max(self) -> float:
        return -self.lat_min

    @property
    def width(self) -> float:
        return self.lon_max - self.lon_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    def intersects(self, other: "GeoRect") -> bool:
        """True if the boxes overlap or touch"""
        return (self.lon_min <= other.lon_max and other.lon_min <= self.lon_max
                and self.lat_min <= other.lat_max and other.lat_min <= self.lat_max)

    @classmethod
    def from_points(cls, lon_y) -> "GeoRect":
        """Bounding box of an (N, 2) array of (lon, -lat) vertices"""
        pts = np.asarray(lon_y, dtype=np.float64).reshape(-1, 2)
        if pts.size == 0:
            raise InvalidInputError("cannot bound an empty vertex list")
        lon_min, y_min = pts.min(axis=0)
        lon_max, y_max = pts.max(axis=0)
        return cls(float(lon_min), float(lon_max), float(-y_max), float(-y_min))


def compute_bounds(grid) -> GeoRect:
    """Min/max of the grid's longitude and latitude axes.

    Args:
        grid: GridField

    Returns:
        GeoRect spanning the cell centers of the grid
    """
    lons = np.asarray(grid.lons, dtype=np.float64)
    lats = np.asarray(grid.lats, dtype=np.float64)
    if lons.size == 0:
        raise InvalidInputError("longitude axis is empty")
    if lats.size == 0:
        raise InvalidInputError("latitude axis is empty")

    return GeoRect(
        lon_min=float(lons.min()),
        lon_max=float(lons.max()),
        lat_min=float(lats.min()),
        lat_max=float(lats.max()),
    )
