"""
Input readers: ERA5 sea-level pressure (NetCDF) and GeoJSON polygons

Both return the in-memory types the core pipeline works on
(GridField and PolygonFeature) and raise DataSourceError on anything
that would leave the viewer without a usable field or geometry.
"""

import json
import logging
from pathlib import Path
from typing import List

import numpy as np
import xarray as xr

from core.common import PA_TO_HPA
from core.errors import DataSourceError, InvalidInputError
from core.grid import GridField
from core.overlay import PolygonFeature

logger = logging.getLogger(__name__)


def load_grid(
    path,
    field_var: str = "msl",
    lat_var: str = "latitude",
    lon_var: str = "longitude",
    scale_factor: float = PA_TO_HPA,
    units: str = "hPa",
) -> GridField:
    """Load a 2-D pressure field from a NetCDF file.

    Args:
        path: NetCDF file path
        field_var: Name of the scalar variable (ERA5: 'msl', Pa)
        lat_var: Name of the latitude axis variable
        lon_var: Name of the longitude axis variable
        scale_factor: Multiplier applied to the raw values (Pa -> hPa)
        units: Units of the scaled values

    Returns:
        GridField with values[lat, lon]
    """
    path = Path(path)
    try:
        ds = xr.open_dataset(path)
    except (OSError, ValueError) as e:
        raise DataSourceError(f"Cannot open grid file {path}: {e}") from e

    with ds:
        missing = [name for name in (lat_var, lon_var, field_var) if name not in ds.variables]
        if missing:
            raise DataSourceError(f"{' / '.join(missing)} not found in {path}")

        lats = np.asarray(ds[lat_var].values, dtype=np.float64)
        lons = np.asarray(ds[lon_var].values, dtype=np.float64)
        if lats.ndim != 1 or lons.ndim != 1:
            raise DataSourceError(
                f"{lat_var}/{lon_var} must be 1-D axes, got shapes {lats.shape} / {lons.shape}")

        data = ds[field_var]
        # Leading time / level dimensions: take the first slice
        while data.ndim > 2:
            data = data[0]
        if data.ndim != 2:
            raise DataSourceError(f"{field_var} must have lat/lon dimensions, got {data.dims}")

        buf = np.asarray(data.values, dtype=np.float32)

    n_lat, n_lon = len(lats), len(lons)
    if buf.shape != (n_lat, n_lon):
        raise DataSourceError(
            f"{field_var} has shape {buf.shape}, expected ({n_lat}, {n_lon}) from {lat_var}/{lon_var}")

    values = buf.astype(np.float64) * scale_factor
    logger.info(f"Loaded {field_var} from {path.name}: {n_lat}x{n_lon} ({units})")
    return GridField(values=values, lons=lons, lats=lats, name=field_var, units=units)


def _feature_name(props, index: int) -> str:
    for key in ("name", "NAME", "ADMIN", "admin"):
        if props.get(key):
            return str(props[key])
    return f"feature_{index}"


def _geometry_rings(geometry) -> List[np.ndarray]:
    """All rings of a Polygon / MultiPolygon as (lon, -lat) arrays"""
    gtype = geometry.get("type")
    coords = geometry.get("coordinates") or []
    if gtype == "Polygon":
        polygons = [coords]
    elif gtype == "MultiPolygon":
        polygons = coords
    else:
        return []

    rings = []
    for polygon in polygons:
        for ring in polygon:
            pts = np.asarray(ring, dtype=np.float64)
            if pts.ndim != 2 or pts.shape[0] < 2 or pts.shape[1] < 2:
                continue
            # drop altitude, flip latitude to screen-down
            rings.append(np.column_stack([pts[:, 0], -pts[:, 1]]))
    return rings


def load_features(path) -> List[PolygonFeature]:
    """Load polygon features from a GeoJSON FeatureCollection.

    Non-polygon geometries are skipped. Vertices are stored as (lon, -lat).
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            collection = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise DataSourceError(f"Cannot read GeoJSON {path}: {e}") from e

    raw = collection.get("features") if isinstance(collection, dict) else None
    if not isinstance(raw, list):
        raise DataSourceError(f"features not found in {path}")

    features = []
    skipped = 0
    for i, feat in enumerate(raw):
        geometry = (feat or {}).get("geometry") or {}
        rings = _geometry_rings(geometry)
        if not rings:
            skipped += 1
            logger.debug(f"Skipping feature {i}: geometry type {geometry.get('type')}")
            continue
        try:
            features.append(PolygonFeature(_feature_name(feat.get("properties") or {}, i), rings))
        except InvalidInputError as e:
            raise DataSourceError(f"Feature {i} in {path}: {e}") from e

    logger.info(f"Loaded {len(features)} polygon features from {path.name}"
                + (f" ({skipped} skipped)" if skipped else ""))
    return features
