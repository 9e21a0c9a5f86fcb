#!/usr/bin/env python3
import numpy as np
import pytest

from core.bounds import GeoRect, compute_bounds
from core.errors import DataSourceError, InvalidInputError
from core.grid import GridField
from core.viewport import ScreenRect, derive_transform, fit_dest_rect


def cell_center(geo, col, row, w, h):
    """(lon, -lat) of a cell on an evenly spaced grid spanning ``geo``"""
    lon = geo.lon_min + geo.width * col / max(w - 1, 1)
    y = geo.y_min + geo.height * row / max(h - 1, 1)
    return (lon, y)


def test_bounds_any_axis_direction():
    print("\n[GB] bounds from axes...")
    lats = np.linspace(60.0, 20.0, 41)        # ERA5 stores north -> south
    lons = np.linspace(120.0, 150.0, 31)
    grid = GridField(np.zeros((41, 31)), lons, lats)
    b = compute_bounds(grid)
    assert b == GeoRect(120.0, 150.0, 20.0, 60.0)
    assert b.y_min == -60.0 and b.y_max == -20.0
    assert b.width == 30.0 and b.height == 40.0
    print("  ✓ bounds OK")


def test_bounds_empty_axis():
    grid = GridField(np.empty((0, 0)), [], [])
    with pytest.raises(InvalidInputError):
        compute_bounds(grid)


def test_grid_axis_mismatch():
    with pytest.raises(DataSourceError, match="longitude"):
        GridField(np.zeros((2, 3)), [0.0, 1.0], [0.0, 1.0])
    with pytest.raises(DataSourceError, match="latitude"):
        GridField(np.zeros((2, 3)), [0.0, 1.0, 2.0], [0.0])


def test_grid_is_read_only():
    grid = GridField(np.zeros((2, 2)), [0.0, 1.0], [0.0, 1.0])
    with pytest.raises(ValueError):
        grid.values[0, 0] = 1.0


def test_pixel_center_alignment_2x2():
    print("\n[VT] 2x2 pixel-center regression...")
    geo = GeoRect(lon_min=0.0, lon_max=1.0, lat_min=-1.0, lat_max=0.0)  # y 0..1
    assert (geo.y_min, geo.y_max) == (0.0, 1.0)
    dest = ScreenRect(0.0, 0.0, 100.0, 100.0)

    m = derive_transform(geo, dest, 2, 2)
    out = m.apply([(0.0, 0.0), (1.0, 1.0)])
    np.testing.assert_allclose(out[0], (25.0, 25.0))
    np.testing.assert_allclose(out[1], (75.0, 75.0))
    print("  ✓ (0,0)->(25,25), (1,1)->(75,75)")


def test_alignment_offset_rect_non_square_grid():
    geo = GeoRect(lon_min=100.0, lon_max=160.0, lat_min=10.0, lat_max=50.0)
    w, h = 7, 5
    dest = ScreenRect(40.0, 12.0, 350.0, 250.0)
    m = derive_transform(geo, dest, w, h)

    px, py = dest.width / w, dest.height / h
    for col, row in [(0, 0), (w - 1, h - 1), (3, 2), (6, 0)]:
        got = m.apply([cell_center(geo, col, row, w, h)])[0]
        expect = (dest.x + (col + 0.5) * px, dest.y + (row + 0.5) * py)
        np.testing.assert_allclose(got, expect, atol=1e-9)


def test_zero_area_dest_is_noop():
    geo = GeoRect(0.0, 1.0, 0.0, 1.0)
    for dest in (ScreenRect(5, 5, 0, 100), ScreenRect(5, 5, 100, 0), ScreenRect(0, 0, 0, 0)):
        m = derive_transform(geo, dest, 2, 2)
        assert m.degenerate
        out = m.apply([(0.3, 0.7)])
        assert np.all(np.isfinite(out))


def test_single_column_grid_lands_on_center():
    geo = GeoRect(5.0, 5.0, 0.0, 10.0)
    dest = ScreenRect(0.0, 0.0, 20.0, 100.0)
    m = derive_transform(geo, dest, 1, 11)
    assert not m.degenerate
    out = m.apply([(5.0, -10.0), (5.0, 0.0)])
    assert np.all(np.isfinite(out))
    np.testing.assert_allclose(out[:, 0], 10.0)


def test_invalid_grid_size():
    with pytest.raises(InvalidInputError):
        derive_transform(GeoRect(0, 1, 0, 1), ScreenRect(0, 0, 10, 10), 0, 2)


def test_fit_dest_rect_centered():
    print("\n[VT] fitted destination rect...")
    r = fit_dest_rect((600, 600), 360, 181)
    assert r.width == pytest.approx(600.0)
    assert r.height == pytest.approx(181 * 600 / 360)
    assert r.x == pytest.approx(0.0)
    assert r.y + r.height / 2 == pytest.approx(300.0)

    r = fit_dest_rect((800, 300), 10, 10)
    assert (r.width, r.height) == (300.0, 300.0)
    assert (r.x, r.y) == (250.0, 0.0)
    assert r.extent == (250.0, 550.0, 300.0, 0.0)
    print("  ✓ fit OK")


def main():
    print("=" * 60)
    print("Bounds + viewport transform checks")
    print("=" * 60)
    test_bounds_any_axis_direction()
    test_pixel_center_alignment_2x2()
    test_fit_dest_rect_centered()
    print("\nAll checks passed.")


if __name__ == "__main__":
    main()
