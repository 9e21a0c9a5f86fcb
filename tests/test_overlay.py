#!/usr/bin/env python3
import numpy as np
import pytest

from core.bounds import GeoRect
from core.errors import InvalidInputError
from core.overlay import PolygonFeature, VectorOverlay
from core.render_target import AggRenderTarget
from core.viewport import ScreenRect


def square(name, lon0, lat0, lon1, lat1):
    ring = [(lon0, -lat0), (lon1, -lat0), (lon1, -lat1), (lon0, -lat1), (lon0, -lat0)]
    return PolygonFeature(name, [ring])


class RecordingTarget:
    """Render target stand-in that just remembers stroke calls"""

    def __init__(self, max_scaling=1.0):
        self.max_scaling = max_scaling
        self.calls = []

    def stroke_polylines(self, rings, affine, thickness, color):
        self.calls.append((rings, affine, thickness, color))
        return len(rings)


VIEW = GeoRect(lon_min=0.0, lon_max=10.0, lat_min=0.0, lat_max=10.0)


def test_feature_bbox_from_rings():
    f = square("a", 2.0, 3.0, 4.0, 7.0)
    assert f.bbox == GeoRect(2.0, 4.0, 3.0, 7.0)
    assert f.vertex_count == 5


def test_feature_without_rings_rejected():
    with pytest.raises(InvalidInputError):
        PolygonFeature("empty", [])


def test_visibility_culling():
    print("\n[VO] bounding-box culling...")
    features = [
        square("inside", 2, 2, 4, 4),
        square("far_east", 20, 2, 25, 4),
        square("far_south", 2, -30, 4, -20),
        square("overlap_one_unit", 9, 9, 11, 11),
        square("touching_edge", 10, 0, 12, 5),
        square("covers_view", -50, -50, 50, 50),
    ]
    ov = VectorOverlay(features, VIEW)
    names = [features[i].name for i in ov.visible_indices]
    assert names == ["inside", "overlap_one_unit", "touching_edge", "covers_view"]
    assert "far_east" not in names and "far_south" not in names
    print(f"  visible: {names}")
    print("  ✓ culling OK")


def test_visibility_computed_once():
    features = [square("inside", 2, 2, 4, 4)]
    ov = VectorOverlay(features, VIEW)
    before = ov.visible_indices
    ov.draw(RecordingTarget(), ScreenRect(0, 0, 100, 100), GeoRect(50, 60, 50, 60))
    assert ov.visible_indices is before


def test_draw_uses_live_transform_and_constant_thickness():
    print("\n[VO] per-frame transform + line thickness...")
    ov = VectorOverlay([square("inside", 2, 2, 4, 4)], VIEW, grid_width=11, grid_height=11,
                       line_width=2.0)
    target = RecordingTarget(max_scaling=4.0)
    ov.draw(target, ScreenRect(0, 0, 110, 110), VIEW)

    rings, affine, thickness, color = target.calls[0]
    assert len(rings) == 1
    assert thickness == pytest.approx(0.5)
    assert color == (0.1, 0.1, 0.1, 0.85)
    # top-left cell center (lon 0, lat 10) sits on the first pixel center
    np.testing.assert_allclose(affine.apply([(0.0, -10.0)])[0], (5.0, 5.0))

    # a different destination rect gives a different map
    ov.draw(target, ScreenRect(0, 0, 220, 220), VIEW)
    np.testing.assert_allclose(target.calls[1][1].apply([(0.0, -10.0)])[0], (10.0, 10.0))
    print("  ✓ draw OK")


def test_empty_sets_draw_nothing():
    target = RecordingTarget()
    assert VectorOverlay([], VIEW).draw(target, ScreenRect(0, 0, 10, 10), VIEW) is None
    far = VectorOverlay([square("far", 50, 50, 60, 60)], VIEW)
    assert far.visible_indices == ()
    assert far.draw(target, ScreenRect(0, 0, 10, 10), VIEW) is None
    assert target.calls == []


def test_zero_area_dest_draws_nothing():
    target = RecordingTarget()
    ov = VectorOverlay([square("inside", 2, 2, 4, 4)], VIEW, 4, 4)
    assert ov.draw(target, ScreenRect(0, 0, 0, 0), VIEW) is None
    assert target.calls == []


def test_agg_stroke_line_width_follows_zoom():
    ov = VectorOverlay([square("inside", 2, 2, 4, 4), square("other", 5, 5, 6, 6)],
                       VIEW, 10, 10, line_width=1.0)
    target = AggRenderTarget(100, 100)
    lines = ov.draw(target, ScreenRect(0, 0, 100, 100), VIEW)
    assert len(lines.get_segments()) == 2
    base_width = lines.get_linewidths()[0]

    target.clear()
    target.set_camera(zoom=3.0)
    zoomed = ov.draw(target, ScreenRect(0, 0, 100, 100), VIEW)
    assert zoomed.get_linewidths()[0] == pytest.approx(base_width)


def main():
    print("=" * 60)
    print("Vector overlay checks")
    print("=" * 60)
    test_visibility_culling()
    test_draw_uses_live_transform_and_constant_thickness()
    print("\nAll checks passed.")


if __name__ == "__main__":
    main()
