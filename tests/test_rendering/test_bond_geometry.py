"""Tests for stick and cylinder screen polygons."""

import numpy as np

from matviewer.rendering.bond_geometry import _cylinder_polygon, _stick_polygon
from matviewer.rendering.projection import _make_unit_circle


class TestStickPolygon:
    def test_horizontal(self):
        verts = _stick_polygon(np.array([0.0, 0.0]), np.array([10.0, 0.0]), 1.0, 1.0)
        np.testing.assert_allclose(
            verts, [[0.0, 1.0], [0.0, -1.0], [10.0, -1.0], [10.0, 1.0]],
        )

    def test_tapered(self):
        verts = _stick_polygon(np.array([0.0, 0.0]), np.array([0.0, 4.0]), 2.0, 0.5)
        widths = [np.linalg.norm(verts[0] - verts[1]), np.linalg.norm(verts[2] - verts[3])]
        np.testing.assert_allclose(widths, [4.0, 1.0])

    def test_degenerate(self):
        p = np.array([3.0, 3.0])
        assert _stick_polygon(p, p.copy(), 1.0, 1.0) is None


class TestCylinderPolygon:
    def test_side_on(self):
        verts = _cylinder_polygon(
            np.array([0.0, 0.0]), np.array([5.0, 0.0]), 1.0, _make_unit_circle(12),
        )
        assert verts.shape == (4, 2)

    def test_end_on_is_disc(self):
        centre = np.array([2.0, -1.0])
        verts = _cylinder_polygon(centre, centre.copy(), 3.0, _make_unit_circle(12))
        assert verts.shape == (13, 2)
        np.testing.assert_allclose(np.linalg.norm(verts - centre, axis=1), 3.0)
