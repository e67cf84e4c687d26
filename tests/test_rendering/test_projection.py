"""Tests for projecting scene-graph leaves into pixel space."""

import numpy as np
import pytest

from matviewer.model import OrthographicCamera, SceneNode, Sphere
from matviewer.rendering.projection import (
    _N_CIRCLE,
    _UNIT_CIRCLE,
    _make_unit_circle,
    _node_to_pixels,
    _pixel_radius,
    _visible_leaves,
)


@pytest.fixture
def camera():
    # 10 pixels per world unit, origin at the canvas centre.
    return OrthographicCamera((100, 100), width=10.0)


class TestUnitCircle:
    def test_default_is_cached(self):
        assert _make_unit_circle(_N_CIRCLE) is _UNIT_CIRCLE

    def test_custom_segments(self):
        circle = _make_unit_circle(8)
        assert circle.shape == (9, 2)
        np.testing.assert_allclose(circle[0], circle[-1], atol=1e-12)
        np.testing.assert_allclose(np.linalg.norm(circle, axis=1), 1.0)


class TestVisibleLeaves:
    def test_hidden_subtree_pruned(self):
        root = SceneNode("root")
        shown = SceneNode("shown", Sphere(1.0))
        group = SceneNode("group")
        group.add(SceneNode("inner", Sphere(1.0)))
        group.visible = False
        root.add(shown, group)
        assert [n.name for n in _visible_leaves(root)] == ["shown"]

    def test_groups_not_yielded(self):
        root = SceneNode("root")
        group = SceneNode("group")
        group.add(SceneNode("a", Sphere(1.0)), SceneNode("b", Sphere(1.0)))
        root.add(group)
        assert [n.name for n in _visible_leaves(root)] == ["a", "b"]


class TestNodeToPixels:
    def test_offset_node(self, camera):
        node = SceneNode("n", Sphere(1.0), position=np.array([1.0, 0.0, 2.0]))
        xy, depth = _node_to_pixels(node, np.zeros(3), camera)
        np.testing.assert_allclose(xy, [[60.0, 50.0]])
        np.testing.assert_allclose(depth, [2.0])

    def test_y_points_down(self, camera):
        node = SceneNode("n", Sphere(1.0))
        xy, _ = _node_to_pixels(node, np.array([[0.0, 1.0, 0.0]]), camera)
        np.testing.assert_allclose(xy, [[50.0, 40.0]])

    def test_parent_rotation_applies(self, camera):
        from scipy.spatial.transform import Rotation

        parent = SceneNode("p")
        parent.rotation = Rotation.from_rotvec([0.0, 0.0, np.pi / 2])
        child = SceneNode("c", Sphere(1.0), position=np.array([1.0, 0.0, 0.0]))
        parent.add(child)
        xy, _ = _node_to_pixels(child, np.zeros(3), camera)
        np.testing.assert_allclose(xy, [[50.0, 40.0]], atol=1e-9)


class TestPixelRadius:
    def test_scales_compose(self, camera):
        parent = SceneNode("p")
        parent.scale = 2.0
        child = SceneNode("c", Sphere(0.5))
        parent.add(child)
        assert _pixel_radius(child, 0.5, camera) == pytest.approx(10.0)

    def test_zoom(self, camera):
        camera.zoom = 3.0
        node = SceneNode("n", Sphere(1.0))
        assert _pixel_radius(node, 1.0, camera) == pytest.approx(30.0)
