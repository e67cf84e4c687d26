"""Projection helpers: unit circles and scene-graph leaves in pixel space."""

from __future__ import annotations

from collections.abc import Iterator

import numpy as np

from matviewer.model import OrthographicCamera, SceneNode

# Default unit circle for atom rendering (closed polygon).
_N_CIRCLE = 72
_UNIT_CIRCLE = np.column_stack([
    np.cos(np.linspace(0, 2 * np.pi, _N_CIRCLE + 1)),
    np.sin(np.linspace(0, 2 * np.pi, _N_CIRCLE + 1)),
])


def _make_unit_circle(n: int) -> np.ndarray:
    """Build a unit circle polygon with *n* segments."""
    if n == _N_CIRCLE:
        return _UNIT_CIRCLE
    return np.column_stack([
        np.cos(np.linspace(0, 2 * np.pi, n + 1)),
        np.sin(np.linspace(0, 2 * np.pi, n + 1)),
    ])


def _visible_leaves(node: SceneNode) -> Iterator[SceneNode]:
    """Yield every visible node with geometry below *node*, depth first.

    A hidden node hides its whole subtree.
    """
    if not node.visible:
        return
    if node.geometry is not None:
        yield node
    for child in node.children:
        yield from _visible_leaves(child)


def _node_to_pixels(
    node: SceneNode,
    local_points: np.ndarray,
    camera: OrthographicCamera,
) -> tuple[np.ndarray, np.ndarray]:
    """Map node-local points to pixel coordinates and depths.

    Returns:
        Tuple of ``(pixels, depth)`` with shapes ``(n, 2)`` and
        ``(n,)``.  Larger depth is closer to the viewer.
    """
    world = node.to_world(np.atleast_2d(local_points))
    return camera.to_pixels(world)


def _pixel_radius(node: SceneNode, radius: float, camera: OrthographicCamera) -> float:
    """On-screen radius, in pixels, of a node-local length *radius*."""
    return radius * node.world_scale() * camera.pixels_per_unit
