"""Canonical initial view orientations.

The camera looks down world -z with +x to the right and +y up.  Each
orientation is built by premultiplying rotations onto the identity, so
every step acts about a fixed world axis.
"""

from __future__ import annotations

import numpy as np
from scipy.spatial.transform import Rotation

from matviewer.construction.periodicity import Periodicity

_EPS = 1e-6
_AXIS_EPS = 1e-12

CAMERA_RIGHT = np.array([1.0, 0.0, 0.0])
CAMERA_UP = np.array([0.0, 1.0, 0.0])
CAMERA_OUT = np.array([0.0, 0.0, 1.0])
VIEW_DIRECTION = np.array([0.0, 0.0, -1.0])


def _normalise(v: np.ndarray) -> np.ndarray:
    v = np.asarray(v, dtype=float)
    norm = np.linalg.norm(v)
    if norm < _AXIS_EPS:
        raise ValueError("cannot normalise a zero-length vector")
    return v / norm


def quaternion_from_unit_vectors(v_from: np.ndarray, v_to: np.ndarray) -> Rotation:
    """Shortest-arc rotation taking direction *v_from* onto *v_to*.

    Both inputs are normalised first.  For antiparallel inputs the
    result is a half turn about an axis perpendicular to *v_from*.
    """
    f = _normalise(v_from)
    t = _normalise(v_to)
    r = float(np.dot(f, t)) + 1.0
    if r < _EPS:
        if abs(f[0]) > abs(f[2]):
            quat = np.array([-f[1], f[0], 0.0, 0.0])
        else:
            quat = np.array([0.0, -f[2], f[1], 0.0])
    else:
        quat = np.append(np.cross(f, t), r)
    return Rotation.from_quat(quat / np.linalg.norm(quat))


def rotate_about_world_axis(
    rotation: Rotation, axis: np.ndarray, angle: float,
) -> Rotation:
    """Apply a rotation of *angle* radians about a world *axis* after *rotation*."""
    step = Rotation.from_rotvec(_normalise(axis) * angle)
    return step * rotation


def orient_1d(basis: np.ndarray, axis: int) -> Rotation:
    """Lay the periodic axis along screen right, then turn it to show depth."""
    rotation = quaternion_from_unit_vectors(basis[axis], CAMERA_RIGHT)
    rotation = rotate_about_world_axis(rotation, CAMERA_UP, np.pi / 4)
    return rotate_about_world_axis(rotation, CAMERA_RIGHT, np.pi / 9)


def orient_2d(basis: np.ndarray, axes: tuple[int, int]) -> Rotation:
    """Face the slab normal towards the viewer and tilt it back."""
    d1, d2 = axes
    normal = np.cross(basis[d1], basis[d2])
    if np.linalg.norm(normal) < _AXIS_EPS:
        normal = np.zeros(3)
        normal[({0, 1, 2} - {d1, d2}).pop()] = 1.0
    rotation = quaternion_from_unit_vectors(normal, CAMERA_OUT)

    first = rotation.apply(basis[d1])
    if np.linalg.norm(first[:2]) > _AXIS_EPS:
        step = quaternion_from_unit_vectors(first, CAMERA_RIGHT)
        rotation = step * rotation
    return rotate_about_world_axis(rotation, CAMERA_RIGHT, -np.pi / 6)


def orient_3d(basis: np.ndarray) -> Rotation:
    """Stand ``c`` upright, face ``b x c`` towards the viewer and tilt twice."""
    b, c = basis[1], basis[2]
    rotation = quaternion_from_unit_vectors(c, CAMERA_UP)

    bc = np.cross(rotation.apply(b), rotation.apply(c))
    if np.linalg.norm(bc) > _AXIS_EPS:
        rotation = quaternion_from_unit_vectors(bc, CAMERA_OUT) * rotation
    b2, c2 = rotation.apply(b), rotation.apply(c)

    for vector, angle in ((b2, -np.pi / 6), (c2, np.pi / 12)):
        tilt_axis = np.cross(VIEW_DIRECTION, vector)
        if np.linalg.norm(tilt_axis) > _AXIS_EPS:
            rotation = rotate_about_world_axis(rotation, tilt_axis, angle)
    return rotation


def orient(basis: np.ndarray, periodicity: Periodicity) -> Rotation:
    """Initial root rotation for a structure of the given periodicity."""
    basis = np.asarray(basis, dtype=float)
    axes = periodicity.periodic_axes
    if periodicity.dimensionality == 1:
        return orient_1d(basis, axes[0])
    if periodicity.dimensionality == 2:
        return orient_2d(basis, axes)
    if periodicity.dimensionality == 3:
        return orient_3d(basis)
    return Rotation.identity()
