"""Stick geometry: cylinders and thick lines as screen polygons."""

from __future__ import annotations

import numpy as np

# Projected sticks shorter than this (pixels) are treated as points.
_MIN_STICK_LENGTH = 1e-12


def _stick_polygon(
    start: np.ndarray,
    end: np.ndarray,
    hw_start: float,
    hw_end: float,
) -> np.ndarray | None:
    """Quadrilateral covering a stick from *start* to *end* on screen.

    The half-widths may differ at the two ends.

    Returns:
        Corners as a ``(4, 2)`` array, walking the *start* side first,
        or ``None`` when the stick has no length.
    """
    axis = np.asarray(end, dtype=float) - start
    length = np.hypot(axis[0], axis[1])
    if length < _MIN_STICK_LENGTH:
        return None
    normal = np.array([-axis[1], axis[0]]) / length
    offsets = np.array([hw_start, -hw_start, -hw_end, hw_end])[:, np.newaxis] * normal
    anchors = np.array([start, start, end, end], dtype=float)
    return anchors + offsets


def _cylinder_polygon(
    start: np.ndarray,
    end: np.ndarray,
    half_width: float,
    unit_circle: np.ndarray,
) -> np.ndarray:
    """Screen polygon for a cylinder with projected ends *start* and *end*.

    A cylinder seen end-on projects to a disc, so a degenerate stick
    falls back to a circle of radius *half_width*.
    """
    verts = _stick_polygon(start, end, half_width, half_width)
    if verts is None:
        return unit_circle * half_width + start
    return verts
