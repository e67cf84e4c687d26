"""Camera framing: the bounding box of a structure and the zoom that fits it."""

from __future__ import annotations

import logging

import numpy as np

from matviewer._constants import FIT_MARGIN
from matviewer.model.camera import OrthographicCamera

logger = logging.getLogger(__name__)

# Offsets smaller than this (in NDC) give no direction for the margin.
_DIRECTION_EPS = 1e-9


def boundary_box(positions: np.ndarray, radii: np.ndarray) -> np.ndarray:
    """Corners of the axis-aligned box around *positions*.

    The box is expanded on every side by the largest of *radii*, so
    that whole spheres fit inside it.

    Args:
        positions: Cartesian coordinates, shape ``(n, 3)`` with ``n >= 1``.
        radii: Atom radii, shape ``(n,)``.

    Returns:
        Array of shape ``(8, 3)``: the minimum corner, the maximum
        corner, then for each axis ``i`` the minimum corner moved to
        the maximum along ``i`` and the maximum corner moved to the
        minimum along ``i``.
    """
    positions = np.asarray(positions, dtype=float).reshape(-1, 3)
    if len(positions) == 0:
        raise ValueError("cannot bound an empty set of positions")
    pad = float(np.max(radii)) if len(radii) else 0.0
    origin = positions.min(axis=0) - pad
    opposite = positions.max(axis=0) + pad
    extent = opposite - origin

    corners = [origin, opposite]
    for i in range(3):
        step = np.zeros(3)
        step[i] = extent[i]
        corners.append(origin + step)
        corners.append(opposite - step)
    return np.array(corners)


def _round_half_up(values: np.ndarray) -> np.ndarray:
    return np.floor(values + 0.5)


def fit_zoom(
    corners_world: np.ndarray,
    camera: OrthographicCamera,
    *,
    margin: float = FIT_MARGIN,
    zoom_baseline: float = 1.0,
) -> float:
    """Zoom at which the projected corners fill the canvas.

    The corners are projected at zoom 1, pushed outwards from their
    projected centre by *margin* NDC units on each screen axis, and
    mapped to whole pixels.  The zoom factor is the canvas size over
    the pixel extent of the corners, taken on whichever axis is more
    restrictive.

    The zoom never grows with *margin*, but because extents are
    rounded to whole pixels, margin steps smaller than half a pixel
    can leave it unchanged.

    Args:
        corners_world: World-space corner points, shape ``(n, 3)``.
        camera: Camera supplying the projection and canvas size.
            Its zoom is ignored and left untouched.
        margin: Screen-space margin in NDC units.
        zoom_baseline: Multiplier applied to the fitted factor.

    Returns:
        The zoom to apply to the camera.
    """
    corners = np.asarray(corners_world, dtype=float).reshape(-1, 3)
    centre = corners.mean(axis=0)

    ndc, _ = camera.project(corners, zoom=1.0)
    centre_ndc, _ = camera.project(centre, zoom=1.0)
    offset = ndc - centre_ndc
    direction = np.where(
        np.abs(offset) < _DIRECTION_EPS, 0.0, np.sign(offset),
    )
    ndc = ndc + margin * direction

    w, h = camera.viewport
    px = _round_half_up((ndc[:, 0] + 1.0) * w / 2.0)
    py = _round_half_up((-ndc[:, 1] + 1.0) * h / 2.0)
    width = float(px.max() - px.min())
    height = float(py.max() - py.min())

    factor = _choose_factor(
        w / width if width > 0 else None,
        h / height if height > 0 else None,
    )
    logger.debug(
        "Fit factor %.4g for %dx%d px extent on %dx%d canvas",
        factor, width, height, w, h,
    )
    return factor * zoom_baseline


def _choose_factor(xf: float | None, yf: float | None) -> float:
    """Pick the more restrictive of the two axis factors."""
    if xf is None and yf is None:
        return 1.0
    if xf is None:
        return yf
    if yf is None:
        return xf
    if (xf <= 1 and yf <= 1) or (xf >= 1 and yf >= 1):
        return min(xf, yf)
    return xf if xf <= 1 else yf
