"""Line geometry: dash splitting and depth splitting of scene lines."""

from __future__ import annotations

import itertools

import numpy as np

_DASH_PATTERNS: dict[str, list[float]] = {
    "dashed": [0.03, 0.015],
    "dotted": [0.005, 0.01],
    "dashdot": [0.03, 0.01, 0.005, 0.01],
}


def _split_dashes(
    start_2d: np.ndarray,
    end_2d: np.ndarray,
    pattern: list[float],
    pad: float,
) -> list[tuple[float, float]]:
    """Cut a projected segment into the dashes of *pattern*.

    Args:
        start_2d: Start point ``(2,)``.
        end_2d: End point ``(2,)``.
        pattern: Alternating mark and gap lengths, starting with a
            mark, as fractions of *pad*.
        pad: Half the viewport width (pixels).

    Returns:
        ``(t0, t1)`` fractions along the segment, one per mark.
    """
    length = float(np.linalg.norm(end_2d - start_2d))
    if length < 1e-12:
        return []

    dashes: list[tuple[float, float]] = []
    pos = 0.0
    for n, fraction in enumerate(itertools.cycle(pattern)):
        if pos >= length:
            break
        step = min(fraction * pad, length - pos)
        if n % 2 == 0:
            dashes.append((pos / length, (pos + step) / length))
        pos += step
    return dashes


def _split_at_depths(
    d_start: float,
    d_end: float,
    cut_depths: np.ndarray,
) -> list[tuple[float, float]]:
    """Split a segment at the sorted depths it passes through.

    Each sub-piece then gets its own depth slot, so a long line that
    spans many atoms is not painted at a single mid-depth and does not
    occlude atoms in front of part of it.

    Args:
        d_start: Depth of the segment start.
        d_end: Depth of the segment end.
        cut_depths: Sorted depths to cut at.

    Returns:
        List of ``(t0, t1)`` fractions along the segment.
    """
    lo_d, hi_d = min(d_start, d_end), max(d_start, d_end)
    inside = cut_depths[(cut_depths > lo_d) & (cut_depths < hi_d)]
    depth_span = d_end - d_start
    if len(inside) == 0 or abs(depth_span) < 1e-12:
        return [(0.0, 1.0)]

    ts = np.clip(np.sort((inside - d_start) / depth_span), 0.0, 1.0)
    boundaries = np.concatenate([[0.0], ts, [1.0]])
    return [
        (float(boundaries[i]), float(boundaries[i + 1]))
        for i in range(len(boundaries) - 1)
        if boundaries[i + 1] - boundaries[i] > 1e-12
    ]


def _line_pieces(
    start_2d: np.ndarray,
    end_2d: np.ndarray,
    d_start: float,
    d_end: float,
    cut_depths: np.ndarray,
    dash_pattern: list[float] | None,
    pad: float,
) -> list[tuple[np.ndarray, np.ndarray, float]]:
    """Break one projected line segment into drawable pieces.

    Dashed segments are cut into dashes.  Solid segments are cut at
    *cut_depths*.  Each piece carries the depth of its midpoint.

    Returns:
        List of ``(piece_start, piece_end, depth)`` tuples.
    """
    if dash_pattern is not None:
        fractions = _split_dashes(start_2d, end_2d, dash_pattern, pad)
    else:
        fractions = _split_at_depths(d_start, d_end, cut_depths)

    pieces = []
    for t0, t1 in fractions:
        t_mid = 0.5 * (t0 + t1)
        pieces.append((
            start_2d + (end_2d - start_2d) * t0,
            start_2d + (end_2d - start_2d) * t1,
            d_start + (d_end - d_start) * t_mid,
        ))
    return pieces
