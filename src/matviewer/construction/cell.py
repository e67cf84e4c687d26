"""Cell wireframes and lattice-parameter visuals."""

from __future__ import annotations

from collections.abc import Sequence
from typing import NamedTuple

import numpy as np

from matviewer.construction.periodicity import Periodicity
from matviewer.model.scene_graph import Cylinder, Label, Line, Material, SceneNode

# Basis vectors shorter than this count as missing.
_COLLAPSE_LENGTH = 1e-3

CELL_COLOUR = "#000000"
DIM_COLOUR = "#999999"
CELL_LINE_WIDTH = 1.5

AXIS_COLOURS = ("#C52929", "#47A823", "#3B5796")
AXIS_LABELS = ("a", "b", "c")
ANGLE_LABELS = ("γ", "α", "β")

CELL_VECTOR_RADIUS = 0.09
CELL_VECTOR_OPACITY = 0.75
AXIS_LINE_RADIUS = 0.02
AXIS_OVERHANG = 1.3
LABEL_OFFSET = 0.8
ARC_POINTS = 21
ARC_LABEL_POINT = 9
ARC_LABEL_PUSH = 0.3
LABEL_FONT_SIZE = 14.0


class CellEdge(NamedTuple):
    """One edge of a cell wireframe.

    Attributes:
        start: Cartesian start point.
        end: Cartesian end point.
        dim: Whether the edge runs along or touches a non-periodic
            axis, and is drawn faded.
    """

    start: np.ndarray
    end: np.ndarray
    dim: bool


def is_collapsed(basis: np.ndarray, pbc: Sequence[bool]) -> bool:
    """Whether every non-periodic basis vector is (nearly) zero."""
    return not any(
        np.linalg.norm(basis[i]) > _COLLAPSE_LENGTH and not pbc[i]
        for i in range(3)
    )


def cell_edges(basis: np.ndarray, pbc: Sequence[bool]) -> list[CellEdge]:
    """The edges of the parallelepiped spanned by *basis*.

    For each axis ``i`` four edges run parallel to ``basis[i]``: from
    the origin, from the tip of the next axis, from the tip of the
    axis after that, and from the sum of both.  An edge is dim when
    any axis it involves is non-periodic.  Dim edges are dropped when
    the cell is collapsed, so a structure with no real extent along
    its non-periodic axes shows only its periodic face.
    """
    basis = np.asarray(basis, dtype=float)
    collapsed = is_collapsed(basis, pbc)
    origin = np.zeros(3)
    edges = []
    for i in range(3):
        j, k = (i + 1) % 3, (i + 2) % 3
        vec, second, third = basis[i], basis[j], basis[k]
        candidates = (
            (origin, not pbc[i]),
            (second, not pbc[i] or not pbc[j]),
            (third, not pbc[i] or not pbc[k]),
            (second + third, not pbc[i] or not pbc[j] or not pbc[k]),
        )
        for start, dim in candidates:
            if dim and collapsed:
                continue
            edges.append(CellEdge(start.copy(), start + vec, dim))
    return edges


def build_cell(
    name: str,
    basis: np.ndarray,
    pbc: Sequence[bool],
    *,
    dashed: bool = False,
) -> SceneNode:
    """Build a group of line nodes for a cell wireframe.

    Args:
        name: Name of the returned group.
        basis: Cell basis vectors as rows.
        pbc: Periodicity of each axis.
        dashed: Draw every edge dashed, as for the primitive cell.
    """
    solid = Material(colour=CELL_COLOUR, dashed=dashed, line_width=CELL_LINE_WIDTH)
    dim = Material(colour=DIM_COLOUR, dashed=True, line_width=CELL_LINE_WIDTH)
    group = SceneNode(name)
    for n, edge in enumerate(cell_edges(basis, pbc)):
        group.add(SceneNode(
            f"edge{n}",
            Line(np.array([edge.start, edge.end])),
            dim if edge.dim else solid,
        ))
    return group


def _unit_or_zero(v: np.ndarray) -> np.ndarray:
    norm = np.linalg.norm(v)
    return v / norm if norm > 0 else np.zeros(3)


def label_offset(v1: np.ndarray, v2: np.ndarray, v3: np.ndarray) -> np.ndarray:
    """Direction, scaled to :data:`LABEL_OFFSET`, in which to push an axis label.

    Normally ``-(v1 x v2) + (v1 x v3)``, which points away from the
    other two axes.  When one of the other axes is missing its
    direction is rebuilt from the remaining pair.
    """
    if np.linalg.norm(v2) == 0:
        offset = np.cross(v1, np.cross(v1, v3))
    elif np.linalg.norm(v3) == 0:
        offset = np.cross(v1, np.cross(v1, v2))
    else:
        offset = -np.cross(v1, v2) + np.cross(v1, v3)
    return _unit_or_zero(offset) * LABEL_OFFSET


def angle_arc(v1: np.ndarray, v2: np.ndarray) -> np.ndarray:
    """Points of the arc marking the angle between *v1* and *v2*.

    The arc starts on *v1*, ends on *v2* and has radius
    ``max(min(|v1| / 4, |v2| / 4), 1)``.

    Returns:
        Array of shape ``(21, 3)``.
    """
    len1, len2 = np.linalg.norm(v1), np.linalg.norm(v2)
    radius = max(min(len1 / 4, len2 / 4), 1.0)
    u = v1 / len1
    w = _unit_or_zero(v2 - np.dot(v2, u) * u)
    cos_angle = np.clip(np.dot(v1, v2) / (len1 * len2), -1.0, 1.0)
    t = np.linspace(0.0, np.arccos(cos_angle), ARC_POINTS)
    return radius * (np.cos(t)[:, np.newaxis] * u + np.sin(t)[:, np.newaxis] * w)


def build_lattice_parameters(
    basis: np.ndarray, periodicity: Periodicity,
) -> tuple[SceneNode, SceneNode]:
    """Build the coloured cell vectors and the label/arc overlay.

    One coloured vector, one black axis line and one label is created
    per periodic axis.  3D structures get an angle arc between each
    axis and the next; 2D structures get one arc between their two
    periodic axes; 1D structures get none.

    Returns:
        Tuple of ``(cell_vectors, lattice_parameters)`` groups.  The
        second is drawn on the overlay layer.
    """
    basis = np.asarray(basis, dtype=float)
    vectors = SceneNode("cell_vectors")
    overlay = SceneNode("lattice_parameters", layer="overlay")
    arc_material = Material(colour=CELL_COLOUR, dashed=True, line_width=2.0)
    axis_material = Material(colour=CELL_COLOUR)

    dim = periodicity.dimensionality
    periodic = set(periodicity.periodic_axes)
    n = -1
    for i in range(3):
        if i not in periodic:
            continue
        n += 1
        v1, v2, v3 = basis[i], basis[(i + 1) % 3], basis[(i + 2) % 3]
        length = np.linalg.norm(v1)
        colour = AXIS_COLOURS[n]
        text = "a" if dim == 1 else AXIS_LABELS[n]

        vectors.add(SceneNode(
            f"vector{i}",
            Cylinder(np.zeros(3), v1, CELL_VECTOR_RADIUS),
            Material(colour=colour, opacity=CELL_VECTOR_OPACITY),
        ))
        vectors.add(SceneNode(
            f"axis{i}",
            Cylinder(np.zeros(3), v1 * (1 + AXIS_OVERHANG / length), AXIS_LINE_RADIUS),
            axis_material,
        ))
        overlay.add(SceneNode(
            f"label{i}",
            Label(text, 0.5 * v1 + label_offset(v1, v2, v3), LABEL_FONT_SIZE),
            Material(colour=colour),
        ))

        if dim == 1:
            continue
        if dim == 2 and (i, (i + 1) % 3) != tuple(periodicity.periodic_axes):
            continue
        points = angle_arc(v1, v2)
        anchor = points[ARC_LABEL_POINT]
        anchor = anchor * (1 + ARC_LABEL_PUSH / np.linalg.norm(anchor))
        overlay.add(SceneNode(f"arc{i}", Line(points), arc_material))
        overlay.add(SceneNode(
            f"angle{i}",
            Label("γ" if dim == 2 else ANGLE_LABELS[n], anchor, LABEL_FONT_SIZE),
            Material(colour="#FFFFFF"),
        ))
    return vectors, overlay
