"""Painter's algorithm scene drawing.

Walks the visible part of an assembled scene graph, projects spheres,
cylinders, lines and points into pixel space with the orthographic
camera, sorts the resulting polygons back to front within each layer
and draws them into a matplotlib Axes via a single PolyCollection.
Labels and the element legend are drawn on top.
"""

from __future__ import annotations

from dataclasses import dataclass

import matplotlib.patheffects as path_effects
import numpy as np
from matplotlib.axes import Axes
from matplotlib.collections import PolyCollection

from matviewer.construction.assembler import AssembledScene
from matviewer.model import (
    Cylinder,
    Label,
    Line,
    Material,
    OrthographicCamera,
    Points,
    RenderStyle,
    SceneNode,
    Sphere,
)
from matviewer.model.colour import luminance
from matviewer.model.scene_graph import LAYERS
from matviewer.rendering.bond_geometry import _cylinder_polygon, _stick_polygon
from matviewer.rendering.cell_edges import _DASH_PATTERNS, _line_pieces
from matviewer.rendering.legend import _draw_legend_widget
from matviewer.rendering.projection import (
    _make_unit_circle,
    _node_to_pixels,
    _pixel_radius,
    _visible_leaves,
)

_POINT_RADIUS = 2.0  # pixels
_MIN_HALF_WIDTH = 0.25  # pixels

# Tie-break order for polygons at equal depth.  Back-side shells go
# first so they only show as a rim around what they enclose, and sticks
# go under the spheres they join.
_RANK_SHELL = 0
_RANK_STICK = 1
_RANK_SOLID = 2

_LABEL_ZORDER = {"main": 3, "overlay": 4}


@dataclass
class _Patch:
    """One polygon waiting to be painted."""

    depth: float
    rank: int
    verts: np.ndarray
    rgba: tuple[float, float, float, float]


@dataclass
class _PendingLabel:
    layer: str
    xy: np.ndarray
    text: str
    font_size: float
    rgba: tuple[float, float, float, float]


def _rgba(material: Material) -> tuple[float, float, float, float]:
    return (*material.colour, material.opacity)


def _stroke_colour(
    rgb: tuple[float, ...],
    bg_rgb: tuple[float, float, float],
) -> tuple[float, float, float]:
    """Halo colour that keeps a label of colour *rgb* legible."""
    if abs(luminance(rgb) - luminance(bg_rgb)) < 0.5:
        return (0.0, 0.0, 0.0) if luminance(rgb) > 0.5 else (1.0, 1.0, 1.0)
    return tuple(bg_rgb)


def _shape_rank(node: SceneNode, default: int) -> int:
    return _RANK_SHELL if node.material.back_side else default


def _collect(
    scene: AssembledScene,
    camera: OrthographicCamera,
    style: RenderStyle,
    unit_circle: np.ndarray,
    px_per_pt: float,
) -> tuple[dict[str, list[_Patch]], list[_PendingLabel]]:
    """Project every visible leaf into polygons and labels, per layer."""
    patches: dict[str, list[_Patch]] = {layer: [] for layer in LAYERS}
    labels: list[_PendingLabel] = []
    lines: list[SceneNode] = []
    sphere_depths: list[float] = []

    for node in _visible_leaves(scene.root):
        geom = node.geometry
        layer = node.effective_layer()
        rgba = _rgba(node.material)

        if isinstance(geom, Sphere):
            xy, depth = _node_to_pixels(node, np.zeros(3), camera)
            r = _pixel_radius(node, geom.radius, camera)
            patches[layer].append(_Patch(
                float(depth[0]), _shape_rank(node, _RANK_SOLID),
                unit_circle * r + xy[0], rgba,
            ))
            if not node.material.back_side:
                sphere_depths.append(float(depth[0]))

        elif isinstance(geom, Cylinder):
            xy, depth = _node_to_pixels(
                node, np.stack([geom.start, geom.end]), camera,
            )
            hw = _pixel_radius(node, geom.radius, camera)
            # Sort by the far end so a stick sits under both spheres
            # it joins.
            patches[layer].append(_Patch(
                float(depth.min()), _shape_rank(node, _RANK_STICK),
                _cylinder_polygon(xy[0], xy[1], hw, unit_circle), rgba,
            ))

        elif isinstance(geom, Line):
            lines.append(node)

        elif isinstance(geom, Points):
            xy, depth = _node_to_pixels(node, geom.points, camera)
            for p, d in zip(xy, depth):
                patches[layer].append(_Patch(
                    float(d), _RANK_SOLID,
                    unit_circle * _POINT_RADIUS + p, rgba,
                ))

        elif isinstance(geom, Label) and style.show_labels:
            xy, _ = _node_to_pixels(node, geom.position, camera)
            labels.append(_PendingLabel(
                layer, xy[0], geom.text, geom.font_size, rgba,
            ))

    cut_depths = np.sort(np.array(sphere_depths))
    pad = camera.viewport[0] / 2.0
    for node in lines:
        material = node.material
        xy, depth = _node_to_pixels(node, node.geometry.points, camera)
        hw = max(
            0.5 * material.line_width * style.line_width_scale * px_per_pt,
            _MIN_HALF_WIDTH,
        )
        dash_pattern = _DASH_PATTERNS[style.dash_style] if material.dashed else None
        layer = node.effective_layer()
        rgba = _rgba(material)
        for k in range(len(xy) - 1):
            for start, end, d in _line_pieces(
                xy[k], xy[k + 1], float(depth[k]), float(depth[k + 1]),
                cut_depths, dash_pattern, pad,
            ):
                verts = _stick_polygon(start, end, hw, hw)
                if verts is not None:
                    patches[layer].append(_Patch(d, _RANK_SOLID, verts, rgba))

    return patches, labels


def _draw_scene(
    ax: Axes,
    scene: AssembledScene,
    camera: OrthographicCamera,
    style: RenderStyle,
    *,
    bg_rgb: tuple[float, float, float] = (1.0, 1.0, 1.0),
    circle_segments: int | None = None,
) -> None:
    """Paint the visible scene onto *ax* using the painter's algorithm.

    Clears *ax* and redraws the full scene.  Does **not** create or
    show the figure; the caller owns the figure lifecycle.  The axes
    span the camera viewport in pixels, with the origin at the top
    left, so one data unit is one canvas pixel.

    Args:
        ax: A matplotlib ``Axes`` to draw into.
        scene: The assembled scene to render.  It is not modified.
        camera: The camera to project with.
        style: Visual style settings.
        bg_rgb: Normalised background colour, used to pick label halos.
        circle_segments: Overrides ``style.circle_segments`` (the
            interactive window uses fewer segments).
    """
    # Remove previous draw's collection(s) and leftover artists.
    while ax.collections:
        ax.collections[0].remove()
    for t in ax.texts[:]:
        t.remove()
    for line in ax.lines[:]:
        line.remove()

    unit_circle = _make_unit_circle(
        circle_segments if circle_segments is not None else style.circle_segments,
    )
    px_per_pt = ax.figure.dpi / 72.0 if ax.figure is not None else 1.0
    patches, labels = _collect(scene, camera, style, unit_circle, px_per_pt)

    all_verts: list[np.ndarray] = []
    face_colours: list[tuple[float, ...]] = []
    for layer in LAYERS:
        for patch in sorted(patches[layer], key=lambda p: (p.depth, p.rank)):
            all_verts.append(patch.verts)
            face_colours.append(patch.rgba)

    if all_verts:
        pc = PolyCollection(
            all_verts,
            closed=True,
            facecolors=face_colours,
            edgecolors=face_colours,
            linewidths=0.0,
        )
        ax.add_collection(pc)

    for label in labels:
        effects = []
        if style.label_stroke_width > 0:
            effects.append(path_effects.withStroke(
                linewidth=style.label_stroke_width,
                foreground=_stroke_colour(label.rgba, bg_rgb),
            ))
        ax.text(
            label.xy[0], label.xy[1], label.text,
            ha="center", va="center",
            fontsize=label.font_size,
            color=label.rgba,
            zorder=_LABEL_ZORDER[label.layer],
            path_effects=effects,
        )

    if scene.legend_visible:
        _draw_legend_widget(ax, scene.legend, px_per_pt=px_per_pt)

    # ---- Axes and layout ----
    width, height = camera.viewport
    ax.set_aspect("equal")
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)
    ax.axis("off")


def _axes_bg_rgb(ax: Axes) -> tuple[float, float, float]:
    """Return the axes background as an (R, G, B) tuple."""
    from matplotlib.colors import to_rgb
    return to_rgb(ax.get_facecolor())
