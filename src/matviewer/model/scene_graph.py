"""A minimal retained-mode scene graph.

Nodes carry a local transform (uniform scale, then rotation, then
translation), an optional piece of geometry and a material.  Groups
are nodes without geometry.  The painter walks the graph, composes
transforms down to each leaf and draws the geometry in world space.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

import numpy as np
from scipy.spatial.transform import Rotation

from matviewer.model.colour import RGB, Colour, normalise_colour

#: Names of the drawing layers, in painting order.
LAYERS = ("main", "overlay")


@dataclass(frozen=True)
class Material:
    """Surface appearance of a piece of geometry.

    Attributes:
        colour: Fill or line colour.
        opacity: Opacity in ``[0, 1]``.
        back_side: Draw only the silhouette behind the geometry in
            front of it.  Used for black outline shells.
        dashed: Draw lines with a dash pattern.
        line_width: Line width in points, for line geometry.
    """

    colour: RGB = (0.0, 0.0, 0.0)
    opacity: float = 1.0
    back_side: bool = False
    dashed: bool = False
    line_width: float = 1.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "colour", normalise_colour(self.colour))
        if not 0.0 <= self.opacity <= 1.0:
            raise ValueError(f"opacity must be in [0, 1], got {self.opacity}")
        if self.line_width < 0:
            raise ValueError(
                f"line_width must be non-negative, got {self.line_width}"
            )

    def with_colour(self, colour: Colour) -> Material:
        """Return a copy with a different colour."""
        return Material(
            colour=normalise_colour(colour),
            opacity=self.opacity,
            back_side=self.back_side,
            dashed=self.dashed,
            line_width=self.line_width,
        )


@dataclass(frozen=True)
class Sphere:
    """A sphere centred on its node's origin."""

    radius: float

    def __post_init__(self) -> None:
        if self.radius <= 0:
            raise ValueError(f"radius must be positive, got {self.radius}")


@dataclass(frozen=True, eq=False)
class Cylinder:
    """A cylinder between two points in node-local coordinates."""

    start: np.ndarray
    end: np.ndarray
    radius: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", np.asarray(self.start, dtype=float))
        object.__setattr__(self, "end", np.asarray(self.end, dtype=float))
        if self.radius <= 0:
            raise ValueError(f"radius must be positive, got {self.radius}")


@dataclass(frozen=True, eq=False)
class Line:
    """A polyline through *points*, shape ``(n, 3)`` with ``n >= 2``."""

    points: np.ndarray

    def __post_init__(self) -> None:
        pts = np.asarray(self.points, dtype=float)
        if pts.ndim != 2 or pts.shape[1] != 3 or len(pts) < 2:
            raise ValueError(
                f"points must have shape (n >= 2, 3), got {pts.shape}"
            )
        object.__setattr__(self, "points", pts)


@dataclass(frozen=True, eq=False)
class Label:
    """Screen-facing text anchored at a node-local position."""

    text: str
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    font_size: float = 12.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", np.asarray(self.position, dtype=float))


@dataclass(frozen=True, eq=False)
class Points:
    """A bare point set, shape ``(n, 3)``."""

    points: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "points", np.asarray(self.points, dtype=float).reshape(-1, 3),
        )


Geometry = Sphere | Cylinder | Line | Label | Points


class SceneNode:
    """A transformable node in the scene graph.

    Args:
        name: Node name, used by :meth:`find`.  Need not be unique.
        geometry: Geometry drawn at this node, or ``None`` for a group.
        material: Appearance of *geometry*.
        position: Local translation.
        layer: Drawing layer, one of :data:`LAYERS`, or ``None`` to
            inherit the parent's layer.
    """

    def __init__(
        self,
        name: str = "",
        geometry: Geometry | None = None,
        material: Material | None = None,
        *,
        position: np.ndarray | None = None,
        layer: str | None = None,
    ) -> None:
        if layer is not None and layer not in LAYERS:
            raise ValueError(f"layer must be one of {LAYERS}, got {layer!r}")
        self.name = name
        self.geometry = geometry
        self.material = material if material is not None else Material()
        self.position = (
            np.zeros(3) if position is None else np.asarray(position, dtype=float)
        )
        self.rotation: Rotation = Rotation.identity()
        self.scale: float = 1.0
        self.visible: bool = True
        self.layer = layer
        self.parent: SceneNode | None = None
        self.children: list[SceneNode] = []

    def __repr__(self) -> str:
        kind = type(self.geometry).__name__ if self.geometry else "Group"
        return f"SceneNode({self.name!r}, {kind}, children={len(self.children)})"

    def add(self, *nodes: SceneNode) -> SceneNode:
        """Attach *nodes* as children, detaching them from any old parent.

        Returns:
            This node, for chaining.
        """
        for node in nodes:
            if node.parent is not None:
                node.parent.remove(node)
            node.parent = self
            self.children.append(node)
        return self

    def remove(self, node: SceneNode) -> None:
        """Detach *node* from this node."""
        self.children.remove(node)
        node.parent = None

    def clear(self) -> None:
        """Detach every child."""
        for child in self.children:
            child.parent = None
        self.children = []

    def traverse(self) -> Iterator[SceneNode]:
        """Yield this node and all descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.traverse()

    def find(self, name: str) -> SceneNode | None:
        """Return the first node named *name* in this subtree."""
        for node in self.traverse():
            if node.name == name:
                return node
        return None

    def ancestors(self) -> Iterator[SceneNode]:
        """Yield this node and each of its parents up to the root."""
        node: SceneNode | None = self
        while node is not None:
            yield node
            node = node.parent

    def is_visible(self) -> bool:
        """Whether this node and every ancestor are visible."""
        return all(node.visible for node in self.ancestors())

    def effective_layer(self) -> str:
        """The first layer set on this node or an ancestor."""
        for node in self.ancestors():
            if node.layer is not None:
                return node.layer
        return LAYERS[0]

    def world_scale(self) -> float:
        """Product of the uniform scales from the root down to this node."""
        return float(np.prod([node.scale for node in self.ancestors()]))

    def world_rotation(self) -> Rotation:
        """Composite rotation from node-local to world axes."""
        rotation = Rotation.identity()
        for node in self.ancestors():
            rotation = node.rotation * rotation
        return rotation

    def to_world(self, points: np.ndarray) -> np.ndarray:
        """Map node-local points, shape ``(n, 3)`` or ``(3,)``, to world space."""
        pts = np.asarray(points, dtype=float)
        out = np.atleast_2d(pts)
        for node in self.ancestors():
            out = node.rotation.apply(out * node.scale) + node.position
        return out[0] if pts.ndim == 1 else out

    def world_position(self) -> np.ndarray:
        """World-space position of this node's origin."""
        return self.to_world(np.zeros(3))
