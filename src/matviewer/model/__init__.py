"""Core data model for matviewer: descriptors, options, camera and scene graph.

This package provides the data types used throughout matviewer.
Everything is re-exported here so that ``from matviewer.model import
ViewerOptions`` works.
"""

from matviewer.model.bond import Bond
from matviewer.model.camera import OrthographicCamera
from matviewer.model.colour import Colour, hex_to_rgb, normalise_colour
from matviewer.model.descriptor import (
    DescriptorError,
    StructureDescriptor,
    Tags,
    Vacancy,
)
from matviewer.model.options import ViewCenter, ViewerOptions
from matviewer.model.render_style import RenderStyle
from matviewer.model.scene_graph import (
    Cylinder,
    Label,
    Line,
    Material,
    Points,
    SceneNode,
    Sphere,
)
from matviewer.model.view_state import ViewerState

__all__ = [
    "Bond",
    "Colour",
    "Cylinder",
    "DescriptorError",
    "Label",
    "Line",
    "Material",
    "OrthographicCamera",
    "Points",
    "RenderStyle",
    "SceneNode",
    "Sphere",
    "StructureDescriptor",
    "Tags",
    "Vacancy",
    "ViewCenter",
    "ViewerOptions",
    "ViewerState",
    "hex_to_rgb",
    "normalise_colour",
]
