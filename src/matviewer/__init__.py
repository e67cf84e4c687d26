"""matviewer: ball-and-stick visualisation of atomic structures.

matviewer turns a structure descriptor (cell, positions, periodicity,
optional bonds and tags) into a framed, canonically oriented 3D scene,
drawn with matplotlib.

Example usage::

    from matviewer import StructureViewer

    viewer = StructureViewer()
    if viewer.load_json("structure.json"):
        viewer.render_mpl("structure.png")
"""

from matviewer.construction.assembler import AssembledScene
from matviewer.construction.bonds import bond_cutoff, compute_bonds
from matviewer.construction.coordinates import (
    DegenerateCellError,
    to_cartesian,
    to_fractional,
    wrap_fractional,
)
from matviewer.construction.defaults import COVALENT_RADII, ELEMENT_COLOURS
from matviewer.construction.periodicity import Periodicity, classify_periodicity
from matviewer.construction.replication import get_repetitions, replicate
from matviewer.construction.scene_builders import from_pymatgen
from matviewer.construction.settings import load_options, save_options
from matviewer.model import (
    Bond,
    Colour,
    DescriptorError,
    OrthographicCamera,
    RenderStyle,
    SceneNode,
    StructureDescriptor,
    Tags,
    Vacancy,
    ViewCenter,
    ViewerOptions,
    ViewerState,
    normalise_colour,
)
from matviewer.viewer import LoadResult, StructureLoader, StructureViewer

__all__ = [
    "AssembledScene",
    "Bond",
    "COVALENT_RADII",
    "Colour",
    "DegenerateCellError",
    "DescriptorError",
    "ELEMENT_COLOURS",
    "LoadResult",
    "OrthographicCamera",
    "Periodicity",
    "RenderStyle",
    "SceneNode",
    "StructureDescriptor",
    "StructureLoader",
    "StructureViewer",
    "Tags",
    "Vacancy",
    "ViewCenter",
    "ViewerOptions",
    "ViewerState",
    "bond_cutoff",
    "classify_periodicity",
    "compute_bonds",
    "from_pymatgen",
    "get_repetitions",
    "load_options",
    "normalise_colour",
    "replicate",
    "save_options",
    "to_cartesian",
    "to_fractional",
    "wrap_fractional",
]
