"""Scene construction: geometry engine, element tables and builders."""

from matviewer.construction.assembler import AssembledScene, apply_tags, assemble_scene
from matviewer.construction.bonds import bond_cutoff, compute_bonds
from matviewer.construction.coordinates import (
    DegenerateCellError,
    almost_equal,
    to_cartesian,
    to_fractional,
    wrap_fractional,
)
from matviewer.construction.defaults import (
    COVALENT_RADII,
    ELEMENT_COLOURS,
    ELEMENT_SYMBOLS,
    atomic_number,
)
from matviewer.construction.framing import boundary_box, fit_zoom
from matviewer.construction.legend import LegendItem, build_element_legend
from matviewer.construction.orientation import (
    orient,
    quaternion_from_unit_vectors,
    rotate_about_world_axis,
)
from matviewer.construction.periodicity import Periodicity, classify_periodicity
from matviewer.construction.replication import (
    ReplicatedAtoms,
    get_repetitions,
    replicate,
)
from matviewer.construction.scene_builders import from_pymatgen
from matviewer.construction.settings import load_options, save_options

__all__ = [
    "AssembledScene",
    "COVALENT_RADII",
    "DegenerateCellError",
    "ELEMENT_COLOURS",
    "ELEMENT_SYMBOLS",
    "LegendItem",
    "Periodicity",
    "ReplicatedAtoms",
    "almost_equal",
    "apply_tags",
    "assemble_scene",
    "atomic_number",
    "bond_cutoff",
    "boundary_box",
    "build_element_legend",
    "classify_periodicity",
    "compute_bonds",
    "fit_zoom",
    "from_pymatgen",
    "get_repetitions",
    "load_options",
    "orient",
    "quaternion_from_unit_vectors",
    "replicate",
    "rotate_about_world_axis",
    "save_options",
    "to_cartesian",
    "to_fractional",
    "wrap_fractional",
]
