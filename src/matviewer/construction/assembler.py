"""Assemble the scene graph for a loaded structure."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np

from matviewer._constants import (
    ATOM_OUTLINE_ADDITION,
    BOND_OUTLINE_ADDITION,
    BOND_RADIUS,
    TAG_SCALE,
    VACANCY_OPACITY,
)
from matviewer.construction.cell import build_cell, build_lattice_parameters
from matviewer.construction.coordinates import to_cartesian
from matviewer.construction.defaults import (
    covalent_radii,
    covalent_radius,
    element_colour,
)
from matviewer.construction.framing import boundary_box
from matviewer.construction.legend import LegendItem, build_element_legend
from matviewer.construction.periodicity import Periodicity
from matviewer.construction.replication import ReplicatedAtoms
from matviewer.model import Bond, StructureDescriptor, Tags, ViewerOptions
from matviewer.model.scene_graph import Cylinder, Material, Points, SceneNode, Sphere

logger = logging.getLogger(__name__)

TAG_COLOURS: dict[str, int] = {
    "adsorbates": 0xD70000,
    "unknowns": 0xD75F00,
    "interstitials": 0xAF8700,
    "substitutions": 0x0087FF,
    "outliers": 0x0087FF,
}
"""Outline colour for each tag category."""

OUTLINE = Material(colour=0x000000, back_side=True)
BOND_FILL = Material(colour=0xFFFFFF)


@dataclass(eq=False)
class AssembledScene:
    """The scene graph of one loaded structure, with handles to its parts.

    Attributes:
        root: Root node.  Its rotation is the view orientation.
        atoms: Group holding one group per drawn atom.
        bonds: Group holding one group per bond.
        cell_vectors: Coloured cell vectors and axis lines.
        lattice_parameters: Axis labels, angle arcs and angle labels.
        corner_points: Invisible corners of the structure's bounding box.
        conventional_cell: Cell wireframe, or ``None`` without a cell.
        primitive_cell: Primitive cell wireframe, or ``None``.
        vacancies: Vacancy markers, or ``None`` without vacancies.
        atom_groups: Drawn atom groups keyed by the index of the
            descriptor atom they show.
        fills: Atom fill nodes in replicated-atom order.
        outlines: Atom outline nodes in replicated-atom order.
        bond_fills: Bond fill nodes in bond order.
        legend: Element legend entries, one per element drawn.
        legend_visible: Whether the legend is drawn.
    """

    root: SceneNode
    atoms: SceneNode
    bonds: SceneNode
    cell_vectors: SceneNode
    lattice_parameters: SceneNode
    corner_points: SceneNode
    conventional_cell: SceneNode | None = None
    primitive_cell: SceneNode | None = None
    vacancies: SceneNode | None = None
    atom_groups: dict[int, list[SceneNode]] = field(default_factory=dict)
    fills: list[SceneNode] = field(default_factory=list)
    outlines: list[SceneNode] = field(default_factory=list)
    bond_fills: list[SceneNode] = field(default_factory=list)
    legend: list[LegendItem] = field(default_factory=list)
    legend_visible: bool = True

    @property
    def corners(self) -> np.ndarray:
        """World-space bounding-box corners, shape ``(8, 3)``."""
        return self.corner_points.to_world(self.corner_points.geometry.points)

    def set_bonds_visible(self, visible: bool) -> None:
        self.bonds.visible = visible

    def set_cell_visible(self, visible: bool) -> None:
        """Show or hide both cell wireframes."""
        for cell in (self.conventional_cell, self.primitive_cell):
            if cell is not None:
                cell.visible = visible

    def set_lattice_parameters_visible(self, visible: bool) -> None:
        """Show or hide the cell vectors, their labels and angle arcs."""
        self.cell_vectors.visible = visible
        self.lattice_parameters.visible = visible

    def set_vacancies_visible(self, visible: bool) -> None:
        if self.vacancies is not None:
            self.vacancies.visible = visible

    def set_legend_visible(self, visible: bool) -> None:
        self.legend_visible = visible

    def dispose(self) -> None:
        """Detach every node so nothing keeps the old graph alive."""
        for node in list(self.root.traverse()):
            node.clear()
        self.atom_groups.clear()
        self.fills.clear()
        self.outlines.clear()
        self.bond_fills.clear()
        self.legend.clear()


def _atom_group(name: str, position: np.ndarray, z: int, radius_scale: float) -> SceneNode:
    radius = radius_scale * covalent_radius(z)
    scale = ATOM_OUTLINE_ADDITION / radius + 1
    group = SceneNode(name, position=position)
    group.add(
        SceneNode("fill", Sphere(radius), Material(colour=element_colour(z))),
        SceneNode("outline", Sphere(radius * scale), OUTLINE),
    )
    return group


def _bond_group(bond: Bond, bond_scale: float) -> SceneNode:
    radius = BOND_RADIUS * bond_scale
    scale = BOND_OUTLINE_ADDITION / radius + 1
    group = SceneNode(f"bond{bond.index_a}-{bond.index_b}")
    group.add(
        SceneNode("fill", Cylinder(bond.start, bond.end, radius), BOND_FILL),
        SceneNode("outline", Cylinder(bond.start, bond.end, radius * scale), OUTLINE),
    )
    return group


def _vacancy_group(
    tags: Tags, basis: np.ndarray, radius_scale: float, visible: bool,
) -> SceneNode:
    group = SceneNode("vacancies")
    group.visible = visible
    for n, vacancy in enumerate(tags.vacancies):
        position = to_cartesian(np.array(vacancy.position), basis)
        marker = _atom_group(f"vacancy{n}", position, vacancy.label, radius_scale)
        for child in marker.children:
            child.material = Material(
                colour=child.material.colour,
                opacity=VACANCY_OPACITY,
                back_side=child.material.back_side,
            )
        group.add(marker)
    return group


def assemble_scene(
    descriptor: StructureDescriptor,
    replicated: ReplicatedAtoms,
    bonds: list[Bond],
    periodicity: Periodicity,
    options: ViewerOptions,
) -> AssembledScene:
    """Build the scene graph for a structure.

    The atom and bond groups are shifted so that the view centre sits
    at the origin, then by the translation option.  The cells, lattice
    parameters and bounding-box corners are shifted by the view
    centre only.  Visibility follows *options*.

    Args:
        descriptor: The validated structure.
        replicated: The atoms to draw, originals first.
        bonds: Bonds between the replicated atoms.
        periodicity: Classification of the structure.
        options: Display options.

    Returns:
        The assembled scene.  The root rotation is left at identity.
    """
    basis = descriptor.basis
    n_original = descriptor.n_atoms
    original_cart = replicated.cartesian[:n_original]
    centre = options.center_point(original_cart, basis)
    shift = -centre
    atom_shift = shift + np.asarray(options.translation)

    root = SceneNode("root")
    cell_vectors, lattice_parameters = build_lattice_parameters(basis, periodicity)

    atoms = SceneNode("atoms", position=atom_shift)
    bonds_node = SceneNode("bonds", position=atom_shift)
    scene = AssembledScene(
        root=root,
        atoms=atoms,
        bonds=bonds_node,
        cell_vectors=cell_vectors,
        lattice_parameters=lattice_parameters,
        corner_points=SceneNode(
            "corner_points",
            Points(boundary_box(original_cart, covalent_radii(descriptor.atomic_numbers))),
        ),
        legend=build_element_legend(replicated.atomic_numbers),
    )

    for position, z, source in zip(
        replicated.cartesian, replicated.atomic_numbers, replicated.source_indices,
    ):
        group = _atom_group(f"atom{source}", position, int(z), options.radius_scale)
        atoms.add(group)
        scene.atom_groups.setdefault(int(source), []).append(group)
        scene.fills.append(group.children[0])
        scene.outlines.append(group.children[1])

    for bond in bonds:
        group = _bond_group(bond, options.bond_scale)
        bonds_node.add(group)
        scene.bond_fills.append(group.children[0])

    if descriptor.tags.vacancies:
        scene.vacancies = _vacancy_group(
            descriptor.tags, basis, options.radius_scale, options.show_vacancies,
        )
        atoms.add(scene.vacancies)

    root.add(cell_vectors, atoms, bonds_node)
    if descriptor.has_cell:
        scene.conventional_cell = build_cell(
            "conventional_cell", basis, descriptor.pbc,
        )
        root.add(scene.conventional_cell)
        if descriptor.primitive_cell is not None:
            scene.primitive_cell = build_cell(
                "primitive_cell", descriptor.primitive_cell, descriptor.pbc,
                dashed=True,
            )
            root.add(scene.primitive_cell)
    root.add(lattice_parameters, scene.corner_points)

    for node in (cell_vectors, lattice_parameters, scene.corner_points,
                 scene.conventional_cell, scene.primitive_cell):
        if node is not None:
            node.position = shift.copy()
    scene.corner_points.visible = False

    scene.set_bonds_visible(options.show_bonds)
    scene.set_cell_visible(options.show_cell)
    scene.set_lattice_parameters_visible(options.show_lattice_parameters)
    scene.set_legend_visible(options.show_legend)
    apply_tags(scene, descriptor.tags, options.show_tags)
    logger.debug(
        "Assembled %d atom group(s) and %d bond group(s)",
        len(scene.fills), len(scene.bond_fills),
    )
    return scene


def apply_tags(scene: AssembledScene, tags: Tags, enabled: bool) -> None:
    """Recolour and enlarge the outlines of tagged atoms.

    Every drawn copy of a tagged descriptor atom is affected.  When
    *enabled* is false the outlines revert to black at their normal
    size.

    Raises:
        IndexError: If a tag refers to an atom that was never drawn.
    """
    for category in Tags.CATEGORIES:
        colour = TAG_COLOURS[category] if enabled else 0x000000
        scale = TAG_SCALE if enabled else 1.0
        for index in tags.indices(category):
            if index not in scene.atom_groups:
                raise IndexError(f"tagged atom {index} is not in the scene")
            for group in scene.atom_groups[index]:
                outline = group.children[1]
                outline.material = outline.material.with_colour(colour)
                outline.scale = scale
