"""Convenience constructors for StructureDescriptor."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from matviewer.model import StructureDescriptor, Tags

if TYPE_CHECKING:
    from pymatgen.core import Molecule, Structure


def from_pymatgen(
    structure: Structure | Molecule,
    *,
    bonds: str | np.ndarray = "auto",
    tags: Tags | None = None,
    wrap: bool = True,
) -> StructureDescriptor:
    """Create a StructureDescriptor from a pymatgen Structure or Molecule.

    A ``Structure`` keeps its lattice as the cell and its fractional
    coordinates as scaled positions; its periodicity comes from the
    lattice's ``pbc`` flags.  A ``Molecule`` becomes a non-periodic
    descriptor with cartesian positions and no cell.

    Args:
        structure: A pymatgen ``Structure`` or ``Molecule``.
        bonds: Bond specification passed through to the descriptor.
        tags: Optional highlight groups.
        wrap: If ``True`` (the default), wrap fractional coordinates
            of a ``Structure`` into ``[0, 1)``.

    Returns:
        A validated :class:`StructureDescriptor`.

    Raises:
        ImportError: If pymatgen is not installed.
        ValueError: If *structure* is disordered or of an unsupported
            type.
    """
    try:
        from pymatgen.core import Molecule, Structure
    except ImportError:
        raise ImportError(
            "pymatgen is required for from_pymatgen(). "
            "Install it with: pip install pymatgen"
        )

    if not isinstance(structure, (Structure, Molecule)):
        raise ValueError(
            f"expected a pymatgen Structure or Molecule, "
            f"got {type(structure).__name__}"
        )
    if not structure.is_ordered:
        raise ValueError("disordered structures are not supported")

    # .Z works for both Element and Species objects.
    numbers = np.array([site.specie.Z for site in structure], dtype=int)
    tags = tags if tags is not None else Tags()

    if isinstance(structure, Molecule):
        return StructureDescriptor(
            atomic_numbers=numbers,
            positions=structure.cart_coords.copy(),
            pbc=(False, False, False),
            bonds=bonds,
            tags=tags,
        )

    frac = structure.frac_coords % 1.0 if wrap else structure.frac_coords.copy()
    pbc = tuple(bool(p) for p in getattr(structure.lattice, "pbc", (True,) * 3))
    return StructureDescriptor(
        atomic_numbers=numbers,
        cell=structure.lattice.matrix.copy(),
        scaled_positions=frac,
        pbc=pbc,
        bonds=bonds,
        tags=tags,
    )
