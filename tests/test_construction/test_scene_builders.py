"""Tests for the pymatgen convenience constructor."""

import numpy as np
import pytest

from matviewer.construction.scene_builders import from_pymatgen
from matviewer.model import StructureDescriptor, Tags

_has_pymatgen = False
try:
    from pymatgen.core import Lattice, Molecule, Structure

    _has_pymatgen = True
except ImportError:
    pass


@pytest.mark.skipif(not _has_pymatgen, reason="pymatgen not installed")
class TestFromPymatgen:
    def test_structure(self):
        struct = Structure(Lattice.cubic(5.0), ["Na", "Cl"], [[0, 0, 0], [0.5, 0.5, 0.5]])
        descriptor = from_pymatgen(struct)
        assert isinstance(descriptor, StructureDescriptor)
        np.testing.assert_array_equal(descriptor.atomic_numbers, [11, 17])
        np.testing.assert_allclose(descriptor.cell, np.eye(3) * 5.0)
        np.testing.assert_allclose(descriptor.scaled_positions[1], [0.5, 0.5, 0.5])
        assert descriptor.pbc == (True, True, True)

    def test_wraps_by_default(self):
        struct = Structure(Lattice.cubic(5.0), ["Na"], [[1.25, -0.25, 0.5]])
        descriptor = from_pymatgen(struct)
        np.testing.assert_allclose(descriptor.scaled_positions[0], [0.25, 0.75, 0.5])
        unwrapped = from_pymatgen(struct, wrap=False)
        np.testing.assert_allclose(unwrapped.scaled_positions[0], [1.25, -0.25, 0.5])

    def test_cell_is_copy(self):
        struct = Structure(Lattice.cubic(5.0), ["Na"], [[0.5, 0.5, 0.5]])
        descriptor = from_pymatgen(struct)
        descriptor.cell[0, 0] = 999.0
        assert struct.lattice.matrix[0, 0] == pytest.approx(5.0)

    def test_molecule(self):
        mol = Molecule(["O", "H", "H"], [[0, 0, 0], [0.757, 0.586, 0], [-0.757, 0.586, 0]])
        descriptor = from_pymatgen(mol)
        assert descriptor.cell is None
        assert descriptor.pbc == (False, False, False)
        np.testing.assert_array_equal(descriptor.atomic_numbers, [8, 1, 1])

    def test_passthrough(self):
        struct = Structure(Lattice.cubic(5.0), ["Na", "Cl"], [[0, 0, 0], [0.5, 0.5, 0.5]])
        descriptor = from_pymatgen(struct, bonds="off", tags=Tags(adsorbates=(1,)))
        assert descriptor.bonds == "off"
        assert descriptor.tags.adsorbates == (1,)

    def test_wrong_type(self):
        with pytest.raises(ValueError, match="Structure or Molecule"):
            from_pymatgen("not a structure")
