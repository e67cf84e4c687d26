"""Tests for covalent-radius bond detection."""

import numpy as np
import pytest

from matviewer.construction import bonds as bonds_module
from matviewer.construction.bonds import bond_cutoff, compute_bonds
from matviewer.construction.defaults import covalent_radius


class TestBondCutoff:
    def test_formula(self):
        assert bond_cutoff(0.76, 0.31) == pytest.approx(1.1 * 1.07)

    def test_scales(self):
        assert bond_cutoff(1.0, 1.0, radius_scale=0.5, bond_scale=2.0) == pytest.approx(2.2)

    def test_vectorised(self):
        out = bond_cutoff(np.array([1.0, 0.5]), np.array([1.0, 0.5]))
        np.testing.assert_allclose(out, [2.2, 1.1])


class TestComputeBonds:
    def test_off(self):
        assert compute_bonds(np.zeros((2, 3)), [6, 6], "off") == []

    def test_auto_water(self):
        positions = np.array([[0.0, 0.0, 0.0], [0.757, 0.586, 0.0], [-0.757, 0.586, 0.0]])
        result = compute_bonds(positions, [8, 1, 1])
        assert [b.pair for b in result] == [(0, 1), (0, 2)]
        assert result[0].length == pytest.approx(0.9573, abs=1e-4)

    def test_threshold_is_inclusive(self):
        cutoff = bond_cutoff(covalent_radius(6), covalent_radius(6))
        positions = np.array([[0.0, 0.0, 0.0], [cutoff, 0.0, 0.0]])
        assert len(compute_bonds(positions, [6, 6])) == 1

    def test_just_beyond_threshold(self):
        cutoff = bond_cutoff(covalent_radius(6), covalent_radius(6))
        positions = np.array([[0.0, 0.0, 0.0], [cutoff * (1 + 1e-9), 0.0, 0.0]])
        assert compute_bonds(positions, [6, 6]) == []

    def test_radius_scale_shrinks_cutoff(self):
        positions = np.array([[0.0, 0.0, 0.0], [1.5, 0.0, 0.0]])
        assert len(compute_bonds(positions, [6, 6])) == 1
        assert compute_bonds(positions, [6, 6], radius_scale=0.5) == []

    def test_symmetric_and_permutation_invariant(self):
        rng = np.random.default_rng(3)
        positions = rng.random((12, 3)) * 4.0
        numbers = rng.choice([1, 6, 8], size=12)
        pairs = {b.pair for b in compute_bonds(positions, numbers)}
        assert all(i < j for i, j in pairs)

        perm = rng.permutation(12)
        permuted = {
            tuple(sorted((perm[b.index_a], perm[b.index_b])))
            for b in compute_bonds(positions[perm], numbers[perm])
        }
        assert permuted == pairs

    def test_explicit_pairs_kept_in_order(self):
        positions = np.array([[0.0, 0.0, 0.0], [10.0, 0.0, 0.0], [20.0, 0.0, 0.0]])
        result = compute_bonds(positions, [6, 6, 6], np.array([[2, 1], [0, 2]]))
        assert [b.pair for b in result] == [(2, 1), (0, 2)]
        np.testing.assert_allclose(result[0].start, [20.0, 0.0, 0.0])

    def test_explicit_pair_out_of_range(self):
        with pytest.raises(IndexError, match=r"bond \(0, 3\)"):
            compute_bonds(np.zeros((2, 3)), [6, 6], np.array([[0, 3]]))

    def test_unknown_mode(self):
        with pytest.raises(ValueError, match="Invalid value for 'bonds'"):
            compute_bonds(np.zeros((2, 3)), [6, 6], "sometimes")

    def test_single_atom(self):
        assert compute_bonds(np.zeros((1, 3)), [6]) == []

    def test_kdtree_path_matches_dense(self, monkeypatch):
        rng = np.random.default_rng(11)
        positions = rng.random((60, 3)) * 6.0
        numbers = rng.choice([1, 6, 7, 8], size=60)
        dense = [b.pair for b in compute_bonds(positions, numbers)]
        monkeypatch.setattr(bonds_module, "KDTREE_THRESHOLD", 10)
        tree = [b.pair for b in compute_bonds(positions, numbers)]
        assert tree == dense
        assert len(dense) > 0
