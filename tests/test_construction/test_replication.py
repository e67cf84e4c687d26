"""Tests for periodic replication."""

import numpy as np
import pytest

from matviewer.construction.periodicity import Periodicity
from matviewer.construction.replication import get_repetitions, replicate


class TestGetRepetitions:
    @pytest.mark.parametrize("length, target, expected", [
        (1.5, 15.0, 9),
        (3.0, 12.0, 3),
        (5.0, 12.0, 1),
        (20.0, 15.0, 1),
    ])
    def test_formula(self, length, target, expected):
        assert get_repetitions(np.array([length, 0.0, 0.0]), target) == expected

    def test_zero_vector(self):
        with pytest.raises(ValueError, match="zero-length"):
            get_repetitions(np.zeros(3), 15.0)


class TestReplicate:
    def test_0d_unchanged(self):
        frac = np.array([[0.1, 0.2, 0.3], [0.4, 0.5, 0.6]])
        out = replicate(frac, [1, 8], np.eye(3), Periodicity(0, ()))
        assert len(out) == 2
        assert out.n_copies == 0
        np.testing.assert_allclose(out.fractional, frac)

    def test_1d_symmetric_copies(self):
        basis = np.diag([1.5, 10.0, 10.0])
        out = replicate([[0.0, 0.0, 0.0]], [6], basis, Periodicity(1, (0,)))
        assert len(out) == 19
        np.testing.assert_allclose(
            sorted(out.cartesian[:, 0]), 1.5 * np.arange(-9, 10), atol=1e-12,
        )
        np.testing.assert_array_equal(out.source_indices, 0)

    def test_1d_first_copies_are_plus_then_minus(self):
        basis = np.diag([5.0, 10.0, 10.0])
        out = replicate([[0.0, 0.0, 0.0]], [6], basis, Periodicity(1, (0,)))
        np.testing.assert_allclose(out.fractional[1:3, 0], [1.0, -1.0])

    def test_2d_tiles_positive_quadrant(self):
        basis = np.diag([3.0, 3.0, 10.0])
        out = replicate([[0.0, 0.0, 0.0]], [6], basis, Periodicity(2, (0, 1)))
        assert len(out) == 16
        assert out.fractional[:, :2].min() == 0.0
        assert out.fractional[:, :2].max() == 3.0

    def test_2d_without_repeat(self):
        basis = np.diag([3.0, 3.0, 10.0])
        out = replicate(
            [[0.0, 0.0, 0.0]], [6], basis, Periodicity(2, (0, 1)), allow_repeat=False,
        )
        assert len(out) == 1

    def test_3d_without_copies(self):
        frac = np.zeros((1, 3))
        out = replicate(frac, [11], np.eye(3) * 5, Periodicity(3, (0, 1, 2)))
        assert len(out) == 1

    def test_3d_corner_atom_gets_seven_copies(self):
        frac = np.array([[0.0, 0.0, 0.0], [0.5, 0.5, 0.5]])
        out = replicate(
            frac, [11, 17], np.eye(3) * 5, Periodicity(3, (0, 1, 2)), show_copies=True,
        )
        assert len(out) == 9
        assert out.n_copies == 7
        np.testing.assert_array_equal(out.source_indices[2:], 0)
        corners = {tuple(f) for f in out.fractional[2:]}
        assert (1.0, 1.0, 1.0) in corners
        assert (1.0, 0.0, 0.0) in corners

    def test_3d_edge_atom_gets_three_copies(self):
        out = replicate(
            [[0.0, 0.0, 0.5]], [8], np.eye(3) * 5, Periodicity(3, (0, 1, 2)),
            show_copies=True,
        )
        assert out.n_copies == 3
        np.testing.assert_array_equal(out.source_indices, 0)
        copies = {tuple(f) for f in out.fractional[1:]}
        assert copies == {(1.0, 0.0, 0.5), (0.0, 1.0, 0.5), (1.0, 1.0, 0.5)}

    def test_3d_face_atom_gets_one_copy(self):
        frac = np.array([[0.5, 0.5, 0.0]])
        out = replicate(
            frac, [8], np.eye(3) * 5, Periodicity(3, (0, 1, 2)), show_copies=True,
        )
        np.testing.assert_allclose(out.fractional, [[0.5, 0.5, 0.0], [0.5, 0.5, 1.0]])

    def test_originals_first(self):
        frac = np.array([[0.2, 0.0, 0.0], [0.7, 0.0, 0.0]])
        basis = np.diag([2.0, 10.0, 10.0])
        out = replicate(frac, [6, 7], basis, Periodicity(1, (0,)))
        np.testing.assert_allclose(out.fractional[:2], frac)
        np.testing.assert_array_equal(out.atomic_numbers[:2], [6, 7])
        np.testing.assert_array_equal(out.atomic_numbers, [6, 7] * (len(out) // 2))
