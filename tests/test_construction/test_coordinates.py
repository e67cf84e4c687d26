"""Tests for fractional/cartesian conversion and wrapping."""

import numpy as np
import pytest

from matviewer.construction.coordinates import (
    DegenerateCellError,
    almost_equal,
    to_cartesian,
    to_fractional,
    wrap_fractional,
)

TRICLINIC = np.array([
    [4.0, 0.0, 0.0],
    [1.2, 3.5, 0.0],
    [0.7, -0.4, 5.1],
])


class TestConversion:
    def test_to_cartesian_rows(self):
        np.testing.assert_allclose(
            to_cartesian(np.array([0.5, 0.0, 1.0]), TRICLINIC), [2.7, -0.4, 5.1],
        )

    def test_round_trip(self):
        rng = np.random.default_rng(7)
        frac = rng.random((20, 3))
        np.testing.assert_allclose(
            to_fractional(to_cartesian(frac, TRICLINIC), TRICLINIC), frac, atol=1e-12,
        )

    def test_single_vector_shape(self):
        assert to_fractional(np.array([1.0, 2.0, 3.0]), np.eye(3)).shape == (3,)

    def test_singular_cell_raises(self):
        flat = np.array([[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 0.0]])
        with pytest.raises(DegenerateCellError, match="degenerate cell"):
            to_fractional(np.zeros((1, 3)), flat)

    def test_degenerate_is_value_error(self):
        assert issubclass(DegenerateCellError, ValueError)


class TestAlmostEqual:
    def test_tolerance_is_cartesian(self):
        long_axis = np.array([100.0, 0.0, 0.0])
        short_axis = np.array([1.0, 0.0, 0.0])
        # 0.001 fractional is 0.1 angstrom on the long axis.
        assert not almost_equal(0.0, 0.001, long_axis, 0.05)
        assert almost_equal(0.0, 0.001, short_axis, 0.05)

    def test_vectorised(self):
        result = almost_equal(1.0, np.array([0.999, 0.5]), np.array([10.0, 0.0, 0.0]))
        np.testing.assert_array_equal(result, [True, False])


class TestWrapFractional:
    BASIS = np.eye(3) * 5.0

    def test_folds_far_face(self):
        frac = np.array([[0.999, 0.5, 0.999]])
        wrapped = wrap_fractional(frac, self.BASIS, (True, True, False))
        np.testing.assert_allclose(wrapped, [[-0.001, 0.5, 0.999]], atol=1e-12)

    def test_does_not_modify_input(self):
        frac = np.array([[1.0, 0.0, 0.0]])
        wrap_fractional(frac, self.BASIS, (True, True, True))
        assert frac[0, 0] == 1.0

    def test_idempotent(self):
        frac = np.array([[1.0, 0.999, 0.3], [0.0, 0.5, 1.0]])
        once = wrap_fractional(frac, self.BASIS, (True, True, True))
        twice = wrap_fractional(once, self.BASIS, (True, True, True))
        np.testing.assert_allclose(once, twice)
