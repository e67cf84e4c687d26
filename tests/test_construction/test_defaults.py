"""Tests for the element tables."""

import numpy as np
import pytest

from matviewer.construction.defaults import (
    COVALENT_RADII,
    ELEMENT_COLOURS,
    ELEMENT_SYMBOLS,
    atomic_number,
    covalent_radii,
    covalent_radius,
    element_colour,
    element_symbol,
)


class TestTables:
    def test_table_lengths(self):
        assert len(ELEMENT_SYMBOLS) == 103
        assert len(COVALENT_RADII) == 104
        assert len(ELEMENT_COLOURS) == 104

    def test_radii_positive(self):
        assert all(r > 0 for r in COVALENT_RADII)


class TestLookups:
    @pytest.mark.parametrize("symbol, z", [("H", 1), ("C", 6), ("Na", 11), ("Lr", 103)])
    def test_atomic_number(self, symbol, z):
        assert atomic_number(symbol) == z
        assert element_symbol(z) == symbol

    def test_unknown_symbol(self):
        with pytest.raises(KeyError, match="unknown chemical symbol"):
            atomic_number("Xx")

    def test_symbol_is_case_sensitive(self):
        with pytest.raises(KeyError):
            atomic_number("na")

    def test_covalent_radius(self):
        assert covalent_radius(6) == pytest.approx(0.76)
        assert covalent_radius(1) == pytest.approx(0.31)

    def test_covalent_radii_vectorised(self):
        np.testing.assert_allclose(covalent_radii(np.array([11, 17])), [1.66, 1.02])

    def test_element_colour(self):
        assert element_colour(1) == (1.0, 1.0, 1.0)
        r, g, b = element_colour(8)
        assert r > g and r > b

    @pytest.mark.parametrize("z", [0, 104, -1])
    def test_out_of_range(self, z):
        with pytest.raises(ValueError, match="atomic number"):
            covalent_radius(z)
        with pytest.raises(ValueError, match="atomic number"):
            element_colour(z)
