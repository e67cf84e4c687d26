"""Tests for element legend entries."""

import numpy as np

from matviewer.construction.legend import LegendItem, build_element_legend
from matviewer.model.colour import hex_to_rgb


class TestBuildElementLegend:
    def test_one_item_per_element(self):
        items = build_element_legend(np.array([8, 1, 1, 8, 1]))
        assert [item.symbol for item in items] == ["H", "O"]

    def test_sorted_by_symbol_not_number(self):
        # Cl (17) sorts before Na (11), and C (6) before Ca (20).
        items = build_element_legend([11, 17, 20, 6])
        assert [item.symbol for item in items] == ["C", "Ca", "Cl", "Na"]

    def test_colour_and_radius(self):
        (item,) = build_element_legend([6, 6])
        assert item == LegendItem("C", hex_to_rgb(0x909090), 0.76)

    def test_empty(self):
        assert build_element_legend(np.zeros(0, dtype=int)) == []
