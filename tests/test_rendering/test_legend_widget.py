"""Tests for element legend layout and drawing."""

import matplotlib.pyplot as plt
import pytest

from matviewer.construction.legend import LegendItem
from matviewer.rendering.legend import (
    _GAP,
    _MARGIN,
    _PIXELS_PER_ANGSTROM,
    _draw_legend_widget,
    _legend_layout,
    _symbol_colour,
)

_SMALL = LegendItem("H", (1.0, 1.0, 1.0), 0.31)
_LARGE = LegendItem("Na", (0.67, 0.36, 0.95), 1.66)


class TestLegendLayout:
    def test_row_from_top_left(self):
        (x0, y0, d0), (x1, y1, d1) = _legend_layout([_SMALL, _LARGE])
        assert d0 == pytest.approx(_PIXELS_PER_ANGSTROM * 0.31)
        assert d1 == pytest.approx(_PIXELS_PER_ANGSTROM * 1.66)
        assert x0 == pytest.approx(_MARGIN + d0 / 2)
        assert x1 == pytest.approx(_MARGIN + d0 + _GAP + d1 / 2)
        # Shared centre line; the largest marker touches the top margin.
        assert y0 == y1 == pytest.approx(_MARGIN + d1 / 2)

    def test_empty(self):
        assert _legend_layout([]) == []


class TestSymbolColour:
    def test_dark_text_on_light_marker(self):
        assert _symbol_colour((1.0, 1.0, 1.0)) == (0.0, 0.0, 0.0)

    def test_light_text_on_dark_marker(self):
        assert _symbol_colour((0.1, 0.1, 0.4)) == (1.0, 1.0, 1.0)


class TestDrawLegendWidget:
    def test_markers_and_symbols(self):
        fig, ax = plt.subplots(dpi=72)
        try:
            _draw_legend_widget(ax, [_SMALL, _LARGE], px_per_pt=1.0)
            assert len(ax.lines) == 2
            assert [t.get_text() for t in ax.texts] == ["H", "Na"]
            assert ax.lines[1].get_markersize() == pytest.approx(83.0)
        finally:
            plt.close(fig)

    def test_markersize_in_points(self):
        fig, ax = plt.subplots()
        try:
            _draw_legend_widget(ax, [_LARGE], px_per_pt=2.0)
            assert ax.lines[0].get_markersize() == pytest.approx(41.5)
        finally:
            plt.close(fig)
