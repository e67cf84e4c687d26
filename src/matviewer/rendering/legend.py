"""Element legend drawing.

Draws a row of element markers across the top-left corner of the
canvas: one circle per element in the element's colour, sized by its
covalent radius, with the chemical symbol written on it.
"""

from __future__ import annotations

from collections.abc import Sequence

from matplotlib.axes import Axes

from matviewer.construction.legend import LegendItem
from matviewer.model.colour import RGB, luminance

_PIXELS_PER_ANGSTROM = 50.0  # marker diameter per angstrom of radius
_MARGIN = 8.0  # pixels between the canvas edge and the first marker
_GAP = 4.0  # pixels between neighbouring markers
_FONT_SIZE = 8.0
_EDGE_WIDTH = 0.75  # points
_ZORDER = 10


def _symbol_colour(rgb: RGB) -> RGB:
    """Black on light markers, white on dark ones."""
    return (0.0, 0.0, 0.0) if luminance(rgb) > 0.5 else (1.0, 1.0, 1.0)


def _legend_layout(items: Sequence[LegendItem]) -> list[tuple[float, float, float]]:
    """Centre x, centre y and diameter in pixels of each marker.

    Markers sit left to right on a common centre line, with the
    largest one touching the top margin.
    """
    diameters = [_PIXELS_PER_ANGSTROM * item.radius for item in items]
    cy = _MARGIN + max(diameters, default=0.0) / 2.0
    layout = []
    x = _MARGIN
    for d in diameters:
        layout.append((x + d / 2.0, cy, d))
        x += d + _GAP
    return layout


def _draw_legend_widget(
    ax: Axes,
    items: Sequence[LegendItem],
    *,
    px_per_pt: float,
) -> None:
    """Draw the element legend on *ax*.

    *ax* must span the canvas in pixels with the origin at the top
    left, as set up by :func:`~matviewer.rendering.painter._draw_scene`.
    Markers are ``Line2D`` artists and symbols are texts, so both are
    removed by the next call to ``_draw_scene``.

    Args:
        ax: A matplotlib ``Axes`` to draw into.
        items: Legend entries in display order.
        px_per_pt: Canvas pixels per typographic point.
    """
    for item, (x, y, diameter) in zip(items, _legend_layout(items)):
        ax.plot(
            x, y,
            marker="o",
            markersize=diameter / px_per_pt,
            markerfacecolor=item.colour,
            markeredgecolor=(0.0, 0.0, 0.0),
            markeredgewidth=_EDGE_WIDTH,
            linestyle="None",
            zorder=_ZORDER,
        )
        ax.text(
            x, y, item.symbol,
            ha="center", va="center",
            fontsize=_FONT_SIZE,
            color=_symbol_colour(item.colour),
            zorder=_ZORDER + 1,
        )
