"""Element legend entries for a loaded structure."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from matviewer.construction.defaults import (
    covalent_radius,
    element_colour,
    element_symbol,
)
from matviewer.model.colour import RGB


@dataclass(frozen=True)
class LegendItem:
    """One element shown in the legend.

    Attributes:
        symbol: Chemical symbol, also the text drawn on the marker.
        colour: Element colour as a normalised (r, g, b) tuple.
        radius: Unscaled covalent radius in angstroms, which sets the
            marker size.
    """

    symbol: str
    colour: RGB
    radius: float


def build_element_legend(atomic_numbers: np.ndarray) -> list[LegendItem]:
    """One legend item per element present, sorted by chemical symbol.

    Args:
        atomic_numbers: Atomic numbers of the drawn atoms.  Repeats
            are collapsed.

    Returns:
        The legend items, empty when there are no atoms.
    """
    items = [
        LegendItem(element_symbol(z), element_colour(z), covalent_radius(z))
        for z in np.unique(np.asarray(atomic_numbers, dtype=int)).tolist()
    ]
    return sorted(items, key=lambda item: item.symbol)
