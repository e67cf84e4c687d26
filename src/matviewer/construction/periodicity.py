from __future__ import annotations

from collections.abc import Sequence
from typing import NamedTuple


class Periodicity(NamedTuple):
    """Dimensionality of a structure and its periodic axes.

    Attributes:
        dimensionality: Number of periodic axes, 0 to 3.
        periodic_axes: Cell axis indices in orientation order.  For a
            2D structure the pair is ``(d, (d + 1) % 3)`` so that the
            two axes are cyclically adjacent.
    """

    dimensionality: int
    periodic_axes: tuple[int, ...]


def classify_periodicity(pbc: Sequence[bool]) -> Periodicity:
    """Classify periodic boundary flags.

    Examples:
        >>> classify_periodicity([True, False, True])
        Periodicity(dimensionality=2, periodic_axes=(2, 0))

    Raises:
        ValueError: If *pbc* does not have exactly three entries.
    """
    flags = [bool(p) for p in pbc]
    if len(flags) != 3:
        raise ValueError(f"pbc must have 3 entries, got {len(flags)}")

    n_periodic = sum(flags)
    if n_periodic == 3:
        return Periodicity(3, (0, 1, 2))
    if n_periodic == 0:
        return Periodicity(0, ())
    if n_periodic == 1:
        return Periodicity(1, (flags.index(True),))
    for dim in range(3):
        if flags[dim] and flags[(dim + 1) % 3] and not flags[(dim + 2) % 3]:
            return Periodicity(2, (dim, (dim + 1) % 3))
    raise AssertionError("unreachable")  # pragma: no cover
