from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, eq=False)
class Bond:
    """A bond between two atoms of the replicated atom set.

    Attributes:
        index_a: Index of the first atom.
        index_b: Index of the second atom.
        start: Cartesian position of atom *a*.
        end: Cartesian position of atom *b*.
    """

    index_a: int
    index_b: int
    start: np.ndarray
    end: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", np.asarray(self.start, dtype=float))
        object.__setattr__(self, "end", np.asarray(self.end, dtype=float))

    @property
    def length(self) -> float:
        """Distance between the two atoms."""
        return float(np.linalg.norm(self.end - self.start))

    @property
    def pair(self) -> tuple[int, int]:
        """The ``(index_a, index_b)`` pair."""
        return (self.index_a, self.index_b)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bond):
            return NotImplemented
        return self.pair == other.pair

    def __hash__(self) -> int:
        return hash(self.pair)
