"""Periodic replication of the atoms of a structure.

The original atoms always occupy the first ``n`` entries of the
replicated set, in input order, so indices from the descriptor (tags,
explicit bonds) keep addressing the same atoms.  Copies follow.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import combinations

import numpy as np

from matviewer._constants import TARGET_SIZE_1D, TARGET_SIZE_2D, WRAP_TOLERANCE
from matviewer.construction.coordinates import almost_equal, to_cartesian
from matviewer.construction.periodicity import Periodicity

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ReplicatedAtoms:
    """Parallel arrays describing the atoms to draw.

    Attributes:
        fractional: Fractional coordinates, shape ``(n, 3)``.
        cartesian: Cartesian coordinates, shape ``(n, 3)``.
        atomic_numbers: Atomic numbers, shape ``(n,)``.
        source_indices: Index of the descriptor atom each entry copies,
            shape ``(n,)``.
    """

    fractional: np.ndarray
    cartesian: np.ndarray
    atomic_numbers: np.ndarray
    source_indices: np.ndarray

    def __post_init__(self) -> None:
        n = len(self.fractional)
        for name in ("cartesian", "atomic_numbers", "source_indices"):
            if len(getattr(self, name)) != n:
                raise ValueError(
                    f"{name} has {len(getattr(self, name))} entries, expected {n}"
                )

    def __len__(self) -> int:
        return len(self.fractional)

    @property
    def n_copies(self) -> int:
        """Number of entries that are copies rather than originals."""
        return int(np.count_nonzero(self.source_indices != np.arange(len(self))))


def get_repetitions(vector: np.ndarray, target: float) -> int:
    """Number of repetitions needed to span roughly *target* along *vector*.

    Returns ``max(floor(target / |vector|) - 1, 1)``.

    Raises:
        ValueError: If *vector* has zero length.
    """
    length = float(np.linalg.norm(vector))
    if length == 0.0:
        raise ValueError("cannot repeat along a zero-length vector")
    return max(int(np.floor(target / length)) - 1, 1)


def _shifts_1d(basis: np.ndarray, axis: int) -> list[np.ndarray]:
    shifts = []
    for i in range(1, get_repetitions(basis[axis], TARGET_SIZE_1D) + 1):
        for sign in (1, -1):
            shift = np.zeros(3)
            shift[axis] = sign * i
            shifts.append(shift)
    return shifts


def _shifts_2d(
    basis: np.ndarray, axes: tuple[int, ...], allow_repeat: bool,
) -> list[np.ndarray]:
    d1, d2 = axes
    if allow_repeat:
        width = get_repetitions(basis[d1], TARGET_SIZE_2D)
        height = get_repetitions(basis[d2], TARGET_SIZE_2D)
    else:
        width = height = 0
    shifts = []
    for i in range(width + 1):
        for j in range(height + 1):
            if i == 0 and j == 0:
                continue
            shift = np.zeros(3)
            shift[d1] = i
            shift[d2] = j
            shifts.append(shift)
    return shifts


def _boundary_copies(
    fractional: np.ndarray, basis: np.ndarray, tolerance: float,
) -> tuple[np.ndarray, np.ndarray]:
    """Copies of atoms on the zero faces of a 3D cell, shifted to the far faces."""
    positions: list[np.ndarray] = []
    sources: list[int] = []
    for index, frac in enumerate(fractional):
        on_face = [
            axis for axis in range(3)
            if almost_equal(0.0, frac[axis], basis[axis], tolerance)
        ]
        for size in range(1, len(on_face) + 1):
            for subset in combinations(on_face, size):
                shifted = frac.copy()
                shifted[list(subset)] += 1.0
                positions.append(shifted)
                sources.append(index)
    return np.array(positions).reshape(-1, 3), np.array(sources, dtype=int)


def replicate(
    fractional: np.ndarray,
    atomic_numbers: np.ndarray,
    basis: np.ndarray,
    periodicity: Periodicity,
    *,
    show_copies: bool = False,
    allow_repeat: bool = True,
    wrap_tolerance: float = WRAP_TOLERANCE,
) -> ReplicatedAtoms:
    """Expand the atom list to convey the periodicity of the structure.

    - 0D structures are returned unchanged.
    - 1D structures are repeated ``±1 .. ±m`` times along the periodic
      axis, with ``m`` chosen so the chain spans about 15 angstroms.
    - 2D structures are tiled over ``[0, w] x [0, h]`` cells when
      *allow_repeat* is set, with ``w`` and ``h`` chosen so the slab
      spans about 12 angstroms per axis.
    - 3D structures gain, when *show_copies* is set, one copy of each
      atom on a zero face for every non-empty combination of the faces
      it sits on, shifted to the opposite faces.

    Args:
        fractional: Fractional coordinates of the original atoms.
        atomic_numbers: Atomic numbers of the original atoms.
        basis: Cell basis vectors as rows.
        periodicity: Classification of the structure's periodicity.
        show_copies: Add boundary copies for 3D structures.
        allow_repeat: Tile 2D structures.
        wrap_tolerance: Cartesian distance within which an atom counts
            as sitting on a cell face.

    Returns:
        The replicated atoms, originals first.
    """
    fractional = np.asarray(fractional, dtype=float).reshape(-1, 3)
    atomic_numbers = np.asarray(atomic_numbers, dtype=int)
    basis = np.asarray(basis, dtype=float)
    n = len(fractional)
    originals = np.arange(n)

    dim = periodicity.dimensionality
    if dim == 1:
        shifts = _shifts_1d(basis, periodicity.periodic_axes[0])
    elif dim == 2:
        shifts = _shifts_2d(basis, periodicity.periodic_axes, allow_repeat)
    else:
        shifts = []

    if shifts:
        copies = np.concatenate([fractional + shift for shift in shifts])
        copy_sources = np.tile(originals, len(shifts))
    elif dim == 3 and show_copies:
        copies, copy_sources = _boundary_copies(fractional, basis, wrap_tolerance)
    else:
        copies, copy_sources = np.zeros((0, 3)), np.zeros(0, dtype=int)

    all_frac = np.concatenate([fractional, copies])
    sources = np.concatenate([originals, copy_sources]).astype(int)
    logger.debug(
        "Replicated %d atoms into %d (%dD)", n, len(all_frac), dim,
    )
    return ReplicatedAtoms(
        fractional=all_frac,
        cartesian=to_cartesian(all_frac, basis),
        atomic_numbers=atomic_numbers[sources],
        source_indices=sources,
    )
