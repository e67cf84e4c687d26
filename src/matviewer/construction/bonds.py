"""Bond detection from covalent radii."""

from __future__ import annotations

import numpy as np
from scipy.spatial import cKDTree

from matviewer._constants import BOND_TOLERANCE
from matviewer.construction.defaults import covalent_radii
from matviewer.model import Bond
from matviewer.model.descriptor import BONDS_GUIDANCE

KDTREE_THRESHOLD = 2000
"""Atom count above which candidate pairs come from a k-d tree."""


def bond_cutoff(
    r_a: float | np.ndarray,
    r_b: float | np.ndarray,
    radius_scale: float = 1.0,
    bond_scale: float = 1.0,
) -> float | np.ndarray:
    """Longest distance at which two atoms count as bonded.

    Evaluates ``bond_scale * 1.1 * (radius_scale * r_a + radius_scale * r_b)``
    in exactly that order, so that distances sitting on the threshold
    compare identically however the predicate is reached.
    """
    return bond_scale * BOND_TOLERANCE * (radius_scale * r_a + radius_scale * r_b)


def compute_bonds(
    positions: np.ndarray,
    atomic_numbers: np.ndarray,
    bonds: str | np.ndarray = "auto",
    *,
    radius_scale: float = 1.0,
    bond_scale: float = 1.0,
) -> list[Bond]:
    """Compute the bonds to draw between the (replicated) atoms.

    Args:
        positions: Cartesian coordinates, shape ``(n_atoms, 3)``.
        atomic_numbers: Atomic numbers, shape ``(n_atoms,)``.
        bonds: ``"auto"`` to bond every pair of atoms closer than
            :func:`bond_cutoff`, ``"off"`` for no bonds, or an
            ``(n_bonds, 2)`` array of index pairs to use as given.
        radius_scale: Multiplier on the covalent radii.
        bond_scale: Multiplier on the bond cutoff.

    Returns:
        Bonds in lexicographic ``(i, j)`` order with ``i < j`` for
        ``"auto"``, or in the given order for explicit pairs.

    Raises:
        IndexError: If an explicit pair refers to a missing atom.
        ValueError: If *bonds* is not one of the accepted forms.
    """
    positions = np.asarray(positions, dtype=float).reshape(-1, 3)
    atomic_numbers = np.asarray(atomic_numbers, dtype=int)
    if len(positions) != len(atomic_numbers):
        raise ValueError(
            f"atomic_numbers has {len(atomic_numbers)} entries but "
            f"positions has {len(positions)} rows"
        )

    if isinstance(bonds, str):
        if bonds == "off":
            return []
        if bonds == "auto":
            pairs = _detect_pairs(positions, atomic_numbers, radius_scale, bond_scale)
        else:
            raise ValueError(BONDS_GUIDANCE)
    else:
        pairs = _explicit_pairs(bonds, len(positions))

    return [Bond(i, j, positions[i], positions[j]) for i, j in pairs]


def _explicit_pairs(bonds: np.ndarray, n_atoms: int) -> list[tuple[int, int]]:
    pairs = np.asarray(bonds)
    if pairs.size == 0:
        return []
    if pairs.ndim != 2 or pairs.shape[1] != 2:
        raise ValueError(BONDS_GUIDANCE)
    out = []
    for i, j in pairs.tolist():
        if not (0 <= i < n_atoms and 0 <= j < n_atoms):
            raise IndexError(
                f"bond ({i}, {j}) refers to an atom outside 0..{n_atoms - 1}"
            )
        out.append((int(i), int(j)))
    return out


def _detect_pairs(
    positions: np.ndarray,
    atomic_numbers: np.ndarray,
    radius_scale: float,
    bond_scale: float,
) -> list[tuple[int, int]]:
    n_atoms = len(positions)
    if n_atoms < 2:
        return []
    radii = covalent_radii(atomic_numbers)

    if n_atoms > KDTREE_THRESHOLD:
        r_max = radii.max()
        # Padded search radius; the exact predicate is applied below.
        max_cutoff = bond_cutoff(r_max, r_max, radius_scale, bond_scale) * (1 + 1e-9)
        candidates = cKDTree(positions).query_pairs(max_cutoff, output_type="ndarray")
        if len(candidates) == 0:
            return []
        ii, jj = candidates[:, 0], candidates[:, 1]
        dist = np.linalg.norm(positions[ii] - positions[jj], axis=1)
        ok = dist <= bond_cutoff(radii[ii], radii[jj], radius_scale, bond_scale)
        return sorted(zip(ii[ok].tolist(), jj[ok].tolist()))

    # Vectorised pairwise distances, upper triangle only.
    diff = positions[:, np.newaxis, :] - positions[np.newaxis, :, :]
    dist_matrix = np.linalg.norm(diff, axis=2)
    cutoff = bond_cutoff(
        radii[:, np.newaxis], radii[np.newaxis, :], radius_scale, bond_scale,
    )
    upper = np.triu(np.ones((n_atoms, n_atoms), dtype=bool), k=1)
    ii, jj = np.nonzero(upper & (dist_matrix <= cutoff))
    return list(zip(ii.tolist(), jj.tolist()))
