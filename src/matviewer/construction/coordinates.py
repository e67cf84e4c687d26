"""Conversions between fractional and cartesian coordinates.

Basis vectors are stored as the rows of a ``(3, 3)`` matrix, so a
fractional row vector ``f`` maps to cartesian ``f @ basis``.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from matviewer._constants import WRAP_TOLERANCE

_DET_TOLERANCE = 1e-12


class DegenerateCellError(ValueError):
    """Raised when a cell has no inverse."""


def to_cartesian(frac: np.ndarray, basis: np.ndarray) -> np.ndarray:
    """Convert fractional coordinates to cartesian.

    Args:
        frac: A single vector of shape ``(3,)`` or an array of shape
            ``(n, 3)``.
        basis: Cell basis vectors as rows.

    Returns:
        Cartesian coordinates with the same shape as *frac*.
    """
    return np.asarray(frac, dtype=float) @ np.asarray(basis, dtype=float)


def to_fractional(cart: np.ndarray, basis: np.ndarray) -> np.ndarray:
    """Convert cartesian coordinates to fractional.

    Args:
        cart: A single vector of shape ``(3,)`` or an array of shape
            ``(n, 3)``.
        basis: Cell basis vectors as rows.

    Returns:
        Fractional coordinates with the same shape as *cart*.

    Raises:
        DegenerateCellError: If *basis* is singular or its inverse is
            not finite.
    """
    basis = np.asarray(basis, dtype=float)
    if abs(np.linalg.det(basis)) < _DET_TOLERANCE:
        raise DegenerateCellError("degenerate cell")
    try:
        inverse = np.linalg.inv(basis)
    except np.linalg.LinAlgError:
        raise DegenerateCellError("degenerate cell") from None
    if not np.all(np.isfinite(inverse)):
        raise DegenerateCellError("degenerate cell")
    return np.asarray(cart, dtype=float) @ inverse


def almost_equal(
    target: float | np.ndarray,
    coordinate: float | np.ndarray,
    basis_vector: np.ndarray,
    tolerance: float = WRAP_TOLERANCE,
) -> bool | np.ndarray:
    """Test whether a fractional coordinate lies close to *target*.

    Closeness is measured in cartesian length along *basis_vector*, so
    the same tolerance means the same physical distance on short and
    long axes.  Vectorises over *coordinate*.
    """
    length = np.linalg.norm(basis_vector)
    return np.abs(np.asarray(coordinate) - target) * length < tolerance


def wrap_fractional(
    frac: np.ndarray,
    basis: np.ndarray,
    pbc: Sequence[bool],
    tolerance: float = WRAP_TOLERANCE,
) -> np.ndarray:
    """Fold coordinates sitting on the far face of the cell back to zero.

    On each periodic axis a coordinate within *tolerance* (cartesian)
    of ``1.0`` has ``1.0`` subtracted.  Non-periodic axes are left
    alone.

    Returns:
        A new ``(n, 3)`` array; *frac* is not modified.
    """
    wrapped = np.array(frac, dtype=float, copy=True)
    basis = np.asarray(basis, dtype=float)
    for axis in range(3):
        if not pbc[axis]:
            continue
        near_one = almost_equal(1.0, wrapped[:, axis], basis[axis], tolerance)
        wrapped[near_one, axis] -= 1.0
    return wrapped
