"""Element tables: symbols, covalent radii (Cordero 2008) and Jmol colours.

All per-element tables are indexed by atomic number, so entry ``0`` is
a placeholder and ``H`` sits at index ``1``.  Elements ``1..103``
(``H`` to ``Lr``) are covered.
"""

from __future__ import annotations

import numpy as np

from matviewer._constants import MAX_ATOMIC_NUMBER
from matviewer.model.colour import RGB, hex_to_rgb

ELEMENT_SYMBOLS: tuple[str, ...] = (
    "H", "He", "Li", "Be", "B", "C", "N", "O", "F", "Ne",
    "Na", "Mg", "Al", "Si", "P", "S", "Cl", "Ar", "K", "Ca",
    "Sc", "Ti", "V", "Cr", "Mn", "Fe", "Co", "Ni", "Cu", "Zn",
    "Ga", "Ge", "As", "Se", "Br", "Kr", "Rb", "Sr", "Y", "Zr",
    "Nb", "Mo", "Tc", "Ru", "Rh", "Pd", "Ag", "Cd", "In", "Sn",
    "Sb", "Te", "I", "Xe", "Cs", "Ba", "La", "Ce", "Pr", "Nd",
    "Pm", "Sm", "Eu", "Gd", "Tb", "Dy", "Ho", "Er", "Tm", "Yb",
    "Lu", "Hf", "Ta", "W", "Re", "Os", "Ir", "Pt", "Au", "Hg",
    "Tl", "Pb", "Bi", "Po", "At", "Rn", "Fr", "Ra", "Ac", "Th",
    "Pa", "U", "Np", "Pu", "Am", "Cm", "Bk", "Cf", "Es", "Fm",
    "Md", "No", "Lr",
)
"""Chemical symbols; ``ELEMENT_SYMBOLS[z - 1]`` is element *z*."""

ATOMIC_NUMBERS: dict[str, int] = {
    symbol: z for z, symbol in enumerate(ELEMENT_SYMBOLS, start=1)
}
"""Map from chemical symbol to atomic number."""

# Radius used for elements with no tabulated value (index 0 and Z > 96).
_MISSING_RADIUS = 0.2

# Covalent radii revisited, B. Cordero et al., Dalton Trans., 2008,
# 2832-2838.  DOI:10.1039/B801115J
COVALENT_RADII: tuple[float, ...] = (
    _MISSING_RADIUS, 0.31, 0.28, 1.28, 0.96, 0.84, 0.76, 0.71, 0.66, 0.57,  # 0-9
    0.58, 1.66, 1.41, 1.21, 1.11, 1.07, 1.05, 1.02, 1.06, 2.03,  # 10-19
    1.76, 1.7, 1.6, 1.53, 1.39, 1.39, 1.32, 1.26, 1.24, 1.32,  # 20-29
    1.22, 1.22, 1.2, 1.19, 1.2, 1.2, 1.16, 2.2, 1.95, 1.9,  # 30-39
    1.75, 1.64, 1.54, 1.47, 1.46, 1.42, 1.39, 1.45, 1.44, 1.42,  # 40-49
    1.39, 1.39, 1.38, 1.39, 1.4, 2.44, 2.15, 2.07, 2.04, 2.03,  # 50-59
    2.01, 1.99, 1.98, 1.98, 1.96, 1.94, 1.92, 1.92, 1.89, 1.9,  # 60-69
    1.87, 1.87, 1.75, 1.7, 1.62, 1.51, 1.44, 1.41, 1.36, 1.36,  # 70-79
    1.32, 1.45, 1.46, 1.48, 1.4, 1.5, 1.5, 2.6, 2.21, 2.15,  # 80-89
    2.06, 2.0, 1.96, 1.9, 1.87, 1.8, 1.69, _MISSING_RADIUS, _MISSING_RADIUS, _MISSING_RADIUS,  # 90-99
    _MISSING_RADIUS, _MISSING_RADIUS, _MISSING_RADIUS, _MISSING_RADIUS,  # 100-103
)
"""Covalent radii in angstroms, indexed by atomic number."""

# Jmol colour scheme, http://jmol.sourceforge.net/jscolors/
ELEMENT_COLOURS: tuple[int, ...] = (
    0xff0000, 0xffffff, 0xd9ffff, 0xcc80ff, 0xc2ff00, 0xffb5b5, 0x909090, 0x3050f8,  # 0-7
    0xff0d0d, 0x90e050, 0xb3e3f5, 0xab5cf2, 0x8aff00, 0xbfa6a6, 0xf0c8a0, 0xff8000,  # 8-15
    0xffff30, 0x1ff01f, 0x80d1e3, 0x8f40d4, 0x3dff00, 0xe6e6e6, 0xbfc2c7, 0xa6a6ab,  # 16-23
    0x8a99c7, 0x9c7ac7, 0xe06633, 0xf090a0, 0x50d050, 0xc88033, 0x7d80b0, 0xc28f8f,  # 24-31
    0x668f8f, 0xbd80e3, 0xffa100, 0xa62929, 0x5cb8d1, 0x702eb0, 0x00ff00, 0x94ffff,  # 32-39
    0x94e0e0, 0x73c2c9, 0x54b5b5, 0x3b9e9e, 0x248f8f, 0x0a7d8c, 0x006985, 0xc0c0c0,  # 40-47
    0xffd98f, 0xa67573, 0x668080, 0x9e63b5, 0xd47a00, 0x940094, 0x429eb0, 0x57178f,  # 48-55
    0x00c900, 0x70d4ff, 0xffffc7, 0xd9ffc7, 0xc7ffc7, 0xa3ffc7, 0x8fffc7, 0x61ffc7,  # 56-63
    0x45ffc7, 0x30ffc7, 0x1fffc7, 0x00ff9c, 0x00e675, 0x00d452, 0x00bf38, 0x00ab24,  # 64-71
    0x4dc2ff, 0x4da6ff, 0x2194d6, 0x267dab, 0x266696, 0x175487, 0xd0d0e0, 0xffd123,  # 72-79
    0xb8b8d0, 0xa6544d, 0x575961, 0x9e4fb5, 0xab5c00, 0x754f45, 0x428296, 0x420066,  # 80-87
    0x007d00, 0x70abfa, 0x00baff, 0x00a1ff, 0x008fff, 0x0080ff, 0x006bff, 0x545cf2,  # 88-95
    0x785ce3, 0x8a4fe3, 0xa136d4, 0xb31fd4, 0xb31fba, 0xb30da6, 0xbd0d87, 0xc70066,  # 96-103
)
"""Packed ``0xRRGGBB`` element colours, indexed by atomic number."""


def atomic_number(symbol: str) -> int:
    """Return the atomic number for a chemical symbol.

    Raises:
        KeyError: If *symbol* is not a known element in ``H..Lr``.
    """
    try:
        return ATOMIC_NUMBERS[symbol]
    except KeyError:
        raise KeyError(f"unknown chemical symbol: {symbol!r}") from None


def element_symbol(z: int) -> str:
    """Return the chemical symbol for atomic number *z*."""
    _check_atomic_number(z)
    return ELEMENT_SYMBOLS[z - 1]


def covalent_radius(z: int) -> float:
    """Return the covalent radius (angstroms) for atomic number *z*."""
    _check_atomic_number(z)
    return COVALENT_RADII[z]


def covalent_radii(atomic_numbers: np.ndarray) -> np.ndarray:
    """Vectorised :func:`covalent_radius` over an integer array."""
    numbers = np.asarray(atomic_numbers, dtype=int)
    return np.asarray(COVALENT_RADII, dtype=float)[numbers]


def element_colour(z: int) -> RGB:
    """Return the normalised Jmol colour for atomic number *z*."""
    _check_atomic_number(z)
    return hex_to_rgb(ELEMENT_COLOURS[z])


def _check_atomic_number(z: int) -> None:
    if not 1 <= z <= MAX_ATOMIC_NUMBER:
        raise ValueError(
            f"atomic number must be in [1, {MAX_ATOMIC_NUMBER}], got {z}"
        )
