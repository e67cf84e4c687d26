"""Shared constants used across the model, construction and rendering layers."""

WRAP_TOLERANCE: float = 0.05
"""Cartesian distance (angstroms) within which a fractional coordinate
counts as sitting on a cell boundary."""

TARGET_SIZE_1D: float = 15.0
"""Approximate cartesian extent reached when repeating a 1D structure."""

TARGET_SIZE_2D: float = 12.0
"""Approximate cartesian extent reached along each axis of a 2D structure."""

BOND_TOLERANCE: float = 1.1
"""Multiplier on the summed covalent radii used as the bond cutoff."""

BOND_RADIUS: float = 0.08
"""Radius of a bond cylinder before ``bond_scale`` is applied."""

ATOM_OUTLINE_ADDITION: float = 0.03
"""Extra radius of the black back-face shell drawn around each atom."""

BOND_OUTLINE_ADDITION: float = 0.02
"""Extra radius of the black back-face shell drawn around each bond."""

TAG_SCALE: float = 1.15
"""Scale applied to an atom outline when its tag highlight is shown."""

VACANCY_OPACITY: float = 0.25
"""Opacity of vacancy markers."""

CAMERA_WIDTH: float = 10.0
"""Default horizontal extent of the orthographic camera frustum."""

CAMERA_DISTANCE: float = 20.0
"""Distance of the camera from the origin along +z."""

FIT_MARGIN: float = 0.5
"""Default screen-space margin, in normalised device units, used when
fitting the structure to the canvas."""

MAX_ATOMIC_NUMBER: int = 103
"""Largest atomic number covered by the element tables."""
