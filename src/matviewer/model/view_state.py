from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from scipy.spatial.transform import Rotation

from matviewer.model.camera import OrthographicCamera


@dataclass
class ViewerState:
    """Per-load state of a structure viewer.

    Rebuilt from scratch by every successful load and discarded when
    the viewer is cleared.

    Attributes:
        dimensionality: Number of periodic axes (0 to 3).
        periodic_axes: Indices of the periodic cell axes, in the order
            used for replication and orientation.
        basis: Cell basis vectors as rows, shape ``(3, 3)``.  Read-only.
        rotation: Rotation of the scene root.
        centre: Cartesian point moved to the origin of the view.
        translation: Extra offset applied to atoms and bonds.
        camera: The orthographic camera.
        fitted_zoom: Zoom chosen by the last fit, before the user's
            zoom level was applied.
    """

    dimensionality: int
    periodic_axes: tuple[int, ...]
    basis: np.ndarray
    rotation: Rotation = field(default_factory=Rotation.identity)
    centre: np.ndarray = field(default_factory=lambda: np.zeros(3))
    translation: np.ndarray = field(default_factory=lambda: np.zeros(3))
    camera: OrthographicCamera = field(default_factory=OrthographicCamera)
    fitted_zoom: float = 1.0

    def __post_init__(self) -> None:
        if not 0 <= self.dimensionality <= 3:
            raise ValueError(
                f"dimensionality must be in [0, 3], got {self.dimensionality}"
            )
        if len(self.periodic_axes) != self.dimensionality:
            raise ValueError(
                f"expected {self.dimensionality} periodic axes, "
                f"got {self.periodic_axes}"
            )
        basis = np.array(self.basis, dtype=float)
        if basis.shape != (3, 3):
            raise ValueError(f"basis must have shape (3, 3), got {basis.shape}")
        basis.flags.writeable = False
        self.basis = basis
        self.centre = np.asarray(self.centre, dtype=float)
        self.translation = np.asarray(self.translation, dtype=float)

    @property
    def zoom(self) -> float:
        """Current camera zoom."""
        return self.camera.zoom

    @zoom.setter
    def zoom(self, value: float) -> None:
        if value <= 0:
            raise ValueError(f"zoom must be positive, got {value}")
        self.camera.zoom = float(value)
