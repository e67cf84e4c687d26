from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from matviewer._constants import CAMERA_DISTANCE, CAMERA_WIDTH


@dataclass
class OrthographicCamera:
    """Orthographic camera looking down the world -z axis.

    The camera sits at ``(target_x, target_y, distance)``.  Screen right
    is world +x, screen up is world +y, and larger z values are closer
    to the viewer.  At zoom 1 the frustum spans :attr:`width` world
    units horizontally and ``width / aspect`` vertically; zooming
    shrinks both spans by the zoom factor.

    Attributes:
        viewport: Canvas size in pixels, ``(width, height)``.
        width: Horizontal extent of the frustum at zoom 1.
        zoom: Magnification factor.
        target: World-space ``(x, y)`` point at the centre of the view.
            Panning moves this point.
        distance: Distance of the camera from the ``z = 0`` plane.
    """

    viewport: tuple[int, int] = (800, 600)
    width: float = CAMERA_WIDTH
    zoom: float = 1.0
    target: np.ndarray = field(default_factory=lambda: np.zeros(2))
    distance: float = CAMERA_DISTANCE

    def __post_init__(self) -> None:
        self.viewport = self._check_viewport(self.viewport)
        if self.width <= 0:
            raise ValueError(f"width must be positive, got {self.width}")
        if self.zoom <= 0:
            raise ValueError(f"zoom must be positive, got {self.zoom}")
        self.target = np.asarray(self.target, dtype=float)
        if self.target.shape != (2,):
            raise ValueError(
                f"target must have shape (2,), got {self.target.shape}"
            )

    @staticmethod
    def _check_viewport(viewport: tuple[int, int]) -> tuple[int, int]:
        w, h = (int(v) for v in viewport)
        if w <= 0 or h <= 0:
            raise ValueError(f"viewport must be positive, got {(w, h)}")
        return w, h

    @property
    def aspect(self) -> float:
        """Canvas width divided by height."""
        return self.viewport[0] / self.viewport[1]

    @property
    def height(self) -> float:
        """Vertical extent of the frustum at zoom 1."""
        return self.width / self.aspect

    @property
    def pixels_per_unit(self) -> float:
        """Screen pixels per world unit at the current zoom."""
        return self.zoom * self.viewport[0] / self.width

    def resize(self, width: int, height: int) -> None:
        """Adopt a new canvas size, keeping the horizontal frustum span."""
        self.viewport = self._check_viewport((width, height))

    def project(
        self, points: np.ndarray, *, zoom: float | None = None,
    ) -> tuple[np.ndarray, np.ndarray]:
        """Project world points to normalised device coordinates.

        Args:
            points: World coordinates, shape ``(n, 3)`` or ``(3,)``.
            zoom: Zoom to project with.  Defaults to :attr:`zoom`.

        Returns:
            Tuple of ``(ndc, depth)``: *ndc* has shape ``(n, 2)`` with
            both axes in ``[-1, 1]`` inside the frustum, and *depth*
            has shape ``(n,)`` (larger = closer to the viewer).
        """
        z = self.zoom if zoom is None else zoom
        pts = np.atleast_2d(np.asarray(points, dtype=float))
        rel = pts[:, :2] - self.target
        ndc = np.empty((len(pts), 2))
        ndc[:, 0] = rel[:, 0] * z * 2.0 / self.width
        ndc[:, 1] = rel[:, 1] * z * 2.0 / self.height
        return ndc, pts[:, 2].copy()

    def unproject(self, ndc: np.ndarray, depth: float = 0.0) -> np.ndarray:
        """Map normalised device coordinates back to world space.

        Args:
            ndc: NDC coordinates, shape ``(n, 2)`` or ``(2,)``.
            depth: World z value for the returned points.

        Returns:
            World coordinates with the same leading shape as *ndc*
            and a trailing axis of 3.
        """
        ndc = np.asarray(ndc, dtype=float)
        flat = np.atleast_2d(ndc)
        out = np.empty((len(flat), 3))
        out[:, 0] = flat[:, 0] * self.width / (2.0 * self.zoom) + self.target[0]
        out[:, 1] = flat[:, 1] * self.height / (2.0 * self.zoom) + self.target[1]
        out[:, 2] = depth
        return out[0] if ndc.ndim == 1 else out

    def ndc_to_pixels(self, ndc: np.ndarray) -> np.ndarray:
        """Convert NDC to pixel coordinates (origin top-left, y down)."""
        ndc = np.atleast_2d(np.asarray(ndc, dtype=float))
        w, h = self.viewport
        px = np.empty_like(ndc)
        px[:, 0] = (ndc[:, 0] + 1.0) * w / 2.0
        px[:, 1] = (-ndc[:, 1] + 1.0) * h / 2.0
        return px

    def to_pixels(self, points: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        """Project world points straight to pixel coordinates.

        Returns:
            Tuple of ``(pixels, depth)`` as for :meth:`project`.
        """
        ndc, depth = self.project(points)
        return self.ndc_to_pixels(ndc), depth

    def pixels_to_ndc(self, pixels: np.ndarray) -> np.ndarray:
        """Inverse of :meth:`ndc_to_pixels`."""
        pixels = np.atleast_2d(np.asarray(pixels, dtype=float))
        w, h = self.viewport
        ndc = np.empty_like(pixels)
        ndc[:, 0] = pixels[:, 0] * 2.0 / w - 1.0
        ndc[:, 1] = 1.0 - pixels[:, 1] * 2.0 / h
        return ndc

    def pan(self, dx: float, dy: float) -> None:
        """Shift the view by a screen-space offset in pixels.

        Dragging right by *dx* pixels moves the scene right, so the
        target moves left by the equivalent world distance.
        """
        scale = 1.0 / self.pixels_per_unit
        self.target = self.target + np.array([-dx * scale, dy * scale])
