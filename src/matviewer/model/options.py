from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

import numpy as np

from matviewer._constants import CAMERA_WIDTH, FIT_MARGIN, WRAP_TOLERANCE
from matviewer.model._util import _field_defaults, _snake_to_camel


class ViewCenter(StrEnum):
    """Named points the view can be centred on.

    Attributes:
        COP: Centre of positions, the mean of the original atoms.
        COC: Centre of cell, ``0.5 * (a + b + c)``.
    """

    COP = "COP"
    COC = "COC"


# Wire keys that do not follow the plain camelCase rule.
_KEY_OVERRIDES: dict[str, str] = {
    "show_lattice_parameters": "showParam",
}

_VECTOR_FIELDS = frozenset({"view_center", "translation"})


def _wire_key(name: str) -> str:
    return _KEY_OVERRIDES.get(name, _snake_to_camel(name))


@dataclass
class ViewerOptions:
    """Display options for a :class:`~matviewer.viewer.StructureViewer`.

    Attributes:
        radius_scale: Multiplier on covalent radii for atom spheres and
            bond detection.
        bond_scale: Multiplier on bond radius and bond cutoff.
        wrap: Fold fractional coordinates sitting on the far face of a
            periodic axis back to zero before replication.
        show_copies: Add boundary copies of atoms for 3D structures.
        allow_repeat: Repeat 2D structures along both periodic axes.
        show_cell: Draw the conventional and primitive cell wireframes.
        show_bonds: Draw bonds.
        show_tags: Highlight tagged atoms.
        show_vacancies: Draw vacancy markers.
        show_lattice_parameters: Draw the coloured cell vectors, their
            labels and angle arcs.
        show_legend: Draw the element legend in the top-left corner.
        view_center: ``"COP"``, ``"COC"`` or an explicit cartesian
            point to centre the view on.
        zoom_level: Multiplier on the fitted zoom.
        translation: Cartesian offset applied to atoms and bonds after
            centring.
        fit_margin: Margin in normalised device units kept around the
            structure when fitting it to the canvas.
        auto_fit: Fit the structure to the canvas on load and resize.
        camera_width: Horizontal extent of the camera frustum at zoom 1.
        wrap_tolerance: Cartesian distance within which a coordinate
            counts as sitting on a cell face.

    Raises:
        ValueError: If a scale, zoom, width or tolerance is not
            positive, *fit_margin* is negative, or a vector option does
            not have three components.
    """

    radius_scale: float = 1.0
    bond_scale: float = 1.0
    wrap: bool = False
    show_copies: bool = False
    allow_repeat: bool = True
    show_cell: bool = True
    show_bonds: bool = True
    show_tags: bool = False
    show_vacancies: bool = False
    show_lattice_parameters: bool = True
    show_legend: bool = True
    view_center: ViewCenter | tuple[float, float, float] = ViewCenter.COP
    zoom_level: float = 1.0
    translation: tuple[float, float, float] = (0.0, 0.0, 0.0)
    fit_margin: float = FIT_MARGIN
    auto_fit: bool = True
    camera_width: float = CAMERA_WIDTH
    wrap_tolerance: float = WRAP_TOLERANCE

    def __post_init__(self) -> None:
        for name in ("radius_scale", "bond_scale", "zoom_level",
                     "camera_width", "wrap_tolerance"):
            if getattr(self, name) <= 0:
                raise ValueError(
                    f"{name} must be positive, got {getattr(self, name)}"
                )
        if self.fit_margin < 0:
            raise ValueError(
                f"fit_margin must be non-negative, got {self.fit_margin}"
            )
        if isinstance(self.view_center, str):
            try:
                self.view_center = ViewCenter(self.view_center.upper())
            except ValueError:
                raise ValueError(
                    f"view_center must be 'COP', 'COC' or a 3-vector, "
                    f"got {self.view_center!r}"
                ) from None
        else:
            self.view_center = self._as_vector("view_center", self.view_center)
        self.translation = self._as_vector("translation", self.translation)

    @staticmethod
    def _as_vector(name: str, value: Any) -> tuple[float, float, float]:
        arr = np.asarray(value, dtype=float)
        if arr.shape != (3,):
            raise ValueError(f"{name} must have 3 components, got {arr.shape}")
        return tuple(float(x) for x in arr)  # type: ignore[return-value]

    def center_point(self, original_cartesian: np.ndarray, basis: np.ndarray) -> np.ndarray:
        """Resolve :attr:`view_center` to a cartesian point.

        Args:
            original_cartesian: Cartesian positions of the atoms before
                replication, shape ``(n_atoms, 3)``.
            basis: Cell basis vectors as rows, shape ``(3, 3)``.
        """
        if self.view_center == ViewCenter.COP:
            return np.mean(original_cartesian, axis=0)
        if self.view_center == ViewCenter.COC:
            return 0.5 * np.sum(basis, axis=0)
        return np.array(self.view_center, dtype=float)

    def to_dict(self) -> dict:
        """Serialise to a camelCase JSON-compatible dictionary.

        Fields at their default values are omitted.
        """
        d: dict = {}
        for name, default in _field_defaults(type(self)).items():
            val = getattr(self, name)
            if val == default:
                continue
            if isinstance(val, ViewCenter):
                val = val.value
            elif name in _VECTOR_FIELDS:
                val = list(val)
            d[_wire_key(name)] = val
        return d

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> ViewerOptions:
        """Deserialise from a dictionary.

        Keys may be given in camelCase (as written by :meth:`to_dict`)
        or as field names.  Missing fields use their defaults.

        Raises:
            ValueError: If *d* contains a key that names no option.
        """
        lookup: dict[str, str] = {}
        for name in _field_defaults(cls):
            lookup[name] = name
            lookup[_wire_key(name)] = name
        unknown = sorted(k for k in d if k not in lookup)
        if unknown:
            raise ValueError(f"unknown viewer options: {unknown}")
        return cls(**{lookup[k]: v for k, v in d.items()})
