from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, ClassVar

import numpy as np

from matviewer._constants import MAX_ATOMIC_NUMBER

logger = logging.getLogger(__name__)

BONDS_GUIDANCE = (
    "Invalid value for 'bonds'. Use either 'auto', 'off' or provide a "
    "list of index pairs. If not defined, 'auto' is assumed."
)

# Wire keys accepted by StructureDescriptor.from_dict, mapped to fields.
_KEY_ALIASES: dict[str, str] = {
    "cell": "cell",
    "pbc": "pbc",
    "periodicity": "pbc",
    "scaledPositions": "scaled_positions",
    "scaled_positions": "scaled_positions",
    "positions": "positions",
    "atomicNumbers": "atomic_numbers",
    "atomic_numbers": "atomic_numbers",
    "chemicalSymbols": "chemical_symbols",
    "chemical_symbols": "chemical_symbols",
    "primitiveCell": "primitive_cell",
    "primitive_cell": "primitive_cell",
    "bonds": "bonds",
    "tags": "tags",
}


class DescriptorError(ValueError):
    """Raised when a structure descriptor fails validation."""


def _as_float_array(value: Any, name: str, expected: str) -> np.ndarray:
    try:
        return np.asarray(value, dtype=float)
    except (ValueError, TypeError):
        raise DescriptorError(
            f"{name} must be a numeric array of shape {expected}"
        ) from None


def _as_matrix(value: Any, name: str) -> np.ndarray:
    arr = _as_float_array(value, name, "(3, 3)")
    if arr.shape != (3, 3):
        raise DescriptorError(f"{name} must have shape (3, 3), got {arr.shape}")
    return arr


def _as_positions(value: Any, name: str) -> np.ndarray:
    arr = _as_float_array(value, name, "(n_atoms, 3)")
    if arr.size == 0:
        raise DescriptorError("no atom positions given")
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise DescriptorError(
            f"{name} must have shape (n_atoms, 3), got {arr.shape}"
        )
    return arr


def _as_index(value: Any, name: str) -> int:
    """Convert an integral number to ``int``, rejecting strings and bools."""
    if isinstance(value, (str, bytes, bool)) or not isinstance(
        value, (int, float, np.integer, np.floating)
    ):
        raise DescriptorError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, (float, np.floating)) and not float(value).is_integer():
        raise DescriptorError(f"{name} must be an integer, got {value!r}")
    return int(value)


@dataclass(frozen=True)
class Vacancy:
    """A vacant site drawn as a translucent marker.

    Attributes:
        position: Fractional coordinates of the vacant site.
        label: Atomic number of the element that would occupy it.
    """

    position: tuple[float, float, float]
    label: int

    def __post_init__(self) -> None:
        try:
            position = tuple(float(x) for x in self.position)
        except (ValueError, TypeError):
            raise DescriptorError(
                f"vacancy position must be 3 numbers, got {self.position!r}"
            ) from None
        if len(position) != 3:
            raise DescriptorError(
                f"vacancy position must have 3 components, got {len(position)}"
            )
        object.__setattr__(self, "position", position)
        label = _as_index(self.label, "vacancy label")
        if not 1 <= label <= MAX_ATOMIC_NUMBER:
            raise DescriptorError(
                f"vacancy label must be an atomic number in "
                f"[1, {MAX_ATOMIC_NUMBER}], got {self.label}"
            )
        object.__setattr__(self, "label", label)


@dataclass(frozen=True)
class Tags:
    """Named groups of atom indices highlighted when tags are shown.

    Indices refer to atoms in the descriptor, before any periodic
    replication.  Every copy of a tagged atom is highlighted.

    Attributes:
        adsorbates: Indices of adsorbed atoms.
        substitutions: Indices of substituted atoms.
        interstitials: Indices of interstitial atoms.
        unknowns: Indices of atoms of unknown role.
        outliers: Indices of outlier atoms.
        vacancies: Vacant sites, drawn at explicit positions.
    """

    CATEGORIES: ClassVar[tuple[str, ...]] = (
        "adsorbates", "substitutions", "interstitials", "unknowns", "outliers",
    )

    adsorbates: tuple[int, ...] = ()
    substitutions: tuple[int, ...] = ()
    interstitials: tuple[int, ...] = ()
    unknowns: tuple[int, ...] = ()
    outliers: tuple[int, ...] = ()
    vacancies: tuple[Vacancy, ...] = ()

    def __post_init__(self) -> None:
        for name in self.CATEGORIES:
            values = getattr(self, name)
            if isinstance(values, (str, bytes)) or not isinstance(
                values, (Sequence, np.ndarray)
            ):
                raise DescriptorError(
                    f"tag {name!r} must be a list of atom indices, got {values!r}"
                )
            indices = tuple(_as_index(i, f"index in tag {name!r}") for i in values)
            if any(i < 0 for i in indices):
                raise DescriptorError(f"negative index in tag {name!r}")
            object.__setattr__(self, name, indices)
        object.__setattr__(self, "vacancies", tuple(self.vacancies))

    def indices(self, category: str) -> tuple[int, ...]:
        """Return the atom indices for a tag *category*."""
        if category not in self.CATEGORIES:
            raise KeyError(f"unknown tag category: {category!r}")
        return getattr(self, category)

    def max_index(self) -> int:
        """Largest tagged atom index, or ``-1`` when nothing is tagged."""
        return max(
            (max(self.indices(c)) for c in self.CATEGORIES if self.indices(c)),
            default=-1,
        )

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> Tags:
        """Build tags from the descriptor's ``tags`` mapping.

        ``additionals`` is accepted as an alias of ``outliers``.

        Raises:
            DescriptorError: If an unknown tag name is present, or a
                group or vacancy is malformed.
        """
        if not isinstance(d, Mapping):
            raise DescriptorError(f"tags must be a mapping, got {d!r}")
        d = dict(d)
        if "additionals" in d:
            d.setdefault("outliers", d.pop("additionals"))
        unknown = set(d) - set(cls.CATEGORIES) - {"vacancies"}
        if unknown:
            raise DescriptorError(f"unknown tag names: {sorted(unknown)}")
        entries = d.get("vacancies")
        if entries is None:
            entries = ()
        if isinstance(entries, (str, bytes)) or not isinstance(entries, Sequence):
            raise DescriptorError(f"vacancies must be a list, got {entries!r}")
        vacancies = []
        for v in entries:
            if not isinstance(v, Mapping) or not {"position", "label"} <= set(v):
                raise DescriptorError(
                    f"a vacancy needs 'position' and 'label', got {v!r}"
                )
            vacancies.append(Vacancy(position=v["position"], label=v["label"]))
        return cls(
            **{c: () if d.get(c) is None else d.get(c) for c in cls.CATEGORIES},
            vacancies=tuple(vacancies),
        )

    def to_dict(self) -> dict:
        """Serialise to the wire form, omitting empty groups."""
        out: dict[str, Any] = {
            c: list(self.indices(c)) for c in self.CATEGORIES if self.indices(c)
        }
        if self.vacancies:
            out["vacancies"] = [
                {"position": list(v.position), "label": v.label}
                for v in self.vacancies
            ]
        return out


@dataclass(eq=False)
class StructureDescriptor:
    """Validated in-memory description of a structure to visualise.

    Exactly one of *scaled_positions* (fractional) and *positions*
    (cartesian) must be given.  A cell is required whenever fractional
    positions are used or any axis is periodic; a non-periodic
    structure with cartesian positions may omit it, in which case the
    identity matrix stands in as the basis and no cell is drawn.

    Attributes:
        atomic_numbers: Atomic number of each atom, shape ``(n_atoms,)``.
        cell: Cell basis vectors as rows, shape ``(3, 3)``, or ``None``.
        scaled_positions: Fractional coordinates, shape ``(n_atoms, 3)``.
        positions: Cartesian coordinates, shape ``(n_atoms, 3)``.
        pbc: Periodicity flag for each cell axis.
        primitive_cell: Optional primitive cell drawn as a dashed
            wireframe, shape ``(3, 3)``.
        bonds: ``"auto"`` to detect bonds from covalent radii, ``"off"``
            for none, or an ``(n_bonds, 2)`` array of index pairs.
        tags: Highlight groups and vacancies.

    Raises:
        DescriptorError: If any of the invariants above is violated.
    """

    atomic_numbers: np.ndarray
    cell: np.ndarray | None = None
    scaled_positions: np.ndarray | None = None
    positions: np.ndarray | None = None
    pbc: tuple[bool, bool, bool] = (True, True, True)
    primitive_cell: np.ndarray | None = None
    bonds: str | np.ndarray = "auto"
    tags: Tags = field(default_factory=Tags)

    def __post_init__(self) -> None:
        if self.scaled_positions is None and self.positions is None:
            raise DescriptorError("no atom positions given")
        if self.scaled_positions is not None and self.positions is not None:
            raise DescriptorError(
                "give either scaled_positions or positions, not both"
            )

        try:
            numbers = np.asarray(self.atomic_numbers)
        except (ValueError, TypeError):
            raise DescriptorError("atomic_numbers must be a list of integers") from None
        if numbers.ndim != 1:
            raise DescriptorError(
                f"atomic_numbers must be one-dimensional, got shape {numbers.shape}"
            )
        if numbers.size and numbers.dtype.kind not in "iuf":
            raise DescriptorError(
                f"atomic_numbers must be integers, got {numbers.tolist()}"
            )
        if numbers.size and not np.all(numbers == np.round(numbers)):
            raise DescriptorError("atomic_numbers must be integers")
        numbers = numbers.astype(int)
        bad = (numbers < 1) | (numbers > MAX_ATOMIC_NUMBER)
        if np.any(bad):
            raise DescriptorError(
                f"atomic numbers must be in [1, {MAX_ATOMIC_NUMBER}], "
                f"got {numbers[bad].tolist()}"
            )
        self.atomic_numbers = numbers

        if self.scaled_positions is not None:
            self.scaled_positions = _as_positions(
                self.scaled_positions, "scaled_positions",
            )
            coords, label = self.scaled_positions, "scaled positions"
        else:
            self.positions = _as_positions(self.positions, "positions")
            coords, label = self.positions, "positions"
        if len(coords) == 0:
            raise DescriptorError("no atom positions given")
        if len(coords) != len(numbers):
            raise DescriptorError(
                f"The number of {label} ({len(coords)}) does not match "
                f"the number of species ({len(numbers)})."
            )

        if isinstance(self.pbc, (str, bytes)) or not isinstance(
            self.pbc, (Sequence, np.ndarray)
        ):
            raise DescriptorError(
                f"pbc must be a sequence of 3 flags, got {self.pbc!r}"
            )
        pbc = tuple(bool(p) for p in self.pbc)
        if len(pbc) != 3:
            raise DescriptorError(f"pbc must have 3 entries, got {len(pbc)}")
        self.pbc = pbc  # type: ignore[assignment]

        if self.cell is not None:
            self.cell = _as_matrix(self.cell, "cell")
        elif self.scaled_positions is not None:
            raise DescriptorError("a cell is required with scaled positions")
        elif any(pbc):
            raise DescriptorError("a cell is required for periodic structures")

        if self.primitive_cell is not None:
            self.primitive_cell = _as_matrix(self.primitive_cell, "primitive_cell")

        self.bonds = self._validate_bonds(self.bonds)

        if self.tags is None:
            self.tags = Tags()
        if self.tags.max_index() >= len(numbers):
            raise DescriptorError(
                f"tag index {self.tags.max_index()} out of range for "
                f"{len(numbers)} atom(s)"
            )

    @staticmethod
    def _validate_bonds(bonds: Any) -> str | np.ndarray:
        if bonds is None:
            return "auto"
        if isinstance(bonds, str):
            if bonds in ("auto", "off"):
                return bonds
            raise DescriptorError(BONDS_GUIDANCE)
        if not isinstance(bonds, (Sequence, np.ndarray)):
            raise DescriptorError(BONDS_GUIDANCE)
        try:
            pairs = np.asarray(bonds)
        except (ValueError, TypeError):
            raise DescriptorError(BONDS_GUIDANCE) from None
        if pairs.size == 0:
            return np.zeros((0, 2), dtype=int)
        if pairs.ndim != 2 or pairs.shape[1] != 2:
            raise DescriptorError(BONDS_GUIDANCE)
        if pairs.dtype.kind not in "iu":
            raise DescriptorError("bond index pairs must be integers")
        return pairs.astype(int)

    @property
    def n_atoms(self) -> int:
        """Number of atoms described."""
        return len(self.atomic_numbers)

    @property
    def has_cell(self) -> bool:
        """Whether an explicit cell was given."""
        return self.cell is not None

    @property
    def basis(self) -> np.ndarray:
        """Read-only basis matrix; the identity when no cell was given."""
        basis = np.array(self.cell if self.cell is not None else np.eye(3))
        basis.flags.writeable = False
        return basis

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StructureDescriptor:
        """Validate a JSON-like structure mapping.

        Accepts both the camelCase keys of the wire format
        (``scaledPositions``, ``atomicNumbers``, ``chemicalSymbols``,
        ``primitiveCell``) and their snake_case equivalents.  Keys
        that are not part of the format are ignored.

        Args:
            data: The structure mapping.

        Returns:
            A validated :class:`StructureDescriptor`.

        Raises:
            DescriptorError: If the mapping does not describe a valid
                structure.
        """
        if not isinstance(data, Mapping):
            raise DescriptorError(
                f"a structure must be a mapping, got {type(data).__name__}"
            )
        values: dict[str, Any] = {}
        for key, value in data.items():
            name = _KEY_ALIASES.get(key)
            if name is None:
                logger.debug("Ignoring unrecognised descriptor key %r", key)
                continue
            values[name] = value

        if values.get("scaled_positions") is None and values.get("positions") is None:
            raise DescriptorError("no atom positions given")

        numbers = values.pop("atomic_numbers", None)
        symbols = values.pop("chemical_symbols", None)
        if numbers is None and symbols is None:
            raise DescriptorError("no species given")
        if numbers is None:
            from matviewer.construction.defaults import atomic_number

            if isinstance(symbols, str) or not isinstance(symbols, Sequence):
                raise DescriptorError(
                    f"chemical_symbols must be a list of symbols, got {symbols!r}"
                )
            try:
                numbers = [atomic_number(s) for s in symbols]
            except KeyError as exc:
                raise DescriptorError(exc.args[0]) from None
            except TypeError:
                raise DescriptorError(
                    f"chemical_symbols must be a list of symbols, got {symbols!r}"
                ) from None

        if values.get("pbc") is None:
            values.pop("pbc", None)
        tags = values.pop("tags", None)
        if tags is not None and not isinstance(tags, Tags):
            tags = Tags.from_dict(tags)

        return cls(
            atomic_numbers=numbers,
            tags=tags if tags is not None else Tags(),
            **values,
        )

    def to_dict(self) -> dict:
        """Serialise to the camelCase wire format."""
        d: dict[str, Any] = {
            "atomicNumbers": self.atomic_numbers.tolist(),
            "pbc": list(self.pbc),
        }
        if self.cell is not None:
            d["cell"] = self.cell.tolist()
        if self.scaled_positions is not None:
            d["scaledPositions"] = self.scaled_positions.tolist()
        else:
            d["positions"] = self.positions.tolist()
        if self.primitive_cell is not None:
            d["primitiveCell"] = self.primitive_cell.tolist()
        d["bonds"] = (
            self.bonds if isinstance(self.bonds, str) else self.bonds.tolist()
        )
        tags = self.tags.to_dict()
        if tags:
            d["tags"] = tags
        return d
