"""The structure viewer: load a descriptor, build its scene and frame it."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import numpy as np

from matviewer.construction.assembler import AssembledScene, apply_tags, assemble_scene
from matviewer.construction.bonds import compute_bonds
from matviewer.construction.coordinates import (
    DegenerateCellError,
    to_fractional,
    wrap_fractional,
)
from matviewer.construction.framing import fit_zoom
from matviewer.construction.orientation import orient, rotate_about_world_axis
from matviewer.construction.periodicity import Periodicity, classify_periodicity
from matviewer.construction.replication import ReplicatedAtoms, replicate
from matviewer.model import (
    Bond,
    DescriptorError,
    OrthographicCamera,
    StructureDescriptor,
    ViewerOptions,
    ViewerState,
)

if TYPE_CHECKING:
    from matplotlib.axes import Axes
    from matplotlib.figure import Figure

    from matviewer.model.colour import Colour
    from matviewer.model.render_style import RenderStyle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadResult:
    """Outcome of :meth:`StructureViewer.load`.

    Truthy when the load succeeded.

    Attributes:
        ok: Whether the structure was loaded.
        message: Why the load failed; empty on success.
    """

    ok: bool
    message: str = ""

    def __bool__(self) -> bool:
        return self.ok


@runtime_checkable
class StructureLoader(Protocol):
    """Anything that can load a structure descriptor and be cleared."""

    def load(self, data: Mapping[str, Any] | StructureDescriptor) -> LoadResult: ...

    def clear(self) -> None: ...


class StructureViewer:
    """Builds and frames the scene for one structure at a time.

    Args:
        options: Display options, as a :class:`ViewerOptions` or a
            mapping accepted by :meth:`ViewerOptions.from_dict`.
        viewport: Canvas size in pixels, ``(width, height)``.

    Example::

        viewer = StructureViewer({"showCopies": True})
        if viewer.load(descriptor):
            viewer.render_mpl("structure.png")
    """

    def __init__(
        self,
        options: ViewerOptions | Mapping[str, Any] | None = None,
        *,
        viewport: tuple[int, int] = (800, 600),
    ) -> None:
        if options is None:
            options = ViewerOptions()
        elif not isinstance(options, ViewerOptions):
            options = ViewerOptions.from_dict(options)
        self.options = options
        self._viewport = OrthographicCamera._check_viewport(viewport)
        self._loading = False
        self._reset()

    def _reset(self) -> None:
        self.descriptor: StructureDescriptor | None = None
        self.periodicity: Periodicity | None = None
        self.replicated: ReplicatedAtoms | None = None
        self.bonds: list[Bond] = []
        self.scene: AssembledScene | None = None
        self.state: ViewerState | None = None

    @property
    def viewport(self) -> tuple[int, int]:
        """Canvas size in pixels, ``(width, height)``."""
        return self._viewport

    @property
    def is_loaded(self) -> bool:
        return self.scene is not None

    @property
    def zoom(self) -> float:
        """Current camera zoom."""
        return self._require_state().zoom

    def _require_state(self) -> ViewerState:
        if self.state is None or self.scene is None:
            raise RuntimeError("no structure is loaded")
        return self.state

    # ---- Loading ----

    def load(self, data: Mapping[str, Any] | StructureDescriptor) -> LoadResult:
        """Validate *data* and build its scene, replacing any previous one.

        Invalid input does not raise: the failure is logged and
        returned, and the viewer is left empty.

        Args:
            data: A structure mapping in the descriptor format, or an
                already validated :class:`StructureDescriptor`.

        Returns:
            A truthy :class:`LoadResult` on success.

        Raises:
            RuntimeError: If called while another load is running on
                this viewer.
        """
        if self._loading:
            raise RuntimeError("load() called while a load is in progress")
        self._loading = True
        try:
            self.clear()
            try:
                self._build(data)
            except (DescriptorError, DegenerateCellError, IndexError) as exc:
                logger.warning("Could not load structure: %s", exc)
                self.clear()
                return LoadResult(False, str(exc))
            return LoadResult(True)
        finally:
            self._loading = False

    def load_json(self, path: str | Path) -> LoadResult:
        """Read a descriptor from a JSON file and :meth:`load` it."""
        return self.load(json.loads(Path(path).read_text()))

    def clear(self) -> None:
        """Tear down the current scene and state."""
        if self.scene is not None:
            self.scene.dispose()
        self._reset()

    def _build(self, data: Mapping[str, Any] | StructureDescriptor) -> None:
        options = self.options
        descriptor = (
            data if isinstance(data, StructureDescriptor)
            else StructureDescriptor.from_dict(data)
        )
        basis = descriptor.basis
        periodicity = classify_periodicity(descriptor.pbc)
        for axis in periodicity.periodic_axes:
            if np.linalg.norm(basis[axis]) == 0.0:
                raise DegenerateCellError("degenerate cell")

        if descriptor.scaled_positions is not None:
            frac = descriptor.scaled_positions
        else:
            frac = to_fractional(descriptor.positions, basis)
        if options.wrap:
            frac = wrap_fractional(frac, basis, descriptor.pbc, options.wrap_tolerance)

        replicated = replicate(
            frac, descriptor.atomic_numbers, basis, periodicity,
            show_copies=options.show_copies,
            allow_repeat=options.allow_repeat,
            wrap_tolerance=options.wrap_tolerance,
        )
        bonds = compute_bonds(
            replicated.cartesian, replicated.atomic_numbers, descriptor.bonds,
            radius_scale=options.radius_scale, bond_scale=options.bond_scale,
        )
        scene = assemble_scene(descriptor, replicated, bonds, periodicity, options)

        rotation = orient(basis, periodicity)
        scene.root.rotation = rotation
        state = ViewerState(
            dimensionality=periodicity.dimensionality,
            periodic_axes=periodicity.periodic_axes,
            basis=basis,
            rotation=rotation,
            centre=options.center_point(replicated.cartesian[:descriptor.n_atoms], basis),
            translation=np.asarray(options.translation),
            camera=OrthographicCamera(self._viewport, width=options.camera_width),
        )

        self.descriptor = descriptor
        self.periodicity = periodicity
        self.replicated = replicated
        self.bonds = bonds
        self.scene = scene
        self.state = state
        if options.auto_fit:
            self.fit_to_canvas()
        else:
            state.zoom = options.zoom_level
        logger.info(
            "Loaded %dD structure: %d atom(s), %d drawn, %d bond(s)",
            periodicity.dimensionality, descriptor.n_atoms, len(replicated), len(bonds),
        )

    # ---- Camera ----

    def fit_to_canvas(self) -> float:
        """Zoom so the structure fills the canvas.

        The fitted zoom is multiplied by the ``zoom_level`` option.

        Returns:
            The new camera zoom.
        """
        state = self._require_state()
        zoom_level = self.options.zoom_level
        state.zoom = fit_zoom(
            self.scene.corners, state.camera,
            margin=self.options.fit_margin,
            zoom_baseline=zoom_level,
        )
        state.fitted_zoom = state.zoom / zoom_level
        return state.zoom

    def resize(self, width: int, height: int) -> None:
        """Adopt a new canvas size, refitting when ``auto_fit`` is on."""
        self._viewport = OrthographicCamera._check_viewport((width, height))
        if self.state is None:
            return
        self.state.camera.resize(width, height)
        if self.options.auto_fit:
            self.fit_to_canvas()

    def set_zoom(self, zoom: float) -> None:
        self._require_state().zoom = zoom

    def rotate(self, axis: np.ndarray | tuple[float, float, float], angle: float) -> None:
        """Rotate the structure by *angle* radians about a world *axis*."""
        state = self._require_state()
        state.rotation = rotate_about_world_axis(state.rotation, np.asarray(axis), angle)
        self.scene.root.rotation = state.rotation

    def pan(self, dx: float, dy: float) -> None:
        """Move the view by a screen offset in pixels."""
        self._require_state().camera.pan(dx, dy)

    def reset_view(self) -> None:
        """Restore the initial orientation, pan and zoom."""
        state = self._require_state()
        state.rotation = orient(state.basis, self.periodicity)
        self.scene.root.rotation = state.rotation
        state.camera.target = np.zeros(2)
        if self.options.auto_fit:
            self.fit_to_canvas()
        else:
            state.zoom = self.options.zoom_level

    # ---- Display toggles ----

    def set_bonds_visible(self, visible: bool) -> None:
        self.options.show_bonds = visible
        if self.scene is not None:
            self.scene.set_bonds_visible(visible)

    def set_cell_visible(self, visible: bool) -> None:
        self.options.show_cell = visible
        if self.scene is not None:
            self.scene.set_cell_visible(visible)

    def set_lattice_parameters_visible(self, visible: bool) -> None:
        self.options.show_lattice_parameters = visible
        if self.scene is not None:
            self.scene.set_lattice_parameters_visible(visible)

    def set_vacancies_visible(self, visible: bool) -> None:
        self.options.show_vacancies = visible
        if self.scene is not None:
            self.scene.set_vacancies_visible(visible)

    def set_legend_visible(self, visible: bool) -> None:
        self.options.show_legend = visible
        if self.scene is not None:
            self.scene.set_legend_visible(visible)

    def set_tags_visible(self, visible: bool) -> None:
        self.options.show_tags = visible
        if self.scene is not None:
            apply_tags(self.scene, self.descriptor.tags, visible)

    # ---- Rendering ----

    def render_mpl(
        self,
        output: str | Path | None = None,
        *,
        ax: Axes | None = None,
        style: RenderStyle | None = None,
        dpi: int = 100,
        background: Colour = "white",
        show: bool | None = None,
        **style_kwargs: object,
    ) -> Figure:
        """Render the current scene as a static matplotlib figure.

        Args:
            output: Optional file path to save the figure.  The format
                is inferred from the extension (``.svg``, ``.pdf``,
                ``.png``).  Ignored when *ax* is provided.
            ax: Optional matplotlib :class:`~matplotlib.axes.Axes` to
                draw into.  When provided, the caller is responsible
                for saving and closing the figure.
            style: A :class:`~matviewer.model.RenderStyle`.
            dpi: Resolution.  The figure size is the viewport divided
                by *dpi*.
            background: Background colour.
            show: Whether to call ``plt.show()``.  Defaults to
                ``True`` when *output* is ``None``, ``False`` when
                saving to a file.
            **style_kwargs: Any ``RenderStyle`` field as a keyword
                argument.

        Returns:
            The matplotlib :class:`~matplotlib.figure.Figure`.

        Raises:
            RuntimeError: If no structure is loaded.
            TypeError: If a style keyword is unknown.
        """
        from matviewer.rendering.static import render_mpl

        return render_mpl(
            self, output, ax=ax, style=style, dpi=dpi,
            background=background, show=show, **style_kwargs,
        )

    def render_mpl_interactive(
        self,
        *,
        style: RenderStyle | None = None,
        dpi: int = 100,
        background: Colour = "white",
        **style_kwargs: object,
    ) -> RenderStyle:
        """Open an interactive matplotlib window.

        Left-drag rotates, right-drag pans and scroll zooms.  Keys
        toggle display elements (``b`` bonds, ``u`` cell, ``t`` tags,
        ``v`` vacancies, ``l`` lattice parameters, ``e`` legend), ``f`` refits and
        ``r`` resets the view.

        Returns:
            The resolved render style.

        Raises:
            RuntimeError: If no structure is loaded.
        """
        from matviewer.rendering.interactive import render_mpl_interactive

        return render_mpl_interactive(
            self, style=style, dpi=dpi, background=background, **style_kwargs,
        )
