"""Static matplotlib renderer: :func:`render_mpl` entry point."""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import TYPE_CHECKING, Any

import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from matviewer.model import Colour, RenderStyle, normalise_colour
from matviewer.rendering.painter import _axes_bg_rgb, _draw_scene

if TYPE_CHECKING:
    from matviewer.viewer import StructureViewer

_STYLE_FIELDS = frozenset(f.name for f in dataclasses.fields(RenderStyle))


def _resolve_style(
    style: RenderStyle | None,
    **kwargs: Any,
) -> RenderStyle:
    """Build a :class:`RenderStyle` from an optional base plus overrides.

    Any kwarg whose name matches a ``RenderStyle`` field replaces that
    field's value.  Passing ``None`` is treated as "not provided" and
    preserves the base value.

    Raises:
        TypeError: If a kwarg name does not match any ``RenderStyle`` field.
    """
    unknown = kwargs.keys() - _STYLE_FIELDS
    if unknown:
        raise TypeError(
            f"Unknown style keyword argument(s): {', '.join(sorted(unknown))}"
        )

    s = style if style is not None else RenderStyle()
    overrides = {k: v for k, v in kwargs.items() if v is not None}
    if overrides:
        s = dataclasses.replace(s, **overrides)
    return s


def _check_loaded(viewer: StructureViewer) -> None:
    if not viewer.is_loaded:
        raise RuntimeError("no structure is loaded")


def render_mpl(
    viewer: StructureViewer,
    output: str | Path | None = None,
    *,
    ax: Axes | None = None,
    style: RenderStyle | None = None,
    dpi: int = 100,
    background: Colour = "white",
    show: bool | None = None,
    **style_kwargs: object,
) -> Figure:
    """Render the viewer's current scene as a static matplotlib figure.

    Uses a depth-sorted painter's algorithm: every visible sphere,
    cylinder and line is projected with the viewer's camera, and the
    resulting polygons are painted back to front.  The figure is the
    size of the viewer's viewport, so the saved image has exactly
    ``viewport`` pixels.

    Example usage::

        viewer = StructureViewer()
        viewer.load(descriptor)

        # Save to file (no interactive window):
        viewer.render_mpl("structure.png")

        # High-resolution vector output on black:
        viewer.render_mpl("structure.svg", background="black",
                          circle_segments=180)

    Args:
        viewer: A viewer with a loaded structure.
        output: Optional file path to save the figure.  The format is
            inferred from the extension (``.svg``, ``.pdf``, ``.png``).
            Ignored when *ax* is provided.
        ax: Optional matplotlib :class:`~matplotlib.axes.Axes` to draw
            into.  When provided, the caller is responsible for saving
            and closing the figure.
        style: A :class:`RenderStyle` controlling visual appearance.
        dpi: Resolution.  The figure size is the viewport divided by
            *dpi*.
        background: Background colour (CSS name, hex string, grey
            float, or RGB tuple).
        show: Whether to call ``plt.show()`` to open an interactive
            window.  Defaults to ``True`` when *output* is ``None``,
            ``False`` when saving to a file.
        **style_kwargs: Any :class:`RenderStyle` field name as a
            keyword argument.  Unknown names raise :class:`TypeError`.

    Returns:
        The matplotlib :class:`~matplotlib.figure.Figure` object.

    Raises:
        RuntimeError: If no structure is loaded.
        TypeError: If a style keyword is unknown.
    """
    resolved = _resolve_style(style, **style_kwargs)
    _check_loaded(viewer)
    camera = viewer.state.camera

    if ax is not None:
        fig = ax.get_figure()
        if not isinstance(fig, Figure):
            raise ValueError("ax is not attached to a Figure")
        _draw_scene(ax, viewer.scene, camera, resolved, bg_rgb=_axes_bg_rgb(ax))
        return fig

    bg_rgb = normalise_colour(background)
    width, height = camera.viewport
    fig, ax = plt.subplots(1, 1, figsize=(width / dpi, height / dpi), dpi=dpi)
    fig.set_facecolor(bg_rgb)
    ax.set_facecolor(bg_rgb)
    # The axes fill the figure so data units are canvas pixels.
    fig.subplots_adjust(left=0, right=1, bottom=0, top=1)

    _draw_scene(ax, viewer.scene, camera, resolved, bg_rgb=bg_rgb)

    if output is not None:
        fig.savefig(str(output), dpi=dpi, facecolor=bg_rgb)

    if show is None:
        show = output is None

    if show:
        plt.show()
    else:
        plt.close(fig)

    return fig
