"""Interactive window: mouse and keyboard control of a loaded viewer."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

import matplotlib.pyplot as plt

from matviewer.construction.orientation import CAMERA_OUT, CAMERA_RIGHT, CAMERA_UP
from matviewer.model import Colour, RenderStyle, normalise_colour
from matviewer.rendering.painter import _draw_scene
from matviewer.rendering.static import _check_loaded, _resolve_style

if TYPE_CHECKING:
    from matviewer.viewer import StructureViewer


_KEY_ROTATION_STEP = 0.05  # radians per key press
_KEY_ZOOM_FACTOR = 1.1  # per key press or scroll step
_KEY_PAN_PIXELS = 20.0
_DRAG_SENSITIVITY = 0.01  # radians per dragged pixel
_MIN_INTERVAL = 0.03  # seconds; caps drag redraws at ~30 fps
_MIN_ZOOM = 1e-3
_MAX_ZOOM = 1e3

# key -> (world axis, sign of the rotation step)
_ROTATION_KEYS = {
    "left": (CAMERA_UP, -1.0),
    "right": (CAMERA_UP, 1.0),
    "up": (CAMERA_RIGHT, -1.0),
    "down": (CAMERA_RIGHT, 1.0),
    ",": (CAMERA_OUT, 1.0),
    ".": (CAMERA_OUT, -1.0),
}

# key -> screen offset in units of _KEY_PAN_PIXELS (y down)
_PAN_KEYS = {
    "shift+left": (-1.0, 0.0),
    "shift+right": (1.0, 0.0),
    "shift+up": (0.0, -1.0),
    "shift+down": (0.0, 1.0),
}

# key -> (option flag, viewer setter)
_TOGGLE_KEYS = {
    "b": ("show_bonds", "set_bonds_visible"),
    "u": ("show_cell", "set_cell_visible"),
    "t": ("show_tags", "set_tags_visible"),
    "v": ("show_vacancies", "set_vacancies_visible"),
    "l": ("show_lattice_parameters", "set_lattice_parameters_visible"),
    "e": ("show_legend", "set_legend_visible"),
}

_HELP_TEXT = """\
Arrows     Rotate          Shift+Arrows  Pan
,  .       Roll            +  =  -       Zoom
b          Bonds           u             Unit cell
t          Tags            v             Vacancies
l          Lattice params  f             Fit to canvas
r          Reset view      e             Element legend
h          Toggle help
Drag       Rotate          Right-drag    Pan
Scroll     Zoom"""


def _clamp_zoom(zoom: float) -> float:
    return max(_MIN_ZOOM, min(_MAX_ZOOM, zoom))


def _apply_key_action(
    key: str,
    viewer: StructureViewer,
    state: dict,
) -> str:
    """Apply the action bound to *key*, mutating *viewer* and *state*.

    Returns:
        ``"view"`` if anything visible changed, ``"none"`` if *key*
        is not bound.
    """
    if key in _ROTATION_KEYS:
        axis, sign = _ROTATION_KEYS[key]
        viewer.rotate(axis, sign * _KEY_ROTATION_STEP)
    elif key in _PAN_KEYS:
        dx, dy = _PAN_KEYS[key]
        viewer.pan(dx * _KEY_PAN_PIXELS, dy * _KEY_PAN_PIXELS)
    elif key in _TOGGLE_KEYS:
        flag, setter = _TOGGLE_KEYS[key]
        getattr(viewer, setter)(not getattr(viewer.options, flag))
    elif key in ("+", "="):
        viewer.set_zoom(_clamp_zoom(viewer.zoom * _KEY_ZOOM_FACTOR))
    elif key == "-":
        viewer.set_zoom(_clamp_zoom(viewer.zoom / _KEY_ZOOM_FACTOR))
    elif key == "f":
        viewer.fit_to_canvas()
    elif key == "r":
        viewer.reset_view()
    elif key == "h":
        state["help_visible"] = not state["help_visible"]
    else:
        return "none"
    return "view"


def render_mpl_interactive(
    viewer: StructureViewer,
    *,
    style: RenderStyle | None = None,
    dpi: int = 100,
    background: Colour = "white",
    **style_kwargs: object,
) -> RenderStyle:
    """Open a window in which the loaded structure can be turned and zoomed.

    The window starts at the size of the viewer's viewport.

    **Mouse:** left-drag rotates, right-drag pans, scroll zooms.

    **Keyboard:**

    - Arrow keys rotate about the screen axes; ``,`` and ``.`` roll.
    - ``+``, ``=`` and ``-`` zoom; Shift+Arrow keys pan.
    - ``b`` bonds, ``u`` unit cell, ``t`` tags, ``v`` vacancies and
      ``l`` lattice parameters toggle those parts of the scene.
    - ``e`` toggles the element legend.
    - ``f`` fits the structure to the window, ``r`` resets the view
      and ``h`` shows the list of bindings.

    Resizing the window resizes the viewer, which refits the camera
    when ``auto_fit`` is on.  Every change is made on *viewer* itself,
    so a later :meth:`~matviewer.viewer.StructureViewer.render_mpl`
    shows the view the window was left in.

    Args:
        viewer: A viewer with a loaded structure.
        style: A :class:`RenderStyle` controlling visual appearance.
        dpi: Resolution.
        background: Background colour.
        **style_kwargs: Any :class:`RenderStyle` field name as a
            keyword argument.  Unknown names raise :class:`TypeError`.

    Returns:
        The resolved :class:`RenderStyle`, ready for static rendering.

    Raises:
        RuntimeError: If no structure is loaded.
    """
    resolved = _resolve_style(style, **style_kwargs)
    _check_loaded(viewer)

    bg_rgb = normalise_colour(background)
    width, height = viewer.viewport
    fig, ax = plt.subplots(1, 1, figsize=(width / dpi, height / dpi), dpi=dpi)
    fig.set_facecolor(bg_rgb)
    ax.set_facecolor(bg_rgb)
    fig.subplots_adjust(left=0, right=1, bottom=0, top=1)

    state: dict = {
        "drag_button": None,
        "drag_last_xy": None,
        "last_draw_t": 0.0,
        "help_visible": False,
    }

    def _redraw() -> None:
        _draw_scene(
            ax, viewer.scene, viewer.state.camera, resolved,
            bg_rgb=bg_rgb,
            circle_segments=resolved.interactive_circle_segments,
        )
        if state["help_visible"]:
            ax.text(
                0.02, 0.98, _HELP_TEXT,
                transform=ax.transAxes,
                fontsize=7,
                fontfamily="monospace",
                va="top",
                bbox={"boxstyle": "round,pad=0.5", "facecolor": "white",
                      "alpha": 0.85, "edgecolor": "grey"},
                zorder=1000,
            )
        fig.canvas.draw_idle()
        state["last_draw_t"] = time.monotonic()

    def _redraw_if_due() -> None:
        if time.monotonic() - state["last_draw_t"] >= _MIN_INTERVAL:
            _redraw()

    def on_press(event):
        if event.inaxes is ax and event.button in (1, 3):
            state["drag_button"] = event.button
            state["drag_last_xy"] = (event.x, event.y)

    def on_motion(event):
        if state["drag_button"] is None:
            return
        x0, y0 = state["drag_last_xy"]
        dx, dy = event.x - x0, event.y - y0
        state["drag_last_xy"] = (event.x, event.y)
        if state["drag_button"] == 1:
            viewer.rotate(CAMERA_UP, dx * _DRAG_SENSITIVITY)
            viewer.rotate(CAMERA_RIGHT, -dy * _DRAG_SENSITIVITY)
        else:
            # Canvas y grows upwards; the camera pans in y-down pixels.
            viewer.pan(dx, -dy)
        _redraw_if_due()

    def on_release(event):
        if state["drag_button"] is None:
            return
        state["drag_button"] = None
        state["drag_last_xy"] = None
        _redraw()

    def on_scroll(event):
        if event.inaxes is ax:
            viewer.set_zoom(_clamp_zoom(viewer.zoom * _KEY_ZOOM_FACTOR ** event.step))
            _redraw()

    def on_resize(event):
        w, h = int(event.width), int(event.height)
        if w > 0 and h > 0:
            viewer.resize(w, h)
            _redraw()

    def on_key(event):
        if event.key is not None and _apply_key_action(event.key, viewer, state) == "view":
            _redraw_if_due()

    for name, handler in (
        ("button_press_event", on_press),
        ("motion_notify_event", on_motion),
        ("button_release_event", on_release),
        ("scroll_event", on_scroll),
        ("resize_event", on_resize),
        ("key_press_event", on_key),
    ):
        fig.canvas.mpl_connect(name, handler)

    # matplotlib's own bindings clash with ours ('f' fullscreen, 'l' log scale).
    manager = fig.canvas.manager
    handler_id = getattr(manager, "key_press_handler_id", None)
    if handler_id is not None:
        fig.canvas.mpl_disconnect(handler_id)

    _redraw()
    plt.show()
    return resolved
