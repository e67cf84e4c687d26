from __future__ import annotations

from dataclasses import dataclass

#: Line styles available for dashed scene lines.
DASH_STYLES = ("dashed", "dotted", "dashdot")


@dataclass
class RenderStyle:
    """Visual style settings for drawing an assembled scene.

    These only affect how the scene graph is turned into an image.
    What is in the scene (bonds, cells, tags) is controlled by
    :class:`~matviewer.model.options.ViewerOptions`.

    Pass a style to :func:`~matviewer.rendering.static.render_mpl` via
    the *style* keyword, or override individual fields with keyword
    arguments::

        viewer.render_mpl("out.svg", circle_segments=120)

    Attributes:
        circle_segments: Number of line segments used to approximate
            atom circles in static output.
        interactive_circle_segments: Number of line segments for atom
            circles in the interactive window.  Lower values give
            faster redraws.
        line_width_scale: Multiplier applied to every scene line width.
        dash_style: Pattern for dashed lines, one of
            ``"dashed"``, ``"dotted"`` or ``"dashdot"``.
        show_labels: Whether to draw text labels.
        label_stroke_width: Width of the halo drawn around labels
            (points).  ``0`` disables the halo.

    Raises:
        ValueError: If a segment count is below 3, *line_width_scale*
            is not positive, *label_stroke_width* is negative or
            *dash_style* is unknown.
    """

    circle_segments: int = 72
    interactive_circle_segments: int = 24
    line_width_scale: float = 1.0
    dash_style: str = "dashed"
    show_labels: bool = True
    label_stroke_width: float = 3.0

    def __post_init__(self) -> None:
        if self.circle_segments < 3:
            raise ValueError(
                f"circle_segments must be >= 3, got {self.circle_segments}"
            )
        if self.interactive_circle_segments < 3:
            raise ValueError(
                f"interactive_circle_segments must be >= 3, "
                f"got {self.interactive_circle_segments}"
            )
        if self.line_width_scale <= 0:
            raise ValueError(
                f"line_width_scale must be positive, got {self.line_width_scale}"
            )
        if self.dash_style not in DASH_STYLES:
            raise ValueError(
                f"dash_style must be one of {DASH_STYLES}, got {self.dash_style!r}"
            )
        if self.label_stroke_width < 0:
            raise ValueError(
                f"label_stroke_width must be non-negative, "
                f"got {self.label_stroke_width}"
            )
