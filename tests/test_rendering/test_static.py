"""Tests for static rendering via render_mpl."""

import matplotlib.image as mpimg
import matplotlib.pyplot as plt
import pytest
from matplotlib.figure import Figure

from matviewer import StructureViewer
from matviewer.model import RenderStyle
from matviewer.rendering.static import _resolve_style, render_mpl


class TestResolveStyle:
    def test_default(self):
        assert _resolve_style(None) == RenderStyle()

    def test_override(self):
        s = _resolve_style(None, circle_segments=12, dash_style="dotted")
        assert s.circle_segments == 12
        assert s.dash_style == "dotted"

    def test_base_preserved(self):
        base = RenderStyle(line_width_scale=2.0)
        s = _resolve_style(base, show_labels=False)
        assert s.line_width_scale == 2.0
        assert s.show_labels is False
        assert base.show_labels is True

    def test_none_ignored(self):
        base = RenderStyle(circle_segments=30)
        assert _resolve_style(base, circle_segments=None).circle_segments == 30

    def test_unknown_kwarg(self):
        with pytest.raises(TypeError, match="Unknown style keyword argument"):
            _resolve_style(None, colour="red")

    def test_invalid_value(self):
        with pytest.raises(ValueError, match="dash_style"):
            _resolve_style(None, dash_style="wavy")


class TestRenderMpl:
    def test_png_is_viewport_sized(self, dimer_viewer, tmp_path):
        out = tmp_path / "dimer.png"
        fig = render_mpl(dimer_viewer, out)
        assert isinstance(fig, Figure)
        image = mpimg.imread(out)
        assert image.shape[:2] == (150, 200)

    def test_dpi_does_not_change_pixel_size(self, dimer_viewer, tmp_path):
        out = tmp_path / "dimer.png"
        render_mpl(dimer_viewer, out, dpi=50)
        assert mpimg.imread(out).shape[:2] == (150, 200)

    def test_closes_figure_after_saving(self, dimer_viewer, tmp_path):
        fig = render_mpl(dimer_viewer, tmp_path / "dimer.png")
        assert not plt.fignum_exists(fig.number)

    def test_svg(self, rock_salt_viewer, tmp_path):
        out = tmp_path / "rock_salt.svg"
        render_mpl(rock_salt_viewer, out, background="black", dash_style="dotted")
        assert out.read_text().lstrip().startswith("<?xml")

    def test_background(self, dimer_viewer, tmp_path):
        out = tmp_path / "dimer.png"
        render_mpl(dimer_viewer, out, background="black")
        image = mpimg.imread(out)
        assert image[0, 0, :3].tolist() == [0.0, 0.0, 0.0]

    def test_draw_into_axes(self, dimer_viewer):
        fig, ax = plt.subplots()
        try:
            returned = render_mpl(dimer_viewer, ax=ax)
            assert returned is fig
            assert len(ax.collections) == 1
        finally:
            plt.close(fig)

    def test_not_loaded(self):
        with pytest.raises(RuntimeError, match="no structure is loaded"):
            render_mpl(StructureViewer())

    def test_unknown_style_kwarg(self, dimer_viewer):
        with pytest.raises(TypeError):
            render_mpl(dimer_viewer, show=False, wobble=True)

    def test_viewer_method(self, dimer_viewer, tmp_path):
        out = tmp_path / "dimer.png"
        dimer_viewer.render_mpl(out, circle_segments=16)
        assert out.exists()
