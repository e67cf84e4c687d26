"""Tests for RenderStyle validation."""

import pytest

from matviewer.model import RenderStyle


class TestRenderStyle:
    def test_defaults(self):
        style = RenderStyle()
        assert style.circle_segments == 72
        assert style.interactive_circle_segments == 24
        assert style.dash_style == "dashed"

    @pytest.mark.parametrize("field", ["circle_segments", "interactive_circle_segments"])
    def test_too_few_segments(self, field):
        with pytest.raises(ValueError, match=field):
            RenderStyle(**{field: 2})

    def test_line_width_scale_positive(self):
        with pytest.raises(ValueError, match="line_width_scale"):
            RenderStyle(line_width_scale=0.0)

    def test_unknown_dash_style(self):
        with pytest.raises(ValueError, match="dash_style"):
            RenderStyle(dash_style="wavy")

    def test_negative_stroke(self):
        with pytest.raises(ValueError, match="label_stroke_width"):
            RenderStyle(label_stroke_width=-1.0)
