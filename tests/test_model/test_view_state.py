"""Tests for ViewerState."""

import numpy as np
import pytest

from matviewer.model import OrthographicCamera, ViewerState


class TestViewerState:
    def test_basis_read_only(self):
        state = ViewerState(3, (0, 1, 2), np.eye(3))
        with pytest.raises(ValueError):
            state.basis[0, 0] = 2.0

    def test_basis_copied(self):
        basis = np.eye(3)
        state = ViewerState(3, (0, 1, 2), basis)
        basis[0, 0] = 7.0
        assert state.basis[0, 0] == 1.0

    def test_axes_match_dimensionality(self):
        with pytest.raises(ValueError, match="periodic axes"):
            ViewerState(2, (0,), np.eye(3))

    def test_dimensionality_range(self):
        with pytest.raises(ValueError, match="dimensionality"):
            ViewerState(4, (0, 1, 2, 0), np.eye(3))

    def test_zoom_delegates_to_camera(self):
        camera = OrthographicCamera()
        state = ViewerState(0, (), np.eye(3), camera=camera)
        state.zoom = 2.5
        assert camera.zoom == 2.5

    def test_zoom_must_be_positive(self):
        state = ViewerState(0, (), np.eye(3))
        with pytest.raises(ValueError, match="zoom"):
            state.zoom = 0.0
