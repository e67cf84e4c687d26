"""Tests for saving and loading viewer options."""

import json

import pytest

from matviewer.construction.settings import load_options, save_options
from matviewer.model import ViewCenter, ViewerOptions


class TestSettings:
    def test_round_trip(self, tmp_path):
        path = tmp_path / "options.json"
        options = ViewerOptions(
            show_copies=True, bond_scale=1.2, view_center=ViewCenter.COC,
            translation=(0.0, 1.0, 0.0),
        )
        save_options(path, options)
        assert load_options(path) == options

    def test_defaults_written_as_empty_object(self, tmp_path):
        path = tmp_path / "options.json"
        save_options(path, ViewerOptions())
        assert json.loads(path.read_text()) == {}
        assert load_options(path) == ViewerOptions()

    def test_camel_case_keys(self, tmp_path):
        path = tmp_path / "options.json"
        save_options(path, ViewerOptions(show_lattice_parameters=False, show_tags=True))
        data = json.loads(path.read_text())
        assert data == {"showParam": False, "showTags": True}

    def test_load_partial_file(self, tmp_path):
        path = tmp_path / "options.json"
        path.write_text('{"radiusScale": 0.8}')
        options = load_options(path)
        assert options.radius_scale == 0.8
        assert options.show_bonds is True

    def test_non_object_raises(self, tmp_path):
        path = tmp_path / "options.json"
        path.write_text("[1, 2, 3]")
        with pytest.raises(ValueError, match="JSON object"):
            load_options(path)

    def test_unknown_option_raises(self, tmp_path):
        path = tmp_path / "options.json"
        path.write_text('{"notAnOption": 1}')
        with pytest.raises(ValueError):
            load_options(path)
