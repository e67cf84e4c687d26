"""Tests for the matviewer public API."""

import matviewer


class TestPublicAPI:
    def test_all_names_importable(self):
        for name in matviewer.__all__:
            assert hasattr(matviewer, name), f"{name} not importable from matviewer"

    def test_end_to_end_json_to_png(self, rock_salt_dict, tmp_path):
        import json

        source = tmp_path / "rock_salt.json"
        source.write_text(json.dumps(rock_salt_dict))
        viewer = matviewer.StructureViewer({"showCopies": True})
        assert viewer.load_json(source)
        out = tmp_path / "rock_salt.png"
        viewer.render_mpl(out)
        assert out.exists()
        assert out.stat().st_size > 0

    def test_end_to_end_with_saved_options(self, chain_dict, tmp_path):
        options_path = tmp_path / "options.json"
        matviewer.save_options(options_path, matviewer.ViewerOptions(bond_scale=1.2))
        viewer = matviewer.StructureViewer(matviewer.load_options(options_path))
        assert viewer.load(chain_dict)
        out = tmp_path / "chain.svg"
        viewer.render_mpl(out)
        assert out.exists()
