import json

import pytest

from modules.palette import BRAND_COLORS, PaletteResolver, hex_to_rgb, load_brand_colors
from utils.exceptions import UnknownColorError


class TestPaletteResolver:
    def test_resolves_brand_colors(self, palette):
        assert palette.resolve("aqua").rgb == (0, 255, 220)
        assert palette.resolve("navy").rgb == (30, 42, 69)
        assert palette.resolve("fuchsia").rgb == (255, 0, 143)

    def test_case_insensitive(self, palette):
        assert palette.resolve("NAVY") == palette.resolve("navy")
        assert palette.resolve(" Aqua ").name == "aqua"

    def test_unknown_color(self, palette):
        with pytest.raises(UnknownColorError) as excinfo:
            palette.resolve("orange")
        assert excinfo.value.name == "orange"
        assert set(excinfo.value.available) == {"aqua", "navy", "fuchsia"}

    def test_names_and_contains(self, palette):
        assert palette.names() == ["aqua", "navy", "fuchsia"]
        assert "Fuchsia" in palette
        assert "orange" not in palette
        assert None not in palette

    def test_hex_roundtrip(self, palette):
        assert palette.resolve("navy").hex == "#1E2A45"


def test_hex_to_rgb_accepts_missing_hash():
    assert hex_to_rgb("00ffdc") == (0, 255, 220)


@pytest.mark.parametrize("bad", ["#12345", "#GGGGGG", "", None])
def test_hex_to_rgb_invalid(bad):
    with pytest.raises(UnknownColorError):
        hex_to_rgb(bad)


class TestLoadBrandColors:
    def test_reads_selection(self, tmp_path):
        path = tmp_path / "colors.json"
        path.write_text(json.dumps({"selection": {"Lime": {"hex": "#00FF00"}}}))
        assert load_brand_colors(path) == {"lime": "#00FF00"}

    def test_missing_file_uses_defaults(self, tmp_path):
        assert load_brand_colors(tmp_path / "missing.json") == BRAND_COLORS

    def test_malformed_file_uses_defaults(self, tmp_path):
        path = tmp_path / "colors.json"
        path.write_text("{not json")
        assert load_brand_colors(path) == BRAND_COLORS

    def test_empty_selection_uses_defaults(self, tmp_path):
        path = tmp_path / "colors.json"
        path.write_text(json.dumps({"selection": {}}))
        assert load_brand_colors(path) == BRAND_COLORS


def test_default_palette_has_brand_colors():
    assert set(PaletteResolver().names()) == {"aqua", "navy", "fuchsia"}
