"""
Tests for ProcessingOptions and the INI loader.
"""
import pytest

from ase_compiler.config import DEFAULT_OPTIONS, AtlasLayout, ProcessingOptions, load_processing_options
from ase_compiler.utils import get_counts


def write_ini(tmp_path, text, name="processing.ini"):
    path = tmp_path / name
    path.write_text(text, encoding='utf-8')
    return path


class TestProcessingOptions:

    def test_defaults(self):
        assert DEFAULT_OPTIONS.only_visible_layers is True
        assert DEFAULT_OPTIONS.include_background_layer is False
        assert DEFAULT_OPTIONS.merge_duplicates is True
        assert DEFAULT_OPTIONS.layout == AtlasLayout.GRID
        assert DEFAULT_OPTIONS.premultiply_alpha is False
        assert (DEFAULT_OPTIONS.border_padding, DEFAULT_OPTIONS.spacing, DEFAULT_OPTIONS.inner_padding) == (0, 0, 0)

    @pytest.mark.parametrize("name", ["border_padding", "spacing", "inner_padding"])
    def test_negative_padding(self, name):
        with pytest.raises(ValueError):
            ProcessingOptions(**{name: -1})

    def test_layout_must_be_enum(self):
        with pytest.raises(ValueError):
            ProcessingOptions(layout="grid")


class TestLoadProcessingOptions:

    def test_full_section(self, tmp_path):
        path = write_ini(tmp_path, """
[processing]
only_visible_layers = false
include_background_layer = yes
merge_duplicates = off
border_padding = 2
spacing = 1       ; between cells
inner_padding = 3
layout = Packed
premultiply_alpha = true
""")
        options = load_processing_options(path)
        assert options == ProcessingOptions(
            only_visible_layers=False,
            include_background_layer=True,
            merge_duplicates=False,
            border_padding=2,
            spacing=1,
            inner_padding=3,
            layout=AtlasLayout.PACKED,
            premultiply_alpha=True,
        )

    def test_missing_keys_keep_defaults(self, tmp_path):
        path = write_ini(tmp_path, "[processing]\nspacing = 4\n")
        options = load_processing_options(path)
        assert options.spacing == 4
        assert options.merge_duplicates is True

    def test_custom_section(self, tmp_path):
        path = write_ini(tmp_path, "[ui]\nlayout = row\n")
        assert load_processing_options(path, section="ui").layout == AtlasLayout.ROW

    def test_unknown_key_warns(self, tmp_path):
        path = write_ini(tmp_path, "[processing]\ncolour = red\n")
        load_processing_options(path)
        assert get_counts() == (0, 1)

    @pytest.mark.parametrize("line", [
        "merge_duplicates = maybe",
        "spacing = wide",
        "layout = spiral",
        "border_padding = -1",
    ])
    def test_bad_values(self, tmp_path, line):
        path = write_ini(tmp_path, f"[processing]\n{line}\n")
        with pytest.raises(ValueError):
            load_processing_options(path)

    def test_missing_section(self, tmp_path):
        path = write_ini(tmp_path, "[other]\nspacing = 1\n")
        with pytest.raises(ValueError):
            load_processing_options(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_processing_options(tmp_path / "nope.ini")
