"""
Tests for frame flattening.

Verifies:
- Transparent base case and output shape / dtype
- Single opaque layer reproduces its pixels
- Visibility (layer and group), background layers, tilemap layers
- Linked cels, clipping, layer x cel opacity, premultiply
"""
import numpy as np
import pytest

from ase_compiler.compositing import flatten_frame, flatten_frames
from ase_compiler.config import ProcessingOptions
from ase_compiler.document import (
    BlendMode, Document, Frame, ImageCel, Layer, LayerKind, LinkedCel, Tile, TilemapCel,
)

from conftest import solid_pixels, RED, GREEN, BLUE


def make_document(layers, cels, width=2, height=2, linked=()):
    frames = (Frame(index=0, width=width, height=height, duration=100, cels=tuple(cels)),)
    if linked:
        frames += (Frame(index=1, width=width, height=height, duration=100, cels=tuple(linked)),)
    return Document(name="doc", canvas_width=width, canvas_height=height,
                    frames=frames, layers=tuple(layers))


def cel(layer_index, rgba, x=0, y=0, width=2, height=2, opacity=255):
    return ImageCel(layer_index=layer_index, x=x, y=y, width=width, height=height,
                    pixels=solid_pixels(width, height, rgba), opacity=opacity)


# ══════════════════════════════════════════════════════════════════════════
# Basics
# ══════════════════════════════════════════════════════════════════════════

class TestBasics:

    def test_empty_frame_is_transparent(self):
        doc = make_document([Layer(0, "a")], [])
        result = flatten_frame(doc, 0)
        assert result.shape == (2, 2, 4)
        assert result.dtype == np.uint8
        assert not result.any()

    def test_single_opaque_layer_reproduces_pixels(self):
        pixels = np.arange(16, dtype=np.uint8).reshape(2, 2, 4)
        pixels[..., 3] = 255
        image_cel = ImageCel(layer_index=0, x=0, y=0, width=2, height=2, pixels=pixels.tobytes())
        doc = make_document([Layer(0, "a")], [image_cel])
        assert np.array_equal(flatten_frame(doc, 0), pixels)

    def test_upper_layer_paints_over_lower(self):
        doc = make_document([Layer(0, "low"), Layer(1, "high")], [cel(0, RED), cel(1, GREEN)])
        assert flatten_frame(doc, 0)[0, 0].tolist() == list(GREEN)

    def test_frame_out_of_range(self):
        doc = make_document([Layer(0, "a")], [])
        with pytest.raises(IndexError):
            flatten_frame(doc, 5)

    def test_bad_pixel_length(self):
        bad = ImageCel(layer_index=0, x=0, y=0, width=2, height=2, pixels=b'\x00' * 3)
        doc = make_document([Layer(0, "a")], [bad])
        with pytest.raises(ValueError):
            flatten_frame(doc, 0)

    def test_flatten_frames_matches_single(self, sprite_document):
        frames = flatten_frames(sprite_document)
        assert len(frames) == 4
        assert np.array_equal(frames[3], flatten_frame(sprite_document, 3))


# ══════════════════════════════════════════════════════════════════════════
# Layer filtering
# ══════════════════════════════════════════════════════════════════════════

class TestLayerFiltering:

    def test_hidden_layer_skipped(self):
        doc = make_document([Layer(0, "a"), Layer(1, "b", visible=False)], [cel(0, RED), cel(1, GREEN)])
        assert flatten_frame(doc, 0)[0, 0].tolist() == list(RED)

    def test_hidden_layer_included_when_requested(self):
        doc = make_document([Layer(0, "a"), Layer(1, "b", visible=False)], [cel(0, RED), cel(1, GREEN)])
        options = ProcessingOptions(only_visible_layers=False)
        assert flatten_frame(doc, 0, options)[0, 0].tolist() == list(GREEN)

    def test_hidden_group_hides_children(self):
        layers = [
            Layer(0, "a"),
            Layer(1, "group", kind=LayerKind.GROUP, visible=False),
            Layer(2, "child", parent=1),
        ]
        doc = make_document(layers, [cel(0, RED), cel(2, BLUE)])
        assert flatten_frame(doc, 0)[0, 0].tolist() == list(RED)

    def test_background_layer_excluded_by_default(self):
        doc = make_document([Layer(0, "bg", is_background=True)], [cel(0, RED)])
        assert not flatten_frame(doc, 0).any()

    def test_background_layer_included_when_requested(self):
        doc = make_document([Layer(0, "bg", is_background=True)], [cel(0, RED)])
        options = ProcessingOptions(include_background_layer=True)
        assert flatten_frame(doc, 0, options)[1, 1].tolist() == list(RED)

    def test_tilemap_layer_not_flattened(self):
        tiles = TilemapCel(layer_index=0, x=0, y=0, columns=1, rows=1, tiles=(Tile(0),))
        doc = make_document([Layer(0, "map", kind=LayerKind.TILEMAP, tileset_id=0)], [tiles])
        assert not flatten_frame(doc, 0).any()


# ══════════════════════════════════════════════════════════════════════════
# Cel placement and opacity
# ══════════════════════════════════════════════════════════════════════════

class TestCels:

    def test_linked_cel_resolved(self):
        doc = make_document([Layer(0, "a")], [cel(0, BLUE)],
                            linked=[LinkedCel(layer_index=0, target_frame=0)])
        assert flatten_frame(doc, 1)[0, 1].tolist() == list(BLUE)

    def test_cel_clipped_at_canvas_edge(self):
        pixels = np.zeros((2, 2, 4), dtype=np.uint8)
        pixels[:, 0] = RED
        pixels[:, 1] = GREEN
        offset = ImageCel(layer_index=0, x=-1, y=1, width=2, height=2, pixels=pixels.tobytes())
        doc = make_document([Layer(0, "a")], [offset])
        result = flatten_frame(doc, 0)
        assert result[1, 0].tolist() == list(GREEN)
        assert not result[0].any()
        assert not result[1, 1].any()

    def test_cel_fully_outside_ignored(self):
        doc = make_document([Layer(0, "a")], [cel(0, RED, x=5, y=5)])
        assert not flatten_frame(doc, 0).any()

    def test_layer_and_cel_opacity_combine(self):
        doc = make_document([Layer(0, "a", opacity=128)], [cel(0, RED, opacity=255)])
        assert flatten_frame(doc, 0)[0, 0].tolist() == [255, 0, 0, 128]

    def test_blend_mode_applied(self):
        layers = [Layer(0, "a"), Layer(1, "b", blend_mode=BlendMode.MULTIPLY)]
        doc = make_document(layers, [cel(0, (200, 100, 50, 255)), cel(1, (128, 255, 0, 255))])
        assert flatten_frame(doc, 0)[0, 0].tolist() == [100, 100, 0, 255]

    def test_premultiply_applied_once(self):
        doc = make_document([Layer(0, "a", opacity=128)], [cel(0, (255, 128, 0, 255))])
        result = flatten_frame(doc, 0, ProcessingOptions(premultiply_alpha=True))
        assert result[0, 0].tolist() == [128, 64, 0, 128]
