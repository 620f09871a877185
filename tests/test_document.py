"""
Tests for the document model: lookups, linked cels, visibility, validation.
"""
import dataclasses

import pytest

from ase_compiler.document import (
    Document, Frame, ImageCel, Layer, LayerKind, LinkedCel, Tag, Tile, TilemapCel,
    compute_effective_visibility, find_tileset,
)
from ase_compiler.errors import (
    InvalidTagRange, MissingTilesetReference, TileIndexOutOfRange, TilesetNotFound,
)


# ══════════════════════════════════════════════════════════════════════════
# Lookups
# ══════════════════════════════════════════════════════════════════════════

class TestLookups:

    def test_frame_count_and_get_frame(self, sprite_document):
        assert sprite_document.frame_count == 4
        assert sprite_document.get_frame(2).duration == 150
        with pytest.raises(IndexError):
            sprite_document.get_frame(-1)

    def test_get_tag(self, sprite_document):
        assert sprite_document.get_tag("walk").frame_count == 4
        assert sprite_document.get_tag("run") is None

    def test_tileset_lookup(self, tilemap_document):
        assert tilemap_document.get_tileset_by_id(1).name == "props"
        assert tilemap_document.get_tileset_by_name("ground").id == 0
        assert tilemap_document.get_tileset_by_id(5) is None
        assert find_tileset(tilemap_document, 0).tile_count == 3
        with pytest.raises(TilesetNotFound):
            find_tileset(tilemap_document, 5)

    def test_frame_get_cel(self, tilemap_document):
        frame = tilemap_document.get_frame(0)
        assert frame.get_cel(1).x == 4
        assert frame.get_cel(2) is None


class TestLinkedCels:

    def test_get_cel_does_not_resolve(self, tilemap_document):
        assert isinstance(tilemap_document.get_cel(1, 0), LinkedCel)

    def test_resolve_cel(self, tilemap_document):
        resolved = tilemap_document.resolve_cel(1, 0)
        assert isinstance(resolved, TilemapCel)
        assert resolved is tilemap_document.resolve_cel(0, 0)

    def test_missing_cel(self, tilemap_document):
        assert tilemap_document.resolve_cel(1, 3) is None

    def test_link_to_link_rejected(self):
        layers = (Layer(0, "a"),)
        frames = (
            Frame(0, 1, 1, 100, (LinkedCel(0, 1),)),
            Frame(1, 1, 1, 100, (LinkedCel(0, 0),)),
        )
        doc = Document("d", 1, 1, frames, layers)
        with pytest.raises(ValueError):
            doc.resolve_cel(0, 0)


# ══════════════════════════════════════════════════════════════════════════
# Visibility
# ══════════════════════════════════════════════════════════════════════════

class TestVisibility:

    def test_group_gating(self, tilemap_document):
        assert tilemap_document.effective_visibility() == (True, True, False, False)

    def test_nested_groups(self):
        layers = [
            Layer(0, "outer", kind=LayerKind.GROUP, visible=False),
            Layer(1, "inner", kind=LayerKind.GROUP, parent=0),
            Layer(2, "leaf", parent=1),
            Layer(3, "free"),
        ]
        assert compute_effective_visibility(layers) == (False, False, False, True)

    def test_hidden_leaf_in_visible_group(self):
        layers = [
            Layer(0, "group", kind=LayerKind.GROUP),
            Layer(1, "leaf", visible=False, parent=0),
        ]
        assert compute_effective_visibility(layers) == (True, False)


# ══════════════════════════════════════════════════════════════════════════
# Validation
# ══════════════════════════════════════════════════════════════════════════

class TestValidate:

    def test_valid_documents(self, sprite_document, tilemap_document):
        sprite_document.validate()
        tilemap_document.validate()

    def test_bad_tag(self, sprite_document):
        doc = dataclasses.replace(sprite_document, tags=(Tag("x", 0, 9),))
        with pytest.raises(InvalidTagRange):
            doc.validate()

    def test_non_contiguous_frames(self, sprite_document):
        frames = sprite_document.frames[:1] + (dataclasses.replace(sprite_document.frames[1], index=5),)
        doc = dataclasses.replace(sprite_document, frames=frames, tags=())
        with pytest.raises(ValueError):
            doc.validate()

    def test_parent_must_be_group(self):
        layers = (Layer(0, "a"), Layer(1, "b", parent=0))
        with pytest.raises(ValueError):
            Document("d", 1, 1, (), layers).validate()

    def test_missing_tileset(self, tilemap_document):
        doc = dataclasses.replace(tilemap_document, tilesets=tilemap_document.tilesets[:1])
        with pytest.raises(MissingTilesetReference):
            doc.validate()

    def test_tile_out_of_range(self, tilemap_document):
        bad = TilemapCel(layer_index=0, x=0, y=0, columns=1, rows=1, tiles=(Tile(3),))
        frames = (dataclasses.replace(tilemap_document.frames[0], cels=(bad,)),) + tilemap_document.frames[1:]
        doc = dataclasses.replace(tilemap_document, frames=frames)
        with pytest.raises(TileIndexOutOfRange):
            doc.validate()

    def test_dangling_link(self):
        layers = (Layer(0, "a"),)
        frames = (
            Frame(0, 1, 1, 100, (ImageCel(0, 0, 0, 1, 1, bytes(4)),)),
            Frame(1, 1, 1, 100, (LinkedCel(0, 0),)),
            Frame(2, 1, 1, 100, (LinkedCel(0, 1),)),
        )
        with pytest.raises(ValueError):
            Document("d", 1, 1, frames, layers).validate()
