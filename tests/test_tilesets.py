"""
Tests for tileset extraction and lookup.
"""
import pytest

from ase_compiler.config import ProcessingOptions
from ase_compiler.document import Document, Tileset
from ase_compiler.errors import AseCompilerError, DuplicateTilesetName, TilesetNotFound
from ase_compiler.processors import (
    extract_tilesets,
    process_tileset,
    process_tileset_by_id,
    process_tileset_by_index,
    process_tileset_by_name,
    process_tileset_collection,
)
from ase_compiler.raw_types import RawTilesetCollection

from conftest import tile_pixels, RED


def document_with(*tilesets):
    return Document(name="doc", canvas_width=1, canvas_height=1, frames=(), layers=(),
                    tilesets=tuple(tilesets))


class TestProcessTileset:

    def test_copies_fields(self, ground_tileset):
        raw = process_tileset(ground_tileset)
        assert raw.name == "ground"
        assert (raw.tile_width, raw.tile_height, raw.tile_count) == (2, 2, 3)
        assert raw.pixels == ground_tileset.pixels
        assert (raw.width, raw.height) == (2, 6)

    def test_pixel_size_mismatch(self):
        bad = Tileset(id=0, name="bad", tile_width=2, tile_height=2, tile_count=2, pixels=b'\x00' * 16)
        with pytest.raises(ValueError):
            process_tileset(bad)

    def test_premultiply(self):
        tileset = Tileset(id=0, name="t", tile_width=1, tile_height=1, tile_count=1,
                          pixels=bytes([255, 128, 0, 128]))
        raw = process_tileset(tileset, ProcessingOptions(premultiply_alpha=True))
        assert raw.pixels == bytes([128, 64, 0, 128])


class TestLookup:

    def test_by_id(self, tilemap_document):
        assert process_tileset_by_id(tilemap_document, 1).name == "props"

    def test_by_index(self, tilemap_document):
        assert process_tileset_by_index(tilemap_document, 0).name == "ground"

    def test_by_name(self, tilemap_document):
        assert process_tileset_by_name(tilemap_document, "props").tile_count == 2

    @pytest.mark.parametrize("lookup,key", [
        (process_tileset_by_id, 9),
        (process_tileset_by_index, 2),
        (process_tileset_by_index, -1),
        (process_tileset_by_name, "water"),
    ])
    def test_not_found(self, tilemap_document, lookup, key):
        with pytest.raises(TilesetNotFound) as exc:
            lookup(tilemap_document, key)
        assert isinstance(exc.value, LookupError)
        assert isinstance(exc.value, AseCompilerError)


class TestExtractTilesets:

    def test_document_order(self, tilemap_document):
        collection = extract_tilesets(tilemap_document)
        assert collection.names == ["ground", "props"]
        assert len(collection) == 2
        assert collection.get("props").tile_count == 2
        assert "ground" in collection
        assert collection.get("water") is None

    def test_distinct_names(self):
        doc = document_with(
            Tileset(id=0, name="ground", tile_width=1, tile_height=1, tile_count=1, pixels=tile_pixels(1, 1, [RED])),
            Tileset(id=1, name="props", tile_width=1, tile_height=1, tile_count=1, pixels=tile_pixels(1, 1, [RED])),
        )
        assert len(process_tileset_collection(doc)) == 2

    def test_duplicate_name_rejected(self):
        doc = document_with(
            Tileset(id=0, name="ground", tile_width=1, tile_height=1, tile_count=1, pixels=tile_pixels(1, 1, [RED])),
            Tileset(id=1, name="ground", tile_width=1, tile_height=1, tile_count=1, pixels=tile_pixels(1, 1, [RED])),
        )
        with pytest.raises(DuplicateTilesetName) as exc:
            extract_tilesets(doc)
        assert exc.value.name == "ground"

    def test_collection_enforces_unique_names(self, ground_tileset):
        raw = process_tileset(ground_tileset)
        with pytest.raises(DuplicateTilesetName):
            RawTilesetCollection(tilesets=(raw, raw))

    def test_empty(self):
        assert len(extract_tilesets(document_with())) == 0
