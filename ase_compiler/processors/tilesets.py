"""
Tileset Extractor

Copies document tilesets into RawTileset descriptors. Lookup is available by
id, by position in the document's tileset list, and by name. Tileset names
must be unique once extracted, since raw tilemaps refer to tilesets by name.
"""

from typing import Optional

import numpy as np

from ..compositing import premultiply
from ..config import DEFAULT_OPTIONS, ProcessingOptions
from ..constants import BYTES_PER_PIXEL
from ..document import Document, Tileset, find_tileset
from ..errors import DuplicateTilesetName, TilesetNotFound
from ..raw_types import RawTileset, RawTilesetCollection
from ..utils import logDebug


def process_tileset(tileset: Tileset, options: Optional[ProcessingOptions] = None) -> RawTileset:
    """
    Convert one document tileset.

    Raises:
        ValueError: Pixel buffer size does not match the tileset dimensions
    """
    options = options or DEFAULT_OPTIONS

    expected = tileset.tile_width * tileset.tile_height * tileset.tile_count * BYTES_PER_PIXEL
    if len(tileset.pixels) != expected:
        raise ValueError(
            f"Tileset '{tileset.name}' has {len(tileset.pixels)} pixel bytes, expected {expected}"
        )

    pixels = bytes(tileset.pixels)
    if options.premultiply_alpha and pixels:
        image = np.frombuffer(pixels, dtype=np.uint8).reshape(-1, BYTES_PER_PIXEL).astype(np.int32)
        pixels = premultiply(image).astype(np.uint8).tobytes()

    return RawTileset(
        name=tileset.name,
        tile_width=tileset.tile_width,
        tile_height=tileset.tile_height,
        tile_count=tileset.tile_count,
        pixels=pixels,
    )


def process_tileset_by_id(document: Document, tileset_id: int,
                          options: Optional[ProcessingOptions] = None) -> RawTileset:
    """Process the tileset with the given id, raising TilesetNotFound if absent."""
    return process_tileset(find_tileset(document, tileset_id), options)


def process_tileset_by_index(document: Document, index: int,
                             options: Optional[ProcessingOptions] = None) -> RawTileset:
    """Process the tileset at a position in the document's tileset list."""
    if index < 0 or index >= len(document.tilesets):
        raise TilesetNotFound(index)
    return process_tileset(document.tilesets[index], options)


def process_tileset_by_name(document: Document, name: str,
                            options: Optional[ProcessingOptions] = None) -> RawTileset:
    """Process the tileset with the given name, raising TilesetNotFound if absent."""
    tileset = document.get_tileset_by_name(name)
    if tileset is None:
        raise TilesetNotFound(name)
    return process_tileset(tileset, options)


def extract_tilesets(document: Document, options: Optional[ProcessingOptions] = None) -> RawTilesetCollection:
    """
    Extract every tileset in document order.

    Raises:
        DuplicateTilesetName: Two tilesets share a name
    """
    seen = set()
    tilesets = []
    for tileset in document.tilesets:
        if tileset.name in seen:
            raise DuplicateTilesetName(tileset.name)
        seen.add(tileset.name)
        tilesets.append(process_tileset(tileset, options))

    logDebug(f"Extracted {len(tilesets)} tileset(s) from '{document.name}'")
    return RawTilesetCollection(tilesets=tuple(tilesets))


def process_tileset_collection(document: Document,
                               options: Optional[ProcessingOptions] = None) -> RawTilesetCollection:
    """Build the tileset collection for a document."""
    return extract_tilesets(document, options)
