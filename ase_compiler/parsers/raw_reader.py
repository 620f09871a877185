"""
Raw Descriptor Reader

Decodes values written by ase_compiler.serialization.raw_writer. The field
order of every body mirrors the writer; see the layout table there.
"""

import io
from pathlib import Path
from typing import BinaryIO, Callable, Dict, Union

from .base import BinaryStreamReader
from ..constants import (
    MAGIC_ANIMATED_TILEMAP,
    MAGIC_SPRITE,
    MAGIC_SPRITE_SHEET,
    MAGIC_TEXTURE_ATLAS,
    MAGIC_TILEMAP,
    MAGIC_TILESET,
    MAGIC_TILESET_COLLECTION,
    TILE_FLIP_DIAGONAL,
    TILE_FLIP_X,
    TILE_FLIP_Y,
)
from ..document.data_types import LoopDirection
from ..errors import UnsupportedFormat
from ..raw_types import (
    RawAnimatedTilemap,
    RawAnimationFrame,
    RawAnimationTag,
    RawSlice,
    RawSprite,
    RawSpriteSheet,
    RawTextureAtlas,
    RawTextureRegion,
    RawTilemap,
    RawTilemapFrame,
    RawTilemapLayer,
    RawTilemapTile,
    RawTileset,
    RawTilesetCollection,
)
from ..utils import logDebug

_TILE_FLAGS = TILE_FLIP_X | TILE_FLIP_Y | TILE_FLIP_DIAGONAL

RawValue = Union[
    RawTileset, RawTilesetCollection, RawTextureAtlas, RawSpriteSheet,
    RawSprite, RawTilemap, RawAnimatedTilemap,
]


# ---------------------------------------------------------------------------
# Bodies
# ---------------------------------------------------------------------------

def read_tileset_body(r: BinaryStreamReader) -> RawTileset:
    return RawTileset(
        name=r.read_string(),
        tile_width=r.read_u32(),
        tile_height=r.read_u32(),
        tile_count=r.read_u32(),
        pixels=r.read_bytes(),
    )


def read_tileset_collection_body(r: BinaryStreamReader) -> RawTilesetCollection:
    return RawTilesetCollection(tilesets=tuple(r.read_array(read_tileset_body)))


def read_slice_body(r: BinaryStreamReader) -> RawSlice:
    name = r.read_string()
    x = r.read_i32()
    y = r.read_i32()
    width = r.read_u32()
    height = r.read_u32()
    origin_x = r.read_i32()
    origin_y = r.read_i32()
    color = tuple(r.read_u8() for _ in range(4))
    center = None
    if r.read_bool():
        center = (r.read_i32(), r.read_i32(), r.read_u32(), r.read_u32())
    return RawSlice(name, x, y, width, height, origin_x, origin_y, color, center)


def read_texture_region_body(r: BinaryStreamReader) -> RawTextureRegion:
    return RawTextureRegion(
        name=r.read_string(),
        x=r.read_u32(),
        y=r.read_u32(),
        width=r.read_u32(),
        height=r.read_u32(),
        slices=tuple(r.read_array(read_slice_body)),
    )


def read_texture_atlas_body(r: BinaryStreamReader) -> RawTextureAtlas:
    return RawTextureAtlas(
        name=r.read_string(),
        width=r.read_u32(),
        height=r.read_u32(),
        pixels=r.read_bytes(),
        regions=tuple(r.read_array(read_texture_region_body)),
    )


def read_animation_frame_body(r: BinaryStreamReader) -> RawAnimationFrame:
    return RawAnimationFrame(region_index=r.read_u32(), duration=r.read_u32())


def read_loop_direction(r: BinaryStreamReader) -> LoopDirection:
    value = r.read_u8()
    try:
        return LoopDirection(value)
    except ValueError as e:
        raise UnsupportedFormat(f"Invalid loop direction {value} at offset {r.offset - 1}") from e


def read_animation_tag_body(r: BinaryStreamReader) -> RawAnimationTag:
    return RawAnimationTag(
        name=r.read_string(),
        from_frame=r.read_u32(),
        to_frame=r.read_u32(),
        direction=read_loop_direction(r),
        repeat=r.read_u32(),
    )


def read_sprite_sheet_body(r: BinaryStreamReader) -> RawSpriteSheet:
    return RawSpriteSheet(
        name=r.read_string(),
        atlas=read_texture_atlas_body(r),
        frames=tuple(r.read_array(read_animation_frame_body)),
        tags=tuple(r.read_array(read_animation_tag_body)),
    )


def read_sprite_body(r: BinaryStreamReader) -> RawSprite:
    return RawSprite(
        name=r.read_string(),
        width=r.read_u32(),
        height=r.read_u32(),
        pixels=r.read_bytes(),
        slices=tuple(r.read_array(read_slice_body)),
    )


def read_tilemap_tile_body(r: BinaryStreamReader) -> RawTilemapTile:
    tile_index = r.read_u32()
    flags = r.read_u8()
    if flags & ~_TILE_FLAGS:
        raise UnsupportedFormat(f"Invalid tile flags 0x{flags:02x} at offset {r.offset - 1}")
    return RawTilemapTile(
        tile_index=tile_index,
        flip_x=bool(flags & TILE_FLIP_X),
        flip_y=bool(flags & TILE_FLIP_Y),
        flip_diagonal=bool(flags & TILE_FLIP_DIAGONAL),
    )


def read_tilemap_layer_body(r: BinaryStreamReader) -> RawTilemapLayer:
    return RawTilemapLayer(
        name=r.read_string(),
        tileset_name=r.read_string(),
        columns=r.read_u32(),
        rows=r.read_u32(),
        offset_x=r.read_i32(),
        offset_y=r.read_i32(),
        tiles=tuple(r.read_array(read_tilemap_tile_body)),
    )


def read_tilemap_body(r: BinaryStreamReader) -> RawTilemap:
    return RawTilemap(
        name=r.read_string(),
        layers=tuple(r.read_array(read_tilemap_layer_body)),
        tilesets=tuple(r.read_array(read_tileset_body)),
    )


def read_tilemap_frame_body(r: BinaryStreamReader) -> RawTilemapFrame:
    return RawTilemapFrame(
        duration=r.read_u32(),
        layers=tuple(r.read_array(read_tilemap_layer_body)),
    )


def read_animated_tilemap_body(r: BinaryStreamReader) -> RawAnimatedTilemap:
    return RawAnimatedTilemap(
        name=r.read_string(),
        tilesets=tuple(r.read_array(read_tileset_body)),
        frames=tuple(r.read_array(read_tilemap_frame_body)),
    )


# ---------------------------------------------------------------------------
# Top-level values
# ---------------------------------------------------------------------------

_BODY_READERS: Dict[bytes, Callable[[BinaryStreamReader], RawValue]] = {
    MAGIC_TILESET: read_tileset_body,
    MAGIC_TILESET_COLLECTION: read_tileset_collection_body,
    MAGIC_TEXTURE_ATLAS: read_texture_atlas_body,
    MAGIC_SPRITE_SHEET: read_sprite_sheet_body,
    MAGIC_SPRITE: read_sprite_body,
    MAGIC_TILEMAP: read_tilemap_body,
    MAGIC_ANIMATED_TILEMAP: read_animated_tilemap_body,
}


def _read_value(f: BinaryIO, magic: bytes):
    r = BinaryStreamReader(f)
    r.read_header(magic)
    return _BODY_READERS[magic](r)


def read_tileset(f: BinaryIO) -> RawTileset:
    return _read_value(f, MAGIC_TILESET)


def read_tileset_collection(f: BinaryIO) -> RawTilesetCollection:
    return _read_value(f, MAGIC_TILESET_COLLECTION)


def read_texture_atlas(f: BinaryIO) -> RawTextureAtlas:
    return _read_value(f, MAGIC_TEXTURE_ATLAS)


def read_sprite_sheet(f: BinaryIO) -> RawSpriteSheet:
    return _read_value(f, MAGIC_SPRITE_SHEET)


def read_sprite(f: BinaryIO) -> RawSprite:
    return _read_value(f, MAGIC_SPRITE)


def read_tilemap(f: BinaryIO) -> RawTilemap:
    return _read_value(f, MAGIC_TILEMAP)


def read_animated_tilemap(f: BinaryIO) -> RawAnimatedTilemap:
    return _read_value(f, MAGIC_ANIMATED_TILEMAP)


def read_raw(f: BinaryIO) -> RawValue:
    """
    Read any top-level raw descriptor, dispatching on its magic tag.

    Raises:
        UnsupportedFormat: Unknown magic tag or invalid field value
        UnsupportedVersion: Format version newer than this reader
        UnexpectedEndOfData: Stream ended inside the value
    """
    r = BinaryStreamReader(f)
    magic = r.read_magic()
    body_reader = _BODY_READERS.get(magic)
    if body_reader is None:
        raise UnsupportedFormat(f"Unknown raw descriptor magic {magic!r}")
    r.read_version()
    return body_reader(r)


def deserialize_raw(data: bytes) -> RawValue:
    """Decode a raw descriptor from bytes."""
    return read_raw(io.BytesIO(data))


def load_raw(path: Union[str, Path]) -> RawValue:
    """
    Read a raw descriptor file.

    Raises:
        FileNotFoundError: File does not exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Raw descriptor file not found: {path}")

    with open(path, 'rb') as f:
        value = read_raw(f)
    logDebug(f"Loaded {type(value).__name__} from {path}")
    return value
