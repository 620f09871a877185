"""
Raw Descriptor Writer

Encodes raw descriptors to the versioned little-endian raw content format.

Each top-level value is:
    magic (4 bytes) | version u8 | body

Nested values (an atlas inside a sprite sheet, tilesets inside a tilemap)
are written as their body only, with no header and no size of their own.

Bodies:
    Tileset          name | tile_width u32 | tile_height u32 | tile_count u32 | pixels
    TilesetColl.     tileset[]
    Slice            name | x i32 | y i32 | width u32 | height u32 | origin_x i32 | origin_y i32
                     | color u8 x4 | has_center bool | [cx i32 | cy i32 | cw u32 | ch u32]
    TextureRegion    name | x u32 | y u32 | width u32 | height u32 | slice[]
    TextureAtlas     name | width u32 | height u32 | pixels | region[]
    AnimationFrame   region_index u32 | duration u32
    AnimationTag     name | from u32 | to u32 | direction u8 | repeat u32
    SpriteSheet      name | atlas | frame[] | tag[]
    Sprite           name | width u32 | height u32 | pixels | slice[]
    TilemapTile      tile_index u32 | flip flags u8
    TilemapLayer     name | tileset_name | columns u32 | rows u32 | offset_x i32 | offset_y i32 | tile[]
    Tilemap          name | layer[] | tileset[]
    TilemapFrame     duration u32 | layer[]
    AnimatedTilemap  name | tileset[] | frame[]

Strings are u32 length + UTF-8, pixels are u32 count + bytes, arrays are
u32 count + elements.
"""

import io
from pathlib import Path
from typing import BinaryIO, Callable, Dict, Union

from ..constants import (
    MAGIC_ANIMATED_TILEMAP,
    MAGIC_SPRITE,
    MAGIC_SPRITE_SHEET,
    MAGIC_TEXTURE_ATLAS,
    MAGIC_TILEMAP,
    MAGIC_TILESET,
    MAGIC_TILESET_COLLECTION,
    RAW_FORMAT_VERSION,
    TILE_FLIP_DIAGONAL,
    TILE_FLIP_X,
    TILE_FLIP_Y,
)
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
from ..utils import (
    logDebug,
    write_array,
    write_bool,
    write_bytes,
    write_header,
    write_i32,
    write_string,
    write_u32,
    write_u8,
)

RawValue = Union[
    RawTileset, RawTilesetCollection, RawTextureAtlas, RawSpriteSheet,
    RawSprite, RawTilemap, RawAnimatedTilemap,
]


# ---------------------------------------------------------------------------
# Bodies
# ---------------------------------------------------------------------------

def write_tileset_body(f: BinaryIO, tileset: RawTileset):
    write_string(f, tileset.name)
    write_u32(f, tileset.tile_width, 'tile_width')
    write_u32(f, tileset.tile_height, 'tile_height')
    write_u32(f, tileset.tile_count, 'tile_count')
    write_bytes(f, tileset.pixels)


def write_tileset_collection_body(f: BinaryIO, collection: RawTilesetCollection):
    write_array(f, collection.tilesets, write_tileset_body)


def write_slice_body(f: BinaryIO, slice_: RawSlice):
    write_string(f, slice_.name)
    write_i32(f, slice_.x, 'x')
    write_i32(f, slice_.y, 'y')
    write_u32(f, slice_.width, 'width')
    write_u32(f, slice_.height, 'height')
    write_i32(f, slice_.origin_x, 'origin_x')
    write_i32(f, slice_.origin_y, 'origin_y')
    for channel in slice_.color:
        write_u8(f, channel, 'color')
    write_bool(f, slice_.center is not None)
    if slice_.center is not None:
        cx, cy, cw, ch = slice_.center
        write_i32(f, cx, 'center_x')
        write_i32(f, cy, 'center_y')
        write_u32(f, cw, 'center_width')
        write_u32(f, ch, 'center_height')


def write_texture_region_body(f: BinaryIO, region: RawTextureRegion):
    write_string(f, region.name)
    write_u32(f, region.x, 'x')
    write_u32(f, region.y, 'y')
    write_u32(f, region.width, 'width')
    write_u32(f, region.height, 'height')
    write_array(f, region.slices, write_slice_body)


def write_texture_atlas_body(f: BinaryIO, atlas: RawTextureAtlas):
    write_string(f, atlas.name)
    write_u32(f, atlas.width, 'width')
    write_u32(f, atlas.height, 'height')
    write_bytes(f, atlas.pixels)
    write_array(f, atlas.regions, write_texture_region_body)


def write_animation_frame_body(f: BinaryIO, frame: RawAnimationFrame):
    write_u32(f, frame.region_index, 'region_index')
    write_u32(f, frame.duration, 'duration')


def write_animation_tag_body(f: BinaryIO, tag: RawAnimationTag):
    write_string(f, tag.name)
    write_u32(f, tag.from_frame, 'from_frame')
    write_u32(f, tag.to_frame, 'to_frame')
    write_u8(f, int(tag.direction), 'direction')
    write_u32(f, tag.repeat, 'repeat')


def write_sprite_sheet_body(f: BinaryIO, sheet: RawSpriteSheet):
    write_string(f, sheet.name)
    write_texture_atlas_body(f, sheet.atlas)
    write_array(f, sheet.frames, write_animation_frame_body)
    write_array(f, sheet.tags, write_animation_tag_body)


def write_sprite_body(f: BinaryIO, sprite: RawSprite):
    write_string(f, sprite.name)
    write_u32(f, sprite.width, 'width')
    write_u32(f, sprite.height, 'height')
    write_bytes(f, sprite.pixels)
    write_array(f, sprite.slices, write_slice_body)


def pack_tile_flags(tile: RawTilemapTile) -> int:
    flags = 0
    if tile.flip_x:
        flags |= TILE_FLIP_X
    if tile.flip_y:
        flags |= TILE_FLIP_Y
    if tile.flip_diagonal:
        flags |= TILE_FLIP_DIAGONAL
    return flags


def write_tilemap_tile_body(f: BinaryIO, tile: RawTilemapTile):
    write_u32(f, tile.tile_index, 'tile_index')
    write_u8(f, pack_tile_flags(tile))


def write_tilemap_layer_body(f: BinaryIO, layer: RawTilemapLayer):
    write_string(f, layer.name)
    write_string(f, layer.tileset_name)
    write_u32(f, layer.columns, 'columns')
    write_u32(f, layer.rows, 'rows')
    write_i32(f, layer.offset_x, 'offset_x')
    write_i32(f, layer.offset_y, 'offset_y')
    write_array(f, layer.tiles, write_tilemap_tile_body)


def write_tilemap_body(f: BinaryIO, tilemap: RawTilemap):
    write_string(f, tilemap.name)
    write_array(f, tilemap.layers, write_tilemap_layer_body)
    write_array(f, tilemap.tilesets, write_tileset_body)


def write_tilemap_frame_body(f: BinaryIO, frame: RawTilemapFrame):
    write_u32(f, frame.duration, 'duration')
    write_array(f, frame.layers, write_tilemap_layer_body)


def write_animated_tilemap_body(f: BinaryIO, tilemap: RawAnimatedTilemap):
    write_string(f, tilemap.name)
    write_array(f, tilemap.tilesets, write_tileset_body)
    write_array(f, tilemap.frames, write_tilemap_frame_body)


# ---------------------------------------------------------------------------
# Top-level values
# ---------------------------------------------------------------------------

def write_tileset(f: BinaryIO, tileset: RawTileset):
    write_header(f, MAGIC_TILESET, RAW_FORMAT_VERSION)
    write_tileset_body(f, tileset)


def write_tileset_collection(f: BinaryIO, collection: RawTilesetCollection):
    write_header(f, MAGIC_TILESET_COLLECTION, RAW_FORMAT_VERSION)
    write_tileset_collection_body(f, collection)


def write_texture_atlas(f: BinaryIO, atlas: RawTextureAtlas):
    write_header(f, MAGIC_TEXTURE_ATLAS, RAW_FORMAT_VERSION)
    write_texture_atlas_body(f, atlas)


def write_sprite_sheet(f: BinaryIO, sheet: RawSpriteSheet):
    write_header(f, MAGIC_SPRITE_SHEET, RAW_FORMAT_VERSION)
    write_sprite_sheet_body(f, sheet)


def write_sprite(f: BinaryIO, sprite: RawSprite):
    write_header(f, MAGIC_SPRITE, RAW_FORMAT_VERSION)
    write_sprite_body(f, sprite)


def write_tilemap(f: BinaryIO, tilemap: RawTilemap):
    write_header(f, MAGIC_TILEMAP, RAW_FORMAT_VERSION)
    write_tilemap_body(f, tilemap)


def write_animated_tilemap(f: BinaryIO, tilemap: RawAnimatedTilemap):
    write_header(f, MAGIC_ANIMATED_TILEMAP, RAW_FORMAT_VERSION)
    write_animated_tilemap_body(f, tilemap)


_WRITERS: Dict[type, Callable[[BinaryIO, RawValue], None]] = {
    RawTileset: write_tileset,
    RawTilesetCollection: write_tileset_collection,
    RawTextureAtlas: write_texture_atlas,
    RawSpriteSheet: write_sprite_sheet,
    RawSprite: write_sprite,
    RawTilemap: write_tilemap,
    RawAnimatedTilemap: write_animated_tilemap,
}


def write_raw(f: BinaryIO, value: RawValue):
    """
    Write any top-level raw descriptor.

    The value is encoded in memory first, so nothing reaches `f` when a
    field cannot be encoded.

    Raises:
        TypeError: value is not a top-level raw descriptor
        ValueError: A field is out of range for its wire type
    """
    writer = _WRITERS.get(type(value))
    if writer is None:
        raise TypeError(f"Cannot write {type(value).__name__} as a raw descriptor")

    buffer = io.BytesIO()
    try:
        writer(buffer, value)
    except ValueError as e:
        raise ValueError(f"Cannot write {type(value).__name__} '{value_name(value)}': {e}") from e
    f.write(buffer.getvalue())


def serialize_raw(value: RawValue) -> bytes:
    """Encode a raw descriptor to bytes."""
    buffer = io.BytesIO()
    write_raw(buffer, value)
    return buffer.getvalue()


def save_raw(path: Union[str, Path], value: RawValue) -> int:
    """
    Write a raw descriptor to a file.

    Returns:
        Number of bytes written
    """
    data = serialize_raw(value)
    path = Path(path)
    with open(path, 'wb') as f:
        f.write(data)
    logDebug(f"Wrote {type(value).__name__} '{value_name(value)}' to {path} ({len(data)} bytes)")
    return len(data)


def value_name(value: RawValue) -> str:
    """Display name of a raw descriptor (collections have none)."""
    return getattr(value, 'name', '') or ', '.join(getattr(value, 'names', []))
