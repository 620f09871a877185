"""
Serialization Package

Writes raw descriptors in the raw content format read back by
ase_compiler.parsers.

- raw_writer: write_* per descriptor, write_raw dispatch, save_raw
"""

from .raw_writer import (
    write_tileset,
    write_tileset_collection,
    write_texture_atlas,
    write_sprite_sheet,
    write_sprite,
    write_tilemap,
    write_animated_tilemap,
    write_raw,
    serialize_raw,
    save_raw,
    pack_tile_flags,
    value_name,
)

__all__ = [
    'write_tileset',
    'write_tileset_collection',
    'write_texture_atlas',
    'write_sprite_sheet',
    'write_sprite',
    'write_tilemap',
    'write_animated_tilemap',
    'write_raw',
    'serialize_raw',
    'save_raw',
    'pack_tile_flags',
    'value_name',
]
