"""
Raw Content Parsers

- base: BinaryStreamReader (little-endian primitives, header checks)
- raw_reader: read_* per descriptor, read_raw dispatch, load_raw

Usage:
    from ase_compiler.parsers import load_raw

    sheet = load_raw("player.rssh")
    print(sheet.atlas.width, len(sheet.frames))
"""

from .base import BinaryStreamReader

from .raw_reader import (
    read_tileset,
    read_tileset_collection,
    read_texture_atlas,
    read_sprite_sheet,
    read_sprite,
    read_tilemap,
    read_animated_tilemap,
    read_raw,
    deserialize_raw,
    load_raw,
)

__all__ = [
    'BinaryStreamReader',
    'read_tileset',
    'read_tileset_collection',
    'read_texture_atlas',
    'read_sprite_sheet',
    'read_sprite',
    'read_tilemap',
    'read_animated_tilemap',
    'read_raw',
    'deserialize_raw',
    'load_raw',
]
