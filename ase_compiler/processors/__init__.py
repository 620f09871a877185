"""
Content Processors

Turn a Document into raw descriptors.

- tilesets: tileset extraction and lookup by id / index / name
- slices: per-frame slice resolution
- atlas_layout: frame placement inside an atlas image
- texture_atlas: flattened frames packed into one image
- sprite_sheet: atlas plus frame durations and animation tags
- sprite: one flattened frame
- tilemap: static and animated tilemaps

Usage:
    from ase_compiler.processors import process_sprite_sheet

    sheet = process_sprite_sheet(document)
    walk = sheet.animation_frames("walk")
"""

from .tilesets import (
    process_tileset,
    process_tileset_by_id,
    process_tileset_by_index,
    process_tileset_by_name,
    extract_tilesets,
    process_tileset_collection,
)

from .slices import slices_for_frame, key_for_frame

from .atlas_layout import AtlasPlacement, compute_layout

from .texture_atlas import process_texture_atlas, find_duplicates, region_name

from .sprite_sheet import process_sprite_sheet, process_animation_tags

from .sprite import process_sprite

from .tilemap import process_tilemap, process_animated_tilemap

__all__ = [
    # Tilesets
    'process_tileset',
    'process_tileset_by_id',
    'process_tileset_by_index',
    'process_tileset_by_name',
    'extract_tilesets',
    'process_tileset_collection',
    # Slices
    'slices_for_frame',
    'key_for_frame',
    # Atlas
    'AtlasPlacement',
    'compute_layout',
    'process_texture_atlas',
    'find_duplicates',
    'region_name',
    # Sprite sheet / sprite
    'process_sprite_sheet',
    'process_animation_tags',
    'process_sprite',
    # Tilemaps
    'process_tilemap',
    'process_animated_tilemap',
]
