"""
Constants used across the content compiler modules.

Consolidates magic numbers and shared values for the raw content format
and the compositor.
"""

# Raw content format version written by this package.
# Readers accept any version up to and including this one.
RAW_FORMAT_VERSION = 1

# 4-byte magic tags identifying each raw descriptor kind
MAGIC_TILESET = b'RTST'
MAGIC_TILESET_COLLECTION = b'RTSC'
MAGIC_TEXTURE_ATLAS = b'RTXA'
MAGIC_SPRITE_SHEET = b'RSSH'
MAGIC_SPRITE = b'RSPR'
MAGIC_TILEMAP = b'RTMP'
MAGIC_ANIMATED_TILEMAP = b'RATM'

# Header: magic (4) + version (1)
HEADER_SIZE = 5

# RGBA8
BYTES_PER_PIXEL = 4

# Fully opaque layer / cel opacity
OPACITY_OPAQUE = 255

# Tile flip flags packed into one byte
TILE_FLIP_X = 0x01
TILE_FLIP_Y = 0x02
TILE_FLIP_DIAGONAL = 0x04
