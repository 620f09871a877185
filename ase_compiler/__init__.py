"""
Aseprite Content Compiler

Turns parsed Aseprite documents into flattened pixel buffers and raw
descriptors, and reads/writes those descriptors in a versioned binary format.

- document: read-only document model
- compositing: frame flattening and blend modes
- processors: sprite, sprite sheet, texture atlas, tileset and tilemap builders
- serialization / parsers: raw descriptor writer and reader
- config: processing options and INI loader
"""

__version__ = "1.0.0"
