"""
Error types raised by the content compiler.

Every error derives from AseCompilerError so tools can catch the whole
family, and also from the builtin exception that fits the situation
(ValueError for bad input, LookupError for failed lookups, IndexError for
out-of-range indices) so plain `except ValueError` code keeps working.
"""


class AseCompilerError(Exception):
    """Base class for all content compiler errors."""


# ---------------------------------------------------------------------------
# Processing errors
# ---------------------------------------------------------------------------

class DuplicateTilesetName(AseCompilerError, ValueError):
    """Two tilesets in one document share a name."""

    def __init__(self, name: str):
        super().__init__(f"Duplicate tileset name '{name}' found. Tileset names must be unique")
        self.name = name


class TilesetNotFound(AseCompilerError, LookupError):
    """A tileset was requested by id, index or name and does not exist."""

    def __init__(self, key):
        super().__init__(f"Tileset {key!r} not found")
        self.key = key


class MissingTilesetReference(AseCompilerError, LookupError):
    """A tilemap layer references a tileset id that is not in the document."""

    def __init__(self, layer_name: str, tileset_id):
        super().__init__(f"Tilemap layer '{layer_name}' references missing tileset id {tileset_id}")
        self.layer_name = layer_name
        self.tileset_id = tileset_id


class InvalidTagRange(AseCompilerError, ValueError):
    """A tag's frame range lies outside the document's frames."""

    def __init__(self, name: str, from_frame: int, to_frame: int, frame_count: int):
        super().__init__(
            f"Tag '{name}' range [{from_frame}, {to_frame}] is outside frames [0, {frame_count})"
        )
        self.name = name
        self.from_frame = from_frame
        self.to_frame = to_frame
        self.frame_count = frame_count


class TileIndexOutOfRange(AseCompilerError, IndexError):
    """A tilemap cel references a tile index >= the tileset's tile count."""

    def __init__(self, layer_name: str, tile_index: int, tile_count: int):
        super().__init__(
            f"Tile index {tile_index} on layer '{layer_name}' out of range [0, {tile_count})"
        )
        self.layer_name = layer_name
        self.tile_index = tile_index
        self.tile_count = tile_count


class DuplicateTagName(AseCompilerError, ValueError):
    """Two tags share a name; sprite sheets need unique tag names."""

    def __init__(self, name: str):
        super().__init__(f"Duplicate tag name '{name}' found. Tags must have unique names for a sprite sheet")
        self.name = name


class DuplicateLayerName(AseCompilerError, ValueError):
    """Two tilemap layers share a name; tilemaps need unique layer names."""

    def __init__(self, name: str):
        super().__init__(f"Duplicate layer name '{name}' found. Layer names must be unique for tilemaps")
        self.name = name


class DuplicateSliceName(AseCompilerError, ValueError):
    """Two slices share a name."""

    def __init__(self, name: str):
        super().__init__(f"Duplicate slice name '{name}' found. Slices must have unique names")
        self.name = name


# ---------------------------------------------------------------------------
# Codec errors
# ---------------------------------------------------------------------------

class UnsupportedFormat(AseCompilerError, ValueError):
    """The stream does not start with the expected magic tag, or holds an invalid value."""


class UnsupportedVersion(AseCompilerError, ValueError):
    """The stream was written by a newer format version than this reader knows."""

    def __init__(self, version: int, highest: int):
        super().__init__(f"Unsupported raw format version {version} (highest known: {highest})")
        self.version = version
        self.highest = highest


class UnexpectedEndOfData(AseCompilerError, ValueError):
    """The stream ended before a length field's promised bytes were available."""

    def __init__(self, wanted: int, available: int, offset: int):
        super().__init__(
            f"Unexpected end of data at offset {offset}: wanted {wanted} bytes, got {available}"
        )
        self.wanted = wanted
        self.available = available
        self.offset = offset
