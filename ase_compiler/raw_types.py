"""
Raw descriptor types.

Engine-agnostic values produced by the processors and read/written by the
raw codec. They hold no reference back to the document: pixel buffers are
immutable bytes (RGBA8, row major) and collections are tuples, so a
descriptor can be persisted or handed to another thread as-is.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .document.data_types import LoopDirection
from .errors import DuplicateTilesetName

Color = Tuple[int, int, int, int]
Rect = Tuple[int, int, int, int]  # x, y, width, height


@dataclass(frozen=True)
class RawTileset:
    """Tileset with tile_count tiles stacked vertically in pixels."""
    name: str
    tile_width: int
    tile_height: int
    tile_count: int
    pixels: bytes

    @property
    def width(self) -> int:
        return self.tile_width

    @property
    def height(self) -> int:
        return self.tile_height * self.tile_count


@dataclass(frozen=True)
class RawTilesetCollection:
    """Ordered tilesets keyed by unique name."""
    tilesets: Tuple[RawTileset, ...] = ()

    def __post_init__(self):
        seen = set()
        for tileset in self.tilesets:
            if tileset.name in seen:
                raise DuplicateTilesetName(tileset.name)
            seen.add(tileset.name)

    def __len__(self) -> int:
        return len(self.tilesets)

    def __iter__(self):
        return iter(self.tilesets)

    def __contains__(self, name: str) -> bool:
        return any(tileset.name == name for tileset in self.tilesets)

    @property
    def names(self) -> List[str]:
        return [tileset.name for tileset in self.tilesets]

    def get(self, name: str) -> Optional[RawTileset]:
        """Get a tileset by name."""
        for tileset in self.tilesets:
            if tileset.name == name:
                return tileset
        return None

    def as_dict(self) -> Dict[str, RawTileset]:
        return {tileset.name: tileset for tileset in self.tilesets}


@dataclass(frozen=True)
class RawSlice:
    """Slice bounds on one frame. center is set for nine-patch slices."""
    name: str
    x: int
    y: int
    width: int
    height: int
    origin_x: int = 0
    origin_y: int = 0
    color: Color = (0, 0, 0, 0)
    center: Optional[Rect] = None

    @property
    def is_nine_patch(self) -> bool:
        return self.center is not None


@dataclass(frozen=True)
class RawTextureRegion:
    """Named rectangle inside an atlas image."""
    name: str
    x: int
    y: int
    width: int
    height: int
    slices: Tuple[RawSlice, ...] = ()

    @property
    def bounds(self) -> Rect:
        return (self.x, self.y, self.width, self.height)


@dataclass(frozen=True)
class RawTextureAtlas:
    """Packed atlas image and its regions, one region per source frame."""
    name: str
    width: int
    height: int
    pixels: bytes
    regions: Tuple[RawTextureRegion, ...] = ()

    def get_region(self, name: str) -> Optional[RawTextureRegion]:
        for region in self.regions:
            if region.name == name:
                return region
        return None


@dataclass(frozen=True)
class RawAnimationFrame:
    """One animation frame: atlas region index and duration in milliseconds."""
    region_index: int
    duration: int


@dataclass(frozen=True)
class RawAnimationTag:
    """Named frame range with a loop direction."""
    name: str
    from_frame: int
    to_frame: int
    direction: LoopDirection = LoopDirection.FORWARD
    repeat: int = 0  # 0 = loop forever

    @property
    def frame_count(self) -> int:
        return self.to_frame - self.from_frame + 1

    def playback_order(self) -> List[int]:
        """
        Frame indices visited during one cycle of this tag.

        FORWARD           from..to
        REVERSE           to..from
        PING_PONG         from..to..from+1
        PING_PONG_REVERSE to..from..to-1
        """
        forward = list(range(self.from_frame, self.to_frame + 1))
        if self.direction == LoopDirection.FORWARD:
            return forward
        if self.direction == LoopDirection.REVERSE:
            return forward[::-1]
        if self.direction == LoopDirection.PING_PONG:
            return forward + forward[-2:0:-1]
        backward = forward[::-1]
        return backward + backward[-2:0:-1]


@dataclass(frozen=True)
class RawSpriteSheet:
    """Atlas plus per-frame durations and animation tags."""
    name: str
    atlas: RawTextureAtlas
    frames: Tuple[RawAnimationFrame, ...] = ()
    tags: Tuple[RawAnimationTag, ...] = ()

    def get_tag(self, name: str) -> Optional[RawAnimationTag]:
        for tag in self.tags:
            if tag.name == name:
                return tag
        return None

    def animation_frames(self, tag_name: str) -> List[RawAnimationFrame]:
        """
        Frames of a tag in playback order.

        Raises:
            KeyError: No tag with this name
        """
        tag = self.get_tag(tag_name)
        if tag is None:
            raise KeyError(f"Tag '{tag_name}' not found in sprite sheet '{self.name}'")
        return [self.frames[i] for i in tag.playback_order()]


@dataclass(frozen=True)
class RawSprite:
    """Single flattened frame."""
    name: str
    width: int
    height: int
    pixels: bytes
    slices: Tuple[RawSlice, ...] = ()


@dataclass(frozen=True)
class RawTilemapTile:
    tile_index: int
    flip_x: bool = False
    flip_y: bool = False
    flip_diagonal: bool = False


@dataclass(frozen=True)
class RawTilemapLayer:
    """Row-major grid of tiles drawn from one named tileset."""
    name: str
    tileset_name: str
    columns: int
    rows: int
    offset_x: int = 0
    offset_y: int = 0
    tiles: Tuple[RawTilemapTile, ...] = ()

    def tile_at(self, column: int, row: int) -> RawTilemapTile:
        if not (0 <= column < self.columns and 0 <= row < self.rows):
            raise IndexError(f"Tile ({column}, {row}) outside {self.columns}x{self.rows} grid")
        return self.tiles[row * self.columns + column]


@dataclass(frozen=True)
class RawTilemap:
    """Tilemap layers for one frame plus every tileset they reference."""
    name: str
    layers: Tuple[RawTilemapLayer, ...] = ()
    tilesets: Tuple[RawTileset, ...] = ()


@dataclass(frozen=True)
class RawTilemapFrame:
    duration: int
    layers: Tuple[RawTilemapLayer, ...] = ()


@dataclass(frozen=True)
class RawAnimatedTilemap:
    """Tilemap frames with durations, sharing one set of tilesets."""
    name: str
    tilesets: Tuple[RawTileset, ...] = ()
    frames: Tuple[RawTilemapFrame, ...] = ()
