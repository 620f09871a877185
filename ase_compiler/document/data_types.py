"""
Data types for the Aseprite document model.

The document is produced by an external container-format reader and is
consumed here read-only: every type is a frozen dataclass and every
collection is a tuple.

Cels and layers are closed tagged variants. Each carries an explicit `kind`
discriminator, and consumers match only the kinds they understand.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional, Tuple, Union


class LayerKind(IntEnum):
    """Layer type as stored in the layer chunk."""
    IMAGE = 0
    GROUP = 1
    TILEMAP = 2


class CelKind(IntEnum):
    IMAGE = 0
    LINKED = 1
    TILEMAP = 3


class BlendMode(IntEnum):
    """Layer blend modes, numbered as in the .aseprite layer chunk."""
    NORMAL = 0
    MULTIPLY = 1
    SCREEN = 2
    OVERLAY = 3
    DARKEN = 4
    LIGHTEN = 5
    COLOR_DODGE = 6
    COLOR_BURN = 7
    HARD_LIGHT = 8
    SOFT_LIGHT = 9
    DIFFERENCE = 10
    EXCLUSION = 11
    HUE = 12
    SATURATION = 13
    COLOR = 14
    LUMINOSITY = 15
    ADDITION = 16
    SUBTRACT = 17
    DIVIDE = 18


class LoopDirection(IntEnum):
    FORWARD = 0
    REVERSE = 1
    PING_PONG = 2
    PING_PONG_REVERSE = 3


Color = Tuple[int, int, int, int]  # RGBA8


@dataclass(frozen=True)
class UserData:
    """Optional text/color attached to layers, cels, tags and slices."""
    text: Optional[str] = None
    color: Optional[Color] = None


@dataclass(frozen=True)
class Layer:
    """A layer in paint order (index 0 is painted first)."""
    index: int
    name: str
    kind: LayerKind = LayerKind.IMAGE
    visible: bool = True
    opacity: int = 255
    blend_mode: BlendMode = BlendMode.NORMAL
    parent: Optional[int] = None  # Index of the parent group layer
    is_background: bool = False
    tileset_id: Optional[int] = None  # Tilemap layers only
    user_data: Optional[UserData] = None

    @property
    def is_group(self) -> bool:
        return self.kind == LayerKind.GROUP

    @property
    def is_tilemap(self) -> bool:
        return self.kind == LayerKind.TILEMAP


@dataclass(frozen=True)
class Tile:
    """A single tile reference inside a tilemap cel."""
    tile_index: int
    flip_x: bool = False
    flip_y: bool = False
    flip_diagonal: bool = False


@dataclass(frozen=True)
class ImageCel:
    """Raw pixel cel. Pixels are straight-alpha RGBA8, row major."""
    layer_index: int
    x: int
    y: int
    width: int
    height: int
    pixels: bytes
    opacity: int = 255
    user_data: Optional[UserData] = None
    kind: CelKind = field(default=CelKind.IMAGE, init=False)


@dataclass(frozen=True)
class TilemapCel:
    """Tile index grid cel. Tiles are row major, columns * rows entries."""
    layer_index: int
    x: int
    y: int
    columns: int
    rows: int
    tiles: Tuple[Tile, ...]
    opacity: int = 255
    user_data: Optional[UserData] = None
    kind: CelKind = field(default=CelKind.TILEMAP, init=False)


@dataclass(frozen=True)
class LinkedCel:
    """
    Cel with no data of its own.

    target_frame is the concrete frame holding the real cel for the same
    layer, resolved at construction time by the document reader.
    """
    layer_index: int
    target_frame: int
    kind: CelKind = field(default=CelKind.LINKED, init=False)


Cel = Union[ImageCel, TilemapCel, LinkedCel]


@dataclass(frozen=True)
class Frame:
    """One animation frame and its cels."""
    index: int
    width: int
    height: int
    duration: int  # milliseconds
    cels: Tuple[Cel, ...] = ()

    def get_cel(self, layer_index: int) -> Optional[Cel]:
        """Get this frame's cel on a layer, or None if the layer has no cel here."""
        for cel in self.cels:
            if cel.layer_index == layer_index:
                return cel
        return None


@dataclass(frozen=True)
class Tag:
    """Named inclusive frame range with a loop direction."""
    name: str
    from_frame: int
    to_frame: int
    direction: LoopDirection = LoopDirection.FORWARD
    repeat: int = 0  # 0 = loop forever
    color: Optional[Color] = None

    @property
    def frame_count(self) -> int:
        return self.to_frame - self.from_frame + 1


@dataclass(frozen=True)
class SliceKey:
    """
    Slice keyframe. In effect from frame_index until the next key or the
    end of the animation.
    """
    frame_index: int
    x: int
    y: int
    width: int
    height: int
    center: Optional[Tuple[int, int, int, int]] = None  # Nine-patch center (x, y, w, h)
    pivot: Optional[Tuple[int, int]] = None


@dataclass(frozen=True)
class Slice:
    name: str
    keys: Tuple[SliceKey, ...]
    color: Optional[Color] = None


@dataclass(frozen=True)
class Tileset:
    """
    Tileset with tile_count tiles stacked vertically.

    pixels is tile_width x (tile_count * tile_height) straight-alpha RGBA8.
    """
    id: int
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
