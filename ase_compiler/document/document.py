"""
Aseprite Document

Read-only root of the document model handed over by the container reader.

Provides:
- O(1) cel lookup per (frame, layer), with one-hop linked cel resolution
- compute_effective_visibility: flat per-layer visibility including group gating
- validate: invariant checks for documents built by hand or by other readers
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence, Tuple

from .data_types import (
    Cel, CelKind, Color, Frame, Layer, LayerKind, LinkedCel, Slice, Tag, Tileset,
)
from ..errors import (
    InvalidTagRange, MissingTilesetReference, TileIndexOutOfRange, TilesetNotFound,
)


def compute_effective_visibility(layers: Sequence[Layer]) -> Tuple[bool, ...]:
    """
    Compute the effective visibility of every layer.

    A layer is effectively visible only when it and every ancestor group
    are visible. The result is indexed by layer index.

    Args:
        layers: Document layers, in index order

    Returns:
        Tuple of booleans, one per layer
    """
    by_index = {layer.index: layer for layer in layers}
    resolved: Dict[int, bool] = {}

    def resolve(index: int) -> bool:
        if index in resolved:
            return resolved[index]
        layer = by_index[index]
        visible = layer.visible
        if visible and layer.parent is not None and layer.parent in by_index:
            visible = resolve(layer.parent)
        resolved[index] = visible
        return visible

    return tuple(resolve(layer.index) for layer in layers)


@dataclass(frozen=True)
class Document:
    """
    Parsed Aseprite document.

    Usage:
        doc = Document(name="player", canvas_width=32, canvas_height=32,
                       frames=frames, layers=layers)
        cel = doc.resolve_cel(frame_index=2, layer_index=0)
    """
    name: str
    canvas_width: int
    canvas_height: int
    frames: Tuple[Frame, ...]
    layers: Tuple[Layer, ...]
    tags: Tuple[Tag, ...] = ()
    slices: Tuple[Slice, ...] = ()
    tilesets: Tuple[Tileset, ...] = ()
    palette: Tuple[Color, ...] = ()

    # (frame_index, layer_index) -> cel, built once
    _cel_index: Dict[Tuple[int, int], Cel] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        index: Dict[Tuple[int, int], Cel] = {}
        for frame in self.frames:
            for cel in frame.cels:
                index[(frame.index, cel.layer_index)] = cel
        object.__setattr__(self, '_cel_index', index)

    @property
    def frame_count(self) -> int:
        return len(self.frames)

    def get_frame(self, frame_index: int) -> Frame:
        """Get a frame by index."""
        if frame_index < 0 or frame_index >= len(self.frames):
            raise IndexError(f"Frame index {frame_index} out of range [0, {len(self.frames)})")
        return self.frames[frame_index]

    def get_layer(self, layer_index: int) -> Layer:
        """Get a layer by index."""
        if layer_index < 0 or layer_index >= len(self.layers):
            raise IndexError(f"Layer index {layer_index} out of range [0, {len(self.layers)})")
        return self.layers[layer_index]

    def get_tag(self, name: str) -> Optional[Tag]:
        """Get a tag by name."""
        for tag in self.tags:
            if tag.name == name:
                return tag
        return None

    def get_tileset_by_id(self, tileset_id: int) -> Optional[Tileset]:
        """Get a tileset by id."""
        for tileset in self.tilesets:
            if tileset.id == tileset_id:
                return tileset
        return None

    def get_tileset_by_name(self, name: str) -> Optional[Tileset]:
        """Get a tileset by name."""
        for tileset in self.tilesets:
            if tileset.name == name:
                return tileset
        return None

    def get_cel(self, frame_index: int, layer_index: int) -> Optional[Cel]:
        """Get the cel stored for (frame, layer) without resolving links."""
        return self._cel_index.get((frame_index, layer_index))

    def resolve_cel(self, frame_index: int, layer_index: int) -> Optional[Cel]:
        """
        Get the concrete cel for (frame, layer).

        A linked cel is replaced by the cel on its target frame. Links always
        point at a concrete cel, so this is a single lookup.

        Returns:
            ImageCel or TilemapCel, or None if the layer has no cel on this frame
        """
        cel = self._cel_index.get((frame_index, layer_index))
        if cel is not None and cel.kind == CelKind.LINKED:
            cel = self._cel_index.get((cel.target_frame, layer_index))
            if cel is not None and cel.kind == CelKind.LINKED:
                raise ValueError(
                    f"Linked cel on frame {frame_index}, layer {layer_index} points at another linked cel"
                )
        return cel

    def effective_visibility(self) -> Tuple[bool, ...]:
        """Per-layer visibility including group gating."""
        return compute_effective_visibility(self.layers)

    def validate(self):
        """
        Check document invariants.

        Raises:
            ValueError: Frame/layer indices not contiguous, or a bad linked cel
            InvalidTagRange: A tag lies outside the frame range
            MissingTilesetReference: A tilemap layer references an unknown tileset
            TileIndexOutOfRange: A tilemap cel references a tile past the tileset end
        """
        for i, frame in enumerate(self.frames):
            if frame.index != i:
                raise ValueError(f"Frame at position {i} has index {frame.index}")

        for i, layer in enumerate(self.layers):
            if layer.index != i:
                raise ValueError(f"Layer at position {i} has index {layer.index}")
            if layer.parent is not None:
                if not 0 <= layer.parent < len(self.layers):
                    raise ValueError(f"Layer '{layer.name}' has unknown parent {layer.parent}")
                if self.layers[layer.parent].kind != LayerKind.GROUP:
                    raise ValueError(f"Layer '{layer.name}' parent {layer.parent} is not a group")

        for tag in self.tags:
            if not 0 <= tag.from_frame <= tag.to_frame < len(self.frames):
                raise InvalidTagRange(tag.name, tag.from_frame, tag.to_frame, len(self.frames))

        for layer in self.layers:
            if layer.kind != LayerKind.TILEMAP:
                continue
            tileset = self.get_tileset_by_id(layer.tileset_id)
            if tileset is None:
                raise MissingTilesetReference(layer.name, layer.tileset_id)
            for frame in self.frames:
                cel = self.resolve_cel(frame.index, layer.index)
                if cel is None or cel.kind != CelKind.TILEMAP:
                    continue
                for tile in cel.tiles:
                    if not 0 <= tile.tile_index < tileset.tile_count:
                        raise TileIndexOutOfRange(layer.name, tile.tile_index, tileset.tile_count)

        for (frame_index, layer_index), cel in self._cel_index.items():
            if isinstance(cel, LinkedCel):
                target = self._cel_index.get((cel.target_frame, layer_index))
                if target is None or target.kind == CelKind.LINKED:
                    raise ValueError(
                        f"Linked cel on frame {frame_index}, layer {layer_index} "
                        f"does not point at a concrete cel"
                    )


def find_tileset(document: Document, tileset_id: int) -> Tileset:
    """Get a tileset by id, raising TilesetNotFound if it does not exist."""
    tileset = document.get_tileset_by_id(tileset_id)
    if tileset is None:
        raise TilesetNotFound(tileset_id)
    return tileset
