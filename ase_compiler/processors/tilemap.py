"""
Tilemap Processors

Builds raw tilemaps from the TILEMAP layers of a document.

Layers are taken in paint order. Hidden layers (including layers inside a
hidden group) are skipped when only_visible_layers is set, as are layers with
no cel on the frame. Every tileset referenced by an emitted layer is
included exactly once, in order of first reference.
"""

from typing import Dict, List, Optional, Sequence

from .tilesets import process_tileset
from ..config import DEFAULT_OPTIONS, ProcessingOptions
from ..document import CelKind, Document, LayerKind, TilemapCel, compute_effective_visibility
from ..errors import DuplicateLayerName, DuplicateTilesetName, MissingTilesetReference, TileIndexOutOfRange
from ..raw_types import RawAnimatedTilemap, RawTilemap, RawTilemapFrame, RawTilemapLayer, RawTilemapTile, RawTileset
from ..utils import logDebug


def _convert_tiles(layer_name: str, cel: TilemapCel, tile_count: int):
    tiles = []
    for tile in cel.tiles:
        if not 0 <= tile.tile_index < tile_count:
            raise TileIndexOutOfRange(layer_name, tile.tile_index, tile_count)
        tiles.append(RawTilemapTile(
            tile_index=tile.tile_index,
            flip_x=tile.flip_x,
            flip_y=tile.flip_y,
            flip_diagonal=tile.flip_diagonal,
        ))
    return tuple(tiles)


def _build_layers(document: Document, frame_index: int, options: ProcessingOptions,
                  visibility: Sequence[bool], tilesets: Dict[int, RawTileset]) -> List[RawTilemapLayer]:
    """
    Build the tilemap layers of one frame.

    Newly referenced tilesets are added to `tilesets` (keyed by id). Layers
    refer to their tileset by name, so two ids may not share one.
    """
    frame = document.get_frame(frame_index)
    names = set()
    layers = []

    for layer, visible in zip(document.layers, visibility):
        if layer.kind != LayerKind.TILEMAP:
            continue
        if options.only_visible_layers and not visible:
            continue

        cel = document.resolve_cel(frame.index, layer.index)
        if cel is None or cel.kind != CelKind.TILEMAP:
            continue

        if layer.name in names:
            raise DuplicateLayerName(layer.name)
        names.add(layer.name)

        tileset = document.get_tileset_by_id(layer.tileset_id)
        if tileset is None:
            raise MissingTilesetReference(layer.name, layer.tileset_id)
        if tileset.id not in tilesets:
            if any(seen.name == tileset.name for seen in tilesets.values()):
                raise DuplicateTilesetName(tileset.name)
            tilesets[tileset.id] = process_tileset(tileset, options)

        layers.append(RawTilemapLayer(
            name=layer.name,
            tileset_name=tileset.name,
            columns=cel.columns,
            rows=cel.rows,
            offset_x=cel.x,
            offset_y=cel.y,
            tiles=_convert_tiles(layer.name, cel, tileset.tile_count),
        ))

    return layers


def process_tilemap(document: Document, frame_index: int,
                    options: Optional[ProcessingOptions] = None,
                    visibility: Optional[Sequence[bool]] = None) -> RawTilemap:
    """
    Build the tilemap for one frame.

    Raises:
        IndexError: frame_index is out of range
        MissingTilesetReference: A tilemap layer references an unknown tileset id
        TileIndexOutOfRange: A tile index is >= its tileset's tile count
        DuplicateLayerName: Two emitted tilemap layers share a name
        DuplicateTilesetName: Two referenced tilesets share a name
    """
    options = options or DEFAULT_OPTIONS
    if visibility is None:
        visibility = compute_effective_visibility(document.layers)

    tilesets: Dict[int, RawTileset] = {}
    layers = _build_layers(document, frame_index, options, visibility, tilesets)

    logDebug(f"Tilemap '{document.name}' frame {frame_index}: {len(layers)} layer(s), {len(tilesets)} tileset(s)")
    return RawTilemap(name=document.name, layers=tuple(layers), tilesets=tuple(tilesets.values()))


def process_animated_tilemap(document: Document, options: Optional[ProcessingOptions] = None) -> RawAnimatedTilemap:
    """
    Build a tilemap per frame, sharing one tileset list across frames.

    Raises:
        MissingTilesetReference: A tilemap layer references an unknown tileset id
        TileIndexOutOfRange: A tile index is >= its tileset's tile count
        DuplicateLayerName: Two emitted tilemap layers on one frame share a name
        DuplicateTilesetName: Two referenced tilesets share a name
    """
    options = options or DEFAULT_OPTIONS
    visibility = compute_effective_visibility(document.layers)

    tilesets: Dict[int, RawTileset] = {}
    frames = []
    for frame in document.frames:
        layers = _build_layers(document, frame.index, options, visibility, tilesets)
        frames.append(RawTilemapFrame(duration=frame.duration, layers=tuple(layers)))

    logDebug(f"Animated tilemap '{document.name}': {len(frames)} frame(s), {len(tilesets)} tileset(s)")
    return RawAnimatedTilemap(name=document.name, tilesets=tuple(tilesets.values()), frames=tuple(frames))
