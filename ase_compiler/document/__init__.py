"""
Aseprite Document Model

Read-only input consumed by the compositor and processors. Documents are
built by an external container-format reader; this package only defines the
shape it hands over.

- data_types: frames, layers, cels (closed tagged variants), tags, slices, tilesets
- document: Document root, linked cel resolution, effective visibility
"""

from .data_types import (
    LayerKind,
    CelKind,
    BlendMode,
    LoopDirection,
    Color,
    UserData,
    Layer,
    Tile,
    ImageCel,
    TilemapCel,
    LinkedCel,
    Cel,
    Frame,
    Tag,
    SliceKey,
    Slice,
    Tileset,
)

from .document import (
    Document,
    compute_effective_visibility,
    find_tileset,
)

__all__ = [
    'LayerKind',
    'CelKind',
    'BlendMode',
    'LoopDirection',
    'Color',
    'UserData',
    'Layer',
    'Tile',
    'ImageCel',
    'TilemapCel',
    'LinkedCel',
    'Cel',
    'Frame',
    'Tag',
    'SliceKey',
    'Slice',
    'Tileset',
    'Document',
    'compute_effective_visibility',
    'find_tileset',
]
