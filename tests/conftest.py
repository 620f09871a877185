"""
Shared fixtures for ase_compiler tests.

Provides small hand-built documents: a four-frame sprite with a tag and a
slice, and a tilemap document with two tilesets and a hidden group.
"""
import sys
import os
import pytest

import numpy as np

# Ensure the project root is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from ase_compiler.document import (
    Document, Frame, ImageCel, Layer, LayerKind, LinkedCel, LoopDirection,
    Slice, SliceKey, Tag, Tile, TilemapCel, Tileset,
)
from ase_compiler.utils import reset_counts


RED = (255, 0, 0, 255)
GREEN = (0, 255, 0, 255)
BLUE = (0, 0, 255, 255)


def solid_pixels(width, height, rgba):
    """RGBA8 bytes of a width x height image filled with one colour."""
    image = np.empty((height, width, 4), dtype=np.uint8)
    image[:, :] = rgba
    return image.tobytes()


def tile_pixels(tile_width, tile_height, colors):
    """Vertically stacked tiles, one solid colour per tile."""
    return b''.join(solid_pixels(tile_width, tile_height, c) for c in colors)


# ── Sprite document ──────────────────────────────────────────────────────

@pytest.fixture
def solid():
    return solid_pixels


@pytest.fixture
def sprite_document():
    """
    2x2 'player' with four frames: red, green, red, blue.

    Frame 2 duplicates frame 0. Tag 'walk' covers all frames. Slice 'hitbox'
    changes bounds on frame 2.
    """
    layers = (Layer(index=0, name="body"),)
    colors = (RED, GREEN, RED, BLUE)
    durations = (100, 100, 150, 100)
    frames = tuple(
        Frame(index=i, width=2, height=2, duration=durations[i],
              cels=(ImageCel(layer_index=0, x=0, y=0, width=2, height=2,
                             pixels=solid_pixels(2, 2, colors[i])),))
        for i in range(4)
    )
    tags = (Tag(name="walk", from_frame=0, to_frame=3, direction=LoopDirection.FORWARD),)
    slices = (
        Slice(name="hitbox", keys=(
            SliceKey(frame_index=0, x=0, y=0, width=1, height=1),
            SliceKey(frame_index=2, x=1, y=1, width=1, height=1, pivot=(1, 0)),
        )),
    )
    return Document(name="player", canvas_width=2, canvas_height=2,
                    frames=frames, layers=layers, tags=tags, slices=slices)


# ── Tilemap document ─────────────────────────────────────────────────────

@pytest.fixture
def ground_tileset():
    return Tileset(id=0, name="ground", tile_width=2, tile_height=2, tile_count=3,
                   pixels=tile_pixels(2, 2, (RED, GREEN, BLUE)))


@pytest.fixture
def props_tileset():
    return Tileset(id=1, name="props", tile_width=2, tile_height=2, tile_count=2,
                   pixels=tile_pixels(2, 2, (GREEN, BLUE)))


@pytest.fixture
def tilemap_document(ground_tileset, props_tileset):
    """
    'level' with two frames.

    Layers:
        0 floor   tilemap (ground)
        1 decor   tilemap (props)
        2 hidden  group, not visible
        3 secret  tilemap (ground), child of 'hidden'

    Frame 1 links 'floor' back to frame 0.
    """
    layers = (
        Layer(index=0, name="floor", kind=LayerKind.TILEMAP, tileset_id=0),
        Layer(index=1, name="decor", kind=LayerKind.TILEMAP, tileset_id=1),
        Layer(index=2, name="hidden", kind=LayerKind.GROUP, visible=False),
        Layer(index=3, name="secret", kind=LayerKind.TILEMAP, tileset_id=0, parent=2),
    )
    floor = TilemapCel(layer_index=0, x=0, y=0, columns=2, rows=1,
                       tiles=(Tile(1), Tile(2, flip_x=True, flip_diagonal=True)))
    decor = TilemapCel(layer_index=1, x=4, y=-2, columns=1, rows=1, tiles=(Tile(1, flip_y=True),))
    secret = TilemapCel(layer_index=3, x=0, y=0, columns=1, rows=1, tiles=(Tile(0),))
    decor_moved = TilemapCel(layer_index=1, x=6, y=0, columns=1, rows=1, tiles=(Tile(0),))

    frames = (
        Frame(index=0, width=8, height=8, duration=200, cels=(floor, decor, secret)),
        Frame(index=1, width=8, height=8, duration=300,
              cels=(LinkedCel(layer_index=0, target_frame=0), decor_moved)),
    )
    return Document(name="level", canvas_width=8, canvas_height=8, frames=frames,
                    layers=layers, tilesets=(ground_tileset, props_tileset))


@pytest.fixture(autouse=True)
def clean_log_counts():
    """Reset warning/error tracking between tests"""
    reset_counts()
    yield
    reset_counts()
