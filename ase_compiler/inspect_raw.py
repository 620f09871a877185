#!/usr/bin/env python3
"""
Inspect Raw

Loads raw descriptor files and prints a short summary of each.

Usage:
    python -m ase_compiler.inspect_raw player.rssh tiles.rtsc
    python -m ase_compiler.inspect_raw --log inspect.log level1.ratm
"""

import sys
import argparse
from pathlib import Path
from typing import List, Optional

from .errors import AseCompilerError
from .parsers import load_raw
from .raw_types import (
    RawAnimatedTilemap,
    RawSprite,
    RawSpriteSheet,
    RawTextureAtlas,
    RawTilemap,
    RawTileset,
    RawTilesetCollection,
)
from .utils import log, logError, init_logging, close_logging, print_summary


def describe(value) -> List[str]:
    """Summary lines for a raw descriptor."""
    kind = type(value).__name__

    if isinstance(value, RawTileset):
        return [f"{kind} '{value.name}': {value.tile_count} tile(s) of {value.tile_width}x{value.tile_height}"]

    if isinstance(value, RawTilesetCollection):
        lines = [f"{kind}: {len(value)} tileset(s)"]
        for tileset in value:
            lines.append(f"  {tileset.name}: {tileset.tile_count} tile(s) of {tileset.tile_width}x{tileset.tile_height}")
        return lines

    if isinstance(value, RawTextureAtlas):
        return [f"{kind} '{value.name}': {value.width}x{value.height}, {len(value.regions)} region(s)"]

    if isinstance(value, RawSpriteSheet):
        atlas = value.atlas
        lines = [
            f"{kind} '{value.name}': atlas {atlas.width}x{atlas.height}, "
            f"{len(value.frames)} frame(s), {len(value.tags)} tag(s)"
        ]
        for tag in value.tags:
            lines.append(f"  {tag.name}: frames {tag.from_frame}-{tag.to_frame} {tag.direction.name.lower()}")
        return lines

    if isinstance(value, RawSprite):
        return [f"{kind} '{value.name}': {value.width}x{value.height}, {len(value.slices)} slice(s)"]

    if isinstance(value, RawTilemap):
        lines = [f"{kind} '{value.name}': {len(value.layers)} layer(s), {len(value.tilesets)} tileset(s)"]
        for layer in value.layers:
            lines.append(f"  {layer.name}: {layer.columns}x{layer.rows} tiles from '{layer.tileset_name}'")
        return lines

    if isinstance(value, RawAnimatedTilemap):
        total = sum(frame.duration for frame in value.frames)
        return [
            f"{kind} '{value.name}': {len(value.frames)} frame(s) ({total} ms), "
            f"{len(value.tilesets)} tileset(s)"
        ]

    return [kind]


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        description='Print a summary of raw descriptor files',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example:
    python -m ase_compiler.inspect_raw content/player.rssh content/tiles.rtsc
        """
    )
    parser.add_argument('files', nargs='+', help='Raw descriptor files to inspect')
    parser.add_argument('--log', default=None, help='Also write a log file to this path')
    args = parser.parse_args(argv)

    if args.log:
        init_logging(Path(args.log))

    failed = 0
    for path in args.files:
        try:
            value = load_raw(path)
        except (AseCompilerError, OSError) as e:
            logError(f"{path}: {e}")
            failed += 1
            continue

        log(f"{path}:")
        for line in describe(value):
            log(f"  {line}")

    print_summary()
    if args.log:
        close_logging()

    if failed:
        sys.exit(1)


if __name__ == '__main__':
    main()
