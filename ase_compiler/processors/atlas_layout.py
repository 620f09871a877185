"""
Atlas Layout

Places frame images inside an atlas image.

Cell-based layouts (ROW, COLUMN, GRID) give every frame a cell the size of
the largest frame. Cell (column, row) has its content origin at:

    x = column * cell_w + border + spacing * column + inner * (2 * column + 1)
    y = row * cell_h + border + spacing * row + inner * (2 * row + 1)

and the image size is:

    width  = columns * cell_w + 2 * border + spacing * (columns - 1) + 2 * inner * columns
    height = rows * cell_h + 2 * border + spacing * (rows - 1) + 2 * inner * rows

GRID uses columns = ceil(sqrt(n)), rows = ceil(n / columns).

PACKED is a shelf packer: frames are placed left to right in input order,
starting a new shelf when the next frame does not fit, inside a
power-of-two image width.
"""

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from ..config import AtlasLayout

Size = Tuple[int, int]


@dataclass
class AtlasPlacement:
    """Result of a layout pass. positions[i] is the top-left of sizes[i]."""
    width: int
    height: int
    positions: List[Tuple[int, int]]


def _next_power_of_two(value: int) -> int:
    power = 1
    while power < value:
        power <<= 1
    return power


def _grid_shape(layout: AtlasLayout, count: int) -> Tuple[int, int]:
    if layout == AtlasLayout.ROW:
        return count, 1
    if layout == AtlasLayout.COLUMN:
        return 1, count
    columns = math.ceil(math.sqrt(count))
    rows = (count + columns - 1) // columns
    return columns, rows


def _layout_cells(sizes: Sequence[Size], layout: AtlasLayout,
                  border_padding: int, spacing: int, inner_padding: int) -> AtlasPlacement:
    cell_w = max(w for w, _ in sizes)
    cell_h = max(h for _, h in sizes)
    columns, rows = _grid_shape(layout, len(sizes))

    width = (columns * cell_w
             + border_padding * 2
             + spacing * (columns - 1)
             + inner_padding * 2 * columns)
    height = (rows * cell_h
              + border_padding * 2
              + spacing * (rows - 1)
              + inner_padding * 2 * rows)

    positions = []
    for i in range(len(sizes)):
        if layout == AtlasLayout.COLUMN:
            column, row = 0, i
        else:
            column, row = i % columns, i // columns
        x = column * cell_w + border_padding + spacing * column + inner_padding * (column + column + 1)
        y = row * cell_h + border_padding + spacing * row + inner_padding * (row + row + 1)
        positions.append((x, y))

    return AtlasPlacement(width, height, positions)


def _layout_packed(sizes: Sequence[Size], border_padding: int, spacing: int,
                   inner_padding: int) -> AtlasPlacement:
    padded = [(w + inner_padding * 2, h + inner_padding * 2) for w, h in sizes]

    area = sum((w + spacing) * (h + spacing) for w, h in padded)
    widest = max(w for w, _ in padded)
    target = max(widest, math.ceil(math.sqrt(area)))
    width = _next_power_of_two(target + border_padding * 2)
    limit = width - border_padding

    positions = []
    x = y = border_padding
    shelf_height = 0
    for w, h in padded:
        if x > border_padding and x + w > limit:
            x = border_padding
            y += shelf_height + spacing
            shelf_height = 0
        positions.append((x + inner_padding, y + inner_padding))
        x += w + spacing
        shelf_height = max(shelf_height, h)

    height = y + shelf_height + border_padding
    return AtlasPlacement(width, height, positions)


def compute_layout(sizes: Sequence[Size], layout: AtlasLayout = AtlasLayout.GRID,
                   border_padding: int = 0, spacing: int = 0, inner_padding: int = 0) -> AtlasPlacement:
    """
    Compute the atlas size and the position of every frame.

    Args:
        sizes: (width, height) per frame, in placement order
        layout: Atlas layout strategy
        border_padding: Transparent pixels around the whole atlas
        spacing: Transparent pixels between neighbouring cells
        inner_padding: Transparent pixels around each frame inside its cell

    Returns:
        AtlasPlacement; an empty input gives a 0x0 atlas
    """
    if not sizes:
        return AtlasPlacement(0, 0, [])
    if layout == AtlasLayout.PACKED:
        return _layout_packed(sizes, border_padding, spacing, inner_padding)
    return _layout_cells(sizes, layout, border_padding, spacing, inner_padding)
