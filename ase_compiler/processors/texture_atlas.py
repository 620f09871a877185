"""
Texture Atlas Processor

Flattens every frame of a document and packs the results into one atlas
image with one named region per frame.

Regions are emitted in frame order and named "{document name} {frame index}".
With merge_duplicates enabled, a frame whose flattened pixels match an
earlier frame is not packed again; its region reuses the earlier bounds.
"""

from typing import Dict, List, Optional, Tuple

import numpy as np

from .atlas_layout import compute_layout
from .slices import slices_for_frame
from ..compositing import flatten_frames
from ..config import DEFAULT_OPTIONS, ProcessingOptions
from ..constants import BYTES_PER_PIXEL
from ..document import Document
from ..raw_types import RawTextureAtlas, RawTextureRegion
from ..utils import logDebug


def region_name(document: Document, frame_index: int) -> str:
    return f"{document.name} {frame_index}"


def find_duplicates(images: List[np.ndarray]) -> Dict[int, int]:
    """
    Map each frame to the first earlier frame with identical pixels.

    Returns:
        {duplicate frame index: original frame index}
    """
    duplicates = {}
    first_seen: Dict[Tuple[Tuple[int, ...], bytes], int] = {}
    for i, image in enumerate(images):
        key = (image.shape, image.tobytes())
        if key in first_seen:
            duplicates[i] = first_seen[key]
        else:
            first_seen[key] = i
    return duplicates


def process_texture_atlas(document: Document, options: Optional[ProcessingOptions] = None) -> RawTextureAtlas:
    """
    Build a texture atlas from every frame of a document.

    Args:
        document: Source document
        options: Processing options (defaults apply when None)

    Returns:
        RawTextureAtlas with one region per frame, in frame order

    Raises:
        DuplicateSliceName: Two slices share a name
    """
    options = options or DEFAULT_OPTIONS
    images = flatten_frames(document, options)

    duplicates = find_duplicates(images) if options.merge_duplicates else {}
    packed = [i for i in range(len(images)) if i not in duplicates]

    placement = compute_layout(
        [(images[i].shape[1], images[i].shape[0]) for i in packed],
        layout=options.layout,
        border_padding=options.border_padding,
        spacing=options.spacing,
        inner_padding=options.inner_padding,
    )

    atlas = np.zeros((placement.height, placement.width, BYTES_PER_PIXEL), dtype=np.uint8)
    bounds: Dict[int, Tuple[int, int, int, int]] = {}
    for frame_index, (x, y) in zip(packed, placement.positions):
        image = images[frame_index]
        h, w = image.shape[:2]
        atlas[y:y + h, x:x + w] = image
        bounds[frame_index] = (x, y, w, h)

    regions = []
    for frame_index in range(len(images)):
        x, y, w, h = bounds[duplicates.get(frame_index, frame_index)]
        regions.append(RawTextureRegion(
            name=region_name(document, frame_index),
            x=x,
            y=y,
            width=w,
            height=h,
            slices=slices_for_frame(document.slices, frame_index),
        ))

    logDebug(
        f"Packed atlas '{document.name}': {len(packed)} of {len(images)} frame(s) "
        f"into {placement.width}x{placement.height} ({options.layout.value})"
    )

    return RawTextureAtlas(
        name=document.name,
        width=placement.width,
        height=placement.height,
        pixels=atlas.tobytes(),
        regions=tuple(regions),
    )
