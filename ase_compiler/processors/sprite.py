"""
Sprite Processor

Single flattened frame with the slices in effect on it.
"""

from typing import Optional

from .slices import slices_for_frame
from .texture_atlas import region_name
from ..compositing import flatten_frame
from ..config import ProcessingOptions
from ..document import Document
from ..raw_types import RawSprite


def process_sprite(document: Document, frame_index: int,
                   options: Optional[ProcessingOptions] = None) -> RawSprite:
    """
    Flatten one frame into a sprite named "{document name} {frame index}".

    Raises:
        IndexError: frame_index is out of range
    """
    image = flatten_frame(document, frame_index, options)
    height, width = image.shape[:2]
    return RawSprite(
        name=region_name(document, frame_index),
        width=width,
        height=height,
        pixels=image.tobytes(),
        slices=slices_for_frame(document.slices, frame_index),
    )
