"""
Sprite Sheet Processor

Texture atlas plus per-frame durations and animation tags. Frame i of the
sheet always points at atlas region i.
"""

from typing import Optional, Tuple

from .texture_atlas import process_texture_atlas
from ..config import ProcessingOptions
from ..document import Document
from ..errors import DuplicateTagName, InvalidTagRange
from ..raw_types import RawAnimationFrame, RawAnimationTag, RawSpriteSheet
from ..utils import logDebug


def process_animation_tags(document: Document) -> Tuple[RawAnimationTag, ...]:
    """
    Convert document tags.

    Raises:
        InvalidTagRange: A tag lies outside the document's frames
        DuplicateTagName: Two tags share a name
    """
    seen = set()
    tags = []
    for tag in document.tags:
        if not 0 <= tag.from_frame <= tag.to_frame < document.frame_count:
            raise InvalidTagRange(tag.name, tag.from_frame, tag.to_frame, document.frame_count)
        if tag.name in seen:
            raise DuplicateTagName(tag.name)
        seen.add(tag.name)
        tags.append(RawAnimationTag(
            name=tag.name,
            from_frame=tag.from_frame,
            to_frame=tag.to_frame,
            direction=tag.direction,
            repeat=tag.repeat,
        ))
    return tuple(tags)


def process_sprite_sheet(document: Document, options: Optional[ProcessingOptions] = None) -> RawSpriteSheet:
    """
    Build a sprite sheet from a document.

    Tags are checked before any frame is flattened.

    Raises:
        InvalidTagRange: A tag lies outside the document's frames
        DuplicateTagName: Two tags share a name
    """
    tags = process_animation_tags(document)
    atlas = process_texture_atlas(document, options)

    frames = tuple(
        RawAnimationFrame(region_index=frame.index, duration=frame.duration)
        for frame in document.frames
    )

    logDebug(f"Sprite sheet '{document.name}': {len(frames)} frame(s), {len(tags)} tag(s)")
    return RawSpriteSheet(name=document.name, atlas=atlas, frames=frames, tags=tags)
