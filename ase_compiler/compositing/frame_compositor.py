"""
Frame Compositor

Flattens the cels of one frame into a single RGBA8 pixel buffer.

Layers are painted bottom to top. Group layers only gate the visibility of
their descendants and tilemap layers are left to the tilemap processors, so
only image cels are blended here. Alpha premultiplication, when enabled, is
applied once to the finished buffer.
"""

from typing import Optional, Sequence

import numpy as np

from .blend_functions import blend, mul_un8, premultiply
from ..config import DEFAULT_OPTIONS, ProcessingOptions
from ..constants import BYTES_PER_PIXEL
from ..document import BlendMode, CelKind, Document, ImageCel, LayerKind, compute_effective_visibility
from ..utils import logDebug


def cel_pixels(cel: ImageCel) -> np.ndarray:
    """
    View an image cel's pixels as a (height, width, 4) uint8 array.

    Raises:
        ValueError: Pixel buffer size does not match the cel size
    """
    expected = cel.width * cel.height * BYTES_PER_PIXEL
    if len(cel.pixels) != expected:
        raise ValueError(
            f"Cel on layer {cel.layer_index} has {len(cel.pixels)} pixel bytes, expected {expected}"
        )
    return np.frombuffer(cel.pixels, dtype=np.uint8).reshape(cel.height, cel.width, BYTES_PER_PIXEL)


def blend_cel(canvas: np.ndarray, cel: ImageCel, blend_mode: BlendMode, opacity: int):
    """
    Blend an image cel into the canvas in place.

    Pixels falling outside the canvas are clipped.

    Args:
        canvas: (height, width, 4) int32 working buffer
        cel: Image cel to blend
        blend_mode: Layer blend mode
        opacity: Combined layer/cel opacity 0..255
    """
    height, width = canvas.shape[:2]

    x0 = max(cel.x, 0)
    y0 = max(cel.y, 0)
    x1 = min(cel.x + cel.width, width)
    y1 = min(cel.y + cel.height, height)
    if x0 >= x1 or y0 >= y1:
        return

    source = cel_pixels(cel)[y0 - cel.y:y1 - cel.y, x0 - cel.x:x1 - cel.x].astype(np.int32)
    canvas[y0:y1, x0:x1] = blend(blend_mode, canvas[y0:y1, x0:x1], source, opacity)


def finalize_buffer(canvas: np.ndarray, premultiply_alpha: bool) -> np.ndarray:
    """Convert the int32 working buffer to uint8, premultiplying if requested."""
    if premultiply_alpha:
        canvas = premultiply(canvas)
    return canvas.astype(np.uint8)


def flatten_frame(document: Document, frame_index: int,
                  options: Optional[ProcessingOptions] = None,
                  visibility: Optional[Sequence[bool]] = None) -> np.ndarray:
    """
    Flatten one frame of a document.

    Args:
        document: Source document
        frame_index: Frame to flatten
        options: Processing options (defaults apply when None)
        visibility: Precomputed effective visibility per layer. Computed from
                    the document when None; pass it in when flattening many
                    frames of the same document.

    Returns:
        (frame.height, frame.width, 4) uint8 RGBA array
    """
    options = options or DEFAULT_OPTIONS
    frame = document.get_frame(frame_index)
    if visibility is None:
        visibility = compute_effective_visibility(document.layers)

    canvas = np.zeros((frame.height, frame.width, BYTES_PER_PIXEL), dtype=np.int32)
    blended = 0

    for layer, visible in zip(document.layers, visibility):
        if layer.kind != LayerKind.IMAGE:
            continue
        if options.only_visible_layers and not visible:
            continue
        if layer.is_background and not options.include_background_layer:
            continue

        cel = document.resolve_cel(frame.index, layer.index)
        if cel is None or cel.kind != CelKind.IMAGE:
            continue

        opacity = int(mul_un8(cel.opacity, layer.opacity))
        blend_cel(canvas, cel, layer.blend_mode, opacity)
        blended += 1

    logDebug(f"Flattened frame {frame.index} of '{document.name}': {blended} cel(s)")
    return finalize_buffer(canvas, options.premultiply_alpha)


def flatten_frames(document: Document, options: Optional[ProcessingOptions] = None) -> list:
    """Flatten every frame of a document, sharing one visibility table."""
    visibility = compute_effective_visibility(document.layers)
    return [flatten_frame(document, frame.index, options, visibility) for frame in document.frames]
