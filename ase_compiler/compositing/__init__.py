"""
Frame compositing.

- blend_functions: per-mode blending over numpy arrays
- frame_compositor: flatten_frame / flatten_frames
"""

from .blend_functions import blend, mul_un8, div_un8, premultiply
from .frame_compositor import cel_pixels, blend_cel, finalize_buffer, flatten_frame, flatten_frames

__all__ = [
    'blend',
    'mul_un8',
    'div_un8',
    'premultiply',
    'cel_pixels',
    'blend_cel',
    'finalize_buffer',
    'flatten_frame',
    'flatten_frames',
]
