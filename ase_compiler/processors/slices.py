"""
Slice resolution.

A slice key is in effect from its frame until the next key, so the slice
bounds on frame N come from the last key whose frame index is <= N. Slices
with no key at or before N do not exist on that frame.
"""

from typing import Optional, Sequence, Tuple

from ..document import Slice, SliceKey
from ..errors import DuplicateSliceName
from ..raw_types import RawSlice

_NO_COLOR = (0, 0, 0, 0)


def key_for_frame(slice_: Slice, frame_index: int) -> Optional[SliceKey]:
    """Get the key of a slice in effect on a frame, or None."""
    current = None
    for key in slice_.keys:
        if key.frame_index <= frame_index and (current is None or key.frame_index >= current.frame_index):
            current = key
    return current


def slices_for_frame(slices: Sequence[Slice], frame_index: int) -> Tuple[RawSlice, ...]:
    """
    Resolve the slices in effect on a frame.

    Args:
        slices: Document slices
        frame_index: Frame to resolve

    Returns:
        RawSlice per slice that has a key in effect, in document order

    Raises:
        DuplicateSliceName: Two slices share a name
    """
    seen = set()
    result = []
    for slice_ in slices:
        if slice_.name in seen:
            raise DuplicateSliceName(slice_.name)
        seen.add(slice_.name)

        key = key_for_frame(slice_, frame_index)
        if key is None:
            continue

        origin_x, origin_y = key.pivot if key.pivot is not None else (0, 0)
        result.append(RawSlice(
            name=slice_.name,
            x=key.x,
            y=key.y,
            width=key.width,
            height=key.height,
            origin_x=origin_x,
            origin_y=origin_y,
            color=slice_.color if slice_.color is not None else _NO_COLOR,
            center=key.center,
        ))
    return tuple(result)
