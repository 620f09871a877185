"""
Binary File Utilities

Primitive little-endian writers shared by every raw descriptor writer.

Raw content primitives:
- u8 / u32 / i32 fixed-width integers (out-of-range values raise ValueError
  naming the field)
- string: u32 byte length + UTF-8 bytes
- bytes:  u32 byte count + raw bytes
- array:  u32 element count + that many encoded elements
"""

import struct
import io
from typing import BinaryIO, Callable, Sequence, TypeVar, Union

T = TypeVar('T')

Buffer = Union[BinaryIO, io.BytesIO]


def _pack(fmt: str, value: int, field: str = None) -> bytes:
    try:
        return struct.pack(fmt, value)
    except struct.error as e:
        raise ValueError(f"{field or 'value'}={value!r} cannot be packed as '{fmt}': {e}") from e


def write_u8(buffer: Buffer, value: int, field: str = None):
    buffer.write(_pack('<B', value, field))


def write_bool(buffer: Buffer, value: bool):
    buffer.write(struct.pack('<B', 1 if value else 0))


def write_u32(buffer: Buffer, value: int, field: str = None):
    buffer.write(_pack('<I', value, field))


def write_i32(buffer: Buffer, value: int, field: str = None):
    buffer.write(_pack('<i', value, field))


def write_string(buffer: Buffer, value: str):
    """
    Write a length-prefixed UTF-8 string.

    Args:
        buffer: Output buffer (file or BytesIO)
        value: String to encode
    """
    data = value.encode('utf-8')
    buffer.write(struct.pack('<I', len(data)))
    buffer.write(data)


def write_bytes(buffer: Buffer, data: bytes):
    """
    Write a length-prefixed byte buffer (used for pixel data).

    Args:
        buffer: Output buffer
        data: Raw bytes
    """
    buffer.write(struct.pack('<I', len(data)))
    buffer.write(data)


def write_array(buffer: Buffer, items: Sequence[T], write_item: Callable[[Buffer, T], None]):
    """
    Write a length-prefixed array of nested elements.

    Only the element count is written; each element is encoded inline by
    write_item with no size of its own.

    Args:
        buffer: Output buffer
        items: Elements to write, in order
        write_item: Encoder called as write_item(buffer, item)
    """
    buffer.write(struct.pack('<I', len(items)))
    for item in items:
        write_item(buffer, item)


def write_header(buffer: Buffer, magic: bytes, version: int):
    """
    Write the descriptor header: 4-byte magic tag followed by a u8 format version.

    Args:
        buffer: Output buffer
        magic: 4-byte tag identifying the descriptor kind
        version: Format version
    """
    if len(magic) != 4:
        raise ValueError(f"Magic tag must be 4 bytes, got {len(magic)}")
    buffer.write(magic)
    buffer.write(struct.pack('<B', version))
