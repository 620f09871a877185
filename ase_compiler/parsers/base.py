"""
Base utilities for raw content parsing.

BinaryStreamReader reads the little-endian primitives written by
ase_compiler.utils.binary from a caller-supplied stream. Every read either
returns a complete value or raises; the reader never pads or truncates.
"""

import struct
from typing import BinaryIO, Callable, List, TypeVar

from ..constants import RAW_FORMAT_VERSION
from ..errors import UnexpectedEndOfData, UnsupportedFormat, UnsupportedVersion

T = TypeVar('T')


class BinaryStreamReader:
    """
    Sequential reader over a binary stream.

    The stream is not owned: the reader neither closes nor seeks it.

    Usage:
        reader = BinaryStreamReader(f)
        version = reader.read_header(b'RTST')
        name = reader.read_string()
        tile_width = reader.read_u32()
    """

    def __init__(self, stream: BinaryIO):
        self.stream = stream
        self.offset = 0

    def read_exact(self, size: int) -> bytes:
        """
        Read exactly size bytes.

        Raises:
            UnexpectedEndOfData: The stream holds fewer than size bytes
        """
        data = self.stream.read(size) if size else b''
        if len(data) != size:
            raise UnexpectedEndOfData(size, len(data), self.offset)
        self.offset += size
        return data

    def _unpack(self, fmt: str, size: int):
        return struct.unpack(fmt, self.read_exact(size))[0]

    def read_u8(self) -> int:
        return self._unpack('<B', 1)

    def read_u32(self) -> int:
        return self._unpack('<I', 4)

    def read_i32(self) -> int:
        return self._unpack('<i', 4)

    def read_bool(self) -> bool:
        value = self.read_u8()
        if value > 1:
            raise UnsupportedFormat(f"Invalid boolean byte {value} at offset {self.offset - 1}")
        return value == 1

    def read_string(self) -> str:
        """Read a u32-length-prefixed UTF-8 string."""
        length = self.read_u32()
        start = self.offset
        data = self.read_exact(length)
        try:
            return data.decode('utf-8')
        except UnicodeDecodeError as e:
            raise UnsupportedFormat(f"Invalid UTF-8 string at offset {start}: {e}") from e

    def read_bytes(self) -> bytes:
        """Read a u32-count-prefixed byte buffer."""
        return self.read_exact(self.read_u32())

    def read_array(self, read_item: Callable[['BinaryStreamReader'], T]) -> List[T]:
        """Read a u32-count-prefixed array, decoding each element with read_item(reader)."""
        count = self.read_u32()
        return [read_item(self) for _ in range(count)]

    def read_magic(self) -> bytes:
        return self.read_exact(4)

    def read_version(self) -> int:
        """
        Read and check the format version byte.

        Raises:
            UnsupportedVersion: Version is 0 or newer than RAW_FORMAT_VERSION
        """
        version = self.read_u8()
        if version == 0 or version > RAW_FORMAT_VERSION:
            raise UnsupportedVersion(version, RAW_FORMAT_VERSION)
        return version

    def read_header(self, magic: bytes) -> int:
        """
        Read a descriptor header and check its magic tag.

        Returns:
            Format version

        Raises:
            UnsupportedFormat: Magic tag does not match
            UnsupportedVersion: Version is not supported
        """
        found = self.read_magic()
        if found != magic:
            raise UnsupportedFormat(f"Expected magic {magic!r}, found {found!r}")
        return self.read_version()
