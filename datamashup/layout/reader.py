"""
DataMashup Layout Reader / Writer
Sequential little-endian access with bounds checks.
Every read checks the remaining buffer first; nothing reads past the end.
"""
import io
import struct
from typing import Type
from ..errors import ParseRootError

UINT32 = struct.Struct('<I')


class LayoutReader:
    def __init__(self, data: bytes, error_class: Type[ParseRootError] = ParseRootError):
        self.data = bytes(data)
        self.offset = 0
        self.error_class = error_class

    @property
    def remaining(self) -> int:
        return len(self.data) - self.offset

    def _take(self, length: int, field: str) -> bytes:
        if length > self.remaining:
            raise self.error_class(
                f"{field}: needs {length} bytes at offset {self.offset}, "
                f"only {self.remaining} left"
            )
        chunk = self.data[self.offset:self.offset + length]
        self.offset += length
        return chunk

    def read_uint32(self, field: str) -> int:
        value, = UINT32.unpack(self._take(UINT32.size, field))
        return value

    def read_prefixed(self, field: str) -> bytes:
        """Read a uint32 length followed by that many bytes"""
        length = self.read_uint32(f"{field}Length")
        return self._take(length, field)


class LayoutWriter:
    def __init__(self):
        self.buffer = io.BytesIO()

    def write_uint32(self, value: int):
        self.buffer.write(UINT32.pack(value))

    def write_prefixed(self, data: bytes):
        self.write_uint32(len(data))
        self.buffer.write(data)

    def getvalue(self) -> bytes:
        return self.buffer.getvalue()


__all__ = ["LayoutReader", "LayoutWriter"]
