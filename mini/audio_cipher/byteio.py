"""Explicit big-endian reader/writer for the fixed-width header fields."""

from __future__ import annotations

import struct

from .errors import FormatError, InputError


_U32 = struct.Struct(">I")
U32_MAX = 0xFFFFFFFF


class ByteWriter:
    def __init__(self) -> None:
        self._buf = bytearray()

    def write_bytes(self, data: bytes) -> "ByteWriter":
        self._buf += data
        return self

    def write_u32(self, value: int) -> "ByteWriter":
        if not 0 <= value <= U32_MAX:
            raise InputError(f"Value {value} does not fit in an unsigned 32-bit field")
        self._buf += _U32.pack(value)
        return self

    def __len__(self) -> int:
        return len(self._buf)

    def getvalue(self) -> bytes:
        return bytes(self._buf)


class ByteReader:
    def __init__(self, data: bytes) -> None:
        self._view = memoryview(data)
        self._offset = 0

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def remaining(self) -> int:
        return len(self._view) - self._offset

    def read_bytes(self, count: int) -> bytes:
        if count < 0 or count > self.remaining:
            raise FormatError(
                f"Cannot read {count} bytes at offset {self._offset}; {self.remaining} available"
            )
        start = self._offset
        self._offset += count
        return self._view[start:self._offset].tobytes()

    def read_u32(self) -> int:
        return _U32.unpack(self.read_bytes(_U32.size))[0]
