# -*- coding: utf-8 -*-
"""
Binary Streams - Little-endian primitive readers and writers.

Thin wrappers over ``struct`` used by the versioned binary records of
the coordinate context and the geo camera. Short reads raise
``FormatError`` instead of ``struct.error``.

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

from typing import BinaryIO
import struct

from grdl_geocam.exceptions import FormatError

_SHORT = struct.Struct('<h')
_INT = struct.Struct('<i')
_UINT = struct.Struct('<I')
_DOUBLE = struct.Struct('<d')
_BOOL = struct.Struct('<?')
_BYTE = struct.Struct('<B')


class BinaryWriter:
    """Write little-endian primitives to a binary stream."""

    def __init__(self, stream: BinaryIO):
        self.stream = stream

    def write_short(self, value: int) -> None:
        self.stream.write(_SHORT.pack(int(value)))

    def write_int(self, value: int) -> None:
        self.stream.write(_INT.pack(int(value)))

    def write_uint(self, value: int) -> None:
        self.stream.write(_UINT.pack(int(value)))

    def write_byte(self, value: int) -> None:
        self.stream.write(_BYTE.pack(int(value)))

    def write_double(self, value: float) -> None:
        self.stream.write(_DOUBLE.pack(float(value)))

    def write_bool(self, value: bool) -> None:
        self.stream.write(_BOOL.pack(bool(value)))


class BinaryReader:
    """Read little-endian primitives from a binary stream."""

    def __init__(self, stream: BinaryIO):
        self.stream = stream

    def _read(self, fmt: struct.Struct):
        data = self.stream.read(fmt.size)
        if len(data) != fmt.size:
            raise FormatError(
                f"Unexpected end of stream: wanted {fmt.size} bytes, got {len(data)}"
            )
        return fmt.unpack(data)[0]

    def read_short(self) -> int:
        return self._read(_SHORT)

    def read_int(self) -> int:
        return self._read(_INT)

    def read_uint(self) -> int:
        return self._read(_UINT)

    def read_byte(self) -> int:
        return self._read(_BYTE)

    def read_double(self) -> float:
        return self._read(_DOUBLE)

    def read_bool(self) -> bool:
        return self._read(_BOOL)


__all__ = ["BinaryWriter", "BinaryReader"]
