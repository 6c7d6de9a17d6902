"""Growable little-endian byte buffer with a read cursor and a mark."""

from __future__ import annotations

import struct


class BufferUnderflowError(EOFError):
    """Raised when a read needs more bytes than the buffer holds."""


_U8 = struct.Struct("<B")
_U16 = struct.Struct("<H")
_I16 = struct.Struct("<h")
_U32 = struct.Struct("<I")
_I32 = struct.Struct("<i")
_U64 = struct.Struct("<Q")
_I64 = struct.Struct("<q")


class ByteBuffer:
    """Bytes are appended at the end and read from a moving offset."""

    def __init__(self, data: bytes | bytearray | str = b"") -> None:
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._buf = bytearray(data)
        self._offset = 0
        self._mark = 0

    def mark(self) -> None:
        self._mark = self._offset

    def reset_mark(self) -> None:
        self._offset = self._mark
        self._mark = 0

    def _check_offset(self) -> None:
        if self._offset > len(self._buf):
            self._offset = 0

    def _take(self, size: int) -> bytes:
        self._check_offset()
        available = len(self._buf) - self._offset
        if available < size:
            raise BufferUnderflowError(
                f"need {size} bytes, {available} available at offset {self._offset}"
            )
        chunk = bytes(self._buf[self._offset:self._offset + size])
        self._offset += size
        return chunk

    def _read(self, fmt: struct.Struct) -> int:
        return fmt.unpack(self._take(fmt.size))[0]

    def read_byte(self) -> int:
        return self._read(_U8)

    def read_uint16(self) -> int:
        return self._read(_U16)

    def read_int16(self) -> int:
        return self._read(_I16)

    def read_uint32(self) -> int:
        return self._read(_U32)

    def read_int32(self) -> int:
        return self._read(_I32)

    def read_uint64(self) -> int:
        return self._read(_U64)

    def read_int64(self) -> int:
        return self._read(_I64)

    def read_bytes(self, length: int) -> bytes:
        if length < 0:
            raise ValueError(f"negative length: {length}")
        return self._take(length)

    def read_all(self) -> bytes:
        self._check_offset()
        return self._take(len(self._buf) - self._offset)

    def _write(self, fmt: struct.Struct, value: int) -> int:
        self._buf += fmt.pack(value)
        return fmt.size

    def write_byte(self, value: int) -> int:
        return self._write(_U8, value)

    def write_uint16(self, value: int) -> int:
        return self._write(_U16, value)

    def write_int16(self, value: int) -> int:
        return self._write(_I16, value)

    def write_uint32(self, value: int) -> int:
        return self._write(_U32, value)

    def write_int32(self, value: int) -> int:
        return self._write(_I32, value)

    def write_uint64(self, value: int) -> int:
        return self._write(_U64, value)

    def write_int64(self, value: int) -> int:
        return self._write(_I64, value)

    def write_bytes(self, data: bytes | bytearray) -> int:
        self._buf += data
        return len(data)

    def get_bytes(self) -> bytes:
        """Return the unread bytes without moving the offset."""
        return bytes(self._buf[self._offset:])

    def __len__(self) -> int:
        return len(self._buf) - self._offset

    def __repr__(self) -> str:
        return f"ByteBuffer(unread={len(self)}, offset={self._offset}, mark={self._mark})"