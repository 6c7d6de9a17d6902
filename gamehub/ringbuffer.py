"""Fixed-capacity ring buffer of typed values for one producer and one consumer."""

from __future__ import annotations

import enum
import struct
import threading


class ByteOrder(enum.IntEnum):
    LITTLE = 0
    BIG = 1

    @property
    def prefix(self) -> str:
        return "<" if self is ByteOrder.LITTLE else ">"


class RingBufferFullError(BufferError):
    """Raised when a write needs more space than the buffer has free."""


class RingBufferEmptyError(BufferError):
    """Raised when a read needs more bytes than the buffer holds."""


_CODES = "BHhIiQqfd"
_MAX_BYTES_LEN = 0xFFFF


class RingBuffer:
    """Circular byte store with typed reads and writes.

    Writes that do not fit raise RingBufferFullError and reads that lack data
    raise RingBufferEmptyError. A ``timeout`` in seconds lets the call wait for
    the other side to make room or supply data first; ``None`` means no wait.
    While a mark is set, the bytes read since the mark keep their space so that
    ``reset_mark`` can always return to them.
    """

    def __init__(self, capacity: int, byte_order: ByteOrder = ByteOrder.BIG) -> None:
        if capacity <= 0:
            raise ValueError(f"capacity must be positive: {capacity}")
        self.capacity = capacity
        self.byte_order = ByteOrder(byte_order)
        self._data = bytearray(capacity)
        self._read_pos = 0
        self._write_pos = 0
        self._size = 0
        self._consumed = 0
        self._mark: tuple[int, int] | None = None
        self._cond = threading.Condition()
        prefix = self.byte_order.prefix
        self._formats = {code: struct.Struct(prefix + code) for code in _CODES}

    # -- space accounting ---------------------------------------------------

    def _held(self) -> int:
        return 0 if self._mark is None else self._consumed - self._mark[1]

    def _writable(self) -> int:
        return self.capacity - self._size - self._held()

    def readable(self) -> int:
        """Number of bytes waiting to be read."""
        with self._cond:
            return self._size

    def writable(self) -> int:
        """Number of bytes that can be written now."""
        with self._cond:
            return self._writable()

    def _wait_writable(self, length: int, timeout: float | None) -> None:
        if self._writable() < length and timeout is not None and timeout > 0:
            self._cond.wait_for(lambda: self._writable() >= length, timeout)
        if self._writable() < length:
            raise RingBufferFullError(
                f"cannot write {length} bytes: {self!r}"
            )

    def _wait_readable(self, length: int, timeout: float | None) -> None:
        if self._size < length and timeout is not None and timeout > 0:
            self._cond.wait_for(lambda: self._size >= length, timeout)
        if self._size < length:
            raise RingBufferEmptyError(
                f"cannot read {length} bytes: {self!r}"
            )

    # -- raw byte movement --------------------------------------------------

    def _put(self, chunk: bytes) -> None:
        first = min(len(chunk), self.capacity - self._write_pos)
        self._data[self._write_pos:self._write_pos + first] = chunk[:first]
        rest = chunk[first:]
        self._data[:len(rest)] = rest
        self._write_pos = (self._write_pos + len(chunk)) % self.capacity
        self._size += len(chunk)
        self._cond.notify_all()

    def _get(self, length: int) -> bytes:
        first = min(length, self.capacity - self._read_pos)
        chunk = bytes(self._data[self._read_pos:self._read_pos + first])
        chunk += bytes(self._data[:length - first])
        self._read_pos = (self._read_pos + length) % self.capacity
        self._size -= length
        self._consumed += length
        self._cond.notify_all()
        return chunk

    def _write(self, code: str, value, timeout: float | None) -> bool:
        fmt = self._formats[code]
        packed = fmt.pack(value)
        with self._cond:
            self._wait_writable(fmt.size, timeout)
            self._put(packed)
        return True

    def _read(self, code: str, timeout: float | None):
        fmt = self._formats[code]
        with self._cond:
            self._wait_readable(fmt.size, timeout)
            return fmt.unpack(self._get(fmt.size))[0]

    # -- typed values -------------------------------------------------------

    def write_byte(self, value: int, timeout: float | None = None) -> bool:
        return self._write("B", value, timeout)

    def read_byte(self, timeout: float | None = None) -> int:
        return self._read("B", timeout)

    def write_bool(self, value: bool, timeout: float | None = None) -> bool:
        return self._write("B", 1 if value else 0, timeout)

    def read_bool(self, timeout: float | None = None) -> bool:
        return self._read("B", timeout) == 1

    def write_uint16(self, value: int, timeout: float | None = None) -> bool:
        return self._write("H", value, timeout)

    def read_uint16(self, timeout: float | None = None) -> int:
        return self._read("H", timeout)

    def write_int16(self, value: int, timeout: float | None = None) -> bool:
        return self._write("h", value, timeout)

    def read_int16(self, timeout: float | None = None) -> int:
        return self._read("h", timeout)

    def write_uint32(self, value: int, timeout: float | None = None) -> bool:
        return self._write("I", value, timeout)

    def read_uint32(self, timeout: float | None = None) -> int:
        return self._read("I", timeout)

    def write_int32(self, value: int, timeout: float | None = None) -> bool:
        return self._write("i", value, timeout)

    def read_int32(self, timeout: float | None = None) -> int:
        return self._read("i", timeout)

    def write_uint64(self, value: int, timeout: float | None = None) -> bool:
        return self._write("Q", value, timeout)

    def read_uint64(self, timeout: float | None = None) -> int:
        return self._read("Q", timeout)

    def write_int64(self, value: int, timeout: float | None = None) -> bool:
        return self._write("q", value, timeout)

    def read_int64(self, timeout: float | None = None) -> int:
        return self._read("q", timeout)

    def write_float32(self, value: float, timeout: float | None = None) -> bool:
        return self._write("f", value, timeout)

    def read_float32(self, timeout: float | None = None) -> float:
        return self._read("f", timeout)

    def write_float64(self, value: float, timeout: float | None = None) -> bool:
        return self._write("d", value, timeout)

    def read_float64(self, timeout: float | None = None) -> float:
        return self._read("d", timeout)

    # -- length-prefixed data -----------------------------------------------

    def write_bytes(self, data: bytes | bytearray) -> bool:
        """Write data preceded by its length as an unsigned 16-bit integer."""
        if len(data) > _MAX_BYTES_LEN:
            raise ValueError(f"data too long for a 16-bit length: {len(data)}")
        header = self._formats["H"].pack(len(data))
        with self._cond:
            self._wait_writable(len(data) + 2, None)
            self._put(header + bytes(data))
        return True

    def read_bytes(self) -> bytes:
        """Read one length-prefixed block; the position is kept if it is incomplete."""
        with self._cond:
            self._wait_readable(2, None)
            saved = (self._read_pos, self._size, self._consumed)
            length = self._formats["H"].unpack(self._get(2))[0]
            if self._size < length:
                self._read_pos, self._size, self._consumed = saved
                raise RingBufferEmptyError(
                    f"block of {length} bytes is incomplete: {self!r}"
                )
            return self._get(length)

    def write_string(self, text: str) -> bool:
        return self.write_bytes(text.encode("utf-8"))

    def read_string(self) -> str:
        return self.read_bytes().decode("utf-8")

    # -- position control ---------------------------------------------------

    def mark(self) -> None:
        """Remember the read position."""
        with self._cond:
            self._mark = (self._read_pos, self._consumed)

    def reset_mark(self) -> None:
        """Return to the marked read position, if any, and clear the mark."""
        with self._cond:
            if self._mark is None:
                return
            position, consumed = self._mark
            self._size += self._consumed - consumed
            self._read_pos = position
            self._consumed = consumed
            self._mark = None
            self._cond.notify_all()

    def reset(self) -> None:
        """Discard all content and the mark."""
        with self._cond:
            self._read_pos = 0
            self._write_pos = 0
            self._size = 0
            self._consumed = 0
            self._mark = None
            self._cond.notify_all()

    def __repr__(self) -> str:
        mark = -1 if self._mark is None else self._mark[0]
        return (
            f"RingBuffer(read_pos={self._read_pos}, write_pos={self._write_pos}, "
            f"size={self._size}, capacity={self.capacity}, mark={mark})"
        )


def new_capacity(length: int) -> int:
    """Capacity to grow to for ``length`` bytes.

    Below 1024 this is the next power of two above the highest set bit;
    from 1024 on it is that power of two plus steps of 1024 until it covers length.
    """
    if length < 0:
        raise ValueError(f"negative length: {length}")
    highest = length.bit_length() - 1
    if length < 1024:
        return 1 << (highest + 1)
    size = (1 << highest) + 1024
    while size < length:
        size += 1024
    return size