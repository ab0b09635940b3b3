"""Byte streams over an in-memory buffer.

Seeking clamps the position to the valid range rather than failing, and
reads and writes that run past the end transfer as much as fits.
"""

import enum

from .errors import EndOfStreamError, StreamNotOpenError, VTFLibError


class SeekMode(enum.IntEnum):
    """Origin of a seek."""

    BEGIN = 0
    CURRENT = 1
    END = 2


def _clamp(position, limit):
    return max(0, min(position, limit))


def _origin(mode, current, end):
    mode = SeekMode(mode)
    if mode is SeekMode.BEGIN:
        return 0
    if mode is SeekMode.END:
        return end
    return current


class MemoryReader:
    """Reads from a fixed block of bytes."""

    def __init__(self, data):
        self._data = None if data is None else bytes(data)
        self._opened = False
        self._pointer = 0

    @property
    def opened(self):
        """Whether the stream is open."""
        return self._opened

    def open(self):
        """Open the stream at its start."""
        if self._data is None:
            raise VTFLibError("Memory stream is null.")
        self._pointer = 0
        self._opened = True

    def close(self):
        self._opened = False

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def size(self):
        """Size of the buffer, or 0 when closed."""
        return len(self._data) if self._opened else 0

    def tell(self):
        """Current position, or 0 when closed."""
        return self._pointer if self._opened else 0

    def seek(self, offset, mode=SeekMode.BEGIN):
        """Move the position, clamped to the buffer, and return it."""
        if not self._opened:
            return 0
        end = len(self._data)
        self._pointer = _clamp(_origin(mode, self._pointer, end) + offset, end)
        return self._pointer

    def _require_open(self):
        if not self._opened:
            raise StreamNotOpenError()

    def read_byte(self):
        """Read one byte and return it as an int."""
        self._require_open()
        if self._pointer == len(self._data):
            raise EndOfStreamError("End of memory stream.")
        value = self._data[self._pointer]
        self._pointer += 1
        return value

    def read(self, count):
        """Read up to ``count`` bytes; fewer are returned near the end."""
        if count < 0:
            raise ValueError("count must not be negative")
        self._require_open()
        chunk = self._data[self._pointer:self._pointer + count]
        self._pointer += len(chunk)
        return chunk


class MemoryWriter:
    """Writes into a buffer of fixed capacity."""

    def __init__(self, capacity):
        if capacity is not None and capacity < 0:
            raise ValueError("capacity must not be negative")
        self._buffer = None if capacity is None else bytearray(capacity)
        self._opened = False
        self._pointer = 0
        self._length = 0

    @property
    def opened(self):
        """Whether the stream is open."""
        return self._opened

    def open(self):
        """Open the stream, discarding what was written before."""
        if self._buffer is None:
            raise VTFLibError("Memory stream is null.")
        self._pointer = 0
        self._length = 0
        self._opened = True

    def close(self):
        self._opened = False

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def size(self):
        """Number of bytes written so far; kept after closing."""
        return self._length

    def tell(self):
        """Current position, or 0 when closed."""
        return self._pointer if self._opened else 0

    def seek(self, offset, mode=SeekMode.BEGIN):
        """Move the position, clamped to the written length, and return it."""
        if not self._opened:
            return 0
        origin = _origin(mode, self._pointer, self._length)
        self._pointer = _clamp(origin + offset, self._length)
        return self._pointer

    def _require_open(self):
        if not self._opened:
            raise StreamNotOpenError()

    def _advance(self, count):
        self._pointer += count
        self._length = max(self._length, self._pointer)

    def write_byte(self, value):
        """Write a single byte given as an int."""
        if not 0 <= value <= 0xFF:
            raise ValueError(f"byte value out of range: {value}")
        self._require_open()
        if self._pointer == len(self._buffer):
            raise EndOfStreamError("End of memory stream.")
        self._buffer[self._pointer] = value
        self._advance(1)

    def write(self, data):
        """Write as much of ``data`` as fits and return the count written."""
        self._require_open()
        data = bytes(data)
        room = len(self._buffer) - self._pointer
        count = min(len(data), room)
        self._buffer[self._pointer:self._pointer + count] = data[:count]
        self._advance(count)
        return count

    def getvalue(self):
        """The bytes written so far."""
        if self._buffer is None:
            return b""
        return bytes(self._buffer[:self._length])