"""Streams that delegate every operation to user supplied callbacks.

Callbacks receive the stream's ``user_data`` as their last argument:

* open(user_data) -> bool
* close(user_data)
* read(count, user_data) -> bytes
* write(data, user_data) -> int
* seek(offset, mode, user_data) -> int
* size(user_data) -> int
* tell(user_data) -> int
"""

import enum

from .errors import EndOfStreamError, StreamNotOpenError, VTFLibError
from .memory_streams import SeekMode


class Proc(enum.IntEnum):
    """Slots of a callback table."""

    READ_CLOSE = 0
    READ_OPEN = 1
    READ_READ = 2
    READ_SEEK = 3
    READ_TELL = 4
    READ_SIZE = 5
    WRITE_CLOSE = 6
    WRITE_OPEN = 7
    WRITE_WRITE = 8
    WRITE_SEEK = 9
    WRITE_SIZE = 10
    WRITE_TELL = 11


class ProcTable:
    """A set of callbacks, one per slot, each possibly unset."""

    def __init__(self):
        self._callbacks = dict.fromkeys(Proc)

    def set(self, proc, callback):
        """Install ``callback`` in a slot; ``None`` clears it."""
        if callback is not None and not callable(callback):
            raise TypeError("callback must be callable or None")
        self._callbacks[Proc(proc)] = callback

    def get(self, proc):
        """Return the callback in a slot, or ``None``."""
        return self._callbacks[Proc(proc)]

    def require(self, proc):
        """Return the callback in a slot, raising if it is unset."""
        proc = Proc(proc)
        callback = self._callbacks[proc]
        if callback is None:
            raise VTFLibError(f"{proc.name.lower()} procedure not set.")
        return callback


default_procs = ProcTable()


class _ProcStream:
    _OPEN = _CLOSE = _SIZE = _TELL = _SEEK = None
    _KIND = ""

    def __init__(self, user_data=None, procs=None):
        self.user_data = user_data
        self.procs = default_procs if procs is None else procs
        self._opened = False

    def _do_open(self):
        self._do_close()
        callback = self.procs.require(self._OPEN)
        if self._opened:
            raise VTFLibError(f"{self._KIND} already open.")
        if not callback(self.user_data):
            raise VTFLibError("Error opening file.")
        self._opened = True

    def _do_close(self):
        callback = self.procs.get(self._CLOSE)
        if callback is None:
            return
        if self._opened:
            callback(self.user_data)
            self._opened = False

    def _do_size(self):
        if not self._opened:
            return 0
        return self.procs.require(self._SIZE)(self.user_data)

    def _do_tell(self):
        if not self._opened:
            return 0
        return self.procs.require(self._TELL)(self.user_data)

    def _do_seek(self, offset, mode):
        if not self._opened:
            return 0
        callback = self.procs.require(self._SEEK)
        return callback(offset, SeekMode(mode), self.user_data)

    def _require_open(self):
        if not self._opened:
            raise StreamNotOpenError()


class ProcReader(_ProcStream):
    """A reader backed by callbacks."""

    _OPEN = Proc.READ_OPEN
    _CLOSE = Proc.READ_CLOSE
    _SIZE = Proc.READ_SIZE
    _TELL = Proc.READ_TELL
    _SEEK = Proc.READ_SEEK
    _KIND = "Reader"

    def __init__(self, user_data=None, procs=None):
        super().__init__(user_data, procs)

    @property
    def opened(self):
        """Whether the reader is open."""
        return self._opened

    def open(self):
        """Open the reader through the open callback."""
        self._do_open()

    def close(self):
        """Close the reader; without a close callback nothing happens."""
        self._do_close()

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def size(self):
        """Stream size from the size callback, or 0 when closed."""
        return self._do_size()

    def tell(self):
        """Position from the tell callback, or 0 when closed."""
        return self._do_tell()

    def seek(self, offset, mode=SeekMode.BEGIN):
        """Seek through the seek callback and return its result."""
        return self._do_seek(offset, mode)

    def read_byte(self):
        """Read one byte and return it as an int."""
        self._require_open()
        callback = self.procs.require(Proc.READ_READ)
        chunk = bytes(callback(1, self.user_data))
        if len(chunk) != 1:
            raise EndOfStreamError("read procedure failed.")
        return chunk[0]

    def read(self, count):
        """Read up to ``count`` bytes through the read callback."""
        if count < 0:
            raise ValueError("count must not be negative")
        self._require_open()
        callback = self.procs.require(Proc.READ_READ)
        return bytes(callback(count, self.user_data))[:count]


class ProcWriter(_ProcStream):
    """A writer backed by callbacks."""

    _OPEN = Proc.WRITE_OPEN
    _CLOSE = Proc.WRITE_CLOSE
    _SIZE = Proc.WRITE_SIZE
    _TELL = Proc.WRITE_TELL
    _SEEK = Proc.WRITE_SEEK
    _KIND = "Writer"

    def __init__(self, user_data=None, procs=None):
        super().__init__(user_data, procs)

    @property
    def opened(self):
        """Whether the writer is open."""
        return self._opened

    def open(self):
        """Open the writer through the open callback."""
        self._do_open()

    def close(self):
        """Close the writer; without a close callback nothing happens."""
        self._do_close()

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def size(self):
        """Stream size from the size callback, or 0 when closed."""
        return self._do_size()

    def tell(self):
        """Position from the tell callback, or 0 when closed."""
        return self._do_tell()

    def seek(self, offset, mode=SeekMode.BEGIN):
        """Seek through the seek callback and return its result."""
        return self._do_seek(offset, mode)

    def write_byte(self, value):
        """Write one byte given as an int."""
        if not 0 <= value <= 0xFF:
            raise ValueError(f"byte value out of range: {value}")
        self._require_open()
        callback = self.procs.require(Proc.WRITE_WRITE)
        if callback(bytes((value,)), self.user_data) != 1:
            raise EndOfStreamError("write procedure failed.")

    def write(self, data):
        """Write ``data`` through the write callback and return its count."""
        self._require_open()
        callback = self.procs.require(Proc.WRITE_WRITE)
        return callback(bytes(data), self.user_data)