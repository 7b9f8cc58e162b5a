"""A growable byte buffer with read and write operations."""

from __future__ import annotations

import enum
import sys
from typing import Protocol

SMALL_BUFFER_SIZE = 64
MIN_READ = 512
UTF_MAX = 4
_RUNE_SELF = 0x80
_REPLACEMENT = "\ufffd"


class TooLargeError(MemoryError):
    """Raised when the buffer cannot grow to hold more data."""

    def __init__(self) -> None:
        super().__init__("buffer too large")


class _ReadOp(enum.IntEnum):
    READ = -1
    INVALID = 0
    RUNE1 = 1
    RUNE2 = 2
    RUNE3 = 3
    RUNE4 = 4


class _Reader(Protocol):
    def read(self, size: int = ..., /) -> bytes: ...


class _Writer(Protocol):
    def write(self, data: bytes, /) -> int | None: ...


def _alloc(size: int) -> bytearray:
    try:
        return bytearray(size)
    except (MemoryError, OverflowError) as exc:
        raise TooLargeError() from exc


def _rune_length(lead: int) -> int:
    if 0xC2 <= lead <= 0xDF:
        return 2
    if 0xE0 <= lead <= 0xEF:
        return 3
    if 0xF0 <= lead <= 0xF4:
        return 4
    return 0


def _decode_rune(data: bytes) -> tuple[str, int]:
    size = _rune_length(data[0])
    if size == 0 or len(data) < size:
        return _REPLACEMENT, 1
    try:
        return data[:size].decode("utf-8"), size
    except UnicodeDecodeError:
        return _REPLACEMENT, 1


class Buffer:
    """A variable-sized byte buffer.

    Unread data lives between the read offset and the logical length of the
    underlying storage; the storage capacity is tracked so that space can be
    reserved ahead of writes (see :meth:`write_next_begin`).
    """

    def __init__(self, data: bytes | bytearray | str | None = None) -> None:
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._buf: bytearray | None = None if data is None else bytearray(data)
        self._len = 0 if data is None else len(data)
        self._off = 0
        self._last_read = _ReadOp.INVALID

    # -- inspection ---------------------------------------------------------

    def bytes(self) -> bytes:
        """Return the unread portion of the buffer."""
        if self._buf is None:
            return b""
        return bytes(self._buf[self._off:self._len])

    def __len__(self) -> int:
        return self._len - self._off

    def __str__(self) -> str:
        return self.bytes().decode("utf-8", errors="replace")

    def __repr__(self) -> str:
        return f"Buffer({self.bytes()!r})"

    def cap(self) -> int:
        """Return the capacity of the underlying storage."""
        return 0 if self._buf is None else len(self._buf)

    def _empty(self) -> bool:
        return self._len <= self._off

    # -- sizing -------------------------------------------------------------

    def truncate(self, n: int) -> None:
        """Discard all but the first ``n`` unread bytes."""
        if n == 0:
            self.reset()
            return
        self._last_read = _ReadOp.INVALID
        if n < 0 or n > len(self):
            raise ValueError("buffer truncation out of range")
        self._len = self._off + n

    def reset(self) -> None:
        """Empty the buffer, keeping its storage."""
        self._len = 0
        self._off = 0
        self._last_read = _ReadOp.INVALID

    def _try_grow_by_reslice(self, n: int) -> int | None:
        length = self._len
        if n <= self.cap() - length:
            self._len = length + n
            return length
        return None

    def _grow(self, n: int) -> int:
        m = len(self)
        if m == 0 and self._off != 0:
            self.reset()
        index = self._try_grow_by_reslice(n)
        if index is not None:
            return index
        if self._buf is None and n <= SMALL_BUFFER_SIZE:
            self._buf = _alloc(SMALL_BUFFER_SIZE)
            self._len = n
            return 0
        c = self.cap()
        old = self._buf if self._buf is not None else bytearray()
        if n <= c // 2 - m:
            new_buf = _alloc(max(m + n, SMALL_BUFFER_SIZE))
        elif c > sys.maxsize - c - n:
            raise TooLargeError()
        else:
            new_buf = _alloc(2 * c + n)
        new_buf[:m] = old[self._off:self._off + m]
        self._buf = new_buf
        self._off = 0
        self._len = m + n
        return m

    def _reserve(self, n: int) -> int:
        index = self._try_grow_by_reslice(n)
        return self._grow(n) if index is None else index

    def grow(self, n: int) -> None:
        """Guarantee space for another ``n`` bytes without reallocation."""
        if n < 0:
            raise ValueError("buffer grow: negative count")
        self._len = self._grow(n)

    # -- writing ------------------------------------------------------------

    def write(self, data: bytes | bytearray | memoryview) -> int:
        """Append ``data`` and return the number of bytes written."""
        self._last_read = _ReadOp.INVALID
        data = bytes(data)
        n = len(data)
        m = self._reserve(n)
        assert self._buf is not None
        self._buf[m:m + n] = data
        return n

    def write_next_begin(self, n: int) -> memoryview:
        """Reserve ``n`` bytes after the data and return a writable view of them.

        The view shares storage with the buffer; after filling it, call
        :meth:`write_next_end` with the number of bytes actually written.
        """
        if n < 0:
            raise ValueError("buffer write_next_begin: negative count")
        m = self._reserve(n)
        assert self._buf is not None
        self._len = m
        return memoryview(self._buf)[m:m + n]

    def write_next_end(self, n: int) -> int:
        """Commit ``n`` bytes written into the view from :meth:`write_next_begin`."""
        if n < 0:
            return 0
        end = self._len + n
        if end > self.cap():
            raise ValueError("write_next_begin has not been called")
        self._last_read = _ReadOp.INVALID
        self._len = end
        return n

    def write_string(self, s: str) -> int:
        """Append the UTF-8 encoding of ``s`` and return its length in bytes."""
        return self.write(s.encode("utf-8"))

    def write_byte(self, c: int) -> None:
        """Append a single byte."""
        if not 0 <= c <= 0xFF:
            raise ValueError("byte must be in range(0, 256)")
        self._last_read = _ReadOp.INVALID
        m = self._reserve(1)
        assert self._buf is not None
        self._buf[m] = c

    def write_rune(self, r: int | str) -> int:
        """Append the UTF-8 encoding of code point ``r`` and return its size.

        Invalid code points are written as U+FFFD.
        """
        code = ord(r) if isinstance(r, str) else r
        if 0 <= code < _RUNE_SELF:
            self.write_byte(code)
            return 1
        if code < 0 or code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
            code = 0xFFFD
        encoded = chr(code).encode("utf-8")
        self._last_read = _ReadOp.INVALID
        m = self._reserve(UTF_MAX)
        assert self._buf is not None
        n = len(encoded)
        self._buf[m:m + n] = encoded
        self._len = m + n
        return n

    def read_from(self, reader: _Reader) -> int:
        """Append everything ``reader`` yields until end of file.

        Returns the number of bytes read.
        """
        self._last_read = _ReadOp.INVALID
        total = 0
        while True:
            index = self._grow(MIN_READ)
            self._len = index
            chunk = reader.read(self.cap() - index)
            if not chunk:
                return total
            if len(chunk) > self.cap() - index:
                raise ValueError("reader returned more data than requested")
            assert self._buf is not None
            self._buf[index:index + len(chunk)] = chunk
            self._len = index + len(chunk)
            total += len(chunk)

    def write_to(self, writer: _Writer) -> int:
        """Write the unread data to ``writer`` until drained.

        Returns the number of bytes written; raises :class:`OSError` on a
        short write.
        """
        self._last_read = _ReadOp.INVALID
        written = 0
        n_bytes = len(self)
        if n_bytes > 0:
            result = writer.write(self.bytes())
            m = n_bytes if result is None else result
            if m > n_bytes:
                raise ValueError("buffer write_to: invalid write count")
            self._off += m
            written = m
            if m != n_bytes:
                raise OSError("short write")
        self.reset()
        return written

    # -- reading ------------------------------------------------------------

    def read(self, n: int) -> bytes:
        """Read up to ``n`` bytes; returns ``b""`` once the buffer is drained."""
        if n < 0:
            raise ValueError("buffer read: negative count")
        self._last_read = _ReadOp.INVALID
        if self._empty():
            self.reset()
            return b""
        data = self.next(n)
        return data

    def next(self, n: int) -> bytes:
        """Return and consume the next ``n`` bytes (fewer if not available)."""
        if n < 0:
            raise ValueError("buffer next: negative count")
        self._last_read = _ReadOp.INVALID
        n = min(n, len(self))
        data = b"" if self._buf is None else bytes(self._buf[self._off:self._off + n])
        self._off += n
        if n > 0:
            self._last_read = _ReadOp.READ
        return data

    def read_byte(self) -> int:
        """Read and return the next byte; raises :class:`EOFError` when empty."""
        if self._empty():
            self.reset()
            raise EOFError("buffer is empty")
        assert self._buf is not None
        c = self._buf[self._off]
        self._off += 1
        self._last_read = _ReadOp.READ
        return c

    def read_rune(self) -> tuple[str, int]:
        """Read the next UTF-8 encoded character and return it with its size.

        An invalid encoding consumes one byte and yields U+FFFD.
        """
        if self._empty():
            self.reset()
            raise EOFError("buffer is empty")
        assert self._buf is not None
        c = self._buf[self._off]
        if c < _RUNE_SELF:
            self._off += 1
            self._last_read = _ReadOp.RUNE1
            return chr(c), 1
        char, size = _decode_rune(bytes(self._buf[self._off:min(self._len, self._off + UTF_MAX)]))
        self._off += size
        self._last_read = _ReadOp(size)
        return char, size

    def unread_rune(self) -> None:
        """Step back over the character returned by the last :meth:`read_rune`."""
        if self._last_read <= _ReadOp.INVALID:
            raise ValueError("previous operation was not a successful read_rune")
        if self._off >= int(self._last_read):
            self._off -= int(self._last_read)
        self._last_read = _ReadOp.INVALID

    def unread_byte(self) -> None:
        """Step back over the last byte returned by a successful read."""
        if self._last_read == _ReadOp.INVALID:
            raise ValueError("previous operation was not a successful read")
        self._last_read = _ReadOp.INVALID
        if self._off > 0:
            self._off -= 1

    def read_bytes(self, delim: int | bytes) -> bytes:
        """Read up to and including ``delim``.

        If the delimiter is absent, the rest of the buffer is returned without
        it, so an empty result means the buffer was already drained.
        """
        if isinstance(delim, (bytes, bytearray)):
            if len(delim) != 1:
                raise ValueError("delimiter must be a single byte")
            delim = delim[0]
        index = -1 if self._buf is None else self._buf.find(delim, self._off, self._len)
        end = self._len if index < 0 else index + 1
        line = b"" if self._buf is None else bytes(self._buf[self._off:end])
        self._off = end
        self._last_read = _ReadOp.READ
        return line

    def read_string(self, delim: int | bytes | str) -> str:
        """Like :meth:`read_bytes`, decoded as UTF-8."""
        if isinstance(delim, str):
            delim = delim.encode("utf-8")
        return self.read_bytes(delim).decode("utf-8", errors="replace")