"""Pools of reusable byte buffers and byte slices."""

from __future__ import annotations

import threading
from typing import Callable, Generic, Iterator, Protocol, Sequence, TypeVar

from gost.buffer import Buffer

MIN_BUF_CAP = 512
MAX_BUF_CAP = 20 * 1024
MAX_POOL_OBJECT_NUM = 4000

MIN_SHIFT = 6
MAX_SHIFT = 18

DEFAULT_SLOT_SIZES = (512, 1 << 10, 4 << 10, 16 << 10, 64 << 10)


class ByteSlice:
    """A byte sequence with a length and a separate, fixed capacity.

    The first ``len(slice)`` bytes are visible through indexing; the storage
    behind them always holds ``slice.cap()`` bytes so it can be reused.
    """

    __slots__ = ("_storage", "_len")

    def __init__(self, length: int = 0, capacity: int | None = None) -> None:
        if capacity is None:
            capacity = length
        if length < 0 or capacity < length:
            raise ValueError("length must be between 0 and capacity")
        self._storage = bytearray(capacity)
        self._len = length

    def __len__(self) -> int:
        return self._len

    def cap(self) -> int:
        """Return the capacity of the underlying storage."""
        return len(self._storage)

    def _resize(self, length: int) -> None:
        if not 0 <= length <= len(self._storage):
            raise ValueError("slice bounds out of range")
        self._len = length

    def __bytes__(self) -> bytes:
        return bytes(self._storage[: self._len])

    def __iter__(self) -> Iterator[int]:
        return iter(self._storage[: self._len])

    def __getitem__(self, key: int | slice) -> int | bytes:
        result = self._storage[: self._len][key]
        return result if isinstance(result, int) else bytes(result)

    def __setitem__(self, key: int | slice, value: int | bytes) -> None:
        memoryview(self._storage)[: self._len][key] = value

    def __repr__(self) -> str:
        return f"ByteSlice(len={self._len}, cap={self.cap()})"


class _Resettable(Protocol):
    def reset(self) -> None: ...


T = TypeVar("T")
R = TypeVar("R", bound=_Resettable)


class _FreeList(Generic[T]):
    """A thread-safe stack of spare objects."""

    def __init__(self) -> None:
        self._items: list[T] = []
        self._lock = threading.Lock()

    def take(self) -> T | None:
        with self._lock:
            return self._items.pop() if self._items else None

    def give(self, item: T) -> None:
        with self._lock:
            self._items.append(item)


class ObjectPool(Generic[R]):
    """A pool of objects that are reset when returned."""

    def __init__(self, factory: Callable[[], R]) -> None:
        self.factory = factory
        self._free: _FreeList[R] = _FreeList()

    def get(self) -> R:
        """Return a pooled object, or a new one if none is spare."""
        obj = self._free.take()
        return self.factory() if obj is None else obj

    def put(self, obj: R) -> None:
        """Reset ``obj`` and keep it for reuse."""
        obj.reset()
        self._free.give(obj)


class _Counter:
    def __init__(self) -> None:
        self._value = 0
        self._lock = threading.Lock()

    @property
    def value(self) -> int:
        with self._lock:
            return self._value

    def add(self, n: int) -> None:
        with self._lock:
            self._value += n

    def decrement_if_positive(self) -> None:
        with self._lock:
            if self._value > 0:
                self._value -= 1


_pool_object_number = _Counter()
_default_buffer_pool: ObjectPool[Buffer] = ObjectPool(Buffer)


def get_bytes_buffer() -> Buffer:
    """Take a :class:`Buffer` from the shared pool."""
    buf = _default_buffer_pool.get()
    if MIN_BUF_CAP <= buf.cap() <= MAX_BUF_CAP:
        _pool_object_number.decrement_if_positive()
    return buf


def put_bytes_buffer(buf: Buffer) -> None:
    """Return ``buf`` to the shared pool if its capacity is worth keeping."""
    if _pool_object_number.value > MAX_POOL_OBJECT_NUM:
        return
    if not MIN_BUF_CAP <= buf.cap() <= MAX_BUF_CAP:
        return
    _default_buffer_pool.put(buf)
    _pool_object_number.add(1)


class BytesPool:
    """Pools of byte slices, one per slot capacity."""

    def __init__(self, slot_sizes: Sequence[int]) -> None:
        self.sizes = list(slot_sizes)
        self._slots: list[_FreeList[ByteSlice]] = [_FreeList() for _ in self.sizes]

    def find_index(self, size: int) -> int:
        """Return the first slot whose capacity fits ``size``, or the slot count."""
        return next(
            (i for i, slot_size in enumerate(self.sizes) if slot_size >= size),
            len(self.sizes),
        )

    def acquire_bytes(self, size: int) -> ByteSlice:
        """Return a slice of length ``size`` from the matching slot.

        Sizes beyond the largest slot get a fresh, empty slice with capacity
        ``size``.
        """
        idx = self.find_index(size)
        if idx >= len(self.sizes):
            return ByteSlice(0, size)
        buf = self._slots[idx].take()
        if buf is None:
            buf = ByteSlice(0, self.sizes[idx])
        buf._resize(size)
        return buf

    def release_bytes(self, buf: ByteSlice) -> None:
        """Return ``buf`` to its slot; slices of foreign capacity are dropped."""
        capacity = buf.cap()
        idx = self.find_index(capacity)
        if idx >= len(self.sizes) or self.sizes[idx] != capacity:
            return
        self._slots[idx].give(buf)


class _DefaultPools:
    """Holds the pool used by the module-level acquire and release helpers."""

    __slots__ = ("bytes_pool",)

    def __init__(self, bytes_pool: BytesPool) -> None:
        self.bytes_pool = bytes_pool


_defaults = _DefaultPools(BytesPool(DEFAULT_SLOT_SIZES))


def set_default_bytes_pool(pool: BytesPool) -> None:
    """Replace the pool used by :func:`acquire_bytes` and :func:`release_bytes`."""
    if not isinstance(pool, BytesPool):
        raise TypeError(f"expected a BytesPool, got {type(pool).__name__}")
    _defaults.bytes_pool = pool


def acquire_bytes(size: int) -> ByteSlice:
    """Acquire a slice from the default bytes pool."""
    return _defaults.bytes_pool.acquire_bytes(size)


def release_bytes(buf: ByteSlice) -> None:
    """Release a slice to the default bytes pool."""
    _defaults.bytes_pool.release_bytes(buf)


class SlicePool(BytesPool):
    """A bytes pool with power-of-two slots from 64 bytes to 256 KiB."""

    def __init__(self) -> None:
        super().__init__([1 << shift for shift in range(MIN_SHIFT, MAX_SHIFT + 1)])

    def get(self, size: int) -> ByteSlice:
        """Acquire a slice of length ``size``."""
        return self.acquire_bytes(size)

    def put(self, buf: ByteSlice) -> None:
        """Release ``buf`` back to the pool."""
        self.release_bytes(buf)


_default_slice_pool = SlicePool()


def get_bytes(size: int) -> ByteSlice:
    """Acquire a slice from the default slice pool."""
    return _default_slice_pool.get(size)


def put_bytes(buf: ByteSlice) -> None:
    """Release a slice to the default slice pool."""
    _default_slice_pool.put(buf)