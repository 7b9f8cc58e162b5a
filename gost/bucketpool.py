"""Byte slice pools bucketed by powers of two."""

from __future__ import annotations

from gost.pools import ByteSlice, _FreeList


class BucketPool:
    """Several pools of byte slices, each holding one capacity.

    Bucket capacities double from ``min_size``; the last bucket is always
    ``max_size``.
    """

    def __init__(self, min_size: int, max_size: int) -> None:
        if min_size <= 0:
            raise ValueError("min_size must be positive")
        if max_size < min_size:
            raise ValueError("max_size can't be less than min_size")
        self._min_size = min_size
        self._max_size = max_size
        sizes = []
        current = min_size
        while current < max_size:
            sizes.append(current)
            current *= 2
        sizes.append(max_size)
        self._sizes = sizes
        self._buckets: list[_FreeList[ByteSlice]] = [_FreeList() for _ in sizes]

    def max_size(self) -> int:
        """Return the capacity of the largest bucket."""
        return self._max_size

    def bucket_sizes(self) -> list[int]:
        """Return the capacities of all buckets in increasing order."""
        return list(self._sizes)

    def _find_index(self, size: int) -> int | None:
        if size > self._max_size:
            return None
        quotient = -(-size // self._min_size) if size > 0 else 0
        idx = (quotient - 1).bit_length() if quotient > 1 else 0
        if idx > len(self._sizes) - 1:
            return None
        return idx

    def find_pool(self, size: int) -> int | None:
        """Return the bucket capacity that serves ``size``, or None."""
        idx = self._find_index(size)
        return None if idx is None else self._sizes[idx]

    def get(self, size: int) -> ByteSlice:
        """Return a slice of length ``size``.

        Sizes no bucket can hold get a fresh slice of exactly that capacity.
        """
        idx = self._find_index(size)
        if idx is None:
            return ByteSlice(size, size)
        buf = self._buckets[idx].take()
        if buf is None:
            buf = ByteSlice(self._sizes[idx], self._sizes[idx])
        buf._resize(size)
        return buf

    def put(self, buf: ByteSlice) -> None:
        """Return ``buf`` to its bucket; slices matching no bucket are dropped."""
        capacity = buf.cap()
        idx = self._find_index(capacity)
        if idx is None or self._sizes[idx] != capacity:
            return
        buf._resize(capacity)
        self._buckets[idx].give(buf)