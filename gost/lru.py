"""A thread-safe LRU cache bounded by the total size of its values."""

from __future__ import annotations

import json
import threading
from collections import OrderedDict
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol


class CacheValue(Protocol):
    """A value that reports how much of the cache capacity it uses."""

    def size(self) -> int: ...


@dataclass(frozen=True)
class Item:
    """A key and its value as stored in the cache."""

    key: str
    value: Any


@dataclass(frozen=True)
class CacheStats:
    """A snapshot of the cache counters."""

    length: int
    size: int
    capacity: int
    evictions: int
    oldest: datetime | None


@dataclass
class _Entry:
    value: Any
    size: int
    time_accessed: datetime


class LRUCache:
    """An LRU cache whose capacity is the sum of its values' ``size()``.

    When the total size exceeds the capacity, the least recently used
    entries are evicted until it fits again.
    """

    def __init__(self, capacity: int) -> None:
        self._lock = threading.Lock()
        # Ordered from least to most recently used.
        self._entries: OrderedDict[str, _Entry] = OrderedDict()
        self._size = 0
        self._capacity = capacity
        self._evictions = 0

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value for ``key`` and mark it most recently used."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return default
            self._touch(key, entry)
            return entry.value

    def peek(self, key: str, default: Any = None) -> Any:
        """Return the value for ``key`` without changing the LRU order."""
        with self._lock:
            entry = self._entries.get(key)
            return default if entry is None else entry.value

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def set(self, key: str, value: CacheValue) -> None:
        """Store ``value`` under ``key``, replacing any existing value."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._add_new(key, value)
                return
            value_size = value.size()
            self._size += value_size - entry.size
            entry.value = value
            entry.size = value_size
            self._touch(key, entry)
            self._check_capacity()

    def set_if_absent(self, key: str, value: CacheValue) -> None:
        """Store ``value`` only if ``key`` is not cached yet."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._add_new(key, value)
            else:
                self._touch(key, entry)

    def delete(self, key: str) -> bool:
        """Remove ``key`` and return whether it was present."""
        with self._lock:
            entry = self._entries.pop(key, None)
            if entry is None:
                return False
            self._size -= entry.size
            return True

    def clear(self) -> None:
        """Remove every entry."""
        with self._lock:
            self._entries.clear()
            self._size = 0

    def set_capacity(self, capacity: int) -> None:
        """Change the capacity, evicting entries if the cache no longer fits."""
        with self._lock:
            self._capacity = capacity
            self._check_capacity()

    def stats(self) -> CacheStats:
        """Return length, size, capacity, evictions and the oldest access."""
        with self._lock:
            return CacheStats(
                length=len(self._entries),
                size=self._size,
                capacity=self._capacity,
                evictions=self._evictions,
                oldest=self._oldest(),
            )

    def stats_json(self) -> str:
        """Return the stats as a JSON object."""
        stats = self.stats()
        return json.dumps(
            {
                "Length": stats.length,
                "Size": stats.size,
                "Capacity": stats.capacity,
                "Evictions": stats.evictions,
                "OldestAccess": "" if stats.oldest is None else stats.oldest.isoformat(),
            }
        )

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def size(self) -> int:
        """Return the sum of the cached values' sizes."""
        with self._lock:
            return self._size

    def capacity(self) -> int:
        """Return the maximum total size."""
        with self._lock:
            return self._capacity

    def evictions(self) -> int:
        """Return how many entries have been evicted."""
        with self._lock:
            return self._evictions

    def oldest(self) -> datetime | None:
        """Return the access time of the least recently used entry, or None."""
        with self._lock:
            return self._oldest()

    def keys(self) -> list[str]:
        """Return the keys from most to least recently used."""
        with self._lock:
            return list(reversed(self._entries))

    def items(self) -> list[Item]:
        """Return the entries from most to least recently used."""
        with self._lock:
            return [Item(key, entry.value) for key, entry in reversed(self._entries.items())]

    def _oldest(self) -> datetime | None:
        if not self._entries:
            return None
        return next(iter(self._entries.values())).time_accessed

    def _touch(self, key: str, entry: _Entry) -> None:
        self._entries.move_to_end(key)
        entry.time_accessed = datetime.now()

    def _add_new(self, key: str, value: CacheValue) -> None:
        entry = _Entry(value, value.size(), datetime.now())
        self._entries[key] = entry
        self._size += entry.size
        self._check_capacity()

    def _check_capacity(self) -> None:
        while self._size > self._capacity and self._entries:
            _, entry = self._entries.popitem(last=False)
            self._size -= entry.size
            self._evictions += 1