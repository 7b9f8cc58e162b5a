"""Consolidation of duplicate concurrent queries into a single execution."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any

from gost.lru import LRUCache

DEFAULT_CACHE_CAPACITY = 1000


@dataclass(frozen=True)
class ConsolidatorCacheItem:
    """A query and how many times it has been consolidated."""

    query: str
    count: int


class _Count:
    """A thread-safe counter stored as an LRU cache value of size one."""

    def __init__(self, value: int = 0) -> None:
        self._value = value
        self._lock = threading.Lock()

    def size(self) -> int:
        return 1

    def add(self, n: int) -> int:
        with self._lock:
            self._value += n
            return self._value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


class ConsolidatorCache:
    """Counts how often recent queries have been consolidated."""

    def __init__(self, capacity: int) -> None:
        self._cache = LRUCache(capacity)

    def record(self, query: str) -> None:
        """Increase the count for ``query`` by one, adding it if new."""
        counter = self._cache.get(query)
        if counter is None:
            self._cache.set(query, _Count(1))
        else:
            counter.add(1)

    def items(self) -> list[ConsolidatorCacheItem]:
        """Return the recorded queries, most recently used first."""
        return [
            ConsolidatorCacheItem(item.key, item.value.value)
            for item in self._cache.items()
        ]


class Result:
    """The shared outcome of a query being executed once for many callers."""

    def __init__(self, consolidator: Consolidator, query: str) -> None:
        self._consolidator = consolidator
        self._done = threading.Event()
        self.query = query
        self.result: Any = None
        self.error: BaseException | None = None

    def broadcast(self) -> None:
        """Mark the original execution complete and release all waiters."""
        self._consolidator._finish(self.query)
        self._done.set()

    def wait(self, timeout: float | None = None) -> bool:
        """Wait for the original execution; return False on timeout."""
        self._consolidator.record(self.query)
        return self._done.wait(timeout)


class Consolidator(ConsolidatorCache):
    """Lets duplicate queries wait for one in-flight execution and share it."""

    def __init__(self) -> None:
        super().__init__(DEFAULT_CACHE_CAPACITY)
        self._lock = threading.Lock()
        self._queries: dict[str, Result] = {}

    def create(self, query: str) -> tuple[Result, bool]:
        """Register ``query`` as executing.

        Returns its :class:`Result` and True if this call registered it, or
        the in-flight result and False if the query is a duplicate.
        """
        with self._lock:
            existing = self._queries.get(query)
            if existing is not None:
                return existing, False
            result = Result(self, query)
            self._queries[query] = result
            return result, True

    def _finish(self, query: str) -> None:
        with self._lock:
            self._queries.pop(query, None)