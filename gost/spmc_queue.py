"""A fixed-size queue with one producer end and a shared consumer end."""

from __future__ import annotations

import threading
from collections import deque
from typing import Any


class SPMCLockFreeQueue:
    """A fixed-size single-producer, multi-consumer double-ended queue.

    The producer pushes and pops at the head; any number of consumers pop at
    the tail. ``size`` must be a power of two and is the number of items the
    queue can hold.
    """

    def __init__(self, size: int) -> None:
        if size < 0 or size & (size - 1):
            raise ValueError("the size of pool must be a power of 2")
        self._size = size
        self._items: deque[Any] = deque()
        self._lock = threading.Lock()

    def push_head(self, value: Any) -> bool:
        """Add ``value`` at the head; return False if the queue is full."""
        with self._lock:
            if len(self._items) >= self._size:
                return False
            self._items.append(value)
            return True

    def pop_head(self) -> Any:
        """Remove and return the newest item; raise IndexError when empty."""
        with self._lock:
            if not self._items:
                raise IndexError("queue is empty")
            return self._items.pop()

    def pop_tail(self) -> Any:
        """Remove and return the oldest item; raise IndexError when empty."""
        with self._lock:
            if not self._items:
                raise IndexError("queue is empty")
            return self._items.popleft()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __repr__(self) -> str:
        return f"SPMCLockFreeQueue(len={len(self)}, size={self._size})"