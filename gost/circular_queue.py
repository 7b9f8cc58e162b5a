"""A ring-buffer queue that grows when full, up to an optional quota."""

from __future__ import annotations

from typing import Any

FAST_GROW_THRESHOLD = 1024


class CircularUnboundedQueue:
    """A FIFO queue on a ring buffer that grows automatically.

    Below :data:`FAST_GROW_THRESHOLD` the capacity doubles, beyond it grows
    by a quarter. A non-zero ``quota`` caps the capacity; once reached,
    :meth:`push` fails. Not thread-safe.
    """

    def __init__(self, capacity: int, quota: int = 0) -> None:
        if capacity < 0:
            raise ValueError("capacity should be greater than zero")
        if quota < 0:
            raise ValueError("quota should be greater or equal to zero")
        if quota and capacity > quota:
            capacity = quota
        self._data: list[Any] = [None] * (capacity + 1)
        self._head = 0
        self._tail = 0
        self._initial_cap = capacity
        self._quota = quota

    def is_empty(self) -> bool:
        """Return True if the queue holds no items."""
        return self._head == self._tail

    def push(self, item: Any) -> bool:
        """Append ``item``; return False if the queue is full and cannot grow."""
        next_tail = (self._tail + 1) % len(self._data)
        if next_tail == self._head and not self._grow():
            return False
        self._data[self._tail] = item
        self._tail = (self._tail + 1) % len(self._data)
        return True

    def pop(self) -> Any:
        """Remove and return the oldest item."""
        if self.is_empty():
            raise IndexError("queue has no element")
        item = self._data[self._head]
        self._data[self._head] = None
        self._head = (self._head + 1) % len(self._data)
        return item

    def peek(self) -> Any:
        """Return the oldest item without removing it."""
        if self.is_empty():
            raise IndexError("queue has no element")
        return self._data[self._head]

    def cap(self) -> int:
        """Return the current capacity."""
        return len(self._data) - 1

    def __len__(self) -> int:
        return (self._tail - self._head) % len(self._data)

    def reset(self) -> None:
        """Drop all items and shrink back to the initial capacity."""
        self._data = [None] * (self._initial_cap + 1)
        self._head = 0
        self._tail = 0

    def initial_cap(self) -> int:
        """Return the capacity the queue was created with."""
        return self._initial_cap

    def _grow(self) -> bool:
        old_cap = self.cap()
        base = old_cap or 1
        if base < FAST_GROW_THRESHOLD:
            new_cap = base * 2
        else:
            new_cap = base + base // 4
        if self._quota and new_cap > self._quota:
            new_cap = self._quota
        if new_cap == old_cap:
            return False

        if self._head > self._tail:
            items = self._data[self._head:] + self._data[:self._tail]
        else:
            items = self._data[self._head:self._tail]
        self._data = items + [None] * (new_cap + 1 - len(items))
        self._head = 0
        self._tail = len(items)
        return True

    def __repr__(self) -> str:
        return f"CircularUnboundedQueue(len={len(self)}, cap={self.cap()})"