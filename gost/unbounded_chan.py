"""A thread-safe channel whose buffer grows when it fills up."""

from __future__ import annotations

import threading
import time
from collections import deque
from queue import Empty, Full
from typing import Any, Iterator

from gost.circular_queue import CircularUnboundedQueue


class ChanClosedError(Exception):
    """Raised when sending on a closed channel or receiving from a drained one."""


class UnboundedChan:
    """A FIFO channel that grows beyond its initial capacity.

    Items flow through an input stage, an overflow queue and an output stage.
    With ``quota`` zero the overflow queue grows without limit; otherwise the
    channel holds at most about ``quota`` items and :meth:`put` blocks when
    they are all taken.
    """

    def __init__(self, capacity: int, quota: int = 0) -> None:
        if capacity <= 0:
            raise ValueError("capacity should be greater than 0")
        if quota < 0:
            raise ValueError("quota should be greater or equal to 0")
        if quota and capacity > quota:
            capacity = quota

        third = capacity // 3
        in_cap = out_cap = third
        queue_cap = capacity - 2 * third
        queue_quota = quota - 2 * third
        if third > 0:
            in_cap -= 1
        else:
            queue_cap -= 1
            queue_quota -= 1
        if quota == 0:
            queue_quota = 0
        elif queue_quota == 0:
            queue_quota = 1

        self._in_cap = in_cap
        self._out_cap = out_cap
        self._in: deque[Any] = deque()
        self._out: deque[Any] = deque()
        self._queue = CircularUnboundedQueue(queue_cap, queue_quota)
        # An item that fits in neither the full queue nor the output stage.
        self._held: list[Any] = []
        self._closed = False
        self._cond = threading.Condition()

    # -- sending and receiving ----------------------------------------------

    def put(self, item: Any, block: bool = True, timeout: float | None = None) -> None:
        """Send ``item``.

        Raises :class:`queue.Full` if no room appears in time (immediately when
        ``block`` is False) and :class:`ChanClosedError` once closed.
        """
        deadline = self._deadline(timeout)
        with self._cond:
            while True:
                if self._closed:
                    raise ChanClosedError("send on closed channel")
                if not self._held or len(self._in) < self._in_cap:
                    self._in.append(item)
                    self._settle()
                    self._cond.notify_all()
                    return
                if not block or not self._wait(deadline):
                    raise Full

    def get(self, block: bool = True, timeout: float | None = None) -> Any:
        """Receive the oldest item.

        Raises :class:`queue.Empty` if nothing arrives in time (immediately when
        ``block`` is False) and :class:`ChanClosedError` once closed and drained.
        """
        deadline = self._deadline(timeout)
        with self._cond:
            while True:
                if self._has_items():
                    item = self._out.popleft() if self._out else self._take_pending()
                    self._settle()
                    self._cond.notify_all()
                    return item
                if self._closed:
                    raise ChanClosedError("channel is closed and drained")
                if not block or not self._wait(deadline):
                    raise Empty

    def close(self) -> None:
        """Stop accepting items; items already sent can still be received."""
        with self._cond:
            if self._closed:
                raise ChanClosedError("close of closed channel")
            self._closed = True
            self._cond.notify_all()

    def __iter__(self) -> Iterator[Any]:
        while True:
            try:
                yield self.get()
            except ChanClosedError:
                return

    # -- sizes --------------------------------------------------------------

    def __len__(self) -> int:
        with self._cond:
            return len(self._in) + len(self._out) + len(self._queue) + len(self._held)

    def cap(self) -> int:
        """Return the total capacity, which grows with the overflow queue."""
        with self._cond:
            return self._in_cap + self._out_cap + self._queue.cap() + 1

    def in_cap(self) -> int:
        """Return the capacity of the input stage."""
        return self._in_cap

    def out_cap(self) -> int:
        """Return the capacity of the output stage."""
        return self._out_cap

    def queue_cap(self) -> int:
        """Return the current capacity of the overflow queue."""
        with self._cond:
            return self._queue.cap()

    # -- internals ----------------------------------------------------------

    @staticmethod
    def _deadline(timeout: float | None) -> float | None:
        if timeout is None:
            return None
        if timeout < 0:
            raise ValueError("timeout must not be negative")
        return time.monotonic() + timeout

    def _wait(self, deadline: float | None) -> bool:
        if deadline is None:
            self._cond.wait()
            return True
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            return False
        self._cond.wait(remaining)
        return True

    def _has_items(self) -> bool:
        return bool(self._out or not self._queue.is_empty() or self._held or self._in)

    def _has_pending(self) -> bool:
        return bool(not self._queue.is_empty() or self._held or self._in)

    def _take_pending(self) -> Any:
        if not self._queue.is_empty():
            item = self._queue.pop()
            if self._held:
                self._queue.push(self._held.pop())
            return item
        if self._held:
            return self._held.pop()
        return self._in.popleft()

    def _settle(self) -> None:
        while len(self._out) < self._out_cap and self._has_pending():
            self._out.append(self._take_pending())
        while self._in and not self._held:
            item = self._in.popleft()
            if not self._queue.push(item):
                self._held.append(item)
        if self._queue.is_empty() and self._queue.cap() > self._queue.initial_cap():
            self._queue.reset()