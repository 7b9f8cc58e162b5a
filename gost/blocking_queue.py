"""A thread-safe queue whose readers can block until items arrive."""

from __future__ import annotations

import os
import threading
from collections import deque
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable


class DisposedError(Exception):
    """Raised when an operation is performed on a disposed queue."""

    def __init__(self) -> None:
        super().__init__("queue: disposed")


class QueueTimeoutError(TimeoutError):
    """Raised when a poll times out."""

    def __init__(self) -> None:
        super().__init__("queue: poll timed out")


class EmptyQueueError(IndexError):
    """Raised when peeking into an empty queue."""

    def __init__(self) -> None:
        super().__init__("queue: empty queue")


class _Waiter:
    __slots__ = ("number", "ready", "items", "done", "disposed")

    def __init__(self, number: int) -> None:
        self.number = number
        self.ready = threading.Event()
        self.items: list[Any] = []
        self.done = False
        self.disposed = False


class Queue:
    """A FIFO queue whose blocked readers are served in arrival order."""

    def __init__(self, hint: int = 0) -> None:
        if hint < 0:
            raise ValueError("hint must not be negative")
        self._items: list[Any] = []
        self._waiters: deque[_Waiter] = deque()
        self._lock = threading.Lock()
        self._disposed = False

    def _take(self, number: int) -> list[Any]:
        taken = self._items[:number]
        del self._items[:number]
        return taken

    def put(self, *args: Any) -> None:
        """Append the given items, handing them to waiting readers first."""
        if not args:
            return
        with self._lock:
            if self._disposed:
                raise DisposedError()
            self._items.extend(args)
            while self._waiters and self._items:
                waiter = self._waiters.popleft()
                waiter.items = self._take(waiter.number)
                waiter.done = True
                waiter.ready.set()

    def get(self, number: int) -> list[Any]:
        """Return up to ``number`` items, blocking until at least one is there."""
        return self.poll(number, 0)

    def poll(self, number: int, timeout: float | None = None) -> list[Any]:
        """Return up to ``number`` items, waiting at most ``timeout`` seconds.

        A missing or non-positive timeout waits forever. Raises
        :class:`QueueTimeoutError` when the timeout passes first.
        """
        if number < 1:
            return []
        with self._lock:
            if self._disposed:
                raise DisposedError()
            if self._items:
                return self._take(number)
            waiter = _Waiter(number)
            self._waiters.append(waiter)

        wait_for = timeout if timeout is not None and timeout > 0 else None
        waiter.ready.wait(wait_for)

        with self._lock:
            if waiter.disposed:
                raise DisposedError()
            if waiter.done:
                return waiter.items
            self._waiters.remove(waiter)
        raise QueueTimeoutError()

    def peek(self) -> Any:
        """Return the first item without removing it."""
        with self._lock:
            if self._disposed:
                raise DisposedError()
            if not self._items:
                raise EmptyQueueError()
            return self._items[0]

    def get_until(self, checker: Callable[[Any], bool]) -> list[Any]:
        """Take items from the front while ``checker`` accepts them; never waits."""
        with self._lock:
            if self._disposed:
                raise DisposedError()
            count = 0
            for item in self._items:
                if not checker(item):
                    break
                count += 1
            return self._take(count)

    def empty(self) -> bool:
        """Return True if the queue holds no items."""
        with self._lock:
            return not self._items

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def disposed(self) -> bool:
        """Return True once :meth:`dispose` has been called."""
        with self._lock:
            return self._disposed

    def waiter_count(self) -> int:
        """Return the number of readers blocked waiting for items."""
        with self._lock:
            return len(self._waiters)

    def dispose(self) -> list[Any]:
        """Dispose of the queue, wake blocked readers and return the items left.

        Later reads and writes raise :class:`DisposedError`.
        """
        with self._lock:
            self._disposed = True
            for waiter in self._waiters:
                waiter.disposed = True
                waiter.ready.set()
            self._waiters.clear()
            items, self._items = self._items, []
            return items

    def __repr__(self) -> str:
        return f"Queue(len={len(self)}, disposed={self.disposed()})"


def execute_in_parallel(queue: Queue | None, fn: Callable[[Any], object]) -> None:
    """Call ``fn`` on every item of ``queue`` in parallel, then dispose of it.

    An empty queue is left untouched.
    """
    if queue is None:
        return
    with queue._lock:
        items = list(queue._items)
        if not items:
            return
        workers = max(1, (os.cpu_count() or 1) - 1)
        with ThreadPoolExecutor(max_workers=workers) as executor:
            list(executor.map(fn, items))
    queue.dispose()