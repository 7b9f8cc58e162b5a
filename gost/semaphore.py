"""A counting semaphore with an optional acquisition timeout."""

from __future__ import annotations

import threading


class Semaphore:
    """A counting semaphore.

    ``timeout`` is in seconds; zero means :meth:`acquire` waits forever.
    """

    def __init__(self, count: int, timeout: float = 0.0) -> None:
        if count < 0:
            raise ValueError("count must not be negative")
        if timeout < 0:
            raise ValueError("timeout must not be negative")
        self._capacity = count
        self._available = count
        self._timeout = timeout
        self._cond = threading.Condition()

    def acquire(self) -> bool:
        """Take a slot; return False if the timeout passed first."""
        with self._cond:
            ready = self._cond.wait_for(
                lambda: self._available > 0, self._timeout or None
            )
            if not ready:
                return False
            self._available -= 1
            return True

    def try_acquire(self) -> bool:
        """Take a slot only if one is free right now."""
        with self._cond:
            if self._available <= 0:
                return False
            self._available -= 1
            return True

    def release(self) -> None:
        """Give a slot back; releasing more than was acquired is an error."""
        with self._cond:
            if self._available >= self._capacity:
                raise ValueError("semaphore released too many times")
            self._available += 1
            self._cond.notify()

    def size(self) -> int:
        """Return the number of free slots."""
        with self._cond:
            return self._available

    def __enter__(self) -> Semaphore:
        if not self.acquire():
            raise TimeoutError("semaphore acquisition timed out")
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()