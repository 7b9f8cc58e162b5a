"""Batching of concurrent waiters into periodic, numbered batches."""

from __future__ import annotations

import threading
import time
from typing import Callable


class _Batch:
    __slots__ = ("ready", "id")

    def __init__(self) -> None:
        self.ready = threading.Event()
        self.id = 0


class Batcher:
    """Delays concurrent callers for an interval so they run as one batch.

    The first caller of :meth:`wait` opens a batch; every caller that arrives
    before the interval elapses joins it. When the interval is over, all of
    them are released together and receive the same, sequentially increasing
    batch id. A caller therefore waits at most one interval.
    """

    def __init__(
        self,
        interval: float,
        sleep: Callable[[float], object] = time.sleep,
    ) -> None:
        self._interval = interval
        self._sleep = sleep
        self._lock = threading.Lock()
        self._waiters = 0
        self._next_id = 0
        self._batch: _Batch | None = None

    def waiters(self) -> int:
        """Return the number of callers waiting in the current batch."""
        with self._lock:
            return self._waiters

    def wait(self) -> int:
        """Join the current batch and block until it is released.

        Returns the id of the batch, starting from 1.
        """
        with self._lock:
            self._waiters += 1
            if self._batch is None:
                self._batch = _Batch()
                threading.Thread(
                    target=self._run, args=(self._batch,), daemon=True
                ).start()
            batch = self._batch
        batch.ready.wait()
        return batch.id

    def _run(self, batch: _Batch) -> None:
        self._sleep(self._interval)
        with self._lock:
            self._next_id += 1
            batch.id = self._next_id
            self._waiters = 0
            self._batch = None
        batch.ready.set()