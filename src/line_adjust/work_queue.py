from __future__ import annotations

import threading
from collections import deque
from typing import Deque, Optional

from .models import LineJob


class QueueAborted(Exception):
    """Raised to a producer blocked on a queue that was aborted."""


class WorkQueue:
    """Closable FIFO hand-off of line jobs from one producer to many workers.

    ``get()`` returns ``None`` once the queue is closed and drained, or as soon
    as it is aborted. ``maxsize`` of 0 means unbounded.
    """

    def __init__(self, maxsize: int = 0) -> None:
        self.maxsize = maxsize
        self._items: Deque[LineJob] = deque()
        self._lock = threading.Lock()
        self._not_empty = threading.Condition(self._lock)
        self._not_full = threading.Condition(self._lock)
        self._closed = False
        self._aborted = False

    def put(self, job: LineJob) -> None:
        with self._not_full:
            if self._closed:
                raise RuntimeError("put() on a closed work queue")
            while self.maxsize > 0 and len(self._items) >= self.maxsize and not self._aborted:
                self._not_full.wait()
            if self._aborted:
                raise QueueAborted(f"work queue aborted before job {job.index} was queued")
            self._items.append(job)
            self._not_empty.notify()

    def get(self) -> Optional[LineJob]:
        with self._not_empty:
            while not self._items and not self._closed and not self._aborted:
                self._not_empty.wait()
            if self._aborted or not self._items:
                return None
            job = self._items.popleft()
            self._not_full.notify()
            return job

    def close(self) -> None:
        """Mark that no more jobs will be queued; workers drain then stop."""
        with self._lock:
            self._closed = True
            self._not_empty.notify_all()

    def abort(self) -> None:
        """Drop pending jobs and release every blocked producer and worker."""
        with self._lock:
            self._aborted = True
            self._items.clear()
            self._not_empty.notify_all()
            self._not_full.notify_all()

    @property
    def aborted(self) -> bool:
        return self._aborted

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
