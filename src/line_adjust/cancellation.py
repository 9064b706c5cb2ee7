"""Cooperative cancellation shared between a caller and a pipeline run."""
from __future__ import annotations

import threading
from typing import Callable, List, Optional


class CancellationToken:
    """Thread-safe cancellation flag with callbacks.

    ``cancel()`` is idempotent. Callbacks registered before cancellation run
    once, on the cancelling thread; callbacks registered afterwards run
    immediately on the registering thread.
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._callbacks: List[Callable[[], None]] = []
        self.reason: Optional[str] = None

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self, reason: str | None = None) -> None:
        with self._lock:
            if self._event.is_set():
                return
            self.reason = reason
            self._event.set()
            callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()

    def register(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Run ``callback`` on cancellation and return a function that unregisters it."""
        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(callback)
                return lambda: self._unregister(callback)
        callback()
        return lambda: None

    def _unregister(self, callback: Callable[[], None]) -> None:
        with self._lock:
            try:
                self._callbacks.remove(callback)
            except ValueError:
                pass

    def wait(self, timeout: float | None = None) -> bool:
        return self._event.wait(timeout)

    @classmethod
    def linked(cls, parent: "CancellationToken | None") -> tuple["CancellationToken", Callable[[], None]]:
        """Return a child token cancelled with ``parent`` plus the function detaching it."""
        child = cls()
        if parent is None:
            return child, lambda: None
        detach = parent.register(lambda: child.cancel(parent.reason or "cancelled by caller"))
        return child, detach
