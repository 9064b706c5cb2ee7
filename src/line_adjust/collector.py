from __future__ import annotations

import threading
from typing import Dict, List, Optional

from .errors import LineAdjustError
from .models import JustifiedResult


class ResultCollector:
    """Thread-safe sink of justified lines keyed by line index.

    Writers call ``add()``; the orchestrating thread blocks in ``wait_for()``
    until the expected number of results arrived, a worker recorded a failure
    with ``fail()``, or the run was interrupted.
    """

    def __init__(self) -> None:
        self._results: Dict[int, JustifiedResult] = {}
        self._condition = threading.Condition()
        self._failure: Optional[BaseException] = None
        self._interrupted = False

    def add(self, result: JustifiedResult) -> None:
        with self._condition:
            if result.index in self._results:
                raise LineAdjustError(f"Duplicate result for line {result.index}")
            self._results[result.index] = result
            self._condition.notify_all()

    def fail(self, exc: BaseException) -> None:
        """Record a terminal failure. Only the first one is kept."""
        with self._condition:
            if self._failure is None:
                self._failure = exc
            self._condition.notify_all()

    def interrupt(self) -> None:
        with self._condition:
            self._interrupted = True
            self._condition.notify_all()

    def wait_for(self, count: int, timeout: float | None = None) -> bool:
        """Block until ``count`` results are present; False on failure, interrupt or timeout."""
        with self._condition:
            self._condition.wait_for(
                lambda: len(self._results) >= count or self._failure is not None or self._interrupted,
                timeout=timeout,
            )
            return len(self._results) >= count and self._failure is None

    @property
    def failure(self) -> Optional[BaseException]:
        with self._condition:
            return self._failure

    def results(self) -> List[JustifiedResult]:
        with self._condition:
            return list(self._results.values())

    def __len__(self) -> int:
        with self._condition:
            return len(self._results)
