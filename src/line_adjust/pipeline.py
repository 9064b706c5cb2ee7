"""Concurrent justification pipeline.

The caller's thread splits the text and feeds line jobs into a work queue
while a pool of worker threads justifies them into a shared collector. The
caller then blocks until every line is back, a worker failed, the run was
cancelled, or the configured timeout expired, and finally joins the lines in
their original order.
"""
from __future__ import annotations

import logging
import threading
import uuid
from concurrent.futures import ThreadPoolExecutor

from .cancellation import CancellationToken
from .collector import ResultCollector
from .config import EngineConfig
from .errors import (
    AlreadyRunningError,
    LineAdjustError,
    PipelineCancelledError,
    PipelineTimeoutError,
    WorkerFailureError,
)
from .joiner import join_results
from .justifier import justify
from .models import JustifiedResult
from .splitter import iter_line_jobs, validate_arguments
from .work_queue import QueueAborted, WorkQueue

logger = logging.getLogger(__name__)


class PipelineRun:
    """State owned by a single ``transform`` call. Never reused."""

    def __init__(self, config: EngineConfig, cancellation: CancellationToken | None = None) -> None:
        self.config = config
        self.run_id = uuid.uuid4().hex[:8]
        self.queue = WorkQueue(config.queue_size)
        self.collector = ResultCollector()
        self.token, self._detach_parent = CancellationToken.linked(cancellation)
        self._unregister = self.token.register(self._on_cancel)
        self._timed_out = False

    def _on_cancel(self) -> None:
        self.queue.abort()
        self.collector.interrupt()

    def _abort(self, exc: BaseException) -> None:
        self.collector.fail(exc)
        self.token.cancel(f"{type(exc).__name__} in worker")

    def _work(self, worker_id: int) -> int:
        processed = 0
        while not self.token.cancelled:
            job = self.queue.get()
            if job is None:
                break
            try:
                text = justify(job, self.config.separator)
                self.collector.add(JustifiedResult(index=job.index, text=text))
            except LineAdjustError as exc:
                logger.error("run %s: line %d rejected: %s", self.run_id, job.index, exc)
                self._abort(exc)
                break
            except Exception as exc:
                logger.exception("run %s: worker %d failed on line %d", self.run_id, worker_id, job.index)
                failure = WorkerFailureError(
                    f"Worker {worker_id} failed on line {job.index}: {exc}",
                    index=job.index,
                )
                failure.__cause__ = exc
                self._abort(failure)
                break
            processed += 1
        return processed

    def _produce(self, text: str, width: int) -> int:
        count = 0
        try:
            for job in iter_line_jobs(text, width):
                self.queue.put(job)
                count += 1
        finally:
            self.queue.close()
        return count

    def _terminal_error(self) -> BaseException:
        failure = self.collector.failure
        if failure is not None:
            return failure
        if self._timed_out:
            return PipelineTimeoutError(f"Line adjustment timed out after {self.config.timeout_s}s")
        return PipelineCancelledError(f"Line adjustment cancelled: {self.token.reason or 'cancelled'}")

    def execute(self, text: str, width: int) -> str:
        logger.debug("run %s: starting %d workers, width=%d", self.run_id, self.config.workers, width)
        executor = ThreadPoolExecutor(max_workers=self.config.workers, thread_name_prefix=f"line-adjust-{self.run_id}")
        for worker_id in range(self.config.workers):
            executor.submit(self._work, worker_id)

        completed = False
        try:
            try:
                count = self._produce(text, width)
            except QueueAborted:
                raise self._terminal_error()
            logger.debug("run %s: queued %d line jobs", self.run_id, count)

            if not self.collector.wait_for(count, timeout=self.config.timeout_s):
                if self.collector.failure is None and not self.token.cancelled:
                    self._timed_out = True
                    self.token.cancel("timed out")
                error = self._terminal_error()
                if isinstance(error, PipelineCancelledError):
                    logger.warning("run %s: %s", self.run_id, error)
                raise error
            result = join_results(self.collector.results(), self.config.line_separator)
            completed = True
            logger.debug("run %s: joined %d lines", self.run_id, len(self.collector))
            return result
        finally:
            if not completed:
                self.token.cancel("run aborted")
            # Workers blocked inside a hung justify call are not waited for on failure.
            executor.shutdown(wait=completed, cancel_futures=True)
            self._unregister()
            self._detach_parent()


class LineAdjustEngine:
    """Justifies text to a fixed line width on a pool of worker threads.

    Every ``transform`` call runs in its own ``PipelineRun``. Unless
    ``config.allow_overlap`` is set, a call made while another one is active on
    the same engine fails with ``AlreadyRunningError``.
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()
        self.config.validate()
        self._active = threading.Lock()

    def transform(self, text: str, width: int, cancellation: CancellationToken | None = None) -> str:
        validate_arguments(text, width)
        exclusive = not self.config.allow_overlap
        if exclusive and not self._active.acquire(blocking=False):
            raise AlreadyRunningError("A transform is already running on this engine")
        try:
            if not text or text.isspace():
                return ""
            return PipelineRun(self.config, cancellation).execute(text, width)
        finally:
            if exclusive:
                self._active.release()


def transform(
    text: str,
    width: int,
    cancellation: CancellationToken | None = None,
    config: EngineConfig | None = None,
) -> str:
    return LineAdjustEngine(config).transform(text, width, cancellation)
