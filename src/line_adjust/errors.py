from __future__ import annotations


class LineAdjustError(Exception):
    """Base error for the line adjustment pipeline."""


class InvalidArgumentError(LineAdjustError, ValueError):
    pass


class ConfigError(LineAdjustError):
    def __init__(self, message: str, *, errors=None):
        super().__init__(message)
        self.errors = errors or []


class LineOverflowError(LineAdjustError):
    """A multi-word line job does not fit its width even with single gaps."""

    def __init__(self, message: str, *, index: int | None = None):
        super().__init__(message)
        self.index = index


class PipelineCancelledError(LineAdjustError):
    pass


class PipelineTimeoutError(PipelineCancelledError):
    pass


class WorkerFailureError(LineAdjustError):
    def __init__(self, message: str, *, index: int | None = None):
        super().__init__(message)
        self.index = index


class AlreadyRunningError(LineAdjustError, RuntimeError):
    """Raised when a transform is already active on the same engine."""
