from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Any, Mapping

from .errors import ConfigError

DEFAULT_WORKERS = 6
TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc


def _env_float(name: str) -> float | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from exc


@dataclass(frozen=True)
class EngineConfig:
    workers: int = DEFAULT_WORKERS
    separator: str = " "
    line_separator: str = field(default_factory=lambda: os.linesep)
    timeout_s: float | None = None
    queue_size: int = 0
    allow_overlap: bool = False

    @classmethod
    def from_env(cls) -> "EngineConfig":
        config = cls(
            workers=_env_int("LINE_ADJUST_WORKERS", DEFAULT_WORKERS),
            separator=os.getenv("LINE_ADJUST_SEPARATOR", " "),
            timeout_s=_env_float("LINE_ADJUST_TIMEOUT_S"),
            queue_size=_env_int("LINE_ADJUST_QUEUE_SIZE", 0),
            allow_overlap=os.getenv("LINE_ADJUST_ALLOW_OVERLAP", "").strip().lower() in TRUE_VALUES,
        )
        config.validate()
        return config

    def with_overrides(self, overrides: Mapping[str, Any]) -> "EngineConfig":
        """Return a copy with the non-None ``overrides`` applied and validated."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        unknown = set(changes) - set(self.__dataclass_fields__)
        if unknown:
            raise ConfigError(f"Unknown engine settings: {', '.join(sorted(unknown))}")
        config = replace(self, **changes)
        config.validate()
        return config

    def validate(self) -> None:
        if isinstance(self.workers, bool) or not isinstance(self.workers, int) or self.workers <= 0:
            raise ConfigError(f"workers must be a positive integer, got {self.workers!r}")
        if not isinstance(self.separator, str) or len(self.separator) != 1:
            raise ConfigError(f"separator must be a single character, got {self.separator!r}")
        if not isinstance(self.line_separator, str) or not self.line_separator:
            raise ConfigError("line_separator must be a non-empty string")
        if self.timeout_s is not None and self.timeout_s <= 0:
            raise ConfigError(f"timeout_s must be > 0, got {self.timeout_s}")
        if self.queue_size < 0:
            raise ConfigError(f"queue_size must be >= 0, got {self.queue_size}")
