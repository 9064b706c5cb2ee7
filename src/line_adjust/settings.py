"""Loading of ``(text, line_width)`` parameters from a JSON settings file."""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping

from jsonschema import Draft202012Validator

from .config import EngineConfig
from .errors import ConfigError

DEFAULT_SETTINGS_PATH = Path("appsettings.json")
SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "appsettings.schema.json"

ENGINE_KEYS = {
    "Workers": "workers",
    "Separator": "separator",
    "TimeoutSeconds": "timeout_s",
    "QueueSize": "queue_size",
    "AllowOverlap": "allow_overlap",
}


@dataclass(frozen=True)
class Parameters:
    text: str
    line_width: int


@dataclass(frozen=True)
class Settings:
    parameters: Parameters
    engine_overrides: Dict[str, Any]

    def engine_config(self, base: EngineConfig | None = None) -> EngineConfig:
        return (base or EngineConfig()).with_overrides(self.engine_overrides)


def _load_schema() -> dict:
    if not SCHEMA_PATH.exists():
        raise FileNotFoundError(f"Schema not found: {SCHEMA_PATH}")
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def validate_settings(payload: Mapping[str, object], label: str) -> None:
    validator = Draft202012Validator(_load_schema())
    errors: List[str] = []
    for error in sorted(validator.iter_errors(payload), key=lambda e: [str(part) for part in e.path]):
        location = " -> ".join(str(part) for part in error.path) or "<root>"
        errors.append(f"{location}: {error.message}")
    if errors:
        joined = "\n".join(f"- {error}" for error in errors)
        raise ConfigError(f"Schema validation failed for {label}:\n{joined}", errors=errors)


def load_settings(path: Path | str = DEFAULT_SETTINGS_PATH) -> Settings:
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Settings file not found: {path}")
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Settings file {path} is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise ConfigError(f"Settings file {path} must contain a JSON object")
    validate_settings(payload, str(path))

    section = payload["Parameters"]
    engine_section = payload.get("Engine") or {}
    return Settings(
        parameters=Parameters(text=section["Text"], line_width=section["LineWidth"]),
        engine_overrides={ENGINE_KEYS[key]: value for key, value in engine_section.items()},
    )


def load_parameters(path: Path | str = DEFAULT_SETTINGS_PATH) -> Parameters:
    return load_settings(path).parameters
