#!/usr/bin/env python3
"""Justify text to a fixed line width.

Usage examples:
  line-adjust --text "one two three" --line-width 21
  line-adjust --config appsettings.json --workers 1
  line-adjust --text "one two three" --line-width 21 --separator +

Without --text/--line-width the parameters are read from the "Parameters"
section of the settings file (appsettings.json in the working directory by
default).
"""
from __future__ import annotations

import argparse
import logging
import os
import threading
from pathlib import Path
from typing import List, Optional

from rich.cells import cell_len
from rich.console import Console
from rich.logging import RichHandler

from .cancellation import CancellationToken
from .config import EngineConfig
from .errors import (
    ConfigError,
    InvalidArgumentError,
    LineAdjustError,
    PipelineCancelledError,
)
from .pipeline import LineAdjustEngine
from .settings import DEFAULT_SETTINGS_PATH, Parameters, load_settings

EXIT_OK = 0
EXIT_USAGE_ERROR = 2
EXIT_INVALID_ARGUMENT = 3
EXIT_CANCELLED = 4
EXIT_PIPELINE_FAILURE = 5

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

logger = logging.getLogger("line_adjust.cli")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Reflow text into fully justified lines of a fixed width.",
    )
    parser.add_argument("--text", help="Text to justify.")
    parser.add_argument("--line-width", type=int, help="Target width of every justified line.")
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_SETTINGS_PATH,
        help="JSON settings file used when --text/--line-width are not given.",
    )
    parser.add_argument("--workers", type=int, help="Number of justification worker threads.")
    parser.add_argument("--separator", help="Single padding character placed between words.")
    parser.add_argument(
        "--timeout-seconds",
        type=float,
        help="Fail the run if it has not finished within this many seconds.",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        default=os.getenv("LINE_ADJUST_LOG_LEVEL", "INFO"),
        choices=LOG_LEVELS,
        help="Logging verbosity (default: %(default)s).",
    )
    return parser.parse_args(argv)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def print_lines(lines: List[str]) -> None:
    """Write justified lines to stdout unchanged, trailing padding included."""
    if not lines:
        return
    # Rich strips whitespace past the console width, so the width must cover the longest line.
    width = max([80] + [max(len(line), cell_len(line)) for line in lines])
    console = Console(highlight=False, soft_wrap=True, width=width)
    for line in lines:
        console.print(line, markup=False, emoji=False)


def resolve_inputs(args: argparse.Namespace) -> tuple[Parameters, EngineConfig]:
    engine_config = EngineConfig.from_env()
    if args.text is not None or args.line_width is not None:
        if args.text is None or args.line_width is None:
            raise ConfigError("--text and --line-width must be given together")
        parameters = Parameters(text=args.text, line_width=args.line_width)
    else:
        settings = load_settings(args.config)
        parameters = settings.parameters
        engine_config = settings.engine_config(engine_config)

    engine_config = engine_config.with_overrides(
        {
            "workers": args.workers,
            "separator": args.separator,
            "timeout_s": args.timeout_seconds,
        }
    )
    return parameters, engine_config


def run_transform(engine: LineAdjustEngine, parameters: Parameters, token: CancellationToken) -> str:
    """Run the transform on a helper thread so Ctrl-C can cancel it from the main thread."""
    outcome: dict[str, object] = {}

    def _target() -> None:
        try:
            outcome["result"] = engine.transform(parameters.text, parameters.line_width, token)
        except BaseException as exc:  # noqa: BLE001 - re-raised on the main thread
            outcome["error"] = exc

    thread = threading.Thread(target=_target, name="line-adjust-transform", daemon=True)
    thread.start()
    try:
        while thread.is_alive():
            thread.join(timeout=0.5)
    except KeyboardInterrupt:
        logger.warning("Interrupted, cancelling run")
        token.cancel("interrupted by user")
        thread.join()
    if "error" in outcome:
        raise outcome["error"]  # type: ignore[misc]
    return str(outcome["result"])


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    # argparse does not check a default taken from the environment against choices.
    if args.log_level not in LOG_LEVELS:
        configure_logging("INFO")
        logger.error(
            "Unknown log level %r (expected one of: %s)", args.log_level, ", ".join(LOG_LEVELS)
        )
        return EXIT_USAGE_ERROR
    configure_logging(args.log_level)

    try:
        parameters, engine_config = resolve_inputs(args)
    except ConfigError as exc:
        logger.error("%s", exc)
        return EXIT_USAGE_ERROR

    logger.debug("Application start (workers=%d)", engine_config.workers)
    engine = LineAdjustEngine(engine_config)
    token = CancellationToken()
    try:
        result = run_transform(engine, parameters, token)
    except InvalidArgumentError as exc:
        logger.error("Invalid input: %s", exc)
        return EXIT_INVALID_ARGUMENT
    except PipelineCancelledError as exc:
        logger.error("%s", exc)
        return EXIT_CANCELLED
    except LineAdjustError as exc:
        logger.error("Application failed: %s", exc)
        return EXIT_PIPELINE_FAILURE

    lines = result.split(engine_config.line_separator) if result else []
    logger.info("Justified %d line(s) to width %d", len(lines), parameters.line_width)
    print_lines(lines)
    logger.debug("Application shutdown.")
    return EXIT_OK

