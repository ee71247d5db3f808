#!/usr/bin/env python3
"""
logging_manager.py
--------------------
Logging for the station data layer and the schema CLI.

Each component writes two rotating files under its log directory:
    <component>.log   every record from DEBUG up
    errors.log        errors only, with their traceback

Records end in a JSON payload. Records about plays carry play_id,
program_id and recording_id, so a single search for a play id finds
its append, the broadcasts that served it and any integrity failure.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
import logging
import sys
import traceback
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

# --- Third party imports ---
import click

_FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_CONSOLE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def play_context(
    play: Any = None,
    program_id: Optional[int] = None,
    recording_id: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Build the log payload identifying a play.

    Args:
        play: A Play row (anything with id, program_id, recording_id)
        program_id: Program id when there is no row, e.g. a rejected append
        recording_id: Recording id when there is no row

    Returns:
        Dict with whichever of play_id, program_id, recording_id are known
    """
    context: Dict[str, Any] = {}
    if play is not None:
        context["play_id"] = play.id
        program_id = play.program_id if program_id is None else program_id
        recording_id = play.recording_id if recording_id is None else recording_id
    if program_id is not None:
        context["program_id"] = program_id
    if recording_id is not None:
        context["recording_id"] = recording_id
    return context


def format_cli_error(error: Exception, show_traceback: bool = False) -> str:
    """One-line error for terminal output, optionally with the traceback."""
    message = f"❌ {type(error).__name__}: {error}"
    if show_traceback:
        message += "\n\n" + "".join(
            traceback.format_exception(type(error), error, error.__traceback__)
        )
    return message


class StationLogger:
    """
    File logger for one station component (e.g. 'database').

    Attributes:
        log_dir: Directory holding the component's log files
        component_name: Logger namespace and main log file name
    """

    def __init__(
        self,
        log_dir: Path,
        component_name: str = "station",
        max_bytes: int = 10 * 1024 * 1024,
        backup_count: int = 5,
    ) -> None:
        self.log_dir = Path(log_dir)
        self.component_name = component_name
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.main_logger = self._build_logger(
            "operations",
            self.log_dir / f"{component_name}.log",
            logging.DEBUG,
            max_bytes,
            backup_count,
        )
        self.error_logger = self._build_logger(
            "errors",
            self.log_dir / "errors.log",
            logging.ERROR,
            max_bytes,
            backup_count,
        )

        # Lock retries and rejected plays should be visible while developing
        console = logging.StreamHandler()
        console.setLevel(logging.WARNING)
        console.setFormatter(logging.Formatter(_CONSOLE_FORMAT, datefmt="%H:%M:%S"))
        self.main_logger.addHandler(console)

    def _build_logger(
        self,
        channel: str,
        path: Path,
        level: int,
        max_bytes: int,
        backup_count: int,
    ) -> logging.Logger:
        logger = logging.getLogger(f"{self.component_name}.{channel}")
        logger.setLevel(level)
        # A second StationLogger for the same component replaces the handlers
        logger.handlers = []

        handler = RotatingFileHandler(
            path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
        return logger

    def _write(
        self,
        channel: str,
        level: int,
        text: str,
        details: Optional[Dict[str, Any]] = None,
        exc_info: Optional[BaseException] = None,
    ) -> None:
        if details:
            text = f"{text}: {json.dumps(details, default=str, sort_keys=True)}"
        logger = self.error_logger if channel == "errors" else self.main_logger
        logger.log(level, text, exc_info=exc_info)

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        """Record a completed operation."""
        self._write("main", logging.INFO, f"OPERATION - {operation}", details)

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self._write("main", logging.DEBUG, f"DEBUG - {message}", details)

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self._write("main", logging.INFO, f"INFO - {message}", details)

    def log_warning(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self._write("main", logging.WARNING, f"WARNING - {message}", details)

    def log_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        play: Any = None,
    ) -> None:
        """
        Record an error with its traceback in errors.log.

        Args:
            error: The exception
            context: Extra key/values (operation name, ids, ...)
            play: Play the error concerns; its ids are added to the context
        """
        details = play_context(play)
        details.update(context or {})
        self._write(
            "errors",
            logging.ERROR,
            f"ERROR - {type(error).__name__}: {error}",
            details,
            exc_info=error,
        )


class NullLogger(StationLogger):
    """StationLogger that writes nothing; stands in when no log_dir is set."""

    def __init__(self) -> None:
        self.log_dir = None
        self.component_name = "null"

    def _write(self, *args: Any, **kwargs: Any) -> None:
        pass


_null_logger = NullLogger()


def safe_logger(logger: Optional[StationLogger]) -> StationLogger:
    """
    Return the provided logger or a shared NullLogger for None.

    Usage:
        safe_logger(self.logger).log_info("Play appended", play_context(play))
    """
    return logger if logger is not None else _null_logger


def handle_cli_error(
    ctx: "click.Context",
    error: Exception,
    operation: str,
    additional_context: Optional[Dict[str, Any]] = None,
    exit_code: int = 1,
) -> None:
    """
    Log a failed CLI command, print it to stderr and exit.

    The logger and verbose flag come from ``ctx.obj``; with --verbose the
    traceback is printed too. Never returns.
    """
    context = {"operation": operation, "source": "cli"}
    context.update(additional_context or {})
    safe_logger(ctx.obj.get("logger")).log_error(error, context)

    click.echo(format_cli_error(error, ctx.obj.get("verbose", False)), err=True)
    sys.exit(exit_code)
