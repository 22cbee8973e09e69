"""CLI utilities for dual-mode output (human-friendly + machine-readable).

This module provides utilities for CLI commands to support both:
- Human mode (default): Rich formatting with colors
- Machine mode (--json): Structured JSON output for scripts and tools

Example:
    from ..utils import Output, ExitCode

    @app.command()
    def my_command():
        out = Output(console=console, json_mode=get_json_mode())
        out.line("Add new view", savePath="/app/webapp")
        return out.finish()
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from typing import Any, Iterator

from pydantic import BaseModel, PrivateAttr, ConfigDict
from rich.console import Console
from rich.markup import escape


class ExitCode:
    """Standardized exit codes for CLI commands.

        0 = Success
        1 = Validation error (fix the arguments first)
        2 = Needs clarification (agent mode: supply the missing arguments)
        3 = Project file not found
        4 = Unsupported project type
        5 = Generation error
        10 = User cancelled
    """

    SUCCESS = 0
    VALIDATION_ERROR = 1
    NEEDS_CLARIFICATION = 2
    FILE_NOT_FOUND = 3
    UNSUPPORTED_PROJECT = 4
    GENERATION_ERROR = 5
    USER_CANCELLED = 10


class Output(BaseModel):
    """Dual-mode output handler for CLI commands.

    In human mode: Uses Rich for terminal output.
    In JSON mode: Collects structured data and outputs JSON at the end.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    console: Console
    json_mode: bool = False

    _data: dict[str, Any] = PrivateAttr()
    _exit_code: int = PrivateAttr(default=ExitCode.SUCCESS)

    def model_post_init(self, __context: Any) -> None:
        # Ensure _data is a fresh dict for each instance
        self._data = {
            "status": "success",
            "warnings": [],
            "errors": [],
        }

    def line(self, message: str, **data: Any) -> None:
        """Output a message verbatim on a single line.

        No markup or highlighting is applied in human mode; in JSON mode the
        message is stored under "message".
        """
        if self.json_mode:
            self._data["message"] = message
            self._data.update(data)
        else:
            self.console.print(
                message, markup=False, highlight=False, soft_wrap=True
            )

    def error(
        self,
        message: str,
        *,
        category: str | None = None,
        suggestion: str | None = None,
        exit_code: int = ExitCode.VALIDATION_ERROR,
    ) -> None:
        """Output an error message and set exit code."""
        self._exit_code = exit_code
        self._data["status"] = "error"

        if self.json_mode:
            error_obj: dict[str, Any] = {"message": message}
            if category:
                error_obj["category"] = category
            if suggestion:
                error_obj["suggestion"] = suggestion
            self._data["errors"].append(error_obj)
        else:
            self.console.print(f"[red]✗[/red] {escape(message)}", highlight=False)
            if suggestion:
                self.console.print(f"  [dim]→ {escape(suggestion)}[/dim]")

    def finish(self) -> int:
        """Finalize output and return exit code.

        In JSON mode, prints the accumulated data as JSON to stdout.
        Returns the exit code that should be passed to sys.exit().
        """
        if self.json_mode:
            # Add exit_code to JSON for programmatic access
            self._data["exit_code"] = self._exit_code
            print(json.dumps(self._data, indent=2, default=str))

        return self._exit_code

    def warning(self, message: str, *, suggestion: str | None = None) -> None:
        """Output a warning. Does not change the exit code."""
        if self.json_mode:
            warning_obj: dict[str, Any] = {"message": message}
            if suggestion:
                warning_obj["suggestion"] = suggestion
            self._data["warnings"].append(warning_obj)
        else:
            self.console.print(f"[yellow]⚠[/yellow] {escape(message)}", highlight=False)
            if suggestion:
                self.console.print(f"  [dim]→ {escape(suggestion)}[/dim]")


class OutputLogHandler(logging.Handler):
    """Route warning records into an Output; pass quieter records to the root handlers."""

    def __init__(self, out: Output):
        super().__init__()
        self.out = out

    def emit(self, record: logging.LogRecord) -> None:
        if record.levelno >= logging.WARNING:
            self.out.warning(record.getMessage())
        else:
            logging.getLogger().handle(record)


@contextmanager
def collect_warnings(out: Output, logger_name: str = "appforge") -> Iterator[Output]:
    """Report warnings logged under ``logger_name`` through ``out``.

    Keeps stdout a single JSON document in --json mode.
    """
    log = logging.getLogger(logger_name)
    handler = OutputLogHandler(out)
    propagate = log.propagate
    log.addHandler(handler)
    log.propagate = False
    try:
        yield out
    finally:
        log.removeHandler(handler)
        log.propagate = propagate
