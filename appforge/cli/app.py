"""Core CLI app definition and global state."""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

app = typer.Typer(
    name="appforge",
    help="Add views, controllers, controls, components and bootstraps to a project.",
    no_args_is_help=True,
)

console = Console()

# Global state (set by callback)
_json_mode = False
_project_dir: Path | None = None


def get_json_mode() -> bool:
    """Get current JSON mode state."""
    return _json_mode


def get_project_dir() -> Path:
    """Project directory from --project, or the current directory."""
    return _project_dir or Path.cwd()


def is_agent_mode() -> bool:
    """Check if CLI is in agent mode (from config).

    Agent mode means:
    - JSON-friendly, non-interactive operation
    - Exit codes for structured error handling
    - No interactive prompts (refused with exit code 2)
    """
    from ..config import get_config

    return get_config().cli.mode == "agent"


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Route log records through rich on the shared console."""
    level = logging.WARNING
    if verbose:
        level = logging.INFO
    if debug:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=False)],
        force=True,
    )
    logging.getLogger("appforge").setLevel(level)


def _version_callback(value: bool) -> None:
    if value:
        from .. import __version__

        print(f"appforge {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output machine-readable JSON instead of human-friendly text",
            is_eager=True,
        ),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show version and exit",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = False,
    project: Annotated[
        Path | None,
        typer.Option(
            "--project",
            "-p",
            help="Project directory (defaults to the current directory)",
        ),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show progress logs")
    ] = False,
    debug: Annotated[bool, typer.Option("--debug", help="Show debug logs")] = False,
):
    """Appforge: resolve, validate and create project artifacts.

    Use --json for machine-readable output suitable for scripting.
    Use --project to point at a project other than the current directory.
    """
    global _json_mode, _project_dir
    _json_mode = json_output
    _project_dir = project
    setup_logging(verbose=verbose, debug=debug)


# Import commands to register them with the app
from .commands import (  # noqa: E402, F401
    create,
    config_cmd,
)
