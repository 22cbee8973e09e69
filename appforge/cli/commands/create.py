"""Create command: add a view, controller, control, component or bootstrap."""

import logging
from typing import Annotated

import typer

from ...config import get_config
from ...core.models import CreateArgs
from ...create import CreateError, CreateServices, run_create
from ...generators import load_generator
from ...project import FileSystemCollectionProvider, LocalProjectProvider
from ..app import app, console, get_json_mode, get_project_dir, is_agent_mode
from ..prompts import TyperPromptRunner
from ..utils import ExitCode, Output, collect_warnings

logger = logging.getLogger(__name__)


def _is_json_output() -> bool:
    """Check if JSON output is enabled (via --json flag or agent mode config)."""
    return get_json_mode() or is_agent_mode()


@app.command("create")
def create_command(
    artifact: Annotated[
        str | None,
        typer.Argument(
            help="What to create: view, controller, control, component, bootstrap",
            show_default=False,
        ),
    ] = None,
    name: Annotated[
        str | None, typer.Option("--name", "-n", help="Artifact name")
    ] = None,
    controller: Annotated[
        bool | None,
        typer.Option(
            "--controller/--no-controller",
            help="Also create a controller for the view",
        ),
    ] = None,
    route: Annotated[
        bool | None,
        typer.Option("--route/--no-route", help="Add a route for the view"),
    ] = None,
    root: Annotated[
        bool | None,
        typer.Option(
            "--root/--no-root",
            help="Make the view the application's root view",
        ),
    ] = None,
    theme: Annotated[
        str | None, typer.Option("--theme", help="Theme for a bootstrap")
    ] = None,
    namespaces: Annotated[
        list[str] | None,
        typer.Option(
            "--namespaces",
            help="Library namespaces for a view (repeatable or comma-separated)",
        ),
    ] = None,
    modules: Annotated[
        list[str] | None,
        typer.Option(
            "--modules",
            help="Modules for a controller or control (repeatable or comma-separated)",
        ),
    ] = None,
    interactive: Annotated[
        bool,
        typer.Option(
            "--interactive", "-i", help="Ask for anything not given on the command line"
        ),
    ] = False,
):
    """Resolve, validate and hand a creation request to the generator.

    Examples:
        appforge create view --name Main --controller --route
        appforge create controller --name Detail --modules sap.m,sap.ui.core
        appforge create bootstrap --theme sap_fancy_theme
        appforge create -i
    """
    out = Output(console=console, json_mode=_is_json_output())

    if interactive and is_agent_mode():
        out.error(
            "Interactive mode is not available in agent mode",
            category="needs_clarification",
            suggestion="Pass the artifact type and its options as arguments",
            exit_code=ExitCode.NEEDS_CLARIFICATION,
        )
        raise typer.Exit(out.finish())

    args = CreateArgs(
        artifact=artifact,
        name=name,
        controller=controller,
        route=route,
        root=root,
        theme=theme,
        namespaces=namespaces or None,
        modules=modules or None,
        interactive=interactive,
    )

    cfg = get_config()
    try:
        generator = load_generator(cfg.generator.target)
    except ValueError as e:
        out.error(
            str(e),
            category="config",
            suggestion="appforge config set generator.target <package.module:attribute>",
            exit_code=ExitCode.GENERATION_ERROR,
        )
        raise typer.Exit(out.finish())

    project_dir = get_project_dir()
    services = CreateServices(
        projects=LocalProjectProvider(project_dir, cfg.create),
        resources=FileSystemCollectionProvider(cfg.create),
        generator=generator,
        prompts=TyperPromptRunner(console) if interactive else None,
        settings=cfg.create,
        base_dir=project_dir,
    )

    try:
        with collect_warnings(out):
            outcome = run_create(args, services)
    except CreateError as e:
        logger.debug("create failed", exc_info=True)
        out.error(
            str(e),
            category=type(e).__name__,
            suggestion=e.suggestion,
            exit_code=e.exit_code,
        )
        raise typer.Exit(out.finish())

    out.line(outcome.message, request=outcome.request.to_meta_information())
    raise typer.Exit(out.finish())
