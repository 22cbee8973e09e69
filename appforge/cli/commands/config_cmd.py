"""Config command for viewing and managing appforge configuration."""

import typer
from rich.markup import escape

from ..app import app, console, get_json_mode
from ...config import (
    get_config,
    reset_config,
    CONFIG_FILE,
    VALID_MODES,
)


VALID_KEYS = {
    "cli.mode",
    "create.resource_glob",
    "create.theme_library_type",
    "create.theme_library_prefix",
    "create.default_webapp",
    "create.default_src",
    "create.project_file",
    "create.manifest_file",
    "generator.target",
}


@app.command("config")
def config_command(
    action: str = typer.Argument(
        ...,
        help="Action: show, set, reset",
    ),
    key: str | None = typer.Argument(
        None,
        help="Config key (e.g. cli.mode, create.theme_library_type)",
    ),
    value: str | None = typer.Argument(
        None,
        help="Value to set",
    ),
):
    """View or modify appforge configuration.

    Examples:
        appforge config show
        appforge config set cli.mode agent
        appforge config set create.theme_library_type themelib
        appforge config set generator.target my_templates.generator:Generator
        appforge config reset
    """
    if action == "show":
        _show_config()
    elif action == "set":
        if not key or value is None:
            console.print("[red]Usage:[/red] appforge config set <key> <value>")
            console.print()
            console.print("Available keys:")
            for k in sorted(VALID_KEYS):
                console.print(f"  {k}")
            raise typer.Exit(1)
        _set_config(key, value)
    elif action == "reset":
        _reset_config()
    else:
        console.print(f"[red]Unknown action:[/red] {escape(action)}")
        console.print("Valid actions: show, set, reset")
        raise typer.Exit(1)


def _show_config():
    """Display current resolved configuration."""
    config = get_config()

    if get_json_mode():
        import json

        print(json.dumps(config.to_dict(), indent=2))
        return

    console.print()
    console.print("[bold]Appforge Configuration[/bold]")
    console.print("─" * 40)

    console.print()
    console.print("[bold cyan]CLI[/bold cyan]")
    console.print(f"  mode = {config.cli.mode}")

    console.print()
    console.print("[bold cyan]Create[/bold cyan] (project loading and resource scanning)")
    for field_name, field_value in config.to_dict()["create"].items():
        console.print(f"  {field_name:<20} = {escape(str(field_value))}", highlight=False)

    console.print()
    console.print("[bold cyan]Generator[/bold cyan]")
    target = escape(config.generator.target) or "[dim](preview, writes nothing)[/dim]"
    console.print(f"  target = {target}")

    console.print()
    if CONFIG_FILE.exists():
        console.print(f"Config file: {CONFIG_FILE}")
    else:
        console.print(f"Config file: [dim]not created yet[/dim] ({CONFIG_FILE})")
    console.print()


def _set_config(key: str, value: str):
    """Set a config value and save."""
    if key not in VALID_KEYS:
        console.print(f"[red]Unknown key:[/red] {escape(key)}")
        console.print()
        console.print("Available keys:")
        for k in sorted(VALID_KEYS):
            console.print(f"  {k}")
        raise typer.Exit(1)

    if key == "cli.mode" and value not in VALID_MODES:
        console.print(f"[red]Invalid mode:[/red] {escape(value)}")
        console.print(f"Valid modes: {', '.join(VALID_MODES)}")
        raise typer.Exit(1)

    # Load current config (or defaults if no file)
    config = get_config()

    zone, field_name = key.split(".", 1)
    setattr(getattr(config, zone), field_name, value)

    config.save()
    reset_config()  # Clear cached singleton so next get_config() reloads

    console.print(f"[green]✓[/green] Set {escape(key)} = {escape(value)}")
    console.print(f"  Saved to {CONFIG_FILE}")


def _reset_config():
    """Reset config to defaults."""
    if CONFIG_FILE.exists():
        CONFIG_FILE.unlink()
        reset_config()
        console.print("[green]✓[/green] Config reset to defaults")
        console.print(f"  Removed {CONFIG_FILE}")
    else:
        console.print("Config already at defaults (no config file exists)")
