"""Config command for viewing and managing staffgen configuration."""

import typer

from ..app import app, console
from ...config import (
    StaffgenConfig,
    get_config,
    parse_bool,
    reset_config,
    CONFIG_FILE,
)
from ...generator.normalizer import INPUT_MODES
from ...generator.samplers import BIRTHDATE_STRATEGIES


VALID_KEYS = {
    "generator.mode",
    "generator.birthdate_strategy",
    "generator.surname_coverage",
}

CHOICE_FIELDS = {
    "mode": INPUT_MODES,
    "birthdate_strategy": BIRTHDATE_STRATEGIES,
}

BOOL_FIELDS = {"surname_coverage"}


@app.command("config")
def config_command(
    action: str = typer.Argument(
        ...,
        help="Action: show, set, reset",
    ),
    key: str | None = typer.Argument(
        None,
        help="Config key (e.g. generator.mode)",
    ),
    value: str | None = typer.Argument(
        None,
        help="Value to set",
    ),
):
    """View or modify staffgen configuration.

    Examples:
        staffgen config show
        staffgen config set generator.mode strict
        staffgen config set generator.birthdate_strategy approximate
        staffgen config set generator.surname_coverage false
        staffgen config reset
    """
    if action == "show":
        _show_config()
    elif action == "set":
        if not key or value is None:
            console.print("[red]Usage:[/red] staffgen config set <key> <value>")
            console.print()
            console.print("Available keys:")
            for k in sorted(VALID_KEYS):
                console.print(f"  {k}")
            raise typer.Exit(1)
        _set_config(key, value)
    elif action == "reset":
        _reset_config()
    else:
        console.print(f"[red]Unknown action:[/red] {action}")
        console.print("Valid actions: show, set, reset")
        raise typer.Exit(1)


def _show_config():
    """Display current resolved configuration."""
    config = get_config()

    console.print()
    console.print("[bold]staffgen Configuration[/bold]")
    console.print("─" * 40)

    console.print()
    console.print("[bold cyan]Generator[/bold cyan]")
    console.print(f"  mode               = {config.generator.mode}")
    console.print(f"  birthdate_strategy = {config.generator.birthdate_strategy}")
    console.print(f"  surname_coverage   = {config.generator.surname_coverage}")

    console.print()
    if CONFIG_FILE.exists():
        console.print(f"Config file: {CONFIG_FILE}")
    else:
        console.print(f"Config file: [dim]not created yet[/dim] ({CONFIG_FILE})")
    console.print()


def _set_config(key: str, value: str):
    """Set a config value and save."""
    if key not in VALID_KEYS:
        console.print(f"[red]Unknown key:[/red] {key}")
        console.print()
        console.print("Available keys:")
        for k in sorted(VALID_KEYS):
            console.print(f"  {k}")
        raise typer.Exit(1)

    config = StaffgenConfig.load_file()
    _, field_name = key.split(".", 1)

    if field_name in BOOL_FIELDS:
        try:
            setattr(config.generator, field_name, parse_bool(value))
        except ValueError:
            console.print(f"[red]Invalid boolean value:[/red] {value}")
            raise typer.Exit(1)
    else:
        choices = CHOICE_FIELDS[field_name]
        if value not in choices:
            console.print(f"[red]Invalid value:[/red] {value}")
            console.print(f"Expected one of: {', '.join(choices)}")
            raise typer.Exit(1)
        setattr(config.generator, field_name, value)

    config.save()
    reset_config()  # Clear cached singleton so next get_config() reloads

    console.print(f"[green]✓[/green] Set {key} = {value}")
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
