"""``ideswitch config`` - Show or change user settings.

Subcommands:
    show         - Print the selected target and settings file location.
    set-target   - Select the IDE that links are routed to.
    dismiss-mcp  - Skip MCP instructions and go straight to the reference page.
"""

from __future__ import annotations

import json
import sys

import click

from ideswitch.cli.common import PROTOCOL_CHOICES, format_option
from ideswitch.cli.output import console
from ideswitch.config import Settings
from ideswitch.exceptions import ConfigError


@click.group("config")
def config_group() -> None:
    """Show or change ideswitch settings."""


@config_group.command("show")
@format_option
@click.pass_obj
def show_command(settings: Settings, output_format: str) -> None:
    """Print the current settings."""
    target = settings.get_target()
    dismissed = settings.mcp_instructions_dismissed
    if output_format == "json":
        click.echo(json.dumps({
            "path": str(settings.path),
            "target": target.value,
            "mcp_instructions_dismissed": dismissed,
        }, indent=2))
        return
    console.print(f"Settings file: [dim]{settings.path}[/dim]")
    console.print(f"Target IDE:    [bold]{target.value}[/bold] ({target.profile.name})")
    console.print(f"MCP instructions dismissed: {'yes' if dismissed else 'no'}")


@config_group.command("set-target")
@click.argument("protocol", type=click.Choice(PROTOCOL_CHOICES))
@click.pass_obj
def set_target_command(settings: Settings, protocol: str) -> None:
    """Route intercepted links to PROTOCOL."""
    try:
        target = settings.set_target(protocol)
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
    console.print(f"[green]Target IDE set to {target.value} ({target.profile.name}).[/green]")


@config_group.command("dismiss-mcp")
@click.option("--reset", is_flag=True, help="Show MCP instructions again.")
@click.pass_obj
def dismiss_mcp_command(settings: Settings, reset: bool) -> None:
    """Stop (or with --reset, resume) showing MCP installation instructions."""
    try:
        settings.set_mcp_instructions_dismissed(not reset)
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
    if reset:
        console.print("MCP instructions will be shown again.")
    else:
        console.print("MCP instructions dismissed.")
