"""``ideswitch register`` - Check or register IDE URL handlers (Windows).

Subcommands:
    status [PROTOCOL]        - Show whether handlers are registered.
    auto PROTOCOL            - Find the IDE and register it if needed.
    set PROTOCOL EXEC_PATH   - Register a specific executable.

Exit Codes:
    0 - Success (or, for ``status``, the requested protocol is registered).
    1 - Registration failed, the protocol is not registered, or the
        platform is not Windows.
"""

from __future__ import annotations

import json
import sys

import click

from ideswitch.cli.common import PROTOCOL_CHOICES, format_option
from ideswitch.cli.output import console, print_registration_table
from ideswitch.core.protocols import TargetProtocol
from ideswitch.registration import ProtocolRegistrar


def _platform_supported() -> bool:
    return sys.platform == "win32"


def _make_registrar() -> ProtocolRegistrar:
    """Create the registrar used by all subcommands.

    Raises:
        SystemExit: If not running on Windows.
    """
    if not _platform_supported():
        click.echo("Error: protocol registration is only supported on Windows.", err=True)
        sys.exit(1)
    return ProtocolRegistrar()


@click.group("register")
def register_group() -> None:
    """Check or register URL handlers for target IDEs (Windows only)."""


@register_group.command("status")
@click.argument("protocol", type=click.Choice(PROTOCOL_CHOICES), required=False)
@format_option
def status_command(protocol: str | None, output_format: str) -> None:
    """Show handler registration for PROTOCOL, or for every target."""
    registrar = _make_registrar()
    if protocol is None:
        statuses = registrar.check_all()
    else:
        target = TargetProtocol(protocol)
        statuses = {target: registrar.check_registration(target)}

    if output_format == "json":
        click.echo(json.dumps({p.value: s.to_dict() for p, s in statuses.items()}, indent=2))
    else:
        print_registration_table(statuses)

    if protocol is not None and not statuses[TargetProtocol(protocol)].registered:
        sys.exit(1)


@register_group.command("auto")
@click.argument("protocol", type=click.Choice(PROTOCOL_CHOICES))
@format_option
def auto_command(protocol: str, output_format: str) -> None:
    """Find PROTOCOL's IDE in its default location and register it."""
    result = _make_registrar().auto_register(protocol)

    if output_format == "json":
        click.echo(json.dumps(result.to_dict(), indent=2))
    elif result.success and result.already_registered:
        console.print(f"[green]{protocol} is already registered[/green] -> {result.exec_path}")
    elif result.success:
        console.print(f"[green]Registered {protocol}[/green] -> {result.exec_path}")
    else:
        console.print(f"[red]{result.error}[/red]")

    sys.exit(0 if result.success else 1)


@register_group.command("set")
@click.argument("protocol", type=click.Choice(PROTOCOL_CHOICES))
@click.argument("exec_path")
@format_option
def set_command(protocol: str, exec_path: str, output_format: str) -> None:
    """Register EXEC_PATH as the handler for PROTOCOL."""
    result = _make_registrar().register(protocol, exec_path)

    if output_format == "json":
        click.echo(json.dumps(result.to_dict(), indent=2))
    elif result.success:
        console.print(f"[green]Registered {protocol}[/green] -> {exec_path}")
    else:
        console.print(f"[red]{result.error}[/red]")

    sys.exit(0 if result.success else 1)
