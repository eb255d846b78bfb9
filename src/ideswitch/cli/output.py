"""Rich output formatting helpers for the ideswitch CLI.

Provides consistent, colored terminal output for classifications,
interception actions, protocol tables, registration status and page
scans. URLs that a user may want to copy are emitted with ``click.echo``
on their own line so Rich never wraps them.
"""

from __future__ import annotations

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ideswitch.core.classifier import ClassifiedLink, LinkCategory
from ideswitch.core.protocols import IDE_PROFILES, INTERCEPTED_SCHEMES, TargetProtocol
from ideswitch.interceptor import ActionKind, InterceptAction, render_mcp_instructions
from ideswitch.registration import RegistrationStatus
from ideswitch.scanner import FoundLink

_CATEGORY_STYLES: dict[LinkCategory, str] = {
    LinkCategory.AUTH_CALLBACK: "bold yellow",
    LinkCategory.EXTENSION_INSTALL: "cyan",
    LinkCategory.DEV_REDIRECT: "magenta",
    LinkCategory.VSIX_DOWNLOAD: "blue",
    LinkCategory.MCP_INSTALL: "green",
    LinkCategory.PLAIN_PROTOCOL: "white",
    LinkCategory.UNRECOGNIZED: "dim",
}

_ACTION_STYLES: dict[ActionKind, str] = {
    ActionKind.NAVIGATE: "bold green",
    ActionKind.PASS_THROUGH: "dim",
    ActionKind.SHOW_INSTRUCTIONS: "yellow",
    ActionKind.INSTALLED: "bold green",
    ActionKind.FAILED: "bold red",
}

console = Console()


def category_style(category: LinkCategory) -> str:
    """Return the Rich style string for a link category."""
    return _CATEGORY_STYLES.get(category, "white")


def action_style(kind: ActionKind) -> str:
    """Return the Rich style string for an interception action."""
    return _ACTION_STYLES.get(kind, "white")


def print_classification(link: ClassifiedLink, indent: str = "") -> None:
    """Print the category and extracted fields of a classified link."""
    console.print(
        f"{indent}Category: ",
        Text(link.category.value, style=category_style(link.category)),
        sep="",
    )
    if link.scheme:
        console.print(f"{indent}Scheme:   {link.scheme}")
    if link.extension_id:
        console.print(f"{indent}Extension: {link.extension_id}")
    if link.extension is not None:
        version = link.extension.version or "-"
        console.print(f"{indent}Package:  {link.extension.identifier} ({version})")
    if link.server_name:
        console.print(f"{indent}MCP server: {link.server_name}")
    if link.redirect_path is not None:
        console.print(f"{indent}Redirect path: {link.redirect_path}")
    if link.inner is not None:
        console.print(f"{indent}Inner link:")
        click.echo(f"{indent}  {link.inner.url}")
        print_classification(link.inner, indent=indent + "  ")


def print_action(action: InterceptAction) -> None:
    """Print an interception decision, including MCP instructions."""
    header = Text.assemble(
        ("Target: ", "bold"), (action.target.value, ""),
        ("  Action: ", "bold"), (action.kind.value, action_style(action.kind)),
    )
    console.print(Panel(header, title="ideswitch"))

    if action.kind is ActionKind.SHOW_INSTRUCTIONS:
        console.print(
            Panel(
                render_mcp_instructions(
                    action.outcome.server_name or "", action.url, action.target
                ),
                title="MCP server installation",
            )
        )
    elif action.kind is ActionKind.FAILED:
        console.print(f"[red]{action.message}[/red]")
    elif action.kind is ActionKind.INSTALLED:
        console.print("[green]Extension installed.[/green]")

    if action.url:
        click.echo(action.url)


def print_protocols(selected: TargetProtocol | None = None) -> None:
    """Print the table of selectable targets and their URL shapes."""
    table = Table(title="Supported Target IDEs", show_header=True, header_style="bold")
    table.add_column("Protocol", style="bold")
    table.add_column("IDE")
    table.add_column("Prefix")
    table.add_column("Extension links", justify="center")
    table.add_column("MCP links", justify="center")

    for protocol in TargetProtocol:
        profile = IDE_PROFILES[protocol]
        name = f"{protocol.value} *" if protocol is selected else protocol.value
        table.add_row(
            name,
            profile.name,
            protocol.prefix,
            "yes" if profile.extension_links else "-",
            "yes" if profile.mcp_links else "[yellow]no[/yellow]",
        )
    console.print(table)
    console.print(f"[dim]Intercepted schemes: {', '.join(INTERCEPTED_SCHEMES)}[/dim]")


def print_registration_table(statuses: dict[TargetProtocol, RegistrationStatus]) -> None:
    """Print URL handler registration for each target."""
    table = Table(title="Protocol Registration", show_header=True, header_style="bold")
    table.add_column("Protocol", style="bold")
    table.add_column("Status", justify="center")
    table.add_column("Executable", style="dim")

    for protocol, status in statuses.items():
        if status.error:
            label = Text("ERROR", style="bold red")
            detail = status.error
        elif status.registered:
            label = Text("REGISTERED", style="bold green")
            detail = status.exec_path or status.registry_value or ""
        else:
            label = Text("MISSING", style="yellow")
            detail = "-"
        table.add_row(protocol.value, label, detail)
    console.print(table)


def print_scan_results(found: list[FoundLink], actions: list[InterceptAction]) -> None:
    """Print a table of the IDE links found in a page."""
    if not found:
        console.print("[dim]No IDE links found.[/dim]")
        return

    table = Table(title="IDE Links", show_header=True, header_style="bold")
    table.add_column("Line", justify="right")
    table.add_column("Category")
    table.add_column("Action", justify="center")
    table.add_column("Link", overflow="fold")
    table.add_column("Result", overflow="fold")

    for item, action in zip(found, actions):
        table.add_row(
            str(item.line),
            Text(item.link.category.value, style=category_style(item.link.category)),
            Text(action.kind.value, style=action_style(action.kind)),
            item.href,
            action.url or action.message or "-",
        )
    console.print(table)

    changed = sum(1 for a in actions if a.kind is not ActionKind.PASS_THROUGH)
    console.print(f"[bold]{len(found)}[/bold] links found | {changed} intercepted")
