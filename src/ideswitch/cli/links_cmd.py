"""``ideswitch classify | rewrite | open`` - Work with a single URL.

Exit Codes:
    0 - The URL was handled (rewritten, passed through, or instructions shown).
    1 - A delegated action failed (e.g. extension install).
"""

from __future__ import annotations

import json
import logging
import sys
import webbrowser

import click

from ideswitch.cli.common import build_interceptor, format_option, resolve_target, target_option
from ideswitch.cli.output import console, print_action, print_classification
from ideswitch.config import Settings
from ideswitch.core.classifier import classify
from ideswitch.interceptor import ActionKind, InterceptAction

logger = logging.getLogger(__name__)

lookup_option = click.option(
    "--lookup", is_flag=True,
    help="Look up unknown MCP servers in the public MCP registry.",
)
install_option = click.option(
    "--install", is_flag=True,
    help="Install extension links through the target IDE's command line.",
)


def _emit(action: InterceptAction, output_format: str) -> None:
    if output_format == "json":
        click.echo(json.dumps(action.to_dict(), indent=2))
    else:
        print_action(action)


@click.command("classify")
@click.argument("url")
@format_option
def classify_command(url: str, output_format: str) -> None:
    """Show which link shape URL matches and what was extracted from it."""
    link = classify(url)
    if output_format == "json":
        click.echo(json.dumps(link.to_dict(), indent=2))
    else:
        print_classification(link)


@click.command("rewrite")
@click.argument("url")
@target_option
@lookup_option
@install_option
@format_option
@click.pass_obj
def rewrite_command(
    settings: Settings,
    url: str,
    target: str | None,
    lookup: bool,
    install: bool,
    output_format: str,
) -> None:
    """Show what URL turns into for the target IDE.

    Examples:

        ideswitch rewrite vscode:extension/ms-python.python --target cursor

        ideswitch rewrite vscode:mcp/by-name/huggingface --format json
    """
    interceptor = build_interceptor(settings, lookup=lookup, install=install)
    action = interceptor.handle(url, resolve_target(settings, target))
    _emit(action, output_format)
    sys.exit(1 if action.kind is ActionKind.FAILED else 0)


@click.command("open")
@click.argument("url")
@target_option
@lookup_option
@install_option
@click.option("--dry-run", is_flag=True, help="Print the decision without opening anything.")
@click.pass_obj
def open_command(
    settings: Settings,
    url: str,
    target: str | None,
    lookup: bool,
    install: bool,
    dry_run: bool,
) -> None:
    """Rewrite URL and hand the result to the system URL handler.

    Links that need no rewrite are opened as-is. For MCP links the target
    cannot install, the manual instructions are printed and the server's
    reference page is opened instead.
    """
    interceptor = build_interceptor(settings, lookup=lookup, install=install)
    action = interceptor.handle(url, resolve_target(settings, target))
    print_action(action)

    if action.kind is ActionKind.FAILED:
        sys.exit(1)
    if not action.url:
        return
    if dry_run:
        console.print("[dim]Dry run: not opening.[/dim]")
        return

    logger.info("Opening %s", action.url)
    if not webbrowser.open(action.url):
        click.echo(f"Error: no handler accepted {action.url}", err=True)
        sys.exit(1)
