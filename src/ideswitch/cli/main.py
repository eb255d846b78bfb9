"""ideswitch CLI: route vscode:// family links to your IDE.

Entry point for the ``ideswitch`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    classify   - Show how a URL is classified.
    rewrite    - Show what a URL turns into for the target IDE.
    open       - Rewrite a URL and hand it to the OS URL handler.
    scan       - List IDE links found in an HTML page.
    config     - Show or change the selected target IDE.
    protocols  - List supported target IDEs and their URL shapes.
    register   - Check or register URL handlers (Windows).

Usage::

    ideswitch rewrite vscode:extension/ms-python.python --target cursor
    ideswitch open "https://insiders.vscode.dev/redirect?url=vscode%3Aextension%2Ffoo.bar"
    ideswitch scan saved-page.html
    ideswitch config set-target windsurf
    ideswitch register auto cursor
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from ideswitch import __version__
from ideswitch.cli.config_cmd import config_group
from ideswitch.cli.links_cmd import classify_command, open_command, rewrite_command
from ideswitch.cli.protocols_cmd import protocols_command
from ideswitch.cli.register_cmd import register_group
from ideswitch.cli.scan_cmd import scan_command
from ideswitch.config import Settings, default_settings_path


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Settings file (default: $IDESWITCH_CONFIG or ~/.config/ideswitch/settings.yaml).",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging on stderr.")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, verbose: bool) -> None:
    """ideswitch: Open vscode:// links in the IDE you actually use.

    Rewrites VS Code protocol, marketplace, VSIX and MCP install links
    for Antigravity, Cursor, Windsurf or VS Code, and registers the
    matching URL handlers on Windows.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = Settings(config_path or default_settings_path())


# Register all subcommands
cli.add_command(classify_command)
cli.add_command(rewrite_command)
cli.add_command(open_command)
cli.add_command(scan_command)
cli.add_command(config_group)
cli.add_command(protocols_command)
cli.add_command(register_group)
