"""``ideswitch scan FILE`` - List IDE links found in an HTML page.

Reads a saved page (or ``-`` for stdin), finds every ``<a href>`` the
classifier recognises, and shows what each one would turn into.

Exit Codes:
    0 - One or more IDE links found.
    2 - No IDE links found.
"""

from __future__ import annotations

import json
import sys
from typing import TextIO

import click

from ideswitch.cli.common import build_interceptor, format_option, resolve_target, target_option
from ideswitch.cli.output import print_scan_results
from ideswitch.config import Settings
from ideswitch.scanner import scan_html


@click.command("scan")
@click.argument("source", type=click.File("r", encoding="utf-8"))
@target_option
@format_option
@click.pass_obj
def scan_command(
    settings: Settings,
    source: TextIO,
    target: str | None,
    output_format: str,
) -> None:
    """Find IDE links in an HTML page and show how each would be rewritten."""
    found = scan_html(source.read())
    protocol = resolve_target(settings, target)
    interceptor = build_interceptor(settings)
    actions = [interceptor.handle(item.href, protocol) for item in found]

    if output_format == "json":
        click.echo(json.dumps(
            {
                "target": protocol.value,
                "links": [
                    {"line": item.line, "text": item.text, **action.to_dict()}
                    for item, action in zip(found, actions)
                ],
            },
            indent=2,
        ))
    else:
        print_scan_results(found, actions)

    sys.exit(0 if found else 2)
