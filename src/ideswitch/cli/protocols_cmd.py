"""``ideswitch protocols`` - List supported target IDEs.

Exit Codes:
    0 - Always (informational command, cannot fail).
"""

from __future__ import annotations

import click

from ideswitch.cli.output import print_protocols
from ideswitch.config import Settings


@click.command("protocols")
@click.pass_obj
def protocols_command(settings: Settings) -> None:
    """List supported target IDEs and the URL prefix each expects."""
    print_protocols(selected=settings.get_target())
