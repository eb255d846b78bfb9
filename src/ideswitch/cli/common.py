"""Shared option declarations and builders for ideswitch commands."""

from __future__ import annotations

import click

from ideswitch.config import Settings
from ideswitch.core.protocols import TargetProtocol
from ideswitch.core.rewriter import McpReferenceResolver, Rewriter
from ideswitch.interceptor import LinkInterceptor

PROTOCOL_CHOICES: list[str] = [p.value for p in TargetProtocol]

target_option = click.option(
    "--target", "-t",
    type=click.Choice(PROTOCOL_CHOICES),
    default=None,
    help="Target IDE (default: the configured one).",
)

format_option = click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)


def resolve_target(settings: Settings, target: str | None) -> TargetProtocol:
    """Explicit ``--target`` wins; otherwise read the settings once."""
    if target is not None:
        return TargetProtocol(target)
    return settings.get_target()


def build_interceptor(
    settings: Settings,
    *,
    lookup: bool = False,
    install: bool = False,
) -> LinkInterceptor:
    """Assemble an interceptor with the optional online and OS capabilities.

    Args:
        settings: Settings store passed down from the CLI group.
        lookup: Resolve unknown MCP servers through the MCP registry.
        install: Delegate extension links to the IDE's command line.
    """
    references = None
    if lookup:
        from ideswitch.net.mcp_registry import fetch_mcp_servers

        references = McpReferenceResolver(fetcher=fetch_mcp_servers)

    installer = None
    if install:
        from ideswitch.registration import CliExtensionInstaller, ProtocolRegistrar

        installer = CliExtensionInstaller(ProtocolRegistrar())

    return LinkInterceptor(settings, Rewriter(installer=installer, references=references))
