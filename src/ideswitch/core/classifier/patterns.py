"""Compiled regex catalog for IDE link detection.

Centralised pattern definitions used by the classifier rules. Host
families for VSIX downloads are kept in ``VSIX_SOURCES`` so that adding a
new distribution registry is a one-line change.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Protocol link shapes
# ---------------------------------------------------------------------------

# Provider (host) component of a protocol URL, with or without "//". It
# ends at the first "/", "?" or "#", or at the end of the URL.
AUTH_PROVIDER_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^([^:]+)://([^/?#]+)"),
    re.compile(r"^([^:]+):([^/?#]+)"),
)

AUTH_PROVIDER_MARKER = "authentication"

EXTENSION_LINK = re.compile(r"^([^:]+):(//)?extension/([^?#]+)")

MCP_LINK = re.compile(r"^(vscode|vscode-insiders):mcp/")
MCP_BY_NAME = re.compile(r"^(vscode|vscode-insiders):mcp/by-name/([^/?#]+)")
MCP_REGISTRY_SERVER = re.compile(
    r"^(vscode|vscode-insiders):mcp/api\.mcp\.github\.com.*/servers/[^/]+/([^/?#]+)"
)

# ---------------------------------------------------------------------------
# vscode.dev redirector
# ---------------------------------------------------------------------------

DEV_REDIRECT_MARKERS: tuple[str, ...] = (
    "vscode.dev/redirect",
    "insiders.vscode.dev/redirect",
)

DEV_REDIRECT_PREFIX = "/redirect"
DEV_REDIRECT_PARAM = "url"

# ---------------------------------------------------------------------------
# VSIX download sources
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class VsixSource:
    """One distribution registry that serves VSIX packages.

    Attributes:
        name: Short label used in debug logging.
        host: Exact hostname, or a suffix when ``suffix`` is set.
        detect: Lower-cased path pattern that marks a package download.
        extract: Pattern over the original path with publisher, name and
            version groups, or ``None`` when the path carries no metadata.
        suffix: Match ``host`` as a domain suffix instead of exactly.
    """

    name: str
    host: str
    detect: re.Pattern[str]
    extract: re.Pattern[str] | None = None
    suffix: bool = False

    def matches_host(self, hostname: str) -> bool:
        if self.suffix:
            return hostname.endswith(self.host)
        return hostname == self.host


OPEN_VSX_PATH = re.compile(r"^/api/([^/]+)/([^/]+)/([^/]+)/file(?:/([^/]+))?$")

VSIX_SOURCES: tuple[VsixSource, ...] = (
    VsixSource(
        name="open-vsx",
        host="open-vsx.org",
        detect=re.compile(r"^/api/[^/]+/[^/]+/[^/]+/file"),
        extract=OPEN_VSX_PATH,
    ),
    VsixSource(
        name="open-vsx",
        host=".open-vsx.org",
        detect=re.compile(r"^/api/[^/]+/[^/]+/[^/]+/file"),
        extract=OPEN_VSX_PATH,
        suffix=True,
    ),
    VsixSource(
        name="vsassets",
        host=".gallery.vsassets.io",
        detect=re.compile(
            r"^/_apis/public/gallery/publisher/[^/]+/extension/[^/]+/[^/]+/assetbyname/"
        ),
        extract=re.compile(
            r"^/_apis/public/gallery/publisher/([^/]+)/extension/([^/]+)/([^/]+)/assetbyname/.+$"
        ),
        suffix=True,
    ),
    VsixSource(
        name="marketplace",
        host="marketplace.visualstudio.com",
        detect=re.compile(
            r"^/_apis/public/gallery/publishers/[^/]+/vsextensions/[^/]+/[^/]+/vspackage$"
        ),
        extract=re.compile(
            r"^/_apis/public/gallery/publishers/([^/]+)/vsextensions/([^/]+)/([^/]+)/vspackage$"
        ),
    ),
    VsixSource(
        name="github-release",
        host="github.com",
        detect=re.compile(r"^/[^/]+/[^/]+/releases/download/[^/]+/.+\.vsix$"),
    ),
)

VSIX_SUFFIX = ".vsix"
VSIX_FILENAME = re.compile(r"^(.+)\.vsix$", re.I)
