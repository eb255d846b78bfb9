"""Ordered rule engine that classifies observed URLs.

Each rule inspects a URL and either returns a ``ClassifiedLink`` or
``None``. ``RULES`` is evaluated in order and the first rule that returns
a link wins, so an extension link is never demoted to a plain protocol
link even though its scheme also matches the plain-protocol prefixes.

Rule order:
    1. auth-callback     -- provider contains "authentication"
    2. extension-install -- ``{scheme}:extension/{id}``
    3. dev-redirect      -- ``vscode.dev/redirect`` hosted redirector
    4. vsix-download     -- registry package download or ``*.vsix``
    5. mcp-install       -- ``{scheme}:mcp/...``
    6. plain-protocol    -- any intercepted ``{scheme}:`` prefix
    7. unrecognized      -- fallback

A rule that hits a malformed URL is skipped rather than raising; the
caller always receives a classification.
"""

from __future__ import annotations

import logging
from typing import Callable
from urllib.parse import parse_qsl, unquote, urlsplit

from ideswitch.core.classifier.models import ClassifiedLink, ExtensionInfo, LinkCategory
from ideswitch.core.classifier.patterns import (
    AUTH_PROVIDER_MARKER,
    AUTH_PROVIDER_PATTERNS,
    DEV_REDIRECT_MARKERS,
    DEV_REDIRECT_PARAM,
    DEV_REDIRECT_PREFIX,
    EXTENSION_LINK,
    MCP_BY_NAME,
    MCP_LINK,
    MCP_REGISTRY_SERVER,
    OPEN_VSX_PATH,
    VSIX_FILENAME,
    VSIX_SOURCES,
    VSIX_SUFFIX,
)
from ideswitch.core.protocols import INTERCEPTED_SCHEMES, split_scheme

logger = logging.getLogger(__name__)

Rule = Callable[[str], "ClassifiedLink | None"]

# Extension links are recognised for every intercepted scheme so that a
# rewritten ``cursor:extension/{id}`` classifies the same way as the
# ``vscode:extension/{id}`` it came from.
EXTENSION_SCHEMES: frozenset[str] = frozenset(INTERCEPTED_SCHEMES)


# ---------------------------------------------------------------------------
# Field extractors
# ---------------------------------------------------------------------------


def auth_provider(url: str) -> str | None:
    """Return the lower-cased provider component of a protocol URL."""
    for pattern in AUTH_PROVIDER_PATTERNS:
        m = pattern.match(url)
        if m:
            return m.group(2).lower()
    return None


def is_auth_callback(url: str) -> bool:
    """Whether *url* is an OAuth/sign-in callback that must not be touched."""
    provider = auth_provider(url)
    return provider is not None and AUTH_PROVIDER_MARKER in provider


def parse_extension_id(url: str) -> str | None:
    """Extract ``{id}`` from ``{scheme}:extension/{id}`` links."""
    m = EXTENSION_LINK.match(url)
    if not m or m.group(1) not in EXTENSION_SCHEMES:
        return None
    return m.group(3)


def extract_mcp_server_name(url: str) -> str | None:
    """Extract the server name from an MCP install link.

    Two shapes are understood::

        vscode:mcp/by-name/huggingface                          -> huggingface
        vscode:mcp/api.mcp.github.com/.../servers/hf/hf-mcp-server -> hf-mcp-server
    """
    if not MCP_LINK.match(url):
        return None
    m = MCP_BY_NAME.match(url) or MCP_REGISTRY_SERVER.match(url)
    return m.group(2) if m else None


def parse_vsix_filename(filename: str) -> ExtensionInfo | None:
    """Parse a ``publisher.name-version.vsix`` filename.

    The last dash separates the version and the first dot separates the
    publisher. A filename without a publisher dot yields ``None``.
    """
    m = VSIX_FILENAME.match(filename)
    if not m:
        return None
    base = m.group(1)
    dash = base.rfind("-")
    name_part = base[:dash] if dash > 0 else base
    version = base[dash + 1:] if dash > 0 else None
    dot = name_part.find(".")
    if dot <= 0:
        return None
    return ExtensionInfo(
        publisher=name_part[:dot],
        name=name_part[dot + 1:],
        version=version or None,
    )


def parse_vsix_info(url: str) -> ExtensionInfo | None:
    """Extract publisher/name/version from a VSIX download URL.

    Registry-specific path patterns are tried first, then the Open VSX
    path shape on any host, then the filename.
    """
    try:
        parts = urlsplit(url)
    except ValueError:
        return None
    hostname = (parts.hostname or "").lower()
    path = parts.path

    for source in VSIX_SOURCES:
        if source.extract is None or not source.matches_host(hostname):
            continue
        m = source.extract.match(path)
        if m:
            return ExtensionInfo(publisher=m.group(1), name=m.group(2), version=m.group(3))

    m = OPEN_VSX_PATH.match(path)
    if m:
        return ExtensionInfo(publisher=m.group(1), name=m.group(2), version=m.group(3))

    filename = path.rsplit("/", 1)[-1]
    if filename:
        return parse_vsix_filename(filename)
    return None


def is_vsix_url(url: str) -> bool:
    """Whether *url* is an http(s) VSIX package download."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return False
    if parts.scheme not in ("http", "https"):
        return False
    hostname = (parts.hostname or "").lower()
    path = parts.path.lower()

    if path.endswith(VSIX_SUFFIX):
        return True
    return any(
        source.matches_host(hostname) and source.detect.match(path)
        for source in VSIX_SOURCES
    )


def is_dev_redirect(url: str) -> bool:
    return any(marker in url for marker in DEV_REDIRECT_MARKERS)


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


def _auth_rule(url: str) -> ClassifiedLink | None:
    if not is_auth_callback(url):
        return None
    parts = split_scheme(url)
    return ClassifiedLink(
        url=url,
        category=LinkCategory.AUTH_CALLBACK,
        scheme=parts[0] if parts else None,
    )


def _extension_rule(url: str) -> ClassifiedLink | None:
    extension_id = parse_extension_id(url)
    if extension_id is None:
        return None
    return ClassifiedLink(
        url=url,
        category=LinkCategory.EXTENSION_INSTALL,
        scheme=url.split(":", 1)[0],
        extension_id=extension_id,
    )


def _dev_redirect_rule(url: str) -> ClassifiedLink | None:
    if not is_dev_redirect(url):
        return None
    parts = urlsplit(url)

    embedded = next(
        (value for key, value in parse_qsl(parts.query) if key == DEV_REDIRECT_PARAM),
        "",
    )
    if embedded:
        inner_url = unquote(embedded)
        logger.debug("Decoded redirect target: %s", inner_url)
        return ClassifiedLink(
            url=url,
            category=LinkCategory.DEV_REDIRECT,
            inner=classify(inner_url),
        )

    path = parts.path.replace(DEV_REDIRECT_PREFIX, "", 1)
    if path.startswith("/"):
        path = path[1:]
    query = f"?{parts.query}" if parts.query else ""
    return ClassifiedLink(
        url=url,
        category=LinkCategory.DEV_REDIRECT,
        redirect_path=f"{path}{query}",
    )


def _vsix_rule(url: str) -> ClassifiedLink | None:
    if not is_vsix_url(url):
        return None
    return ClassifiedLink(
        url=url,
        category=LinkCategory.VSIX_DOWNLOAD,
        extension=parse_vsix_info(url),
    )


def _mcp_rule(url: str) -> ClassifiedLink | None:
    m = MCP_LINK.match(url)
    if not m:
        return None
    return ClassifiedLink(
        url=url,
        category=LinkCategory.MCP_INSTALL,
        scheme=m.group(1),
        server_name=extract_mcp_server_name(url),
    )


def _plain_rule(url: str) -> ClassifiedLink | None:
    parts = split_scheme(url)
    if parts is None:
        return None
    return ClassifiedLink(url=url, category=LinkCategory.PLAIN_PROTOCOL, scheme=parts[0])


RULES: tuple[tuple[str, Rule], ...] = (
    ("auth-callback", _auth_rule),
    ("extension-install", _extension_rule),
    ("dev-redirect", _dev_redirect_rule),
    ("vsix-download", _vsix_rule),
    ("mcp-install", _mcp_rule),
    ("plain-protocol", _plain_rule),
)


def classify(url: object) -> ClassifiedLink:
    """Classify *url* against ``RULES``; the first matching rule wins.

    Args:
        url: The URL observed at a click or navigation event. Non-string
            values are accepted and classified as unrecognized.

    Returns:
        A ``ClassifiedLink``. Never raises.
    """
    if not isinstance(url, str) or not url:
        return ClassifiedLink(url=url if isinstance(url, str) else "", category=LinkCategory.UNRECOGNIZED)

    for name, rule in RULES:
        try:
            link = rule(url)
        except ValueError:
            logger.debug("Rule %s could not parse %r", name, url, exc_info=True)
            continue
        if link is not None:
            logger.debug("Classified %s as %s", url, name)
            return link
    return ClassifiedLink(url=url, category=LinkCategory.UNRECOGNIZED)
