"""Data models for the URL classifier: LinkCategory, ExtensionInfo, ClassifiedLink.

These are transient values. One ``ClassifiedLink`` is created per
observed URL and discarded once the rewrite decision is made. They are
kept apart from the rule catalog so the rewriter and CLI formatters can
import them without pulling in the regex tables.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class LinkCategory(str, Enum):
    """The link shapes the classifier distinguishes."""

    AUTH_CALLBACK = "auth-callback"
    EXTENSION_INSTALL = "extension-install"
    DEV_REDIRECT = "dev-redirect"
    VSIX_DOWNLOAD = "vsix-download"
    MCP_INSTALL = "mcp-install"
    PLAIN_PROTOCOL = "plain-protocol"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class ExtensionInfo:
    """Publisher/name/version extracted from a VSIX download URL.

    Attributes:
        publisher: Marketplace publisher id (e.g. "ms-python").
        name: Extension name within the publisher (e.g. "python").
        version: Version string, or ``None`` when the URL does not carry one.
    """

    publisher: str
    name: str
    version: str | None = None

    @property
    def identifier(self) -> str:
        """Marketplace identifier in ``publisher.name`` form."""
        return f"{self.publisher}.{self.name}"


@dataclass(frozen=True)
class ClassifiedLink:
    """The classifier's verdict on a single URL.

    Only the fields relevant to ``category`` are populated.

    Attributes:
        url: The URL exactly as observed.
        category: Which link shape matched first.
        scheme: The URL scheme when it is an IDE protocol link.
        extension_id: Extension id for ``EXTENSION_INSTALL``.
        extension: Extracted package info for ``VSIX_DOWNLOAD``, if any.
        server_name: MCP server name for ``MCP_INSTALL``, if extractable.
        inner: The decoded, recursively classified link embedded in a
            ``DEV_REDIRECT`` ``url`` query parameter.
        redirect_path: For a ``DEV_REDIRECT`` without an inner link, the
            URL path with the redirect prefix stripped, plus its query.
    """

    url: str
    category: LinkCategory
    scheme: str | None = None
    extension_id: str | None = None
    extension: ExtensionInfo | None = None
    server_name: str | None = None
    inner: ClassifiedLink | None = None
    redirect_path: str | None = None

    @property
    def is_recognized(self) -> bool:
        return self.category is not LinkCategory.UNRECOGNIZED

    def to_dict(self) -> dict[str, object]:
        """Serialise to a JSON-friendly dict, omitting empty fields."""
        data: dict[str, object] = {"url": self.url, "category": self.category.value}
        if self.scheme:
            data["scheme"] = self.scheme
        if self.extension_id:
            data["extension_id"] = self.extension_id
        if self.extension is not None:
            data["extension"] = {
                "publisher": self.extension.publisher,
                "name": self.extension.name,
                "version": self.extension.version,
            }
        if self.server_name:
            data["server_name"] = self.server_name
        if self.inner is not None:
            data["inner"] = self.inner.to_dict()
        if self.redirect_path is not None:
            data["redirect_path"] = self.redirect_path
        return data
