"""Rewrite classified links so they open in the selected target IDE.

The rewriter is a pure function of ``(ClassifiedLink, TargetProtocol)``
plus two injected capabilities: an ``ExtensionInstaller`` for delegated
install-by-id, and an ``McpReferenceResolver`` for MCP servers the target
cannot install from a URL. With neither injected, every decision is made
from the URL alone.
"""

from __future__ import annotations

import logging
from urllib.parse import urlencode

from ideswitch.core.classifier import ClassifiedLink, ExtensionInfo, LinkCategory, classify
from ideswitch.core.protocols import TargetProtocol, swap_scheme
from ideswitch.core.rewriter.models import ExtensionInstaller, OutcomeKind, RewriteOutcome
from ideswitch.core.rewriter.references import McpReferenceResolver

logger = logging.getLogger(__name__)


def build_vsix_install_url(
    target: TargetProtocol, vsix_url: str, info: ExtensionInfo | None
) -> str:
    """Build ``{target}://extension/install?url=...`` for a VSIX download.

    ``name`` and ``version`` are only added when they were extracted.
    The install endpoint always uses the double-slash form.
    """
    params: dict[str, str] = {"url": vsix_url}
    if info is not None and info.publisher and info.name:
        params["name"] = info.identifier
    if info is not None and info.version:
        params["version"] = info.version
    return f"{target.value}://extension/install?{urlencode(params)}"


def extension_url(target: TargetProtocol, extension_id: str) -> str:
    """Protocol URL that opens *extension_id* in *target*."""
    return f"{target.prefix}extension/{extension_id}"


def _swap(url: str, target: TargetProtocol) -> RewriteOutcome:
    if target.owns(url):
        return RewriteOutcome.unchanged(url)
    rewritten = swap_scheme(url, target)
    if rewritten == url:
        return RewriteOutcome.unchanged(url)
    return RewriteOutcome.replace(rewritten)


class Rewriter:
    """Turns a ``ClassifiedLink`` into a ``RewriteOutcome`` for a target.

    Args:
        installer: Delegated install-by-id capability. ``None`` means
            extension links always fall back to a protocol URL.
        references: MCP reference resolver. Defaults to the static table.
    """

    def __init__(
        self,
        installer: ExtensionInstaller | None = None,
        references: McpReferenceResolver | None = None,
    ) -> None:
        self.installer = installer
        self.references = references or McpReferenceResolver()

    def rewrite(self, link: ClassifiedLink, target: TargetProtocol) -> RewriteOutcome:
        """Produce the single outcome for *link* under *target*."""
        category = link.category
        if category is LinkCategory.EXTENSION_INSTALL:
            return self._rewrite_extension(link, target)
        if category is LinkCategory.DEV_REDIRECT:
            return self._rewrite_redirect(link, target)
        if category is LinkCategory.VSIX_DOWNLOAD:
            return RewriteOutcome.replace(
                build_vsix_install_url(target, link.url, link.extension)
            )
        if category is LinkCategory.MCP_INSTALL:
            return self._rewrite_mcp(link, target)
        if category is LinkCategory.PLAIN_PROTOCOL:
            return _swap(link.url, target)
        # AUTH_CALLBACK and UNRECOGNIZED are never touched.
        return RewriteOutcome.unchanged(link.url)

    def rewrite_url(self, url: str, target: TargetProtocol) -> RewriteOutcome:
        return self.rewrite(classify(url), target)

    # -- per-category handlers ------------------------------------------------

    def _rewrite_extension(
        self, link: ClassifiedLink, target: TargetProtocol
    ) -> RewriteOutcome:
        extension_id = link.extension_id or ""
        if target.supports_extension_links and target.owns(link.url):
            return RewriteOutcome.unchanged(link.url)

        if self.installer is not None:
            result = self.installer.install(target, extension_id)
            if result.success:
                logger.info("Installed %s into %s", extension_id, target.value)
                return RewriteOutcome.installed(link.url)
            if result.available:
                logger.warning("Install of %s failed: %s", extension_id, result.error)
                return RewriteOutcome.install_failed(
                    link.url,
                    result.error or f"{target.profile.name} could not install {extension_id}",
                )
            logger.debug("Installer unavailable for %s, using protocol URL", target.value)

        fallback = extension_url(target, extension_id)
        if fallback == link.url:
            return RewriteOutcome.unchanged(link.url)
        return RewriteOutcome.replace(fallback)

    def _rewrite_redirect(
        self, link: ClassifiedLink, target: TargetProtocol
    ) -> RewriteOutcome:
        if link.inner is None:
            return RewriteOutcome.replace(f"{target.prefix}{link.redirect_path or ''}")
        outcome = self.rewrite(link.inner, target)
        # The outer URL is a web page; "unchanged" still means leave it for the inner link.
        if outcome.kind is OutcomeKind.UNCHANGED:
            return RewriteOutcome.replace(link.inner.url)
        return outcome

    def _rewrite_mcp(self, link: ClassifiedLink, target: TargetProtocol) -> RewriteOutcome:
        if not target.supports_mcp_links and link.server_name:
            return RewriteOutcome.instructions(
                link.url,
                server_name=link.server_name,
                fallback_url=self.references.resolve(link.server_name),
            )
        return _swap(link.url, target)


_DEFAULT_REWRITER = Rewriter()


def rewrite_url(
    url: str,
    target: TargetProtocol,
    installer: ExtensionInstaller | None = None,
) -> RewriteOutcome:
    """Classify and rewrite *url* for *target* in one call."""
    rewriter = _DEFAULT_REWRITER if installer is None else Rewriter(installer=installer)
    return rewriter.rewrite_url(url, target)
