"""Tests for rewriting classified links to the selected target IDE."""

from __future__ import annotations

from urllib.parse import parse_qs, urlsplit

import pytest

from ideswitch.core.classifier import classify
from ideswitch.core.protocols import TargetProtocol
from ideswitch.core.rewriter import (
    InstallResult,
    McpReferenceResolver,
    OutcomeKind,
    Rewriter,
    SecondaryAction,
    build_vsix_install_url,
    rewrite_url,
)
from tests.helpers import FakeInstaller

MARKETPLACE_URL = (
    "https://marketplace.visualstudio.com/_apis/public/gallery/publishers/"
    "ms-python/vsextensions/python/2024.1.0/vspackage"
)


@pytest.fixture
def rewriter() -> Rewriter:
    return Rewriter()


# ---------------------------------------------------------------------------
# Untouched categories
# ---------------------------------------------------------------------------


class TestUntouched:

    @pytest.mark.parametrize("target", list(TargetProtocol))
    def test_auth_callback_is_never_rewritten(self, rewriter: Rewriter, target) -> None:
        url = "vscode://vscode.github-authentication/did-authenticate?code=abc"
        outcome = rewriter.rewrite_url(url, target)
        assert outcome.kind is OutcomeKind.UNCHANGED
        assert outcome.url == url
        assert not outcome.changed

    @pytest.mark.parametrize("url", [
        "vscode://vscode.github-authentication?code=1&state=2",
        "vscode://vscode.github-authentication",
    ])
    def test_auth_callback_without_path_is_never_rewritten(
        self, rewriter: Rewriter, url: str
    ) -> None:
        outcome = rewriter.rewrite_url(url, TargetProtocol.CURSOR)
        assert outcome.kind is OutcomeKind.UNCHANGED
        assert outcome.url == url

    def test_unrecognized_is_never_rewritten(self, rewriter: Rewriter) -> None:
        outcome = rewriter.rewrite_url("https://example.com/", TargetProtocol.CURSOR)
        assert outcome.kind is OutcomeKind.UNCHANGED


# ---------------------------------------------------------------------------
# Plain protocol links
# ---------------------------------------------------------------------------


class TestPlainProtocol:

    @pytest.mark.parametrize("url, target, expected", [
        ("vscode://file/home/me/a.py", TargetProtocol.ANTIGRAVITY, "antigravity://file/home/me/a.py"),
        ("vscode://file/home/me/a.py", TargetProtocol.CURSOR, "cursor://file/home/me/a.py"),
        ("vscode:file/home/me/a.py", TargetProtocol.ANTIGRAVITY, "antigravity://file/home/me/a.py"),
        ("windsurf://settings", TargetProtocol.VSCODE_INSIDERS, "vscode-insiders://settings"),
        ("vscodium:file/a.py", TargetProtocol.WINDSURF, "windsurf:file/a.py"),
    ])
    def test_scheme_is_swapped(self, rewriter: Rewriter, url, target, expected) -> None:
        outcome = rewriter.rewrite_url(url, target)
        assert outcome.kind is OutcomeKind.REPLACE
        assert outcome.url == expected

    def test_target_scheme_is_left_alone(self, rewriter: Rewriter) -> None:
        outcome = rewriter.rewrite_url("cursor://file/a.py", TargetProtocol.CURSOR)
        assert outcome.kind is OutcomeKind.UNCHANGED

    def test_rewrite_is_idempotent(self, rewriter: Rewriter) -> None:
        first = rewriter.rewrite_url("vscode://file/a.py", TargetProtocol.ANTIGRAVITY)
        second = rewriter.rewrite_url(first.url, TargetProtocol.ANTIGRAVITY)
        assert second.kind is OutcomeKind.UNCHANGED
        assert second.url == first.url


# ---------------------------------------------------------------------------
# Extension links
# ---------------------------------------------------------------------------


class TestExtensionLinks:

    def test_cursor_gets_its_own_extension_link(self, rewriter: Rewriter) -> None:
        outcome = rewriter.rewrite_url("vscode:extension/ms-python.python", TargetProtocol.CURSOR)
        assert outcome.kind is OutcomeKind.REPLACE
        assert outcome.url == "cursor:extension/ms-python.python"

    def test_antigravity_uses_double_slash_prefix(self, rewriter: Rewriter) -> None:
        outcome = rewriter.rewrite_url(
            "vscode:extension/ms-python.python", TargetProtocol.ANTIGRAVITY
        )
        assert outcome.url == "antigravity://extension/ms-python.python"

    def test_vscode_target_keeps_its_own_link(self, rewriter: Rewriter) -> None:
        outcome = rewriter.rewrite_url("vscode:extension/foo.bar", TargetProtocol.VSCODE)
        assert outcome.kind is OutcomeKind.UNCHANGED

    def test_vscode_target_rewrites_foreign_link(self, rewriter: Rewriter) -> None:
        outcome = rewriter.rewrite_url("cursor:extension/foo.bar", TargetProtocol.VSCODE)
        assert outcome.kind is OutcomeKind.REPLACE
        assert outcome.url == "vscode:extension/foo.bar"

    def test_installer_success(self) -> None:
        installer = FakeInstaller(InstallResult(success=True))
        outcome = Rewriter(installer=installer).rewrite_url(
            "vscode:extension/foo.bar", TargetProtocol.CURSOR
        )
        assert installer.calls == [(TargetProtocol.CURSOR, "foo.bar")]
        assert outcome.kind is OutcomeKind.SECONDARY
        assert outcome.action is SecondaryAction.INSTALL_EXTENSION
        assert outcome.message == ""

    def test_installer_failure_is_reported(self) -> None:
        installer = FakeInstaller(InstallResult(success=False, error="exit code 1"))
        outcome = Rewriter(installer=installer).rewrite_url(
            "vscode:extension/foo.bar", TargetProtocol.CURSOR
        )
        assert outcome.kind is OutcomeKind.SECONDARY
        assert outcome.action is SecondaryAction.INSTALL_FAILED
        assert outcome.message == "exit code 1"

    def test_installer_failure_without_detail_is_still_a_failure(self) -> None:
        installer = FakeInstaller(InstallResult(success=False, error=""))
        outcome = Rewriter(installer=installer).rewrite_url(
            "vscode:extension/foo.bar", TargetProtocol.CURSOR
        )
        assert outcome.action is SecondaryAction.INSTALL_FAILED
        assert outcome.message == "Cursor could not install foo.bar"

    def test_unavailable_installer_falls_back_to_protocol_url(self) -> None:
        installer = FakeInstaller(InstallResult.unavailable("Cursor executable not found"))
        outcome = Rewriter(installer=installer).rewrite_url(
            "vscode:extension/foo.bar", TargetProtocol.CURSOR
        )
        assert installer.calls
        assert outcome.kind is OutcomeKind.REPLACE
        assert outcome.url == "cursor:extension/foo.bar"

    def test_installer_not_consulted_for_native_link(self) -> None:
        installer = FakeInstaller(InstallResult(success=True))
        Rewriter(installer=installer).rewrite_url(
            "vscode:extension/foo.bar", TargetProtocol.VSCODE
        )
        assert installer.calls == []

    def test_module_level_helper_accepts_installer(self) -> None:
        installer = FakeInstaller(InstallResult(success=True))
        outcome = rewrite_url("vscode:extension/foo.bar", TargetProtocol.WINDSURF, installer)
        assert outcome.action is SecondaryAction.INSTALL_EXTENSION


# ---------------------------------------------------------------------------
# VSIX downloads
# ---------------------------------------------------------------------------


class TestVsixDownloads:

    def test_marketplace_package_becomes_install_url(self, rewriter: Rewriter) -> None:
        outcome = rewriter.rewrite_url(MARKETPLACE_URL, TargetProtocol.ANTIGRAVITY)
        assert outcome.kind is OutcomeKind.REPLACE
        parts = urlsplit(outcome.url)
        assert f"{parts.scheme}://{parts.netloc}{parts.path}" == "antigravity://extension/install"
        params = parse_qs(parts.query)
        assert params["url"] == [MARKETPLACE_URL]
        assert params["name"] == ["ms-python.python"]
        assert params["version"] == ["2024.1.0"]

    def test_install_url_uses_double_slash_for_every_target(self, rewriter: Rewriter) -> None:
        outcome = rewriter.rewrite_url(MARKETPLACE_URL, TargetProtocol.CURSOR)
        assert outcome.url.startswith("cursor://extension/install?url=")

    def test_missing_metadata_is_omitted(self) -> None:
        url = build_vsix_install_url(
            TargetProtocol.WINDSURF, "https://example.com/widget.vsix", None
        )
        params = parse_qs(urlsplit(url).query)
        assert params == {"url": ["https://example.com/widget.vsix"]}

    def test_missing_version_is_omitted(self, rewriter: Rewriter) -> None:
        outcome = rewriter.rewrite_url("https://example.com/acme.widget.vsix", TargetProtocol.CURSOR)
        params = parse_qs(urlsplit(outcome.url).query)
        assert params["name"] == ["acme.widget"]
        assert "version" not in params


# ---------------------------------------------------------------------------
# vscode.dev redirects
# ---------------------------------------------------------------------------


class TestDevRedirects:

    def test_embedded_extension_link(self, rewriter: Rewriter) -> None:
        outcome = rewriter.rewrite_url(
            "https://insiders.vscode.dev/redirect?url=vscode%3Aextension%2Ffoo.bar",
            TargetProtocol.WINDSURF,
        )
        assert outcome.kind is OutcomeKind.REPLACE
        assert outcome.url == "windsurf:extension/foo.bar"

    def test_embedded_native_link_skips_web_page(self, rewriter: Rewriter) -> None:
        outcome = rewriter.rewrite_url(
            "https://vscode.dev/redirect?url=vscode%3Aextension%2Ffoo.bar",
            TargetProtocol.VSCODE,
        )
        assert outcome.kind is OutcomeKind.REPLACE
        assert outcome.url == "vscode:extension/foo.bar"

    def test_path_form(self, rewriter: Rewriter) -> None:
        outcome = rewriter.rewrite_url(
            "https://insiders.vscode.dev/redirect/mcp/install?name=github",
            TargetProtocol.CURSOR,
        )
        assert outcome.kind is OutcomeKind.REPLACE
        assert outcome.url == "cursor:mcp/install?name=github"

    def test_path_form_antigravity(self, rewriter: Rewriter) -> None:
        outcome = rewriter.rewrite_url(
            "https://vscode.dev/redirect/extension/foo.bar", TargetProtocol.ANTIGRAVITY
        )
        assert outcome.url == "antigravity://extension/foo.bar"

    def test_embedded_mcp_link_for_antigravity(self, rewriter: Rewriter) -> None:
        outcome = rewriter.rewrite_url(
            "https://vscode.dev/redirect?url=vscode%3Amcp%2Fby-name%2Fhuggingface",
            TargetProtocol.ANTIGRAVITY,
        )
        assert outcome.kind is OutcomeKind.SECONDARY
        assert outcome.action is SecondaryAction.SHOW_INSTRUCTIONS


# ---------------------------------------------------------------------------
# MCP install links
# ---------------------------------------------------------------------------


class TestMcpLinks:

    def test_known_server_for_antigravity(self, rewriter: Rewriter) -> None:
        outcome = rewriter.rewrite_url("vscode:mcp/by-name/huggingface", TargetProtocol.ANTIGRAVITY)
        assert outcome.kind is OutcomeKind.SECONDARY
        assert outcome.action is SecondaryAction.SHOW_INSTRUCTIONS
        assert outcome.server_name == "huggingface"
        assert outcome.fallback_url == "https://github.com/huggingface/hf-mcp-server"

    def test_unknown_server_has_no_fallback(self, rewriter: Rewriter) -> None:
        outcome = rewriter.rewrite_url("vscode:mcp/by-name/unheard-of", TargetProtocol.ANTIGRAVITY)
        assert outcome.kind is OutcomeKind.SECONDARY
        assert outcome.server_name == "unheard-of"
        assert outcome.fallback_url is None

    def test_resolver_is_consulted(self) -> None:
        resolver = McpReferenceResolver(table={"github": "https://github.com/github/github-mcp-server"})
        outcome = Rewriter(references=resolver).rewrite_url(
            "vscode:mcp/by-name/github", TargetProtocol.ANTIGRAVITY
        )
        assert outcome.fallback_url == "https://github.com/github/github-mcp-server"

    def test_mcp_capable_target_gets_scheme_swap(self, rewriter: Rewriter) -> None:
        outcome = rewriter.rewrite_url("vscode:mcp/by-name/huggingface", TargetProtocol.CURSOR)
        assert outcome.kind is OutcomeKind.REPLACE
        assert outcome.url == "cursor:mcp/by-name/huggingface"

    def test_unnamed_link_for_antigravity_is_swapped(self, rewriter: Rewriter) -> None:
        outcome = rewriter.rewrite_url("vscode:mcp/install?x=1", TargetProtocol.ANTIGRAVITY)
        assert outcome.kind is OutcomeKind.REPLACE
        assert outcome.url == "antigravity://mcp/install?x=1"

    def test_same_scheme_is_unchanged(self, rewriter: Rewriter) -> None:
        outcome = rewriter.rewrite_url("vscode:mcp/by-name/github", TargetProtocol.VSCODE)
        assert outcome.kind is OutcomeKind.UNCHANGED


class TestOutcomeSerialisation:

    def test_instructions_to_dict(self, rewriter: Rewriter) -> None:
        data = rewriter.rewrite_url(
            "vscode:mcp/by-name/huggingface", TargetProtocol.ANTIGRAVITY
        ).to_dict()
        assert data == {
            "kind": "secondary",
            "url": "vscode:mcp/by-name/huggingface",
            "action": "show-instructions",
            "server_name": "huggingface",
            "fallback_url": "https://github.com/huggingface/hf-mcp-server",
        }

    def test_classify_then_rewrite_matches_rewrite_url(self, rewriter: Rewriter) -> None:
        url = "vscode://file/a.py"
        assert rewriter.rewrite(classify(url), TargetProtocol.CURSOR) == rewriter.rewrite_url(
            url, TargetProtocol.CURSOR
        )
