"""Rewriter: turn classified links into outcomes for the target IDE.

Public API::

    from ideswitch.core.rewriter import Rewriter
    from ideswitch.core.classifier import classify
    from ideswitch.core.protocols import TargetProtocol

    outcome = Rewriter().rewrite(classify(url), TargetProtocol.CURSOR)
"""

from __future__ import annotations

from ideswitch.core.rewriter.engine import (
    Rewriter,
    build_vsix_install_url,
    extension_url,
    rewrite_url,
)
from ideswitch.core.rewriter.models import (
    ExtensionInstaller,
    InstallResult,
    OutcomeKind,
    RewriteOutcome,
    SecondaryAction,
)
from ideswitch.core.rewriter.references import MCP_REFERENCE_LOCATIONS, McpReferenceResolver

__all__ = [
    "ExtensionInstaller",
    "InstallResult",
    "MCP_REFERENCE_LOCATIONS",
    "McpReferenceResolver",
    "OutcomeKind",
    "RewriteOutcome",
    "Rewriter",
    "SecondaryAction",
    "build_vsix_install_url",
    "extension_url",
    "rewrite_url",
]
