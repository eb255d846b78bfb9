"""Pure URL classification and rewriting core.

Nothing in this package performs I/O. The target IDE is always passed in
explicitly; there is no module-level "current target".
"""

from __future__ import annotations

from ideswitch.core.classifier import ClassifiedLink, ExtensionInfo, LinkCategory, classify
from ideswitch.core.protocols import TargetProtocol
from ideswitch.core.rewriter import OutcomeKind, RewriteOutcome, Rewriter, rewrite_url

__all__ = [
    "ClassifiedLink",
    "ExtensionInfo",
    "LinkCategory",
    "OutcomeKind",
    "RewriteOutcome",
    "Rewriter",
    "TargetProtocol",
    "classify",
    "rewrite_url",
]
