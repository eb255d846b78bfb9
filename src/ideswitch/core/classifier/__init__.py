"""URL classifier: decide which IDE link shape an observed URL has.

Public API::

    from ideswitch.core.classifier import classify, LinkCategory

    link = classify("vscode:extension/ms-python.python")
    assert link.category is LinkCategory.EXTENSION_INSTALL
    print(link.extension_id)
"""

from __future__ import annotations

from ideswitch.core.classifier.engine import (
    RULES,
    classify,
    extract_mcp_server_name,
    is_auth_callback,
    parse_extension_id,
    parse_vsix_info,
)
from ideswitch.core.classifier.models import ClassifiedLink, ExtensionInfo, LinkCategory

__all__ = [
    "ClassifiedLink",
    "ExtensionInfo",
    "LinkCategory",
    "RULES",
    "classify",
    "extract_mcp_server_name",
    "is_auth_callback",
    "parse_extension_id",
    "parse_vsix_info",
]
