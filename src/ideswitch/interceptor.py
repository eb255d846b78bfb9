"""Link interception: one click or navigation event in, one action out.

``LinkInterceptor`` ties the settings store to the classifier and
rewriter. Each call to ``handle`` reads the selected target exactly once,
so a settings change made mid-cycle only takes effect on the next event.

Actions:
    NAVIGATE           -- open ``url`` instead of the original link
    PASS_THROUGH       -- let the original link proceed untouched
    SHOW_INSTRUCTIONS  -- show MCP install instructions, then open ``url``
                          (the fallback reference location) if there is one
    INSTALLED          -- the IDE installed the extension; nothing to open
    FAILED             -- a delegated action failed; ``message`` says why
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from ideswitch.config import Settings
from ideswitch.core.classifier import ClassifiedLink, classify
from ideswitch.core.protocols import TargetProtocol
from ideswitch.core.rewriter import OutcomeKind, RewriteOutcome, Rewriter, SecondaryAction

logger = logging.getLogger(__name__)

MCP_CONFIG_PATH = "~/.gemini/antigravity/mcp_config.json"


class ActionKind(str, Enum):
    NAVIGATE = "navigate"
    PASS_THROUGH = "pass-through"
    SHOW_INSTRUCTIONS = "show-instructions"
    INSTALLED = "installed"
    FAILED = "failed"


@dataclass(frozen=True)
class InterceptAction:
    """What the host should do with an intercepted link.

    Attributes:
        kind: The action to take.
        url: Destination for ``NAVIGATE``, or the post-instructions
            destination for ``SHOW_INSTRUCTIONS``.
        target: Target protocol read at the start of the cycle.
        link: The classification of the original link.
        outcome: The rewriter's outcome.
        message: Error or informational text.
    """

    kind: ActionKind
    url: str | None
    target: TargetProtocol
    link: ClassifiedLink
    outcome: RewriteOutcome
    message: str = ""

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {
            "action": self.kind.value,
            "url": self.url,
            "target": self.target.value,
            "link": self.link.to_dict(),
            "outcome": self.outcome.to_dict(),
        }
        if self.message:
            data["message"] = self.message
        return data


class LinkInterceptor:
    """Decide what happens when the user follows a link.

    Args:
        settings: Source of the selected target and notice flags.
        rewriter: Rewriter to apply. Defaults to a plain ``Rewriter``.
    """

    def __init__(self, settings: Settings, rewriter: Rewriter | None = None) -> None:
        self.settings = settings
        self.rewriter = rewriter or Rewriter()

    def handle(self, href: str, target: TargetProtocol | None = None) -> InterceptAction:
        """Classify and rewrite *href* for the configured (or given) target."""
        if target is None:
            target = self.settings.get_target()
        link = classify(href)
        outcome = self.rewriter.rewrite(link, target)
        action = self._to_action(link, outcome, target)
        if action.kind is ActionKind.PASS_THROUGH:
            logger.debug("Keeping link: %s", href)
        else:
            logger.info("Intercepted %s link: %s -> %s", link.category.value, href, action.kind.value)
        return action

    def _to_action(
        self, link: ClassifiedLink, outcome: RewriteOutcome, target: TargetProtocol
    ) -> InterceptAction:
        def make(kind: ActionKind, url: str | None, message: str = "") -> InterceptAction:
            return InterceptAction(
                kind=kind, url=url, target=target, link=link, outcome=outcome, message=message
            )

        if outcome.kind is OutcomeKind.REPLACE:
            return make(ActionKind.NAVIGATE, outcome.url)
        if outcome.kind is OutcomeKind.UNCHANGED:
            return make(ActionKind.PASS_THROUGH, link.url)

        if outcome.action is SecondaryAction.INSTALL_EXTENSION:
            return make(ActionKind.INSTALLED, None)
        if outcome.action is SecondaryAction.INSTALL_FAILED:
            return make(ActionKind.FAILED, None, outcome.message)

        if outcome.fallback_url and self.settings.mcp_instructions_dismissed:
            logger.debug("MCP instructions dismissed, going straight to %s", outcome.fallback_url)
            return make(ActionKind.NAVIGATE, outcome.fallback_url)
        return make(ActionKind.SHOW_INSTRUCTIONS, outcome.fallback_url)


def render_mcp_instructions(
    server_name: str,
    fallback_url: str | None,
    target: TargetProtocol = TargetProtocol.ANTIGRAVITY,
) -> str:
    """Manual installation guide for an MCP server the target cannot install by URL."""
    ide = target.profile.name
    lines = [
        f"{ide} does not handle MCP install links.",
        "",
        "Option 1: MCP Store (recommended)",
        f"  1. Open {ide}",
        '  2. Click "..." -> "MCP Store"',
        f'  3. Search for "{server_name}"',
        '  4. Click "Install"',
        "",
        "Option 2: Manual configuration",
        f"  Edit {MCP_CONFIG_PATH} and add the server entry.",
    ]
    if fallback_url:
        lines.append(f"  Configuration details: {fallback_url}")
    else:
        lines.append(f"  No reference location is known for {server_name}.")
    return "\n".join(lines)
