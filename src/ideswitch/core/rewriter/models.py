"""Data models for the rewriter: RewriteOutcome and the installer seam.

``RewriteOutcome`` is the single result of rewriting one URL. It is
never partially applied: the caller either navigates to ``url``, leaves
the original alone, or performs the secondary action described by
``action``.

``ExtensionInstaller`` is the narrow capability the rewriter uses to
delegate an install-by-id to the operating system. The concrete
implementation lives in ``ideswitch.registration.installer``; tests use
in-memory fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ideswitch.core.protocols import TargetProtocol


class OutcomeKind(str, Enum):
    """What the caller should do with the observed URL."""

    REPLACE = "replace"
    UNCHANGED = "unchanged"
    SECONDARY = "secondary"


class SecondaryAction(str, Enum):
    """Side actions taken instead of a direct URL rewrite."""

    SHOW_INSTRUCTIONS = "show-instructions"
    INSTALL_EXTENSION = "install-extension"
    INSTALL_FAILED = "install-failed"


@dataclass(frozen=True)
class RewriteOutcome:
    """Exactly one outcome per rewritten URL.

    Attributes:
        kind: Replace, leave unchanged, or perform a secondary action.
        url: The replacement URL for ``REPLACE``; the original URL otherwise.
        action: Which secondary action to perform (``SECONDARY`` only).
        server_name: MCP server the instructions are about.
        fallback_url: Where to navigate after showing instructions, if known.
        message: Free-form detail, e.g. an installer error.
    """

    kind: OutcomeKind
    url: str
    action: SecondaryAction | None = None
    server_name: str | None = None
    fallback_url: str | None = None
    message: str = ""

    @classmethod
    def replace(cls, url: str) -> RewriteOutcome:
        return cls(kind=OutcomeKind.REPLACE, url=url)

    @classmethod
    def unchanged(cls, url: str) -> RewriteOutcome:
        return cls(kind=OutcomeKind.UNCHANGED, url=url)

    @classmethod
    def instructions(
        cls, url: str, server_name: str, fallback_url: str | None
    ) -> RewriteOutcome:
        return cls(
            kind=OutcomeKind.SECONDARY,
            url=url,
            action=SecondaryAction.SHOW_INSTRUCTIONS,
            server_name=server_name,
            fallback_url=fallback_url,
        )

    @classmethod
    def installed(cls, url: str) -> RewriteOutcome:
        return cls(
            kind=OutcomeKind.SECONDARY,
            url=url,
            action=SecondaryAction.INSTALL_EXTENSION,
        )

    @classmethod
    def install_failed(cls, url: str, message: str) -> RewriteOutcome:
        return cls(
            kind=OutcomeKind.SECONDARY,
            url=url,
            action=SecondaryAction.INSTALL_FAILED,
            message=message,
        )

    @property
    def changed(self) -> bool:
        return self.kind is not OutcomeKind.UNCHANGED

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {"kind": self.kind.value, "url": self.url}
        if self.action is not None:
            data["action"] = self.action.value
        if self.server_name:
            data["server_name"] = self.server_name
        if self.fallback_url:
            data["fallback_url"] = self.fallback_url
        if self.message:
            data["message"] = self.message
        return data


@dataclass(frozen=True)
class InstallResult:
    """Result of a delegated install-by-id request.

    Attributes:
        success: The IDE accepted the install request.
        available: The delegation path exists at all. ``False`` means the
            caller should fall back to a protocol URL.
        error: Human-readable failure text.
    """

    success: bool
    available: bool = True
    error: str = ""

    @classmethod
    def unavailable(cls, error: str = "") -> InstallResult:
        return cls(success=False, available=False, error=error)


class ExtensionInstaller(ABC):
    """Capability to install an extension by id into a target IDE."""

    @abstractmethod
    def install(self, target: TargetProtocol, extension_id: str) -> InstallResult:
        """Ask *target* to install *extension_id*.

        Implementations report failure through ``InstallResult``; they
        must not raise for runtime errors.
        """
