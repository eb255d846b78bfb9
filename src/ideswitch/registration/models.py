"""Result types returned by the protocol registration helper.

Registry operations never raise for runtime failures. Each one returns a
small frozen dataclass whose ``error`` field carries text suitable for
showing to the user.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one spawned external command."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


@dataclass(frozen=True)
class RegistrationStatus:
    """Whether a URL scheme has a handler registered.

    Attributes:
        registered: A non-empty ``shell\\open\\command`` value was found.
        exec_path: Executable named by the command, if quoted.
        registry_value: The raw command string.
        error: Lookup failure text, if the check itself failed.
    """

    registered: bool
    exec_path: str | None = None
    registry_value: str | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass(frozen=True)
class RegistrationResult:
    """Outcome of a registry write."""

    success: bool
    error: str | None = None

    @classmethod
    def failed(cls, error: str) -> RegistrationResult:
        return cls(success=False, error=error)

    def to_dict(self) -> dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass(frozen=True)
class AutoRegistrationResult:
    """Outcome of detect-then-register.

    Attributes:
        success: The scheme is registered after the call.
        exec_path: Executable the scheme points at.
        already_registered: Nothing was written because a handler existed.
        error: Failure text. A missing installation is reported with a
            distinct "Cannot find ... installation" message.
    """

    success: bool
    exec_path: str | None = None
    already_registered: bool = False
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data = {k: v for k, v in asdict(self).items() if v is not None}
        if not self.already_registered:
            data.pop("already_registered")
        return data
