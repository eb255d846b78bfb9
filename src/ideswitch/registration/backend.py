"""Registry access through PowerShell.

``RegistryBackend`` is the narrow contract the registrar depends on:
read the default value of a key, write the default value of a key, and
write a named value. ``PowerShellRegistry`` fulfils it by spawning
``powershell -NoProfile -Command ...``. The process runner is injectable
so tests never spawn anything.

No timeout is applied unless the caller passes one.
"""

from __future__ import annotations

import logging
import subprocess
import sys
from abc import ABC, abstractmethod
from typing import Callable

from ideswitch.registration.models import CommandResult, RegistrationResult

logger = logging.getLogger(__name__)

CommandRunner = Callable[[list[str]], CommandResult]

POWERSHELL: tuple[str, ...] = ("powershell", "-NoProfile", "-Command")

SUCCESS_MARKER = "SUCCESS"


def run_command(args: list[str], timeout: float | None = None) -> CommandResult:
    """Run *args* and capture its output. Spawn failures become results."""
    kwargs: dict[str, object] = {}
    if sys.platform == "win32":
        kwargs["creationflags"] = getattr(subprocess, "CREATE_NO_WINDOW", 0)
    try:
        proc = subprocess.run(
            args,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
            **kwargs,  # type: ignore[arg-type]
        )
    except subprocess.TimeoutExpired:
        logger.warning("Command timed out after %ss: %s", timeout, args[0])
        return CommandResult(returncode=-1, stderr=f"Timed out after {timeout}s")
    except OSError as exc:
        logger.warning("Failed to start %s: %s", args[0], exc)
        return CommandResult(returncode=-1, stderr=str(exc))
    return CommandResult(returncode=proc.returncode, stdout=proc.stdout, stderr=proc.stderr)


def ps_quote(value: str) -> str:
    """Quote *value* as a single-quoted PowerShell literal."""
    return "'" + value.replace("'", "''") + "'"


class RegistryBackend(ABC):
    """Minimal registry capability used by ``ProtocolRegistrar``."""

    @abstractmethod
    def read_default(self, key: str) -> str | None:
        """Return the ``(default)`` value of *key*, or ``None`` if empty/absent."""

    @abstractmethod
    def write_default(self, key: str, value: str) -> RegistrationResult:
        """Create *key* (and its parent) if needed and set its ``(default)``."""

    @abstractmethod
    def write_value(self, key: str, name: str, value: str) -> RegistrationResult:
        """Set the named value *name* on an existing *key*."""


class PowerShellRegistry(RegistryBackend):
    """``RegistryBackend`` that shells out to PowerShell.

    Args:
        runner: Executes a command line. Defaults to ``run_command``.
        timeout: Optional per-command timeout in seconds.
    """

    def __init__(
        self,
        runner: CommandRunner | None = None,
        timeout: float | None = None,
    ) -> None:
        if runner is None:
            runner = lambda args: run_command(args, timeout=timeout)  # noqa: E731
        self._run = runner

    def _powershell(self, script: str) -> CommandResult:
        return self._run([*POWERSHELL, script])

    def read_default(self, key: str) -> str | None:
        script = (
            f"try {{ (Get-ItemProperty -Path {ps_quote(key)} -ErrorAction Stop)."
            f"'(default)' }} catch {{ '' }}"
        )
        result = self._powershell(script)
        if not result.ok:
            logger.debug("Registry read failed for %s: %s", key, result.stderr.strip())
            return None
        return result.stdout.strip() or None

    def write_default(self, key: str, value: str) -> RegistrationResult:
        parent = key.rsplit("\\", 1)[0]
        script = "\n".join([
            "$ErrorActionPreference = 'Stop'",
            "try {",
            f"if (-not (Test-Path {ps_quote(parent)})) "
            f"{{ New-Item -Path {ps_quote(parent)} -Force | Out-Null }}",
            f"if (-not (Test-Path {ps_quote(key)})) "
            f"{{ New-Item -Path {ps_quote(key)} -Force | Out-Null }}",
            f"Set-ItemProperty -Path {ps_quote(key)} -Name '(default)' -Value {ps_quote(value)}",
            f"Write-Output '{SUCCESS_MARKER}'",
            "} catch { Write-Output \"ERROR: $_\" }",
        ])
        return self._check(self._powershell(script), key)

    def write_value(self, key: str, name: str, value: str) -> RegistrationResult:
        script = "\n".join([
            "$ErrorActionPreference = 'Stop'",
            "try {",
            f"Set-ItemProperty -Path {ps_quote(key)} -Name {ps_quote(name)} -Value {ps_quote(value)}",
            f"Write-Output '{SUCCESS_MARKER}'",
            "} catch { Write-Output \"ERROR: $_\" }",
        ])
        return self._check(self._powershell(script), key)

    @staticmethod
    def _check(result: CommandResult, key: str) -> RegistrationResult:
        output = result.stdout.strip()
        if result.ok and output.startswith(SUCCESS_MARKER):
            return RegistrationResult(success=True)
        error = result.stderr.strip() or output or "Unknown error"
        logger.warning("Registry write failed for %s: %s", key, error)
        return RegistrationResult.failed(error)
