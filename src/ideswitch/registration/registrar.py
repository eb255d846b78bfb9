"""Detect and register IDE URL-scheme handlers on Windows.

The registrar checks whether a scheme such as ``cursor`` has a handler,
locates the IDE executable in its default install locations, and writes
the per-user registration under ``HKCU\\Software\\Classes``. Writing to
``HKCU`` does not require administrator rights.

Lookup order for an existing handler:
    1. ``HKCU:\\Software\\Classes\\{scheme}\\shell\\open\\command``
    2. ``Registry::HKEY_CLASSES_ROOT\\{scheme}\\shell\\open\\command``

The first non-empty value wins.
"""

from __future__ import annotations

import logging
import os
import re
from typing import Callable, Mapping

from ideswitch.core.protocols import IDE_PROFILES, LOCALAPPDATA, TargetProtocol
from ideswitch.exceptions import RegistrationError
from ideswitch.registration.backend import PowerShellRegistry, RegistryBackend
from ideswitch.registration.models import (
    AutoRegistrationResult,
    RegistrationResult,
    RegistrationStatus,
)

logger = logging.getLogger(__name__)

USER_CLASSES_ROOT = "HKCU:\\Software\\Classes"
MACHINE_CLASSES_ROOT = "Registry::HKEY_CLASSES_ROOT"
OPEN_COMMAND = "shell\\open\\command"
URL_PROTOCOL_MARKER = "URL Protocol"

QUOTED_EXEC = re.compile(r'^"([^"]+)"')


def open_command(exec_path: str) -> str:
    """Handler command line: ``"<exe>" "--open-url" "--" "%1"``."""
    return f'"{exec_path}" "--open-url" "--" "%1"'


def lookup_keys(protocol: str) -> list[str]:
    """Registry keys consulted by ``check_registration``, in order."""
    return [
        f"{USER_CLASSES_ROOT}\\{protocol}\\{OPEN_COMMAND}",
        f"{MACHINE_CLASSES_ROOT}\\{protocol}\\{OPEN_COMMAND}",
    ]


class ProtocolRegistrar:
    """Check, locate and register URL-scheme handlers.

    Args:
        backend: Registry access. Defaults to ``PowerShellRegistry``.
        path_exists: File existence check, injectable for tests.
        env: Environment used to expand ``%LOCALAPPDATA%``.
    """

    def __init__(
        self,
        backend: RegistryBackend | None = None,
        path_exists: Callable[[str], bool] = os.path.exists,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self.backend = backend or PowerShellRegistry()
        self._exists = path_exists
        self._env = os.environ if env is None else env

    @staticmethod
    def _protocol(protocol: str | TargetProtocol) -> TargetProtocol:
        try:
            return TargetProtocol(protocol)
        except ValueError:
            raise RegistrationError(f"Unsupported protocol: {protocol!r}") from None

    # -- check ----------------------------------------------------------------

    def check_registration(self, protocol: str | TargetProtocol) -> RegistrationStatus:
        """Report whether *protocol* has a ``shell\\open\\command`` handler."""
        scheme = self._protocol(protocol).value
        try:
            for key in lookup_keys(scheme):
                value = self.backend.read_default(key)
                if value:
                    m = QUOTED_EXEC.match(value)
                    return RegistrationStatus(
                        registered=True,
                        exec_path=m.group(1) if m else None,
                        registry_value=value,
                    )
        except OSError as exc:
            logger.warning("Registration check failed for %s", scheme, exc_info=True)
            return RegistrationStatus(registered=False, error=str(exc))
        return RegistrationStatus(registered=False)

    def check_all(self) -> dict[TargetProtocol, RegistrationStatus]:
        """Check every supported target."""
        return {protocol: self.check_registration(protocol) for protocol in TargetProtocol}

    # -- locate ---------------------------------------------------------------

    def candidate_paths(self, protocol: str | TargetProtocol) -> list[str]:
        """Default install locations for *protocol* with variables expanded."""
        profile = IDE_PROFILES[self._protocol(protocol)]
        local = self._env.get("LOCALAPPDATA")
        paths: list[str] = []
        for path in profile.install_paths:
            if path.startswith(LOCALAPPDATA):
                if not local:
                    continue
                path = local + path[len(LOCALAPPDATA):]
            paths.append(path)
        return paths

    def find_install_path(self, protocol: str | TargetProtocol) -> str | None:
        """Return the first default install location that exists."""
        for path in self.candidate_paths(protocol):
            if self._exists(path):
                return path
        return None

    # -- register -------------------------------------------------------------

    def register(
        self, protocol: str | TargetProtocol, exec_path: str
    ) -> RegistrationResult:
        """Register *exec_path* as the handler for *protocol* under HKCU.

        Three values are written: the ``URL:{scheme} Protocol``
        description, the empty ``URL Protocol`` marker, and the open
        command. The first failing step is reported; nothing is retried.
        """
        scheme = self._protocol(protocol).value
        if not self._exists(exec_path):
            return RegistrationResult.failed(f"Executable not found: {exec_path}")

        base = f"{USER_CLASSES_ROOT}\\{scheme}"

        result = self.backend.write_default(base, f"URL:{scheme} Protocol")
        if not result.success:
            return RegistrationResult.failed(f"Failed to set description: {result.error}")

        result = self.backend.write_value(base, URL_PROTOCOL_MARKER, "")
        if not result.success:
            return RegistrationResult.failed(f"Failed to set URL Protocol marker: {result.error}")

        result = self.backend.write_default(f"{base}\\{OPEN_COMMAND}", open_command(exec_path))
        if not result.success:
            return RegistrationResult.failed(f"Failed to set command: {result.error}")

        logger.info("Registered %s -> %s", scheme, exec_path)
        return RegistrationResult(success=True)

    def auto_register(self, protocol: str | TargetProtocol) -> AutoRegistrationResult:
        """Register *protocol* against its detected installation if needed."""
        scheme = self._protocol(protocol).value
        status = self.check_registration(scheme)
        if status.registered:
            return AutoRegistrationResult(
                success=True, exec_path=status.exec_path, already_registered=True
            )

        exec_path = self.find_install_path(scheme)
        if exec_path is None:
            return AutoRegistrationResult(
                success=False,
                error=(
                    f"Cannot find {scheme} installation. Please install it first "
                    "or specify the path manually."
                ),
            )

        result = self.register(scheme, exec_path)
        if result.success:
            return AutoRegistrationResult(success=True, exec_path=exec_path)
        return AutoRegistrationResult(success=False, error=result.error)
