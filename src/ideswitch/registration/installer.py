"""Delegated extension installs through the IDE's own command line.

VS Code family editors accept ``<exe> --install-extension <id>``. This is
how an extension link is honoured for IDEs that ignore
``{scheme}:extension/{id}`` URLs. When the IDE cannot be located the
installer reports itself unavailable and the rewriter falls back to a
protocol URL.
"""

from __future__ import annotations

import logging

from ideswitch.core.protocols import TargetProtocol
from ideswitch.core.rewriter.models import ExtensionInstaller, InstallResult
from ideswitch.registration.backend import CommandRunner, run_command
from ideswitch.registration.registrar import ProtocolRegistrar

logger = logging.getLogger(__name__)


class CliExtensionInstaller(ExtensionInstaller):
    """Install extensions by running the IDE executable.

    The executable is taken from the registered URL handler when one
    exists, otherwise from the default install locations.

    Args:
        registrar: Used to find the IDE executable.
        runner: Executes a command line. Defaults to ``run_command``.
    """

    def __init__(
        self,
        registrar: ProtocolRegistrar,
        runner: CommandRunner | None = None,
    ) -> None:
        self.registrar = registrar
        self._run = runner or run_command

    def _executable(self, target: TargetProtocol) -> str | None:
        status = self.registrar.check_registration(target)
        if status.registered and status.exec_path:
            return status.exec_path
        return self.registrar.find_install_path(target)

    def install(self, target: TargetProtocol, extension_id: str) -> InstallResult:
        exec_path = self._executable(target)
        if exec_path is None:
            return InstallResult.unavailable(f"{target.profile.name} executable not found")

        logger.info("Installing %s with %s", extension_id, exec_path)
        result = self._run([exec_path, "--install-extension", extension_id])
        if result.ok:
            return InstallResult(success=True)
        error = result.stderr.strip() or result.stdout.strip() or f"exit code {result.returncode}"
        return InstallResult(success=False, error=error)
