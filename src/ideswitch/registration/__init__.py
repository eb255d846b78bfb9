"""Windows URL-scheme registration helper.

Public API::

    from ideswitch.registration import ProtocolRegistrar

    registrar = ProtocolRegistrar()
    status = registrar.check_registration("cursor")
    if not status.registered:
        result = registrar.auto_register("cursor")
"""

from __future__ import annotations

from ideswitch.registration.backend import PowerShellRegistry, RegistryBackend, run_command
from ideswitch.registration.installer import CliExtensionInstaller
from ideswitch.registration.models import (
    AutoRegistrationResult,
    CommandResult,
    RegistrationResult,
    RegistrationStatus,
)
from ideswitch.registration.registrar import ProtocolRegistrar, lookup_keys, open_command

__all__ = [
    "AutoRegistrationResult",
    "CliExtensionInstaller",
    "CommandResult",
    "PowerShellRegistry",
    "ProtocolRegistrar",
    "RegistrationResult",
    "RegistrationStatus",
    "RegistryBackend",
    "lookup_keys",
    "open_command",
    "run_command",
]
