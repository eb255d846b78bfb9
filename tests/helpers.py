"""Shared test doubles for the registry and installer seams."""

from __future__ import annotations

from ideswitch.core.protocols import TargetProtocol
from ideswitch.core.rewriter import ExtensionInstaller, InstallResult
from ideswitch.registration import RegistrationResult, RegistryBackend


class FakeRegistry(RegistryBackend):
    """In-memory registry keyed by (key, value-name)."""

    def __init__(self, values: dict[str, str] | None = None) -> None:
        self.values: dict[tuple[str, str], str] = {
            (key, "(default)"): value for key, value in (values or {}).items()
        }
        self.reads: list[str] = []
        self.fail_on: set[str] = set()

    def read_default(self, key: str) -> str | None:
        self.reads.append(key)
        return self.values.get((key, "(default)")) or None

    def write_default(self, key: str, value: str) -> RegistrationResult:
        return self.write_value(key, "(default)", value)

    def write_value(self, key: str, name: str, value: str) -> RegistrationResult:
        if key in self.fail_on:
            return RegistrationResult.failed("Access is denied")
        self.values[(key, name)] = value
        return RegistrationResult(success=True)


class FakeInstaller(ExtensionInstaller):
    """Records install requests and returns a canned result."""

    def __init__(self, result: InstallResult) -> None:
        self.result = result
        self.calls: list[tuple[TargetProtocol, str]] = []

    def install(self, target: TargetProtocol, extension_id: str) -> InstallResult:
        self.calls.append((target, extension_id))
        return self.result
