"""YAML-backed settings store.

Holds the user's selected target protocol plus the "don't show MCP
instructions again" flag. The store is a small YAML mapping on disk.
Every read goes back to the file so that a change made by another process
(or another CLI invocation) is seen by the next interception cycle.

Writes replace the file atomically, giving last-write-wins semantics
without in-process locking. A stored protocol that is not recognised is
coerced back to the default on read, and the default is written back.
"""

from __future__ import annotations

import contextlib
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

import yaml

from ideswitch.core.protocols import TargetProtocol
from ideswitch.exceptions import ConfigError

logger = logging.getLogger(__name__)

STORAGE_KEY = "selectedProtocol"
DISMISSED_KEY = "mcpInstructionModalDismissed"

ENV_CONFIG_PATH = "IDESWITCH_CONFIG"


def default_settings_path() -> Path:
    """Return ``$IDESWITCH_CONFIG`` or ``~/.config/ideswitch/settings.yaml``."""
    override = os.environ.get(ENV_CONFIG_PATH)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "ideswitch" / "settings.yaml"


class Settings:
    """Key-value settings persisted to a YAML file.

    Args:
        path: Location of the settings file. It does not need to exist.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    @classmethod
    def default(cls) -> Settings:
        return cls(default_settings_path())

    # -- raw storage ----------------------------------------------------------

    def load(self) -> dict[str, Any]:
        """Read the whole mapping. Missing or unreadable files yield ``{}``."""
        if not self.path.exists():
            return {}
        try:
            data = yaml.safe_load(self.path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError, UnicodeDecodeError):
            logger.warning("Unreadable settings file: %s", self.path, exc_info=True)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring non-mapping settings file: %s", self.path)
            return {}
        return data

    def update(self, **values: Any) -> None:
        """Merge *values* into the stored mapping and write it back."""
        data = self.load()
        data.update(values)
        self._write(data)

    def _write(self, data: dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(
                prefix=".settings-", suffix=".yaml", dir=self.path.parent
            )
        except OSError as exc:
            raise ConfigError(f"Cannot write settings to {self.path}: {exc}") from exc
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                yaml.safe_dump(data, fh, default_flow_style=False, sort_keys=True)
            os.replace(tmp, self.path)
        except (OSError, yaml.YAMLError) as exc:
            with contextlib.suppress(OSError):
                os.unlink(tmp)
            raise ConfigError(f"Cannot write settings to {self.path}: {exc}") from exc

    # -- typed accessors ------------------------------------------------------

    def get_target(self) -> TargetProtocol:
        """Return the selected target, repairing invalid stored values."""
        stored = self.load().get(STORAGE_KEY)
        if stored is None:
            return TargetProtocol.default()

        target = TargetProtocol.coerce(stored)
        if target.value != stored:
            logger.info("Resetting invalid protocol %r to %s", stored, target.value)
            try:
                self.update(**{STORAGE_KEY: target.value})
            except ConfigError:
                logger.warning("Could not repair settings file: %s", self.path)
        return target

    def set_target(self, value: str | TargetProtocol) -> TargetProtocol:
        """Persist a new target protocol.

        Raises:
            ConfigError: If *value* is not a supported protocol.
        """
        try:
            target = TargetProtocol(value)
        except ValueError:
            supported = ", ".join(p.value for p in TargetProtocol)
            raise ConfigError(
                f"Unsupported protocol {value!r}; expected one of: {supported}"
            ) from None
        self.update(**{STORAGE_KEY: target.value})
        return target

    @property
    def mcp_instructions_dismissed(self) -> bool:
        return bool(self.load().get(DISMISSED_KEY, False))

    def set_mcp_instructions_dismissed(self, dismissed: bool = True) -> None:
        self.update(**{DISMISSED_KEY: bool(dismissed)})
