"""User settings: the selected target IDE and dismissed-notice flags.

Public API::

    from ideswitch.config import Settings

    settings = Settings.default()
    target = settings.get_target()
"""

from __future__ import annotations

from ideswitch.config.settings import (
    DISMISSED_KEY,
    STORAGE_KEY,
    Settings,
    default_settings_path,
)

__all__ = ["DISMISSED_KEY", "STORAGE_KEY", "Settings", "default_settings_path"]
