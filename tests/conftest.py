"""Shared fixtures for ideswitch tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from ideswitch.config import Settings
from tests.helpers import FakeRegistry


@pytest.fixture
def settings_path(tmp_path: Path) -> Path:
    """Location of a not-yet-created settings file."""
    return tmp_path / "ideswitch" / "settings.yaml"


@pytest.fixture
def settings(settings_path: Path) -> Settings:
    """Settings store backed by a temporary file."""
    return Settings(settings_path)


@pytest.fixture
def fake_registry() -> FakeRegistry:
    return FakeRegistry()
