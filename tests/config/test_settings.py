"""Tests for the YAML settings store."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from ideswitch.config import DISMISSED_KEY, STORAGE_KEY, Settings, default_settings_path
from ideswitch.core.protocols import TargetProtocol
from ideswitch.exceptions import ConfigError, IdeSwitchError


class TestTarget:

    def test_missing_file_gives_default(self, settings: Settings) -> None:
        assert not settings.path.exists()
        assert settings.get_target() is TargetProtocol.ANTIGRAVITY

    def test_set_then_get(self, settings: Settings) -> None:
        assert settings.set_target("cursor") is TargetProtocol.CURSOR
        assert settings.get_target() is TargetProtocol.CURSOR

    def test_value_is_stored_under_protocol_key(self, settings: Settings) -> None:
        settings.set_target(TargetProtocol.WINDSURF)
        data = yaml.safe_load(settings.path.read_text(encoding="utf-8"))
        assert data == {STORAGE_KEY: "windsurf"}

    def test_unknown_value_is_rejected(self, settings: Settings) -> None:
        with pytest.raises(ConfigError, match="Unsupported protocol 'sublime'"):
            settings.set_target("sublime")
        assert not settings.path.exists()

    def test_config_error_is_an_ideswitch_error(self, settings: Settings) -> None:
        with pytest.raises(IdeSwitchError):
            settings.set_target("sublime")

    def test_invalid_stored_value_is_repaired(self, settings_path: Path) -> None:
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text(f"{STORAGE_KEY}: sublime\n", encoding="utf-8")
        settings = Settings(settings_path)

        assert settings.get_target() is TargetProtocol.ANTIGRAVITY
        data = yaml.safe_load(settings_path.read_text(encoding="utf-8"))
        assert data[STORAGE_KEY] == "antigravity"

    def test_other_keys_survive_a_write(self, settings: Settings) -> None:
        settings.set_mcp_instructions_dismissed()
        settings.set_target("vscode")
        data = settings.load()
        assert data == {STORAGE_KEY: "vscode", DISMISSED_KEY: True}

    def test_change_is_visible_to_another_instance(self, settings_path: Path) -> None:
        first = Settings(settings_path)
        second = Settings(settings_path)
        first.set_target("vscode-insiders")
        assert second.get_target() is TargetProtocol.VSCODE_INSIDERS


class TestDismissedFlag:

    def test_defaults_to_false(self, settings: Settings) -> None:
        assert settings.mcp_instructions_dismissed is False

    def test_dismiss_and_reset(self, settings: Settings) -> None:
        settings.set_mcp_instructions_dismissed()
        assert settings.mcp_instructions_dismissed is True
        settings.set_mcp_instructions_dismissed(False)
        assert settings.mcp_instructions_dismissed is False


class TestCorruptFiles:

    @pytest.mark.parametrize("content", [
        "selectedProtocol: [unterminated\n",
        "- just\n- a list\n",
        "plain string\n",
    ])
    def test_unusable_content_reads_as_empty(self, settings_path: Path, content: str) -> None:
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text(content, encoding="utf-8")
        settings = Settings(settings_path)
        assert settings.load() == {}
        assert settings.get_target() is TargetProtocol.ANTIGRAVITY

    def test_empty_file(self, settings_path: Path) -> None:
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text("", encoding="utf-8")
        assert Settings(settings_path).load() == {}

    def test_unwritable_location_raises_config_error(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        settings = Settings(blocker / "settings.yaml")
        with pytest.raises(ConfigError, match="Cannot write settings"):
            settings.set_target("cursor")

    def test_failed_replace_leaves_no_temp_file(self, settings: Settings) -> None:
        with patch("ideswitch.config.settings.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(ConfigError, match="disk full"):
                settings.set_target("cursor")
        assert list(settings.path.parent.iterdir()) == []

    def test_failed_dump_leaves_previous_file(self, settings: Settings) -> None:
        settings.set_target("windsurf")
        with patch(
            "ideswitch.config.settings.yaml.safe_dump",
            side_effect=yaml.YAMLError("cannot represent"),
        ):
            with pytest.raises(ConfigError):
                settings.set_target("cursor")
        assert list(settings.path.parent.iterdir()) == [settings.path]
        assert settings.get_target() is TargetProtocol.WINDSURF


class TestDefaultPath:

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("IDESWITCH_CONFIG", str(tmp_path / "custom.yaml"))
        assert default_settings_path() == tmp_path / "custom.yaml"

    def test_home_location(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("IDESWITCH_CONFIG", raising=False)
        path = default_settings_path()
        assert path.parts[-3:] == (".config", "ideswitch", "settings.yaml")
