"""Tests for sdkforge.config -- XDG paths, atomic writes, settings precedence."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from sdkforge.config import (
    _atomic_write,
    find_project_config,
    get_config_dir,
    get_data_dir,
    global_config_path,
    load_global_config,
    load_project_config,
    resolve_settings,
    save_global_config,
    set_global_setting,
)
from sdkforge.exceptions import ConfigError
from sdkforge.models import GeneratorSettings, GlobalConfig, OutputKind, OutputMode


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _write_json(path: Path, data: Any) -> None:
    """Write a dict as JSON to *path*, creating parent dirs."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


# ---------------------------------------------------------------------------
# XDG path resolution
# ---------------------------------------------------------------------------


class TestXDGPathsLinux:
    """XDG paths on Linux (the default XDG platform)."""

    def test_config_dir_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sdkforge.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        result = get_config_dir()
        assert result == tmp_path / ".config" / "sdkforge"
        assert result.is_dir()

    def test_config_dir_xdg_custom(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        custom = tmp_path / "custom_config"
        monkeypatch.setattr("sdkforge.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(custom))

        assert get_config_dir() == custom / "sdkforge"

    def test_data_dir_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sdkforge.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_DATA_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        result = get_data_dir()
        assert result == tmp_path / ".local" / "share" / "sdkforge"
        assert result.is_dir()


class TestXDGPathsFallback:
    """Non-XDG platforms keep everything under ``~/.sdkforge``."""

    def test_config_dir_fallback(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sdkforge.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
        assert get_config_dir() == tmp_path / ".sdkforge"

    def test_data_dir_fallback(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sdkforge.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
        assert get_data_dir() == tmp_path / ".sdkforge" / "logs"


# ---------------------------------------------------------------------------
# Atomic writes
# ---------------------------------------------------------------------------


class TestAtomicWrite:
    def test_creates_file_with_content(self, tmp_path: Path) -> None:
        target = tmp_path / "test.txt"
        _atomic_write(target, "hello world")
        assert target.read_text(encoding="utf-8") == "hello world"

    def test_overwrites_existing_file(self, tmp_path: Path) -> None:
        target = tmp_path / "test.txt"
        target.write_text("old content", encoding="utf-8")
        _atomic_write(target, "new content")
        assert target.read_text(encoding="utf-8") == "new content"

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b" / "test.txt"
        _atomic_write(target, "deep write")
        assert target.read_text(encoding="utf-8") == "deep write"

    def test_no_temp_files_left_on_error(self, tmp_path: Path) -> None:
        target = tmp_path / "test.txt"
        with patch("sdkforge.config.os.fsync", side_effect=OSError("disk error")):
            with pytest.raises(OSError, match="disk error"):
                _atomic_write(target, "will fail")
        assert list(tmp_path.iterdir()) == []


# ---------------------------------------------------------------------------
# Global config
# ---------------------------------------------------------------------------


class TestGlobalConfig:
    def test_load_returns_defaults_when_missing(self, isolated_config: Path) -> None:
        assert load_global_config() == GlobalConfig()

    def test_save_and_load_roundtrip(self, isolated_config: Path) -> None:
        config = GlobalConfig(settings=GeneratorSettings(client_suffix="v2", namespace="Acme"))
        save_global_config(config)
        assert load_global_config() == config

    def test_path_is_inside_config_dir(self, isolated_config: Path) -> None:
        assert global_config_path() == isolated_config / "config" / "sdkforge" / "config.json"

    def test_load_invalid_json_raises_config_error(self, isolated_config: Path) -> None:
        path = global_config_path()
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid global config"):
            load_global_config()

    def test_load_invalid_schema_raises_config_error(self, isolated_config: Path) -> None:
        _write_json(global_config_path(), {"settings": {"output_mode": "everything"}})
        with pytest.raises(ConfigError):
            load_global_config()


class TestSetGlobalSetting:
    def test_sets_and_persists_string(self, isolated_config: Path) -> None:
        set_global_setting("client_suffix", "multifront")
        assert load_global_config().settings.client_suffix == "multifront"

    def test_coerces_boolean(self, isolated_config: Path) -> None:
        config = set_global_setting("generate_dto_types", "false")
        assert config.settings.generate_dto_types is False

    def test_coerces_enum(self, isolated_config: Path) -> None:
        config = set_global_setting("output_mode", "contracts")
        assert config.settings.output_mode is OutputMode.CONTRACTS

    def test_unknown_key(self, isolated_config: Path) -> None:
        with pytest.raises(ConfigError, match="Unknown setting 'colour'"):
            set_global_setting("colour", "red")

    def test_invalid_value(self, isolated_config: Path) -> None:
        with pytest.raises(ConfigError, match="Invalid value for 'output_kind'"):
            set_global_setting("output_kind", "spreadsheet")
        assert not global_config_path().exists()


# ---------------------------------------------------------------------------
# Project config
# ---------------------------------------------------------------------------


class TestProjectConfig:
    def test_returns_none_when_missing(self, isolated_config: Path) -> None:
        assert find_project_config() is None
        assert load_project_config() is None

    def test_flat_json(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "sdkforge.json", {"client_suffix": "v2"})
        assert load_project_config() == {"client_suffix": "v2"}

    def test_nested_yaml(self, isolated_config: Path) -> None:
        (isolated_config / "sdkforge.yaml").write_text(
            "settings:\n  namespace: Acme.Clients\n  tag_filter: Pets\n", encoding="utf-8"
        )
        assert load_project_config() == {"namespace": "Acme.Clients", "tag_filter": "Pets"}

    def test_json_preferred_over_yaml(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "sdkforge.json", {"namespace": "FromJson"})
        (isolated_config / "sdkforge.yml").write_text("namespace: FromYaml\n", encoding="utf-8")
        assert find_project_config() == isolated_config / "sdkforge.json"

    def test_explicit_directory(self, isolated_config: Path) -> None:
        project = isolated_config / "project"
        _write_json(project / "sdkforge.json", {"client_suffix": "multifront"})
        assert load_project_config(project) == {"client_suffix": "multifront"}

    def test_empty_yaml_is_empty_mapping(self, isolated_config: Path) -> None:
        (isolated_config / "sdkforge.yml").write_text("", encoding="utf-8")
        assert load_project_config() == {}

    def test_invalid_json_raises(self, isolated_config: Path) -> None:
        (isolated_config / "sdkforge.json").write_text("{broken", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid project config"):
            load_project_config()

    def test_non_mapping_raises(self, isolated_config: Path) -> None:
        (isolated_config / "sdkforge.yaml").write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="must be a mapping"):
            load_project_config()


# ---------------------------------------------------------------------------
# Precedence resolution
# ---------------------------------------------------------------------------


class TestResolveSettings:
    def test_defaults(self, isolated_config: Path) -> None:
        assert resolve_settings() == GeneratorSettings()

    def test_global_config_applies(self, isolated_config: Path) -> None:
        save_global_config(GlobalConfig(settings=GeneratorSettings(namespace="Global")))
        assert resolve_settings().namespace == "Global"

    def test_project_overrides_global(self, isolated_config: Path) -> None:
        save_global_config(GlobalConfig(settings=GeneratorSettings(namespace="Global")))
        _write_json(isolated_config / "sdkforge.json", {"namespace": "Project"})
        assert resolve_settings().namespace == "Project"

    def test_env_overrides_project(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _write_json(isolated_config / "sdkforge.json", {"client_suffix": "v2"})
        monkeypatch.setenv("SDKFORGE_CLIENT_SUFFIX", "multifront")
        monkeypatch.setenv("SDKFORGE_OUTPUT_KIND", "script_client")
        settings = resolve_settings()
        assert settings.client_suffix == "multifront"
        assert settings.output_kind is OutputKind.SCRIPT_CLIENT

    def test_cli_overrides_env(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SDKFORGE_TAG_FILTER", "Pets")
        assert resolve_settings(tag_filter="Store").tag_filter == "Store"

    def test_none_cli_values_are_ignored(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SDKFORGE_OUTPUT_MODE", "implementation")
        settings = resolve_settings(output_mode=None, client_suffix=None)
        assert settings.output_mode is OutputMode.IMPLEMENTATION
        assert settings.client_suffix == ""

    def test_invalid_merged_value_raises(self, isolated_config: Path) -> None:
        with pytest.raises(ConfigError, match="Invalid generator settings"):
            resolve_settings(output_mode="everything")
