"""Tests for speccheck.config -- XDG paths, atomic writes, spec precedence."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from speccheck.config import (
    DEFAULT_SPEC_LOCATION,
    _atomic_write,
    get_config_dir,
    get_data_dir,
    load_global_config,
    load_project_config,
    resolve_config,
    save_global_config,
)
from speccheck.exceptions import ConfigError
from speccheck.models import GlobalConfig, OutputConfig, ValidationConfig


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
        monkeypatch.setattr("speccheck.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        assert get_config_dir() == tmp_path / ".config" / "speccheck"
        assert get_config_dir().is_dir()

    def test_config_dir_xdg_custom(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("speccheck.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))
        assert get_config_dir() == tmp_path / "cfg" / "speccheck"

    def test_data_dir_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("speccheck.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_DATA_HOME", raising=False)
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        assert get_data_dir() == tmp_path / ".local" / "share" / "speccheck"


class TestXDGPathsFallback:
    """Non-XDG platforms keep everything under ~/.speccheck."""

    def test_config_dir_fallback(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("speccheck.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        assert get_config_dir() == tmp_path / ".speccheck"

    def test_data_dir_fallback(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("speccheck.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        assert get_data_dir() == tmp_path / ".speccheck" / "logs"


# ---------------------------------------------------------------------------
# Atomic writes
# ---------------------------------------------------------------------------


class TestAtomicWrite:
    def test_creates_file_with_parents(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b" / "config.json"
        _atomic_write(target, "{}")
        assert target.read_text(encoding="utf-8") == "{}"

    def test_overwrites_existing_file(self, tmp_path: Path) -> None:
        target = tmp_path / "config.json"
        target.write_text("old", encoding="utf-8")
        _atomic_write(target, "new")
        assert target.read_text(encoding="utf-8") == "new"
        assert list(tmp_path.iterdir()) == [target]

    def test_no_temp_files_left_on_error(self, tmp_path: Path) -> None:
        target = tmp_path / "config.json"
        with patch("speccheck.config.os.fsync", side_effect=OSError("disk error")):
            with pytest.raises(OSError, match="disk error"):
                _atomic_write(target, "will fail")
        assert list(tmp_path.iterdir()) == []


# ---------------------------------------------------------------------------
# Global config
# ---------------------------------------------------------------------------


class TestGlobalConfig:
    def test_defaults_when_missing(self, isolated_config: Path) -> None:
        cfg = load_global_config()
        assert cfg == GlobalConfig()
        assert cfg.default_spec is None
        assert cfg.validation.format_checks is True
        assert cfg.output.format == "auto"

    def test_save_and_load(self, isolated_config: Path) -> None:
        original = GlobalConfig(
            default_spec="api/openapi.yaml",
            validation=ValidationConfig(format_checks=False),
            output=OutputConfig(format="json"),
        )
        save_global_config(original)
        assert load_global_config() == original

    def test_invalid_json(self, isolated_config: Path) -> None:
        path = isolated_config / "config" / "speccheck" / "config.json"
        path.parent.mkdir(parents=True)
        path.write_text("{invalid json!!!", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid global config"):
            load_global_config()

    def test_invalid_shape(self, isolated_config: Path) -> None:
        _write_json(
            isolated_config / "config" / "speccheck" / "config.json",
            {"validation": "not-a-dict"},
        )
        with pytest.raises(ConfigError, match="Invalid global config"):
            load_global_config()


# ---------------------------------------------------------------------------
# Project config
# ---------------------------------------------------------------------------


class TestProjectConfig:
    def test_none_when_missing(self, isolated_config: Path) -> None:
        assert load_project_config() is None

    def test_loads_object(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "speccheck.json", {"default_spec": "x.json"})
        assert load_project_config() == {"default_spec": "x.json"}

    def test_invalid_json(self, isolated_config: Path) -> None:
        (isolated_config / "speccheck.json").write_text("nope{", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid project config"):
            load_project_config()

    def test_non_object(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "speccheck.json", ["x.json"])
        with pytest.raises(ConfigError, match="expected a JSON object"):
            load_project_config()


# ---------------------------------------------------------------------------
# Precedence
# ---------------------------------------------------------------------------


class TestResolveConfig:
    def test_builtin_default(self, isolated_config: Path) -> None:
        _, location = resolve_config()
        assert location == DEFAULT_SPEC_LOCATION

    def test_global_default_spec(self, isolated_config: Path) -> None:
        save_global_config(GlobalConfig(default_spec="global.json"))
        assert resolve_config()[1] == "global.json"

    def test_project_overrides_global(self, isolated_config: Path) -> None:
        save_global_config(GlobalConfig(default_spec="global.json"))
        _write_json(isolated_config / "speccheck.json", {"default_spec": "project.json"})
        assert resolve_config()[1] == "project.json"

    def test_env_overrides_project(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _write_json(isolated_config / "speccheck.json", {"default_spec": "project.json"})
        monkeypatch.setenv("SPECCHECK_SPEC", "env.json")
        assert resolve_config()[1] == "env.json"

    def test_cli_overrides_env(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SPECCHECK_SPEC", "env.json")
        assert resolve_config(cli_spec="cli.json")[1] == "cli.json"

    def test_returns_global_config(self, isolated_config: Path) -> None:
        save_global_config(GlobalConfig(validation=ValidationConfig(format_checks=False)))
        config, _ = resolve_config()
        assert config.validation.format_checks is False
