"""Tests for sdkgen.config -- XDG paths, atomic writes, precedence."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from sdkgen.config import (
    _atomic_write,
    get_config_dir,
    get_data_dir,
    global_config_path,
    load_global_config,
    load_project_config,
    resolve_config,
    save_project_config,
)
from sdkgen.exceptions import ConfigError
from sdkgen.models import GeneratorConfig, NestingStrategy


def _write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data))


@pytest.fixture
def xdg(isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setattr("sdkgen.config._is_xdg_platform", lambda: True)
    return isolated_config


# ---------------------------------------------------------------------------
# Directories
# ---------------------------------------------------------------------------


class TestDirectories:
    def test_config_dir_follows_xdg(self, xdg: Path) -> None:
        assert get_config_dir() == xdg / "config" / "sdkgen"
        assert get_config_dir().is_dir()

    def test_data_dir_follows_xdg(self, xdg: Path) -> None:
        assert get_data_dir() == xdg / "data" / "sdkgen"

    def test_fallback_dir_off_xdg(self, isolated_config: Path, monkeypatch) -> None:
        monkeypatch.setattr("sdkgen.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: isolated_config / "home"))
        assert get_config_dir() == isolated_config / "home" / ".sdkgen"


# ---------------------------------------------------------------------------
# Atomic writes
# ---------------------------------------------------------------------------


class TestAtomicWrite:
    def test_writes_content_and_creates_parents(self, tmp_path: Path) -> None:
        target = tmp_path / "nested" / "file.json"
        _atomic_write(target, '{"a": 1}')
        assert target.read_text() == '{"a": 1}'

    def test_leaves_no_temp_files(self, tmp_path: Path) -> None:
        target = tmp_path / "file.json"
        _atomic_write(target, "first")
        _atomic_write(target, "second")
        assert target.read_text() == "second"
        assert [p.name for p in tmp_path.iterdir()] == ["file.json"]


# ---------------------------------------------------------------------------
# Config files
# ---------------------------------------------------------------------------


class TestConfigFiles:
    def test_missing_files_load_as_none(self, xdg: Path) -> None:
        assert load_global_config() is None
        assert load_project_config() is None

    def test_invalid_project_json_raises(self, xdg: Path) -> None:
        (xdg / "sdkgen.json").write_text("{not json")
        with pytest.raises(ConfigError, match="Invalid project config"):
            load_project_config()

    def test_non_object_global_config_raises(self, xdg: Path) -> None:
        _write_json(global_config_path(), ["spec.yaml"])
        with pytest.raises(ConfigError, match="expected a JSON object"):
            load_global_config()

    def test_save_project_config_omits_unset_fields(self, xdg: Path) -> None:
        path = save_project_config(GeneratorConfig(spec="api.yaml", nesting=NestingStrategy.FLAT))
        assert path == xdg / "sdkgen.json"
        assert json.loads(path.read_text()) == {
            "spec": "api.yaml",
            "output_dir": "./sdk",
            "nesting": "flat",
        }


# ---------------------------------------------------------------------------
# Precedence
# ---------------------------------------------------------------------------


class TestResolveConfig:
    def test_defaults(self, xdg: Path) -> None:
        config = resolve_config()
        assert config.spec is None
        assert config.output_dir == "./sdk"
        assert config.nesting is NestingStrategy.NESTED

    def test_project_overrides_global(self, xdg: Path) -> None:
        _write_json(global_config_path(), {"spec": "global.yaml", "output_dir": "out-global"})
        _write_json(xdg / "sdkgen.json", {"spec": "project.yaml"})
        config = resolve_config()
        assert config.spec == "project.yaml"
        assert config.output_dir == "out-global"

    def test_env_overrides_project(self, xdg: Path, monkeypatch) -> None:
        _write_json(xdg / "sdkgen.json", {"spec": "project.yaml", "nesting": "nested"})
        monkeypatch.setenv("SDKGEN_SPEC", "env.yaml")
        monkeypatch.setenv("SDKGEN_NESTING", "flat")
        config = resolve_config()
        assert config.spec == "env.yaml"
        assert config.nesting is NestingStrategy.FLAT

    def test_cli_overrides_env_and_none_is_ignored(self, xdg: Path, monkeypatch) -> None:
        monkeypatch.setenv("SDKGEN_SPEC", "env.yaml")
        monkeypatch.setenv("SDKGEN_VERSION", "9.9.9")
        config = resolve_config(spec="cli.yaml", sdk_version=None)
        assert config.spec == "cli.yaml"
        assert config.sdk_version == "9.9.9"

    def test_unknown_key_raises(self, xdg: Path) -> None:
        _write_json(xdg / "sdkgen.json", {"spec": "a.yaml", "profile": "x"})
        with pytest.raises(ConfigError, match="profile"):
            resolve_config()

    def test_invalid_nesting_raises(self, xdg: Path, monkeypatch) -> None:
        monkeypatch.setenv("SDKGEN_NESTING", "deep")
        with pytest.raises(ConfigError, match="Invalid configuration"):
            resolve_config()
