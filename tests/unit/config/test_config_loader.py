"""Tests for configuration loader module."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from orchid_diagnostics.config import (
    AppSettings,
    ConfigError,
    ConfigFileNotFoundError,
    ConfigValidationError,
    DiagnosticsSettings,
    PlaceholderResolutionError,
    deep_merge,
    load_config,
    validate_settings,
)

FIXTURES_DIR = Path(__file__).resolve().parents[2] / "fixtures" / "config"


class TestDeepMerge:
    """Tests for deep_merge function."""

    def test_nested_merge(self) -> None:
        base = {"a": {"x": 1, "y": 2}, "b": 3}
        override = {"a": {"y": 10, "z": 20}}
        assert deep_merge(base, override) == {"a": {"x": 1, "y": 10, "z": 20}, "b": 3}

    def test_lists_are_replaced(self) -> None:
        base = {"checks": {"Runtime": [["A"], ["B"]]}}
        override = {"checks": {"Runtime": [["C"]]}}
        assert deep_merge(base, override) == {"checks": {"Runtime": [["C"]]}}

    def test_does_not_mutate_original(self) -> None:
        base = {"a": {"x": 1}}
        deep_merge(base, {"a": {"y": 2}})
        assert base == {"a": {"x": 1}}


class TestLoadConfig:
    """Tests for load_config function."""

    def test_load_base_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("TEST_MIN_FREE_BYTES", raising=False)
        settings = load_config(config_dir=FIXTURES_DIR, env="nonexistent")

        assert settings.service.name == "test-service"
        assert settings.logging.level == "INFO"
        assert settings.logging.format == "text"
        assert settings.metrics.enabled is False
        assert settings.diagnostics.break_on_failure is False
        assert list(settings.diagnostics.checks) == ["System", "Runtime"]
        assert settings.diagnostics.checks["System"]["disk"] == ["DiskFree", "0", "/"]

    def test_environment_overlay(self) -> None:
        settings = load_config(config_dir=FIXTURES_DIR, env="testing")

        assert settings.logging.level == "DEBUG"
        assert settings.logging.format == "text"
        assert settings.metrics.enabled is True
        assert settings.metrics.prefix == "testing_diagnostics"
        assert settings.diagnostics.break_on_failure is True
        assert settings.diagnostics.checks["Runtime"] == [["ModuleImportable", "pydantic"]]
        assert "System" in settings.diagnostics.checks

    def test_env_defaults_to_environment_variable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ORCHID_ENV", "testing")
        settings = load_config(config_dir=FIXTURES_DIR)
        assert settings.logging.level == "DEBUG"

    def test_placeholder_with_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TEST_MIN_FREE_BYTES", "1024")
        settings = load_config(config_dir=FIXTURES_DIR, env="nonexistent")
        assert settings.diagnostics.checks["System"]["disk"][1] == "1024"

    def test_missing_placeholder_is_strict_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("TEST_SERVICE_NAME", raising=False)
        with pytest.raises(PlaceholderResolutionError, match="service.name"):
            load_config(config_dir=FIXTURES_DIR, env="placeholders")

    def test_non_strict_placeholders(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("TEST_SERVICE_NAME", raising=False)
        settings = load_config(
            config_dir=FIXTURES_DIR,
            env="placeholders",
            strict_placeholders=False,
        )
        assert settings.service.name == "${TEST_SERVICE_NAME}"

    def test_invalid_values(self) -> None:
        with pytest.raises(ConfigValidationError, match="logging -> level"):
            load_config(config_dir=FIXTURES_DIR, env="invalid")

    def test_missing_base_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigFileNotFoundError) as exc_info:
            load_config(config_dir=tmp_path)
        assert exc_info.value.path.endswith("appsettings.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        (tmp_path / "appsettings.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_config(config_dir=tmp_path)

    def test_json_must_be_an_object(self, tmp_path: Path) -> None:
        (tmp_path / "appsettings.json").write_text("[]", encoding="utf-8")
        with pytest.raises(ConfigError, match="JSON object"):
            load_config(config_dir=tmp_path)


class TestSettingsModels:
    def test_defaults(self) -> None:
        settings = AppSettings()

        assert settings.service.name == "orchid-diagnostics"
        assert settings.logging.level == "WARNING"
        assert settings.metrics.textfile is None
        assert settings.diagnostics.checks == {}

    def test_settings_are_frozen(self) -> None:
        settings = AppSettings()
        with pytest.raises(ValidationError):
            settings.service.name = "changed"  # type: ignore[misc]

    def test_empty_group_name_is_rejected(self) -> None:
        with pytest.raises(ValidationError, match="group names"):
            DiagnosticsSettings(checks={" ": ["DiskFree"]})

    def test_group_must_be_mapping_or_list(self) -> None:
        with pytest.raises(ConfigValidationError, match="diagnostics -> checks"):
            validate_settings({"diagnostics": {"checks": {"System": "DiskFree"}}})
