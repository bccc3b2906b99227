"""Unit tests for icsnorm.core.config_manager."""

import os
from pathlib import Path
from types import SimpleNamespace

import pytest

from icsnorm.core.config_manager import (
    DEFAULT_JSON_INDENT,
    ConfigManager,
    NormalizerSettings,
    get_config_value,
    parse_env_file,
)

pytestmark = pytest.mark.unit


class TestParseEnvFile:
    """Tests for parse_env_file."""

    def test_parse_env_file_handles_comments_quotes_and_whitespace(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text(
            "# comment\n"
            "\n"
            "ICSNORM_LOG_LEVEL = WARNING\n"
            'QUOTED="double"\n'
            "SINGLE='single'\n"
            "NO_EQUALS_LINE\n"
            "URL=https://example.com/a=b\n"
            "export EXPORTED=1\n"
        )

        parsed = parse_env_file(env_file)

        assert parsed == {
            "ICSNORM_LOG_LEVEL": "WARNING",
            "QUOTED": "double",
            "SINGLE": "single",
            "URL": "https://example.com/a=b",
            "EXPORTED": "1",
        }

    def test_parse_env_file_when_missing_then_empty(self, tmp_path):
        assert parse_env_file(tmp_path / "missing.env") == {}


class TestConfigManager:
    """Tests for ConfigManager."""

    def test_build_config_from_env_defaults(self):
        config = ConfigManager().build_config_from_env()

        assert config == {"log_level": "INFO", "debug": False, "json_indent": DEFAULT_JSON_INDENT}

    def test_build_config_from_env_reads_icsnorm_variables(self, monkeypatch):
        monkeypatch.setenv("ICSNORM_LOG_LEVEL", "debug")
        monkeypatch.setenv("ICSNORM_DEBUG", "yes")
        monkeypatch.setenv("ICSNORM_JSON_INDENT", "0")

        config = ConfigManager().build_config_from_env()

        assert config == {"log_level": "DEBUG", "debug": True, "json_indent": 0}

    def test_build_config_from_env_ignores_invalid_values(self, monkeypatch, caplog):
        monkeypatch.setenv("ICSNORM_LOG_LEVEL", "LOUD")
        monkeypatch.setenv("ICSNORM_JSON_INDENT", "wide")

        config = ConfigManager().build_config_from_env()

        assert config["log_level"] == "INFO"
        assert config["json_indent"] == DEFAULT_JSON_INDENT
        assert "ICSNORM_LOG_LEVEL" in caplog.text
        assert "ICSNORM_JSON_INDENT" in caplog.text

    def test_load_env_file_does_not_override_environment(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("ICSNORM_LOG_LEVEL=ERROR\nICSNORM_JSON_INDENT=4\n")
        monkeypatch.setenv("ICSNORM_LOG_LEVEL", "WARNING")

        loaded = ConfigManager(env_file_path=env_file).load_env_file()

        assert loaded == ["ICSNORM_JSON_INDENT"]
        assert os.environ["ICSNORM_LOG_LEVEL"] == "WARNING"
        assert os.environ["ICSNORM_JSON_INDENT"] == "4"

    def test_load_env_file_when_missing_then_nothing_loaded(self):
        manager = ConfigManager(env_file_path=Path("/nonexistent/.env"))

        assert manager.load_env_file() == []

    def test_load_full_config_combines_file_and_environment(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("ICSNORM_DEBUG=true\nICSNORM_JSON_INDENT=4\n")
        monkeypatch.setenv("ICSNORM_JSON_INDENT", "1")

        config = ConfigManager(env_file_path=env_file).load_full_config()

        assert config["debug"] is True
        assert config["json_indent"] == 1


class TestGetConfigValue:
    """Tests for get_config_value."""

    def test_get_config_value_from_dict(self):
        assert get_config_value({"json_indent": 4}, "json_indent") == 4

    def test_get_config_value_from_object(self):
        assert get_config_value(SimpleNamespace(debug=True), "debug") is True

    def test_get_config_value_with_default(self):
        assert get_config_value({}, "missing", "default") == "default"
        assert get_config_value(None, "missing", "default") == "default"


class TestNormalizerSettings:
    """Tests for settings validation."""

    def test_load_settings_returns_model(self, monkeypatch):
        monkeypatch.setenv("ICSNORM_JSON_INDENT", "4")

        settings = ConfigManager().load_settings()

        assert isinstance(settings, NormalizerSettings)
        assert settings.json_indent == 4
        assert get_config_value(settings, "json_indent") == 4

    def test_load_settings_when_negative_indent_then_default(self, monkeypatch):
        monkeypatch.setenv("ICSNORM_JSON_INDENT", "-3")

        assert ConfigManager().load_settings().json_indent == DEFAULT_JSON_INDENT

    def test_load_settings_when_debug_not_boolean_then_default(self, monkeypatch):
        monkeypatch.setenv("ICSNORM_DEBUG", "sometimes")

        assert ConfigManager().load_settings().debug is False
