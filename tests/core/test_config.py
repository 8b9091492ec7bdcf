# tests/core/test_config.py
"""Tests for configuration schema and loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError


class TestParserSettings:
    """Parser configuration validation."""

    def test_defaults(self) -> None:
        from shapeguard.contracts import UnknownTypePolicy
        from shapeguard.core.config import ParserSettings

        settings = ParserSettings()
        assert settings.strict_syntax is False
        assert settings.unknown_types == UnknownTypePolicy.ACCEPT
        assert settings.cache_size == 128

    def test_unknown_types_from_string(self) -> None:
        from shapeguard.contracts import UnknownTypePolicy
        from shapeguard.core.config import ParserSettings

        assert ParserSettings(unknown_types="reject").unknown_types == UnknownTypePolicy.REJECT

    def test_invalid_policy_rejected(self) -> None:
        from shapeguard.core.config import ParserSettings

        with pytest.raises(ValidationError):
            ParserSettings(unknown_types="maybe")

    def test_cache_size_must_not_be_negative(self) -> None:
        from shapeguard.core.config import ParserSettings

        with pytest.raises(ValidationError):
            ParserSettings(cache_size=-1)

    def test_settings_are_frozen(self) -> None:
        from shapeguard.core.config import ParserSettings

        settings = ParserSettings()
        with pytest.raises(ValidationError):
            settings.strict_syntax = True  # type: ignore[misc]


class TestLoggingSettings:
    """Logging configuration validation."""

    def test_defaults(self) -> None:
        from shapeguard.core.config import LoggingSettings

        settings = LoggingSettings()
        assert settings.level == "WARNING"
        assert settings.format == "console"

    def test_level_is_case_insensitive(self) -> None:
        from shapeguard.core.config import LoggingSettings

        assert LoggingSettings(level="debug").level == "DEBUG"

    def test_unknown_level_rejected(self) -> None:
        from shapeguard.core.config import LoggingSettings

        with pytest.raises(ValidationError):
            LoggingSettings(level="LOUD")

    def test_unknown_format_rejected(self) -> None:
        from shapeguard.core.config import LoggingSettings

        with pytest.raises(ValidationError):
            LoggingSettings(format="xml")


class TestShapeguardSettings:
    """Top-level settings validation."""

    def test_all_sections_default(self) -> None:
        from shapeguard.core.config import ShapeguardSettings

        settings = ShapeguardSettings()
        assert settings.parser.cache_size == 128
        assert settings.matcher.coerce_dates is True
        assert settings.logging.level == "WARNING"

    def test_nested_config(self) -> None:
        from shapeguard.core.config import ShapeguardSettings

        settings = ShapeguardSettings(
            parser={"strict_syntax": True},
            matcher={"coerce_dates": False},
        )
        assert settings.parser.strict_syntax is True
        assert settings.matcher.coerce_dates is False

    def test_resolve_config_is_json_safe(self) -> None:
        import json

        from shapeguard.core.config import ShapeguardSettings, resolve_config

        resolved = resolve_config(ShapeguardSettings(parser={"unknown_types": "reject"}))
        assert resolved["parser"]["unknown_types"] == "reject"
        json.dumps(resolved)


class TestLoadSettings:
    """Loading from YAML and environment."""

    def test_load_from_yaml_file(self, tmp_path: Path) -> None:
        from shapeguard.core.config import load_settings

        config_file = tmp_path / "settings.yaml"
        config_file.write_text("""
parser:
  strict_syntax: true
  cache_size: 16
logging:
  level: info
""")
        settings = load_settings(config_file)
        assert settings.parser.strict_syntax is True
        assert settings.parser.cache_size == 16
        assert settings.logging.level == "INFO"
        assert settings.matcher.coerce_dates is True  # default

    def test_load_with_env_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        from shapeguard.core.config import load_settings

        config_file = tmp_path / "settings.yaml"
        config_file.write_text("""
parser:
  cache_size: 16
""")
        # Environment variable should override YAML
        monkeypatch.setenv("SHAPEGUARD_PARSER__CACHE_SIZE", "64")

        settings = load_settings(config_file)
        assert settings.parser.cache_size == 64

    def test_load_without_file_uses_defaults(self) -> None:
        from shapeguard.core.config import ShapeguardSettings, load_settings

        assert load_settings(None) == ShapeguardSettings()

    def test_load_without_file_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from shapeguard.core.config import load_settings

        monkeypatch.setenv("SHAPEGUARD_MATCHER__COERCE_DATES", "false")

        settings = load_settings(None)
        assert settings.matcher.coerce_dates is False

    def test_load_validates_schema(self, tmp_path: Path) -> None:
        from shapeguard.core.config import load_settings

        config_file = tmp_path / "settings.yaml"
        config_file.write_text("""
parser:
  cache_size: -5
""")
        with pytest.raises(ValidationError):
            load_settings(config_file)

    def test_load_missing_file_raises_file_not_found(self, tmp_path: Path) -> None:
        from shapeguard.core.config import load_settings

        missing_file = tmp_path / "nonexistent.yaml"
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_settings(missing_file)
