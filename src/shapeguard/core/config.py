# src/shapeguard/core/config.py
"""
Configuration schema and loading for shapeguard.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from shapeguard.contracts import UnknownTypePolicy


class ParserSettings(BaseModel):
    """Schema-text parser configuration.

    Example YAML:
        parser:
          strict_syntax: true     # raise on malformed schema text
          unknown_types: reject   # unknown type names are parse errors
          cache_size: 256         # parsed schemas kept in memory (0 disables)
    """

    model_config = {"frozen": True}

    strict_syntax: bool = Field(
        default=False,
        description="Raise SchemaSyntaxError on malformed schema text instead of recovering",
    )
    unknown_types: UnknownTypePolicy = Field(
        default=UnknownTypePolicy.ACCEPT,
        description="Treatment of type names that are neither built in nor registered plugins",
    )
    cache_size: int = Field(
        default=128,
        ge=0,
        description="Maximum number of parsed schema texts to memoize (0 disables caching)",
    )


class MatcherSettings(BaseModel):
    """Structural matcher configuration."""

    model_config = {"frozen": True}

    coerce_dates: bool = Field(
        default=True,
        description="Accept ISO 8601 timestamp strings where a schema declares Date",
    )


class LoggingSettings(BaseModel):
    """Logging configuration for structlog."""

    model_config = {"frozen": True}

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Minimum log level emitted",
    )
    format: Literal["console", "json"] = Field(
        default="console",
        description="Renderer: human-readable console output or JSON lines",
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        """Accept level names in any case."""
        if isinstance(v, str):
            return v.upper()
        return v


class ShapeguardSettings(BaseModel):
    """Top-level shapeguard configuration.

    Every section is optional; an empty settings file (or none at all)
    gives the defaults.
    """

    model_config = {"frozen": True}

    parser: ParserSettings = Field(
        default_factory=ParserSettings,
        description="Schema-text parser configuration",
    )
    matcher: MatcherSettings = Field(
        default_factory=MatcherSettings,
        description="Structural matcher configuration",
    )
    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration",
    )


# Dynaconf bookkeeping keys that are not settings
_INTERNAL_KEYS = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}


def _lower_keys(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(k).lower(): _lower_keys(v) for k, v in value.items()}
    return value


def load_settings(config_path: Path | None = None) -> ShapeguardSettings:
    """Load settings from YAML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (SHAPEGUARD_*) - highest priority
    2. Config file (settings.yaml), if given
    3. Defaults from Pydantic schema - lowest priority

    Environment variable format: SHAPEGUARD_PARSER__STRICT_SYNTAX for nested keys.

    Args:
        config_path: Path to YAML configuration file, or None to read only
                     the environment

    Returns:
        Validated ShapeguardSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Explicit check for file existence (Dynaconf silently accepts missing files)
    if config_path is not None and not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="SHAPEGUARD",
        settings_files=[str(config_path)] if config_path is not None else [],
        environments=False,  # No [default]/[production] sections
        load_dotenv=False,  # Don't auto-load .env
        merge_enabled=True,  # Deep merge nested dicts
    )

    # Dynaconf returns uppercase keys; Pydantic fields are lowercase
    raw_config = {
        k.lower(): _lower_keys(v)
        for k, v in dynaconf_settings.as_dict().items()
        if k not in _INTERNAL_KEYS
    }
    return ShapeguardSettings(**raw_config)


def resolve_config(settings: ShapeguardSettings) -> dict[str, Any]:
    """Convert validated settings to a JSON-safe dict.

    Includes every setting, explicit and defaulted; the CLI prints this in
    verbose mode so a run's effective configuration is visible.
    """
    return settings.model_dump(mode="json")
