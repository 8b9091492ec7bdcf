"""Core infrastructure: configuration and logging."""

from shapeguard.core.config import (
    LoggingSettings,
    MatcherSettings,
    ParserSettings,
    ShapeguardSettings,
    load_settings,
    resolve_config,
)
from shapeguard.core.logging import configure_logging

__all__ = [
    "LoggingSettings",
    "MatcherSettings",
    "ParserSettings",
    "ShapeguardSettings",
    "configure_logging",
    "load_settings",
    "resolve_config",
]
