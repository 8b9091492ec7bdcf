"""structlog configuration.

Modules log through ``structlog.get_logger(__name__)``; nothing is emitted
through a particular renderer until configure_logging() is called (the CLI
does this at startup). Log output goes to stderr so it never mixes with
validation results printed on stdout.
"""

import logging
import sys
from typing import Any

import structlog

from shapeguard.core.config import LoggingSettings

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def configure_logging(settings: LoggingSettings | None = None) -> None:
    """Configure structlog from LoggingSettings.

    Args:
        settings: Level and renderer; defaults to LoggingSettings()
    """
    settings = settings or LoggingSettings()

    renderer: Any
    if settings.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_LEVELS[settings.level]),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        # Module-level loggers must pick up later reconfiguration
        cache_logger_on_first_use=False,
    )

