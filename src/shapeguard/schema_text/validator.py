# src/shapeguard/schema_text/validator.py
"""Schema-text validation entry point.

validate_text() is the one-call form: parse schema text, match a value
against it, report ``MatchResult(valid, errors)``. SchemaTextValidator is
the reusable form; it memoizes parsed schemas so validating many values
against the same text parses it once.

    result = validate_text("{ id: number; tags: string[]; }", {"id": 1, "tags": ["a", 2]})
    result.valid   # False
    result.errors  # ["Array item at tags[1] should be a string (found number)"]

Nothing is raised for bad input. Schema text that cannot be parsed gives a
single error starting with "Schema parsing error: ", and a value too deeply
nested to walk gives a single "Validation error: " entry.
"""

import time
from functools import lru_cache
from typing import TYPE_CHECKING, Any

import structlog

from shapeguard.contracts import MatchResult, TypeDefinition, UnknownTypePolicy
from shapeguard.core.config import ShapeguardSettings
from shapeguard.errors import SchemaSyntaxError
from shapeguard.schema_text.matcher import StructuralMatcher
from shapeguard.schema_text.parser import SchemaParser

if TYPE_CHECKING:
    from shapeguard.plugins.registry import PluginRegistry

logger = structlog.get_logger(__name__)


class SchemaTextValidator:
    """Parses schema text (with caching) and matches values against it.

    Thread-safe for concurrent ``validate`` calls once constructed; the
    parse cache is a functools.lru_cache.

    Example:
        validator = SchemaTextValidator(settings, registry=registry)
        for record in records:
            result = validator.validate(schema_text, record)
    """

    def __init__(
        self,
        settings: ShapeguardSettings | None = None,
        registry: "PluginRegistry | None" = None,
    ) -> None:
        """Initialize validator.

        Args:
            settings: Parser/matcher settings; defaults to ShapeguardSettings()
            registry: Plugin registry used to resolve non-built-in type names
        """
        self._settings = settings or ShapeguardSettings()
        self._registry = registry
        self._matcher = StructuralMatcher(
            registry=registry,
            unknown_types=self._settings.parser.unknown_types,
            coerce_dates=self._settings.matcher.coerce_dates,
        )
        self._parse_cached = lru_cache(maxsize=self._settings.parser.cache_size)(self._parse_uncached)

    @property
    def settings(self) -> ShapeguardSettings:
        return self._settings

    def parse(self, schema_text: str) -> TypeDefinition:
        """Parse schema text, reusing a cached result when available.

        The returned definition may be shared with other callers; treat it
        as read-only.

        Raises:
            SchemaSyntaxError: If the text cannot be parsed under the
                               configured settings
        """
        return self._parse_cached(schema_text, self._known_type_names())

    def validate(self, schema_text: str, value: Any) -> MatchResult:
        """Validate value against schema text.

        Returns:
            MatchResult with duration_ms set. A schema that fails to parse
            gives a single "Schema parsing error: ..." entry.
        """
        start = time.perf_counter()
        try:
            definition = self.parse(schema_text)
        except (SchemaSyntaxError, RecursionError) as e:
            message = str(e) or type(e).__name__
            logger.info("Schema parse failed", error=message)
            result = MatchResult.parse_failure(message)
        else:
            try:
                result = self._matcher.match(value, definition)
            except RecursionError as e:
                logger.info("Value too deeply nested to match", error=str(e))
                result = MatchResult.match_failure(str(e) or type(e).__name__)

        result.duration_ms = (time.perf_counter() - start) * 1000
        logger.debug(
            "Schema text validated",
            valid=result.valid,
            errors=len(result.errors),
            duration_ms=result.duration_ms,
        )
        return result

    def cache_info(self) -> Any:
        """functools cache statistics for the parse cache."""
        return self._parse_cached.cache_info()

    def _known_type_names(self) -> tuple[str, ...]:
        # Plugin names only matter to the parser when unknown names are rejected
        if self._settings.parser.unknown_types != UnknownTypePolicy.REJECT or self._registry is None:
            return ()
        return tuple(sorted(self._registry.names()))

    def _parse_uncached(self, schema_text: str, known_types: tuple[str, ...]) -> TypeDefinition:
        parser = SchemaParser(
            strict=self._settings.parser.strict_syntax,
            unknown_types=self._settings.parser.unknown_types,
            known_types=known_types,
        )
        return parser.parse(schema_text)


def validate_text(
    schema_text: str,
    value: Any,
    *,
    settings: ShapeguardSettings | None = None,
    registry: "PluginRegistry | None" = None,
) -> MatchResult:
    """Validate value against schema text with a one-off SchemaTextValidator."""
    return SchemaTextValidator(settings, registry=registry).validate(schema_text, value)
