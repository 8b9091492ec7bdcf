# src/shapeguard/contracts/results.py
"""Outcomes of guard checks and schema-text validation.

These types answer: "Did the value conform, and if not, why?"

- CheckResult is the tagged form of a guard verdict. On success it carries
  the (narrowed) value, so callers get a typed value without relying on
  flow-sensitive narrowing of a bare bool.
- MatchResult is what the schema-text path returns: a validity flag plus the
  ordered, path-qualified error messages collected in one pass.
"""

from dataclasses import dataclass, field
from typing import Any, Generic, Literal, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class CheckResult(Generic[T]):
    """Result of running a guard through ``Guard.check``.

    Use the factory methods to create instances.
    """

    status: Literal["ok", "rejected"]
    value: T | None
    guard_name: str
    error: str | None = None

    @classmethod
    def ok(cls, value: T, guard_name: str) -> "CheckResult[T]":
        """Create an accepted result carrying the value."""
        return cls(status="ok", value=value, guard_name=guard_name)

    @classmethod
    def rejected(cls, value: object, guard_name: str) -> "CheckResult[T]":
        """Create a rejected result with a readable reason."""
        return cls(
            status="rejected",
            value=None,
            guard_name=guard_name,
            error=f"value {value!r} was rejected by guard '{guard_name}'",
        )

    @property
    def is_ok(self) -> bool:
        """True when the guard accepted the value."""
        return self.status == "ok"


@dataclass
class MatchResult:
    """Result of validating a value against a parsed schema text.

    errors is append-only during a run and produced fresh for every call.
    duration_ms is filled in by SchemaTextValidator, not by the matcher.
    """

    valid: bool
    errors: list[str] = field(default_factory=list)
    duration_ms: float | None = field(default=None, repr=False)

    @classmethod
    def from_errors(cls, errors: list[str]) -> "MatchResult":
        """Create a result whose validity follows from the error list."""
        return cls(valid=not errors, errors=errors)

    @classmethod
    def parse_failure(cls, message: str) -> "MatchResult":
        """Create the single-error result reported when the schema cannot be parsed."""
        return cls(valid=False, errors=[f"Schema parsing error: {message}"])

    @classmethod
    def match_failure(cls, message: str) -> "MatchResult":
        """Create the single-error result reported when matching itself fails."""
        return cls(valid=False, errors=[f"Validation error: {message}"])

    def to_dict(self) -> dict[str, Any]:
        """JSON-safe form: ``{"valid": ..., "errors": [...]}``."""
        return {"valid": self.valid, "errors": list(self.errors)}
