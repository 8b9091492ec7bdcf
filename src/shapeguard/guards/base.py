# src/shapeguard/guards/base.py
"""The Guard callable.

A guard is any function ``value -> bool``. Guards built by shapeguard are
Guard instances, which add three things on top of a plain predicate:

- Fail-closed evaluation: an exception raised while checking a value (a
  custom predicate that blows up, a child guard that misbehaves) becomes a
  False verdict. Validation failures are data, not control flow.
- Static narrowing: ``__call__`` returns ``TypeGuard[T]``, so
  ``if guard(value):`` narrows ``value`` for type checkers.
- Result forms for code that prefers values over booleans:
  ``check()`` returns a CheckResult carrying the value, ``expect()`` returns
  the value or raises GuardError.

Guards hold no mutable state. Composite guards keep references to their
children for their whole lifetime and never modify them.
"""

from collections.abc import Callable
from typing import Any, Generic, TypeGuard, TypeVar

import structlog

from shapeguard.contracts import CheckResult
from shapeguard.errors import GuardError

T = TypeVar("T")

Predicate = Callable[[Any], object]

logger = structlog.get_logger(__name__)


class Guard(Generic[T]):
    """Immutable, fail-closed type guard.

    Example:
        is_port = Guard(lambda v: isinstance(v, int) and 0 < v < 65536, name="port")
        is_port(8080)        # True
        is_port.check("x")   # CheckResult(status="rejected", ...)
    """

    __slots__ = ("_predicate", "_name")

    def __init__(self, predicate: Predicate, name: str = "custom") -> None:
        object.__setattr__(self, "_predicate", predicate)
        object.__setattr__(self, "_name", name)

    def __setattr__(self, key: str, value: object) -> None:
        raise AttributeError(f"Guard '{self._name}' is immutable")

    @property
    def name(self) -> str:
        """Name used in logs, reprs and CheckResult messages."""
        return self._name

    def __call__(self, value: object) -> TypeGuard[T]:
        try:
            return bool(self._predicate(value))
        except Exception as e:
            # Verdicts never raise: an error inside a predicate is a rejection
            logger.debug(
                "Guard raised during evaluation",
                guard=self._name,
                error_type=type(e).__name__,
                error=str(e),
            )
            return False

    def check(self, value: object) -> CheckResult[T]:
        """Run the guard and return a tagged result instead of a bool."""
        if self(value):
            return CheckResult.ok(value, self._name)
        return CheckResult.rejected(value, self._name)

    def expect(self, value: object) -> T:
        """Return value if the guard accepts it.

        Raises:
            GuardError: If the guard rejects the value
        """
        result: CheckResult[T] = self.check(value)
        if not result.is_ok:
            raise GuardError(
                result.error or f"rejected by guard '{self._name}'",
                guard_name=self._name,
                value=value,
            )
        return value  # type: ignore[return-value]

    def __repr__(self) -> str:
        return f"Guard({self._name!r})"


def as_guard(predicate: Predicate | Guard[T], name: str = "custom") -> Guard[T]:
    """Wrap a plain predicate in a Guard; Guards pass through unchanged."""
    if isinstance(predicate, Guard):
        return predicate
    return Guard(predicate, name=getattr(predicate, "__name__", name))


def guard_name(predicate: Callable[..., object]) -> str:
    """Name of a guard or plain callable, for composite guard names."""
    if isinstance(predicate, Guard):
        return predicate.name
    return getattr(predicate, "__name__", type(predicate).__name__)
