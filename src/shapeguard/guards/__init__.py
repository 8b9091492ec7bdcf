"""Guards: the Guard callable, the primitive guard table and combinators.

- Guard: immutable, fail-closed predicate wrapper
- guards / PRIMITIVE_GUARDS: built-in primitive guards
- GuardBuilder / create_guard: combinators (object, array, union, ...)
"""

from shapeguard.guards.base import Guard, as_guard
from shapeguard.guards.combinators import (
    GuardBuilder,
    create_guard,
    strict_equals,
    validate_schema,
)
from shapeguard.guards.primitives import PRIMITIVE_GUARDS, PrimitiveGuards, get_primitive, guards

__all__ = [
    "Guard",
    "as_guard",
    "GuardBuilder",
    "create_guard",
    "strict_equals",
    "validate_schema",
    "PRIMITIVE_GUARDS",
    "PrimitiveGuards",
    "get_primitive",
    "guards",
]
