# src/shapeguard/guards/combinators.py
"""Guard combinators.

create_guard() returns a GuardBuilder whose methods build new guards out of
existing guards and predicates. Composites close over their children, so
arbitrarily nested structures are validated by nesting calls:

    from shapeguard import create_guard, guards

    g = create_guard()
    user = g.object({
        "id": guards.number,
        "name": guards.string,
        "tags": g.array(guards.string),
        "role": g.union(g.literal("admin"), g.literal("member")),
    })
    user({"id": 1, "name": "Ada", "tags": [], "role": "admin"})  # True

Contract of every guard returned here:
- never raises; any exception during evaluation is a False verdict
- never mutates its children or the value being checked

The only errors raised are construction errors (SchemaError), at build time.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, Generic, TypeVar

import structlog

from shapeguard.contracts import UNDEFINED
from shapeguard.errors import SchemaError
from shapeguard.guards.base import Guard, Predicate, guard_name
from shapeguard.guards.values import get_field, is_array, is_object, own_items

if TYPE_CHECKING:
    from shapeguard.plugins.registry import PluginRegistry

T = TypeVar("T")
R = TypeVar("R")

logger = structlog.get_logger(__name__)


def validate_schema(schema: object) -> None:
    """Check that a field schema is a mapping of field name to callable.

    Runs once when an ``object``/``partial`` guard is built, so a malformed
    schema fails loudly at build time instead of quietly rejecting every value.

    Raises:
        SchemaError: If schema is not a mapping or a field validator is not callable
    """
    if not isinstance(schema, Mapping):
        raise SchemaError(
            f"Invalid schema: must be a mapping of field name to guard, got {type(schema).__name__}"
        )

    for key, validator in schema.items():
        if not callable(validator):
            raise SchemaError(
                f'Invalid validator for key "{key}": must be callable, '
                f"got {type(validator).__name__}"
            )


def strict_equals(value: object, expected: object) -> bool:
    """Equality without cross-type coercion.

    True never equals 1, "1" never equals 1, None and UNDEFINED compare by
    identity, NaN equals nothing. int and float compare numerically.
    """
    if expected is None or expected is UNDEFINED:
        return value is expected
    if isinstance(expected, bool) or isinstance(value, bool):
        return type(value) is type(expected) and value == expected
    if isinstance(expected, (int, float)) and isinstance(value, (int, float)):
        if isinstance(value, float) and math.isnan(value):
            return False
        return value == expected
    return type(value) is type(expected) and value == expected


class GuardBuilder(Generic[T]):
    """Factory for composable guards.

    The type parameter is the intended target type. It only matters to
    static type checkers; runtime behaviour is the same for every T.

    Example:
        builder: GuardBuilder[User] = create_guard(User)
        is_user = builder.object({"id": guards.number, "name": guards.string})
    """

    def __init__(self, registry: PluginRegistry | None = None) -> None:
        """Initialize builder.

        Args:
            registry: Plugin registry consulted by ``plugin()``. Optional;
                      builders without one cannot build plugin guards.
        """
        self._registry = registry

    # === Structural guards ===

    def object(self, schema: Mapping[str, Predicate]) -> Guard[Any]:
        """Guard for an object whose declared fields all pass their guards.

        Missing fields are passed to their guard as UNDEFINED, so a field is
        required exactly when its guard rejects UNDEFINED. Undeclared fields
        are ignored.

        Raises:
            SchemaError: If schema is malformed
        """
        validate_schema(schema)
        fields = dict(schema)

        def check(value: Any) -> bool:
            if not is_object(value):
                return False
            return all(field_guard(get_field(value, key)) for key, field_guard in fields.items())

        return Guard(check, name=f"object[{', '.join(fields)}]")

    def partial(self, schema: Mapping[str, Predicate]) -> Guard[Any]:
        """Guard for an object whose present declared fields pass their guards.

        Unlike ``object``, absent fields are never checked, so
        ``partial(schema)({})`` is always True.

        Raises:
            SchemaError: If schema is malformed
        """
        validate_schema(schema)
        fields = dict(schema)

        def check(value: Any) -> bool:
            if not is_object(value):
                return False
            for key, field_value in own_items(value):
                if key in fields and not fields[key](field_value):
                    return False
            return True

        return Guard(check, name=f"partial[{', '.join(fields)}]")

    def array(self, item_guard: Predicate) -> Guard[list[Any]]:
        """Guard for a list/tuple whose every element passes item_guard.

        An empty array always passes.
        """

        def check(value: Any) -> bool:
            if not is_array(value):
                return False
            return all(item_guard(item) for item in value)

        return Guard(check, name=f"array[{guard_name(item_guard)}]")

    def tuple(self, *element_guards: Predicate) -> Guard[tuple[Any, ...]]:
        """Guard for a fixed-length array with one guard per position.

        Extra or missing elements reject, even if every present element
        would pass its guard.
        """
        positions = tuple(element_guards)

        def check(value: Any) -> bool:
            if not is_array(value):
                return False
            if len(value) != len(positions):
                return False
            return all(position_guard(item) for position_guard, item in zip(positions, value))

        return Guard(check, name=f"tuple[{', '.join(guard_name(g) for g in positions)}]")

    def record(self, key_guard: Predicate, value_guard: Predicate) -> Guard[dict[Any, Any]]:
        """Guard for a dictionary-like object with uniform keys and values.

        Arrays are rejected even though they are objects.
        """

        def check(value: Any) -> bool:
            if not is_object(value) or is_array(value):
                return False
            return all(key_guard(key) and value_guard(item) for key, item in own_items(value))

        return Guard(check, name=f"record[{guard_name(key_guard)}, {guard_name(value_guard)}]")

    # === Algebraic guards ===

    def union(self, first: Predicate, second: Predicate, *more: Predicate) -> Guard[Any]:
        """Guard accepting a value that any member guard accepts.

        Takes at least two guards; members are tried in order and the first
        acceptance wins.
        """
        members = (first, second, *more)

        def check(value: Any) -> bool:
            return any(member(value) for member in members)

        return Guard(check, name=" | ".join(guard_name(m) for m in members))

    def intersection(self, first: Predicate, *rest: Predicate) -> Guard[Any]:
        """Guard accepting a value only if every predicate accepts it."""
        members = (first, *rest)

        def check(value: Any) -> bool:
            return all(member(value) for member in members)

        return Guard(check, name=" & ".join(guard_name(m) for m in members))

    def literal(self, expected: object) -> Guard[Any]:
        """Guard accepting exactly one constant (see ``strict_equals``)."""
        return Guard(lambda value: strict_equals(value, expected), name=f"literal[{expected!r}]")

    def refined(self, base_guard: Callable[[Any], object], predicate: Callable[[R], object]) -> Guard[R]:
        """Guard that adds a constraint on top of a base guard.

        predicate only runs on values the base guard accepted.

        Example:
            port = builder.refined(guards.integer, lambda n: 0 < n < 65536)
        """

        def check(value: Any) -> bool:
            if not base_guard(value):
                return False
            return bool(predicate(value))

        return Guard(check, name=f"refined[{guard_name(base_guard)}]")

    # === Escape hatches ===

    def custom(self, predicate: Predicate) -> Guard[Any]:
        """Guard from an arbitrary predicate."""
        return Guard(predicate, name=guard_name(predicate))

    def primitive(self, predicate: Predicate) -> Guard[Any]:
        """Same as ``custom``; kept for a uniform construction style."""
        return Guard(predicate, name=guard_name(predicate))

    def plugin(self, name: str) -> Guard[Any]:
        """Guard delegating to a registered plugin.

        The plugin is resolved once, now. Registering another plugin under
        the same name later does not affect guards already built.

        Raises:
            SchemaError: If the builder has no registry or no plugin has that name
        """
        if self._registry is None:
            raise SchemaError(
                f"Cannot build plugin guard '{name}': builder has no plugin registry. "
                f"Use create_guard(registry=...)."
            )
        found = self._registry.get(name)
        if found is None:
            raise SchemaError(
                f"Unknown plugin: '{name}'. Registered plugins: {self._registry.names()}"
            )
        return Guard(found.validate, name=f"plugin[{name}]")


def create_guard(target: type[T] | None = None, *, registry: PluginRegistry | None = None) -> GuardBuilder[T]:
    """Create a GuardBuilder for the given target type.

    Args:
        target: Intended target type; used only for static typing
        registry: Plugin registry for ``GuardBuilder.plugin``

    Returns:
        GuardBuilder producing guards narrowed towards target
    """
    logger.debug(
        "Guard builder created",
        target=getattr(target, "__name__", None),
        has_registry=registry is not None,
    )
    return GuardBuilder(registry=registry)
