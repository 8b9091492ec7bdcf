# src/shapeguard/schema_text/matcher.py
"""Structural matcher: checks a value against a parsed TypeDefinition.

The matcher walks the value and the definition together and collects every
problem it finds, in declaration order, as a path-qualified message:

    Missing required field: id
    Field address.zip should be a string (found number)
    Array item at tags[1] should be a string (found number)

It never stops at the first error, so one call reports everything wrong
with the value. Paths use dots for object nesting and bracketed indexes for
array elements (``orders[2].items[0].sku``).

Primitive type names are resolved in this order:

1. the built-in vocabulary (string, number, boolean, Date, object, null,
   any, unknown)
2. plugins in the matcher's PluginRegistry, if it has one
3. the unknown-type policy: ACCEPT treats the name as an opaque alias and
   passes any value; REJECT fails it
"""

import math
import re
from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import TYPE_CHECKING, Any

from shapeguard.contracts import (
    UNDEFINED,
    ArrayType,
    MatchResult,
    ObjectType,
    PrimitiveType,
    TypeDefinition,
    TypeInfo,
    UnknownTypePolicy,
)
from shapeguard.guards.base import as_guard
from shapeguard.guards.values import describe_type, is_array, is_object

if TYPE_CHECKING:
    from shapeguard.plugins.registry import PluginRegistry

# Only strings that carry a time component count as dates; plain dates stay strings
_TIMESTAMP_PREFIX = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}", re.ASCII)


def _is_json_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and not math.isnan(value)


def is_timestamp_string(value: Any) -> bool:
    """True for an ISO 8601 timestamp string that datetime.fromisoformat accepts."""
    if not isinstance(value, str) or _TIMESTAMP_PREFIX.match(value) is None:
        return False
    try:
        datetime.fromisoformat(value)
    except ValueError:
        return False
    return True


_BUILTIN_CHECKS = {
    "string": lambda v: isinstance(v, str),
    "number": _is_json_number,
    "boolean": lambda v: isinstance(v, bool),
    "Date": lambda v: isinstance(v, datetime),
    "object": lambda v: is_object(v) and not is_array(v),
    "null": lambda v: v is None,
    "any": lambda v: True,
    "unknown": lambda v: True,
}


class StructuralMatcher:
    """Validates values against TypeDefinitions.

    Matchers hold only configuration; every ``match`` call builds a fresh
    error list, so a matcher can be shared freely.
    """

    def __init__(
        self,
        registry: "PluginRegistry | None" = None,
        unknown_types: UnknownTypePolicy | str = UnknownTypePolicy.ACCEPT,
        coerce_dates: bool = False,
    ) -> None:
        """Initialize matcher.

        Args:
            registry: Plugin registry for type names outside the built-in
                      vocabulary
            unknown_types: Verdict for names neither built in nor registered
            coerce_dates: Also accept ISO 8601 timestamp strings where a
                          Date is expected
        """
        self._registry = registry
        self._unknown_types = UnknownTypePolicy(unknown_types)
        self._coerce_dates = coerce_dates

    def match(self, value: Any, definition: TypeDefinition) -> MatchResult:
        """Check value against definition.

        Returns:
            MatchResult with valid=True and no errors, or valid=False and
            every error found
        """
        errors: list[str] = []
        self._match_object(value, definition, "", errors)
        return MatchResult.from_errors(errors)

    def check_primitive(self, value: Any, type_name: str) -> bool:
        """Check a single value against a primitive type name."""
        if type_name == "Date" and self._coerce_dates and is_timestamp_string(value):
            return True

        check = _BUILTIN_CHECKS.get(type_name)
        if check is not None:
            return bool(check(value))

        if self._registry is not None:
            plugin = self._registry.get(type_name)
            if plugin is not None:
                return as_guard(plugin.validate, name=type_name)(value)

        return self._unknown_types == UnknownTypePolicy.ACCEPT

    # === Walkers ===

    def _match_object(self, value: Any, definition: TypeDefinition, path: str, errors: list[str]) -> bool:
        if value is None or value is UNDEFINED:
            errors.append(f"{path} is null or undefined" if path else "Value is null or undefined")
            return False

        if not isinstance(value, Mapping):
            errors.append(f"{path or 'Value'} is not an object (found {describe_type(value)})")
            return False

        valid = True
        for name, spec in definition.items():
            field_path = f"{path}.{name}" if path else name

            if name not in value:
                if not spec.optional:
                    errors.append(f"Missing required field: {field_path}")
                    valid = False
                continue

            if not self._match_field(value[name], spec.type, field_path, errors):
                valid = False

        return valid

    def _match_field(self, value: Any, type_info: TypeInfo, path: str, errors: list[str]) -> bool:
        if isinstance(type_info, PrimitiveType):
            if self.check_primitive(value, type_info.name):
                return True
            errors.append(f"Field {path} should be a {type_info.name} (found {describe_type(value)})")
            return False

        if isinstance(type_info, ObjectType):
            return self._match_object(value, type_info.properties, path, errors)

        if not is_array(value):
            errors.append(f"Field {path} should be an array")
            return False
        return self._match_items(value, type_info, path, errors)

    def _match_items(self, items: Sequence[Any], array_type: ArrayType, path: str, errors: list[str]) -> bool:
        item_type = array_type.item_type
        valid = True

        for index, item in enumerate(items):
            item_path = f"{path}[{index}]"

            if isinstance(item_type, PrimitiveType):
                if not self.check_primitive(item, item_type.name):
                    errors.append(
                        f"Array item at {item_path} should be a {item_type.name} (found {describe_type(item)})"
                    )
                    valid = False

            elif isinstance(item_type, ObjectType):
                if not isinstance(item, Mapping):
                    errors.append(f"Array item at {item_path} should be an object (found {describe_type(item)})")
                    valid = False
                elif not self._match_object(item, item_type.properties, item_path, errors):
                    valid = False

            elif not is_array(item):
                errors.append(f"Array item at {item_path} should be an array")
                valid = False
            elif not self._match_items(item, item_type, item_path, errors):
                valid = False

        return valid
