"""Shape helpers shared by the guards and the structural matcher.

Guards reason about values in the vocabulary of JSON-like data:

- "array": list or tuple
- "object": any non-null value that is not a scalar and not callable
  (mappings, lists, dataclass instances, ...). Lists count as objects here,
  exactly like ``typeof [] === "object"``; callers that need to exclude them
  check is_array as well.

Field access works on mappings by key and on every other object by attribute,
so the same guard validates a parsed JSON dict and a dataclass instance.
"""

import math
from collections.abc import Iterator, Mapping
from datetime import datetime
from typing import Any

from shapeguard.contracts import UNDEFINED

_SCALAR_TYPES = (str, bytes, bytearray, int, float, complex, bool)


def is_array(value: object) -> bool:
    """True for list and tuple values."""
    return isinstance(value, (list, tuple))


def is_object(value: object) -> bool:
    """True for non-null, non-scalar, non-callable values."""
    if value is None or value is UNDEFINED:
        return False
    if isinstance(value, _SCALAR_TYPES):
        return False
    return not callable(value)


def is_number(value: object) -> bool:
    """True for finite int/float values; bool is not a number."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def get_field(value: object, key: Any) -> Any:
    """Read key from a mapping or attribute from an object.

    Returns UNDEFINED when the key is absent.
    """
    if isinstance(value, Mapping):
        if key in value:
            return value[key]
        return UNDEFINED
    if not isinstance(key, str):
        return UNDEFINED
    return getattr(value, key, UNDEFINED)


def own_items(value: object) -> Iterator[tuple[Any, Any]]:
    """Yield the own entries of an object.

    Mappings yield their items; other objects yield their instance
    attributes (``vars``). Objects without ``__dict__`` yield nothing.
    """
    if isinstance(value, Mapping):
        yield from value.items()
        return
    try:
        attributes = vars(value)
    except TypeError:
        return
    yield from attributes.items()


def describe_type(value: object) -> str:
    """Short, human-readable name of a value's shape for error messages."""
    if value is UNDEFINED:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, datetime):
        return "Date"
    if is_array(value):
        return "array"
    if callable(value):
        return "function"
    return "object"
