# src/shapeguard/guards/primitives.py
"""Built-in primitive guards.

A fixed table of named guards over primitive and common value shapes.
Every entry is a pure, total function: it never raises and never keeps
state between calls.

Access them by attribute or by name:

    from shapeguard.guards.primitives import guards, PRIMITIVE_GUARDS

    guards.string("abc")                 # True
    PRIMITIVE_GUARDS["uuid"](some_value)

Python has no separate bigint or symbol types. ``bigint`` accepts any int
(Python ints are arbitrary precision) and ``symbol`` accepts Enum members,
the usual Python spelling of a named opaque constant.
"""

import re
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any

from pydantic import AnyUrl, TypeAdapter, ValidationError

from shapeguard.contracts import UNDEFINED
from shapeguard.guards.base import Guard
from shapeguard.guards.values import is_number, is_object

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)
_ISO8601_DATE_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}(T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})?)?$",
    re.ASCII,
)

# pydantic-core parses URLs with the WHATWG rules, the same ones behind `new URL()`
_URL_ADAPTER: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)


def _is_url(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        _URL_ADAPTER.validate_python(value)
    except ValidationError:
        return False
    return True


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class PrimitiveGuards:
    """Attribute namespace over the primitive guard table."""

    string: Guard[str] = Guard(lambda v: isinstance(v, str), name="string")
    number: Guard[float] = Guard(is_number, name="number")
    boolean: Guard[bool] = Guard(lambda v: isinstance(v, bool), name="boolean")
    null: Guard[None] = Guard(lambda v: v is None, name="null")
    undefined: Guard[Any] = Guard(lambda v: v is UNDEFINED, name="undefined")
    date: Guard[datetime] = Guard(lambda v: isinstance(v, datetime), name="date")
    bigint: Guard[int] = Guard(_is_int, name="bigint")
    symbol: Guard[Enum] = Guard(lambda v: isinstance(v, Enum), name="symbol")
    function: Guard[Any] = Guard(callable, name="function")
    object: Guard[Any] = Guard(is_object, name="object")

    integer: Guard[int] = Guard(lambda v: _is_int(v) or (is_number(v) and float(v).is_integer()), name="integer")
    positive_number: Guard[float] = Guard(lambda v: is_number(v) and v > 0, name="positive_number")
    negative_number: Guard[float] = Guard(lambda v: is_number(v) and v < 0, name="negative_number")
    non_empty_string: Guard[str] = Guard(lambda v: isinstance(v, str) and len(v) > 0, name="non_empty_string")
    email: Guard[str] = Guard(lambda v: isinstance(v, str) and _EMAIL_PATTERN.fullmatch(v) is not None, name="email")
    url: Guard[str] = Guard(_is_url, name="url")
    uuid: Guard[str] = Guard(lambda v: isinstance(v, str) and _UUID_PATTERN.fullmatch(v) is not None, name="uuid")
    iso8601_date: Guard[str] = Guard(
        lambda v: isinstance(v, str) and _ISO8601_DATE_PATTERN.fullmatch(v) is not None,
        name="iso8601_date",
    )


guards = PrimitiveGuards()

PRIMITIVE_GUARDS: MappingProxyType[str, Guard[Any]] = MappingProxyType(
    {
        name: value
        for name, value in vars(PrimitiveGuards).items()
        if isinstance(value, Guard)
    }
)


def get_primitive(name: str) -> Guard[Any] | None:
    """Look up a primitive guard by name."""
    return PRIMITIVE_GUARDS.get(name)
