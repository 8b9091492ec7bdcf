"""Parsed form of a schema text.

The parser turns ``{ id: number; tags: string[]; }`` into a TypeDefinition:
an insertion-ordered mapping from property name to PropertySpec. Each
PropertySpec carries one TypeInfo variant:

- PrimitiveType: an opaque type name ("string", "Date", "UserId", ...)
- ArrayType: every element must match item_type
- ObjectType: a nested TypeDefinition

The tree is acyclic by construction (it is built top-down from a finite
string) and fully resolved before any matching starts.
"""

from dataclasses import dataclass, field
from typing import Any, Literal, TypeAlias

from shapeguard.contracts.enums import TypeKind


@dataclass(frozen=True)
class PrimitiveType:
    """A named leaf type, checked by name at match time."""

    name: str
    kind: Literal[TypeKind.PRIMITIVE] = field(default=TypeKind.PRIMITIVE, init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "name": self.name}


@dataclass(frozen=True)
class ArrayType:
    """A list whose elements all match item_type."""

    item_type: "TypeInfo"
    kind: Literal[TypeKind.ARRAY] = field(default=TypeKind.ARRAY, init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "item_type": self.item_type.to_dict()}


@dataclass(frozen=True)
class ObjectType:
    """A nested structural object."""

    properties: "TypeDefinition"
    kind: Literal[TypeKind.OBJECT] = field(default=TypeKind.OBJECT, init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "properties": definition_to_dict(self.properties)}


TypeInfo: TypeAlias = PrimitiveType | ArrayType | ObjectType


@dataclass(frozen=True)
class PropertySpec:
    """Expected shape of one property.

    optional=True means an absent key is not an error; a present key must
    still conform to type.
    """

    type: TypeInfo
    optional: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.to_dict(), "optional": self.optional}


TypeDefinition: TypeAlias = dict[str, PropertySpec]


def definition_to_dict(definition: TypeDefinition) -> dict[str, Any]:
    """Convert a TypeDefinition to JSON-safe nested dicts, preserving order."""
    return {name: spec.to_dict() for name, spec in definition.items()}


# Type names the structural matcher checks without consulting a plugin registry
BUILTIN_TYPE_NAMES: frozenset[str] = frozenset(
    {"string", "number", "boolean", "Date", "object", "null", "any", "unknown"}
)
