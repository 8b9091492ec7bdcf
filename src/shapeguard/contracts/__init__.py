"""Shared contracts for cross-module data types.

Dataclasses, enums and sentinels used by more than one subsystem (guards,
plugins, schema_text, cli) are defined here.

Import pattern:
    from shapeguard.contracts import UNDEFINED, MatchResult, TypeKind
"""

from shapeguard.contracts.enums import TypeKind, UnknownTypePolicy
from shapeguard.contracts.results import CheckResult, MatchResult
from shapeguard.contracts.schema import (
    BUILTIN_TYPE_NAMES,
    ArrayType,
    ObjectType,
    PrimitiveType,
    PropertySpec,
    TypeDefinition,
    TypeInfo,
    definition_to_dict,
)
from shapeguard.contracts.sentinels import UNDEFINED

__all__ = [
    # enums
    "TypeKind",
    "UnknownTypePolicy",
    # results
    "CheckResult",
    "MatchResult",
    # schema tree
    "BUILTIN_TYPE_NAMES",
    "ArrayType",
    "ObjectType",
    "PrimitiveType",
    "PropertySpec",
    "TypeDefinition",
    "TypeInfo",
    "definition_to_dict",
    # sentinels
    "UNDEFINED",
]
