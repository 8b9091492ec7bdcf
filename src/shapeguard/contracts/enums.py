"""Kinds and policies shared across the parser, matcher and settings.

Uses (str, Enum) so values serialize directly into the JSON tree produced by
``shapeguard parse`` and into settings files.
"""

from enum import Enum


class TypeKind(str, Enum):
    """Discriminator for the TypeInfo variants produced by the schema parser."""

    PRIMITIVE = "primitive"
    ARRAY = "array"
    OBJECT = "object"


class UnknownTypePolicy(str, Enum):
    """What to do with a primitive type name the validator does not recognize.

    ACCEPT keeps the open-world behaviour: an unresolved alias or interface
    name validates anything. REJECT turns the name into a parse error so a
    typo like ``strnig`` cannot silently accept every value.
    """

    ACCEPT = "accept"
    REJECT = "reject"
