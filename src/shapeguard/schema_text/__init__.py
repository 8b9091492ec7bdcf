"""Schema text: parse interface-style type text and match values against it.

- tokenizer: structural tokens with source offsets
- parser: SchemaParser / parse_schema -> TypeDefinition
- matcher: StructuralMatcher, path-qualified error collection
- validator: SchemaTextValidator / validate_text, the cached one-call entry point
"""

from shapeguard.schema_text.matcher import StructuralMatcher, is_timestamp_string
from shapeguard.schema_text.parser import SchemaParser, find_matching_brace, parse_schema
from shapeguard.schema_text.tokenizer import Token, TokenKind, tokenize
from shapeguard.schema_text.validator import SchemaTextValidator, validate_text

__all__ = [
    "SchemaParser",
    "SchemaTextValidator",
    "StructuralMatcher",
    "Token",
    "TokenKind",
    "find_matching_brace",
    "is_timestamp_string",
    "parse_schema",
    "tokenize",
    "validate_text",
]
