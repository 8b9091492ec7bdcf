# src/shapeguard/schema_text/parser.py
"""Parser for interface-style schema text.

Turns text like

    {
      id: number;
      name: string;
      email?: string;
      tags: string[];
      address: { city: string; zip: string; };
    }

into a TypeDefinition (see shapeguard.contracts.schema).

Grammar, informally:

    definition := "{" properties "}" | properties
    properties := property (";" property)* ";"?
    property   := name "?"? ":" type
    type       := type "[]" | "{" properties "}" | <opaque type name>

Splitting on ";" only happens at brace depth 0, so nested object types keep
their own semicolons. A type name is any text that is not an array or an
object; it is kept verbatim (trimmed) and interpreted at match time.

Two modes:

- Lenient (default): best-effort. A segment without ":" is skipped, an
  unbalanced "{" leaves the type expression as an opaque name, and text
  after a nested object's closing brace is discarded (logged at warning).
- Strict: all of the above raise SchemaSyntaxError with the offending
  character offset, as do stray "}", empty or malformed property names,
  duplicate names, missing types and an empty top-level definition.

Independently of the mode, UnknownTypePolicy.REJECT makes any type name
outside the known vocabulary a SchemaSyntaxError.
"""

from collections.abc import Iterable

import structlog

from shapeguard.contracts import (
    BUILTIN_TYPE_NAMES,
    ArrayType,
    ObjectType,
    PrimitiveType,
    PropertySpec,
    TypeDefinition,
    TypeInfo,
    UnknownTypePolicy,
)
from shapeguard.errors import SchemaSyntaxError
from shapeguard.schema_text.tokenizer import Token, TokenKind, tokenize

logger = structlog.get_logger(__name__)


def find_matching_brace(text: str, open_pos: int) -> int:
    """Find the "}" that balances the "{" at open_pos.

    Args:
        text: Text to scan
        open_pos: Index of an opening brace in text

    Returns:
        Index of the balancing closing brace, or -1 if the text ends first
    """
    depth = 1
    for index in range(open_pos + 1, len(text)):
        char = text[index]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index
    return -1


class SchemaParser:
    """Recursive-descent parser for schema text.

    Parser instances hold only configuration, so one instance can parse
    any number of texts, from any number of threads.

    Example:
        parser = SchemaParser(strict=True)
        definition = parser.parse("{ id: number; tags?: string[]; }")
        definition["tags"].optional  # True
    """

    def __init__(
        self,
        *,
        strict: bool = False,
        unknown_types: UnknownTypePolicy | str = UnknownTypePolicy.ACCEPT,
        known_types: Iterable[str] | None = None,
    ) -> None:
        """Initialize parser.

        Args:
            strict: Raise SchemaSyntaxError on malformed text instead of
                    recovering
            unknown_types: What to do with type names outside the known
                           vocabulary
            known_types: Extra type names to treat as known, typically the
                         names of registered plugins
        """
        self._strict = strict
        self._unknown_types = UnknownTypePolicy(unknown_types)
        self._known_types = BUILTIN_TYPE_NAMES | frozenset(known_types or ())

    @property
    def strict(self) -> bool:
        return self._strict

    def parse(self, text: str) -> TypeDefinition:
        """Parse schema text into a TypeDefinition.

        Raises:
            SchemaSyntaxError: On malformed text (strict mode) or an unknown
                               type name (REJECT policy)
        """
        tokens = tokenize(text)
        lo, hi = 0, len(tokens) - 1  # exclude EOF

        if hi > lo and tokens[lo].kind == TokenKind.LBRACE and tokens[hi - 1].kind == TokenKind.RBRACE:
            # In strict mode the outer braces must enclose the whole text,
            # not just open the first property and close the last one
            if not self._strict or _match_brace(tokens, lo, hi) == hi - 1:
                lo, hi = lo + 1, hi - 1

        definition = self._parse_properties(text, tokens, lo, hi)
        if self._strict and not definition:
            raise SchemaSyntaxError("Schema defines no properties", 0)

        logger.debug("Schema parsed", properties=len(definition), strict=self._strict)
        return definition

    # === Property lists ===

    def _parse_properties(self, source: str, tokens: list[Token], lo: int, hi: int) -> TypeDefinition:
        result: TypeDefinition = {}
        depth = 0
        open_braces: list[Token] = []
        segment_start = lo

        for index in range(lo, hi):
            token = tokens[index]
            if token.kind == TokenKind.LBRACE:
                depth += 1
                open_braces.append(token)
            elif token.kind == TokenKind.RBRACE:
                depth -= 1
                if open_braces:
                    open_braces.pop()
                elif self._strict:
                    raise SchemaSyntaxError("Unmatched '}'", token.start)
            elif token.kind == TokenKind.SEMI and depth == 0:
                self._add_property(result, source, tokens, segment_start, index)
                segment_start = index + 1

        if self._strict and open_braces:
            raise SchemaSyntaxError("Unclosed '{'", open_braces[0].start)

        self._add_property(result, source, tokens, segment_start, hi)
        return result

    def _add_property(
        self,
        result: TypeDefinition,
        source: str,
        tokens: list[Token],
        lo: int,
        hi: int,
    ) -> None:
        if lo >= hi:
            return

        colon = next((i for i in range(lo, hi) if tokens[i].kind == TokenKind.COLON), None)
        if colon is None:
            segment = _span_text(source, tokens, lo, hi)
            if self._strict:
                raise SchemaSyntaxError(f"Expected ':' in property '{segment}'", tokens[lo].start)
            logger.debug("Skipping property without ':'", segment=segment)
            return

        name = _span_text(source, tokens, lo, colon)
        optional = name.endswith("?")
        if optional:
            name = name[:-1].strip()

        if self._strict:
            self._check_name(tokens, lo, colon, name)
            if name in result:
                raise SchemaSyntaxError(f"Duplicate property '{name}'", tokens[lo].start)

        result[name] = PropertySpec(
            type=self._parse_type(source, tokens, colon + 1, hi),
            optional=optional,
        )

    def _check_name(self, tokens: list[Token], lo: int, colon: int, name: str) -> None:
        if not name:
            raise SchemaSyntaxError("Empty property name", tokens[lo].start if lo < colon else tokens[colon].start)
        name_tokens = tokens[lo:colon]
        if name_tokens[-1].kind == TokenKind.QUESTION:
            name_tokens = name_tokens[:-1]
        for token in name_tokens:
            if token.kind != TokenKind.TEXT:
                raise SchemaSyntaxError(f"Unexpected '{token.text}' in property name", token.start)

    # === Types ===

    def _parse_type(self, source: str, tokens: list[Token], lo: int, hi: int) -> TypeInfo:
        if lo >= hi:
            if self._strict:
                raise SchemaSyntaxError("Missing type for property", tokens[lo].start)
            return self._primitive("", tokens[lo].start)

        if tokens[hi - 1].kind == TokenKind.ARRAY_SUFFIX:
            return ArrayType(item_type=self._parse_type(source, tokens, lo, hi - 1))

        open_index = next((i for i in range(lo, hi) if tokens[i].kind == TokenKind.LBRACE), None)
        if open_index is not None:
            close_index = _match_brace(tokens, open_index, hi)
            if close_index != -1:
                return self._parse_object(source, tokens, lo, hi, open_index, close_index)
            if self._strict:
                raise SchemaSyntaxError("Unclosed '{'", tokens[open_index].start)

        return self._primitive(_span_text(source, tokens, lo, hi), tokens[lo].start)

    def _parse_object(
        self,
        source: str,
        tokens: list[Token],
        lo: int,
        hi: int,
        open_index: int,
        close_index: int,
    ) -> ObjectType:
        if self._strict and open_index > lo:
            leading = _span_text(source, tokens, lo, open_index)
            raise SchemaSyntaxError(f"Unexpected content before nested object: '{leading}'", tokens[lo].start)

        if close_index < hi - 1:
            trailing = _span_text(source, tokens, close_index + 1, hi)
            if self._strict:
                raise SchemaSyntaxError(
                    f"Unexpected content after nested object: '{trailing}'",
                    tokens[close_index + 1].start,
                )
            logger.warning("Discarding content after nested object", discarded=trailing)

        return ObjectType(properties=self._parse_properties(source, tokens, open_index + 1, close_index))

    def _primitive(self, name: str, position: int) -> PrimitiveType:
        if self._unknown_types == UnknownTypePolicy.REJECT and name not in self._known_types:
            raise SchemaSyntaxError(f"Unknown type '{name}'", position)
        return PrimitiveType(name=name)


def _span_text(source: str, tokens: list[Token], lo: int, hi: int) -> str:
    """Source text covered by tokens[lo:hi], inner spacing preserved."""
    if lo >= hi:
        return ""
    return source[tokens[lo].start : tokens[hi - 1].end]


def _match_brace(tokens: list[Token], open_index: int, hi: int) -> int:
    """Token-level find_matching_brace, bounded by hi."""
    depth = 1
    for index in range(open_index + 1, hi):
        kind = tokens[index].kind
        if kind == TokenKind.LBRACE:
            depth += 1
        elif kind == TokenKind.RBRACE:
            depth -= 1
            if depth == 0:
                return index
    return -1


def parse_schema(
    text: str,
    *,
    strict: bool = False,
    unknown_types: UnknownTypePolicy | str = UnknownTypePolicy.ACCEPT,
    known_types: Iterable[str] | None = None,
) -> TypeDefinition:
    """Parse schema text with a one-off SchemaParser.

    Raises:
        SchemaSyntaxError: See SchemaParser.parse
    """
    parser = SchemaParser(strict=strict, unknown_types=unknown_types, known_types=known_types)
    return parser.parse(text)
