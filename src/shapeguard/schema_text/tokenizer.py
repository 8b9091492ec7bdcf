# src/shapeguard/schema_text/tokenizer.py
"""Tokenizer for interface-style schema text.

The grammar has six structural tokens; everything else is TEXT:

    {   }   ;   :   ?   []

Whitespace separates tokens and is not emitted. A TEXT token is a maximal
run of characters that are neither whitespace nor structural. ``[]`` is a
single ARRAY_SUFFIX token only when the two brackets are adjacent; a lone
``[`` or ``]`` is ordinary text.

Every token records its half-open character span in the source, so the
parser can slice names and type expressions straight out of the original
text (keeping inner spacing such as ``string | number``) and report error
offsets.
"""

from dataclasses import dataclass
from enum import Enum

_SINGLE_CHAR_TOKENS = {
    "{": "LBRACE",
    "}": "RBRACE",
    ";": "SEMI",
    ":": "COLON",
    "?": "QUESTION",
}


class TokenKind(str, Enum):
    """Kinds of schema-text tokens."""

    LBRACE = "LBRACE"
    RBRACE = "RBRACE"
    SEMI = "SEMI"
    COLON = "COLON"
    QUESTION = "QUESTION"
    ARRAY_SUFFIX = "ARRAY_SUFFIX"
    TEXT = "TEXT"
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """A token and its span ``[start, end)`` in the source text."""

    kind: TokenKind
    text: str
    start: int
    end: int


def _is_boundary(source: str, index: int) -> bool:
    char = source[index]
    if char.isspace() or char in _SINGLE_CHAR_TOKENS:
        return True
    return source.startswith("[]", index)


def tokenize(source: str) -> list[Token]:
    """Split schema text into tokens.

    Never fails: any character sequence tokenizes. The returned list always
    ends with a single EOF token positioned at ``len(source)``.

    Example:
        >>> [t.kind.value for t in tokenize("tags?: string[];")]
        ['TEXT', 'QUESTION', 'COLON', 'TEXT', 'ARRAY_SUFFIX', 'SEMI', 'EOF']
    """
    tokens: list[Token] = []
    index = 0
    length = len(source)

    while index < length:
        char = source[index]

        if char.isspace():
            index += 1
            continue

        if char in _SINGLE_CHAR_TOKENS:
            tokens.append(Token(TokenKind(_SINGLE_CHAR_TOKENS[char]), char, index, index + 1))
            index += 1
            continue

        if source.startswith("[]", index):
            tokens.append(Token(TokenKind.ARRAY_SUFFIX, "[]", index, index + 2))
            index += 2
            continue

        start = index
        index += 1
        while index < length and not _is_boundary(source, index):
            index += 1
        tokens.append(Token(TokenKind.TEXT, source[start:index], start, index))

    tokens.append(Token(TokenKind.EOF, "", length, length))
    return tokens
