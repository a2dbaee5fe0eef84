"""
Token types for sqlscan.

A token is an immutable, classified slice of the SQL input. Token texts are
never normalized: concatenating them in emission order gives back the input.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class TokenKind(StrEnum):
    """Kinds of SQL tokens."""

    WHITESPACE = "whitespace"
    WORD = "word"
    QUOTE = "quote"
    BACKTICK_QUOTE = "backtick_quote"
    RESERVED = "reserved"
    RESERVED_TOP_LEVEL = "reserved_top_level"
    RESERVED_NEWLINE = "reserved_newline"
    BOUNDARY = "boundary"
    COMMENT = "comment"
    BLOCK_COMMENT = "block_comment"
    NUMBER = "number"
    ERROR = "error"
    VARIABLE = "variable"


RESERVED_KINDS = frozenset(
    {TokenKind.RESERVED, TokenKind.RESERVED_TOP_LEVEL, TokenKind.RESERVED_NEWLINE}
)

# Kinds after which a sign belongs to a binary operator, not a number
OPERAND_KINDS = frozenset(
    {
        TokenKind.WORD,
        TokenKind.NUMBER,
        TokenKind.QUOTE,
        TokenKind.BACKTICK_QUOTE,
        TokenKind.VARIABLE,
    }
)


class Token(BaseModel):
    """
    A single token in the SQL input.

    Attributes:
        kind: Kind of token
        text: Exact substring consumed from the input
        function: True when a WORD names a known function followed by "("
    """

    kind: TokenKind
    text: str
    function: bool = False

    model_config = ConfigDict(frozen=True)

    def __len__(self) -> int:
        return len(self.text)

    def __repr__(self) -> str:
        suffix = ", function" if self.function else ""
        return f"Token({self.kind.value}, {self.text!r}{suffix})"

    @property
    def is_reserved(self) -> bool:
        return self.kind in RESERVED_KINDS

    @property
    def is_whitespace_or_comment(self) -> bool:
        return self.kind in (TokenKind.WHITESPACE, TokenKind.COMMENT, TokenKind.BLOCK_COMMENT)


class TokenContext(StrEnum):
    """Coarse category of the previously emitted token."""

    START = "start"
    DOT = "dot"
    OPERAND = "operand"
    OTHER = "other"


def context_of(previous: Token | None) -> TokenContext:
    """Classify the previous significant token for context-sensitive matching."""
    if previous is None:
        return TokenContext.START
    if previous.kind is TokenKind.BOUNDARY:
        if previous.text == ".":
            return TokenContext.DOT
        if previous.text == ")":
            return TokenContext.OPERAND
        return TokenContext.OTHER
    if previous.kind in OPERAND_KINDS:
        return TokenContext.OPERAND
    return TokenContext.OTHER
