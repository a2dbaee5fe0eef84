"""
Token matchers for sqlscan.

Each matcher recognizes one kind of token at the start of the remaining
input. A matcher either returns a Token or None (declines); it never
mutates shared state, so matchers can be tested in isolation and reordered
freely. ClassifierPipeline runs them in a fixed order.
"""

from __future__ import annotations

import re
from typing import Protocol, runtime_checkable

from .tokens import Token, TokenContext, TokenKind, context_of
from .vocabulary import CompiledVocabulary

# =============================================================================
# Protocol
# =============================================================================


@runtime_checkable
class Matcher(Protocol):
    """Recognizes one token kind at the start of the input."""

    name: str

    def try_match(self, remaining: str, previous: Token | None) -> Token | None:
        """
        Return the token at the start of ``remaining``, or None to decline.

        ``previous`` is the last emitted token that is not whitespace or a
        comment, so ``a -1`` and ``a-1`` see the same context.
        """
        ...


def _terminator(vocabulary: CompiledVocabulary, quotes: bool = False) -> str:
    """Lookahead that a keyword or number must be followed by."""
    quote = "|[\"'`]" if quotes else ""
    return rf"(?=\Z|\s{quote}|{vocabulary.boundaries.pattern})"


# =============================================================================
# Layout
# =============================================================================


class WhitespaceMatcher:
    """Maximal run of whitespace characters."""

    name = "whitespace"
    _pattern = re.compile(r"\s+")

    def try_match(self, remaining: str, previous: Token | None) -> Token | None:
        match = self._pattern.match(remaining)
        if match is None:
            return None
        return Token(kind=TokenKind.WHITESPACE, text=match.group(0))


class CommentMatcher:
    """
    Line and block comments.

    ``#`` and ``--`` comments run up to (not including) the next newline.
    ``/* */`` comments run through the closing ``*/``, or to the end of the
    input when unterminated.
    """

    name = "comment"

    def try_match(self, remaining: str, previous: Token | None) -> Token | None:
        if remaining.startswith(("#", "--")):
            end = remaining.find("\n")
            if end == -1:
                end = len(remaining)
            return Token(kind=TokenKind.COMMENT, text=remaining[:end])

        if remaining.startswith("/*"):
            end = remaining.find("*/", 2)
            end = len(remaining) if end == -1 else end + 2
            return Token(kind=TokenKind.BLOCK_COMMENT, text=remaining[:end])

        return None


# =============================================================================
# Literals
# =============================================================================

# Backtick identifiers escape a backtick by doubling it; string literals
# accept both backslash escapes and doubled quotes. Unterminated quotes run
# to the end of the input, including one that ends on a lone backslash.
QUOTED_PATTERN = re.compile(
    r"""
    (?P<backtick>(?:`[^`]*(?:`|\Z))+)
    | (?P<double>(?:"[^"\\]*(?:\\.[^"\\]*)*\\?(?:"|\Z))+)
    | (?P<single>(?:'[^'\\]*(?:\\.[^'\\]*)*\\?(?:'|\Z))+)
    """,
    re.DOTALL | re.VERBOSE,
)


class QuotedMatcher:
    """Single-, double- and backtick-quoted spans."""

    name = "quoted"

    def try_match(self, remaining: str, previous: Token | None) -> Token | None:
        if not remaining.startswith(("'", '"', "`")):
            return None
        match = QUOTED_PATTERN.match(remaining)
        if match is None:
            return None
        kind = TokenKind.BACKTICK_QUOTE if match.group("backtick") else TokenKind.QUOTE
        return Token(kind=kind, text=match.group(0))


class VariableMatcher:
    """User-defined and system variables: ``@name``, ``@@name``, ``@"quoted"``."""

    name = "variable"
    _pattern = re.compile(r"@@?[A-Za-z0-9._$]+")

    def try_match(self, remaining: str, previous: Token | None) -> Token | None:
        if not remaining.startswith("@") or len(remaining) < 2:
            return None

        if remaining[1] in "'\"`":
            match = QUOTED_PATTERN.match(remaining, 1)
        else:
            match = self._pattern.match(remaining)
        if match is None:
            return None
        return Token(kind=TokenKind.VARIABLE, text=remaining[: match.end()])


INTEGER_PART = r"\d+(?:\.\d*)?"
FRACTION_ONLY = r"\.\d+"
EXPONENT = r"(?:[eE][+-]?\d+)?"


def _number_body(leading_dot: bool) -> str:
    mantissa = f"(?:{INTEGER_PART}|{FRACTION_ONLY})" if leading_dot else INTEGER_PART
    return rf"(?:0x[0-9a-fA-F]+|0b[01]+|{mantissa}{EXPONENT})"


class NumeralMatcher:
    """
    Numeric literals: integers, decimals, exponents, hex and binary.

    A leading sign is part of the number unless the previous significant
    token is an operand, where it is a binary operator (``a-1`` and
    ``a - 1`` both give ``a``, ``-``, ``1``).
    After an operand a leading ``.`` is a qualifier, so ``.5`` is only a
    number elsewhere.
    """

    name = "numeral"

    def __init__(self, vocabulary: CompiledVocabulary):
        terminator = _terminator(vocabulary, quotes=True)
        self._unsigned = re.compile(_number_body(leading_dot=False) + terminator)
        self._signed = re.compile(r"[+-]?" + _number_body(leading_dot=True) + terminator)

    def try_match(self, remaining: str, previous: Token | None) -> Token | None:
        if context_of(previous) is TokenContext.OPERAND:
            pattern = self._unsigned
        else:
            pattern = self._signed
        match = pattern.match(remaining)
        if match is None:
            return None
        return Token(kind=TokenKind.NUMBER, text=match.group(0))


# =============================================================================
# Vocabulary-driven
# =============================================================================


class BoundaryMatcher:
    """Longest punctuation or operator from the boundary list."""

    name = "boundary"

    def __init__(self, vocabulary: CompiledVocabulary):
        self._pattern = vocabulary.boundaries

    def try_match(self, remaining: str, previous: Token | None) -> Token | None:
        match = self._pattern.match(remaining)
        if match is None:
            return None
        return Token(kind=TokenKind.BOUNDARY, text=match.group(0))


class ReservedMatcher:
    """
    Reserved words, tagged by role.

    Top-level phrases become RESERVED_TOP_LEVEL, newline phrases
    RESERVED_NEWLINE, the rest RESERVED. When several categories match at
    the same offset the longest match wins; equal lengths go to the earlier
    category. A word right after ``.`` is a qualified name, never reserved.
    """

    name = "reserved"

    def __init__(self, vocabulary: CompiledVocabulary):
        terminator = _terminator(vocabulary)
        self._categories = tuple(
            (kind, re.compile(f"({pattern.pattern}){terminator}", pattern.flags))
            for kind, pattern in (
                (TokenKind.RESERVED_TOP_LEVEL, vocabulary.reserved_top_level),
                (TokenKind.RESERVED_NEWLINE, vocabulary.reserved_newline),
                (TokenKind.RESERVED, vocabulary.reserved),
            )
        )

    def try_match(self, remaining: str, previous: Token | None) -> Token | None:
        if context_of(previous) is TokenContext.DOT:
            return None

        best: Token | None = None
        for kind, pattern in self._categories:
            match = pattern.match(remaining)
            if match is None:
                continue
            text = match.group(1)
            if best is None or len(text) > len(best.text):
                best = Token(kind=kind, text=text)
        return best


class FunctionMatcher:
    """Known function name directly followed by ``(``; the paren is not consumed."""

    name = "function"

    def __init__(self, vocabulary: CompiledVocabulary):
        self._pattern = re.compile(
            rf"({vocabulary.functions.pattern})(?=\()", vocabulary.functions.flags
        )

    def try_match(self, remaining: str, previous: Token | None) -> Token | None:
        if context_of(previous) is TokenContext.DOT:
            return None
        match = self._pattern.match(remaining)
        if match is None:
            return None
        return Token(kind=TokenKind.WORD, text=match.group(1), function=True)


# =============================================================================
# Fallback
# =============================================================================


class WordMatcher:
    """
    Plain identifiers, with a one-character ERROR fallback.

    Never declines on non-empty input, which guarantees forward progress.
    """

    name = "word"
    _pattern = re.compile(r"[\w$]+")

    def try_match(self, remaining: str, previous: Token | None) -> Token | None:
        match = self._pattern.match(remaining)
        if match is not None:
            return Token(kind=TokenKind.WORD, text=match.group(0))
        return Token(kind=TokenKind.ERROR, text=remaining[:1])
