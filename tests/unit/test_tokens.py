"""Tests for token types and error formatting."""

import pytest
from pydantic import ValidationError

from sqlscan.core.errors import (
    ErrorContext,
    SqlscanError,
    TokenizerStalledError,
    make_stalled_error,
)
from sqlscan.core.tokens import Token, TokenContext, TokenKind, context_of

K = TokenKind


class TestToken:
    """Tests for the Token model."""

    def test_frozen(self):
        token = Token(kind=K.WORD, text="a")
        with pytest.raises(ValidationError):
            token.text = "b"

    def test_equality_and_hash(self):
        assert Token(kind=K.WORD, text="a") == Token(kind=K.WORD, text="a")
        assert Token(kind=K.WORD, text="a") != Token(kind=K.WORD, text="a", function=True)
        assert len({Token(kind=K.WORD, text="a"), Token(kind=K.WORD, text="a")}) == 1

    def test_len_is_text_length(self):
        assert len(Token(kind=K.WHITESPACE, text="\n  ")) == 3

    def test_repr(self):
        assert repr(Token(kind=K.QUOTE, text="'x'")) == "Token(quote, \"'x'\")"
        assert repr(Token(kind=K.WORD, text="now", function=True)) == "Token(word, 'now', function)"

    @pytest.mark.parametrize(
        "kind,expected",
        [
            (K.RESERVED, True),
            (K.RESERVED_TOP_LEVEL, True),
            (K.RESERVED_NEWLINE, True),
            (K.WORD, False),
            (K.BOUNDARY, False),
        ],
    )
    def test_is_reserved(self, kind: TokenKind, expected: bool):
        assert Token(kind=kind, text="x").is_reserved is expected

    def test_is_whitespace_or_comment(self):
        assert Token(kind=K.BLOCK_COMMENT, text="/**/").is_whitespace_or_comment
        assert not Token(kind=K.QUOTE, text="''").is_whitespace_or_comment

    def test_kind_values_are_strings(self):
        assert K.RESERVED_TOP_LEVEL == "reserved_top_level"
        assert len(TokenKind) == 13


class TestContextOf:
    """Tests for context_of."""

    @pytest.mark.parametrize(
        "previous,expected",
        [
            (None, TokenContext.START),
            (Token(kind=K.BOUNDARY, text="."), TokenContext.DOT),
            (Token(kind=K.BOUNDARY, text=")"), TokenContext.OPERAND),
            (Token(kind=K.BOUNDARY, text=","), TokenContext.OTHER),
            (Token(kind=K.WORD, text="a"), TokenContext.OPERAND),
            (Token(kind=K.NUMBER, text="1"), TokenContext.OPERAND),
            (Token(kind=K.QUOTE, text="'a'"), TokenContext.OPERAND),
            (Token(kind=K.BACKTICK_QUOTE, text="`a`"), TokenContext.OPERAND),
            (Token(kind=K.VARIABLE, text="@a"), TokenContext.OPERAND),
            (Token(kind=K.RESERVED, text="AS"), TokenContext.OTHER),
            (Token(kind=K.WHITESPACE, text=" "), TokenContext.OTHER),
            (Token(kind=K.COMMENT, text="-- x"), TokenContext.OTHER),
        ],
    )
    def test_contexts(self, previous: Token | None, expected: TokenContext):
        assert context_of(previous) is expected


class TestErrors:
    """Tests for error formatting."""

    def test_message_without_context(self):
        error = SqlscanError("boom")
        assert str(error) == "boom"
        assert error.context is None

    def test_context_offset_only(self):
        assert ErrorContext(offset=4).format() == "offset 4"

    def test_context_snippet_first_line(self):
        formatted = ErrorContext(offset=2, snippet="ab\ncd").format()
        lines = formatted.splitlines()
        assert lines[0] == "offset 2"
        assert lines[1] == "    | 'ab'"
        assert lines[2].strip() == "^^^"

    def test_make_stalled_error(self):
        error = make_stalled_error(10, "x" * 50, matcher="zero")

        assert isinstance(error, TokenizerStalledError)
        assert error.matcher == "zero"
        assert error.context.offset == 10
        assert error.context.snippet == "x" * 20
        assert "by matcher 'zero'" in error.message
        assert "50 characters remaining" in error.message
        assert str(error).startswith("offset 10\n")

    def test_make_stalled_error_without_matcher(self):
        error = make_stalled_error(0, "abc")
        assert error.matcher is None
        assert "by matcher" not in error.message
