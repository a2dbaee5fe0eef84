"""
Classifier pipeline for sqlscan.

Runs matchers in a fixed order and returns the first token produced.
Precedence is part of the contract: an earlier matcher wins even when a
later one would match a longer span.
"""

from __future__ import annotations

from collections.abc import Iterable

from .matchers import (
    BoundaryMatcher,
    CommentMatcher,
    FunctionMatcher,
    Matcher,
    NumeralMatcher,
    QuotedMatcher,
    ReservedMatcher,
    VariableMatcher,
    WhitespaceMatcher,
    WordMatcher,
)
from .tokens import Token, TokenKind
from .vocabulary import CompiledVocabulary


class ClassifierPipeline:
    """Ordered list of matchers; the first match wins."""

    def __init__(self, matchers: Iterable[Matcher]):
        self._matchers: tuple[Matcher, ...] = tuple(matchers)

    @classmethod
    def default(cls, vocabulary: CompiledVocabulary) -> ClassifierPipeline:
        """Build the standard SQL pipeline over a compiled vocabulary."""
        return cls(
            [
                WhitespaceMatcher(),
                CommentMatcher(),
                QuotedMatcher(),
                VariableMatcher(),
                NumeralMatcher(vocabulary),
                BoundaryMatcher(vocabulary),
                ReservedMatcher(vocabulary),
                FunctionMatcher(vocabulary),
                WordMatcher(),
            ]
        )

    @property
    def matchers(self) -> tuple[Matcher, ...]:
        return self._matchers

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(matcher.name for matcher in self._matchers)

    def match(self, remaining: str, previous: Token | None) -> tuple[Token, str | None]:
        """
        Classify the start of ``remaining`` and report which matcher did it.

        Returns:
            Tuple of (token, matcher name). The name is None when every
            matcher declined and a one-character ERROR token was produced.
        """
        for matcher in self._matchers:
            token = matcher.try_match(remaining, previous)
            if token is not None:
                return token, matcher.name
        return Token(kind=TokenKind.ERROR, text=remaining[:1]), None

    def classify(self, remaining: str, previous: Token | None) -> Token:
        """Return the next token at the start of ``remaining``."""
        token, _ = self.match(remaining, previous)
        return token
