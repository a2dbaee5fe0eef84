"""
Tokenizer for SQL text.

Converts a SQL string into a list of typed tokens. Token texts are exact
slices of the input, so joining them reproduces it. Each step consumes at
least one character; a zero-length token is an engine defect and raises
TokenizerStalledError instead of looping forever.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from dataclasses import dataclass, field

from .cache import TokenCache
from .config import TokenizerConfig
from .errors import make_stalled_error
from .pipeline import ClassifierPipeline
from .tokens import Token
from .vocabulary import CompiledVocabulary, WordLists, build_vocabulary

logger = logging.getLogger(__name__)


@dataclass
class ScanState:
    """
    Per-call scanning state.

    Attributes:
        remaining: Unconsumed input
        remaining_length: Length of the unconsumed input
        previous: Last emitted token
        significant: Last emitted token that is not whitespace or a comment;
            context-sensitive matchers and the cache key read this one
        emitted: Tokens emitted so far
    """

    remaining: str
    remaining_length: int
    previous: Token | None = None
    significant: Token | None = None
    emitted: list[Token] = field(default_factory=list)

    @property
    def offset(self) -> int:
        return sum(len(token.text) for token in self.emitted)

    def advance(self, token: Token) -> None:
        """Record an emitted token and consume its text."""
        consumed = len(token.text)
        self.emitted.append(token)
        self.previous = token
        if not token.is_whitespace_or_comment:
            self.significant = token
        self.remaining = self.remaining[consumed:]
        self.remaining_length -= consumed


class Tokenizer:
    """
    SQL tokenizer.

    The vocabulary is compiled once per instance and never changes. The
    lookahead cache lives as long as the instance and is shared by every
    tokenize() call on it.
    """

    def __init__(
        self,
        word_lists: WordLists | None = None,
        config: TokenizerConfig | None = None,
        pipeline: ClassifierPipeline | None = None,
    ):
        """
        Initialize tokenizer.

        Args:
            word_lists: Vocabulary to compile (default: config word lists)
            config: Tokenizer settings (default: TokenizerConfig())
            pipeline: Custom classifier pipeline (default: standard SQL pipeline)

        Raises:
            VocabularyError: If the word lists are malformed
            ConfigError: If the cache settings are invalid
        """
        self.config = config or TokenizerConfig()
        self._vocabulary = build_vocabulary(word_lists or self.config.word_lists())
        self._pipeline = pipeline or ClassifierPipeline.default(self._vocabulary)
        self._cache: TokenCache | None = None
        if self.config.cache_enabled:
            self._cache = TokenCache(
                prefix_size=self.config.cache_prefix_size,
                context_key=self.config.cache_context_key,
                max_entries=self.config.cache_max_entries,
            )

    @property
    def vocabulary(self) -> CompiledVocabulary:
        return self._vocabulary

    @property
    def pipeline(self) -> ClassifierPipeline:
        return self._pipeline

    @property
    def cache(self) -> TokenCache | None:
        return self._cache

    def _next_token(self, state: ScanState) -> Token:
        if self._cache is None:
            return self._pipeline.classify(state.remaining, state.significant)
        return self._cache.get_or_classify(
            state.remaining, state.remaining_length, state.significant, self._pipeline.classify
        )

    def iter_tokens(self, sql: str | bytes) -> Iterator[Token]:
        """
        Yield tokens one at a time.

        Raises:
            TokenizerStalledError: If a step produced a zero-length token
        """
        if isinstance(sql, bytes):
            sql = sql.decode("utf-8", errors="surrogateescape")
        if not sql:
            return

        state = ScanState(remaining=sql, remaining_length=len(sql))
        while state.remaining_length > 0:
            token = self._next_token(state)
            if not token.text:
                _, matcher = self._pipeline.match(state.remaining, state.significant)
                error = make_stalled_error(state.offset, state.remaining, matcher)
                logger.error("Tokenizer stalled: %s", error.message)
                raise error
            state.advance(token)
            yield token

    def tokenize(self, sql: str | bytes) -> list[Token]:
        """
        Split SQL text into tokens.

        Args:
            sql: SQL text; bytes are decoded as UTF-8, and each undecodable
                byte becomes a one-character ERROR token

        Returns:
            Tokens in input order; empty list for empty input

        Raises:
            TokenizerStalledError: If a step produced a zero-length token
        """
        tokens = list(self.iter_tokens(sql))
        if self._cache is not None:
            logger.debug(
                "Tokenized %d characters into %d tokens (cache: %d hits, %d misses)",
                sum(len(token.text) for token in tokens),
                len(tokens),
                self._cache.hits,
                self._cache.misses,
            )
        return tokens


_local = threading.local()


def get_tokenizer() -> Tokenizer:
    """Return this thread's default tokenizer, creating it on first use."""
    tokenizer = getattr(_local, "tokenizer", None)
    if tokenizer is None:
        tokenizer = Tokenizer()
        _local.tokenizer = tokenizer
    return tokenizer


def tokenize(sql: str | bytes) -> list[Token]:
    """Tokenize SQL text with the current thread's default tokenizer."""
    return get_tokenizer().tokenize(sql)
