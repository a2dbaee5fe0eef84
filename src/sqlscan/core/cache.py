"""
Lookahead cache for sqlscan.

Memoizes classification results keyed by a fixed-length prefix of the
remaining input. Only tokens shorter than the prefix are stored: a token as
long as the window cannot be told apart from a different token sharing the
same leading characters.

The key optionally includes the previous-token context. Without it, a
context-sensitive result (``select`` after ``.`` is a word, elsewhere a
keyword) is replayed in every later context that shares the prefix.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from .errors import ConfigError
from .tokens import Token, context_of

logger = logging.getLogger(__name__)

DEFAULT_PREFIX_SIZE = 15

CacheKey = tuple[str, str]


class TokenCache:
    """Prefix-keyed token cache, safe to share between threads."""

    def __init__(
        self,
        prefix_size: int = DEFAULT_PREFIX_SIZE,
        context_key: bool = True,
        max_entries: int | None = None,
    ):
        """
        Initialize token cache.

        Args:
            prefix_size: Number of leading characters used as the key
            context_key: Include the previous-token context in the key
            max_entries: Stop storing new entries once this many exist

        Raises:
            ConfigError: If prefix_size or max_entries is not positive
        """
        if prefix_size < 1:
            raise ConfigError(f"Cache prefix size must be positive, got {prefix_size}")
        if max_entries is not None and max_entries < 1:
            raise ConfigError(f"Cache max entries must be positive, got {max_entries}")
        self.prefix_size = prefix_size
        self.context_key = context_key
        self.max_entries = max_entries
        self._entries: dict[CacheKey, Token] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def key_for(
        self, remaining: str, remaining_length: int, previous: Token | None
    ) -> CacheKey | None:
        """Return the cache key for this position, or None when too close to the end."""
        if remaining_length < self.prefix_size:
            return None
        context = context_of(previous).value if self.context_key else ""
        return context, remaining[: self.prefix_size]

    def get_or_classify(
        self,
        remaining: str,
        remaining_length: int,
        previous: Token | None,
        classify: Callable[[str, Token | None], Token],
    ) -> Token:
        """
        Return the cached token for this prefix, classifying on a miss.

        Args:
            remaining: Unconsumed input
            remaining_length: Length of the unconsumed input
            previous: Previously emitted token
            classify: Pipeline entry point used on a miss

        Returns:
            Next token
        """
        key = self.key_for(remaining, remaining_length, previous)
        if key is not None:
            with self._lock:
                cached = self._entries.get(key)
                if cached is not None:
                    self.hits += 1
                    return cached

        token = classify(remaining, previous)

        with self._lock:
            self.misses += 1
            if key is not None and len(token.text) < self.prefix_size:
                if self.max_entries is None or len(self._entries) < self.max_entries:
                    self._entries.setdefault(key, token)
        return token

    def clear(self) -> None:
        """Drop all entries and reset counters."""
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0
        logger.debug("Token cache cleared")
