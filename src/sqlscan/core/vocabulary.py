"""
Vocabulary builder for sqlscan.

Compiles the five word lists (reserved words, functions, boundaries,
top-level reserved phrases, newline reserved phrases) into regex
alternations. Every category is ordered longest-first so that a
leftmost-first alternation prefers "GROUP BY" over "GROUP".
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict

from . import sql_words
from .errors import VocabularyError

logger = logging.getLogger(__name__)

# Matches nothing; used for empty categories
NEVER_MATCHES = "(?!)"


class WordLists(BaseModel):
    """Literal word lists, as supplied by a dialect."""

    reserved: tuple[str, ...] = ()
    functions: tuple[str, ...] = ()
    boundaries: tuple[str, ...] = ()
    reserved_top_level: tuple[str, ...] = ()
    reserved_newline: tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True)

    @classmethod
    def default(cls) -> WordLists:
        """Return the bundled SQL word lists."""
        return cls(
            reserved=sql_words.RESERVED,
            functions=sql_words.FUNCTIONS,
            boundaries=sql_words.BOUNDARIES,
            reserved_top_level=sql_words.RESERVED_TOP_LEVEL,
            reserved_newline=sql_words.RESERVED_NEWLINE,
        )

    def extended(self, **extra: Iterable[str]) -> WordLists:
        """
        Return a copy with extra entries appended to the named categories.

        Args:
            **extra: Category name mapped to additional entries

        Raises:
            VocabularyError: If a category name is unknown
        """
        update: dict[str, tuple[str, ...]] = {}
        for category, entries in extra.items():
            if category not in type(self).model_fields:
                raise VocabularyError(f"Unknown vocabulary category: {category!r}")
            update[category] = tuple(getattr(self, category)) + tuple(entries)
        return self.model_copy(update=update)


@dataclass(frozen=True)
class CompiledVocabulary:
    """
    Compiled, immutable vocabulary owned by one tokenizer.

    Attributes:
        boundaries: Alternation over boundary tokens (case-sensitive)
        functions: Alternation over function names (case-insensitive)
        reserved: Alternation over reserved words (case-insensitive)
        reserved_top_level: Alternation over top-level phrases
        reserved_newline: Alternation over newline phrases
        reserved_words: Reserved words in match order (longest first)
    """

    boundaries: re.Pattern[str]
    functions: re.Pattern[str]
    reserved: re.Pattern[str]
    reserved_top_level: re.Pattern[str]
    reserved_newline: re.Pattern[str]
    reserved_words: tuple[str, ...]

    def patterns(self) -> dict[str, str]:
        """Return the pattern source of every category, for introspection."""
        return {
            "boundaries": self.boundaries.pattern,
            "functions": self.functions.pattern,
            "reserved": self.reserved.pattern,
            "reserved_top_level": self.reserved_top_level.pattern,
            "reserved_newline": self.reserved_newline.pattern,
        }


def _validated(category: str, entries: Iterable[object]) -> list[str]:
    """Reject anything that is not a non-blank string."""
    words = []
    for entry in entries:
        if not isinstance(entry, str):
            raise VocabularyError(f"{category}: entries must be strings, got {entry!r}")
        if not entry.strip():
            raise VocabularyError(f"{category}: empty entry is not allowed")
        words.append(entry)
    return words


def order_longest_first(words: Iterable[str], fold_case: bool = False) -> tuple[str, ...]:
    """
    Deduplicate words by literal text and sort by descending length.

    The sort is stable, so words of equal length keep their original order.

    Args:
        words: Words in their original order
        fold_case: Treat words differing only in case as duplicates

    Returns:
        Tuple of unique words, longest first
    """
    seen: set[str] = set()
    unique = []
    for word in words:
        key = word.upper() if fold_case else word
        if key in seen:
            continue
        seen.add(key)
        unique.append(word)
    return tuple(sorted(unique, key=len, reverse=True))


def _escape_phrase(phrase: str) -> str:
    """Escape a phrase so inner spaces match any run of whitespace."""
    return r"\s+".join(re.escape(part) for part in phrase.split())


def _alternation(words: tuple[str, ...], phrases: bool) -> str:
    if not words:
        return NEVER_MATCHES
    escape = _escape_phrase if phrases else re.escape
    return "(?:" + "|".join(escape(word) for word in words) + ")"


def _compile(category: str, words: tuple[str, ...], phrases: bool, flags: int = 0) -> re.Pattern[str]:
    pattern = re.compile(_alternation(words, phrases), flags)
    if pattern.match(""):
        raise VocabularyError(f"{category}: compiled pattern matches the empty string")
    return pattern


def build_vocabulary(word_lists: WordLists) -> CompiledVocabulary:
    """
    Compile word lists into an immutable vocabulary.

    Args:
        word_lists: Literal word lists

    Returns:
        CompiledVocabulary with one alternation per category

    Raises:
        VocabularyError: If an entry is empty or not a string
    """
    reserved = order_longest_first(_validated("reserved", word_lists.reserved), fold_case=True)
    top_level = order_longest_first(
        _validated("reserved_top_level", word_lists.reserved_top_level), fold_case=True
    )
    newline = order_longest_first(
        _validated("reserved_newline", word_lists.reserved_newline), fold_case=True
    )
    functions = order_longest_first(_validated("functions", word_lists.functions), fold_case=True)
    boundaries = order_longest_first(_validated("boundaries", word_lists.boundaries))

    vocabulary = CompiledVocabulary(
        boundaries=_compile("boundaries", boundaries, phrases=False),
        functions=_compile("functions", functions, phrases=False, flags=re.IGNORECASE),
        reserved=_compile("reserved", reserved, phrases=True, flags=re.IGNORECASE),
        reserved_top_level=_compile(
            "reserved_top_level", top_level, phrases=True, flags=re.IGNORECASE
        ),
        reserved_newline=_compile("reserved_newline", newline, phrases=True, flags=re.IGNORECASE),
        reserved_words=reserved,
    )
    logger.debug(
        "Compiled vocabulary: %d reserved, %d top-level, %d newline, %d functions, %d boundaries",
        len(reserved),
        len(top_level),
        len(newline),
        len(functions),
        len(boundaries),
    )
    return vocabulary
