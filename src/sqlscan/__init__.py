"""
sqlscan - SQL tokenizer for formatters.

Splits SQL text into typed tokens (whitespace, words, quoted strings,
reserved words, boundaries, comments, numbers, variables) without losing a
single character of the input.
"""

from __future__ import annotations

from ._version import get_version
from .core.errors import ConfigError, SqlscanError, TokenizerStalledError, VocabularyError
from .core.tokenizer import Tokenizer, tokenize
from .core.tokens import Token, TokenKind
from .core.vocabulary import WordLists

__version__ = get_version()

__all__ = [
    "__version__",
    "Tokenizer",
    "tokenize",
    "Token",
    "TokenKind",
    "WordLists",
    "SqlscanError",
    "VocabularyError",
    "TokenizerStalledError",
    "ConfigError",
]
