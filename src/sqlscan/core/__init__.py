"""Core sqlscan functionality: vocabulary, matchers, classifier pipeline, lookahead cache, tokenizer."""

from .cache import TokenCache
from .config import TokenizerConfig, load_config, resolve_config
from .errors import (
    ConfigError,
    ErrorContext,
    SqlscanError,
    TokenizerStalledError,
    VocabularyError,
)
from .matchers import Matcher
from .pipeline import ClassifierPipeline
from .tokenizer import ScanState, Tokenizer, get_tokenizer, tokenize
from .tokens import Token, TokenContext, TokenKind, context_of
from .vocabulary import CompiledVocabulary, WordLists, build_vocabulary

__all__ = [
    "SqlscanError",
    "VocabularyError",
    "TokenizerStalledError",
    "ConfigError",
    "ErrorContext",
    "Token",
    "TokenKind",
    "TokenContext",
    "context_of",
    "WordLists",
    "CompiledVocabulary",
    "build_vocabulary",
    "Matcher",
    "ClassifierPipeline",
    "TokenCache",
    "TokenizerConfig",
    "load_config",
    "resolve_config",
    "ScanState",
    "Tokenizer",
    "get_tokenizer",
    "tokenize",
]
