"""Shared pytest fixtures for sqlscan tests."""

import pytest

from sqlscan.core.config import TokenizerConfig
from sqlscan.core.tokenizer import Tokenizer
from sqlscan.core.vocabulary import CompiledVocabulary, WordLists, build_vocabulary


@pytest.fixture
def vocabulary() -> CompiledVocabulary:
    """Return the compiled default vocabulary."""
    return build_vocabulary(WordLists.default())


@pytest.fixture
def tokenizer() -> Tokenizer:
    """Return a fresh tokenizer with the default vocabulary and cache."""
    return Tokenizer()


@pytest.fixture
def uncached_tokenizer() -> Tokenizer:
    """Return a tokenizer with the lookahead cache disabled."""
    return Tokenizer(config=TokenizerConfig(cache_enabled=False))


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep SQLSCAN_* variables from the outer environment out of tests."""
    for name in ("SQLSCAN_CACHE", "SQLSCAN_CACHE_PREFIX_SIZE", "SQLSCAN_CACHE_CONTEXT_KEY"):
        monkeypatch.delenv(name, raising=False)

