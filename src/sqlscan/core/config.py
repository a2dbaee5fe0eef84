"""
Tokenizer configuration for sqlscan.

Settings come from a ``sqlscan.toml`` file::

    [tokenizer]
    cache = true
    cache_prefix_size = 15
    cache_context_key = true
    cache_max_entries = 10000

    [vocabulary]
    extra_reserved = ["QUALIFY"]
    extra_functions = ["JSON_EXTRACT"]

or from the ``[tool.sqlscan.tokenizer]`` / ``[tool.sqlscan.vocabulary]``
tables of a ``pyproject.toml``. Environment variables override the file:

    SQLSCAN_CACHE               on/off
    SQLSCAN_CACHE_PREFIX_SIZE   integer
    SQLSCAN_CACHE_CONTEXT_KEY   on/off
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from .cache import DEFAULT_PREFIX_SIZE
from .errors import ConfigError
from .vocabulary import WordLists

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "sqlscan.toml"
PYPROJECT_FILENAME = "pyproject.toml"

ENV_CACHE = "SQLSCAN_CACHE"
ENV_CACHE_PREFIX_SIZE = "SQLSCAN_CACHE_PREFIX_SIZE"
ENV_CACHE_CONTEXT_KEY = "SQLSCAN_CACHE_CONTEXT_KEY"

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")

# [vocabulary] key -> WordLists category
_VOCABULARY_KEYS = {
    "extra_reserved": "reserved",
    "extra_functions": "functions",
    "extra_boundaries": "boundaries",
    "extra_reserved_top_level": "reserved_top_level",
    "extra_reserved_newline": "reserved_newline",
}


@dataclass
class TokenizerConfig:
    """Tokenizer settings."""

    cache_enabled: bool = True
    cache_prefix_size: int = DEFAULT_PREFIX_SIZE
    cache_context_key: bool = True
    cache_max_entries: int | None = None
    extra_reserved: list[str] = field(default_factory=list)
    extra_functions: list[str] = field(default_factory=list)
    extra_boundaries: list[str] = field(default_factory=list)
    extra_reserved_top_level: list[str] = field(default_factory=list)
    extra_reserved_newline: list[str] = field(default_factory=list)

    def word_lists(self) -> WordLists:
        """Return the default word lists extended with the configured extras."""
        extra = {
            category: getattr(self, key)
            for key, category in _VOCABULARY_KEYS.items()
            if getattr(self, key)
        }
        return WordLists.default().extended(**extra)


def _expect(table: dict[str, Any], key: str, kind: type | tuple[type, ...], where: str) -> Any:
    value = table[key]
    # bool is an int subclass; reject it where an integer is expected
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ConfigError(f"{where}.{key} has the wrong type: {value!r}")
    return value


def _string_list(table: dict[str, Any], key: str, where: str) -> list[str]:
    values = _expect(table, key, list, where)
    if not all(isinstance(value, str) for value in values):
        raise ConfigError(f"{where}.{key} must be a list of strings")
    return list(values)


def config_from_dict(data: dict[str, Any], where: str = "sqlscan") -> TokenizerConfig:
    """
    Build a config from the parsed ``tokenizer`` and ``vocabulary`` tables.

    Args:
        data: Mapping with optional "tokenizer" and "vocabulary" tables
        where: Prefix used in error messages

    Raises:
        ConfigError: If a value has the wrong type
    """
    config = TokenizerConfig()
    tokenizer = data.get("tokenizer", {})
    vocabulary = data.get("vocabulary", {})

    if "cache" in tokenizer:
        config.cache_enabled = _expect(tokenizer, "cache", bool, f"{where}.tokenizer")
    if "cache_prefix_size" in tokenizer:
        config.cache_prefix_size = _expect(
            tokenizer, "cache_prefix_size", int, f"{where}.tokenizer"
        )
    if "cache_context_key" in tokenizer:
        config.cache_context_key = _expect(
            tokenizer, "cache_context_key", bool, f"{where}.tokenizer"
        )
    if "cache_max_entries" in tokenizer:
        config.cache_max_entries = _expect(
            tokenizer, "cache_max_entries", int, f"{where}.tokenizer"
        )

    for key in _VOCABULARY_KEYS:
        if key in vocabulary:
            setattr(config, key, _string_list(vocabulary, key, f"{where}.vocabulary"))

    if config.cache_prefix_size < 1:
        raise ConfigError(f"{where}.tokenizer.cache_prefix_size must be positive")
    return config


def load_config(path: Path) -> TokenizerConfig:
    """
    Load tokenizer settings from ``sqlscan.toml`` or ``pyproject.toml``.

    Raises:
        ConfigError: If the file cannot be read or parsed
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e

    if path.name == PYPROJECT_FILENAME:
        data = data.get("tool", {}).get("sqlscan", {})
        return config_from_dict(data, where="tool.sqlscan")
    return config_from_dict(data)


def _has_tool_table(pyproject: Path) -> bool:
    try:
        data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError):
        return False
    return "sqlscan" in data.get("tool", {})


def find_config(start: Path | None = None) -> Path | None:
    """Search ``start`` and its parents for a sqlscan config file."""
    directory = (start or Path.cwd()).resolve()
    for candidate in (directory, *directory.parents):
        config_path = candidate / CONFIG_FILENAME
        if config_path.is_file():
            return config_path
        pyproject = candidate / PYPROJECT_FILENAME
        if pyproject.is_file() and _has_tool_table(pyproject):
            return pyproject
    return None


def _env_flag(name: str, current: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return current
    value = raw.lower().strip()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    logger.warning("Unknown %s value '%s', keeping %s", name, raw, current)
    return current


def apply_env_overrides(config: TokenizerConfig) -> TokenizerConfig:
    """Return a copy of ``config`` with SQLSCAN_* environment overrides applied."""
    prefix_size = config.cache_prefix_size
    raw_size = os.environ.get(ENV_CACHE_PREFIX_SIZE)
    if raw_size is not None:
        try:
            parsed = int(raw_size)
        except ValueError:
            parsed = 0
        if parsed >= 1:
            prefix_size = parsed
        else:
            logger.warning(
                "Invalid %s value '%s', keeping %d", ENV_CACHE_PREFIX_SIZE, raw_size, prefix_size
            )

    return replace(
        config,
        cache_enabled=_env_flag(ENV_CACHE, config.cache_enabled),
        cache_prefix_size=prefix_size,
        cache_context_key=_env_flag(ENV_CACHE_CONTEXT_KEY, config.cache_context_key),
    )


def resolve_config(path: Path | None = None) -> TokenizerConfig:
    """
    Load the effective configuration.

    Uses ``path`` when given, otherwise the nearest config file found from
    the current directory, otherwise defaults; then applies environment
    overrides.
    """
    config_path = path or find_config()
    config = load_config(config_path) if config_path else TokenizerConfig()
    if config_path:
        logger.debug("Loaded tokenizer config from %s", config_path)
    return apply_env_overrides(config)
