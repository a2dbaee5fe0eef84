"""Tests for tokenizer configuration loading."""

import logging
from pathlib import Path

import pytest

from sqlscan.core.config import (
    TokenizerConfig,
    apply_env_overrides,
    config_from_dict,
    find_config,
    load_config,
    resolve_config,
)
from sqlscan.core.errors import ConfigError
from sqlscan.core.tokenizer import Tokenizer
from sqlscan.core.tokens import TokenKind

SQLSCAN_TOML = """
[tokenizer]
cache = false
cache_prefix_size = 8
cache_context_key = false
cache_max_entries = 500

[vocabulary]
extra_reserved = ["QUALIFY"]
extra_functions = ["JSON_EXTRACT"]
"""

PYPROJECT_TOML = """
[project]
name = "demo"

[tool.sqlscan.tokenizer]
cache_prefix_size = 20
"""


class TestConfigFromDict:
    """Tests for config_from_dict."""

    def test_defaults(self):
        config = config_from_dict({})
        assert config == TokenizerConfig()
        assert config.cache_enabled is True
        assert config.cache_prefix_size == 15

    def test_all_settings(self):
        config = config_from_dict(
            {
                "tokenizer": {"cache": False, "cache_max_entries": 10},
                "vocabulary": {"extra_boundaries": ["=>"]},
            }
        )
        assert config.cache_enabled is False
        assert config.cache_max_entries == 10
        assert config.extra_boundaries == ["=>"]

    @pytest.mark.parametrize(
        "tokenizer",
        [
            {"cache": "yes"},
            {"cache_prefix_size": "15"},
            {"cache_prefix_size": True},
            {"cache_context_key": 1},
        ],
    )
    def test_wrong_types(self, tokenizer: dict):
        with pytest.raises(ConfigError, match="wrong type"):
            config_from_dict({"tokenizer": tokenizer})

    def test_vocabulary_entries_must_be_strings(self):
        with pytest.raises(ConfigError, match="list of strings"):
            config_from_dict({"vocabulary": {"extra_reserved": ["QUALIFY", 3]}})

    def test_non_positive_prefix_size(self):
        with pytest.raises(ConfigError, match="must be positive"):
            config_from_dict({"tokenizer": {"cache_prefix_size": 0}})


class TestLoadConfig:
    """Tests for reading config files."""

    def test_sqlscan_toml(self, tmp_path: Path):
        path = tmp_path / "sqlscan.toml"
        path.write_text(SQLSCAN_TOML)

        config = load_config(path)

        assert config.cache_enabled is False
        assert config.cache_prefix_size == 8
        assert config.cache_context_key is False
        assert config.cache_max_entries == 500
        assert config.extra_reserved == ["QUALIFY"]
        assert config.extra_functions == ["JSON_EXTRACT"]

    def test_pyproject_tool_table(self, tmp_path: Path):
        path = tmp_path / "pyproject.toml"
        path.write_text(PYPROJECT_TOML)
        assert load_config(path).cache_prefix_size == 20

    def test_pyproject_error_names_tool_table(self, tmp_path: Path):
        path = tmp_path / "pyproject.toml"
        path.write_text('[tool.sqlscan.tokenizer]\ncache = "no"\n')
        with pytest.raises(ConfigError, match="tool.sqlscan.tokenizer.cache"):
            load_config(path)

    def test_invalid_toml(self, tmp_path: Path):
        path = tmp_path / "sqlscan.toml"
        path.write_text("[tokenizer\ncache = ")
        with pytest.raises(ConfigError, match="Cannot read config"):
            load_config(path)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError):
            load_config(tmp_path / "sqlscan.toml")


class TestFindConfig:
    """Tests for config discovery."""

    def test_finds_file_in_parent(self, tmp_path: Path):
        (tmp_path / "sqlscan.toml").write_text(SQLSCAN_TOML)
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config(nested) == (tmp_path / "sqlscan.toml").resolve()

    def test_skips_pyproject_without_tool_table(self, tmp_path: Path):
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "demo"\n')
        assert find_config(tmp_path) is None

    def test_uses_pyproject_with_tool_table(self, tmp_path: Path):
        (tmp_path / "pyproject.toml").write_text(PYPROJECT_TOML)
        assert find_config(tmp_path) == (tmp_path / "pyproject.toml").resolve()

    def test_sqlscan_toml_preferred(self, tmp_path: Path):
        (tmp_path / "pyproject.toml").write_text(PYPROJECT_TOML)
        (tmp_path / "sqlscan.toml").write_text(SQLSCAN_TOML)
        assert find_config(tmp_path).name == "sqlscan.toml"


class TestEnvironmentOverrides:
    """Tests for SQLSCAN_* environment variables."""

    def test_no_overrides(self):
        config = TokenizerConfig(cache_prefix_size=9)
        assert apply_env_overrides(config) == config

    def test_overrides_applied(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SQLSCAN_CACHE", "off")
        monkeypatch.setenv("SQLSCAN_CACHE_PREFIX_SIZE", "32")
        monkeypatch.setenv("SQLSCAN_CACHE_CONTEXT_KEY", "no")

        config = apply_env_overrides(TokenizerConfig())

        assert config.cache_enabled is False
        assert config.cache_prefix_size == 32
        assert config.cache_context_key is False

    def test_original_config_unchanged(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SQLSCAN_CACHE", "0")
        original = TokenizerConfig()
        apply_env_overrides(original)
        assert original.cache_enabled is True

    @pytest.mark.parametrize(
        "name,value",
        [
            ("SQLSCAN_CACHE", "maybe"),
            ("SQLSCAN_CACHE_PREFIX_SIZE", "big"),
            ("SQLSCAN_CACHE_PREFIX_SIZE", "-4"),
        ],
    )
    def test_invalid_values_warn(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture, name, value
    ):
        monkeypatch.setenv(name, value)
        with caplog.at_level(logging.WARNING, logger="sqlscan.core.config"):
            config = apply_env_overrides(TokenizerConfig())

        assert config == TokenizerConfig()
        assert name in caplog.text


class TestResolveConfig:
    """Tests for the effective configuration."""

    def test_explicit_path_then_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        path = tmp_path / "sqlscan.toml"
        path.write_text(SQLSCAN_TOML)
        monkeypatch.setenv("SQLSCAN_CACHE", "on")

        config = resolve_config(path)

        assert config.cache_enabled is True
        assert config.cache_prefix_size == 8

    def test_discovers_from_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        (tmp_path / "sqlscan.toml").write_text(SQLSCAN_TOML)
        monkeypatch.chdir(tmp_path)
        assert resolve_config().extra_reserved == ["QUALIFY"]

    def test_defaults_without_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.chdir(tmp_path)
        assert resolve_config() == TokenizerConfig()


class TestConfiguredTokenizer:
    """Tests for tokenizers built from configuration."""

    def test_extra_reserved_word(self):
        tokenizer = Tokenizer(config=TokenizerConfig(extra_reserved=["QUALIFY"]))
        tokens = tokenizer.tokenize("QUALIFY x")
        assert tokens[0].kind is TokenKind.RESERVED

    def test_without_extra_word(self, tokenizer: Tokenizer):
        assert tokenizer.tokenize("QUALIFY x")[0].kind is TokenKind.WORD

    def test_cache_settings_reach_tokenizer(self):
        tokenizer = Tokenizer(
            config=TokenizerConfig(cache_prefix_size=6, cache_context_key=False)
        )
        assert tokenizer.cache.prefix_size == 6
        assert tokenizer.cache.context_key is False

    def test_invalid_cache_setting(self):
        with pytest.raises(ConfigError):
            Tokenizer(config=TokenizerConfig(cache_max_entries=0))
