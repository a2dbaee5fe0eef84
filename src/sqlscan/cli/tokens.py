"""
Tokenizing CLI commands.

- tokenize: print the token stream of a SQL file, string or stdin
- check:    fail when the input contains unrecognized characters
- vocab:    show the compiled word lists
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from sqlscan.core.config import resolve_config
from sqlscan.core.errors import SqlscanError
from sqlscan.core.tokenizer import Tokenizer
from sqlscan.core.tokens import Token, TokenKind

console = Console()

VOCABULARY_CATEGORIES = (
    "reserved",
    "reserved_top_level",
    "reserved_newline",
    "functions",
    "boundaries",
)


def _read_sql(file: Path | None, sql: str | None) -> str | bytes:
    if sql is not None:
        return sql
    if file is not None:
        try:
            return file.read_bytes()
        except OSError as e:
            typer.echo(f"Cannot read {file}: {e}", err=True)
            raise typer.Exit(code=1) from e
    return sys.stdin.read()


def _build_tokenizer(config: Path | None) -> Tokenizer:
    try:
        return Tokenizer(config=resolve_config(config))
    except SqlscanError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(code=2) from e


def _run(tokenizer: Tokenizer, text: str | bytes) -> list[Token]:
    try:
        return tokenizer.tokenize(text)
    except SqlscanError as e:
        typer.echo(f"Internal tokenizer error: {e}", err=True)
        raise typer.Exit(code=3) from e


def tokenize_command(
    file: Path | None = typer.Argument(None, help="SQL file (default: stdin)"),
    sql: str | None = typer.Option(None, "--sql", "-s", help="SQL text to tokenize"),
    as_json: bool = typer.Option(False, "--json", help="Print one JSON object per token"),
    no_whitespace: bool = typer.Option(
        False, "--no-whitespace", help="Hide whitespace tokens"
    ),
    config: Path | None = typer.Option(None, "--config", "-c", help="Path to sqlscan.toml"),
) -> None:
    """Print the token stream of SQL text."""
    tokenizer = _build_tokenizer(config)
    tokens = _run(tokenizer, _read_sql(file, sql))

    rows = [
        (index, token)
        for index, token in enumerate(tokens)
        if not (no_whitespace and token.kind is TokenKind.WHITESPACE)
    ]

    if as_json:
        for index, token in rows:
            typer.echo(json.dumps({"index": index, **token.model_dump(mode="json")}))
        return

    table = Table(title=f"{len(tokens)} tokens")
    table.add_column("#", justify="right", style="bright_black")
    table.add_column("Kind", style="cyan")
    table.add_column("Text")
    for index, token in rows:
        kind = f"{token.kind.value} (function)" if token.function else token.kind.value
        table.add_row(str(index), kind, repr(token.text))
    console.print(table)


def check_command(
    file: Path | None = typer.Argument(None, help="SQL file (default: stdin)"),
    sql: str | None = typer.Option(None, "--sql", "-s", help="SQL text to check"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Path to sqlscan.toml"),
) -> None:
    """Exit with code 1 if the SQL contains unrecognized characters."""
    tokenizer = _build_tokenizer(config)
    tokens = _run(tokenizer, _read_sql(file, sql))

    offset = 0
    errors = []
    for token in tokens:
        if token.kind is TokenKind.ERROR:
            errors.append((offset, token.text))
        offset += len(token.text)

    if not errors:
        typer.echo(f"✓ {len(tokens)} tokens, no unrecognized characters")
        return

    for error_offset, text in errors:
        typer.echo(f"offset {error_offset}: unrecognized character {text!r}")
    raise typer.Exit(code=1)


def vocab_command(
    category: str | None = typer.Option(
        None, "--category", "-k", help=f"Only list one of: {', '.join(VOCABULARY_CATEGORIES)}"
    ),
    config: Path | None = typer.Option(None, "--config", "-c", help="Path to sqlscan.toml"),
) -> None:
    """Show the compiled vocabulary."""
    if category is not None and category not in VOCABULARY_CATEGORIES:
        typer.echo(f"Unknown category: {category}", err=True)
        raise typer.Exit(code=2)

    try:
        word_lists = resolve_config(config).word_lists()
    except SqlscanError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(code=2) from e

    if category is not None:
        for word in getattr(word_lists, category):
            typer.echo(word)
        return

    table = Table(title="Vocabulary")
    table.add_column("Category", style="cyan")
    table.add_column("Entries", justify="right")
    table.add_column("Longest")
    for name in VOCABULARY_CATEGORIES:
        words = getattr(word_lists, name)
        longest = max(words, key=len) if words else ""
        table.add_row(name, str(len(words)), longest)
    console.print(table)
