"""
Error types for sqlscan vocabulary compilation, configuration and tokenizing.
"""

from dataclasses import dataclass
from typing import Optional


class SqlscanError(Exception):
    """Base exception for all sqlscan errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class VocabularyError(SqlscanError):
    """
    Raised when a word list cannot be compiled into a vocabulary.

    Examples:
    - Empty or whitespace-only entries
    - Non-string entries
    - A category pattern that would match the empty string
    """

    pass


class TokenizerStalledError(SqlscanError):
    """
    Raised when a classification step produced a zero-length token.

    This is an engine defect, not bad input: unrecognized characters are
    reported as ERROR tokens and never raise.
    """

    def __init__(
        self,
        message: str,
        context: Optional["ErrorContext"] = None,
        matcher: str | None = None,
    ):
        self.matcher = matcher
        super().__init__(message, context)


class ConfigError(SqlscanError):
    """
    Raised when tokenizer configuration is invalid.

    Examples:
    - Unparseable sqlscan.toml
    - Wrong value types in the [tokenizer] table
    - Non-positive cache prefix size
    """

    pass


@dataclass
class ErrorContext:
    """
    Context information for an error, including input position.

    Attributes:
        offset: Character offset into the SQL input (0-indexed)
        snippet: Optional slice of the input starting at the offset
    """

    offset: int
    snippet: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "offset 12" followed by the snippet
        """
        location = f"offset {self.offset}"
        if self.snippet is not None:
            return f"{location}\n{self._format_snippet()}"
        return location

    def _format_snippet(self) -> str:
        """Show the first line of the snippet with a marker under its start."""
        if self.snippet is None:
            return ""
        first_line = self.snippet.split("\n", 1)[0]
        prefix = "    | "
        return f"{prefix}{first_line!r}\n{' ' * len(prefix)}^^^"


def make_stalled_error(
    offset: int,
    remaining: str,
    matcher: str | None = None,
    snippet_size: int = 20,
) -> TokenizerStalledError:
    """
    Helper to create a TokenizerStalledError with context.

    Args:
        offset: Offset at which the zero-length token was produced
        remaining: Unconsumed input at that offset
        matcher: Name of the matcher that produced the token, if known
        snippet_size: Number of characters of input to include

    Returns:
        TokenizerStalledError with context attached
    """
    by = f" by matcher {matcher!r}" if matcher else ""
    context = ErrorContext(offset=offset, snippet=remaining[:snippet_size])
    return TokenizerStalledError(
        f"Zero-length token produced{by} with {len(remaining)} characters remaining",
        context,
        matcher=matcher,
    )
