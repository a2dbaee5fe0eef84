"""
sqlscan CLI.

- tokens.py: tokenize, check and vocab commands
"""

import logging
import platform
import sys

import typer

from sqlscan._version import get_version
from sqlscan.cli.tokens import check_command, tokenize_command, vocab_command


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"sqlscan {get_version()}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


app = typer.Typer(
    help="sqlscan – split SQL text into typed tokens",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """sqlscan CLI main callback for global options."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr
        )


app.command(name="tokenize")(tokenize_command)
app.command(name="check")(check_command)
app.command(name="vocab")(vocab_command)


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


__all__ = ["app", "main", "get_version", "version_callback"]


if __name__ == "__main__":
    main(sys.argv[1:])
