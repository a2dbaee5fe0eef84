"""Installed sqlscan version."""

from importlib.metadata import PackageNotFoundError, version

DISTRIBUTION = "sqlscan"


def get_version() -> str:
    """Return the installed distribution version, or a placeholder for a bare checkout."""
    try:
        return version(DISTRIBUTION)
    except PackageNotFoundError:
        return "0.0.0+unknown"
