"""Exit handling utilities for the CLI."""

from typing import NoReturn

import typer

from kafkacli.cli.common.output import out
from kafkacli.core.results import ItemResult, failures


def ok_exit(msg: str | None = None) -> NoReturn:
    """Exit successfully with an optional informational message."""
    if msg:
        out.info(msg)
    raise typer.Exit(0)


def die(msg: str, code: int = 1) -> NoReturn:
    """Exit with an error message and optional exit code."""
    out.error(msg)
    raise typer.Exit(code)


def warn_exit(msg: str, code: int = 0) -> NoReturn:
    """Exit with a warning message and optional exit code."""
    out.warn(msg)
    raise typer.Exit(code)


def exit_from_exc(exc: Exception, *, code: int = 1) -> NoReturn:
    """Report a usage error (bad pattern, unreadable file...) and exit, chaining `exc`."""
    out.error(str(exc))
    raise typer.Exit(code) from exc


def exit_on_failures(results: list[ItemResult], *, what: str) -> None:
    """Print one error line per failed connector, then exit 1 if there was any."""
    failed = failures(results)
    for r in failed:
        out.error(f"Failed to {what} connector {r.name}: {r.error}")
    if failed:
        raise typer.Exit(1)


def require_arg(value: str | None, name: str) -> str:
    """Return `value`, or exit 1 when a required argument is missing or empty."""
    if not value:
        die(f"Missing or invalid argument '{name}'", code=1)
    return value


def require_positive_int(value: str | None, name: str) -> int:
    """Parse a required integer argument that must be > 0, exiting 1 otherwise."""
    message = f"Missing or invalid argument '{name}' (must be > 0)"
    try:
        number = int(require_arg(value, name))
    except ValueError:
        die(message, code=1)
    if number <= 0:
        die(message, code=1)
    return number
