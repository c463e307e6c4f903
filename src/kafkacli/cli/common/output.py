"""Output formatting utilities for the CLI.

Messages, tables and spinners are written to stderr through a themed rich
console. The JSON payload of a command is the only thing written to
stdout, so the output of both tools can be piped into other programs.
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping

import questionary
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

from kafkacli.cli.common.tui_style import (
    QUESTIONARY_STYLE_CONFIRM,
    QUESTIONARY_STYLE_SELECT,
)
from kafkacli.core.connect import ConnectorConfig
from kafkacli.core.results import Failure, Outcome, Success

_THEME = Theme(
    {
        "ok": "bold green",
        "warn": "yellow",
        "err": "bold red",
        "title": "bold cyan",
        "meta": "dim",
    }
)

console = Console(theme=_THEME, stderr=True)


def configure_logging(verbose: bool = False) -> None:
    """Route stdlib logging through rich on stderr (DEBUG when verbose)."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=False)],
        force=True,
    )
    # urllib3 is chatty at DEBUG and only duplicates our own request log
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def to_jsonable(value: Any) -> Any:
    """Convert domain objects (anything with `to_dict`) into JSON values."""
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Mapping):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


def dumps(payload: Any, pretty: bool) -> str:
    """Serialize a payload, indented with 4 spaces when `pretty`."""
    return json.dumps(to_jsonable(payload), indent=4 if pretty else None)


def _error_text(message: str, pretty: bool) -> str:
    """Return a raw error body, re-indented if it is JSON and `pretty`."""
    if not pretty:
        return message
    try:
        return json.dumps(json.loads(message), indent=4)
    except ValueError:
        return message


@dataclass(frozen=True)
class Out:
    """Output formatter for CLI messages, tables and JSON payloads."""

    def _q_try(self, fn, *args, **kwargs):
        """Call questionary prompts and drop unsupported kwargs on older versions."""
        try:
            return fn(*args, **kwargs)
        except TypeError:
            for k in ("pointer", "checked_icon", "unchecked_icon", "auto_enter"):
                kwargs.pop(k, None)
            return fn(*args, **kwargs)

    def info(self, msg: str) -> None:
        """Print an info message."""
        console.print(f"[title]›[/] {escape(msg)}")

    @contextmanager
    def status(self, msg: str):
        """Show a transient status spinner while work is in progress."""
        with console.status(msg, spinner="dots"):
            yield

    def success(self, msg: str) -> None:
        """Print a success message."""
        console.print(f"[ok]✓[/] {escape(msg)}")

    def warn(self, msg: str) -> None:
        """Print a warning message."""
        console.print(f"[warn]⚠[/] {escape(msg)}")

    def error(self, msg: str) -> None:
        """Print an error message."""
        console.print(f"[err]✗[/] {escape(msg)}")

    def payload(self, payload: Any, *, pretty: bool = False) -> None:
        """Write a JSON payload to stdout."""
        typer.echo(dumps(payload, pretty))

    def render(self, outcome: Outcome, *, pretty: bool = False) -> None:
        """
        Print the outcome of a command and exit on failure.

        Success writes its payload as JSON (nothing for a None payload).
        Failure writes the raw error text to stdout and exits with code 1.
        """
        if isinstance(outcome, Failure):
            typer.echo(_error_text(outcome.message, pretty))
            raise typer.Exit(1)
        if isinstance(outcome, Success) and outcome.value is not None:
            self.payload(outcome.value, pretty=pretty)

    def backup(self, config: ConnectorConfig) -> None:
        """Print a connector config before it is deleted, as a rollback aid."""
        console.print(f"\n[title]Current configuration for connector {escape(config.name)}[/]\n")
        console.print_json(dumps(config, pretty=True), indent=4)
        console.print(
            "\n[meta]Save this to use as the `--config-json` option "
            "to recreate the connector[/]\n"
        )

    def select_many(self, message: str, choices: list[str]) -> list[str]:
        """
        Prompt the user to select multiple items from a list.

        Returns a list of selected values.
        """
        if not choices:
            return []

        prompt = self._q_try(
            questionary.checkbox,
            message,
            choices=choices,
            style=QUESTIONARY_STYLE_SELECT,
            qmark="✦",
            instruction="Use ↑/↓, space, a (all), i (invert), enter",
            pointer="❯",
            checked_icon="▣",
            unchecked_icon="▢",
        )
        picked = prompt.ask()
        return list(picked or [])

    def confirm(self, message: str, *, default: bool = False) -> bool:
        """
        Ask the user for confirmation using a standardized Questionary prompt.

        Args:
            message: Confirmation question shown to the user.
            default: Default answer if the user just presses enter.

        Returns:
            True if the user confirms, False otherwise.
        """
        console.print("[meta]Use y/n then Enter[/]")

        prompt = self._q_try(
            questionary.confirm,
            message,
            default=default,
            style=QUESTIONARY_STYLE_CONFIRM,
            qmark="✦",
            auto_enter=False,
        )
        return bool(prompt.ask())

    def connectors_table(self, names: Iterable[str], title: str = "Connectors") -> None:
        """Render a table of connector names."""
        t = Table(title=title, show_lines=False)
        t.add_column("Connector", style="ok")

        for name in names:
            t.add_row(str(name))

        console.print(t)

    def task_restarts_table(self, restarts: Iterable[Any], title: str = "Task restarts") -> None:
        """
        Expects objects with .connector .task_id .ok .error
        (like kafkacli.core.connectors.TaskRestart)
        """
        t = Table(title=title, show_lines=False)
        t.add_column("Connector", style="ok")
        t.add_column("Task", no_wrap=True)
        t.add_column("Result")

        for r in restarts:
            t.add_row(
                str(r.connector),
                str(r.task_id),
                "[ok]RESTARTED[/]" if r.ok else f"[err]FAIL[/] {escape(str(r.error))}",
            )

        console.print(t)


out = Out()
