"""Declarative command tables shared by both command-line tools.

Each tool describes its subcommands as a list of CommandSpec entries;
the parameters of a command are the typer options declared on its
handler's signature.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable

import typer


@dataclass(frozen=True)
class CommandSpec:
    """One subcommand: its name, handler and one-line help."""

    name: str
    handler: Callable[..., None]
    help: str


def register_commands(app: typer.Typer, commands: Iterable[CommandSpec]) -> typer.Typer:
    """Register every command of `commands` on `app`, in table order."""
    for command in commands:
        app.command(command.name, help=command.help)(command.handler)
    return app
