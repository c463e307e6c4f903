"""schema-registry-cli: inspect and manage a Confluent Schema Registry."""

import typer

from kafkacli.cli.commands.schemas import COMMANDS
from kafkacli.cli.common.commands import register_commands
from kafkacli.cli.common.context import build_registry_context
from kafkacli.cli.common.options import (
    HostOpt,
    PortOpt,
    PrettyOpt,
    TimeoutOpt,
    VerboseOpt,
)
from kafkacli.cli.common.output import configure_logging

app = typer.Typer(
    help="schema-registry-cli - inspect and manage a Confluent Schema Registry",
    no_args_is_help=True,
)


@app.callback()
def _init(
    ctx: typer.Context,
    host: str | None = HostOpt,
    port: int | None = PortOpt,
    timeout: float | None = TimeoutOpt,
    pretty: bool = PrettyOpt,
    verbose: bool = VerboseOpt,
):
    """Initialize the registry context (host, port, output flags)."""
    configure_logging(verbose)
    ctx.obj = build_registry_context(host, port, timeout=timeout, pretty=pretty)


register_commands(app, COMMANDS)


if __name__ == "__main__":
    app()
