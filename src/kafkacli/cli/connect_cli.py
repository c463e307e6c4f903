"""kafka-connect-cli: manage connectors through the Kafka Connect REST interface."""

import typer

from kafkacli.cli.commands.connectors import COMMANDS
from kafkacli.cli.common.commands import register_commands
from kafkacli.cli.common.context import build_connect_context
from kafkacli.cli.common.options import (
    HostOpt,
    PortOpt,
    PrettyOpt,
    TimeoutOpt,
    VerboseOpt,
)
from kafkacli.cli.common.output import configure_logging

app = typer.Typer(
    help="kafka-connect-cli - manage connectors through the Kafka Connect REST interface",
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
    """Initialize the worker context (host, port, output flags)."""
    configure_logging(verbose)
    ctx.obj = build_connect_context(host, port, timeout=timeout, pretty=pretty)


register_commands(app, COMMANDS)


if __name__ == "__main__":
    app()
