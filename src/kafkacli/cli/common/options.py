"""Common CLI options for both command-line tools."""

import typer

HostOpt = typer.Option(
    None,
    "--host",
    help="Service host address (defaults to env / ~/.kafkacli/hosts / localhost)",
    show_default=False,
)

PortOpt = typer.Option(
    None,
    "--port",
    help="Service port (defaults to env / ~/.kafkacli/hosts / built-in default)",
    show_default=False,
)

TimeoutOpt = typer.Option(
    None,
    "--timeout",
    help="HTTP timeout in seconds (default: $KAFKACLI_HTTP_TIMEOUT or 30)",
    show_default=False,
)

PrettyOpt = typer.Option(
    False,
    "--pretty",
    help="Pretty print json output.",
)

VerboseOpt = typer.Option(
    False,
    "--verbose",
    "-v",
    help="Log HTTP requests and other debug information to stderr",
)

ConnectorOpt = typer.Option(
    None,
    "--connector",
    "-c",
    help="The connector name or a regex.",
)

ConnectorNameOpt = typer.Option(
    None,
    "--connector",
    "-c",
    help="The exact connector name.",
)

StateOpt = typer.Option(
    None,
    "--with-state",
    help="Filter on connector/task for the specified state [running|failed|paused|unassigned]",
)

ConfigOpt = typer.Option(
    None,
    "--config",
    help="The connector configuration json string.",
)

ConfigJsonOpt = typer.Option(
    None,
    "--config-json",
    help="<file> The connector configuration json file.",
)

ConfigPropsOpt = typer.Option(
    None,
    "--config-props",
    help="<file> The connector configuration properties file.",
)

TasksMaxOpt = typer.Option(
    None,
    "--tasks-max",
    help="The max number of tasks (must be > 0).",
)

DryRunOpt = typer.Option(
    False,
    "--dry-run",
    help="Show which connectors would be affected, but change nothing",
)

YesOpt = typer.Option(False, "--yes", help="Skip confirmation prompt")

SelectOpt = typer.Option(
    False,
    "--select",
    help="Pick the connectors to act on from the matches",
)

SubjectOpt = typer.Option(
    None,
    "--subject",
    "-s",
    help="The name of the subject.",
)

VersionOpt = typer.Option(
    "latest",
    "--version",
    help='Version of the schema or the string "latest".',
)

SchemaOpt = typer.Option(
    None,
    "--schema",
    help="The schema definition as a string.",
)

SchemaFileOpt = typer.Option(
    None,
    "--schema-file",
    help="<file> The schema definition file.",
)

SchemaTypeOpt = typer.Option(
    None,
    "--schema-type",
    help="Schema type [AVRO|JSON|PROTOBUF] (default AVRO).",
)

ForceOpt = typer.Option(
    False,
    "--force",
    help="Set the subject compatibility to NONE while registering, then restore it",
)

LevelOpt = typer.Option(
    None,
    "--level",
    help="Compatibility level [NONE|BACKWARD|FORWARD|FULL|..._TRANSITIVE]",
)
