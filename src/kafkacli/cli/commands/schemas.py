"""Commands for working with the Schema Registry."""

from __future__ import annotations

import typer

from kafkacli.cli.common.commands import CommandSpec
from kafkacli.cli.common.context import RegistryAppContext
from kafkacli.cli.common.exits import die, exit_from_exc, require_arg
from kafkacli.cli.common.options import (
    ForceOpt,
    LevelOpt,
    SchemaFileOpt,
    SchemaOpt,
    SchemaTypeOpt,
    SubjectOpt,
    VersionOpt,
)
from kafkacli.cli.common.output import out
from kafkacli.core.registry import CompatibilityLevel, read_schema
from kafkacli.core.results import attempt
from kafkacli.core.schemas import register_schema


def _appctx(ctx: typer.Context) -> RegistryAppContext:
    return ctx.obj


def _schema_or_exit(schema: str | None, schema_file: str | None) -> str:
    try:
        return read_schema(schema, schema_file)
    except ValueError as exc:
        exit_from_exc(exc)


def _compat_payload(level: CompatibilityLevel) -> dict[str, str]:
    return {"compatibilityLevel": level.value}


def subjects_cmd(ctx: typer.Context):
    """Get the list of registered subjects."""
    appctx = _appctx(ctx)
    out.render(attempt(appctx.adapter.list_subjects), pretty=appctx.pretty)


def versions_cmd(ctx: typer.Context, subject: str | None = SubjectOpt):
    """Get the list of versions registered under a subject."""
    appctx = _appctx(ctx)
    name = require_arg(subject, "subject")
    out.render(attempt(lambda: appctx.adapter.list_versions(name)), pretty=appctx.pretty)


def schema_cmd(
    ctx: typer.Context,
    subject: str | None = SubjectOpt,
    version: str = VersionOpt,
):
    """Get a specific version of the schema registered under a subject."""
    appctx = _appctx(ctx)
    name = require_arg(subject, "subject")
    if not version:
        die("Missing or invalid argument 'version'", code=1)
    out.render(
        attempt(lambda: appctx.adapter.get_version(name, version)),
        pretty=appctx.pretty,
    )


def register_cmd(
    ctx: typer.Context,
    subject: str | None = SubjectOpt,
    schema: str | None = SchemaOpt,
    schema_file: str | None = SchemaFileOpt,
    schema_type: str | None = SchemaTypeOpt,
    force: bool = ForceOpt,
):
    """Register a new schema version under a subject."""
    appctx = _appctx(ctx)
    name = require_arg(subject, "subject")
    text = _schema_or_exit(schema, schema_file)
    outcome = attempt(
        lambda: register_schema(
            appctx.adapter, name, text, schema_type=schema_type, force=force
        )
    )
    out.render(outcome, pretty=appctx.pretty)


def exists_cmd(
    ctx: typer.Context,
    subject: str | None = SubjectOpt,
    schema: str | None = SchemaOpt,
    schema_file: str | None = SchemaFileOpt,
    schema_type: str | None = SchemaTypeOpt,
):
    """Check if a schema is already registered under a subject."""
    appctx = _appctx(ctx)
    name = require_arg(subject, "subject")
    text = _schema_or_exit(schema, schema_file)
    out.render(
        attempt(lambda: appctx.adapter.lookup(name, text, schema_type)),
        pretty=appctx.pretty,
    )


def global_compatibility_cmd(ctx: typer.Context):
    """Get the global compatibility level."""
    appctx = _appctx(ctx)
    outcome = attempt(lambda: _compat_payload(appctx.adapter.get_global_compatibility()))
    out.render(outcome, pretty=appctx.pretty)


def compatibility_cmd(ctx: typer.Context, subject: str | None = SubjectOpt):
    """Get the compatibility level of a subject."""
    appctx = _appctx(ctx)
    name = require_arg(subject, "subject")
    outcome = attempt(
        lambda: _compat_payload(appctx.adapter.get_subject_compatibility(name))
    )
    out.render(outcome, pretty=appctx.pretty)


def set_compatibility_cmd(
    ctx: typer.Context,
    subject: str | None = SubjectOpt,
    level: str | None = LevelOpt,
):
    """Set the compatibility level of a subject."""
    appctx = _appctx(ctx)
    name = require_arg(subject, "subject")
    try:
        wanted = CompatibilityLevel.parse(require_arg(level, "level"))
    except ValueError as exc:
        exit_from_exc(exc)
    outcome = attempt(
        lambda: {
            "compatibility": appctx.adapter.set_subject_compatibility(name, wanted).value
        }
    )
    out.render(outcome, pretty=appctx.pretty)


def test_compatibility_cmd(
    ctx: typer.Context,
    subject: str | None = SubjectOpt,
    version: str = VersionOpt,
    schema: str | None = SchemaOpt,
    schema_file: str | None = SchemaFileOpt,
    schema_type: str | None = SchemaTypeOpt,
):
    """Test a schema for compatibility against a version of a subject."""
    appctx = _appctx(ctx)
    name = require_arg(subject, "subject")
    text = _schema_or_exit(schema, schema_file)
    outcome = attempt(
        lambda: {
            "is_compatible": appctx.adapter.test_compatibility(
                name, text, version=version, schema_type=schema_type
            )
        }
    )
    out.render(outcome, pretty=appctx.pretty)


COMMANDS = [
    CommandSpec(
        "global-compatibility",
        global_compatibility_cmd,
        "Getting the global compatibility level.",
    ),
    CommandSpec(
        "compatibility",
        compatibility_cmd,
        "Getting subject compatibility level for a subject.",
    ),
    CommandSpec(
        "set-compatibility",
        set_compatibility_cmd,
        "Setting the compatibility level for a subject.",
    ),
    CommandSpec(
        "schema",
        schema_cmd,
        "Getting a specific version of the schema registered under this subject.",
    ),
    CommandSpec("subjects", subjects_cmd, "Getting the list of registered subjects."),
    CommandSpec(
        "versions",
        versions_cmd,
        "Getting a list of versions registered under the specified subject.",
    ),
    CommandSpec("register", register_cmd, "Registering a new schema under a subject."),
    CommandSpec(
        "exists",
        exists_cmd,
        "Checking if a schema has already been registered under a subject.",
    ),
    CommandSpec(
        "test-compatibility",
        test_compatibility_cmd,
        "Testing a schema for compatibility against a subject version.",
    ),
]
