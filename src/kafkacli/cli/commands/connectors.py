"""Commands for managing Kafka Connect connectors."""

from __future__ import annotations

import typer

from kafkacli.cli.common.commands import CommandSpec
from kafkacli.cli.common.context import ConnectAppContext
from kafkacli.cli.common.exits import (
    exit_from_exc,
    exit_on_failures,
    ok_exit,
    require_arg,
    require_positive_int,
    warn_exit,
)
from kafkacli.cli.common.options import (
    ConfigJsonOpt,
    ConfigOpt,
    ConfigPropsOpt,
    ConnectorNameOpt,
    ConnectorOpt,
    DryRunOpt,
    SelectOpt,
    StateOpt,
    TasksMaxOpt,
    YesOpt,
)
from kafkacli.cli.common.output import out
from kafkacli.cli.common.selector_builder import build_selector
from kafkacli.core.connect import ConnectorConfig, load_connector_config
from kafkacli.core.connectors import (
    delete_all,
    delete_connectors,
    fetch_for_each,
    find_matching,
    list_connectors,
    pause_connectors,
    restart_failed_tasks,
    resume_connectors,
    scale_connector,
)
from kafkacli.core.http import KafkaCliError
from kafkacli.core.results import Failure, ItemResult, attempt, failures


def _appctx(ctx: typer.Context) -> ConnectAppContext:
    return ctx.obj


def _matching_or_exit(appctx: ConnectAppContext, connector: str | None) -> list[str]:
    """Resolve the connectors matched by `connector`, exiting when there are none."""
    try:
        selector = build_selector(connector)
    except ValueError as exc:
        exit_from_exc(exc)

    try:
        with out.status("Loading connectors..."):
            names = find_matching(appctx.adapter, selector)
    except KafkaCliError as exc:
        out.render(Failure(exc), pretty=appctx.pretty)

    if not names:
        warn_exit(f"No matching connector found for '{connector}'", code=0)
    return names


def _load_config_or_exit(
    config: str | None, config_json: str | None, config_props: str | None
) -> ConnectorConfig:
    try:
        return load_connector_config(config, config_json, config_props)
    except ValueError as exc:
        exit_from_exc(exc)



def _print_reads(appctx: ConnectAppContext, results: list[ItemResult]) -> None:
    """One match prints its payload; several print a list of payloads."""
    if len(results) == 1:
        out.render(results[0].outcome, pretty=appctx.pretty)
        return
    out.payload([r.value for r in results if r.ok], pretty=appctx.pretty)
    exit_on_failures(results, what="read")


def list_cmd(ctx: typer.Context, with_state: str | None = StateOpt):
    """List active connectors, optionally filtered on connector/task state."""
    appctx = _appctx(ctx)
    with out.status("Loading connectors..."):
        outcome = attempt(lambda: list_connectors(appctx.adapter, with_state))
    out.render(outcome, pretty=appctx.pretty)


def config_cmd(ctx: typer.Context, connector: str | None = ConnectorOpt):
    """Get the configuration of the matching connectors."""
    appctx = _appctx(ctx)
    names = _matching_or_exit(appctx, connector)
    _print_reads(appctx, fetch_for_each(names, appctx.adapter.get_config))


def status_cmd(ctx: typer.Context, connector: str | None = ConnectorOpt):
    """Get the status of the matching connectors."""
    appctx = _appctx(ctx)
    names = _matching_or_exit(appctx, connector)
    _print_reads(appctx, fetch_for_each(names, appctx.adapter.get_status))


def tasks_cmd(ctx: typer.Context, connector: str | None = ConnectorOpt):
    """Get the tasks of the matching connectors."""
    appctx = _appctx(ctx)
    names = _matching_or_exit(appctx, connector)
    _print_reads(appctx, fetch_for_each(names, appctx.adapter.get_tasks))


def create_cmd(
    ctx: typer.Context,
    config: str | None = ConfigOpt,
    config_json: str | None = ConfigJsonOpt,
    config_props: str | None = ConfigPropsOpt,
):
    """Create a new connector."""
    appctx = _appctx(ctx)
    connector_config = _load_config_or_exit(config, config_json, config_props)
    out.render(
        attempt(lambda: appctx.adapter.create(connector_config)), pretty=appctx.pretty
    )


def update_cmd(
    ctx: typer.Context,
    connector: str | None = ConnectorNameOpt,
    config: str | None = ConfigOpt,
    config_json: str | None = ConfigJsonOpt,
    config_props: str | None = ConfigPropsOpt,
):
    """Update the configuration of a connector."""
    appctx = _appctx(ctx)
    name = require_arg(connector, "connector")
    loaded = _load_config_or_exit(config, config_json, config_props)
    updated = ConnectorConfig(name=name, config=loaded.config)
    out.render(attempt(lambda: appctx.adapter.update_config(updated)), pretty=appctx.pretty)


def delete_cmd(
    ctx: typer.Context,
    connector: str | None = ConnectorOpt,
    select: bool = SelectOpt,
    dry_run: bool = DryRunOpt,
):
    """Delete the matching connectors (their configuration is printed first)."""
    appctx = _appctx(ctx)
    names = _matching_or_exit(appctx, connector)

    if select:
        names = out.select_many("Select connectors to delete:", names)
        if not names:
            warn_exit("No connectors selected.", code=0)

    if dry_run:
        out.connectors_table(names, title="Connectors to delete")
        warn_exit("DRY RUN: no changes will be made.", code=0)

    results = delete_connectors(appctx.adapter, names, on_backup=out.backup)
    for r in results:
        if r.ok:
            out.success(f"Successfully deleted connector {r.name}")
    exit_on_failures(results, what="delete")


def delete_all_cmd(
    ctx: typer.Context,
    dry_run: bool = DryRunOpt,
    yes: bool = YesOpt,
):
    """Delete all connectors, stopping at the first failure."""
    appctx = _appctx(ctx)
    confirmed: list[str] | None = None

    if dry_run or not yes:
        outcome = attempt(appctx.adapter.list_connectors)
        if isinstance(outcome, Failure):
            out.render(outcome, pretty=appctx.pretty)
        if not outcome.value:
            ok_exit("No connectors to delete.")
        out.connectors_table(outcome.value, title="Connectors to delete")
        if dry_run:
            warn_exit("DRY RUN: no changes will be made.", code=0)
        if not out.confirm("Proceed with deleting ALL connectors?"):
            warn_exit("Cancelled.", code=0)
        confirmed = outcome.value

    try:
        results = delete_all(appctx.adapter, confirmed, on_backup=out.backup)
    except KafkaCliError as exc:
        out.render(Failure(exc), pretty=appctx.pretty)

    for r in results:
        if r.ok:
            out.success(f"Successfully deleted connector {r.name}")
    failed = failures(results)
    if failed:
        out.error(f"Failed to delete connector {failed[0].name}: {failed[0].error}")
        out.warn("Stopped at the first failure; remaining connectors were not deleted.")
        raise typer.Exit(1)


def pause_cmd(ctx: typer.Context, connector: str | None = ConnectorOpt):
    """Pause the matching connectors."""
    appctx = _appctx(ctx)
    names = _matching_or_exit(appctx, connector)
    results = pause_connectors(appctx.adapter, names)
    for r in results:
        if r.ok:
            out.success(f"Successfully paused connector {r.name}")
    exit_on_failures(results, what="pause")


def resume_cmd(ctx: typer.Context, connector: str | None = ConnectorOpt):
    """Resume the matching connectors."""
    appctx = _appctx(ctx)
    names = _matching_or_exit(appctx, connector)
    results = resume_connectors(appctx.adapter, names)
    for r in results:
        if r.ok:
            out.success(f"Successfully resumed connector {r.name}")
    exit_on_failures(results, what="resume")


def restart_failed_cmd(ctx: typer.Context, connector: str | None = ConnectorOpt):
    """Restart the failed tasks of the matching connectors."""
    appctx = _appctx(ctx)
    names = _matching_or_exit(appctx, connector)
    with out.status("Restarting failed tasks..."):
        results = restart_failed_tasks(appctx.adapter, names)

    restarts = [restart for r in results if r.ok for restart in r.value]
    if restarts:
        out.task_restarts_table(restarts)
        not_restarted = [r for r in restarts if not r.ok]
        if not_restarted:
            out.warn(f"{len(not_restarted)} task(s) could not be restarted.")
    else:
        out.info("No failed tasks found.")

    out.payload(restarts, pretty=appctx.pretty)
    exit_on_failures(results, what="read status of")


def scale_cmd(
    ctx: typer.Context,
    connector: str | None = ConnectorNameOpt,
    tasks_max: str | None = TasksMaxOpt,
):
    """Scale up/down the number of tasks of a connector."""
    appctx = _appctx(ctx)
    name = require_arg(connector, "connector")
    wanted = require_positive_int(tasks_max, "tasks-max")
    outcome = attempt(lambda: scale_connector(appctx.adapter, name, wanted))
    out.render(outcome, pretty=appctx.pretty)


def plugins_cmd(ctx: typer.Context):
    """List the connector plugins installed on the worker."""
    appctx = _appctx(ctx)
    out.render(attempt(appctx.adapter.list_plugins), pretty=appctx.pretty)


def version_cmd(ctx: typer.Context):
    """Get the connect worker version."""
    appctx = _appctx(ctx)
    out.render(attempt(appctx.adapter.version), pretty=appctx.pretty)


COMMANDS = [
    CommandSpec("list", list_cmd, "Listing active connectors on a worker."),
    CommandSpec("config", config_cmd, "Getting connector configuration."),
    CommandSpec("create", create_cmd, "Creating a new connector."),
    CommandSpec("delete", delete_cmd, "Deleting a connector."),
    CommandSpec(
        "delete-all",
        delete_all_cmd,
        "Deleting all connectors (exactly the confirmed list; with --yes, whatever the worker lists).",
    ),
    CommandSpec(
        "pause",
        pause_cmd,
        "Pausing a connector (useful if downtime is needed for the system "
        "the connector interacts with).",
    ),
    CommandSpec("plugins", plugins_cmd, "Listing installed connectors plugins."),
    CommandSpec("resume", resume_cmd, "Resuming a connector."),
    CommandSpec("restart-failed", restart_failed_cmd, "Restarting failed tasks for a connector."),
    CommandSpec("status", status_cmd, "Getting connector status."),
    CommandSpec("tasks", tasks_cmd, "Getting tasks for a connector."),
    CommandSpec("scale", scale_cmd, "Scaling up/down the number of tasks for a connector."),
    CommandSpec("update", update_cmd, "Updating connector configuration."),
    CommandSpec("version", version_cmd, "Getting a connect worker version."),
]
