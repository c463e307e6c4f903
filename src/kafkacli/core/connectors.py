"""Connector matching and bulk operations.

All operations here are serial: one HTTP call at a time, in the order the
worker lists the connectors. The error policy differs per operation and
is chosen explicitly at each call site:

    operation              policy
    ---------------------  ----------------------------------------------
    state-filter matching  abort on the first status error
    delete / pause /       continue on error, one ItemResult per connector
    resume / reads
    delete-all             fail fast on the first delete error
    restart-failed         task restart errors are logged, never fatal
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable

from kafkacli.core.connect import (
    ConnectAdapter,
    ConnectorConfig,
    ConnectorState,
)
from kafkacli.core.results import (
    ErrorPolicy,
    ItemResult,
    apply_to_each,
)
from kafkacli.core.selectors import ConnectorSelector, StateSelector

logger = logging.getLogger(__name__)

BackupCallback = Callable[[ConnectorConfig], None]


def find_matching(adapter: ConnectAdapter, selector: ConnectorSelector) -> list[str]:
    """
    Return the names of all connectors matched by `selector`.

    The connector list is fetched once; if that call fails the error
    propagates. Order follows the worker's listing. Selector errors
    (e.g. a failed status fetch) abort the matching and propagate.
    """
    return [name for name in adapter.list_connectors() if selector.matches(name)]


def list_connectors(adapter: ConnectAdapter, state: str | None = None) -> list[str]:
    """
    List connectors, optionally keeping only those in `state`.

    A state that is not one of RUNNING, FAILED, PAUSED or UNASSIGNED
    disables the filter and the full list is returned.
    """
    wanted = ConnectorState.parse(state)
    if wanted is None:
        return adapter.list_connectors()
    return find_matching(adapter, StateSelector(wanted, adapter))


def fetch_for_each(names: Iterable[str], fetch: Callable[[str], Any]) -> list[ItemResult]:
    """Run a read call for each connector, continuing past failures."""
    return apply_to_each(names, fetch, policy=ErrorPolicy.CONTINUE)


def delete_connector(
    adapter: ConnectAdapter,
    name: str,
    *,
    on_backup: BackupCallback | None = None,
) -> ConnectorConfig | None:
    """
    Delete a connector after dumping its configuration.

    The configuration is read first and handed to `on_backup` so it can be
    used to recreate the connector later. That read is best-effort: when
    it fails a warning is logged and the delete still happens.

    Returns the backed-up configuration, or None when it could not be read.
    """
    backup: ConnectorConfig | None = None
    try:
        backup = adapter.get_config(name)
    except Exception as exc:  # noqa: BLE001
        logger.warning("Could not read configuration of %s before delete: %s", name, exc)
    else:
        if on_backup is not None:
            on_backup(backup)

    adapter.delete(name)
    return backup


def delete_connectors(
    adapter: ConnectAdapter,
    names: Iterable[str],
    *,
    on_backup: BackupCallback | None = None,
) -> list[ItemResult]:
    """Delete each connector; a failure is recorded and the batch goes on."""
    return apply_to_each(
        names,
        lambda name: delete_connector(adapter, name, on_backup=on_backup),
        policy=ErrorPolicy.CONTINUE,
    )


def delete_all(
    adapter: ConnectAdapter,
    names: Iterable[str] | None = None,
    *,
    on_backup: BackupCallback | None = None,
) -> list[ItemResult]:
    """
    Delete every connector on the worker, or exactly `names` when the
    caller already listed (and confirmed) them.

    Stops at the first failed delete: the returned list ends with that
    failure and later connectors are left untouched.
    """
    if names is None:
        names = adapter.list_connectors()
    return apply_to_each(
        names,
        lambda name: delete_connector(adapter, name, on_backup=on_backup),
        policy=ErrorPolicy.FAIL_FAST,
    )


def pause_connectors(adapter: ConnectAdapter, names: Iterable[str]) -> list[ItemResult]:
    return apply_to_each(names, adapter.pause, policy=ErrorPolicy.CONTINUE)


def resume_connectors(adapter: ConnectAdapter, names: Iterable[str]) -> list[ItemResult]:
    return apply_to_each(names, adapter.resume, policy=ErrorPolicy.CONTINUE)


@dataclass(frozen=True)
class TaskRestart:
    """Result of restarting one failed task."""

    connector: str
    task_id: int
    ok: bool
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"connector": self.connector, "task": self.task_id, "ok": self.ok}
        if self.error:
            out["error"] = self.error
        return out


def restart_failed(adapter: ConnectAdapter, name: str) -> list[TaskRestart]:
    """
    Restart every FAILED task of one connector.

    A failing restart does not fail the operation: it is logged and
    reported as a TaskRestart with ok=False. Status errors propagate.
    """
    status = adapter.get_status(name)
    restarts: list[TaskRestart] = []
    for task in status.failed_tasks():
        try:
            adapter.restart_task(status.name or name, task.id)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Restart of task %s for connector %s failed: %s", task.id, name, exc)
            restarts.append(TaskRestart(name, task.id, ok=False, error=str(exc)))
        else:
            restarts.append(TaskRestart(name, task.id, ok=True))
    return restarts


def restart_failed_tasks(adapter: ConnectAdapter, names: Iterable[str]) -> list[ItemResult]:
    """Restart failed tasks for each connector, continuing past status errors."""
    return apply_to_each(
        names,
        lambda name: restart_failed(adapter, name),
        policy=ErrorPolicy.CONTINUE,
    )


def scale_connector(adapter: ConnectAdapter, name: str, tasks_max: int) -> ConnectorConfig:
    """
    Set `tasks.max` of a connector with a read-modify-write.

    The current configuration is fetched, `tasks.max` is overwritten and
    the full map is submitted back. The REST API has no conditional
    update, so a change made by someone else between the read and the
    write is silently overwritten.

    Raises:
        ValueError: if `tasks_max` is not a positive integer (no call is made).
    """
    if isinstance(tasks_max, bool) or not isinstance(tasks_max, int) or tasks_max <= 0:
        raise ValueError("Missing or invalid argument 'tasks-max' (must be > 0)")

    current = adapter.get_config(name)
    updated = ConnectorConfig(name=name, config=current.with_tasks_max(tasks_max).config)
    return adapter.update_config(updated)
