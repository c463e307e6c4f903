"""Core Kafka Connect domain models.

This module defines the connector data structures (ConnectorStatus,
ConnectorConfig, ConnectorState) and the adapter interface used by the
matching and bulk operations. It is intentionally free of CLI concerns
(output, prompts, exit codes) and of HTTP details.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Protocol

from kafkacli.core.hosts import read_props
from kafkacli.core.http import DecodeError

TASKS_MAX_KEY = "tasks.max"


class ConnectorState(str, Enum):
    """
    States a connector or one of its tasks can report.

    Values:
        RUNNING: The connector/task is running.
        FAILED: The connector/task failed (see the task trace).
        PAUSED: The connector/task was paused by an operator.
        UNASSIGNED: Not yet assigned to a worker.
    """

    RUNNING = "RUNNING"
    FAILED = "FAILED"
    PAUSED = "PAUSED"
    UNASSIGNED = "UNASSIGNED"

    @classmethod
    def parse(cls, value: str | None) -> ConnectorState | None:
        """Return the matching state (case-insensitive), or None if unknown."""
        if not value:
            return None
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None


@dataclass(frozen=True)
class TaskStatus:
    """
    Runtime status of a single connector task.

    Attributes:
        id: Numeric task id, unique within the connector.
        state: Raw state string; unrecognized values are kept as-is.
        worker_id: Worker the task is assigned to, if any.
        trace: Error trace reported for failed tasks.
    """

    id: int
    state: str
    worker_id: str | None = None
    trace: str | None = None


@dataclass(frozen=True)
class ConnectorStatus:
    """Point-in-time status of a connector and its tasks."""

    name: str
    state: str
    worker_id: str | None = None
    tasks: tuple[TaskStatus, ...] = ()

    @classmethod
    def from_dict(cls, payload: Any) -> ConnectorStatus:
        """Build a status from the `/connectors/{name}/status` response."""
        if not isinstance(payload, Mapping):
            raise DecodeError(f"Unexpected connector status payload: {payload!r}")
        connector = payload.get("connector") or {}
        try:
            tasks = tuple(
                TaskStatus(
                    id=int(t["id"]),
                    state=str(t.get("state", "")),
                    worker_id=t.get("worker_id"),
                    trace=t.get("trace"),
                )
                for t in payload.get("tasks") or []
            )
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise DecodeError(f"Malformed task status: {exc}") from exc
        return cls(
            name=str(payload.get("name", "")),
            state=str(connector.get("state", "")),
            worker_id=connector.get("worker_id"),
            tasks=tasks,
        )

    def to_dict(self) -> dict[str, Any]:
        tasks = []
        for t in self.tasks:
            task: dict[str, Any] = {"id": t.id, "state": t.state, "worker_id": t.worker_id}
            if t.trace:
                task["trace"] = t.trace
            tasks.append(task)
        return {
            "name": self.name,
            "connector": {"state": self.state, "worker_id": self.worker_id},
            "tasks": tasks,
        }

    def has_state(self, state: str) -> bool:
        """True if the connector or any of its tasks is in `state`."""
        return self.state == state or any(t.state == state for t in self.tasks)

    def failed_tasks(self) -> list[TaskStatus]:
        return [t for t in self.tasks if t.state == ConnectorState.FAILED.value]


@dataclass(frozen=True)
class ConnectorConfig:
    """
    A connector name plus its configuration map.

    Values are always strings, as the Connect REST API expects.
    """

    name: str
    config: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, payload: Any) -> ConnectorConfig:
        """Build a config from a `{"name": ..., "config": {...}}` mapping."""
        if not isinstance(payload, Mapping):
            raise DecodeError(f"Unexpected connector config payload: {payload!r}")
        config = payload.get("config") or {}
        if not isinstance(config, Mapping):
            raise DecodeError(f"Unexpected connector config map: {config!r}")
        return cls(
            name=str(payload.get("name") or ""),
            config={str(k): _as_config_value(v) for k, v in config.items()},
        )

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "config": dict(self.config)}

    def with_tasks_max(self, tasks_max: int) -> ConnectorConfig:
        """Return a copy with `tasks.max` set to `tasks_max`."""
        config = dict(self.config)
        config[TASKS_MAX_KEY] = str(tasks_max)
        return ConnectorConfig(name=self.name, config=config)


def _as_config_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


def load_connector_config(
    json_text: str | None = None,
    json_file: str | Path | None = None,
    props_file: str | Path | None = None,
) -> ConnectorConfig:
    """
    Read a connector configuration from a JSON string, a JSON file or a
    properties file. When several are given only the last of them is read
    (properties file over JSON file over JSON string).

    A properties file must define `name`; it is removed from the map.

    Raises:
        ValueError: if no source is given, a source is unreadable or invalid.
    """
    if props_file:
        try:
            props = read_props(props_file)
        except OSError as exc:
            raise ValueError(
                f"Error while reading config file '{props_file}': {exc}"
            ) from exc
        name = props.pop("name", "")
        if not name:
            raise ValueError("Missing required configuration field : 'name'")
        return ConnectorConfig(name=name, config=props)

    if json_file:
        try:
            text = Path(json_file).read_text(encoding="utf-8")
        except OSError as exc:
            raise ValueError(
                f"Error while reading config file '{json_file}': {exc}"
            ) from exc
        return _parse_config_json(text)

    if json_text:
        return _parse_config_json(json_text)

    raise ValueError(
        "Missing or invalid arguments [--config | --config-json | --config-props]"
    )


def _parse_config_json(text: str) -> ConnectorConfig:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid configuration - error: {exc}") from exc
    try:
        return ConnectorConfig.from_dict(payload)
    except DecodeError as exc:
        raise ValueError(f"Invalid configuration - error: {exc}") from exc


class ConnectAdapter(Protocol):
    """Interface for Kafka Connect operations used by the core domain."""

    def list_connectors(self) -> list[str]:
        """Return the names of all active connectors."""
        ...

    def get_status(self, name: str) -> ConnectorStatus:
        """Return the current status of a connector."""
        ...

    def get_config(self, name: str) -> ConnectorConfig:
        """Return the current configuration of a connector."""
        ...

    def update_config(self, config: ConnectorConfig) -> ConnectorConfig:
        """Replace the configuration of `config.name`."""
        ...

    def delete(self, name: str) -> None:
        ...

    def pause(self, name: str) -> None:
        ...

    def resume(self, name: str) -> None:
        ...

    def restart_task(self, name: str, task_id: int) -> None:
        ...
