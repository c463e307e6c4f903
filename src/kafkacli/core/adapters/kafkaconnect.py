from __future__ import annotations

from typing import Any

from kafkacli.core.connect import ConnectorConfig, ConnectorStatus
from kafkacli.core.http import DecodeError, RestClient, base_url, quote_segment

CONNECTORS = "/connectors/"


class KafkaConnectAdapter:
    """Adapter around the Kafka Connect REST interface of a worker."""

    def __init__(self, rest: RestClient) -> None:
        self.rest = rest

    @classmethod
    def for_worker(
        cls, host: str, port: int, *, timeout: float | None = None
    ) -> KafkaConnectAdapter:
        """Create an adapter talking to the worker at host:port."""
        return cls(RestClient(base_url(host, port), timeout=timeout))

    def _connector_path(self, name: str, suffix: str = "") -> str:
        return f"{CONNECTORS}{quote_segment(name)}{suffix}"

    def version(self) -> Any:
        """Return the worker version information."""
        return self.rest.request("GET", "/")

    def list_plugins(self) -> Any:
        """List the connector plugins installed on the worker."""
        return self.rest.request("GET", "/connector-plugins")

    def list_connectors(self) -> list[str]:
        """List the names of all active connectors."""
        names = self.rest.request("GET", CONNECTORS)
        if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
            raise DecodeError(f"Unexpected connector list payload: {names!r}")
        return names

    def get_status(self, name: str) -> ConnectorStatus:
        """Return the status of a connector and its tasks."""
        return ConnectorStatus.from_dict(
            self.rest.request("GET", self._connector_path(name, "/status"))
        )

    def get_tasks(self, name: str) -> Any:
        """Return the task configurations of a connector."""
        return self.rest.request("GET", self._connector_path(name, "/tasks"))

    def get_config(self, name: str) -> ConnectorConfig:
        """Return the configuration of a connector."""
        return ConnectorConfig.from_dict(
            self.rest.request("GET", self._connector_path(name))
        )

    def create(self, config: ConnectorConfig) -> ConnectorConfig:
        """Create a new connector."""
        return ConnectorConfig.from_dict(
            self.rest.request("POST", CONNECTORS, config.to_dict())
        )

    def update_config(self, config: ConnectorConfig) -> ConnectorConfig:
        """Replace the configuration of an existing connector."""
        payload = self.rest.request(
            "PUT", self._connector_path(config.name, "/config"), dict(config.config)
        )
        return ConnectorConfig.from_dict(payload)

    def delete(self, name: str) -> None:
        """Delete a connector and stop its tasks."""
        self.rest.request("DELETE", self._connector_path(name))

    def pause(self, name: str) -> None:
        """Pause a connector and its tasks."""
        self.rest.request("PUT", self._connector_path(name, "/pause"))

    def resume(self, name: str) -> None:
        """Resume a paused connector."""
        self.rest.request("PUT", self._connector_path(name, "/resume"))

    def restart_task(self, name: str, task_id: int) -> None:
        """Restart a single task of a connector."""
        self.rest.request(
            "POST", self._connector_path(name, f"/tasks/{quote_segment(task_id)}/restart")
        )
