"""Application context management for the CLI."""

from dataclasses import dataclass

from kafkacli.cli.common.exits import die
from kafkacli.core import hosts
from kafkacli.core.adapters.kafkaconnect import KafkaConnectAdapter
from kafkacli.core.adapters.schemaregistry import SchemaRegistryAdapter


@dataclass
class ConnectAppContext:
    """Application context holding the Kafka Connect adapter and output flags."""

    host: str
    port: int
    pretty: bool
    adapter: KafkaConnectAdapter


@dataclass
class RegistryAppContext:
    """Application context holding the Schema Registry adapter and output flags."""

    host: str
    port: int
    pretty: bool
    adapter: SchemaRegistryAdapter


def _check_port(port: int) -> int:
    if not 0 < port < 65536:
        die(f"Missing or invalid argument 'port': {port}", code=1)
    return port


def build_connect_context(
    host: str | None,
    port: int | None,
    *,
    timeout: float | None = None,
    pretty: bool = False,
) -> ConnectAppContext:
    """Build the context for kafka-connect-cli.

    Host and port fall back to KAFKA_CONNECT_HOST / KAFKA_CONNECT_PORT,
    then to ~/.kafkacli/hosts, then to localhost:8083.
    """
    host = host or hosts.connect_host()
    port = _check_port(port if port is not None else hosts.connect_port())
    adapter = KafkaConnectAdapter.for_worker(host, port, timeout=timeout)
    return ConnectAppContext(host=host, port=port, pretty=pretty, adapter=adapter)


def build_registry_context(
    host: str | None,
    port: int | None,
    *,
    timeout: float | None = None,
    pretty: bool = False,
) -> RegistryAppContext:
    """Build the context for schema-registry-cli."""
    host = host or hosts.registry_host()
    port = _check_port(port if port is not None else hosts.registry_port())
    adapter = SchemaRegistryAdapter.for_registry(host, port, timeout=timeout)
    return RegistryAppContext(host=host, port=port, pretty=pretty, adapter=adapter)
