"""Resolution of service host and port settings.

Values are looked up in the environment first, then in the user's
`~/.kafkacli/hosts` properties file, and finally fall back to a default.
"""

from __future__ import annotations

import os
from pathlib import Path

HOSTS_FILE_ENV = "KAFKACLI_HOSTS_FILE"

KAFKA_CONNECT_HOST_ENV = "KAFKA_CONNECT_HOST"
KAFKA_CONNECT_PORT_ENV = "KAFKA_CONNECT_PORT"
DEFAULT_CONNECT_HOST = "localhost"
DEFAULT_CONNECT_PORT = 8083

SCHEMA_REGISTRY_HOST_ENV = "SCHEMA_REGISTRY_HOST"
SCHEMA_REGISTRY_PORT_ENV = "SCHEMA_REGISTRY_PORT"
DEFAULT_REGISTRY_HOST = "localhost"
DEFAULT_REGISTRY_PORT = 8081


def read_props(path: str | Path) -> dict[str, str]:
    """
    Read a simple `key=value` properties file into a dict.

    Blank lines and lines starting with `#` are skipped. Only the first `=`
    separates key and value; a line without `=` maps the key to "".

    Raises:
        OSError: if the file cannot be read.
    """
    props: dict[str, str] = {}
    for raw in Path(path).read_text(encoding="utf-8").splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        key, _, value = line.partition("=")
        props[key] = value
    return props


def _hosts_file() -> Path:
    """Return the location of the per-user hosts file."""
    override = os.getenv(HOSTS_FILE_ENV)
    if override:
        return Path(override)
    return Path.home() / ".kafkacli" / "hosts"


def get_local_var(key: str, default: str) -> str:
    """Resolve `key` from the environment or the hosts file, else `default`."""
    value = os.getenv(key)
    if value:
        return value
    try:
        props = read_props(_hosts_file())
    except OSError:
        return default
    return props.get(key.lower()) or default


def _port_or_default(key: str, default: int) -> int:
    raw = get_local_var(key, str(default))
    try:
        return int(raw)
    except ValueError:
        return default


def connect_host() -> str:
    return get_local_var(KAFKA_CONNECT_HOST_ENV, DEFAULT_CONNECT_HOST)


def connect_port() -> int:
    return _port_or_default(KAFKA_CONNECT_PORT_ENV, DEFAULT_CONNECT_PORT)


def registry_host() -> str:
    return get_local_var(SCHEMA_REGISTRY_HOST_ENV, DEFAULT_REGISTRY_HOST)


def registry_port() -> int:
    return _port_or_default(SCHEMA_REGISTRY_PORT_ENV, DEFAULT_REGISTRY_PORT)
