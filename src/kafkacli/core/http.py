"""HTTP plumbing shared by the Kafka Connect and Schema Registry clients.

This module centralizes creation of the REST client used by the adapters
and applies small normalization rules (such as sanitizing the host) so
that both command-line tools talk to their services in the same way.
It also defines the error taxonomy surfaced to the CLI.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Mapping
from urllib.parse import quote

import requests

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"
SCHEMA_REGISTRY_CONTENT_TYPE = "application/vnd.schemaregistry.v1+json"

TIMEOUT_ENV = "KAFKACLI_HTTP_TIMEOUT"
DEFAULT_TIMEOUT_SECONDS = 30.0


class KafkaCliError(RuntimeError):
    """Base class for errors raised while talking to a remote service."""


class ApiError(KafkaCliError):
    """Raised when the service answers with an error status.

    The message is the raw response body, exactly as sent by the server.
    """

    def __init__(self, status_code: int, body: str, *, url: str | None = None):
        super().__init__(body)
        self.status_code = status_code
        self.body = body
        self.url = url


class TransportError(KafkaCliError):
    """Raised when the service cannot be reached (connection, timeout)."""


class DecodeError(KafkaCliError):
    """Raised when a successful response does not contain the expected JSON."""


def _sanitize_host(host: str) -> str:
    """
    Normalize a host value.

    - Removes an `http://` or `https://` prefix
    - Removes trailing slashes
    """
    host = host.strip()
    for prefix in ("http://", "https://"):
        if host.lower().startswith(prefix):
            host = host[len(prefix) :]
    return host.rstrip("/")


def base_url(host: str, port: int) -> str:
    """Return the `http://host:port` root URL for a service."""
    return f"http://{_sanitize_host(host)}:{port}"


def quote_segment(value: str | int) -> str:
    """Quote a value for use as a single URL path segment."""
    return quote(str(value), safe="")


def resolve_timeout(timeout: float | None = None) -> float:
    """Return the HTTP timeout in seconds, honoring the env override."""
    if timeout is not None and timeout > 0:
        return timeout
    raw = os.getenv(TIMEOUT_ENV)
    if raw is None:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        value = float(raw)
    except ValueError:
        return DEFAULT_TIMEOUT_SECONDS
    return value if value > 0 else DEFAULT_TIMEOUT_SECONDS


class RestClient:
    """Minimal blocking JSON-over-HTTP client built on a requests session."""

    def __init__(
        self,
        root_url: str,
        *,
        headers: Mapping[str, str] | None = None,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.root_url = root_url.rstrip("/")
        self.headers = {"Content-Type": JSON_CONTENT_TYPE, **(headers or {})}
        self.timeout = resolve_timeout(timeout)
        self.session = session or requests.Session()

    def url(self, path: str) -> str:
        """Build the full URL for a path relative to the service root."""
        return f"{self.root_url}{path}"

    def request(self, method: str, path: str, body: Any = None) -> Any:
        """
        Send a request and return the decoded JSON body.

        Returns None for empty responses (e.g. 204 No Content).

        Raises:
            TransportError: the request could not be sent or timed out.
            ApiError: the service answered with a status >= 400.
            DecodeError: the response body is not valid JSON.
        """
        url = self.url(path)
        logger.debug("%s %s", method, url)
        try:
            resp = self.session.request(
                method,
                url,
                headers=self.headers,
                json=body,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc

        logger.debug("%s %s -> %s", method, url, resp.status_code)
        if resp.status_code >= 400:
            raise ApiError(resp.status_code, resp.text, url=url)

        text = resp.text
        if not text or not text.strip():
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise DecodeError(
                f"Invalid JSON in response from {method} {url}: {exc}"
            ) from exc
