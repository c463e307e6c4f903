from __future__ import annotations

from typing import Any, Mapping

from kafkacli.core.http import (
    SCHEMA_REGISTRY_CONTENT_TYPE,
    DecodeError,
    RestClient,
    base_url,
    quote_segment,
)
from kafkacli.core.registry import (
    LATEST_VERSION,
    CompatibilityLevel,
    RegisteredSchema,
    SchemaVersion,
)

SUBJECTS = "/subjects/"


class SchemaRegistryAdapter:
    """Adapter around the Schema Registry REST API."""

    def __init__(self, rest: RestClient) -> None:
        self.rest = rest

    @classmethod
    def for_registry(
        cls, host: str, port: int, *, timeout: float | None = None
    ) -> SchemaRegistryAdapter:
        """Create an adapter talking to the registry at host:port."""
        rest = RestClient(
            base_url(host, port),
            headers={"Accept": SCHEMA_REGISTRY_CONTENT_TYPE},
            timeout=timeout,
        )
        return cls(rest)

    def _subject_path(self, subject: str, suffix: str = "") -> str:
        return f"{SUBJECTS}{quote_segment(subject)}{suffix}"

    def list_subjects(self) -> list[str]:
        """List registered subjects."""
        subjects = self.rest.request("GET", SUBJECTS)
        if not isinstance(subjects, list):
            raise DecodeError(f"Unexpected subject list payload: {subjects!r}")
        return [str(s) for s in subjects]

    def list_versions(self, subject: str) -> list[int]:
        """List the versions registered under a subject."""
        versions = self.rest.request("GET", self._subject_path(subject, "/versions"))
        try:
            return [int(v) for v in versions]
        except (TypeError, ValueError) as exc:
            raise DecodeError(f"Unexpected version list payload: {versions!r}") from exc

    def get_version(self, subject: str, version: str = LATEST_VERSION) -> SchemaVersion:
        """Return one version (or `latest`) of a subject's schema."""
        path = self._subject_path(subject, f"/versions/{quote_segment(version)}")
        return SchemaVersion.from_dict(self.rest.request("GET", path))

    def register(
        self, subject: str, schema: str, schema_type: str | None = None
    ) -> RegisteredSchema:
        """Register a new schema version under a subject."""
        payload = self.rest.request(
            "POST", self._subject_path(subject, "/versions"), _schema_body(schema, schema_type)
        )
        return RegisteredSchema(id=_int_field(payload, "id"))

    def lookup(
        self, subject: str, schema: str, schema_type: str | None = None
    ) -> SchemaVersion:
        """Return the registered version of `schema` under a subject (404 if absent)."""
        payload = self.rest.request(
            "POST", self._subject_path(subject), _schema_body(schema, schema_type)
        )
        return SchemaVersion.from_dict(payload)

    def get_global_compatibility(self) -> CompatibilityLevel:
        """Return the global compatibility level."""
        return _compatibility(self.rest.request("GET", "/config"))

    def get_subject_compatibility(self, subject: str) -> CompatibilityLevel:
        """Return the compatibility level configured for a subject."""
        return _compatibility(self.rest.request("GET", f"/config/{quote_segment(subject)}"))

    def set_subject_compatibility(
        self, subject: str, level: CompatibilityLevel
    ) -> CompatibilityLevel:
        """Set the compatibility level of a subject."""
        payload = self.rest.request(
            "PUT", f"/config/{quote_segment(subject)}", {"compatibility": level.value}
        )
        return _compatibility(payload)

    def test_compatibility(
        self,
        subject: str,
        schema: str,
        version: str = LATEST_VERSION,
        schema_type: str | None = None,
    ) -> bool:
        """Test a schema against one version of a subject."""
        path = f"/compatibility{self._subject_path(subject, f'/versions/{quote_segment(version)}')}"
        payload = self.rest.request("POST", path, _schema_body(schema, schema_type))
        if not isinstance(payload, Mapping) or "is_compatible" not in payload:
            raise DecodeError(f"Unexpected compatibility payload: {payload!r}")
        return bool(payload["is_compatible"])


def _schema_body(schema: str, schema_type: str | None) -> dict[str, Any]:
    body: dict[str, Any] = {"schema": schema}
    if schema_type and schema_type.upper() != "AVRO":
        body["schemaType"] = schema_type.upper()
    return body


def _int_field(payload: Any, key: str) -> int:
    try:
        return int(payload[key])
    except (KeyError, TypeError, ValueError) as exc:
        raise DecodeError(f"Missing '{key}' in response: {payload!r}") from exc


def _compatibility(payload: Any) -> CompatibilityLevel:
    """Read a level from `compatibilityLevel` (GET) or `compatibility` (PUT)."""
    if isinstance(payload, Mapping):
        raw = payload.get("compatibilityLevel") or payload.get("compatibility")
        if isinstance(raw, str):
            try:
                return CompatibilityLevel.parse(raw)
            except ValueError as exc:
                raise DecodeError(str(exc)) from exc
    raise DecodeError(f"Unexpected compatibility payload: {payload!r}")
