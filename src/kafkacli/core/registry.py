"""Core domain models for the Schema Registry.

These models represent registry entities in a simple, immutable form.
They are intentionally free of HTTP and CLI concerns.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Protocol

from kafkacli.core.http import DecodeError

LATEST_VERSION = "latest"


class CompatibilityLevel(str, Enum):
    """Compatibility rules enforced by the registry when registering schemas."""

    NONE = "NONE"
    BACKWARD = "BACKWARD"
    BACKWARD_TRANSITIVE = "BACKWARD_TRANSITIVE"
    FORWARD = "FORWARD"
    FORWARD_TRANSITIVE = "FORWARD_TRANSITIVE"
    FULL = "FULL"
    FULL_TRANSITIVE = "FULL_TRANSITIVE"

    @classmethod
    def parse(cls, value: str) -> CompatibilityLevel:
        """Return the level for `value` (case-insensitive).

        Raises:
            ValueError: if `value` is not a known level.
        """
        try:
            return cls(value.strip().upper())
        except ValueError as exc:
            allowed = ", ".join(level.value for level in cls)
            raise ValueError(
                f"Invalid compatibility level '{value}' (expected one of {allowed})"
            ) from exc


@dataclass(frozen=True)
class SchemaVersion:
    """A schema registered under a subject at a given version."""

    subject: str
    version: int
    id: int
    schema: str
    schema_type: str | None = None

    @classmethod
    def from_dict(cls, payload: Any) -> SchemaVersion:
        if not isinstance(payload, Mapping):
            raise DecodeError(f"Unexpected schema payload: {payload!r}")
        try:
            return cls(
                subject=str(payload["subject"]),
                version=int(payload["version"]),
                id=int(payload["id"]),
                schema=str(payload["schema"]),
                schema_type=payload.get("schemaType"),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise DecodeError(f"Malformed schema payload: {exc}") from exc

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "subject": self.subject,
            "version": self.version,
            "id": self.id,
            "schema": self.schema,
        }
        if self.schema_type:
            out["schemaType"] = self.schema_type
        return out


@dataclass(frozen=True)
class RegisteredSchema:
    """Global id assigned by the registry to a registered schema."""

    id: int

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id}


def read_schema(schema: str | None, schema_file: str | Path | None) -> str:
    """
    Return the schema text from an inline value or a file.

    Raises:
        ValueError: if neither is given or the file cannot be read.
    """
    if schema_file:
        try:
            return Path(schema_file).read_text(encoding="utf-8")
        except OSError as exc:
            raise ValueError(
                f"Error while reading schema file '{schema_file}': {exc}"
            ) from exc
    if schema:
        return schema
    raise ValueError("Missing or invalid arguments [--schema | --schema-file]")


class RegistryAdapter(Protocol):
    """Interface for Schema Registry operations used by the core domain."""

    def get_subject_compatibility(self, subject: str) -> CompatibilityLevel:
        ...

    def get_global_compatibility(self) -> CompatibilityLevel:
        ...

    def set_subject_compatibility(
        self, subject: str, level: CompatibilityLevel
    ) -> CompatibilityLevel:
        ...

    def register(
        self, subject: str, schema: str, schema_type: str | None = None
    ) -> RegisteredSchema:
        ...
