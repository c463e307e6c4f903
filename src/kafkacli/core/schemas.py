"""Schema registration with optional forced compatibility."""

from __future__ import annotations

import logging

from kafkacli.core.http import ApiError
from kafkacli.core.registry import CompatibilityLevel, RegisteredSchema, RegistryAdapter

logger = logging.getLogger(__name__)


def current_compatibility(adapter: RegistryAdapter, subject: str) -> CompatibilityLevel:
    """Return the subject's compatibility level, or the global one if unset."""
    try:
        return adapter.get_subject_compatibility(subject)
    except ApiError as exc:
        if exc.status_code != 404:
            raise
    return adapter.get_global_compatibility()


def register_schema(
    adapter: RegistryAdapter,
    subject: str,
    schema: str,
    *,
    schema_type: str | None = None,
    force: bool = False,
) -> RegisteredSchema:
    """
    Register `schema` under `subject`.

    With `force`, compatibility checks are bypassed:
      1) read the subject's compatibility level
      2) set it to NONE if it is not NONE already
      3) register the schema
      4) restore the original level, whether the registration worked or not

    This is not atomic. If the process dies between 2) and 4) the subject
    is left with compatibility NONE.
    """
    if not force:
        return adapter.register(subject, schema, schema_type)

    original = current_compatibility(adapter, subject)
    if original is CompatibilityLevel.NONE:
        return adapter.register(subject, schema, schema_type)

    logger.info("Lowering compatibility of %s from %s to NONE", subject, original.value)
    adapter.set_subject_compatibility(subject, CompatibilityLevel.NONE)
    try:
        return adapter.register(subject, schema, schema_type)
    finally:
        logger.info("Restoring compatibility of %s to %s", subject, original.value)
        adapter.set_subject_compatibility(subject, original)
