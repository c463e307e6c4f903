"""Tagged outcomes for single and batch operations.

A batch operation applies the same call to many connectors. Each call
produces an ItemResult holding either a Success or a Failure, so the CLI
can render every outcome with a single formatting function.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Success:
    """The operation completed; `value` is its payload (may be None)."""

    value: Any = None


@dataclass(frozen=True)
class Failure:
    """The operation failed with `error`."""

    error: Exception

    @property
    def message(self) -> str:
        return str(self.error)


Outcome = Success | Failure


@dataclass(frozen=True)
class ItemResult:
    """Outcome of an operation applied to one named resource."""

    name: str
    outcome: Outcome

    @property
    def ok(self) -> bool:
        return isinstance(self.outcome, Success)

    @property
    def value(self) -> Any:
        return self.outcome.value if isinstance(self.outcome, Success) else None

    @property
    def error(self) -> str | None:
        return self.outcome.message if isinstance(self.outcome, Failure) else None


class ErrorPolicy(str, Enum):
    """
    How a batch reacts to a failing item.

    Values:
        CONTINUE: Record the failure and move on to the next item.
        FAIL_FAST: Record the failure and stop; later items are not attempted.
    """

    CONTINUE = "continue"
    FAIL_FAST = "fail-fast"


def attempt(fn: Callable[[], Any]) -> Outcome:
    """Run `fn` and capture its result or exception as an Outcome."""
    try:
        return Success(fn())
    except Exception as exc:  # noqa: BLE001
        return Failure(exc)


def apply_to_each(
    names: Iterable[str],
    op: Callable[[str], Any],
    *,
    policy: ErrorPolicy,
) -> list[ItemResult]:
    """
    Apply `op` to each name, serially and in order.

    Returns one ItemResult per attempted name. With FAIL_FAST the list ends
    at the first failure.
    """
    results: list[ItemResult] = []
    for name in names:
        outcome = attempt(lambda: op(name))
        results.append(ItemResult(name=name, outcome=outcome))
        if isinstance(outcome, Failure):
            logger.debug("Operation failed for %s: %s", name, outcome.message)
            if policy is ErrorPolicy.FAIL_FAST:
                break
    return results


def failures(results: Iterable[ItemResult]) -> list[ItemResult]:
    return [r for r in results if not r.ok]
