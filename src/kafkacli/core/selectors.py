"""Connector selector abstractions and implementations.

This module defines the selector system used to determine whether a
connector matches a given criterion. Name selectors are pure and
side-effect free; state selectors read the connector status from the
remote worker, one request per candidate.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from kafkacli.core.connect import ConnectorState

if TYPE_CHECKING:
    from kafkacli.core.connect import ConnectAdapter


class ConnectorSelector(ABC):
    """
    Abstract base class for all connector selectors.

    A ConnectorSelector encapsulates a single piece of matching logic that
    determines whether a connector, identified by name, should be selected.
    """

    @abstractmethod
    def matches(self, name: str) -> bool:
        """
        Determine whether the named connector matches this selector.

        Args:
            name: Connector name to evaluate.

        Returns:
            True if the connector matches the selector criteria.
        """
        ...


class NameRegexSelector(ConnectorSelector):
    """
    Selector that matches connectors whose name matches a regular expression.

    The pattern is a regex, not a literal, and the search is unanchored:
    `audit` also matches `audit-v2` and `pre-audit`. Use `^audit$` to
    select one connector. Metacharacters in names must be escaped by the caller.
    """

    def __init__(self, pattern: str):
        try:
            self.regex = re.compile(pattern)
        except re.error as exc:
            raise ValueError(f"Invalid regex expression: {exc}") from exc

    def matches(self, name: str) -> bool:
        return bool(self.regex.search(name))


class StateSelector(ConnectorSelector):
    """
    Selector that matches connectors where the connector itself or any of
    its tasks is in the given state.

    Each call to `matches` fetches the connector status; errors propagate.
    """

    def __init__(self, state: ConnectorState, adapter: ConnectAdapter):
        self.state = state
        self.adapter = adapter

    def matches(self, name: str) -> bool:
        status = self.adapter.get_status(name)
        return status.has_state(self.state.value)
