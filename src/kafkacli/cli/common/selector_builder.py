"""Selector construction utilities.

Translates the `--connector` argument into a concrete ConnectorSelector,
validating it before any request is sent.
"""

from kafkacli.core.selectors import ConnectorSelector, NameRegexSelector


def build_selector(connector: str | None) -> ConnectorSelector:
    """
    Build a name selector from the user-provided connector pattern.

    Args:
        connector: Connector name or regular expression.

    Returns:
        A NameRegexSelector for the pattern.

    Raises:
        ValueError: If the pattern is empty or not a valid regex.
    """
    if not connector:
        raise ValueError("Missing or invalid argument 'connector'")
    return NameRegexSelector(connector)
