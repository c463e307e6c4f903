import pytest

from kafkacli.core.connect import ConnectorState
from kafkacli.core.selectors import NameRegexSelector, StateSelector
from stubs import FakeConnect, status


def test_name_regex_selector_matches():
    selector = NameRegexSelector("sink")

    assert selector.matches("hdfs-sink-orders") is True


def test_name_regex_selector_no_match():
    selector = NameRegexSelector("^sink")

    assert selector.matches("hdfs-sink-orders") is False


def test_name_regex_selector_rejects_invalid_regex():
    with pytest.raises(ValueError, match="Invalid regex"):
        NameRegexSelector("orders[")


def test_state_selector_matches_connector_or_task_state():
    adapter = FakeConnect(
        ["a", "b", "c"],
        statuses={
            "a": status("a", "FAILED"),
            "b": status("b", "RUNNING", "RUNNING", "FAILED"),
            "c": status("c", "RUNNING", "RUNNING"),
        },
    )
    selector = StateSelector(ConnectorState.FAILED, adapter)

    assert [selector.matches(n) for n in ("a", "b", "c")] == [True, True, False]
    assert adapter.calls == [("status", "a"), ("status", "b"), ("status", "c")]
