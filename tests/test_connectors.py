import pytest

from kafkacli.core.connect import ConnectorConfig
from kafkacli.core.connectors import (
    delete_all,
    delete_connector,
    delete_connectors,
    fetch_for_each,
    find_matching,
    list_connectors,
    pause_connectors,
    restart_failed_tasks,
    scale_connector,
)
from kafkacli.core.http import ApiError, TransportError
from kafkacli.core.selectors import NameRegexSelector
from stubs import FakeConnect, not_found, status

NAMES = ["orders-source", "orders-sink", "payments-sink", "audit"]


def test_find_matching_plain_name_is_an_unanchored_search():
    adapter = FakeConnect(["audit", "audit-v2", "pre-audit", "orders"])

    assert find_matching(adapter, NameRegexSelector("audit")) == ["audit", "audit-v2", "pre-audit"]


def test_find_matching_anchored_pattern_selects_a_single_name():
    adapter = FakeConnect(["audit", "audit-v2", "pre-audit"])

    assert find_matching(adapter, NameRegexSelector("^audit$")) == ["audit"]


def test_find_matching_wildcard_keeps_list_order():
    adapter = FakeConnect(NAMES)

    assert find_matching(adapter, NameRegexSelector(".*")) == NAMES


def test_find_matching_no_match_is_empty():
    adapter = FakeConnect(NAMES)

    assert find_matching(adapter, NameRegexSelector("nothing-like-this")) == []


def test_find_matching_propagates_list_failure():
    adapter = FakeConnect(NAMES, fail={("list",): TransportError("connection refused")})

    with pytest.raises(TransportError):
        find_matching(adapter, NameRegexSelector(".*"))


def test_list_connectors_filters_on_state():
    adapter = FakeConnect(
        ["a", "b", "c"],
        statuses={
            "a": status("a", "RUNNING", "RUNNING"),
            "b": status("b", "PAUSED", "PAUSED"),
            "c": status("c", "RUNNING", "FAILED"),
        },
    )

    assert list_connectors(adapter, "failed") == ["c"]
    assert list_connectors(adapter, "Paused") == ["b"]


@pytest.mark.parametrize("state", ["bogus", "", None])
def test_list_connectors_unknown_state_returns_everything(state):
    adapter = FakeConnect(["a", "b"])

    assert list_connectors(adapter, state) == ["a", "b"]
    assert adapter.calls_of("status") == []


def test_state_filter_aborts_on_first_status_error():
    adapter = FakeConnect(
        ["a", "b", "c"],
        statuses={"a": status("a", "RUNNING"), "c": status("c", "RUNNING")},
        fail={("status", "b"): not_found("b")},
    )

    with pytest.raises(ApiError, match="Connector b not found"):
        list_connectors(adapter, "RUNNING")
    assert ("status", "c") not in adapter.calls


def test_fetch_for_each_collects_reads_and_errors():
    adapter = FakeConnect(configs={"a": {"k": "v"}}, fail={("config", "b"): not_found("b")})

    results = fetch_for_each(["a", "b"], adapter.get_config)

    assert results[0].ok and results[0].value == ConnectorConfig("a", {"k": "v"})
    assert not results[1].ok and "not found" in results[1].error


def test_delete_continues_after_a_failure():
    adapter = FakeConnect(fail={("delete", "b"): not_found("b")})

    results = delete_connectors(adapter, ["a", "b", "c"])

    assert [r.ok for r in results] == [True, False, True]
    assert adapter.calls_of("delete") == [("delete", "a"), ("delete", "b"), ("delete", "c")]
    assert "Connector b not found" in results[1].error


def test_delete_all_stops_at_first_failure():
    adapter = FakeConnect(["a", "b", "c"], fail={("delete", "b"): not_found("b")})

    results = delete_all(adapter)

    assert [(r.name, r.ok) for r in results] == [("a", True), ("b", False)]
    assert ("delete", "c") not in adapter.calls
    assert ("config", "c") not in adapter.calls


def test_delete_all_deletes_every_connector():
    adapter = FakeConnect(["a", "b"])

    results = delete_all(adapter)

    assert all(r.ok for r in results)
    assert adapter.calls_of("delete") == [("delete", "a"), ("delete", "b")]


def test_delete_all_with_names_deletes_exactly_those():
    adapter = FakeConnect(["a", "b", "c"])

    results = delete_all(adapter, ["a", "c"])

    assert [r.name for r in results] == ["a", "c"]
    assert adapter.calls_of("list") == []
    assert adapter.calls_of("delete") == [("delete", "a"), ("delete", "c")]


def test_delete_dumps_config_before_delete():
    adapter = FakeConnect(configs={"a": {"tasks.max": "1"}})
    seen = []

    backup = delete_connector(
        adapter, "a", on_backup=lambda c: seen.append((c, list(adapter.calls)))
    )

    assert backup == ConnectorConfig("a", {"tasks.max": "1"})
    assert seen == [(backup, [("config", "a")])]
    assert adapter.calls == [("config", "a"), ("delete", "a")]


def test_delete_proceeds_when_config_backup_fails():
    adapter = FakeConnect(fail={("config", "a"): TransportError("timeout")})
    seen = []

    backup = delete_connector(adapter, "a", on_backup=seen.append)

    assert backup is None
    assert seen == []
    assert ("delete", "a") in adapter.calls


def test_pause_reports_each_connector():
    adapter = FakeConnect(fail={("pause", "a"): not_found("a")})

    results = pause_connectors(adapter, ["a", "b"])

    assert [(r.name, r.ok) for r in results] == [("a", False), ("b", True)]


def test_restart_failed_tasks_only_restarts_failed_ones():
    adapter = FakeConnect(
        statuses={"a": status("a", "RUNNING", "RUNNING", "FAILED", "FAILED")},
    )

    results = restart_failed_tasks(adapter, ["a"])

    assert adapter.calls_of("restart") == [("restart", "a", 1), ("restart", "a", 2)]
    assert [r.task_id for r in results[0].value] == [1, 2]


def test_restart_errors_are_not_fatal():
    adapter = FakeConnect(
        statuses={"a": status("a", "RUNNING", "FAILED", "FAILED")},
        fail={("restart", "a", 0): ApiError(409, "rebalance in progress")},
    )

    results = restart_failed_tasks(adapter, ["a"])

    assert results[0].ok is True
    restarts = results[0].value
    assert [(r.task_id, r.ok) for r in restarts] == [(0, False), (1, True)]
    assert restarts[0].error == "rebalance in progress"


def test_restart_status_failure_is_per_connector():
    adapter = FakeConnect(
        statuses={"b": status("b", "RUNNING", "FAILED")},
        fail={("status", "a"): not_found("a")},
    )

    results = restart_failed_tasks(adapter, ["a", "b"])

    assert [r.ok for r in results] == [False, True]
    assert adapter.calls_of("restart") == [("restart", "b", 0)]


def test_scale_overwrites_tasks_max_and_keeps_other_keys():
    config = {
        "connector.class": "FileStreamSink",
        "tasks.max": "2",
        "topics": "orders",
    }
    adapter = FakeConnect(configs={"sink": config})

    updated = scale_connector(adapter, "sink", 5)

    assert adapter.calls == [("config", "sink"), ("update", "sink")]
    sent = adapter.updated[0]
    assert sent.name == "sink"
    assert dict(sent.config) == {**config, "tasks.max": "5"}
    assert updated == sent


@pytest.mark.parametrize("tasks_max", [0, -1])
def test_scale_rejects_non_positive_before_any_call(tasks_max):
    adapter = FakeConnect()

    with pytest.raises(ValueError, match="tasks-max"):
        scale_connector(adapter, "sink", tasks_max)
    assert adapter.calls == []


def test_scale_propagates_read_failure_without_update():
    adapter = FakeConnect(fail={("config", "sink"): not_found("sink")})

    with pytest.raises(ApiError):
        scale_connector(adapter, "sink", 3)
    assert adapter.calls_of("update") == []
