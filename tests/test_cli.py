import json

import pytest
from typer.testing import CliRunner

from kafkacli.cli import connect_cli, registry_cli
from kafkacli.cli.common.context import ConnectAppContext, RegistryAppContext
from kafkacli.cli.common.output import Out
from kafkacli.core.registry import CompatibilityLevel, RegisteredSchema
from stubs import FakeConnect, not_found, status

runner = CliRunner()


@pytest.fixture
def run_connect(monkeypatch):
    def _run(adapter, *args):
        def _build(host, port, *, timeout=None, pretty=False):
            return ConnectAppContext(host="connect", port=8083, pretty=pretty, adapter=adapter)

        monkeypatch.setattr(connect_cli, "build_connect_context", _build)
        return runner.invoke(connect_cli.app, list(args))

    return _run


def _last_json(output: str):
    return json.loads(output.strip().splitlines()[-1])


def test_list_prints_names(run_connect):
    result = run_connect(FakeConnect(["a", "b"]), "list")

    assert result.exit_code == 0
    assert _last_json(result.output) == ["a", "b"]


def test_list_with_state(run_connect):
    adapter = FakeConnect(
        ["a", "b"],
        statuses={"a": status("a", "RUNNING"), "b": status("b", "RUNNING", "FAILED")},
    )

    result = run_connect(adapter, "list", "--with-state", "failed")

    assert result.exit_code == 0
    assert _last_json(result.output) == ["b"]


def test_status_without_match_is_a_notice(run_connect):
    adapter = FakeConnect(["a"])

    result = run_connect(adapter, "status", "--connector", "zzz")

    assert result.exit_code == 0
    assert "No matching connector found" in result.output
    assert adapter.calls == [("list",)]


def test_invalid_regex_fails_before_any_call(run_connect):
    adapter = FakeConnect(["a"])

    result = run_connect(adapter, "status", "--connector", "a[")

    assert result.exit_code == 1
    assert adapter.calls == []


def test_config_pretty_uses_four_space_indent(run_connect):
    adapter = FakeConnect(["a"], configs={"a": {"tasks.max": "1"}})

    result = run_connect(adapter, "--pretty", "config", "--connector", "a")

    assert result.exit_code == 0
    assert '\n    "name": "a",' in result.output


def test_read_error_prints_raw_body_and_exits_1(run_connect):
    adapter = FakeConnect(["a"], fail={("config", "a"): not_found("a")})

    result = run_connect(adapter, "config", "--connector", "a")

    assert result.exit_code == 1
    assert '"message":"Connector a not found"' in result.output


def test_delete_reports_each_outcome(run_connect):
    adapter = FakeConnect(["a", "b", "c"], fail={("delete", "b"): not_found("b")})

    result = run_connect(adapter, "delete", "--connector", ".*")

    assert result.exit_code == 1
    assert "Successfully deleted connector a" in result.output
    assert "Successfully deleted connector c" in result.output
    assert "Failed to delete connector b" in result.output
    assert adapter.calls_of("delete") == [("delete", "a"), ("delete", "b"), ("delete", "c")]


def test_delete_dry_run_changes_nothing(run_connect):
    adapter = FakeConnect(["a", "b"])

    result = run_connect(adapter, "delete", "--connector", "a", "--dry-run")

    assert result.exit_code == 0
    assert adapter.calls_of("delete") == []


def test_delete_all_stops_at_first_failure(run_connect):
    adapter = FakeConnect(["a", "b", "c"], fail={("delete", "b"): not_found("b")})

    result = run_connect(adapter, "delete-all", "--yes")

    assert result.exit_code == 1
    assert adapter.calls_of("delete") == [("delete", "a"), ("delete", "b")]


def test_status_requires_connector(run_connect):
    adapter = FakeConnect(["a"])

    result = run_connect(adapter, "status")

    assert result.exit_code == 1
    assert "Missing or invalid argument 'connector'" in result.output
    assert adapter.calls == []


def test_no_match_notice_keeps_the_pattern_intact(run_connect):
    result = run_connect(FakeConnect(["a"]), "status", "-c", "orders-[a-z]+")

    assert result.exit_code == 0
    assert "No matching connector found for 'orders-[a-z]+'" in result.output


def test_delete_all_deletes_the_confirmed_list(run_connect, monkeypatch):
    monkeypatch.setattr(Out, "confirm", lambda self, message, **kwargs: True)
    adapter = FakeConnect(["a", "b"])

    result = run_connect(adapter, "delete-all")

    assert result.exit_code == 0
    assert adapter.calls_of("list") == [("list",)]
    assert adapter.calls_of("delete") == [("delete", "a"), ("delete", "b")]


@pytest.mark.parametrize(
    "args",
    [
        ["scale", "--connector", "sink"],
        ["scale", "--connector", "sink", "--tasks-max", "many"],
        ["scale", "--tasks-max", "3"],
        ["update", "--config", '{"name": "sink", "config": {}}'],
    ],
)
def test_missing_or_invalid_required_flags_exit_1(run_connect, args):
    adapter = FakeConnect(["sink"])

    result = run_connect(adapter, *args)

    assert result.exit_code == 1
    assert adapter.calls == []


def test_scale_rejects_zero_before_any_call(run_connect):
    adapter = FakeConnect(["sink"])

    result = run_connect(adapter, "scale", "--connector", "sink", "--tasks-max", "0")

    assert result.exit_code == 1
    assert adapter.calls == []


def test_scale_prints_updated_config(run_connect):
    adapter = FakeConnect(["sink"], configs={"sink": {"tasks.max": "2", "topics": "t"}})

    result = run_connect(adapter, "scale", "--connector", "sink", "--tasks-max", "5")

    assert result.exit_code == 0
    assert _last_json(result.output) == {
        "name": "sink",
        "config": {"tasks.max": "5", "topics": "t"},
    }


def test_create_requires_a_config_source(run_connect):
    adapter = FakeConnect()

    result = run_connect(adapter, "create")

    assert result.exit_code == 1
    assert adapter.calls == []


def test_restart_failed_is_not_fatal_on_restart_errors(run_connect):
    adapter = FakeConnect(
        ["a"],
        statuses={"a": status("a", "RUNNING", "FAILED")},
        fail={("restart", "a", 0): not_found("a")},
    )

    result = run_connect(adapter, "restart-failed", "--connector", "a")

    assert result.exit_code == 0
    assert _last_json(result.output)[0]["ok"] is False


def test_version_passes_through(run_connect):
    result = run_connect(FakeConnect(), "version")

    assert result.exit_code == 0
    assert _last_json(result.output)["version"] == "3.7.0"


class _Registry:
    def __init__(self):
        self.calls: list[tuple] = []

    def get_subject_compatibility(self, subject):
        self.calls.append(("get", subject))
        return CompatibilityLevel.BACKWARD

    def set_subject_compatibility(self, subject, level):
        self.calls.append(("set", subject, level.value))
        return level

    def register(self, subject, schema, schema_type=None):
        self.calls.append(("register", subject, schema))
        return RegisteredSchema(id=3)

    def list_subjects(self):
        self.calls.append(("subjects",))
        return ["a-value"]


@pytest.fixture
def run_registry(monkeypatch):
    def _run(adapter, *args):
        def _build(host, port, *, timeout=None, pretty=False):
            return RegistryAppContext(host="registry", port=8081, pretty=pretty, adapter=adapter)

        monkeypatch.setattr(registry_cli, "build_registry_context", _build)
        return runner.invoke(registry_cli.app, list(args))

    return _run


def test_registry_subjects(run_registry):
    result = run_registry(_Registry(), "subjects")

    assert result.exit_code == 0
    assert _last_json(result.output) == ["a-value"]


def test_registry_force_register(run_registry):
    registry = _Registry()

    result = run_registry(
        registry, "register", "--subject", "a-value", "--schema", '"string"', "--force"
    )

    assert result.exit_code == 0
    assert _last_json(result.output) == {"id": 3}
    assert [c[0] for c in registry.calls] == ["get", "set", "register", "set"]


def test_registry_register_requires_schema(run_registry):
    registry = _Registry()

    result = run_registry(registry, "register", "--subject", "a-value")

    assert result.exit_code == 1
    assert registry.calls == []


def test_registry_set_compatibility_rejects_unknown_level(run_registry):
    registry = _Registry()

    result = run_registry(registry, "set-compatibility", "--subject", "a", "--level", "sideways")

    assert result.exit_code == 1
    assert registry.calls == []


@pytest.mark.parametrize(
    "args",
    [
        ["versions"],
        ["compatibility"],
        ["register", "--schema", '"string"'],
        ["set-compatibility", "--subject", "a"],
    ],
)
def test_registry_missing_required_flags_exit_1(run_registry, args):
    registry = _Registry()

    result = run_registry(registry, *args)

    assert result.exit_code == 1
    assert "Missing or invalid argument" in result.output
    assert registry.calls == []
