"""Tests for the command line interface."""
import json

import pytest
from click.testing import CliRunner

from fluxseries import sdk
from fluxseries.cli import cli
from fluxseries.errors import TransportError


@pytest.fixture
def runner(monkeypatch, transport):
    """CliRunner whose clients talk to the fake transport."""
    monkeypatch.setattr(sdk, "HTTPTransport", lambda *args, **kwargs: transport)
    return CliRunner()


def test_databases_list(runner, transport):
    transport.responses["/dbs"] = [{"name": "metrics"}, {"name": "logs"}]

    result = runner.invoke(cli, ["databases", "list"])

    assert result.exit_code == 0
    assert result.output.splitlines() == ["metrics", "logs"]


def test_databases_create(runner, transport):
    result = runner.invoke(cli, ["databases", "create", "metrics"])

    assert result.exit_code == 0
    assert transport.calls == [("POST", "/db", None, {"name": "metrics"})]


def test_databases_delete_aborts_without_confirmation(runner, transport):
    result = runner.invoke(cli, ["databases", "delete", "metrics"], input="n\n")

    assert "Aborted." in result.output
    assert transport.calls == []


def test_databases_delete_with_yes(runner, transport):
    result = runner.invoke(cli, ["databases", "delete", "metrics", "--yes"])

    assert result.exit_code == 0
    assert transport.calls == [("DELETE", "/db/metrics", None, None)]


def test_users_create(runner, transport):
    result = runner.invoke(cli, ["users", "create", "-d", "metrics", "-n", "reader", "-p", "secret"])

    assert result.exit_code == 0
    assert transport.calls == [
        ("POST", "/db/metrics/users", None, {"username": "reader", "password": "secret"}),
    ]


def test_write_from_stdin(runner, transport):
    data = [{"name": "juan", "age": 87}, {"name": "shahid"}]

    result = runner.invoke(cli, ["-d", "database", "write", "seriez"], input=json.dumps(data))

    assert result.exit_code == 0
    assert "Wrote 2 point(s)" in result.output
    assert transport.calls[0][3] == [
        {"name": "seriez", "points": [["juan", 87], ["shahid", None]], "columns": ["name", "age"]},
    ]


def test_write_without_database(runner, transport):
    result = runner.invoke(cli, ["write", "seriez"], input="{}")

    assert result.exit_code == 2
    assert transport.calls == []


def test_write_invalid_records(runner, transport):
    result = runner.invoke(cli, ["-d", "database", "write", "seriez"], input="[]")

    assert result.exit_code == 1
    assert "ERROR writing points" in result.output


def test_query_json(runner, transport, sample_query_result, expected_series):
    transport.responses["/db/database/series"] = sample_query_result

    result = runner.invoke(cli, ["-d", "database", "query", "select * from foo"])

    assert result.exit_code == 0
    assert json.loads(result.output) == expected_series


def test_query_table(runner, transport, sample_query_result):
    transport.responses["/db/database/series"] = sample_query_result

    result = runner.invoke(cli, ["-d", "database", "query", "select * from foo", "-f", "table"])

    assert result.exit_code == 0
    assert "== foo (2 point(s))" in result.output
    assert "shahid" in result.output


def test_transport_error_exits_1(runner, transport):
    def failing_get(path, params=None):
        raise TransportError("GET /dbs returned status 401", method="GET", path=path, status_code=401)

    transport.get_json = failing_get

    result = runner.invoke(cli, ["databases", "list"])

    assert result.exit_code == 1
    assert "ERROR" in result.output
