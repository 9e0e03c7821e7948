"""Shared fixtures for fluxseries tests."""
import pytest

from fluxseries import Client


class FakeTransport:
    """Records calls and returns canned JSON, in place of HTTPTransport."""

    def __init__(self):
        self.calls = []
        self.responses = {}
        self.closed = False

    def post_json(self, path, params=None, body=None):
        self.calls.append(("POST", path, params, body))
        return "ok"

    def get_json(self, path, params=None):
        self.calls.append(("GET", path, params, None))
        return self.responses.get(path, [])

    def delete(self, path, params=None):
        self.calls.append(("DELETE", path, params, None))
        return "ok"

    def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep FLUXSERIES_* variables from the developer's shell out of tests."""
    for var in (
        "FLUXSERIES_HOST",
        "FLUXSERIES_PORT",
        "FLUXSERIES_USERNAME",
        "FLUXSERIES_PASSWORD",
        "FLUXSERIES_DATABASE",
        "FLUXSERIES_TIMEOUT",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def client(transport):
    return Client("database", host="influxdb.test", port=9999,
                  username="username", password="password", transport=transport)


@pytest.fixture
def sample_query_result():
    return [
        {"name": "foo", "columns": ["name", "age"], "values": [["shahid", 99], ["dix", 50]]},
    ]


@pytest.fixture
def expected_series():
    return {"foo": [{"name": "shahid", "age": 99}, {"name": "dix", "age": 50}]}
