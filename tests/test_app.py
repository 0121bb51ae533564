"""End-to-end tests for the GET / endpoint."""

import dataclasses
from unittest.mock import MagicMock, patch

import pytest

from decaf.app import create_app
from decaf.bond.client import HttpBondClient, MockBondClient
from decaf.errors import VerificationFailed


class _RecordingFactory:
    def __init__(self, db_path, service_cls):
        self.db_path = db_path
        self.service_cls = service_cls
        self.calls = []
        self.services = []

    def __call__(self, kind, info):
        self.calls.append((kind, info))
        service = self.service_cls(info, self.db_path, mysql_rows=kind.value == "CLOUD_SQL_MYSQL")
        self.services.append(service)
        return service


@pytest.fixture
def factory(coffee_db, sqlite_service):
    return _RecordingFactory(coffee_db, sqlite_service)


def _client(settings, factory, bond_client=None):
    app = create_app(settings, bond_client or MockBondClient(), factory)
    app.config["TESTING"] = True
    return app.test_client()


class TestSuccess:
    def test_mysql_end_to_end(self, settings, factory):
        bond = MockBondClient()
        resp = _client(settings, factory, bond).get("/")

        assert resp.status_code == 200
        assert resp.mimetype == "application/json"
        expected = {
            "magic_coffee": "Ethiopian",
            "total": 230,
            "project": "decaf-project",
            "db": "CLOUD_SQL_MYSQL",
        }
        assert resp.get_json() == expected
        assert list(resp.get_json()) == ["magic_coffee", "total", "project", "db"]
        assert bond.payloads == [expected]

    @pytest.mark.parametrize("db_type", ["CLOUD_SQL_POSTGRES", "ALLOY_DB"])
    def test_postgres_backends(self, settings, factory, db_type):
        env = {**settings.environ, "DB_CLUSTER": "decaf-cluster"}
        settings = dataclasses.replace(settings, db_type=db_type, environ=env)
        resp = _client(settings, factory).get("/")

        assert resp.status_code == 200
        assert resp.get_json()["db"] == db_type
        assert resp.get_json()["total"] == 230

    def test_connection_closed(self, settings, factory):
        _client(settings, factory).get("/")
        assert factory.services[0].connector.closed

    def test_project_falls_back_for_connection(self, settings, factory):
        env = {k: v for k, v in settings.environ.items() if k != "DB_PROJECT"}
        settings = dataclasses.replace(settings, environ=env)
        _client(settings, factory).get("/")
        _, info = factory.calls[0]
        assert info.project == "decaf-project"

    def test_post_not_allowed(self, settings, factory):
        assert _client(settings, factory).post("/").status_code == 405


class TestErrors:
    def test_unknown_backend_never_connects(self, settings, factory):
        settings = dataclasses.replace(settings, db_type="ORACLE")
        resp = _client(settings, factory).get("/")

        assert resp.status_code == 500
        assert resp.mimetype == "text/plain"
        assert resp.get_data(as_text=True) == "Error: Unknown DB type ORACLE"
        assert factory.calls == []

    def test_missing_configuration(self, settings, factory):
        settings = dataclasses.replace(settings, environ={})
        resp = _client(settings, factory).get("/")

        assert resp.status_code == 500
        assert "Error: ensure required environment variables are set" in resp.get_data(as_text=True)
        assert factory.calls == []

    def test_alloydb_without_cluster(self, settings):
        settings = dataclasses.replace(settings, db_type="ALLOY_DB")
        with patch("decaf.alloydb_service.Connector") as connector_cls:
            resp = _client(settings, None).get("/")

        assert resp.status_code == 500
        assert "cluster required" in resp.get_data(as_text=True)
        connector_cls.assert_not_called()

    def test_connection_failure(self, settings):
        with patch("decaf.cloudsql_service.Connector") as connector_cls:
            connector_cls.return_value.connect.side_effect = OSError("no route to host")
            resp = _client(settings, None).get("/")

        assert resp.status_code == 500
        assert resp.get_data(as_text=True).startswith("Error: failed to connect")
        assert "no route to host" in resp.get_data(as_text=True)

    def test_query_failure(self, settings, tmp_path, sqlite_service):
        factory = _RecordingFactory(tmp_path / "no_table.db", sqlite_service)
        resp = _client(settings, factory).get("/")

        assert resp.status_code == 500
        assert resp.get_data(as_text=True).startswith("Error: query failed")
        assert factory.services[0].connector.closed

    def test_bond_unavailable(self, settings, factory, caplog):
        bond_resp = MagicMock(status_code=503, content=b"service unavailable")
        bond = HttpBondClient(settings.bond_url)
        with patch("decaf.bond.client.requests.post", return_value=bond_resp):
            resp = _client(settings, factory, bond).get("/")

        assert resp.status_code == 500
        assert "Error:" in resp.get_data(as_text=True)
        assert "service unavailable" in caplog.text

    def test_unexpected_error(self, settings, factory):
        bond = MagicMock()
        bond.verify.side_effect = KeyError("boom")
        resp = _client(settings, factory, bond).get("/")

        assert resp.status_code == 500
        assert resp.get_data(as_text=True).startswith("Error:")

    def test_verification_failure_status(self, settings, factory):
        bond = MagicMock()
        bond.verify.side_effect = VerificationFailed("expected 2xx response from bond, got 400")
        resp = _client(settings, factory, bond).get("/")

        assert resp.status_code == 500
        assert resp.get_data(as_text=True) == (
            "Error: expected 2xx response from bond, got 400"
        )
