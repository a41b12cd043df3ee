"""Tests for the health endpoints."""

from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from src.garage.core.services import DbSessionService


class TestHealth:
    def test_health(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_ready_when_database_answers(self, client: TestClient):
        response = client.get("/health/ready")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ready"
        assert body["checks"]["database"]["status"] == "healthy"
        assert body["checks"]["database"]["type"] == "sqlite"
        assert "car" in body["checks"]["modules"]["loaded"]

    def test_ready_reports_engine_backend(self, client: TestClient, monkeypatch):
        engine = MagicMock()
        engine.url.get_backend_name.return_value = "mysql"
        monkeypatch.setattr(DbSessionService, "engine", property(lambda self: engine))
        monkeypatch.setattr(DbSessionService, "health_check", lambda self: True)

        response = client.get("/health/ready")

        assert response.json()["checks"]["database"]["type"] == "mysql"

    def test_not_ready_when_database_fails(self, client: TestClient, monkeypatch):
        monkeypatch.setattr(DbSessionService, "health_check", lambda self: False)

        response = client.get("/health/ready")

        assert response.status_code == 503
        assert response.json()["status"] == "not_ready"

    def test_security_headers(self, client: TestClient):
        response = client.get("/health")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
