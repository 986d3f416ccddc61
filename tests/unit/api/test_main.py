"""Tests for FastAPI main application."""

import re

import pytest
from fastapi.testclient import TestClient

from ecobreak.api.main import app, cors_options


@pytest.fixture
def client() -> TestClient:
    """Client without the lifespan, so no Firebase clients are created."""
    return TestClient(app)


class TestHealthEndpoint:
    """Test /health and /app-health."""

    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["service"] == "ecobreak-backend"
        assert data["timestamp"].endswith("Z")

    def test_app_health_echoes_client(self, client: TestClient) -> None:
        response = client.get(
            "/app-health", headers={"User-Agent": "EcoBreak/1.0", "X-Client-Type": "web"}
        )

        info = response.json()["clientInfo"]
        assert info["userAgent"] == "EcoBreak/1.0"
        assert info["clientType"] == "web"

    def test_unknown_route_uses_error_envelope(self, client: TestClient) -> None:
        response = client.get("/no-existe")

        assert response.status_code == 404
        assert response.json()["status"] is False


class TestCors:
    """Test CORS origin handling."""

    def test_wildcard_origin_becomes_regex(self) -> None:
        options = cors_options(["http://localhost:3000", "http://localhost:*"])

        assert options["allow_origins"] == ["http://localhost:3000"]
        pattern = re.compile(options["allow_origin_regex"])
        assert pattern.match("http://localhost:8100")
        assert not pattern.match("http://evil.test")

    def test_exact_origins_only(self) -> None:
        assert cors_options(["https://ecobreak.app"])["allow_origin_regex"] is None

    def test_preflight_from_local_port(self, client: TestClient) -> None:
        response = client.options(
            "/health",
            headers={
                "Origin": "http://localhost:8100",
                "Access-Control-Request-Method": "GET",
            },
        )

        assert response.headers["access-control-allow-origin"] == "http://localhost:8100"


class TestAppMetadata:
    """Test application metadata."""

    def test_app_has_title(self) -> None:
        assert app.title == "EcoBreak"

    def test_app_has_version(self) -> None:
        assert app.version == "0.1.0"
