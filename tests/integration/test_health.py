"""
Integration tests for health check endpoints.
"""

from unittest.mock import AsyncMock, patch


class TestHealthEndpoints:
    """Tests for /api/health endpoints."""

    def test_health_check_basic(self, client):
        """Test basic health check endpoint."""
        response = client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "timestamp" in data

    def test_detailed_without_database(self, client):
        """The database reports unhealthy until it is initialized."""
        response = client.get("/api/health/detailed")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "unhealthy"
        assert data["components"]["database"]["status"] == "unhealthy"
        assert data["components"]["database"]["error"] == "Database not initialized"
        assert "uploads" in data["components"]

    def test_detailed_with_healthy_database(self, client, tmp_path, monkeypatch):
        from core.config import get_settings

        monkeypatch.setattr(get_settings(), "uploads_dir", str(tmp_path))

        with patch(
            "api.routers.health.DatabaseHealthCheck.check",
            new=AsyncMock(return_value={"status": "healthy", "latency_ms": 1.5}),
        ):
            response = client.get("/api/health/detailed")

        data = response.json()
        assert data["status"] == "healthy"
        assert data["components"]["database"]["latency_ms"] == 1.5
        assert data["components"]["uploads"]["status"] == "healthy"

    def test_data_endpoints_need_database(self):
        """Without service overrides, data endpoints answer 503."""
        from fastapi.testclient import TestClient

        from api.main import app

        response = TestClient(app).get("/api/prompts")

        assert response.status_code == 503
        assert response.json()["error"]["code"] == "database_unavailable"

    def test_root_endpoint(self, client):
        """Test root endpoint returns API info."""
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Promptly"
        assert "version" in data
        assert data["health"] == "/api/health"
