"""Tests for health check endpoints and request correlation IDs."""

from unittest.mock import AsyncMock, patch


class TestHealthEndpoint:
    """Tests for /health."""

    async def test_returns_healthy_with_db_connected(self, client):
        with patch(
            "sprout_api.routers.health.check_database_connection",
            new_callable=AsyncMock,
        ) as mock_db:
            mock_db.return_value = True

            response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "connected"
        assert data["scheduler"] in {"running", "stopped"}

    async def test_returns_degraded_when_db_disconnected(self, client):
        with patch(
            "sprout_api.routers.health.check_database_connection",
            new_callable=AsyncMock,
        ) as mock_db:
            mock_db.return_value = False

            response = await client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "degraded"

    async def test_real_database_check(self, client):
        response = await client.get("/health/ready")

        assert response.status_code == 200
        assert response.json() == {"status": "ready", "database": "connected"}


class TestProbes:
    """Tests for liveness and readiness probes."""

    async def test_liveness_never_touches_database(self, client):
        with patch(
            "sprout_api.routers.health.check_database_connection",
            new_callable=AsyncMock,
        ) as mock_db:
            response = await client.get("/health/live")

        assert response.status_code == 200
        assert response.json() == {"status": "alive"}
        mock_db.assert_not_called()

    async def test_readiness_not_ready(self, client):
        with patch(
            "sprout_api.routers.health.check_database_connection",
            new_callable=AsyncMock,
            return_value=False,
        ):
            response = await client.get("/health/ready")

        assert response.status_code == 503
        assert response.json()["status"] == "not_ready"


class TestCorrelationId:
    """Tests for the X-Correlation-ID header."""

    async def test_generates_id(self, client):
        response = await client.get("/health/live")

        assert len(response.headers["X-Correlation-ID"]) == 36

    async def test_echoes_supplied_id(self, client):
        response = await client.get(
            "/health/live", headers={"X-Correlation-ID": "req-123"}
        )

        assert response.headers["X-Correlation-ID"] == "req-123"

    async def test_replaces_oversized_id(self, client):
        response = await client.get(
            "/health/live", headers={"X-Correlation-ID": "x" * 200}
        )

        assert response.headers["X-Correlation-ID"] != "x" * 200
