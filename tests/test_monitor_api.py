"""Tests for the warning monitor control endpoint."""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from sprout_api.main import app
from sprout_api.services.scheduler import get_warning_monitor
from sprout_api.services.warning_monitor import MonitorPassResult, WarningMonitor

from helpers import RecordingChannel, auth_headers


@asynccontextmanager
async def mock_session():
    yield MagicMock()


@pytest.fixture
def monitor() -> WarningMonitor:
    instance = WarningMonitor(
        AsyncIOScheduler(),
        RecordingChannel(),
        session_factory=mock_session,
        interval_seconds=60,
    )
    app.dependency_overrides[get_warning_monitor] = lambda: instance
    return instance


@pytest.fixture
def admin(family) -> dict[str, str]:
    return auth_headers(family.id, role="ADMIN")


class TestMonitorControl:
    """Tests for GET /api/monitor/warnings."""

    async def test_requires_admin(self, client, family, monitor):
        response = await client.get(
            "/api/monitor/warnings",
            params={"action": "status"},
            headers=auth_headers(family.id),
        )

        assert response.status_code == 403

    async def test_invalid_action(self, client, admin, monitor):
        response = await client.get(
            "/api/monitor/warnings", params={"action": "restart"}, headers=admin
        )

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "Invalid action. Use: start, stop, status, or check",
        }

    async def test_missing_action(self, client, admin, monitor):
        response = await client.get("/api/monitor/warnings", headers=admin)

        assert response.status_code == 400

    async def test_start_twice_then_status(self, client, admin, monitor):
        first = await client.get(
            "/api/monitor/warnings", params={"action": "start"}, headers=admin
        )
        second = await client.get(
            "/api/monitor/warnings", params={"action": "start"}, headers=admin
        )
        status = await client.get(
            "/api/monitor/warnings", params={"action": "status"}, headers=admin
        )

        assert first.json()["message"] == "Warning monitoring started"
        assert second.json()["message"] == "Warning monitoring already active"
        assert status.json()["active"] is True
        assert status.json()["interval"] == 60
        assert [job.id for job in monitor._scheduler.get_jobs()] == [monitor.job_id]

    async def test_stop(self, client, admin, monitor):
        monitor.start()

        response = await client.get(
            "/api/monitor/warnings", params={"action": "stop"}, headers=admin
        )

        assert response.status_code == 200
        assert response.json()["active"] is False
        assert monitor.active is False

    async def test_check_reports_counts(self, client, admin, monitor):
        with patch(
            "sprout_api.services.warning_monitor.run_warning_pass",
            new_callable=AsyncMock,
            return_value=MonitorPassResult(warnings_found=3, notifications_sent=2),
        ):
            response = await client.get(
                "/api/monitor/warnings", params={"action": "check"}, headers=admin
            )

        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Warning check completed"
        assert data["warnings_found"] == 3
        assert data["notifications_sent"] == 2
