"""Tests for the background scheduler and its warning monitor."""

from unittest.mock import patch

import pytest

from sprout_api.services import scheduler as scheduler_module
from sprout_api.services.scheduler import (
    get_scheduler,
    get_warning_monitor,
    start_scheduler,
    stop_scheduler,
)
from sprout_api.services.warning_monitor import JOB_ID


@pytest.fixture(autouse=True)
def _clean_scheduler():
    stop_scheduler()
    yield
    stop_scheduler()


class TestScheduler:
    async def test_start_without_monitor(self):
        with patch.object(scheduler_module.settings, "warning_monitor_enabled", False):
            sched = start_scheduler()

        assert sched.running is True
        assert sched.get_job(JOB_ID) is None
        assert get_warning_monitor().active is False

    async def test_start_with_monitor_enabled(self):
        with patch.object(scheduler_module.settings, "warning_monitor_enabled", True):
            sched = start_scheduler()

        assert sched.get_job(JOB_ID) is not None
        assert get_warning_monitor().active is True

    async def test_start_twice_returns_same_scheduler(self):
        first = start_scheduler()
        second = start_scheduler()

        assert first is second

    async def test_stop_clears_state(self):
        start_scheduler()
        monitor = get_warning_monitor()

        stop_scheduler()

        assert get_scheduler() is None
        assert get_warning_monitor() is not monitor

    def test_monitor_is_shared(self):
        assert get_warning_monitor() is get_warning_monitor()
