"""Background job scheduler.

One process-wide AsyncIOScheduler hosts the warning monitor job. The
monitor handle is created on first use so the control endpoint works
before (or without) application startup.
"""

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from sprout_api.config import settings
from sprout_api.logging_config import get_logger
from sprout_api.services.notification_channel import HermesNotificationChannel
from sprout_api.services.warning_monitor import JOB_ID, WarningMonitor

logger = get_logger(__name__)

# Global scheduler instance
scheduler: AsyncIOScheduler | None = None

# Global warning monitor bound to ``scheduler``
warning_monitor: WarningMonitor | None = None


def _ensure_scheduler() -> AsyncIOScheduler:
    global scheduler
    if scheduler is None:
        scheduler = AsyncIOScheduler()
    return scheduler


def get_warning_monitor() -> WarningMonitor:
    """Get (or create) the process-wide warning monitor."""
    global warning_monitor
    if warning_monitor is None:
        warning_monitor = WarningMonitor(
            _ensure_scheduler(),
            HermesNotificationChannel(),
            job_id=JOB_ID,
        )
    return warning_monitor


def start_scheduler() -> AsyncIOScheduler:
    """Start the background job scheduler.

    Returns:
        The started scheduler instance
    """
    sched = _ensure_scheduler()

    if sched.running:
        logger.warning("Scheduler already running")
        return sched

    if settings.warning_monitor_enabled:
        get_warning_monitor().start()
        logger.info(
            "Scheduled warning monitor job",
            interval_seconds=settings.warning_monitor_interval_seconds,
        )

    sched.start()
    logger.info("Background scheduler started")
    return sched


def stop_scheduler() -> None:
    """Stop the background job scheduler and drop the monitor."""
    global scheduler, warning_monitor

    if warning_monitor is not None and warning_monitor.active:
        warning_monitor.stop()

    if scheduler is not None:
        if scheduler.running:
            scheduler.shutdown(wait=False)
        scheduler = None
        warning_monitor = None
        logger.info("Background scheduler stopped")


def get_scheduler() -> AsyncIOScheduler | None:
    """Get the current scheduler instance, or None if not created."""
    return scheduler

