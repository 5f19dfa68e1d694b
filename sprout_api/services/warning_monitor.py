"""Feed and diaper warning monitor.

Periodically checks every active baby's time since the last feed and
the last diaper change against the family's warning thresholds, and
pushes a notification when one is crossed. Each pass:

1. Loads active babies with their latest feed and diaper times
2. Loads family settings once per family
3. Skips families with notifications disabled
4. Flags a category as due when elapsed >= warning time - advance
5. Delivers due warnings through the dedupe ledger

The monitor is owned by a ``WarningMonitor`` handle that registers a
single APScheduler interval job. Start/stop are idempotent and
overlapping passes are skipped.
"""

import re
import uuid
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from datetime import UTC, datetime

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from sprout_api.config import settings
from sprout_api.core.timeutils import to_utc, utc_now
from sprout_api.database import get_db_session
from sprout_api.logging_config import get_logger
from sprout_api.models.baby import Baby
from sprout_api.models.diaper_log import DiaperLog
from sprout_api.models.family_settings import FamilySettings
from sprout_api.models.feed_log import FeedLog
from sprout_api.models.notification_log import WarningType
from sprout_api.services.family_settings import (
    WarningThresholdConfig,
    build_threshold_config,
    get_family_settings,
)
from sprout_api.services.notification_channel import NotificationChannel
from sprout_api.services.warning_delivery import DeliveryStatus, deliver_warning

logger = get_logger(__name__)

WARNING_TIME_RE = re.compile(r"^(\d{1,3}):([0-5]\d)$")

JOB_ID = "warning_monitor"

SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]


@dataclass(frozen=True)
class BabyActivitySnapshot:
    """A baby with the times of its latest feed and diaper change."""

    baby_id: uuid.UUID
    family_id: uuid.UUID
    name: str
    feed_warning_time: str | None
    diaper_warning_time: str | None
    last_feed_time: datetime | None
    last_diaper_time: datetime | None


@dataclass(frozen=True)
class DueWarning:
    """A baby/category whose elapsed time reached its threshold."""

    baby_id: uuid.UUID
    family_id: uuid.UUID
    baby_name: str
    type: WarningType
    elapsed_minutes: int
    threshold_minutes: int


@dataclass
class MonitorPassResult:
    """Counters for one monitor pass."""

    warnings_found: int = 0
    notifications_sent: int = 0
    deduplicated: int = 0
    failures: int = 0
    skipped: bool = False
    error: str | None = None


@dataclass(frozen=True)
class MonitorStatus:
    active: bool
    interval: int


# ---------------------------------------------------------------------------
# Threshold arithmetic (pure)
# ---------------------------------------------------------------------------


def parse_warning_minutes(value: str | None) -> int | None:
    """``"HH:MM"`` to total minutes; None when malformed."""
    if not value:
        return None
    match = WARNING_TIME_RE.match(value.strip())
    if not match:
        return None
    hours, minutes = (int(part) for part in match.groups())
    return hours * 60 + minutes


def effective_threshold_minutes(warning_minutes: int, advance_minutes: int | None) -> int:
    """Warning minutes minus the advance, never below zero."""
    advance = max(0, advance_minutes or 0)
    return max(0, warning_minutes - advance)


def elapsed_minutes(since: datetime, now: datetime) -> int:
    """Whole minutes between ``since`` and ``now`` (floored)."""
    return int((to_utc(now) - to_utc(since)).total_seconds() // 60)


def find_due_warnings(
    snapshot: BabyActivitySnapshot,
    config: WarningThresholdConfig,
    now: datetime,
) -> list[DueWarning]:
    """Return the categories whose warning threshold has been reached.

    A category with no logged event yet is never due.
    """
    checks = (
        (
            WarningType.FEED,
            snapshot.last_feed_time,
            config.feed_warning_time,
            config.feed_advance_minutes,
        ),
        (
            WarningType.DIAPER,
            snapshot.last_diaper_time,
            config.diaper_warning_time,
            config.diaper_advance_minutes,
        ),
    )

    due = []
    for warning_type, last_time, warning_time, advance in checks:
        if last_time is None:
            continue

        warning_minutes = parse_warning_minutes(warning_time)
        if warning_minutes is None:
            logger.warning(
                "Invalid warning time, skipping category",
                baby_id=str(snapshot.baby_id),
                type=warning_type.value,
                warning_time=warning_time,
            )
            continue

        threshold = effective_threshold_minutes(warning_minutes, advance)
        elapsed = elapsed_minutes(last_time, now)
        if elapsed >= threshold:
            due.append(
                DueWarning(
                    baby_id=snapshot.baby_id,
                    family_id=snapshot.family_id,
                    baby_name=snapshot.name,
                    type=warning_type,
                    elapsed_minutes=elapsed,
                    threshold_minutes=threshold,
                )
            )

    return due


# ---------------------------------------------------------------------------
# Data access
# ---------------------------------------------------------------------------


async def load_active_babies(db: AsyncSession) -> list[BabyActivitySnapshot]:
    """Active babies with their most recent feed and diaper times."""
    last_feed = (
        select(func.max(FeedLog.time))
        .where(FeedLog.baby_id == Baby.id)
        .correlate(Baby)
        .scalar_subquery()
    )
    last_diaper = (
        select(func.max(DiaperLog.time))
        .where(DiaperLog.baby_id == Baby.id)
        .correlate(Baby)
        .scalar_subquery()
    )

    result = await db.execute(
        select(
            Baby,
            last_feed.label("last_feed_time"),
            last_diaper.label("last_diaper_time"),
        ).where(Baby.inactive.is_(False))
    )

    return [
        BabyActivitySnapshot(
            baby_id=baby.id,
            family_id=baby.family_id,
            name=baby.full_name,
            feed_warning_time=baby.feed_warning_time,
            diaper_warning_time=baby.diaper_warning_time,
            last_feed_time=to_utc(feed_time) if feed_time else None,
            last_diaper_time=to_utc(diaper_time) if diaper_time else None,
        )
        for baby, feed_time, diaper_time in result.all()
    ]


# ---------------------------------------------------------------------------
# Monitor pass
# ---------------------------------------------------------------------------


async def run_warning_pass(
    db: AsyncSession,
    channel: NotificationChannel,
    now: datetime | None = None,
) -> MonitorPassResult:
    """Run one full monitor pass over all active babies.

    Never raises: a failed data load ends the pass early and is
    reported in ``MonitorPassResult.error``; a failure for one baby is
    counted and the pass moves on.
    """
    now = now or utc_now()
    result = MonitorPassResult()

    logger.info("Starting warning monitoring check")

    try:
        babies = await load_active_babies(db)
    except Exception as e:
        logger.error("Warning monitor could not load babies", error=str(e))
        result.error = str(e)
        return result

    family_settings: dict[uuid.UUID, FamilySettings | None] = {}

    for baby in babies:
        try:
            if baby.family_id not in family_settings:
                family_settings[baby.family_id] = await get_family_settings(
                    db, baby.family_id
                )
            settings_row = family_settings[baby.family_id]

            if settings_row is None or not settings_row.notification_enabled:
                continue

            config = build_threshold_config(
                settings_row,
                feed_warning_override=baby.feed_warning_time,
                diaper_warning_override=baby.diaper_warning_time,
            )
            warnings = find_due_warnings(baby, config, now)
            result.warnings_found += len(warnings)

            for warning in warnings:
                outcome = await deliver_warning(
                    db,
                    channel,
                    baby_id=warning.baby_id,
                    family_id=warning.family_id,
                    warning_type=warning.type,
                    config=config,
                    now=now,
                )
                if outcome.status == DeliveryStatus.SENT:
                    result.notifications_sent += 1
                    logger.info(
                        "Sent warning notification",
                        baby_id=str(warning.baby_id),
                        baby_name=warning.baby_name,
                        type=warning.type.value,
                        elapsed_minutes=warning.elapsed_minutes,
                        threshold_minutes=warning.threshold_minutes,
                    )
                elif outcome.status == DeliveryStatus.DEDUPLICATED:
                    result.deduplicated += 1
                else:
                    result.failures += 1

        except Exception as e:
            logger.error(
                "Warning check failed for baby",
                baby_id=str(baby.baby_id),
                error=str(e),
            )
            result.failures += 1
            await db.rollback()

    logger.info(
        "Warning monitoring check complete",
        babies=len(babies),
        warnings_found=result.warnings_found,
        notifications_sent=result.notifications_sent,
        deduplicated=result.deduplicated,
        failures=result.failures,
    )
    return result


# ---------------------------------------------------------------------------
# Monitor handle
# ---------------------------------------------------------------------------


class WarningMonitor:
    """Start/stop/status/check handle around the recurring monitor job.

    State lives on the instance, and each instance owns its own job id,
    so several monitors can share one scheduler. Running on a single
    event loop, the flags need no locking. Multiple processes each
    running a monitor would dispatch duplicates; run exactly one.
    """

    def __init__(
        self,
        scheduler: AsyncIOScheduler,
        channel: NotificationChannel,
        session_factory: SessionFactory = get_db_session,
        interval_seconds: int | None = None,
        job_id: str | None = None,
    ):
        self._scheduler = scheduler
        self.job_id = job_id or f"{JOB_ID}-{uuid.uuid4().hex[:8]}"
        self._channel = channel
        self._session_factory = session_factory
        self.interval_seconds = (
            interval_seconds
            if interval_seconds is not None
            else settings.warning_monitor_interval_seconds
        )
        self._active = False
        self._pass_in_progress = False

    @property
    def active(self) -> bool:
        return self._active

    @property
    def pass_in_progress(self) -> bool:
        return self._pass_in_progress

    def status(self) -> MonitorStatus:
        return MonitorStatus(active=self._active, interval=self.interval_seconds)

    def start(self) -> MonitorStatus:
        """Register the interval job and run a first pass right away.

        Starting an active monitor changes nothing.
        """
        if self._active:
            logger.info("Warning monitoring is already active")
            return self.status()

        logger.info(
            "Starting warning monitoring",
            interval_seconds=self.interval_seconds,
        )
        self._scheduler.add_job(
            self._scheduled_pass,
            trigger=IntervalTrigger(seconds=self.interval_seconds),
            id=self.job_id,
            name="Feed/Diaper Warning Monitor",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
            next_run_time=datetime.now(UTC),
        )
        self._active = True
        return self.status()

    def stop(self) -> MonitorStatus:
        """Remove the interval job. A pass already running finishes."""
        if not self._active:
            logger.info("Warning monitoring is not active")
            return self.status()

        logger.info("Stopping warning monitoring")
        try:
            self._scheduler.remove_job(self.job_id)
        except JobLookupError:
            logger.warning("Warning monitor job was already gone")
        self._active = False
        return self.status()

    async def check(self) -> MonitorPassResult:
        """Run a pass now, outside the schedule."""
        return await self._guarded_pass()

    async def _scheduled_pass(self) -> None:
        await self._guarded_pass()

    async def _guarded_pass(self) -> MonitorPassResult:
        if self._pass_in_progress:
            logger.warning("Previous warning pass still running, skipping")
            return MonitorPassResult(skipped=True)

        self._pass_in_progress = True
        try:
            async with self._session_factory() as db:
                return await run_warning_pass(db, self._channel)
        except Exception as e:
            logger.error("Warning monitor pass failed", error=str(e))
            return MonitorPassResult(error=str(e))
        finally:
            self._pass_in_progress = False
