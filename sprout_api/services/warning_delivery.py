"""Deduplicated delivery of feed/diaper warning notifications.

Delivery is at-least-once. The NotificationLog ledger is the
idempotency key: a row is written only after the channel accepts the
message, and a warning with a row inside the dedupe window is not sent
again. A failed send leaves no row, so the next monitor pass retries.
"""

import enum
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sprout_api.config import settings
from sprout_api.core.timeutils import utc_now
from sprout_api.logging_config import get_logger
from sprout_api.models.notification_log import NotificationLog, WarningType
from sprout_api.services.family_settings import WarningThresholdConfig
from sprout_api.services.notification_channel import (
    NotificationChannel,
    NotificationPayload,
)

logger = get_logger(__name__)


class DeliveryStatus(str, enum.Enum):
    """What happened to a due warning."""

    SENT = "sent"
    DEDUPLICATED = "deduplicated"
    FAILED = "failed"


@dataclass(frozen=True)
class DeliveryOutcome:
    status: DeliveryStatus
    error: str | None = None


def dedupe_window() -> timedelta:
    return timedelta(minutes=settings.notification_dedupe_window_minutes)


def build_notification_payload(
    warning_type: WarningType,
    config: WarningThresholdConfig,
) -> NotificationPayload:
    """Build the push payload from the family's templates."""
    if warning_type == WarningType.FEED:
        subtitle, body = config.feed_subtitle, config.feed_body
    else:
        subtitle, body = config.diaper_subtitle, config.diaper_body

    return NotificationPayload(
        title=config.title,
        subtitle=subtitle or None,
        body=body,
        name=settings.notification_app_name,
        sound=settings.notification_sound,
    )


async def find_recent_notification(
    db: AsyncSession,
    baby_id: uuid.UUID,
    warning_type: WarningType,
    since: datetime,
) -> NotificationLog | None:
    """Most recent ledger row for baby/type sent after ``since``."""
    result = await db.execute(
        select(NotificationLog)
        .where(
            NotificationLog.baby_id == baby_id,
            NotificationLog.type == warning_type,
            NotificationLog.sent_at > since,
        )
        .order_by(NotificationLog.sent_at.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def record_notification(
    db: AsyncSession,
    baby_id: uuid.UUID,
    warning_type: WarningType,
    family_id: uuid.UUID | None,
    sent_at: datetime | None = None,
) -> NotificationLog:
    """Append a ledger row for a delivered warning."""
    entry = NotificationLog(
        baby_id=baby_id,
        type=warning_type,
        family_id=family_id,
        sent_at=sent_at or utc_now(),
    )
    db.add(entry)
    await db.commit()
    await db.refresh(entry)
    return entry


async def deliver_warning(
    db: AsyncSession,
    channel: NotificationChannel,
    *,
    baby_id: uuid.UUID,
    family_id: uuid.UUID,
    warning_type: WarningType,
    config: WarningThresholdConfig,
    now: datetime | None = None,
) -> DeliveryOutcome:
    """Send one warning unless it already went out within the window.

    Args:
        db: Database session.
        channel: Notification channel to dispatch through.
        baby_id: Baby the warning is about.
        family_id: Family whose devices receive it.
        warning_type: FEED or DIAPER.
        config: Threshold config carrying the message templates.
        now: Reference time for the dedupe window and the ledger row.

    Returns:
        DeliveryOutcome (sent, deduplicated or failed).
    """
    now = now or utc_now()

    recent = await find_recent_notification(
        db, baby_id, warning_type, now - dedupe_window()
    )
    if recent is not None:
        logger.info(
            "Skipping warning, already sent recently",
            baby_id=str(baby_id),
            type=warning_type.value,
            last_sent_at=recent.sent_at.isoformat(),
        )
        return DeliveryOutcome(DeliveryStatus.DEDUPLICATED)

    payload = build_notification_payload(warning_type, config)
    result = await channel.send(family_id, payload)

    if not result.success:
        logger.error(
            "Failed to send warning notification",
            baby_id=str(baby_id),
            type=warning_type.value,
            error=result.error,
        )
        return DeliveryOutcome(DeliveryStatus.FAILED, error=result.error)

    await record_notification(db, baby_id, warning_type, family_id, sent_at=now)
    return DeliveryOutcome(DeliveryStatus.SENT)
