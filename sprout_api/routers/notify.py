"""Manual notification router.

Lets a caretaker push a feed/diaper warning for a baby, or send a test
notification to check the Hermes configuration.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from sprout_api.core.auth import AuthContext, require_family
from sprout_api.database import get_db
from sprout_api.logging_config import get_logger
from sprout_api.middleware.rate_limit import (
    TEST_NOTIFY_LIMIT,
    WARNING_NOTIFY_LIMIT,
    limiter,
)
from sprout_api.models.notification_log import WarningType
from sprout_api.schemas.notification import NotifyResponse, WarningNotifyRequest
from sprout_api.services.baby import get_baby
from sprout_api.services.family_settings import (
    build_threshold_config,
    get_family_settings,
    threshold_config_for_baby,
)
from sprout_api.services.notification_channel import (
    HermesNotificationChannel,
    NotificationChannel,
)
from sprout_api.services.warning_delivery import (
    DeliveryStatus,
    build_notification_payload,
    deliver_warning,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api/notify", tags=["notify"])


def get_notification_channel() -> NotificationChannel:
    """Channel used by the notify endpoints."""
    return HermesNotificationChannel()


def _notifications_disabled() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="Notifications disabled",
    )


@router.post("/warning", response_model=NotifyResponse)
@limiter.limit(WARNING_NOTIFY_LIMIT)
async def notify_warning(
    body: WarningNotifyRequest,
    request: Request,
    auth: AuthContext = Depends(require_family),
    db: AsyncSession = Depends(get_db),
    channel: NotificationChannel = Depends(get_notification_channel),
) -> NotifyResponse:
    """Push a warning for one baby.

    Shares the dedupe window with the monitor: a warning already sent
    recently is reported as skipped.
    """
    baby = await get_baby(auth.family_id, body.baby_id, db)
    if baby is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Baby not found",
        )

    family_settings = await get_family_settings(db, auth.family_id)
    if family_settings is None or not family_settings.notification_enabled:
        raise _notifications_disabled()

    outcome = await deliver_warning(
        db,
        channel,
        baby_id=baby.id,
        family_id=auth.family_id,
        warning_type=body.type,
        config=threshold_config_for_baby(family_settings, baby),
    )

    if outcome.status == DeliveryStatus.DEDUPLICATED:
        return NotifyResponse(success=True, skipped=True)

    if outcome.status == DeliveryStatus.FAILED:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=outcome.error or "Failed to send notification",
        )

    return NotifyResponse(success=True)


@router.post("/test", response_model=NotifyResponse)
@limiter.limit(TEST_NOTIFY_LIMIT)
async def notify_test(
    request: Request,
    auth: AuthContext = Depends(require_family),
    db: AsyncSession = Depends(get_db),
    channel: NotificationChannel = Depends(get_notification_channel),
) -> NotifyResponse:
    """Send the feed warning payload once, ignoring dedupe. Nothing is recorded."""
    family_settings = await get_family_settings(db, auth.family_id)
    if family_settings is None or not family_settings.notification_enabled:
        raise _notifications_disabled()

    payload = build_notification_payload(
        WarningType.FEED, build_threshold_config(family_settings)
    )
    result = await channel.send(auth.family_id, payload)

    if not result.success:
        logger.warning(
            "Test notification failed",
            family_id=str(auth.family_id),
            error=result.error,
        )
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=result.error or "Failed to send notification",
        )

    return NotifyResponse(success=True)
