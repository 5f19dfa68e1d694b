"""Warning notification and monitor control schemas."""

import uuid

from pydantic import BaseModel

from sprout_api.models.notification_log import WarningType


class WarningNotifyRequest(BaseModel):
    """Request a warning notification for one baby."""

    baby_id: uuid.UUID
    type: WarningType


class NotifyResponse(BaseModel):
    """Result of a manual notification request."""

    success: bool
    skipped: bool = False
    error: str | None = None


class MonitorResponse(BaseModel):
    """Response of the warning monitor control endpoint."""

    success: bool
    message: str | None = None
    active: bool | None = None
    interval: int | None = None
    warnings_found: int | None = None
    notifications_sent: int | None = None
