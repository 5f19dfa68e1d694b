"""Notification ledger used to deduplicate warning pushes."""

import enum
import uuid
from datetime import datetime

from sqlalchemy import Enum, ForeignKey, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from sprout_api.core.timeutils import utc_now
from sprout_api.models.base import Base, UTCDateTime


class WarningType(str, enum.Enum):
    """Activity category a warning is raised for."""

    FEED = "FEED"
    DIAPER = "DIAPER"


class NotificationLog(Base):
    """Record of a successfully dispatched warning notification.

    Write-once. Old rows are never deleted; lookups only look back over
    the dedupe window.
    """

    __tablename__ = "notification_logs"
    __table_args__ = (
        Index("ix_notification_logs_baby_id_type_sent_at", "baby_id", "type", "sent_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    baby_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("babies.id", ondelete="CASCADE"),
        nullable=False,
    )

    type: Mapped[WarningType] = mapped_column(
        Enum(
            WarningType,
            name="warningtype",
            native_enum=False,
            length=20,
            values_callable=lambda e: [member.value for member in e],
        ),
        nullable=False,
    )

    family_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("families.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    sent_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=utc_now,
    )

    def __repr__(self) -> str:
        return f"<NotificationLog(baby_id={self.baby_id}, type={self.type.value}, sent_at={self.sent_at})>"
