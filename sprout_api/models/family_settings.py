"""Per-family settings: warning thresholds and push notification config."""

import uuid

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sprout_api.models.base import Base, TimestampMixin

DEFAULT_FEED_WARNING_TIME = "02:00"
DEFAULT_DIAPER_WARNING_TIME = "03:00"

DEFAULT_NOTIFICATION_TITLE = "Warning ‼️"
DEFAULT_FEED_SUBTITLE = "It's time for feeding ♥️"
DEFAULT_FEED_BODY = (
    "Baby might be hungry soon, please be ready and prepare in advance~"
)
DEFAULT_DIAPER_SUBTITLE = "It's time for diaper ♥️"
DEFAULT_DIAPER_BODY = "Mom and Dad, please check diaper in time for our baby~"


class FamilySettings(Base, TimestampMixin):
    """Family-wide settings.

    One-to-one with Family. Warning times are ``HH:MM`` durations since
    the last logged event; babies may override them individually.
    """

    __tablename__ = "family_settings"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    family_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("families.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )

    feed_warning_time: Mapped[str] = mapped_column(
        String(5),
        nullable=False,
        default=DEFAULT_FEED_WARNING_TIME,
    )

    diaper_warning_time: Mapped[str] = mapped_column(
        String(5),
        nullable=False,
        default=DEFAULT_DIAPER_WARNING_TIME,
    )

    notification_enabled: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    notification_provider: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default="HERMES",
    )

    hermes_api_endpoint: Mapped[str | None] = mapped_column(
        String(500),
        nullable=True,
    )

    # Fernet-encrypted (sprout_api.core.encryption)
    hermes_api_key: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    notification_title: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
        default=DEFAULT_NOTIFICATION_TITLE,
    )

    notification_feed_subtitle: Mapped[str | None] = mapped_column(
        String(200),
        nullable=True,
        default=DEFAULT_FEED_SUBTITLE,
    )

    notification_feed_body: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default=DEFAULT_FEED_BODY,
    )

    notification_diaper_subtitle: Mapped[str | None] = mapped_column(
        String(200),
        nullable=True,
        default=DEFAULT_DIAPER_SUBTITLE,
    )

    notification_diaper_body: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default=DEFAULT_DIAPER_BODY,
    )

    # Fire this many minutes before the warning time is reached
    notification_feed_advance_minutes: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
    )

    notification_diaper_advance_minutes: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
    )

    family = relationship("Family", back_populates="settings")

    def __repr__(self) -> str:
        return (
            f"<FamilySettings(family_id={self.family_id}, "
            f"feed={self.feed_warning_time}, diaper={self.diaper_warning_time}, "
            f"notifications={self.notification_enabled})>"
        )
