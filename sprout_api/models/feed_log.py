"""Feed log model."""

import enum
import uuid
from datetime import datetime

from sqlalchemy import Enum, Float, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from sprout_api.models.base import Base, TimestampMixin, UTCDateTime


class FeedType(str, enum.Enum):
    """Kind of feeding."""

    BREAST = "BREAST"
    BOTTLE = "BOTTLE"
    SOLIDS = "SOLIDS"


class FeedLog(Base, TimestampMixin):
    """A single feeding event."""

    __tablename__ = "feed_logs"
    __table_args__ = (Index("ix_feed_logs_baby_id_time", "baby_id", "time"),)

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    family_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("families.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    baby_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("babies.id", ondelete="CASCADE"),
        nullable=False,
    )

    caretaker_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        nullable=True,
    )

    time: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
    )

    feed_type: Mapped[FeedType] = mapped_column(
        Enum(
            FeedType,
            name="feedtype",
            native_enum=False,
            length=20,
            values_callable=lambda e: [member.value for member in e],
        ),
        nullable=False,
    )

    amount: Mapped[float | None] = mapped_column(
        Float,
        nullable=True,
    )

    unit_abbr: Mapped[str | None] = mapped_column(
        String(20),
        nullable=True,
    )

    notes: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<FeedLog(baby_id={self.baby_id}, type={self.feed_type.value}, time={self.time})>"
