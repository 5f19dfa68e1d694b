"""Diaper log model."""

import enum
import uuid
from datetime import datetime

from sqlalchemy import Enum, ForeignKey, Index, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from sprout_api.models.base import Base, TimestampMixin, UTCDateTime


class DiaperType(str, enum.Enum):
    """Diaper contents."""

    WET = "WET"
    DIRTY = "DIRTY"
    BOTH = "BOTH"


class DiaperLog(Base, TimestampMixin):
    """A single diaper change."""

    __tablename__ = "diaper_logs"
    __table_args__ = (Index("ix_diaper_logs_baby_id_time", "baby_id", "time"),)

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

    diaper_type: Mapped[DiaperType] = mapped_column(
        Enum(
            DiaperType,
            name="diapertype",
            native_enum=False,
            length=20,
            values_callable=lambda e: [member.value for member in e],
        ),
        nullable=False,
    )

    notes: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<DiaperLog(baby_id={self.baby_id}, type={self.diaper_type.value}, time={self.time})>"
