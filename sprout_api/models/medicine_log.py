"""Medicine administration log model."""

import uuid
from datetime import datetime

from sqlalchemy import Float, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sprout_api.models.base import Base, TimestampMixin, UTCDateTime


class MedicineLog(Base, TimestampMixin):
    """One administered dose.

    Append-only in practice: edits are limited to time, amount, unit and
    notes, and deletes are soft (deleted_at).
    """

    __tablename__ = "medicine_logs"
    __table_args__ = (
        Index("ix_medicine_logs_baby_id_medicine_id_time", "baby_id", "medicine_id", "time"),
    )

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

    medicine_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("medicines.id", ondelete="CASCADE"),
        nullable=False,
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
        index=True,
    )

    dose_amount: Mapped[float] = mapped_column(
        Float,
        nullable=False,
    )

    # NULL means "use the medicine's unit"
    unit_abbr: Mapped[str | None] = mapped_column(
        String(20),
        nullable=True,
    )

    notes: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    deleted_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime(),
        nullable=True,
    )

    medicine = relationship("Medicine", lazy="joined")

    def __repr__(self) -> str:
        return (
            f"<MedicineLog(medicine_id={self.medicine_id}, baby_id={self.baby_id}, "
            f"dose={self.dose_amount} {self.unit_abbr}, time={self.time})>"
        )
