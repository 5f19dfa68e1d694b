"""Medicine and contact models.

A medicine carries the minimum interval between doses as a string in
``D:HH:MM`` form (legacy ``HH:MM`` still accepted). Contacts (doctor,
pharmacy, ...) can be attached to a medicine for escalation info.
"""

import uuid
from datetime import datetime

from sqlalchemy import (
    Boolean,
    Column,
    Float,
    ForeignKey,
    String,
    Table,
    Text,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sprout_api.models.base import Base, TimestampMixin, UTCDateTime

contact_medicines = Table(
    "contact_medicines",
    Base.metadata,
    Column(
        "contact_id",
        Uuid,
        ForeignKey("contacts.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "medicine_id",
        Uuid,
        ForeignKey("medicines.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Contact(Base, TimestampMixin):
    """A person to reach about a baby's care (doctor, pharmacist, ...)."""

    __tablename__ = "contacts"

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

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    role: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    email: Mapped[str | None] = mapped_column(String(200), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    deleted_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime(),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Contact(name={self.name!r}, role={self.role!r})>"


class Medicine(Base, TimestampMixin):
    """A medicine the family administers."""

    __tablename__ = "medicines"

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

    name: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
        index=True,
    )

    typical_dose_size: Mapped[float | None] = mapped_column(
        Float,
        nullable=True,
    )

    unit_abbr: Mapped[str | None] = mapped_column(
        String(20),
        nullable=True,
    )

    # Minimum time between doses, "D:HH:MM" or legacy "HH:MM"
    dose_min_time: Mapped[str | None] = mapped_column(
        String(20),
        nullable=True,
    )

    notes: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        index=True,
    )

    deleted_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime(),
        nullable=True,
    )

    contacts = relationship(
        "Contact",
        secondary=contact_medicines,
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return (
            f"<Medicine(name={self.name!r}, dose_min_time={self.dose_min_time!r}, "
            f"active={self.active})>"
        )
