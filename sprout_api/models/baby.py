"""Baby model."""

import uuid
from datetime import date

from sqlalchemy import Boolean, Date, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sprout_api.models.base import Base, TimestampMixin


class Baby(Base, TimestampMixin):
    """A tracked baby.

    Inactive babies are kept for history but ignored by the warning
    monitor. Warning times left NULL fall back to the family settings.
    """

    __tablename__ = "babies"

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

    first_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )

    last_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        default="",
    )

    birth_date: Mapped[date | None] = mapped_column(
        Date,
        nullable=True,
    )

    inactive: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        index=True,
    )

    feed_warning_time: Mapped[str | None] = mapped_column(
        String(5),
        nullable=True,
    )

    diaper_warning_time: Mapped[str | None] = mapped_column(
        String(5),
        nullable=True,
    )

    family = relationship("Family", back_populates="babies")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __repr__(self) -> str:
        return f"<Baby(name={self.full_name!r}, inactive={self.inactive})>"
