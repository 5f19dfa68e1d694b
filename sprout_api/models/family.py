"""Family (tenant) model."""

import uuid

from sqlalchemy import Boolean, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sprout_api.models.base import Base, TimestampMixin


class Family(Base, TimestampMixin):
    """A household sharing babies, caretakers and settings.

    Every activity record carries the family_id so queries can be
    scoped to the caller's tenant.
    """

    __tablename__ = "families"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    slug: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
        index=True,
    )

    name: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
    )

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
    )

    babies = relationship("Baby", back_populates="family")
    settings = relationship("FamilySettings", back_populates="family", uselist=False)

    def __repr__(self) -> str:
        return f"<Family(slug={self.slug!r}, name={self.name!r})>"
