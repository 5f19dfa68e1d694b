"""Baby schemas."""

import uuid
from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator

from sprout_api.schemas.validators import check_warning_time


class BabyCreate(BaseModel):
    """Request schema for adding a baby."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(default="", max_length=100)
    birth_date: date | None = None
    feed_warning_time: str | None = Field(
        default=None,
        description="Override of the family feed warning time (HH:MM).",
    )
    diaper_warning_time: str | None = Field(
        default=None,
        description="Override of the family diaper warning time (HH:MM).",
    )

    @field_validator("feed_warning_time", "diaper_warning_time")
    @classmethod
    def validate_warning_time(cls, v: str | None) -> str | None:
        return check_warning_time(v)


class BabyResponse(BaseModel):
    """Response schema for a baby."""

    model_config = {"from_attributes": True}

    id: uuid.UUID
    first_name: str
    last_name: str
    birth_date: date | None
    inactive: bool
    feed_warning_time: str | None
    diaper_warning_time: str | None
    created_at: datetime
