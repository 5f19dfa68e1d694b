"""Feed and diaper log schemas."""

import uuid
from datetime import datetime

from pydantic import AwareDatetime, BaseModel, Field, field_validator

from sprout_api.models.diaper_log import DiaperType
from sprout_api.models.feed_log import FeedType
from sprout_api.schemas.validators import blank_to_none


class FeedLogCreate(BaseModel):
    """Request schema for logging a feed."""

    baby_id: uuid.UUID
    time: AwareDatetime
    feed_type: FeedType
    amount: float | None = Field(default=None, ge=0)
    unit_abbr: str | None = Field(default=None, max_length=20)
    notes: str | None = None

    @field_validator("unit_abbr")
    @classmethod
    def empty_unit_is_none(cls, v: str | None) -> str | None:
        return blank_to_none(v)


class FeedLogResponse(BaseModel):
    """Response schema for a feed."""

    model_config = {"from_attributes": True}

    id: uuid.UUID
    baby_id: uuid.UUID
    time: datetime
    feed_type: FeedType
    amount: float | None
    unit_abbr: str | None
    notes: str | None


class DiaperLogCreate(BaseModel):
    """Request schema for logging a diaper change."""

    baby_id: uuid.UUID
    time: AwareDatetime
    diaper_type: DiaperType
    notes: str | None = None


class DiaperLogResponse(BaseModel):
    """Response schema for a diaper change."""

    model_config = {"from_attributes": True}

    id: uuid.UUID
    baby_id: uuid.UUID
    time: datetime
    diaper_type: DiaperType
    notes: str | None
