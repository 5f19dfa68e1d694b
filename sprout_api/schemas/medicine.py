"""Medicine schemas."""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from sprout_api.schemas.contact import ContactResponse
from sprout_api.schemas.validators import blank_to_none, check_dose_min_time


class MedicineCreate(BaseModel):
    """Request schema for creating a medicine."""

    name: str = Field(..., min_length=1, max_length=200)
    typical_dose_size: float | None = Field(default=None, ge=0)
    unit_abbr: str | None = Field(default=None, max_length=20)
    dose_min_time: str | None = Field(
        default=None,
        description="Minimum time between doses, D:HH:MM (or legacy HH:MM).",
    )
    notes: str | None = None
    active: bool = True
    contact_ids: list[uuid.UUID] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            msg = "Name cannot be empty or whitespace only"
            raise ValueError(msg)
        return v

    @field_validator("dose_min_time")
    @classmethod
    def validate_dose_min_time(cls, v: str | None) -> str | None:
        return check_dose_min_time(v)

    @field_validator("unit_abbr")
    @classmethod
    def empty_unit_is_none(cls, v: str | None) -> str | None:
        return blank_to_none(v)


class MedicineUpdate(BaseModel):
    """Partial update for a medicine. Only provided fields change."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    typical_dose_size: float | None = Field(default=None, ge=0)
    unit_abbr: str | None = Field(default=None, max_length=20)
    dose_min_time: str | None = None
    notes: str | None = None
    active: bool | None = None
    contact_ids: list[uuid.UUID] | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        if not v:
            msg = "Name cannot be empty or whitespace only"
            raise ValueError(msg)
        return v

    @field_validator("dose_min_time")
    @classmethod
    def validate_dose_min_time(cls, v: str | None) -> str | None:
        return check_dose_min_time(v)

    @field_validator("unit_abbr", "notes")
    @classmethod
    def empty_is_none(cls, v: str | None) -> str | None:
        return blank_to_none(v)


class MedicineResponse(BaseModel):
    """Response schema for a medicine."""

    model_config = {"from_attributes": True}

    id: uuid.UUID
    name: str
    typical_dose_size: float | None
    unit_abbr: str | None
    dose_min_time: str | None
    notes: str | None
    active: bool
    contacts: list[ContactResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class MedicineListResponse(BaseModel):
    """Response schema for listing medicines."""

    medicines: list[MedicineResponse]
    count: int
