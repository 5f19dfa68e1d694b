"""Medicine log and dose safety schemas."""

import uuid
from datetime import datetime

from pydantic import AwareDatetime, BaseModel, Field, field_validator

from sprout_api.core.dose_safety import (
    DoseSafetyState,
    dose_status_label,
    format_time_remaining,
)
from sprout_api.schemas.validators import blank_to_none


class MedicineLogCreate(BaseModel):
    """Request schema for recording an administered dose."""

    medicine_id: uuid.UUID
    baby_id: uuid.UUID
    time: AwareDatetime
    dose_amount: float = Field(..., ge=0)
    unit_abbr: str | None = Field(default=None, max_length=20)
    notes: str | None = None

    @field_validator("unit_abbr")
    @classmethod
    def empty_unit_is_none(cls, v: str | None) -> str | None:
        return blank_to_none(v)


class MedicineLogUpdate(BaseModel):
    """Soft edit of a dose: time, amount, unit and notes only."""

    time: AwareDatetime | None = None
    dose_amount: float | None = Field(default=None, ge=0)
    unit_abbr: str | None = Field(default=None, max_length=20)
    notes: str | None = None


class MedicineLogResponse(BaseModel):
    """Response schema for a dose record."""

    model_config = {"from_attributes": True}

    id: uuid.UUID
    medicine_id: uuid.UUID
    baby_id: uuid.UUID
    caretaker_id: uuid.UUID | None
    time: datetime
    dose_amount: float
    unit_abbr: str | None
    notes: str | None
    created_at: datetime
    updated_at: datetime


class MedicineLogListResponse(BaseModel):
    """Response schema for listing dose records."""

    logs: list[MedicineLogResponse]
    count: int


class ActiveDoseResponse(BaseModel):
    """Dose safety view of one medicine."""

    medicine_id: uuid.UUID
    medicine_name: str
    log_id: uuid.UUID | None
    dose_amount: float | None
    unit_abbr: str | None
    time: datetime | None
    is_safe: bool
    minutes_remaining: int
    next_dose_time: datetime | None
    total_in_24_hours: float
    status: str
    time_remaining_text: str

    @classmethod
    def from_state(cls, state: DoseSafetyState) -> "ActiveDoseResponse":
        return cls(
            medicine_id=state.medicine_id,
            medicine_name=state.medicine_name,
            log_id=state.last_log_id,
            dose_amount=state.last_dose_amount,
            unit_abbr=state.unit_abbr,
            time=state.last_dose_time,
            is_safe=state.is_safe,
            minutes_remaining=state.minutes_remaining,
            next_dose_time=state.next_safe_time,
            total_in_24_hours=state.total_dose_amount_last_24h,
            status=dose_status_label(state),
            time_remaining_text=format_time_remaining(state.minutes_remaining),
        )


class ActiveDosesResponse(BaseModel):
    """Dose safety for every medicine given to a baby in the last 24h."""

    doses: list[ActiveDoseResponse]
    refresh_interval_seconds: int = Field(
        description="Suggested poll interval while any dose is waiting.",
    )
