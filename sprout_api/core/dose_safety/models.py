"""Dose safety data models.

Plain Pydantic models with no database dependency. ORM rows are
converted with ``model_validate(row)`` (from_attributes).
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AdministrationRecord(BaseModel):
    """One administered dose as seen by the evaluator."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: uuid.UUID | None = None
    medicine_id: uuid.UUID
    time: datetime
    dose_amount: float
    unit_abbr: str | None = None


class MedicineDoseConfig(BaseModel):
    """The parts of a medicine the evaluator needs."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: uuid.UUID
    name: str
    dose_min_time: str | None = None
    unit_abbr: str | None = None


class DoseSafetyState(BaseModel):
    """Dosing state of one medicine for one baby at evaluation time.

    Derived on every call, never stored. ``last_*`` fields are None when
    the medicine has never been given.
    """

    model_config = ConfigDict(frozen=True)

    medicine_id: uuid.UUID
    medicine_name: str
    is_safe: bool
    minutes_remaining: int = Field(default=0, ge=0)
    next_safe_time: datetime | None = None
    total_dose_amount_last_24h: float = 0.0
    unit_abbr: str | None = None
    last_log_id: uuid.UUID | None = None
    last_dose_amount: float | None = None
    last_dose_time: datetime | None = None
