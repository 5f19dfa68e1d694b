"""Contact schemas."""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from sprout_api.schemas.validators import blank_to_none, strip_required


class ContactCreate(BaseModel):
    """Request schema for creating a contact."""

    name: str = Field(..., min_length=1, max_length=100)
    role: str = Field(..., min_length=1, max_length=100)
    phone: str | None = Field(default=None, max_length=50)
    email: str | None = Field(default=None, max_length=200)
    address: str | None = None
    notes: str | None = None

    @field_validator("name", "role")
    @classmethod
    def required_text(cls, v: str) -> str:
        return strip_required(v)

    @field_validator("phone", "email", "address", "notes")
    @classmethod
    def empty_is_none(cls, v: str | None) -> str | None:
        return blank_to_none(v)


class ContactUpdate(BaseModel):
    """Partial update for a contact. An empty optional field clears it."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    role: str | None = Field(default=None, min_length=1, max_length=100)
    phone: str | None = Field(default=None, max_length=50)
    email: str | None = Field(default=None, max_length=200)
    address: str | None = None
    notes: str | None = None

    @field_validator("name", "role")
    @classmethod
    def required_text(cls, v: str | None) -> str | None:
        return strip_required(v) if v is not None else None

    @field_validator("phone", "email", "address", "notes")
    @classmethod
    def empty_is_none(cls, v: str | None) -> str | None:
        return blank_to_none(v)


class ContactResponse(BaseModel):
    """Response schema for a contact."""

    model_config = {"from_attributes": True}

    id: uuid.UUID
    name: str
    role: str
    phone: str | None
    email: str | None
    address: str | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ContactListResponse(BaseModel):
    """Response schema for listing contacts."""

    contacts: list[ContactResponse]
    count: int
