"""Family settings schemas."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from sprout_api.schemas.validators import blank_to_none, check_warning_time


class FamilySettingsResponse(BaseModel):
    """Response schema for family settings.

    The Hermes API key is never echoed; only whether one is set.
    """

    model_config = {"from_attributes": True}

    feed_warning_time: str
    diaper_warning_time: str
    notification_enabled: bool
    notification_provider: str
    hermes_api_endpoint: str | None
    hermes_api_key_set: bool = False
    notification_title: str
    notification_feed_subtitle: str | None
    notification_feed_body: str
    notification_diaper_subtitle: str | None
    notification_diaper_body: str
    notification_feed_advance_minutes: int | None
    notification_diaper_advance_minutes: int | None
    updated_at: datetime


class FamilySettingsUpdate(BaseModel):
    """Partial update of family settings. Only provided fields change."""

    feed_warning_time: str | None = None
    diaper_warning_time: str | None = None
    notification_enabled: bool | None = None
    hermes_api_endpoint: str | None = Field(default=None, max_length=500)
    hermes_api_key: str | None = Field(default=None, max_length=500)
    notification_title: str | None = Field(default=None, min_length=1, max_length=200)
    notification_feed_subtitle: str | None = Field(default=None, max_length=200)
    notification_feed_body: str | None = Field(default=None, min_length=1)
    notification_diaper_subtitle: str | None = Field(default=None, max_length=200)
    notification_diaper_body: str | None = Field(default=None, min_length=1)
    notification_feed_advance_minutes: int | None = Field(
        default=None,
        ge=0,
        le=1440,
        description="Minutes before the feed warning time to notify. Range: 0-1440.",
    )
    notification_diaper_advance_minutes: int | None = Field(
        default=None,
        ge=0,
        le=1440,
        description="Minutes before the diaper warning time to notify. Range: 0-1440.",
    )

    @field_validator("feed_warning_time", "diaper_warning_time")
    @classmethod
    def validate_warning_time(cls, v: str | None) -> str | None:
        return check_warning_time(v)

    @field_validator("hermes_api_endpoint", "hermes_api_key")
    @classmethod
    def empty_is_none(cls, v: str | None) -> str | None:
        return blank_to_none(v)
