"""Family settings service.

Get-or-create access to FamilySettings, plus the warning threshold
configuration the monitor evaluates against.
"""

import uuid
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from sprout_api.core.encryption import encrypt_credential
from sprout_api.logging_config import get_logger
from sprout_api.models.baby import Baby
from sprout_api.models.family_settings import FamilySettings
from sprout_api.schemas.family_settings import FamilySettingsUpdate

logger = get_logger(__name__)

# Fields a client may reset to NULL; None is ignored for the rest
_CLEARABLE_FIELDS = frozenset(
    {
        "notification_feed_subtitle",
        "notification_diaper_subtitle",
        "notification_feed_advance_minutes",
        "notification_diaper_advance_minutes",
        "hermes_api_endpoint",
        "hermes_api_key",
    }
)


@dataclass(frozen=True)
class WarningThresholdConfig:
    """Warning thresholds and notification texts for one baby."""

    feed_warning_time: str
    diaper_warning_time: str
    feed_advance_minutes: int
    diaper_advance_minutes: int
    notification_enabled: bool
    title: str
    feed_subtitle: str | None
    feed_body: str
    diaper_subtitle: str | None
    diaper_body: str


def build_threshold_config(
    family_settings: FamilySettings,
    feed_warning_override: str | None = None,
    diaper_warning_override: str | None = None,
) -> WarningThresholdConfig:
    """Combine family settings with a baby's own warning times.

    A baby's override wins over the family default when set.
    """
    return WarningThresholdConfig(
        feed_warning_time=feed_warning_override or family_settings.feed_warning_time,
        diaper_warning_time=(
            diaper_warning_override or family_settings.diaper_warning_time
        ),
        feed_advance_minutes=max(0, family_settings.notification_feed_advance_minutes or 0),
        diaper_advance_minutes=max(
            0, family_settings.notification_diaper_advance_minutes or 0
        ),
        notification_enabled=bool(family_settings.notification_enabled),
        title=family_settings.notification_title,
        feed_subtitle=family_settings.notification_feed_subtitle or None,
        feed_body=family_settings.notification_feed_body,
        diaper_subtitle=family_settings.notification_diaper_subtitle or None,
        diaper_body=family_settings.notification_diaper_body,
    )


def threshold_config_for_baby(
    family_settings: FamilySettings,
    baby: Baby,
) -> WarningThresholdConfig:
    return build_threshold_config(
        family_settings,
        feed_warning_override=baby.feed_warning_time,
        diaper_warning_override=baby.diaper_warning_time,
    )


async def get_family_settings(
    db: AsyncSession,
    family_id: uuid.UUID,
) -> FamilySettings | None:
    """Fetch a family's settings without creating them."""
    result = await db.execute(
        select(FamilySettings).where(FamilySettings.family_id == family_id)
    )
    return result.scalar_one_or_none()


async def get_or_create_settings(
    family_id: uuid.UUID,
    db: AsyncSession,
) -> FamilySettings:
    """Get the family's settings, creating defaults if none exist."""
    family_settings = await get_family_settings(db, family_id)

    if family_settings is None:
        family_settings = FamilySettings(family_id=family_id)
        db.add(family_settings)
        try:
            await db.commit()
        except IntegrityError:
            # Concurrent request already created the row
            await db.rollback()
            result = await db.execute(
                select(FamilySettings).where(FamilySettings.family_id == family_id)
            )
            return result.scalar_one()
        await db.refresh(family_settings)

        logger.info("Created default family settings", family_id=str(family_id))

    return family_settings


async def update_settings(
    family_id: uuid.UUID,
    updates: FamilySettingsUpdate,
    db: AsyncSession,
) -> FamilySettings:
    """Apply a partial update to the family's settings."""
    family_settings = await get_or_create_settings(family_id, db)

    update_data = updates.model_dump(exclude_unset=True)
    applied = []
    for field, value in update_data.items():
        if value is None and field not in _CLEARABLE_FIELDS:
            continue
        if field == "hermes_api_key" and value is not None:
            value = encrypt_credential(value)
        setattr(family_settings, field, value)
        applied.append(field)

    await db.commit()
    await db.refresh(family_settings)

    logger.info(
        "Updated family settings",
        family_id=str(family_id),
        fields=[f for f in applied if f != "hermes_api_key"],
    )

    return family_settings
