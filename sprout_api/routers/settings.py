"""Family settings router.

Warning thresholds and push notification configuration.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from sprout_api.core.auth import AuthContext, require_family
from sprout_api.database import get_db
from sprout_api.models.family_settings import FamilySettings
from sprout_api.schemas.family_settings import (
    FamilySettingsResponse,
    FamilySettingsUpdate,
)
from sprout_api.services.family_settings import get_or_create_settings, update_settings

router = APIRouter(prefix="/api/settings", tags=["settings"])


def _to_response(family_settings: FamilySettings) -> FamilySettingsResponse:
    response = FamilySettingsResponse.model_validate(family_settings)
    return response.model_copy(
        update={"hermes_api_key_set": bool(family_settings.hermes_api_key)}
    )


@router.get("", response_model=FamilySettingsResponse)
async def get_settings(
    auth: AuthContext = Depends(require_family),
    db: AsyncSession = Depends(get_db),
) -> FamilySettingsResponse:
    """Get the family's settings, creating defaults on first access."""
    family_settings = await get_or_create_settings(auth.family_id, db)
    return _to_response(family_settings)


@router.patch("", response_model=FamilySettingsResponse)
async def patch_settings(
    body: FamilySettingsUpdate,
    auth: AuthContext = Depends(require_family),
    db: AsyncSession = Depends(get_db),
) -> FamilySettingsResponse:
    """Update the family's settings. Only provided fields change."""
    family_settings = await update_settings(auth.family_id, body, db)
    return _to_response(family_settings)
