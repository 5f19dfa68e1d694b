"""Babies router."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from sprout_api.core.auth import AuthContext, require_family
from sprout_api.database import get_db
from sprout_api.schemas.baby import BabyCreate, BabyResponse
from sprout_api.services.baby import create_baby, list_babies

router = APIRouter(prefix="/api/babies", tags=["babies"])


@router.get("", response_model=list[BabyResponse])
async def get_babies(
    include_inactive: bool = Query(default=False),
    auth: AuthContext = Depends(require_family),
    db: AsyncSession = Depends(get_db),
) -> list[BabyResponse]:
    babies = await list_babies(auth.family_id, db, include_inactive=include_inactive)
    return [BabyResponse.model_validate(b) for b in babies]


@router.post("", response_model=BabyResponse, status_code=status.HTTP_201_CREATED)
async def add_baby(
    data: BabyCreate,
    auth: AuthContext = Depends(require_family),
    db: AsyncSession = Depends(get_db),
) -> BabyResponse:
    """Add a baby. Warning times, when given, override the family's."""
    baby = await create_baby(auth.family_id, data, db)
    return BabyResponse.model_validate(baby)
