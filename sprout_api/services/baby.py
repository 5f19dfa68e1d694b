"""Baby service."""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sprout_api.logging_config import get_logger
from sprout_api.models.baby import Baby
from sprout_api.schemas.baby import BabyCreate

logger = get_logger(__name__)


async def list_babies(
    family_id: uuid.UUID,
    db: AsyncSession,
    include_inactive: bool = False,
) -> list[Baby]:
    """List a family's babies, oldest first."""
    query = select(Baby).where(Baby.family_id == family_id)
    if not include_inactive:
        query = query.where(Baby.inactive.is_(False))
    result = await db.execute(query.order_by(Baby.birth_date, Baby.first_name))
    return list(result.scalars().all())


async def get_baby(
    family_id: uuid.UUID,
    baby_id: uuid.UUID,
    db: AsyncSession,
) -> Baby | None:
    """Get a single baby, scoped to the family."""
    result = await db.execute(
        select(Baby).where(Baby.id == baby_id, Baby.family_id == family_id)
    )
    return result.scalar_one_or_none()


async def create_baby(
    family_id: uuid.UUID,
    data: BabyCreate,
    db: AsyncSession,
) -> Baby:
    baby = Baby(family_id=family_id, **data.model_dump())
    db.add(baby)
    await db.commit()
    await db.refresh(baby)

    logger.info(
        "Created baby",
        family_id=str(family_id),
        baby_id=str(baby.id),
    )
    return baby
