"""Feed and diaper log service.

These logs are what the warning monitor measures elapsed time from.
"""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sprout_api.core.timeutils import to_utc
from sprout_api.logging_config import get_logger
from sprout_api.models.baby import Baby
from sprout_api.models.diaper_log import DiaperLog
from sprout_api.models.feed_log import FeedLog
from sprout_api.schemas.activity_log import DiaperLogCreate, FeedLogCreate

logger = get_logger(__name__)

DEFAULT_LIST_LIMIT = 100


async def _require_baby(family_id: uuid.UUID, baby_id: uuid.UUID, db: AsyncSession) -> None:
    found = await db.scalar(
        select(Baby.id).where(Baby.id == baby_id, Baby.family_id == family_id)
    )
    if found is None:
        msg = "Baby not found"
        raise ValueError(msg)


# ---------------------------------------------------------------------------
# Feeds
# ---------------------------------------------------------------------------


async def list_feed_logs(
    family_id: uuid.UUID,
    db: AsyncSession,
    baby_id: uuid.UUID | None = None,
    limit: int = DEFAULT_LIST_LIMIT,
) -> list[FeedLog]:
    """List feeds, newest first."""
    query = select(FeedLog).where(FeedLog.family_id == family_id)
    if baby_id is not None:
        query = query.where(FeedLog.baby_id == baby_id)
    result = await db.execute(query.order_by(FeedLog.time.desc()).limit(limit))
    return list(result.scalars().all())


async def get_last_feed(
    family_id: uuid.UUID,
    baby_id: uuid.UUID,
    db: AsyncSession,
) -> FeedLog | None:
    """Most recent feed for a baby, or None if never fed."""
    result = await db.execute(
        select(FeedLog)
        .where(FeedLog.family_id == family_id, FeedLog.baby_id == baby_id)
        .order_by(FeedLog.time.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def create_feed_log(
    family_id: uuid.UUID,
    caretaker_id: uuid.UUID | None,
    data: FeedLogCreate,
    db: AsyncSession,
) -> FeedLog:
    """Record a feed.

    Raises:
        ValueError: If the baby is not in the family.
    """
    await _require_baby(family_id, data.baby_id, db)

    log = FeedLog(
        family_id=family_id,
        caretaker_id=caretaker_id,
        **data.model_dump(exclude={"time"}),
        time=to_utc(data.time),
    )
    db.add(log)
    await db.commit()
    await db.refresh(log)

    logger.info(
        "Recorded feed",
        baby_id=str(data.baby_id),
        feed_type=data.feed_type.value,
    )
    return log


async def delete_feed_log(
    family_id: uuid.UUID,
    log_id: uuid.UUID,
    db: AsyncSession,
) -> bool:
    log = await db.scalar(
        select(FeedLog).where(FeedLog.id == log_id, FeedLog.family_id == family_id)
    )
    if log is None:
        return False

    await db.delete(log)
    await db.commit()
    logger.info("Deleted feed", log_id=str(log_id))
    return True


# ---------------------------------------------------------------------------
# Diapers
# ---------------------------------------------------------------------------


async def list_diaper_logs(
    family_id: uuid.UUID,
    db: AsyncSession,
    baby_id: uuid.UUID | None = None,
    limit: int = DEFAULT_LIST_LIMIT,
) -> list[DiaperLog]:
    """List diaper changes, newest first."""
    query = select(DiaperLog).where(DiaperLog.family_id == family_id)
    if baby_id is not None:
        query = query.where(DiaperLog.baby_id == baby_id)
    result = await db.execute(query.order_by(DiaperLog.time.desc()).limit(limit))
    return list(result.scalars().all())


async def create_diaper_log(
    family_id: uuid.UUID,
    caretaker_id: uuid.UUID | None,
    data: DiaperLogCreate,
    db: AsyncSession,
) -> DiaperLog:
    """Record a diaper change.

    Raises:
        ValueError: If the baby is not in the family.
    """
    await _require_baby(family_id, data.baby_id, db)

    log = DiaperLog(
        family_id=family_id,
        caretaker_id=caretaker_id,
        **data.model_dump(exclude={"time"}),
        time=to_utc(data.time),
    )
    db.add(log)
    await db.commit()
    await db.refresh(log)

    logger.info(
        "Recorded diaper change",
        baby_id=str(data.baby_id),
        diaper_type=data.diaper_type.value,
    )
    return log


async def delete_diaper_log(
    family_id: uuid.UUID,
    log_id: uuid.UUID,
    db: AsyncSession,
) -> bool:
    log = await db.scalar(
        select(DiaperLog).where(DiaperLog.id == log_id, DiaperLog.family_id == family_id)
    )
    if log is None:
        return False

    await db.delete(log)
    await db.commit()
    logger.info("Deleted diaper change", log_id=str(log_id))
    return True
