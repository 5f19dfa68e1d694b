"""Feed logs router."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from sprout_api.core.auth import AuthContext, require_family
from sprout_api.database import get_db
from sprout_api.schemas.activity_log import FeedLogCreate, FeedLogResponse
from sprout_api.services.activity_log import (
    create_feed_log,
    delete_feed_log,
    get_last_feed,
    list_feed_logs,
)

router = APIRouter(prefix="/api/feed-logs", tags=["feed-logs"])


@router.get("/last", response_model=FeedLogResponse | None)
async def last_feed(
    baby_id: uuid.UUID = Query(...),
    auth: AuthContext = Depends(require_family),
    db: AsyncSession = Depends(get_db),
) -> FeedLogResponse | None:
    """Most recent feed for the baby, or null if never fed."""
    log = await get_last_feed(auth.family_id, baby_id, db)
    return FeedLogResponse.model_validate(log) if log else None


@router.get("", response_model=list[FeedLogResponse])
async def get_feed_logs(
    baby_id: uuid.UUID | None = Query(default=None),
    limit: int = Query(default=100, ge=1, le=1000),
    auth: AuthContext = Depends(require_family),
    db: AsyncSession = Depends(get_db),
) -> list[FeedLogResponse]:
    logs = await list_feed_logs(auth.family_id, db, baby_id=baby_id, limit=limit)
    return [FeedLogResponse.model_validate(log) for log in logs]


@router.post("", response_model=FeedLogResponse, status_code=status.HTTP_201_CREATED)
async def add_feed_log(
    data: FeedLogCreate,
    auth: AuthContext = Depends(require_family),
    db: AsyncSession = Depends(get_db),
) -> FeedLogResponse:
    try:
        log = await create_feed_log(auth.family_id, auth.caretaker_id, data, db)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    return FeedLogResponse.model_validate(log)


@router.delete("/{log_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_feed_log(
    log_id: uuid.UUID,
    auth: AuthContext = Depends(require_family),
    db: AsyncSession = Depends(get_db),
) -> None:
    if not await delete_feed_log(auth.family_id, log_id, db):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Feed log not found",
        )
