"""Diaper logs router."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from sprout_api.core.auth import AuthContext, require_family
from sprout_api.database import get_db
from sprout_api.schemas.activity_log import DiaperLogCreate, DiaperLogResponse
from sprout_api.services.activity_log import (
    create_diaper_log,
    delete_diaper_log,
    list_diaper_logs,
)

router = APIRouter(prefix="/api/diaper-logs", tags=["diaper-logs"])


@router.get("", response_model=list[DiaperLogResponse])
async def get_diaper_logs(
    baby_id: uuid.UUID | None = Query(default=None),
    limit: int = Query(default=100, ge=1, le=1000),
    auth: AuthContext = Depends(require_family),
    db: AsyncSession = Depends(get_db),
) -> list[DiaperLogResponse]:
    logs = await list_diaper_logs(auth.family_id, db, baby_id=baby_id, limit=limit)
    return [DiaperLogResponse.model_validate(log) for log in logs]


@router.post("", response_model=DiaperLogResponse, status_code=status.HTTP_201_CREATED)
async def add_diaper_log(
    data: DiaperLogCreate,
    auth: AuthContext = Depends(require_family),
    db: AsyncSession = Depends(get_db),
) -> DiaperLogResponse:
    try:
        log = await create_diaper_log(auth.family_id, auth.caretaker_id, data, db)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    return DiaperLogResponse.model_validate(log)


@router.delete("/{log_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_diaper_log(
    log_id: uuid.UUID,
    auth: AuthContext = Depends(require_family),
    db: AsyncSession = Depends(get_db),
) -> None:
    if not await delete_diaper_log(auth.family_id, log_id, db):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Diaper log not found",
        )
