"""Medicine logs router.

Dose records and the active doses view used by the medicine screen.
"""

import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from sprout_api.config import settings
from sprout_api.core.auth import AuthContext, require_family
from sprout_api.database import get_db
from sprout_api.schemas.medicine_log import (
    ActiveDoseResponse,
    ActiveDosesResponse,
    MedicineLogCreate,
    MedicineLogListResponse,
    MedicineLogResponse,
    MedicineLogUpdate,
)
from sprout_api.services.dose_safety import get_active_doses
from sprout_api.services.medicine_log import (
    create_medicine_log,
    delete_medicine_log,
    get_medicine_log,
    list_medicine_logs,
    update_medicine_log,
)

router = APIRouter(prefix="/api/medicine-logs", tags=["medicine-logs"])


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Medicine log not found",
    )


@router.get("/active-doses", response_model=ActiveDosesResponse)
async def active_doses(
    baby_id: uuid.UUID = Query(...),
    auth: AuthContext = Depends(require_family),
    db: AsyncSession = Depends(get_db),
) -> ActiveDosesResponse:
    """Dose safety for every medicine the baby received in the last 24h.

    Waiting medicines come first. Clients poll every
    ``refresh_interval_seconds`` while any dose is waiting.
    """
    states = await get_active_doses(auth.family_id, baby_id, db)
    return ActiveDosesResponse(
        doses=[ActiveDoseResponse.from_state(s) for s in states],
        refresh_interval_seconds=settings.dose_refresh_interval_seconds,
    )


@router.get("", response_model=MedicineLogListResponse)
async def get_medicine_logs(
    baby_id: uuid.UUID | None = Query(default=None),
    medicine_id: uuid.UUID | None = Query(default=None),
    start_date: datetime | None = Query(default=None),
    end_date: datetime | None = Query(default=None),
    limit: int = Query(default=100, ge=1, le=1000),
    auth: AuthContext = Depends(require_family),
    db: AsyncSession = Depends(get_db),
) -> MedicineLogListResponse:
    """List dose records, newest first."""
    logs = await list_medicine_logs(
        auth.family_id,
        db,
        baby_id=baby_id,
        medicine_id=medicine_id,
        start_date=start_date,
        end_date=end_date,
        limit=limit,
    )
    return MedicineLogListResponse(
        logs=[MedicineLogResponse.model_validate(log) for log in logs],
        count=len(logs),
    )


@router.get("/{log_id}", response_model=MedicineLogResponse)
async def get_one_medicine_log(
    log_id: uuid.UUID,
    auth: AuthContext = Depends(require_family),
    db: AsyncSession = Depends(get_db),
) -> MedicineLogResponse:
    log = await get_medicine_log(auth.family_id, log_id, db)
    if log is None:
        raise _not_found()
    return MedicineLogResponse.model_validate(log)


@router.post("", response_model=MedicineLogResponse, status_code=status.HTTP_201_CREATED)
async def add_medicine_log(
    data: MedicineLogCreate,
    auth: AuthContext = Depends(require_family),
    db: AsyncSession = Depends(get_db),
) -> MedicineLogResponse:
    """Record a dose.

    Dose safety is advisory; recording is never refused because a
    medicine is still waiting.
    """
    try:
        log = await create_medicine_log(auth.family_id, auth.caretaker_id, data, db)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    return MedicineLogResponse.model_validate(log)


@router.patch("/{log_id}", response_model=MedicineLogResponse)
async def edit_medicine_log(
    log_id: uuid.UUID,
    data: MedicineLogUpdate,
    auth: AuthContext = Depends(require_family),
    db: AsyncSession = Depends(get_db),
) -> MedicineLogResponse:
    log = await update_medicine_log(auth.family_id, log_id, data, db)
    if log is None:
        raise _not_found()
    return MedicineLogResponse.model_validate(log)


@router.delete("/{log_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_medicine_log(
    log_id: uuid.UUID,
    auth: AuthContext = Depends(require_family),
    db: AsyncSession = Depends(get_db),
) -> None:
    """Soft delete a dose record."""
    if not await delete_medicine_log(auth.family_id, log_id, db):
        raise _not_found()
