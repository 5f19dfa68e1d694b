"""Medicines router.

CRUD for medicines plus the single-medicine dose safety check.
"""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from sprout_api.core.auth import AuthContext, require_family
from sprout_api.database import get_db
from sprout_api.schemas.medicine import (
    MedicineCreate,
    MedicineListResponse,
    MedicineResponse,
    MedicineUpdate,
)
from sprout_api.schemas.medicine_log import ActiveDoseResponse
from sprout_api.services.baby import get_baby
from sprout_api.services.dose_safety import get_medicine_safety
from sprout_api.services.medicine import (
    create_medicine,
    delete_medicine,
    get_medicine,
    list_medicines,
    update_medicine,
)

router = APIRouter(prefix="/api/medicines", tags=["medicines"])


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Medicine not found",
    )


@router.get("", response_model=MedicineListResponse)
async def get_medicines(
    active_only: bool = Query(default=False),
    auth: AuthContext = Depends(require_family),
    db: AsyncSession = Depends(get_db),
) -> MedicineListResponse:
    """List the family's medicines."""
    medicines = await list_medicines(auth.family_id, db, active_only=active_only)
    return MedicineListResponse(
        medicines=[MedicineResponse.model_validate(m) for m in medicines],
        count=len(medicines),
    )


@router.get("/{medicine_id}", response_model=MedicineResponse)
async def get_one_medicine(
    medicine_id: uuid.UUID,
    auth: AuthContext = Depends(require_family),
    db: AsyncSession = Depends(get_db),
) -> MedicineResponse:
    medicine = await get_medicine(auth.family_id, medicine_id, db)
    if medicine is None:
        raise _not_found()
    return MedicineResponse.model_validate(medicine)


@router.post("", response_model=MedicineResponse, status_code=status.HTTP_201_CREATED)
async def add_medicine(
    data: MedicineCreate,
    auth: AuthContext = Depends(require_family),
    db: AsyncSession = Depends(get_db),
) -> MedicineResponse:
    """Create a medicine.

    ``dose_min_time`` must be ``D:HH:MM`` or ``HH:MM`` (422 otherwise).
    """
    try:
        medicine = await create_medicine(auth.family_id, data, db)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    return MedicineResponse.model_validate(medicine)


@router.patch("/{medicine_id}", response_model=MedicineResponse)
async def edit_medicine(
    medicine_id: uuid.UUID,
    data: MedicineUpdate,
    auth: AuthContext = Depends(require_family),
    db: AsyncSession = Depends(get_db),
) -> MedicineResponse:
    """Update a medicine. An empty ``dose_min_time`` clears the interval."""
    try:
        medicine = await update_medicine(auth.family_id, medicine_id, data, db)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    if medicine is None:
        raise _not_found()
    return MedicineResponse.model_validate(medicine)


@router.delete("/{medicine_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_medicine(
    medicine_id: uuid.UUID,
    auth: AuthContext = Depends(require_family),
    db: AsyncSession = Depends(get_db),
) -> None:
    """Soft delete a medicine."""
    if not await delete_medicine(auth.family_id, medicine_id, db):
        raise _not_found()


@router.get("/{medicine_id}/safety", response_model=ActiveDoseResponse)
async def check_medicine_safety(
    medicine_id: uuid.UUID,
    baby_id: uuid.UUID = Query(...),
    auth: AuthContext = Depends(require_family),
    db: AsyncSession = Depends(get_db),
) -> ActiveDoseResponse:
    """Whether another dose of this medicine may be given to the baby now."""
    medicine = await get_medicine(auth.family_id, medicine_id, db)
    if medicine is None:
        raise _not_found()

    if await get_baby(auth.family_id, baby_id, db) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Baby not found",
        )

    state = await get_medicine_safety(auth.family_id, medicine, baby_id, db)
    return ActiveDoseResponse.from_state(state)
