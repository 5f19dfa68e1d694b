"""Medicine log service.

Records administered doses. Edits are limited to time, amount, unit and
notes; deletes are soft so the dose history stays auditable.
"""

import uuid
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sprout_api.core.timeutils import to_utc, utc_now
from sprout_api.logging_config import get_logger
from sprout_api.models.baby import Baby
from sprout_api.models.medicine import Medicine
from sprout_api.models.medicine_log import MedicineLog
from sprout_api.schemas.medicine_log import MedicineLogCreate, MedicineLogUpdate

logger = get_logger(__name__)

DEFAULT_LIST_LIMIT = 100


async def list_medicine_logs(
    family_id: uuid.UUID,
    db: AsyncSession,
    baby_id: uuid.UUID | None = None,
    medicine_id: uuid.UUID | None = None,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    limit: int = DEFAULT_LIST_LIMIT,
) -> list[MedicineLog]:
    """List dose records, newest first."""
    query = select(MedicineLog).where(
        MedicineLog.family_id == family_id,
        MedicineLog.deleted_at.is_(None),
    )
    if baby_id is not None:
        query = query.where(MedicineLog.baby_id == baby_id)
    if medicine_id is not None:
        query = query.where(MedicineLog.medicine_id == medicine_id)
    if start_date is not None:
        query = query.where(MedicineLog.time >= to_utc(start_date))
    if end_date is not None:
        query = query.where(MedicineLog.time <= to_utc(end_date))

    result = await db.execute(query.order_by(MedicineLog.time.desc()).limit(limit))
    return list(result.scalars().all())


async def get_medicine_log(
    family_id: uuid.UUID,
    log_id: uuid.UUID,
    db: AsyncSession,
) -> MedicineLog | None:
    result = await db.execute(
        select(MedicineLog).where(
            MedicineLog.id == log_id,
            MedicineLog.family_id == family_id,
            MedicineLog.deleted_at.is_(None),
        )
    )
    return result.scalar_one_or_none()


async def create_medicine_log(
    family_id: uuid.UUID,
    caretaker_id: uuid.UUID | None,
    data: MedicineLogCreate,
    db: AsyncSession,
) -> MedicineLog:
    """Record an administered dose.

    Raises:
        ValueError: If the baby or medicine is not in the family.
    """
    baby = await db.scalar(
        select(Baby.id).where(Baby.id == data.baby_id, Baby.family_id == family_id)
    )
    if baby is None:
        msg = "Baby not found"
        raise ValueError(msg)

    medicine = await db.scalar(
        select(Medicine.id).where(
            Medicine.id == data.medicine_id,
            Medicine.family_id == family_id,
            Medicine.deleted_at.is_(None),
        )
    )
    if medicine is None:
        msg = "Medicine not found"
        raise ValueError(msg)

    log = MedicineLog(
        family_id=family_id,
        caretaker_id=caretaker_id,
        medicine_id=data.medicine_id,
        baby_id=data.baby_id,
        time=to_utc(data.time),
        dose_amount=data.dose_amount,
        unit_abbr=data.unit_abbr or None,
        notes=data.notes,
    )
    db.add(log)
    await db.commit()
    await db.refresh(log)

    logger.info(
        "Recorded medicine dose",
        family_id=str(family_id),
        baby_id=str(data.baby_id),
        medicine_id=str(data.medicine_id),
        log_id=str(log.id),
    )
    return log


async def update_medicine_log(
    family_id: uuid.UUID,
    log_id: uuid.UUID,
    updates: MedicineLogUpdate,
    db: AsyncSession,
) -> MedicineLog | None:
    """Edit a dose record. Returns None if not found."""
    log = await get_medicine_log(family_id, log_id, db)
    if log is None:
        return None

    update_data = updates.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        if field == "unit_abbr":
            log.unit_abbr = (value or "").strip() or None
        elif field == "notes":
            log.notes = value
        elif value is not None:
            setattr(log, field, to_utc(value) if field == "time" else value)

    await db.commit()
    await db.refresh(log)

    logger.info(
        "Updated medicine dose",
        family_id=str(family_id),
        log_id=str(log_id),
        fields=list(update_data.keys()),
    )
    return log


async def delete_medicine_log(
    family_id: uuid.UUID,
    log_id: uuid.UUID,
    db: AsyncSession,
) -> bool:
    """Soft delete a dose record. Returns False if not found."""
    log = await get_medicine_log(family_id, log_id, db)
    if log is None:
        return False

    log.deleted_at = utc_now()
    await db.commit()

    logger.info(
        "Deleted medicine dose",
        family_id=str(family_id),
        log_id=str(log_id),
    )
    return True
