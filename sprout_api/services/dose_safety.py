"""Dose safety queries.

Loads a baby's recent dose history and hands it to the pure evaluator
in ``sprout_api.core.dose_safety``.
"""

import uuid
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sprout_api.core.dose_safety import (
    AdministrationRecord,
    DoseSafetyState,
    MedicineDoseConfig,
    evaluate_active_doses,
    evaluate_dose_safety,
)
from sprout_api.core.dose_safety.constants import DOSE_TOTAL_WINDOW
from sprout_api.core.timeutils import utc_now
from sprout_api.logging_config import get_logger
from sprout_api.models.medicine import Medicine
from sprout_api.models.medicine_log import MedicineLog

logger = get_logger(__name__)


def _to_record(log: MedicineLog) -> AdministrationRecord:
    return AdministrationRecord(
        id=log.id,
        medicine_id=log.medicine_id,
        time=log.time,
        dose_amount=log.dose_amount,
        unit_abbr=log.unit_abbr,
    )


async def get_active_doses(
    family_id: uuid.UUID,
    baby_id: uuid.UUID,
    db: AsyncSession,
    now: datetime | None = None,
) -> list[DoseSafetyState]:
    """Dose safety for every medicine given to the baby in the last 24h."""
    now = now or utc_now()

    result = await db.execute(
        select(MedicineLog).where(
            MedicineLog.family_id == family_id,
            MedicineLog.baby_id == baby_id,
            MedicineLog.deleted_at.is_(None),
            MedicineLog.time >= now - DOSE_TOTAL_WINDOW,
        )
    )
    logs = list(result.unique().scalars().all())

    medicines = {
        log.medicine_id: MedicineDoseConfig.model_validate(log.medicine)
        for log in logs
        if log.medicine is not None
    }

    states = evaluate_active_doses([_to_record(log) for log in logs], medicines, now)

    logger.debug(
        "Evaluated active doses",
        baby_id=str(baby_id),
        medicines=len(states),
        waiting=sum(1 for s in states if not s.is_safe),
    )
    return states


async def get_medicine_safety(
    family_id: uuid.UUID,
    medicine: Medicine,
    baby_id: uuid.UUID,
    db: AsyncSession,
    now: datetime | None = None,
) -> DoseSafetyState:
    """Dose safety for one medicine.

    Looks at the trailing 24h plus the most recent dose, since the
    minimum interval may be longer than a day.
    """
    now = now or utc_now()

    base = select(MedicineLog).where(
        MedicineLog.family_id == family_id,
        MedicineLog.baby_id == baby_id,
        MedicineLog.medicine_id == medicine.id,
        MedicineLog.deleted_at.is_(None),
    )

    recent = await db.execute(base.where(MedicineLog.time >= now - DOSE_TOTAL_WINDOW))
    logs = {log.id: log for log in recent.unique().scalars().all()}

    latest = await db.execute(base.order_by(MedicineLog.time.desc()).limit(1))
    last = latest.unique().scalar_one_or_none()
    if last is not None:
        logs.setdefault(last.id, last)

    return evaluate_dose_safety(
        [_to_record(log) for log in logs.values()],
        MedicineDoseConfig.model_validate(medicine),
        now,
    )
