"""Medicine service.

CRUD for a family's medicines. Deletes are soft: the row stays so that
old dose records still resolve their medicine.
"""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sprout_api.core.timeutils import utc_now
from sprout_api.logging_config import get_logger
from sprout_api.models.medicine import Contact, Medicine
from sprout_api.schemas.medicine import MedicineCreate, MedicineUpdate

logger = get_logger(__name__)

# Fields an update may set back to NULL
_CLEARABLE_FIELDS = frozenset({"dose_min_time", "unit_abbr", "notes"})


async def _load_contacts(
    family_id: uuid.UUID,
    contact_ids: list[uuid.UUID],
    db: AsyncSession,
) -> list[Contact]:
    """Resolve contact ids within the family.

    Raises:
        ValueError: If any id is unknown to the family.
    """
    if not contact_ids:
        return []

    wanted = set(contact_ids)
    result = await db.execute(
        select(Contact).where(
            Contact.id.in_(wanted),
            Contact.family_id == family_id,
            Contact.deleted_at.is_(None),
        )
    )
    contacts = list(result.scalars().all())

    if len(contacts) != len(wanted):
        msg = "One or more contacts not found"
        raise ValueError(msg)
    return contacts


async def list_medicines(
    family_id: uuid.UUID,
    db: AsyncSession,
    active_only: bool = False,
) -> list[Medicine]:
    """List a family's medicines by name, excluding deleted ones."""
    query = select(Medicine).where(
        Medicine.family_id == family_id,
        Medicine.deleted_at.is_(None),
    )
    if active_only:
        query = query.where(Medicine.active.is_(True))
    result = await db.execute(query.order_by(Medicine.name))
    return list(result.scalars().all())


async def get_medicine(
    family_id: uuid.UUID,
    medicine_id: uuid.UUID,
    db: AsyncSession,
    include_deleted: bool = False,
) -> Medicine | None:
    """Get a single medicine, scoped to the family."""
    query = select(Medicine).where(
        Medicine.id == medicine_id,
        Medicine.family_id == family_id,
    )
    if not include_deleted:
        query = query.where(Medicine.deleted_at.is_(None))
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def create_medicine(
    family_id: uuid.UUID,
    data: MedicineCreate,
    db: AsyncSession,
) -> Medicine:
    """Create a medicine.

    Raises:
        ValueError: If a contact id does not belong to the family.
    """
    contacts = await _load_contacts(family_id, data.contact_ids, db)

    medicine = Medicine(
        family_id=family_id,
        **data.model_dump(exclude={"contact_ids"}),
    )
    medicine.contacts = contacts
    db.add(medicine)
    await db.commit()
    await db.refresh(medicine)

    logger.info(
        "Created medicine",
        family_id=str(family_id),
        medicine_id=str(medicine.id),
        dose_min_time=medicine.dose_min_time,
    )
    return medicine


async def update_medicine(
    family_id: uuid.UUID,
    medicine_id: uuid.UUID,
    updates: MedicineUpdate,
    db: AsyncSession,
) -> Medicine | None:
    """Apply a partial update. Returns None if not found.

    An empty ``dose_min_time``, ``unit_abbr`` or ``notes`` clears the field.

    Raises:
        ValueError: If a contact id does not belong to the family.
    """
    medicine = await get_medicine(family_id, medicine_id, db)
    if medicine is None:
        return None

    update_data = updates.model_dump(exclude_unset=True)

    contact_ids = update_data.pop("contact_ids", None)
    if contact_ids is not None:
        medicine.contacts = await _load_contacts(family_id, contact_ids, db)

    for field, value in update_data.items():
        if field in _CLEARABLE_FIELDS or value is not None:
            setattr(medicine, field, value)

    await db.commit()
    await db.refresh(medicine)

    logger.info(
        "Updated medicine",
        family_id=str(family_id),
        medicine_id=str(medicine_id),
        fields=list(update_data.keys()),
    )
    return medicine


async def delete_medicine(
    family_id: uuid.UUID,
    medicine_id: uuid.UUID,
    db: AsyncSession,
) -> bool:
    """Soft delete a medicine. Returns False if not found."""
    medicine = await get_medicine(family_id, medicine_id, db)
    if medicine is None:
        return False

    medicine.deleted_at = utc_now()
    medicine.active = False
    await db.commit()

    logger.info(
        "Deleted medicine",
        family_id=str(family_id),
        medicine_id=str(medicine_id),
    )
    return True
