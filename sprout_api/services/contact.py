"""Contact service.

CRUD for a family's care contacts (doctor, pharmacy, ...). Deleting a
contact is soft and detaches it from every medicine.
"""

import uuid

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from sprout_api.core.timeutils import utc_now
from sprout_api.logging_config import get_logger
from sprout_api.models.medicine import Contact, contact_medicines
from sprout_api.schemas.contact import ContactCreate, ContactUpdate

logger = get_logger(__name__)

_REQUIRED_FIELDS = frozenset({"name", "role"})


async def list_contacts(
    family_id: uuid.UUID,
    db: AsyncSession,
    role: str | None = None,
) -> list[Contact]:
    """List a family's contacts by name, optionally filtered by role."""
    query = select(Contact).where(
        Contact.family_id == family_id,
        Contact.deleted_at.is_(None),
    )
    if role:
        query = query.where(Contact.role == role)
    result = await db.execute(query.order_by(Contact.name))
    return list(result.scalars().all())


async def get_contact(
    family_id: uuid.UUID,
    contact_id: uuid.UUID,
    db: AsyncSession,
) -> Contact | None:
    result = await db.execute(
        select(Contact).where(
            Contact.id == contact_id,
            Contact.family_id == family_id,
            Contact.deleted_at.is_(None),
        )
    )
    return result.scalar_one_or_none()


async def create_contact(
    family_id: uuid.UUID,
    data: ContactCreate,
    db: AsyncSession,
) -> Contact:
    contact = Contact(family_id=family_id, **data.model_dump())
    db.add(contact)
    await db.commit()
    await db.refresh(contact)

    logger.info(
        "Created contact",
        family_id=str(family_id),
        contact_id=str(contact.id),
        role=contact.role,
    )
    return contact


async def update_contact(
    family_id: uuid.UUID,
    contact_id: uuid.UUID,
    updates: ContactUpdate,
    db: AsyncSession,
) -> Contact | None:
    """Apply a partial update. Returns None if not found.

    Name and role can be changed but not cleared; an explicit empty or
    null value clears any other field.
    """
    contact = await get_contact(family_id, contact_id, db)
    if contact is None:
        return None

    update_data = updates.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        if value is None and field in _REQUIRED_FIELDS:
            continue
        setattr(contact, field, value)

    await db.commit()
    await db.refresh(contact)

    logger.info(
        "Updated contact",
        family_id=str(family_id),
        contact_id=str(contact_id),
        fields=list(update_data.keys()),
    )
    return contact


async def delete_contact(
    family_id: uuid.UUID,
    contact_id: uuid.UUID,
    db: AsyncSession,
) -> bool:
    """Soft delete a contact. Returns False if not found."""
    contact = await get_contact(family_id, contact_id, db)
    if contact is None:
        return False

    contact.deleted_at = utc_now()
    await db.execute(
        delete(contact_medicines).where(contact_medicines.c.contact_id == contact_id)
    )
    await db.commit()

    logger.info(
        "Deleted contact",
        family_id=str(family_id),
        contact_id=str(contact_id),
    )
    return True
