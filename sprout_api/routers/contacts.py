"""Contacts router.

CRUD for the people a family can reach about a medicine. Contacts are
attached to medicines through ``contact_ids``.
"""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from sprout_api.core.auth import AuthContext, require_family
from sprout_api.database import get_db
from sprout_api.schemas.contact import (
    ContactCreate,
    ContactListResponse,
    ContactResponse,
    ContactUpdate,
)
from sprout_api.services.contact import (
    create_contact,
    delete_contact,
    get_contact,
    list_contacts,
    update_contact,
)

router = APIRouter(prefix="/api/contacts", tags=["contacts"])


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Contact not found",
    )


@router.get("", response_model=ContactListResponse)
async def get_contacts(
    role: str | None = Query(default=None),
    auth: AuthContext = Depends(require_family),
    db: AsyncSession = Depends(get_db),
) -> ContactListResponse:
    """List the family's contacts."""
    contacts = await list_contacts(auth.family_id, db, role=role)
    return ContactListResponse(
        contacts=[ContactResponse.model_validate(c) for c in contacts],
        count=len(contacts),
    )


@router.get("/{contact_id}", response_model=ContactResponse)
async def get_one_contact(
    contact_id: uuid.UUID,
    auth: AuthContext = Depends(require_family),
    db: AsyncSession = Depends(get_db),
) -> ContactResponse:
    contact = await get_contact(auth.family_id, contact_id, db)
    if contact is None:
        raise _not_found()
    return ContactResponse.model_validate(contact)


@router.post("", response_model=ContactResponse, status_code=status.HTTP_201_CREATED)
async def add_contact(
    data: ContactCreate,
    auth: AuthContext = Depends(require_family),
    db: AsyncSession = Depends(get_db),
) -> ContactResponse:
    contact = await create_contact(auth.family_id, data, db)
    return ContactResponse.model_validate(contact)


@router.patch("/{contact_id}", response_model=ContactResponse)
async def edit_contact(
    contact_id: uuid.UUID,
    data: ContactUpdate,
    auth: AuthContext = Depends(require_family),
    db: AsyncSession = Depends(get_db),
) -> ContactResponse:
    contact = await update_contact(auth.family_id, contact_id, data, db)
    if contact is None:
        raise _not_found()
    return ContactResponse.model_validate(contact)


@router.delete("/{contact_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_contact(
    contact_id: uuid.UUID,
    auth: AuthContext = Depends(require_family),
    db: AsyncSession = Depends(get_db),
) -> None:
    """Soft delete a contact and detach it from medicines."""
    if not await delete_contact(auth.family_id, contact_id, db):
        raise _not_found()
