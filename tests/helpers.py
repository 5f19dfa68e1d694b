"""Test data builders and doubles shared across test modules."""

import uuid
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from sprout_api.core.encryption import encrypt_credential
from sprout_api.core.security import create_access_token
from sprout_api.models import (
    Baby,
    Contact,
    DiaperLog,
    DiaperType,
    FamilySettings,
    FeedLog,
    FeedType,
    Medicine,
    MedicineLog,
)
from sprout_api.services.notification_channel import DispatchResult, NotificationPayload


async def add_family_settings(
    db: AsyncSession,
    family_id: uuid.UUID,
    **overrides,
) -> FamilySettings:
    values = {
        "notification_enabled": True,
        "hermes_api_key": encrypt_credential("test-key"),
        "feed_warning_time": "01:00",
        "diaper_warning_time": "03:00",
    }
    values.update(overrides)
    family_settings = FamilySettings(family_id=family_id, **values)
    db.add(family_settings)
    await db.commit()
    await db.refresh(family_settings)
    return family_settings


async def add_feed(db: AsyncSession, baby: Baby, time: datetime) -> FeedLog:
    log = FeedLog(
        family_id=baby.family_id,
        baby_id=baby.id,
        time=time,
        feed_type=FeedType.BOTTLE,
    )
    db.add(log)
    await db.commit()
    return log


async def add_diaper(db: AsyncSession, baby: Baby, time: datetime) -> DiaperLog:
    log = DiaperLog(
        family_id=baby.family_id,
        baby_id=baby.id,
        time=time,
        diaper_type=DiaperType.WET,
    )
    db.add(log)
    await db.commit()
    return log


async def add_medicine(
    db: AsyncSession,
    family_id: uuid.UUID,
    name: str = "Paracetamol",
    dose_min_time: str | None = "0:04:00",
    unit_abbr: str | None = "mg",
) -> Medicine:
    medicine = Medicine(
        family_id=family_id,
        name=name,
        dose_min_time=dose_min_time,
        unit_abbr=unit_abbr,
    )
    db.add(medicine)
    await db.commit()
    await db.refresh(medicine)
    return medicine


async def add_contact(
    db: AsyncSession,
    family_id: uuid.UUID,
    name: str = "Dr. Rivera",
    role: str = "Pediatrician",
) -> Contact:
    contact = Contact(family_id=family_id, name=name, role=role, phone="555-0100")
    db.add(contact)
    await db.commit()
    await db.refresh(contact)
    return contact


async def add_dose(
    db: AsyncSession,
    medicine: Medicine,
    baby: Baby,
    time: datetime,
    amount: float = 5.0,
) -> MedicineLog:
    log = MedicineLog(
        family_id=baby.family_id,
        medicine_id=medicine.id,
        baby_id=baby.id,
        time=time,
        dose_amount=amount,
    )
    db.add(log)
    await db.commit()
    await db.refresh(log)
    return log


def auth_headers(family_id: uuid.UUID | None, role: str = "USER") -> dict[str, str]:
    token = create_access_token(uuid.uuid4(), family_id, role=role)
    return {"Authorization": f"Bearer {token}"}


class RecordingChannel:
    """Notification channel double that records every send."""

    def __init__(self, success: bool = True, error: str | None = None):
        self.success = success
        self.error = error
        self.sent: list[tuple[uuid.UUID, NotificationPayload]] = []

    async def send(self, family_id: uuid.UUID, payload: NotificationPayload) -> DispatchResult:
        self.sent.append((family_id, payload))
        return DispatchResult(success=self.success, error=self.error)

