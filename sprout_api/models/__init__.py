# Database Models
from sprout_api.models.baby import Baby
from sprout_api.models.base import Base, TimestampMixin, UTCDateTime
from sprout_api.models.diaper_log import DiaperLog, DiaperType
from sprout_api.models.family import Family
from sprout_api.models.family_settings import FamilySettings
from sprout_api.models.feed_log import FeedLog, FeedType
from sprout_api.models.medicine import Contact, Medicine, contact_medicines
from sprout_api.models.medicine_log import MedicineLog
from sprout_api.models.notification_log import NotificationLog, WarningType

__all__ = [
    "Baby",
    "Base",
    "Contact",
    "DiaperLog",
    "DiaperType",
    "Family",
    "FamilySettings",
    "FeedLog",
    "FeedType",
    "Medicine",
    "MedicineLog",
    "NotificationLog",
    "TimestampMixin",
    "UTCDateTime",
    "WarningType",
    "contact_medicines",
]
