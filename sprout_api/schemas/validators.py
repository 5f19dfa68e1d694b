"""Shared field validators for request schemas."""

import re

from sprout_api.core.dose_safety import is_valid_dose_min_time

WARNING_TIME_RE = re.compile(r"^\d{2}:[0-5]\d$")


def check_warning_time(value: str | None) -> str | None:
    """Validate an ``HH:MM`` warning duration."""
    if value is None:
        return None
    value = value.strip()
    if not WARNING_TIME_RE.match(value):
        msg = "Warning time must be in HH:MM format"
        raise ValueError(msg)
    return value


def check_dose_min_time(value: str | None) -> str | None:
    """Validate a ``D:HH:MM`` / ``HH:MM`` interval; empty clears it."""
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    if not is_valid_dose_min_time(value):
        msg = "Minimum time between doses must be D:HH:MM or HH:MM"
        raise ValueError(msg)
    return value


def blank_to_none(value: str | None) -> str | None:
    """Treat empty strings as NULL (unit_abbr, subtitles)."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def strip_required(value: str) -> str:
    """Strip a required text field and reject whitespace-only input."""
    value = value.strip()
    if not value:
        msg = "Value cannot be empty or whitespace only"
        raise ValueError(msg)
    return value
