"""Dose safety evaluator.

Decides, per medicine, whether enough time has passed since the last
dose to give another one, and totals what was given in the last 24h.

Any parse or arithmetic problem resolves to "safe" with a logged
warning. The evaluator never raises and never blocks a dose entry.
"""

import math
import uuid
from collections import defaultdict
from collections.abc import Iterable, Mapping
from datetime import datetime, timedelta

from sprout_api.core.dose_safety.constants import (
    ALMOST_SAFE_MINUTES,
    DOSE_MIN_TIME_DAYS_RE,
    DOSE_MIN_TIME_LEGACY_RE,
    DOSE_TOTAL_WINDOW,
)
from sprout_api.core.dose_safety.models import (
    AdministrationRecord,
    DoseSafetyState,
    MedicineDoseConfig,
)
from sprout_api.core.timeutils import to_utc, utc_now
from sprout_api.logging_config import get_logger

logger = get_logger(__name__)


def parse_dose_min_time(value: str | None) -> timedelta | None:
    """Parse a minimum dose interval.

    Accepts ``D:HH:MM`` and the legacy ``HH:MM``. Returns None for empty
    or malformed input, meaning the medicine has no minimum interval.
    """
    if not value:
        return None

    text = value.strip()

    match = DOSE_MIN_TIME_DAYS_RE.match(text)
    if match:
        days, hours, minutes = (int(part) for part in match.groups())
        return timedelta(days=days, hours=hours, minutes=minutes)

    match = DOSE_MIN_TIME_LEGACY_RE.match(text)
    if match:
        hours, minutes = (int(part) for part in match.groups())
        return timedelta(hours=hours, minutes=minutes)

    logger.warning("Unrecognised dose_min_time, treating as no interval", value=value)
    return None


def is_valid_dose_min_time(value: str | None) -> bool:
    """True for empty values and for strings in either accepted format."""
    if not value:
        return True
    text = value.strip()
    return bool(DOSE_MIN_TIME_DAYS_RE.match(text) or DOSE_MIN_TIME_LEGACY_RE.match(text))


def _total_last_24h(
    records: Iterable[AdministrationRecord],
    now: datetime,
) -> float:
    window_start = now - DOSE_TOTAL_WINDOW
    return sum(r.dose_amount for r in records if to_utc(r.time) >= window_start)


def _safe_state(
    medicine: MedicineDoseConfig,
    last: AdministrationRecord | None,
    total: float,
) -> DoseSafetyState:
    return DoseSafetyState(
        medicine_id=medicine.id,
        medicine_name=medicine.name,
        is_safe=True,
        minutes_remaining=0,
        next_safe_time=None,
        total_dose_amount_last_24h=total,
        unit_abbr=(last.unit_abbr if last and last.unit_abbr else medicine.unit_abbr),
        last_log_id=last.id if last else None,
        last_dose_amount=last.dose_amount if last else None,
        last_dose_time=to_utc(last.time) if last else None,
    )


def evaluate_dose_safety(
    administrations: Iterable[AdministrationRecord],
    medicine: MedicineDoseConfig,
    now: datetime | None = None,
) -> DoseSafetyState:
    """Evaluate whether another dose of ``medicine`` is safe now.

    Args:
        administrations: Dose history for one baby. Records for other
            medicines are ignored.
        medicine: The medicine's interval configuration.
        now: Evaluation time (defaults to current UTC time).

    Returns:
        DoseSafetyState. With no history, or no usable interval, the
        medicine is safe with zero minutes remaining.
    """
    now = to_utc(now) if now is not None else utc_now()
    records = [r for r in administrations if r.medicine_id == medicine.id]

    try:
        total = _total_last_24h(records, now)
    except (TypeError, ValueError, OverflowError):
        logger.warning(
            "Could not total recent doses",
            medicine_id=str(medicine.id),
            exc_info=True,
        )
        total = 0.0

    if not records:
        return _safe_state(medicine, None, total)

    try:
        last = max(records, key=lambda r: to_utc(r.time))
    except (TypeError, ValueError, OverflowError):
        logger.warning(
            "Could not find the latest dose, defaulting to safe",
            medicine_id=str(medicine.id),
            exc_info=True,
        )
        return _safe_state(medicine, None, total)

    interval = parse_dose_min_time(medicine.dose_min_time)
    if interval is None:
        return _safe_state(medicine, last, total)

    try:
        safe_time = to_utc(last.time) + interval
        if safe_time <= now:
            return _safe_state(medicine, last, total)
        remaining_seconds = (safe_time - now).total_seconds()
        minutes_remaining = max(0, math.ceil(remaining_seconds / 60))
    except (TypeError, ValueError, OverflowError):
        logger.warning(
            "Dose safety calculation failed, defaulting to safe",
            medicine_id=str(medicine.id),
            dose_min_time=medicine.dose_min_time,
            exc_info=True,
        )
        return _safe_state(medicine, last, total)

    return DoseSafetyState(
        medicine_id=medicine.id,
        medicine_name=medicine.name,
        is_safe=False,
        minutes_remaining=minutes_remaining,
        next_safe_time=safe_time,
        total_dose_amount_last_24h=total,
        unit_abbr=last.unit_abbr or medicine.unit_abbr,
        last_log_id=last.id,
        last_dose_amount=last.dose_amount,
        last_dose_time=to_utc(last.time),
    )


def evaluate_active_doses(
    administrations: Iterable[AdministrationRecord],
    medicines: Mapping[uuid.UUID, MedicineDoseConfig],
    now: datetime | None = None,
) -> list[DoseSafetyState]:
    """Evaluate every medicine that appears in a mixed dose history.

    Args:
        administrations: Dose history for one baby, any medicines.
        medicines: MedicineDoseConfig keyed by medicine id. Records whose
            medicine is missing from the mapping are skipped.
        now: Evaluation time (defaults to current UTC time).

    Returns:
        One state per medicine; waiting medicines first, then by most
        recent dose.
    """
    now = to_utc(now) if now is not None else utc_now()

    groups: dict[uuid.UUID, list[AdministrationRecord]] = defaultdict(list)
    for record in administrations:
        groups[record.medicine_id].append(record)

    states = []
    for medicine_id, records in groups.items():
        medicine = medicines.get(medicine_id)
        if medicine is None:
            logger.warning(
                "Dose history references unknown medicine",
                medicine_id=str(medicine_id),
            )
            continue
        states.append(evaluate_dose_safety(records, medicine, now))

    states.sort(
        key=lambda s: (
            s.is_safe,
            -(s.last_dose_time.timestamp() if s.last_dose_time else 0.0),
        )
    )
    return states


def dose_status_label(state: DoseSafetyState) -> str:
    """Short status for display: Safe, Almost Safe or Waiting."""
    if state.is_safe:
        return "Safe"
    if state.minutes_remaining <= ALMOST_SAFE_MINUTES:
        return "Almost Safe"
    return "Waiting"


def format_time_remaining(minutes: int) -> str:
    """Human countdown, e.g. ``"1h 5m remaining"``."""
    if minutes <= 0:
        return "Safe to administer"
    hours, mins = divmod(int(minutes), 60)
    if hours > 0:
        return f"{hours}h {mins}m remaining"
    return f"{mins}m remaining"
