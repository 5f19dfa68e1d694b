"""Medicine dose safety.

Pure, synchronous evaluation of dose history against each medicine's
minimum interval between doses:

1. Group dose records by medicine
2. Take the most recent dose
3. Parse the interval (``D:HH:MM`` or legacy ``HH:MM``)
4. Safe once ``last dose + interval <= now``; otherwise count down
5. Total everything given in the trailing 24 hours

Unparseable intervals and arithmetic faults resolve to "safe". A
caregiver is never blocked from recording a dose by a calculation
problem.
"""

from sprout_api.core.dose_safety.evaluator import (
    dose_status_label,
    evaluate_active_doses,
    evaluate_dose_safety,
    format_time_remaining,
    is_valid_dose_min_time,
    parse_dose_min_time,
)
from sprout_api.core.dose_safety.models import (
    AdministrationRecord,
    DoseSafetyState,
    MedicineDoseConfig,
)

__all__ = [
    "AdministrationRecord",
    "DoseSafetyState",
    "MedicineDoseConfig",
    "dose_status_label",
    "evaluate_active_doses",
    "evaluate_dose_safety",
    "format_time_remaining",
    "is_valid_dose_min_time",
    "parse_dose_min_time",
]
