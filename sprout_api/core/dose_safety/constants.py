"""Dose safety constants."""

import re
from datetime import timedelta
from typing import Final

# "D:HH:MM" -- days are one or two digits, hours 00-23, minutes 00-59
DOSE_MIN_TIME_DAYS_RE: Final[re.Pattern[str]] = re.compile(
    r"^(\d{1,2}):([01]\d|2[0-3]):([0-5]\d)$"
)

# Legacy "HH:MM" written before day support was added
DOSE_MIN_TIME_LEGACY_RE: Final[re.Pattern[str]] = re.compile(
    r"^([01]\d|2[0-3]):([0-5]\d)$"
)

# Trailing window for the per-medicine dose total
DOSE_TOTAL_WINDOW: Final[timedelta] = timedelta(hours=24)

# A waiting medicine with this many minutes or fewer left is "almost safe"
ALMOST_SAFE_MINUTES: Final[int] = 15
