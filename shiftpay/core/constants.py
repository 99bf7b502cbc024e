# shiftpay/core/constants.py
from typing import Final

# ==========================
# Weekdays
# ==========================

#: English weekday names indexed like datetime.weekday() (0=Monday, 6=Sunday).
#: Used for presentation in API responses.
WEEKDAY_NAMES: Final[tuple[str, ...]] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

#: Danish weekday names, same indexing. Config files written by hand in
#: Danish ("lørdag", "søndag") use these.
WEEKDAY_NAMES_DA: Final[tuple[str, ...]] = (
    "mandag",
    "tirsdag",
    "onsdag",
    "torsdag",
    "fredag",
    "lørdag",
    "søndag",
)

#: Lookup from lower-case token to weekday index.
#: Accepts full English names, three-letter English abbreviations and Danish names.
WEEKDAY_ALIASES: Final[dict[str, int]] = {
    **{name.lower(): index for index, name in enumerate(WEEKDAY_NAMES)},
    **{name.lower()[:3]: index for index, name in enumerate(WEEKDAY_NAMES)},
    **{name: index for index, name in enumerate(WEEKDAY_NAMES_DA)},
}

# ==========================
# Salary entry labels
# ==========================

#: Label of the base-rate entry emitted for every worked sub-shift.
ENTRY_LABEL_BASE: Final[str] = "base"

#: Label prefix for entries produced by general (every day) bonuses.
ENTRY_LABEL_GENERAL: Final[str] = "general"

#: Label prefix for entries produced by weekday-restricted bonuses.
ENTRY_LABEL_WEEKDAY: Final[str] = "weekday"

# ==========================
# Periods
# ==========================

#: Smallest allowed start day of a custom salary period.
CUSTOM_PERIOD_MIN_START_DAY: Final[int] = 2

#: Largest allowed start day of a custom salary period.
#: Day 29 is accepted but does not exist in a non-leap February; the period
#: calculation reports that month as a configuration error.
CUSTOM_PERIOD_MAX_START_DAY: Final[int] = 29

#: Maximum number of calendar days a single shift may touch (start day + next day).
MAX_SHIFT_CALENDAR_DAYS: Final[int] = 2
