import calendar
import datetime
import logging
from collections.abc import Iterable

from shiftpay.core.config import (
    DATETIME_FORMAT_SQL,
    SHIFT_DATETIME_FORMATS,
    SHIFT_DATETIME_FORMATS_NO_YEAR,
    TIME_END_OF_DAY_STRING,
    TIME_FORMAT_HM,
)
from shiftpay.core.constants import WEEKDAY_ALIASES
from shiftpay.core.errors import InvalidTimeFormat, InvalidWeekdayName

logger = logging.getLogger(__name__)


def get_today() -> datetime.date:
    """Today's date. The only place the engine's callers read the clock."""
    return datetime.date.today()


def parse_time_of_day(value: str, field_name: str = "time") -> datetime.time:
    """Parse "HH:MM" into a time. Raises InvalidTimeFormat."""
    if not isinstance(value, str):
        raise InvalidTimeFormat(
            f"Unsupported {field_name} type: {type(value).__name__}", field=field_name, value=value
        )

    s = value.strip()
    try:
        return datetime.datetime.strptime(s, TIME_FORMAT_HM).time()
    except ValueError as e:
        raise InvalidTimeFormat(
            f"Invalid {field_name} {value!r}, expected HH:MM", field=field_name, value=value
        ) from e


def minutes_since_midnight(value: str, field_name: str = "time") -> int:
    """
    Position of "HH:MM" within the day in minutes.

    "24:00" is accepted and maps to 1440 (end of the day).
    """
    if isinstance(value, str) and value.strip() == TIME_END_OF_DAY_STRING:
        return 24 * 60
    t = parse_time_of_day(value, field_name)
    return t.hour * 60 + t.minute


def parse_weekday(name: str) -> int:
    """
    Parse a weekday name into datetime.weekday() numbering (0=Monday).

    Accepts English names ("Sunday", "sun") and Danish names ("søndag"),
    case-insensitive. Raises InvalidWeekdayName.
    """
    key = name.strip().lower() if isinstance(name, str) else None
    if key is None or key not in WEEKDAY_ALIASES:
        raise InvalidWeekdayName(f"Unknown weekday name {name!r}", field="days", value=name)
    return WEEKDAY_ALIASES[key]


def parse_weekdays(names: Iterable[str]) -> tuple[frozenset[int], tuple[str, ...]]:
    """
    Parse a list of weekday names, keeping the ones that parse.

    Returns:
        (valid weekdays, rejected tokens)
    """
    valid: set[int] = set()
    rejected: list[str] = []
    for name in names:
        try:
            valid.add(parse_weekday(name))
        except InvalidWeekdayName:
            rejected.append(name)
    return frozenset(valid), tuple(rejected)


def parse_shift_datetime(value: str, today: datetime.date | None = None) -> datetime.datetime:
    """
    Parse a user-entered shift timestamp.

    Tries ISO ("2026-03-14 22:00[:00]") and day-first ("14-03-2026 22:00[:00]")
    formats, then year-less day-first input ("14-03 22:00") using the year of
    `today`.

    Raises:
        ValueError: If no format matches. The message lists every attempt.
    """
    s = value.strip()
    errors = []

    for fmt in SHIFT_DATETIME_FORMATS:
        try:
            return datetime.datetime.strptime(s, fmt)
        except ValueError as e:
            errors.append(f"{fmt}: {e}")

    year = (today or get_today()).year
    for fmt in SHIFT_DATETIME_FORMATS_NO_YEAR:
        try:
            # Parse with the year attached so 29-02 works in leap years
            return datetime.datetime.strptime(f"{year}-{s}", f"%Y-{fmt}")
        except ValueError as e:
            errors.append(f"{fmt}: {e}")

    logger.debug("Could not parse shift timestamp %r: %s", value, "; ".join(errors))
    raise ValueError(f"Could not parse timestamp {value!r}; expected YYYY-MM-DD HH:MM or DD-MM-YYYY HH:MM")


def format_sql(dt: datetime.datetime) -> str:
    """Format a timestamp the way shifts are stored ("YYYY-MM-DD HH:MM:SS")."""
    return dt.strftime(DATETIME_FORMAT_SQL)


def add_months(d: datetime.date, months: int) -> datetime.date:
    """
    Move a date by whole calendar months (negative = backwards).

    The day is clamped to the last day of the target month, so
    2026-03-31 minus one month is 2026-02-28.
    """
    index = d.year * 12 + (d.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return d.replace(year=year, month=month, day=min(d.day, last_day))


def whole_minutes(duration: datetime.timedelta) -> int:
    """Whole minutes in a duration, truncated toward zero."""
    return int(duration.total_seconds() / 60)
