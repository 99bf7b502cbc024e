"""Salary period boundaries."""

import calendar
import datetime

from shiftpay.core.config import PERIOD_END_HOUR, PERIOD_END_MINUTE
from shiftpay.core.errors import InvalidPeriodConfiguration
from shiftpay.core.models import CustomPeriod, MonthPeriod, PeriodDefinition
from shiftpay.core.time_utils import add_months, get_today

from .types import ReportingPeriod

_PERIOD_START_TIME = datetime.time(0, 0)
_PERIOD_END_TIME = datetime.time(PERIOD_END_HOUR, PERIOD_END_MINUTE)


def reporting_period(
    definition: PeriodDefinition,
    today: datetime.date,
    offset: int = 0,
) -> ReportingPeriod:
    """
    Compute the salary period containing `today`, moved back `offset` periods.

    Args:
        definition: Month or custom period from the wage configuration
        today: Reference date
        offset: 0 = current period, N = N periods earlier

    Returns:
        ReportingPeriod from 00:00 on the first day to 23:59 on the last day

    Raises:
        InvalidPeriodConfiguration: If the configured start day does not exist in today's month
        ValueError: If offset is negative
    """
    if offset < 0:
        raise ValueError(f"offset must be zero or positive, got {offset}")

    if isinstance(definition, MonthPeriod):
        first_day, last_day = _month_bounds(today, offset)
    elif isinstance(definition, CustomPeriod):
        first_day, last_day = _custom_bounds(definition, today, offset)
    else:
        raise TypeError(f"Unsupported period definition: {type(definition).__name__}")

    return ReportingPeriod(
        start=datetime.datetime.combine(first_day, _PERIOD_START_TIME),
        end=datetime.datetime.combine(last_day, _PERIOD_END_TIME),
    )


def current_reporting_period(definition: PeriodDefinition, offset: int = 0) -> ReportingPeriod:
    """reporting_period() with today's date."""
    return reporting_period(definition, get_today(), offset)


# === Private helpers ===


def _month_bounds(today: datetime.date, offset: int) -> tuple[datetime.date, datetime.date]:
    first_day = add_months(today.replace(day=1), -offset)
    last_day = first_day.replace(day=calendar.monthrange(first_day.year, first_day.month)[1])
    return first_day, last_day


def _custom_bounds(
    definition: CustomPeriod,
    today: datetime.date,
    offset: int,
) -> tuple[datetime.date, datetime.date]:
    period_end = _day_in_month(today, definition.end_day, "period.end_day")
    start_this_month = _day_in_month(today, definition.start_day, "period.start_day")

    # Past this month's end day the next period has started
    if today > period_end:
        period_start = start_this_month
        period_end = add_months(period_end, 1)
    else:
        period_start = add_months(start_this_month, -1)

    return add_months(period_start, -offset), add_months(period_end, -offset)


def _day_in_month(today: datetime.date, day: int, field_name: str) -> datetime.date:
    try:
        return today.replace(day=day)
    except ValueError as e:
        raise InvalidPeriodConfiguration(
            f"Day {day} does not exist in {today.year}-{today.month:02d}",
            field=field_name,
            value=day,
        ) from e
