"""Totals for a salary period."""

import datetime
import logging
from collections.abc import Iterable

from shiftpay.core.constants import WEEKDAY_NAMES
from shiftpay.core.models import WageConfiguration
from shiftpay.core.time_utils import whole_minutes

from .decompose import decompose_all
from .types import EntryBreakdown, ReportingPeriod, SalaryEntry, SalarySummary, Shift

logger = logging.getLogger(__name__)


def total_duration(shifts: Iterable[Shift], period: ReportingPeriod) -> datetime.timedelta:
    """
    Wall-clock time of every shift overlapping the period.

    Uses the plain overlap test (start <= period end, end > period start),
    which is looser than the piece test in decompose(). Shifts crossing a
    period boundary count in full here.
    """
    total = datetime.timedelta(0)
    for shift in shifts:
        if period.overlaps(shift):
            total += shift.duration
    return total


def total_earned(entries: Iterable[SalaryEntry]) -> float:
    """Sum of whole minutes times rate per hour over all entries."""
    return sum(whole_minutes(entry.duration) * entry.rate_per_hour / 60.0 for entry in entries)


def calculate_total(
    shifts: Iterable[Shift],
    period: ReportingPeriod,
    config: WageConfiguration,
) -> float:
    """Earned amount for the period."""
    return total_earned(decompose_all(shifts, period, config))


def summarize_period(
    shifts: list[Shift],
    period: ReportingPeriod,
    config: WageConfiguration,
) -> SalarySummary:
    """
    Worked time, earned amount and a per-rule breakdown for a period.

    Args:
        shifts: Shifts fetched for the period (fully materialised)
        period: Salary period
        config: Wage and bonus rules

    Returns:
        SalarySummary with the earned amount rounded to two decimals
    """
    entries = decompose_all(shifts, period, config)
    worked = total_duration(shifts, period)
    worked_total_minutes = whole_minutes(worked)

    breakdown: dict[str, EntryBreakdown] = {}
    for entry in entries:
        item = breakdown.setdefault(entry.label, {"minutes": 0, "amount": 0.0})
        minutes = whole_minutes(entry.duration)
        item["minutes"] += minutes
        item["amount"] += minutes * entry.rate_per_hour / 60.0

    for item in breakdown.values():
        item["amount"] = round(item["amount"], 2)

    earned = total_earned(entries)
    logger.debug(
        "Summarized %d shifts (%d entries) for %s -> %s: %.2f",
        len(shifts),
        len(entries),
        period.start,
        period.end,
        earned,
    )

    return {
        "period_start": period.start,
        "period_end": period.end,
        "shift_count": sum(1 for shift in shifts if period.overlaps(shift)),
        "worked_hours": worked_total_minutes // 60,
        "worked_minutes": worked_total_minutes % 60,
        "total_hours": round(worked.total_seconds() / 3600.0, 2),
        "earned": round(earned, 2),
        "breakdown": breakdown,
        "warnings": degraded_rule_messages(config),
    }


def degraded_rule_messages(config: WageConfiguration) -> list[str]:
    """Human-readable notes for weekday rules that dropped day names."""
    messages = []
    for index, rule in config.degraded_rules():
        kept = ", ".join(WEEKDAY_NAMES[day] for day in sorted(rule.weekdays or ()))
        messages.append(
            f"weekday_bonuses[{index}]: ignored unknown day names {list(rule.rejected_days)}; "
            f"applies on: {kept or 'no days'}"
        )
    return messages
