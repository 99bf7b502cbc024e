"""Split shifts into salary entries per rate."""

import datetime
import logging
from collections.abc import Iterable

from shiftpay.core.constants import ENTRY_LABEL_BASE, ENTRY_LABEL_GENERAL, ENTRY_LABEL_WEEKDAY
from shiftpay.core.models import BonusRule, WageConfiguration

from .types import ReportingPeriod, SalaryEntry, Shift

logger = logging.getLogger(__name__)


def split_at_midnight(shift: Shift) -> list[Shift]:
    """
    Split a shift that crosses midnight into two same-day pieces.

    The first piece ends at midnight (exclusive) and the second starts at
    midnight of the end date, so the pieces add up to the full shift.
    Only one date boundary is handled; longer shifts are rejected when they
    are stored.
    """
    if shift.start.date() == shift.end.date():
        return [shift]

    if (shift.end.date() - shift.start.date()).days > 1:
        logger.warning(
            "Shift %s -> %s crosses more than one midnight; only the first and last day are counted",
            shift.start,
            shift.end,
        )

    first_midnight = datetime.datetime.combine(shift.start.date() + datetime.timedelta(days=1), datetime.time(0, 0))
    last_midnight = datetime.datetime.combine(shift.end.date(), datetime.time(0, 0))

    pieces = [Shift(shift.start, first_midnight)]
    # A shift ending exactly at midnight has no second piece
    if shift.end > last_midnight:
        pieces.append(Shift(last_midnight, shift.end))
    return pieces


def decompose(
    shift: Shift,
    period: ReportingPeriod,
    config: WageConfiguration,
) -> list[SalaryEntry]:
    """
    Salary entries for one shift within a period.

    Shifts not overlapping the period give nothing. A shift crossing midnight
    is split; the first piece counts only if it starts inside the period and
    the second only if it ends by the period end. Pieces are never clipped.

    Args:
        shift: Worked interval
        period: Salary period being calculated
        config: Wage and bonus rules

    Returns:
        List of SalaryEntry (bonus entries plus one base entry per counted piece)
    """
    if not period.overlaps(shift):
        return []

    if shift.start.date() == shift.end.date():
        return allocate_shift(shift.start, shift.end, config)

    first, *rest = split_at_midnight(shift)
    entries: list[SalaryEntry] = []

    if period.start <= first.start <= period.end:
        entries.extend(allocate_shift(first.start, first.end, config))
    else:
        logger.debug("Skipping piece %s -> %s: starts before the period", first.start, first.end)

    for second in rest:
        if second.end <= period.end:
            entries.extend(allocate_shift(second.start, second.end, config))
        else:
            logger.debug("Skipping piece %s -> %s: ends after the period", second.start, second.end)

    return entries


def decompose_all(
    shifts: Iterable[Shift],
    period: ReportingPeriod,
    config: WageConfiguration,
) -> list[SalaryEntry]:
    """decompose() for every shift, concatenated."""
    entries: list[SalaryEntry] = []
    for shift in shifts:
        entries.extend(decompose(shift, period, config))
    return entries


def allocate_shift(
    start: datetime.datetime,
    end: datetime.datetime,
    config: WageConfiguration,
) -> list[SalaryEntry]:
    """
    Salary entries for a piece of a shift within one calendar day.

    Every general bonus and every weekday bonus active on the start date
    gives an entry for its overlap with the piece. One base-rate entry covers
    the whole piece. Bonuses stack: a minute inside two windows is paid at
    the base rate plus both bonus rates.
    """
    day = start.date()
    entries: list[SalaryEntry] = []

    for index, rule in enumerate(config.general_bonuses):
        entry = _overlap_entry(start, end, day, rule, f"{ENTRY_LABEL_GENERAL}[{index}]")
        if entry is not None:
            entries.append(entry)

    for index, rule in enumerate(config.weekday_bonuses):
        if not rule.applies_on(day):
            continue
        entry = _overlap_entry(start, end, day, rule, f"{ENTRY_LABEL_WEEKDAY}[{index}]")
        if entry is not None:
            entries.append(entry)

    entries.append(SalaryEntry(end - start, config.base_rate_per_hour, ENTRY_LABEL_BASE))
    return entries


# === Private helpers ===


def _overlap_entry(
    start: datetime.datetime,
    end: datetime.datetime,
    day: datetime.date,
    rule: BonusRule,
    label: str,
) -> SalaryEntry | None:
    """Entry for the overlap between [start, end) and the rule window, or None if empty."""
    window_start, window_end = rule.interval_on(day)

    overlap_start = max(start, window_start)
    overlap_end = min(end, window_end)

    if overlap_end <= overlap_start:
        return None

    return SalaryEntry(overlap_end - overlap_start, rule.rate_per_hour, label)
