"""
Value types for the salary engine.
Decoupled from the SQLAlchemy row so the engine stays pure.
"""

import datetime
from dataclasses import dataclass
from typing import TypedDict

Hours = float
MonetaryAmount = float


@dataclass(frozen=True)
class Shift:
    """A worked interval [start, end)."""

    start: datetime.datetime
    end: datetime.datetime

    def __post_init__(self):
        if self.end <= self.start:
            raise ValueError(f"Shift end {self.end} must be after start {self.start}")

    @property
    def duration(self) -> datetime.timedelta:
        return self.end - self.start


@dataclass(frozen=True)
class ReportingPeriod:
    """Salary period [start, end]; end is inclusive to the minute."""

    start: datetime.datetime
    end: datetime.datetime

    def overlaps(self, shift: Shift) -> bool:
        return shift.start <= self.end and shift.end > self.start


@dataclass(frozen=True)
class SalaryEntry:
    """Minutes worked at one rate. `label` names the rule that produced it."""

    duration: datetime.timedelta
    rate_per_hour: float
    label: str


class EntryBreakdown(TypedDict):
    minutes: int
    amount: MonetaryAmount


class SalarySummary(TypedDict):
    """Result of summarize_period()."""

    period_start: datetime.datetime
    period_end: datetime.datetime
    shift_count: int
    worked_hours: int
    worked_minutes: int
    total_hours: Hours
    earned: MonetaryAmount
    breakdown: dict[str, EntryBreakdown]
    warnings: list[str]
