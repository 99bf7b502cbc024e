"""
Salary module - salary periods, shift decomposition and totals.

Exports the public functions of the engine.
"""

from .decompose import allocate_shift, decompose, decompose_all, split_at_midnight
from .period import current_reporting_period, reporting_period
from .summary import calculate_total, degraded_rule_messages, summarize_period, total_duration, total_earned
from .types import ReportingPeriod, SalaryEntry, SalarySummary, Shift

__all__ = [
    # types
    "Shift",
    "ReportingPeriod",
    "SalaryEntry",
    "SalarySummary",
    # period
    "reporting_period",
    "current_reporting_period",
    # decompose
    "split_at_midnight",
    "allocate_shift",
    "decompose",
    "decompose_all",
    # summary
    "total_duration",
    "total_earned",
    "calculate_total",
    "summarize_period",
    "degraded_rule_messages",
]
