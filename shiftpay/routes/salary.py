# shiftpay/routes/salary.py
"""
Salary calculation endpoints.
"""

import datetime
import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from shiftpay.core.errors import RecordFetchError
from shiftpay.core.logging_config import LogContext
from shiftpay.core.models import WageConfiguration
from shiftpay.core.salary import decompose_all, summarize_period
from shiftpay.core.time_utils import format_sql, whole_minutes
from shiftpay.database.database import get_db
from shiftpay.database.shifts import fetch_shifts

from .shared import PeriodOut, period_out, record_fetch_failed, resolve_period, wage_configuration_or_500

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/salary", tags=["salary"])


@router.get("/period", response_model=PeriodOut)
async def get_period(
    offset: int = Query(0, ge=0),
    today: datetime.date | None = Query(None),
    config: WageConfiguration = Depends(wage_configuration_or_500),
):
    """Bounds of the current (or offset) salary period."""
    return period_out(resolve_period(config, offset, today), offset)


@router.get("")
async def get_salary(
    offset: int = Query(0, ge=0, description="Salary periods back from the current one"),
    today: datetime.date | None = Query(None, description="Reference date (defaults to today)"),
    session: Session = Depends(get_db),
    config: WageConfiguration = Depends(wage_configuration_or_500),
):
    """
    Worked time and earned amount for a salary period.

    The earned amount counts base pay for every worked minute plus every
    bonus window the minute falls into.
    """
    period = resolve_period(config, offset, today)

    try:
        shifts = fetch_shifts(session, period)
    except RecordFetchError as e:
        raise record_fetch_failed(e) from e

    with LogContext(period_start=str(period.start), period_end=str(period.end)):
        summary = summarize_period(shifts, period, config)
        logger.info("Calculated salary for %d shifts", summary["shift_count"])

    return {
        "period": period_out(period, offset),
        "shift_count": summary["shift_count"],
        "worked": {
            "hours": summary["worked_hours"],
            "minutes": summary["worked_minutes"],
            "total_hours": summary["total_hours"],
        },
        "earned": summary["earned"],
        "breakdown": summary["breakdown"],
        "warnings": summary["warnings"],
    }


@router.get("/entries")
async def get_salary_entries(
    offset: int = Query(0, ge=0),
    today: datetime.date | None = Query(None),
    session: Session = Depends(get_db),
    config: WageConfiguration = Depends(wage_configuration_or_500),
):
    """The per-rate entries the earned amount is summed from."""
    period = resolve_period(config, offset, today)

    try:
        shifts = fetch_shifts(session, period)
    except RecordFetchError as e:
        raise record_fetch_failed(e) from e

    entries = decompose_all(shifts, period, config)
    return {
        "period": period_out(period, offset),
        "entries": [
            {
                "label": entry.label,
                "minutes": whole_minutes(entry.duration),
                "rate_per_hour": entry.rate_per_hour,
            }
            for entry in entries
        ],
        "generated_at": format_sql(datetime.datetime.now()),
    }
