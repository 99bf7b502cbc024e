# shiftpay/routes/shared.py
"""
Shared schemas and helpers for route modules.
"""

import datetime

from fastapi import HTTPException, status
from pydantic import BaseModel, Field

from shiftpay.core.errors import ConfigurationError, RecordFetchError
from shiftpay.core.models import WageConfiguration
from shiftpay.core.salary import ReportingPeriod, reporting_period
from shiftpay.core.sentry_config import capture_exception
from shiftpay.core.storage import StorageError, get_wage_configuration
from shiftpay.core.time_utils import format_sql, get_today, parse_shift_datetime
from shiftpay.database.database import ShiftRecord

# ============ Pydantic schemas ============


class ShiftCreate(BaseModel):
    start: str
    end: str
    break_minutes: int | None = Field(default=None, ge=0)


class ShiftUpdate(BaseModel):
    start: str | None = None
    end: str | None = None


class ShiftOut(BaseModel):
    id: int
    start: str
    end: str
    hours: float


class PeriodOut(BaseModel):
    start: str
    end: str
    offset: int


# ============ Shared helpers ============


def wage_configuration_or_500() -> WageConfiguration:
    """
    Dependency returning the loaded wage configuration.

    Configuration problems are reported with the offending field and value.
    """
    try:
        return get_wage_configuration()
    except ConfigurationError as e:
        capture_exception(e, {"configuration": {"field": e.field}})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Invalid wage configuration", "message": e.message, "field": e.field, "value": e.value},
        ) from e
    except StorageError as e:
        capture_exception(e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Wage configuration unavailable", "message": str(e)},
        ) from e


def resolve_period(config: WageConfiguration, offset: int, today: datetime.date | None) -> ReportingPeriod:
    """Salary period for the request; `today` overrides the clock."""
    try:
        return reporting_period(config.period, today or get_today(), offset)
    except ConfigurationError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Invalid salary period", "message": e.message, "field": e.field, "value": e.value},
        ) from e
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


def record_fetch_failed(error: RecordFetchError) -> HTTPException:
    capture_exception(error)
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail={"error": "Could not fetch shifts", "message": str(error)},
    )


def parse_timestamp_or_400(value: str, field_name: str, today: datetime.date | None = None) -> datetime.datetime:
    try:
        return parse_shift_datetime(value, today)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": f"Invalid {field_name}", "message": str(e)},
        ) from e


def shift_out(record: ShiftRecord) -> ShiftOut:
    return ShiftOut(
        id=record.id,
        start=format_sql(record.shift_start),
        end=format_sql(record.shift_end),
        hours=round((record.shift_end - record.shift_start).total_seconds() / 3600.0, 2),
    )


def period_out(period: ReportingPeriod, offset: int) -> PeriodOut:
    return PeriodOut(start=format_sql(period.start), end=format_sql(period.end), offset=offset)
