"""Shift record store: queries and edits on the shifts table."""

import datetime
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shiftpay.core.constants import MAX_SHIFT_CALENDAR_DAYS
from shiftpay.core.errors import InvalidShiftError, RecordFetchError, ShiftNotFoundError
from shiftpay.core.salary.types import ReportingPeriod, Shift
from shiftpay.database.database import ShiftRecord

logger = logging.getLogger(__name__)


def validate_shift_interval(start: datetime.datetime, end: datetime.datetime) -> None:
    """
    Reject intervals the salary engine cannot handle.

    Raises:
        InvalidShiftError: If end is not after start, or the shift touches
            more than two calendar days
    """
    if end <= start:
        raise InvalidShiftError(f"The end of the shift ({end}) must be after the start ({start})")
    if (end.date() - start.date()).days >= MAX_SHIFT_CALENDAR_DAYS:
        raise InvalidShiftError(
            f"Shift {start} -> {end} crosses more than one midnight; split it into separate shifts"
        )


def add_shift(
    session: Session,
    start: datetime.datetime,
    end: datetime.datetime,
    break_minutes: int | None = None,
) -> ShiftRecord:
    """
    Store a new shift.

    Args:
        session: SQLAlchemy session
        start: Shift start
        end: Shift end
        break_minutes: Unpaid break, taken off the end of the shift

    Returns:
        The stored ShiftRecord
    """
    if break_minutes:
        if break_minutes < 0:
            raise InvalidShiftError(f"Break must be zero or positive, got {break_minutes}")
        end = end - datetime.timedelta(minutes=break_minutes)

    validate_shift_interval(start, end)

    record = ShiftRecord(shift_start=start, shift_end=end)
    session.add(record)
    session.commit()
    session.refresh(record)

    logger.info("Added shift %d: %s -> %s (break=%s)", record.id, start, end, break_minutes)
    return record


def get_shift(session: Session, shift_id: int) -> ShiftRecord:
    record = session.get(ShiftRecord, shift_id)
    if record is None:
        raise ShiftNotFoundError(shift_id)
    return record


def edit_shift(
    session: Session,
    shift_id: int,
    start: datetime.datetime | None = None,
    end: datetime.datetime | None = None,
) -> ShiftRecord:
    """
    Change the start and/or end of a stored shift.

    Raises:
        InvalidShiftError: If neither value is given or the result is invalid
        ShiftNotFoundError: If no shift has the id
    """
    if start is None and end is None:
        raise InvalidShiftError("Edit the start and/or the end of the shift")

    record = get_shift(session, shift_id)
    new_start = start if start is not None else record.shift_start
    new_end = end if end is not None else record.shift_end
    validate_shift_interval(new_start, new_end)

    record.shift_start = new_start
    record.shift_end = new_end
    session.commit()
    session.refresh(record)

    logger.info("Edited shift %d: %s -> %s", shift_id, new_start, new_end)
    return record


def remove_shift(session: Session, shift_id: int) -> None:
    record = get_shift(session, shift_id)
    session.delete(record)
    session.commit()
    logger.info("Removed shift %d", shift_id)


def drop_shifts(session: Session) -> int:
    """Delete every stored shift. Returns the number deleted."""
    deleted = session.query(ShiftRecord).delete()
    session.commit()
    logger.warning("Deleted all %d shifts", deleted)
    return deleted


def list_shifts(
    session: Session,
    period: ReportingPeriod | None = None,
    newest_first: bool = False,
) -> list[ShiftRecord]:
    """
    Stored shifts, optionally limited to those touching a period.

    The period filter includes shifts ending exactly at the period start.
    """
    query = session.query(ShiftRecord)
    if period is not None:
        query = query.filter(ShiftRecord.shift_start <= period.end, ShiftRecord.shift_end >= period.start)
    if newest_first:
        query = query.order_by(ShiftRecord.shift_start.desc())
    else:
        query = query.order_by(ShiftRecord.id)
    return query.all()


def fetch_shifts(session: Session, period: ReportingPeriod) -> list[Shift]:
    """
    Shifts overlapping a salary period, as engine values.

    Raises:
        RecordFetchError: If the database query fails
    """
    try:
        rows = (
            session.query(ShiftRecord.shift_start, ShiftRecord.shift_end)
            .filter(ShiftRecord.shift_start <= period.end, ShiftRecord.shift_end > period.start)
            .order_by(ShiftRecord.shift_start)
            .all()
        )
    except SQLAlchemyError as e:
        logger.exception("Failed to fetch shifts for %s -> %s", period.start, period.end)
        raise RecordFetchError(f"Could not fetch shifts for {period.start} -> {period.end}: {e}") from e

    try:
        return [Shift(start, end) for start, end in rows]
    except ValueError as e:
        logger.exception("Stored shift has end before start")
        raise RecordFetchError(f"Invalid shift in database: {e}") from e
