# shiftpay/routes/shifts.py
"""
Shift management routes - add, list, edit and delete recorded shifts.
"""

import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from shiftpay.core.errors import InvalidShiftError, ShiftNotFoundError
from shiftpay.core.models import WageConfiguration
from shiftpay.database import shifts as shift_store
from shiftpay.database.database import get_db

from .shared import (
    ShiftCreate,
    ShiftOut,
    ShiftUpdate,
    parse_timestamp_or_400,
    resolve_period,
    shift_out,
    wage_configuration_or_500,
)

router = APIRouter(prefix="/api/shifts", tags=["shifts"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ShiftOut)
async def add_shift(payload: ShiftCreate, session: Session = Depends(get_db)):
    """
    Add a shift.

    The break (whole minutes) is taken off the end of the shift.
    """
    start = parse_timestamp_or_400(payload.start, "start")
    end = parse_timestamp_or_400(payload.end, "end")

    try:
        record = shift_store.add_shift(session, start, end, payload.break_minutes)
    except InvalidShiftError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    return shift_out(record)


@router.get("", response_model=list[ShiftOut])
async def list_shifts(
    all: bool = Query(False, description="List every shift ever recorded"),
    newest_first: bool = Query(False, description="Most recent first"),
    offset: int = Query(0, ge=0, description="Salary periods back from the current one"),
    today: datetime.date | None = Query(None, description="Reference date (defaults to today)"),
    session: Session = Depends(get_db),
    config: WageConfiguration = Depends(wage_configuration_or_500),
):
    """List shifts in the current (or offset) salary period."""
    period = None if all else resolve_period(config, offset, today)
    records = shift_store.list_shifts(session, period=period, newest_first=newest_first)
    return [shift_out(record) for record in records]


@router.patch("/{shift_id}", response_model=ShiftOut)
async def edit_shift(shift_id: int, payload: ShiftUpdate, session: Session = Depends(get_db)):
    """Edit the start and/or end of a shift."""
    start = parse_timestamp_or_400(payload.start, "start") if payload.start is not None else None
    end = parse_timestamp_or_400(payload.end, "end") if payload.end is not None else None

    try:
        record = shift_store.edit_shift(session, shift_id, start=start, end=end)
    except ShiftNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except InvalidShiftError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    return shift_out(record)


@router.delete("/{shift_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_shift(shift_id: int, session: Session = Depends(get_db)):
    try:
        shift_store.remove_shift(session, shift_id)
    except ShiftNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.delete("")
async def delete_all_shifts(
    confirm: bool = Query(False, description="Must be true; all shift data is lost"),
    session: Session = Depends(get_db),
):
    """Delete every shift. Requires confirm=true."""
    if not confirm:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="This deletes all shifts. Repeat the request with confirm=true to continue.",
        )
    deleted = shift_store.drop_shifts(session)
    return {"deleted": deleted}
