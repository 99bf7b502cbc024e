# shiftpay/core/errors.py
"""
Error types shared by the configuration loader, the record store and the
salary engine.
"""

from typing import Any


class ShiftPayError(Exception):
    """Base class for all shiftpay errors."""

    pass


class ConfigurationError(ShiftPayError, ValueError):
    """
    The wage/bonus configuration is invalid.

    Subclasses ValueError so it can be raised from pydantic validators and
    still be recognised once pydantic has wrapped it.
    """

    def __init__(self, message: str, field: str | None = None, value: Any = None):
        super().__init__(message)
        self.message = message
        self.field = field
        self.value = value

    def __str__(self) -> str:
        if self.field is None:
            return self.message
        return f"{self.message} (field={self.field}, value={self.value!r})"


class InvalidTimeFormat(ConfigurationError):
    """A time of day is not in HH:MM format."""


class InvalidWeekdayName(ConfigurationError):
    """A weekday name could not be recognised."""


class InvalidPeriodConfiguration(ConfigurationError):
    """Salary period days do not form a valid date."""


class RecordFetchError(ShiftPayError):
    """The record store could not produce shifts for a period."""

    pass


class InvalidShiftError(ShiftPayError, ValueError):
    """A shift interval is rejected before it reaches the store."""

    pass


class ShiftNotFoundError(ShiftPayError, LookupError):
    """No shift record with the given id."""

    def __init__(self, shift_id: int):
        super().__init__(f"Shift with id {shift_id} not found")
        self.shift_id = shift_id


class DegradedRuleWarning(UserWarning):
    """A weekday bonus lost one or more day tokens that could not be parsed."""

    pass
