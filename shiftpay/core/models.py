"""Wage and bonus configuration models."""

import datetime
from typing import Annotated, Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator

from shiftpay.core.constants import CUSTOM_PERIOD_MAX_START_DAY, CUSTOM_PERIOD_MIN_START_DAY
from shiftpay.core.errors import ConfigurationError, InvalidPeriodConfiguration, InvalidTimeFormat
from shiftpay.core.time_utils import minutes_since_midnight, parse_time_of_day, parse_weekdays


class MonthPeriod(BaseModel):
    """Salary period running from the first to the last day of a calendar month."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["month"] = "month"


class CustomPeriod(BaseModel):
    """Salary period from start_day of one month to end_day of the next."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["custom"] = "custom"
    start_day: int
    end_day: int

    @model_validator(mode="after")
    def _check_days(self) -> "CustomPeriod":
        if not CUSTOM_PERIOD_MIN_START_DAY <= self.start_day <= CUSTOM_PERIOD_MAX_START_DAY:
            raise InvalidPeriodConfiguration(
                f"start_day must be between {CUSTOM_PERIOD_MIN_START_DAY} and {CUSTOM_PERIOD_MAX_START_DAY}",
                field="period.start_day",
                value=self.start_day,
            )
        if self.end_day != self.start_day - 1:
            raise InvalidPeriodConfiguration(
                "end_day must be the day before start_day",
                field="period.end_day",
                value=self.end_day,
            )
        return self


PeriodDefinition = Annotated[MonthPeriod | CustomPeriod, Field(discriminator="kind")]


class BonusRule(BaseModel):
    """
    Extra pay per hour during a daily time window.

    Without `days` the rule applies every day (general bonus). With `days` it
    applies only on those weekdays. Unknown day names are kept out of
    `weekdays` and listed in `rejected_days`.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    rate_per_hour: float = Field(validation_alias=AliasChoices("rate_per_hour", "bonus_pr_hour"))
    start: str
    end: str
    days: tuple[str, ...] | None = None

    _start_minutes: int = PrivateAttr(default=0)
    _end_minutes: int = PrivateAttr(default=0)
    _weekdays: frozenset[int] | None = PrivateAttr(default=None)
    _rejected_days: tuple[str, ...] = PrivateAttr(default=())

    @field_validator("start")
    @classmethod
    def _validate_start(cls, value: str) -> str:
        parse_time_of_day(value, "start")
        return value.strip()

    @field_validator("end")
    @classmethod
    def _validate_end(cls, value: str) -> str:
        minutes_since_midnight(value, "end")
        return value.strip()

    @model_validator(mode="after")
    def _check_window(self) -> "BonusRule":
        if minutes_since_midnight(self.start) > minutes_since_midnight(self.end):
            raise InvalidTimeFormat(
                "Bonus window may not wrap past midnight; split it into two rules",
                field="end",
                value=self.end,
            )
        return self

    def model_post_init(self, __context: Any) -> None:
        self._start_minutes = minutes_since_midnight(self.start, "start")
        self._end_minutes = minutes_since_midnight(self.end, "end")
        if self.days is not None:
            self._weekdays, self._rejected_days = parse_weekdays(self.days)

    @property
    def start_time(self) -> datetime.time:
        return datetime.time(self._start_minutes // 60, self._start_minutes % 60)

    @property
    def end_time(self) -> datetime.time:
        """End of the window; "24:00" is reported as time.max."""
        if self._end_minutes == 24 * 60:
            return datetime.time.max
        return datetime.time(self._end_minutes // 60, self._end_minutes % 60)

    @property
    def weekdays(self) -> frozenset[int] | None:
        return self._weekdays

    @property
    def rejected_days(self) -> tuple[str, ...]:
        return self._rejected_days

    def applies_on(self, day: datetime.date) -> bool:
        """True if the rule is active on the weekday of `day`."""
        if self._weekdays is None:
            return True
        return day.weekday() in self._weekdays

    def interval_on(self, day: datetime.date) -> tuple[datetime.datetime, datetime.datetime]:
        """The bonus window on a given day as (start, end) datetimes."""
        midnight = datetime.datetime.combine(day, datetime.time(0, 0))
        return (
            midnight + datetime.timedelta(minutes=self._start_minutes),
            midnight + datetime.timedelta(minutes=self._end_minutes),
        )


class WageConfiguration(BaseModel):
    """Base wage, salary period and bonus rules for one calculation run."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    base_rate_per_hour: float = Field(validation_alias=AliasChoices("base_rate_per_hour", "base_rate"))
    period: PeriodDefinition
    general_bonuses: tuple[BonusRule, ...] = Field(
        default=(),
        validation_alias=AliasChoices("general_bonuses", "general_time_periods"),
    )
    weekday_bonuses: tuple[BonusRule, ...] = Field(
        default=(),
        validation_alias=AliasChoices("weekday_bonuses", "day_of_week_rates"),
    )

    @field_validator("period", mode="before")
    @classmethod
    def _accept_stored_period_forms(cls, value: Any) -> Any:
        # Older files store "Month" or {"start_day": .., "end_day": ..}
        if isinstance(value, str):
            if value.strip().lower() == "month":
                return {"kind": "month"}
            raise InvalidPeriodConfiguration("Unknown period", field="period", value=value)
        if isinstance(value, dict) and "kind" not in value:
            kind = "custom" if "start_day" in value or "end_day" in value else "month"
            return {**value, "kind": kind}
        return value

    @model_validator(mode="after")
    def _check_bonus_kinds(self) -> "WageConfiguration":
        for index, rule in enumerate(self.general_bonuses):
            if rule.days is not None:
                raise ConfigurationError(
                    "General bonuses apply every day; move rules with days to weekday_bonuses",
                    field=f"general_bonuses[{index}].days",
                    value=list(rule.days),
                )
        for index, rule in enumerate(self.weekday_bonuses):
            if rule.days is None:
                raise ConfigurationError(
                    "Weekday bonuses need a list of days",
                    field=f"weekday_bonuses[{index}].days",
                    value=None,
                )
        return self

    def degraded_rules(self) -> list[tuple[int, BonusRule]]:
        """Weekday rules (with their index) that dropped unparseable day names."""
        return [(index, rule) for index, rule in enumerate(self.weekday_bonuses) if rule.rejected_days]
