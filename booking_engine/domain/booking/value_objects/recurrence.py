"""Recurrence rule value object."""

import datetime as dt

from pydantic import Field, field_validator

from ...shared.base import ValueObject
from .enums import RecurrencePattern, Weekday


class RecurrenceRule(ValueObject):
    """
    How a series repeats between two dates, both inclusive.

    ``days_of_week`` filters daily series and selects the days of weekly
    and biweekly series; monthly series ignore it and repeat on the start
    date's day of month.
    """

    pattern: RecurrencePattern
    start_date: dt.date
    end_date: dt.date
    days_of_week: tuple[Weekday, ...] = Field(default=())

    @field_validator("days_of_week", mode="before")
    @classmethod
    def _dedupe_days(cls, value: object) -> object:
        if isinstance(value, (list, tuple, set, frozenset)):
            return tuple(sorted({Weekday(day) for day in value}))
        return value

    def effective_days(self) -> frozenset[Weekday]:
        """Selected weekdays, defaulting to the start date's weekday."""
        if self.days_of_week:
            return frozenset(self.days_of_week)
        return frozenset({Weekday(self.start_date.weekday())})
