"""Unavailability (blackout) windows supplied by the staff-availability store."""

import datetime as dt
from datetime import time

from pydantic import model_validator
from typing_extensions import Self

from ...shared.base import ValueObject
from .assignee import Assignee
from .enums import UnavailabilityReason
from .time_interval import TimeInterval


class UnavailabilityWindow(ValueObject):
    """
    A period in which an assignee is marked unavailable.

    Without times the whole day is blocked; with both times only the
    ``[start_time, end_time)`` part of the day is.
    """

    assignee: Assignee
    date: dt.date
    start_time: time | None = None
    end_time: time | None = None
    reason: UnavailabilityReason | None = None
    notes: str | None = None

    @model_validator(mode="after")
    def _check_times(self) -> Self:
        if (self.start_time is None) != (self.end_time is None):
            raise ValueError("start_time and end_time must be given together")
        if self.start_time is not None and self.end_time <= self.start_time:  # type: ignore[operator]
            raise ValueError("End time must be after start time")
        return self

    @property
    def is_full_day(self) -> bool:
        return self.start_time is None

    @property
    def interval(self) -> TimeInterval:
        if self.is_full_day:
            return TimeInterval.whole_day()
        return TimeInterval.from_times(self.start_time, self.end_time)  # type: ignore[arg-type]

    def describe(self) -> str:
        return "full day" if self.is_full_day else str(self.interval)
