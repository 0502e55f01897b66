"""
Time Interval Value Objects

Half-open ``[start, end)`` intervals measured in whole minutes since
midnight, and booking slots that may span several calendar days. All
arithmetic is integer minutes; callers normalize to the business timezone
before building these.
"""

import datetime as dt
from collections.abc import Iterator
from datetime import time, timedelta

from pydantic import Field, model_validator
from typing_extensions import Self

from ...shared.base import ValueObject

MINUTES_PER_DAY = 24 * 60


def to_minutes(value: time) -> int:
    """Minutes since midnight for a time of day; seconds are dropped."""
    return value.hour * 60 + value.minute


def parse_time(value: str) -> time:
    """
    Parse ``HH:MM`` or ``HH:MM:SS`` into a time of day.

    Raises:
        ValueError: If the string is not a valid 24-hour time
    """
    parts = value.strip().split(":")
    if len(parts) not in (2, 3) or not all(part.isdigit() for part in parts):
        raise ValueError(f"Invalid time format (must be HH:MM): {value!r}")
    return time(*(int(part) for part in parts))


def calculate_end_time(start: time, duration_minutes: int) -> time:
    """
    Add a duration to a start time, wrapping past midnight.

    Example:
        >>> calculate_end_time(time(9, 0), 90)
        datetime.time(10, 30)
    """
    total = (to_minutes(start) + duration_minutes) % MINUTES_PER_DAY
    return time(total // 60, total % 60)


class TimeInterval(ValueObject):
    """A half-open interval of minutes within one day."""

    start: int = Field(ge=0, le=MINUTES_PER_DAY)
    end: int = Field(ge=0, le=MINUTES_PER_DAY)

    @model_validator(mode="after")
    def _check_order(self) -> Self:
        if self.start > self.end:
            raise ValueError("Start minutes must not be after end minutes")
        return self

    @classmethod
    def from_times(cls, start: time, end: time) -> "TimeInterval":
        """Build an interval from two times of day on the same date."""
        return cls(start=to_minutes(start), end=to_minutes(end))

    @classmethod
    def whole_day(cls) -> "TimeInterval":
        return cls(start=0, end=MINUTES_PER_DAY)

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def duration_minutes(self) -> int:
        return self.end - self.start

    def overlaps_with(self, other: "TimeInterval") -> bool:
        """Intervals that only touch at an endpoint do not overlap."""
        return self.start < other.end and other.start < self.end

    def __str__(self) -> str:
        return f"{_format_minutes(self.start)}-{_format_minutes(self.end)}"


def overlaps(a: TimeInterval, b: TimeInterval) -> bool:
    """True iff ``a.start < b.end and b.start < a.end``."""
    return a.overlaps_with(b)


def duration_minutes(interval: TimeInterval) -> int:
    return interval.duration_minutes()


def _format_minutes(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


class BookingSlot(ValueObject):
    """
    When a booking takes place.

    A single-day slot runs from ``start_time`` to ``end_time`` on ``date``.
    A multi-day slot starts at ``start_time`` on ``date`` and runs
    continuously until ``end_time`` on ``end_date``.
    """

    date: dt.date
    start_time: time
    end_time: time
    end_date: dt.date | None = None

    @property
    def last_date(self) -> dt.date:
        return self.end_date or self.date

    @property
    def is_multi_day(self) -> bool:
        return self.last_date > self.date

    def is_well_ordered(self) -> bool:
        """End date not before start date; single-day slots end after they start."""
        if self.last_date < self.date:
            return False
        if self.is_multi_day:
            return True
        return to_minutes(self.end_time) > to_minutes(self.start_time)

    def occupied_dates(self) -> Iterator[dt.date]:
        """Every calendar date in ``[date, end_date]``."""
        for offset in range((self.last_date - self.date).days + 1):
            yield self.date + timedelta(days=offset)

    def daily_intervals(self) -> dict[dt.date, TimeInterval]:
        """
        Split the slot into the part it occupies on each date.

        Empty parts (a multi-day slot ending at 00:00) are omitted. A slot
        that is not well ordered yields nothing.
        """
        if not self.is_well_ordered():
            return {}

        start = to_minutes(self.start_time)
        end = to_minutes(self.end_time)
        if not self.is_multi_day:
            return {self.date: TimeInterval(start=start, end=end)}

        intervals: dict[dt.date, TimeInterval] = {}
        for day in self.occupied_dates():
            day_start = start if day == self.date else 0
            day_end = end if day == self.last_date else MINUTES_PER_DAY
            if day_start < day_end:
                intervals[day] = TimeInterval(start=day_start, end=day_end)
        return intervals

    def overlaps_with(self, other: "BookingSlot") -> bool:
        """True if the two slots overlap on at least one shared date."""
        if self.date > other.last_date or other.date > self.last_date:
            return False
        theirs = other.daily_intervals()
        return any(
            day in theirs and interval.overlaps_with(theirs[day])
            for day, interval in self.daily_intervals().items()
        )

    def __str__(self) -> str:
        if self.is_multi_day:
            return (
                f"{self.date.isoformat()} {self.start_time:%H:%M} - "
                f"{self.last_date.isoformat()} {self.end_time:%H:%M}"
            )
        return f"{self.date.isoformat()} {self.start_time:%H:%M}-{self.end_time:%H:%M}"
