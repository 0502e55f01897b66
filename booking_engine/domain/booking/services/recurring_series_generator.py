"""
Recurring Series Generator

Expands a recurrence rule into concrete dates and runs each date through
the booking pipeline. Dates succeed or fail independently: a blackout or
conflict on one date is reported for that date and does not stop the rest
of the series.
"""

import calendar
import datetime as dt
import uuid
from collections import defaultdict
from collections.abc import Callable, Iterable, Iterator

from ....custom_types import Failure, Result, Success
from ....core.config import settings
from ....core.observability import get_logger, monitor_operation, record_series_outcome
from ...shared.base import ValueObject
from ...shared.exceptions import (
    DomainError,
    InvalidScheduleError,
    SeriesTooLargeError,
    ValidationError,
)
from ..entities.booking import Booking, BookingTemplate
from ..value_objects.availability import UnavailabilityWindow
from ..value_objects.enums import (
    BookingStatus,
    ConflictPolicy,
    RecurrencePattern,
    Weekday,
)
from ..value_objects.recurrence import RecurrenceRule
from .booking_pipeline import BookingPipeline
from .conflict_detector import TeamMembers

logger = get_logger(__name__)


class SeriesDateError(ValueObject):
    """Why one date of a series was not booked."""

    date: dt.date
    error: DomainError


class SeriesResult(ValueObject):
    """Outcome of generating a recurring series."""

    recurring_group_id: str
    created: list[Booking] = []
    errors: list[SeriesDateError] = []
    # Conflicting booking ids per date, under the warn policy
    warnings: dict[dt.date, list[str]] = {}

    @property
    def is_complete(self) -> bool:
        return not self.errors

    @property
    def failed_dates(self) -> list[dt.date]:
        return [entry.date for entry in self.errors]


class SeriesSummary(ValueObject):
    completed: int = 0
    confirmed: int = 0
    cancelled: int = 0
    no_show: int = 0
    upcoming: int = 0
    total: int = 0


def _weekday_matcher(rule: RecurrenceRule) -> Callable[[int], bool]:
    """
    Whether the date ``offset`` days after the start belongs to the series.

    Works on day offsets, so no date outside the rule is ever built.
    Biweekly weeks count from the Monday of the start date's week.
    """
    first_weekday = rule.start_date.weekday()
    if rule.pattern is RecurrencePattern.DAILY:
        days = frozenset(rule.days_of_week) or frozenset(Weekday)
    else:
        days = rule.effective_days()
    every_other = rule.pattern is RecurrencePattern.BIWEEKLY

    def matches(offset: int) -> bool:
        week, weekday = divmod(first_weekday + offset, 7)
        return weekday in days and not (every_other and week % 2)

    return matches


def _weekday_dates(rule: RecurrenceRule) -> Iterator[dt.date]:
    matches = _weekday_matcher(rule)
    for offset in range((rule.end_date - rule.start_date).days + 1):
        if matches(offset):
            yield rule.start_date + dt.timedelta(days=offset)


def _monthly(rule: RecurrenceRule) -> Iterator[dt.date]:
    day = rule.start_date.day
    year, month = rule.start_date.year, rule.start_date.month
    while (year, month) <= (rule.end_date.year, rule.end_date.month):
        last_day = calendar.monthrange(year, month)[1]
        occurrence = dt.date(year, month, min(day, last_day))
        if rule.start_date <= occurrence <= rule.end_date:
            yield occurrence
        year, month = (year + 1, 1) if month == 12 else (year, month + 1)


def _iter_dates(rule: RecurrenceRule) -> Iterator[dt.date]:
    if rule.pattern.uses_days_of_week:
        return _weekday_dates(rule)
    return _monthly(rule)


def _count_dates(rule: RecurrenceRule) -> int:
    """Number of dates the rule expands to, computed without expanding it."""
    start, end = rule.start_date, rule.end_date
    if not rule.pattern.uses_days_of_week:
        months = (end.year - start.year) * 12 + end.month - start.month + 1
        last_day = calendar.monthrange(end.year, end.month)[1]
        if min(start.day, last_day) > end.day:
            months -= 1
        return months

    # Weekday patterns repeat every one or two weeks from the start date
    period = 14 if rule.pattern is RecurrencePattern.BIWEEKLY else 7
    matches = _weekday_matcher(rule)
    full_periods, remainder = divmod((end - start).days + 1, period)
    per_period = sum(1 for offset in range(period) if matches(offset))
    return full_periods * per_period + sum(
        1 for offset in range(remainder) if matches(offset)
    )


def occurrence_for(
    template: BookingTemplate, on_date: dt.date, **recurrence: object
) -> Result[Booking, ValidationError]:
    """Build one occurrence, failing when it would end past ``date.max``."""
    if template.span_days > (dt.date.max - on_date).days:
        return Failure(
            InvalidScheduleError(
                "end_date",
                on_date.isoformat(),
                f"an occurrence starting {on_date.isoformat()} cannot end "
                f"{template.span_days} days later",
            )
        )
    return Success(template.booking_for(on_date, **recurrence))


@monitor_operation("generate_dates")
def generate_dates(
    rule: RecurrenceRule, max_occurrences: int | None = None
) -> Result[list[dt.date], ValidationError]:
    """
    Expand a recurrence rule into its dates, in order and without repeats.

    * daily: every date, filtered by ``days_of_week`` when given
    * weekly: the selected weekdays, defaulting to the start date's
    * biweekly: as weekly, in even weeks counted from the Monday of the
      start date's week
    * monthly: the start date's day of month, clamped to shorter months

    Args:
        rule: Recurrence rule with inclusive bounds
        max_occurrences: Largest allowed series; defaults to the configured
            maximum

    Returns:
        The dates, or ``SeriesTooLargeError`` when there are more than the
        maximum; the series is never truncated
    """
    limit = max_occurrences or settings.MAX_SERIES_OCCURRENCES

    if rule.end_date < rule.start_date:
        return Failure(
            ValidationError(
                "end_date",
                rule.end_date.isoformat(),
                f"end date must not be before start date {rule.start_date.isoformat()}",
            )
        )

    count = _count_dates(rule)
    if count > limit:
        logger.info(
            "Recurrence rule too large",
            pattern=rule.pattern.value,
            count=count,
            limit=limit,
        )
        return Failure(SeriesTooLargeError(count, limit))

    return Success(list(_iter_dates(rule)))


def generate_series(
    rule: RecurrenceRule,
    template: BookingTemplate,
    existing: Iterable[Booking],
    blackouts: Iterable[UnavailabilityWindow],
    pipeline: BookingPipeline,
    policy: ConflictPolicy | None = None,
    *,
    max_occurrences: int | None = None,
    team_members: TeamMembers | None = None,
) -> Result[SeriesResult, ValidationError]:
    """
    Build one booking per date of ``rule`` from ``template``.

    Every occurrence shares a fresh ``recurring_group_id`` and carries its
    1-based position among the rule's dates and the number of dates.
    Occurrences already built for earlier dates take part in the conflict
    check of later ones.

    Returns:
        Created bookings and per-date errors; the whole call fails only when
        the rule itself cannot be expanded
    """
    dates_result = generate_dates(rule, max_occurrences)
    if isinstance(dates_result, Failure):
        return dates_result
    dates = dates_result.value

    group_id = str(uuid.uuid4())
    existing = list(existing)
    blackouts = list(blackouts)
    created: list[Booking] = []
    errors: list[SeriesDateError] = []
    warnings: dict[dt.date, list[str]] = {}

    for sequence, on_date in enumerate(dates, start=1):
        occurrence = occurrence_for(
            template,
            on_date,
            recurring_group_id=group_id,
            recurring_sequence=sequence,
            recurring_total=len(dates),
        )
        if isinstance(occurrence, Failure):
            errors.append(SeriesDateError(date=on_date, error=occurrence.error))
            continue
        prepared = pipeline.prepare(
            occurrence.value,
            [*existing, *created],
            blackouts,
            policy,
            team_members=team_members,
        )
        if isinstance(prepared, Failure):
            errors.append(SeriesDateError(date=on_date, error=prepared.error))
            continue
        created.append(prepared.value.booking)
        if prepared.value.has_warnings:
            warnings[on_date] = prepared.value.conflicts.conflicting_ids()

    record_series_outcome("created", len(created))
    record_series_outcome("failed", len(errors))
    logger.info(
        "Recurring series generated",
        recurring_group_id=group_id,
        pattern=rule.pattern.value,
        created=len(created),
        failed=len(errors),
    )

    return Success(
        SeriesResult(
            recurring_group_id=group_id,
            created=created,
            errors=errors,
            warnings=warnings,
        )
    )


def summarize_series(bookings: Iterable[Booking]) -> SeriesSummary:
    """Count a series' bookings by status; pending and in-progress are upcoming."""
    counts: dict[BookingStatus, int] = defaultdict(int)
    total = 0
    for booking in bookings:
        counts[booking.status] += 1
        total += 1

    return SeriesSummary(
        completed=counts[BookingStatus.COMPLETED],
        confirmed=counts[BookingStatus.CONFIRMED],
        cancelled=counts[BookingStatus.CANCELLED],
        no_show=counts[BookingStatus.NO_SHOW],
        upcoming=counts[BookingStatus.PENDING] + counts[BookingStatus.IN_PROGRESS],
        total=total,
    )


def group_by_recurring_group(bookings: Iterable[Booking]) -> dict[str, list[Booking]]:
    """Recurring bookings by group id, each group ordered by sequence."""
    groups: dict[str, list[Booking]] = defaultdict(list)
    for booking in bookings:
        if booking.is_recurring:
            groups[booking.recurring_group_id].append(booking)  # type: ignore[index]

    return {
        group_id: sorted(group, key=lambda b: b.recurring_sequence or 0)
        for group_id, group in groups.items()
    }
