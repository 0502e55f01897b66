"""
Booking application service for coordinating booking use cases.

The engine decides; this service reads what the engine needs from the
stores, holds the locks of the assignee and of everyone sharing its time
across check and commit, and writes the result. A commit that loses a
race is returned as a ``Failure`` and never retried.
"""

import datetime as dt
import uuid
from contextlib import ExitStack

from ...core.observability import get_logger, record_series_outcome
from ...custom_types import Failure, Result, Success
from ...domain.booking.entities.booking import Booking, BookingTemplate
from ...domain.booking.repositories.availability_repository import AvailabilitySource
from ...domain.booking.repositories.booking_repository import BookingStore
from ...domain.booking.services.booking_engine import BookingEngine
from ...domain.booking.services.booking_pipeline import PreparedBooking, default_policy
from ...domain.booking.services.booking_validation_service import validate_booking
from ...domain.booking.services.recurring_series_generator import (
    SeriesDateError,
    SeriesResult,
    generate_dates,
    occurrence_for,
)
from ...domain.booking.value_objects.assignee import Assignee, TeamMembers
from ...domain.booking.value_objects.enums import AssigneeKind, BookingStatus, ConflictPolicy
from ...domain.booking.value_objects.recurrence import RecurrenceRule
from ...domain.shared.exceptions import (
    DomainError,
    InvalidAssignmentError,
    ResourceConflictError,
    ValidationError,
)

logger = get_logger(__name__)


def _related_assignees(
    assignee: Assignee, team_members: TeamMembers | None
) -> list[Assignee]:
    """
    The assignee plus everyone whose bookings can collide with it.

    A staff member is related to each team it belongs to. A team is related
    to its members and to every other team sharing a member. The list is in
    a fixed order so locks are always taken the same way round.
    """
    if not team_members:
        return [assignee]
    if assignee.kind is AssigneeKind.TEAM:
        staff_ids = set(team_members.get(assignee.id, ()))
    else:
        staff_ids = {assignee.id}

    related = {assignee}
    related.update(Assignee.staff(staff_id) for staff_id in staff_ids)
    related.update(
        Assignee.team(team_id)
        for team_id, members in team_members.items()
        if staff_ids.intersection(members)
    )
    return sorted(related, key=str)


class BookingService:
    """
    Application service for booking creation and status changes.

    Args:
        engine: Booking engine holding the package catalog
        store: Booking store providing locks and commits
        availability_source: Source of blackout windows
    """

    def __init__(
        self,
        engine: BookingEngine,
        store: BookingStore,
        availability_source: AvailabilitySource,
    ) -> None:
        self._engine = engine
        self._store = store
        self._availability_source = availability_source

    def create_booking(
        self,
        candidate: Booking,
        policy: ConflictPolicy | None = None,
        *,
        team_members: TeamMembers | None = None,
    ) -> Result[PreparedBooking, DomainError]:
        """
        Check and commit a single booking.

        Returns:
            The stored booking with any advisory conflicts, or the first
            failure from the engine or the commit
        """
        policy = policy or default_policy()

        validated = validate_booking(candidate, is_new=True)
        if isinstance(validated, Failure):
            return validated
        assignee = candidate.assignee
        if assignee is None:
            return Failure(InvalidAssignmentError(candidate.staff_id, candidate.team_id))

        slot = candidate.slot
        related_assignees = _related_assignees(assignee, team_members)
        with ExitStack() as locks:
            for related in related_assignees:
                locks.enter_context(self._store.assignee_lock(related))

            existing = [
                booking
                for related in related_assignees
                for booking in self._store.bookings_for(
                    related, slot.date, slot.last_date
                )
            ]
            blackouts = self._availability_source.windows_for(
                assignee, slot.date, slot.last_date
            )

            prepared = self._engine.prepare_booking(
                candidate, existing, blackouts, policy, team_members=team_members
            )
            if isinstance(prepared, Failure):
                return prepared

            try:
                stored = self._store.add(
                    prepared.value.booking,
                    allow_overlap=policy is ConflictPolicy.WARN,
                    team_members=team_members,
                )
            except ResourceConflictError as e:
                logger.warning(
                    "Booking commit lost a race",
                    assignee=str(assignee),
                    slot=str(slot),
                    error=e.message,
                )
                return Failure(e)

        logger.info("Booking created", booking_id=stored.id, assignee=str(assignee))
        return Success(
            PreparedBooking(booking=stored, conflicts=prepared.value.conflicts)
        )

    def create_series(
        self,
        rule: RecurrenceRule,
        template: BookingTemplate,
        policy: ConflictPolicy | None = None,
        *,
        max_occurrences: int | None = None,
        team_members: TeamMembers | None = None,
    ) -> Result[SeriesResult, ValidationError]:
        """
        Create and commit a recurring series one date at a time.

        Each date takes the same locks as a single booking and commits on
        its own, so bookings committed for earlier dates are seen by later
        ones.
        """
        dates_result = generate_dates(rule, max_occurrences)
        if isinstance(dates_result, Failure):
            return dates_result
        dates = dates_result.value

        group_id = str(uuid.uuid4())
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
            result = self.create_booking(
                occurrence.value, policy, team_members=team_members
            )
            if isinstance(result, Failure):
                errors.append(SeriesDateError(date=on_date, error=result.error))
                continue
            created.append(result.value.booking)
            if result.value.has_warnings:
                warnings[on_date] = result.value.conflicts.conflicting_ids()

        record_series_outcome("created", len(created))
        record_series_outcome("failed", len(errors))
        logger.info(
            "Recurring series committed",
            recurring_group_id=group_id,
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

    def change_status(
        self, booking_id: str, requested: BookingStatus | str
    ) -> Result[Booking, DomainError]:
        """Apply a legal status change to a stored booking."""
        booking = self._store.get_by_id(booking_id)
        if booking is None:
            return Failure(
                ValidationError("booking_id", booking_id, "booking does not exist")
            )

        transitioned = self._engine.transition_status(booking.status, requested)
        if isinstance(transitioned, Failure):
            return transitioned

        updated = self._store.update(booking.with_status(transitioned.value))
        logger.info(
            "Booking status changed",
            booking_id=booking_id,
            previous=booking.status.value,
            status=updated.status.value,
        )
        return Success(updated)
