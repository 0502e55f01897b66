"""
Booking Pipeline

Runs a candidate booking through every check in order:

1. validation (assignment, pricing inputs, schedule order, status)
2. price resolution
3. availability against blackout windows
4. conflicts against existing bookings
5. initial status

The first failing step ends the run. Conflicts fail the run under the
``block`` policy and travel with the prepared booking under ``warn``.
"""

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict

from ....custom_types import Failure, Result, Success
from ....core.config import settings
from ....core.observability import get_logger, monitor_operation
from ...shared.base import DomainService
from ...shared.exceptions import (
    ConflictDetectedError,
    DomainError,
    InvalidAssignmentError,
)
from ..entities.booking import Booking
from ..value_objects.availability import UnavailabilityWindow
from ..value_objects.enums import ConflictPolicy
from .availability_guard import check_availability
from .booking_validation_service import validate_booking
from .conflict_detector import ConflictSet, TeamMembers, find_conflicts
from .price_resolution_service import PriceResolutionService
from .status_machine import INITIAL_STATUS

logger = get_logger(__name__)


class PreparedBooking(BaseModel):
    """A priced booking ready to commit, with any advisory conflicts."""

    model_config = ConfigDict(frozen=True)

    booking: Booking
    conflicts: ConflictSet = ConflictSet()

    @property
    def has_warnings(self) -> bool:
        return self.conflicts.has_conflicts


def default_policy() -> ConflictPolicy:
    return ConflictPolicy(settings.DEFAULT_CONFLICT_POLICY)


class BookingPipeline(DomainService):
    """Prepares bookings for commit using a price resolution service."""

    def __init__(self, price_service: PriceResolutionService) -> None:
        self._price_service = price_service

    @monitor_operation("prepare_booking")
    def prepare(
        self,
        candidate: Booking,
        existing: Iterable[Booking],
        blackouts: Iterable[UnavailabilityWindow],
        policy: ConflictPolicy | None = None,
        *,
        exclude_booking_id: str | None = None,
        team_members: TeamMembers | None = None,
    ) -> Result[PreparedBooking, DomainError]:
        """
        Validate, price and schedule-check a candidate booking.

        Args:
            candidate: Proposed booking, in the initial status
            existing: Bookings that may conflict with it
            blackouts: Unavailability windows to respect
            policy: Whether conflicts block or warn; defaults to the
                configured policy
            exclude_booking_id: Booking to leave out of the conflict check
            team_members: Team id to member staff ids, for team conflicts

        Returns:
            The priced booking in the initial status, or the first failure
        """
        policy = policy or default_policy()

        validated = validate_booking(candidate, is_new=True)
        if isinstance(validated, Failure):
            return validated
        booking = validated.value

        price = self._price_service.resolve(booking.price_request())
        if isinstance(price, Failure):
            return price
        booking = booking.with_price(price.value)

        assignee = booking.assignee
        if assignee is None:
            return Failure(InvalidAssignmentError(booking.staff_id, booking.team_id))

        available = check_availability(assignee, booking.slot, blackouts)
        if isinstance(available, Failure):
            return available

        conflicts = find_conflicts(
            assignee,
            booking,
            existing,
            exclude_booking_id=exclude_booking_id,
            team_members=team_members,
        )
        if conflicts.has_conflicts and policy is ConflictPolicy.BLOCK:
            return Failure(
                ConflictDetectedError(str(assignee), conflicts.conflicting_ids())
            )
        if conflicts.has_conflicts:
            logger.warning(
                "Booking prepared with conflicts",
                assignee=str(assignee),
                conflicting_ids=conflicts.conflicting_ids(),
            )

        return Success(
            PreparedBooking(
                booking=booking.with_status(INITIAL_STATUS),
                conflicts=conflicts,
            )
        )
