"""
Booking Validation Service

Checks the shape of a booking before any pricing or scheduling work. Every
sub-check runs and every failure is reported together, so a form can show
all problems at once. No collaborator is consulted here; a booking that is
assigned to both a staff member and a team is rejected before the package
catalog is ever read.
"""

from ....custom_types import Failure, Result, Success
from ....core.observability import get_logger, monitor_operation
from ...shared.exceptions import (
    BookingValidationError,
    InvalidAssignmentError,
    InvalidScheduleError,
    InvalidStatusError,
    ValidationError,
)
from ..entities.booking import Booking
from .price_resolution_service import check_completeness
from .status_machine import INITIAL_STATUS

logger = get_logger(__name__)


def _check_assignment(booking: Booking) -> ValidationError | None:
    if booking.assignee is None:
        return InvalidAssignmentError(booking.staff_id, booking.team_id)
    return None


def _check_pricing(booking: Booking) -> ValidationError | None:
    result = check_completeness(booking.price_request())
    if isinstance(result, Failure):
        return result.error
    return None


def _check_schedule(booking: Booking) -> ValidationError | None:
    if booking.end_date is not None and booking.end_date < booking.date:
        return InvalidScheduleError(
            "end_date",
            booking.end_date.isoformat(),
            f"end date must not be before start date {booking.date.isoformat()}",
        )
    if not booking.slot.is_well_ordered():
        return InvalidScheduleError(
            "end_time",
            f"{booking.end_time:%H:%M}",
            f"end time must be after start time {booking.start_time:%H:%M}",
        )
    return None


def _check_status(booking: Booking, is_new: bool) -> ValidationError | None:
    if is_new and booking.status is not INITIAL_STATUS:
        return InvalidStatusError(
            booking.status.value,
            f"new bookings must start as '{INITIAL_STATUS.value}'",
        )
    return None


@monitor_operation("validate_booking")
def validate_booking(
    booking: Booking, *, is_new: bool = True
) -> Result[Booking, BookingValidationError]:
    """
    Validate assignment, pricing inputs, schedule order and status.

    Args:
        booking: Booking to check
        is_new: Whether the booking is being created; new bookings must
            carry the initial status

    Returns:
        The booking unchanged, or every failed check in one error
    """
    checks = (
        _check_assignment(booking),
        _check_pricing(booking),
        _check_schedule(booking),
        _check_status(booking, is_new),
    )
    errors = [error for error in checks if error is not None]

    if errors:
        failure = BookingValidationError(errors)
        logger.info(
            "Booking rejected by validation",
            booking_id=booking.id,
            error_codes=failure.error_codes,
        )
        return Failure(failure)

    return Success(booking)
