"""
Booking Status State Machine

Validates status changes against the transition table on ``BookingStatus``.
The machine is pure: it holds no state between calls and performs no I/O;
persisting the new status, and any side effect such as notifying the
customer, belongs to the caller.
"""

from ....custom_types import Failure, Result, Success
from ....core.observability import get_logger, monitor_operation
from ...shared.exceptions import IllegalTransitionError
from ..value_objects.enums import BookingStatus

logger = get_logger(__name__)

INITIAL_STATUS = BookingStatus.PENDING

_TRANSITION_MESSAGES: dict[tuple[BookingStatus, BookingStatus], str] = {
    (BookingStatus.PENDING, BookingStatus.CONFIRMED): "Confirm this booking?",
    (BookingStatus.CONFIRMED, BookingStatus.IN_PROGRESS): (
        "Mark this booking as in progress?"
    ),
    (BookingStatus.IN_PROGRESS, BookingStatus.COMPLETED): (
        "Mark this booking as completed?"
    ),
    (BookingStatus.CONFIRMED, BookingStatus.NO_SHOW): (
        "Mark this booking as no-show? This action cannot be undone."
    ),
}


def coerce_status(value: BookingStatus | str) -> BookingStatus | None:
    if isinstance(value, BookingStatus):
        return value
    try:
        return BookingStatus(str(value).strip().lower())
    except ValueError:
        return None


@monitor_operation("transition_status")
def transition(
    current: BookingStatus | str, requested: BookingStatus | str
) -> Result[BookingStatus, IllegalTransitionError]:
    """
    Move a booking from ``current`` to ``requested``.

    Terminal statuses are absorbing, and a status never transitions to
    itself. Unknown status strings fail the same way as illegal moves.
    """
    current_status = coerce_status(current)
    requested_status = coerce_status(requested)

    if current_status is None or requested_status is None:
        allowed = current_status.valid_transitions() if current_status else []
        return Failure(
            IllegalTransitionError(
                str(getattr(current, "value", current)),
                str(getattr(requested, "value", requested)),
                [status.value for status in allowed],
            )
        )

    if not current_status.can_transition_to(requested_status):
        logger.info(
            "Illegal status transition",
            current=current_status.value,
            requested=requested_status.value,
        )
        return Failure(
            IllegalTransitionError(
                current_status.value,
                requested_status.value,
                [status.value for status in current_status.valid_transitions()],
            )
        )

    return Success(requested_status)


def valid_transitions(status: BookingStatus | str) -> list[BookingStatus]:
    """Statuses a booking can move to, excluding its current one."""
    current = coerce_status(status)
    return current.valid_transitions() if current else []


def available_statuses(status: BookingStatus | str) -> list[BookingStatus]:
    """The current status followed by every legal target, for status pickers."""
    current = coerce_status(status)
    if current is None:
        return []
    return [current, *current.valid_transitions()]


def transition_message(
    current: BookingStatus | str, requested: BookingStatus | str
) -> str:
    """Confirmation prompt shown before a status change."""
    current_status = coerce_status(current)
    requested_status = coerce_status(requested)
    if current_status is None or requested_status is None:
        return f"Change status from {current} to {requested}?"

    if requested_status is BookingStatus.CANCELLED:
        return "Cancel this booking? This action cannot be undone."
    message = _TRANSITION_MESSAGES.get((current_status, requested_status))
    if message:
        return message
    return (
        f"Change status from {current_status.label} to {requested_status.label}?"
    )
