"""
Availability Guard

Checks a candidate slot against the assignee's planned time off. This
reflects blackout windows only, never other bookings; it performs no
lookups of its own.
"""

from collections.abc import Iterable

from ....custom_types import Failure, Result, Success
from ....core.observability import get_logger, monitor_operation
from ...shared.exceptions import UnavailableError
from ..value_objects.assignee import Assignee
from ..value_objects.availability import UnavailabilityWindow
from ..value_objects.time_interval import BookingSlot

logger = get_logger(__name__)


@monitor_operation("check_availability")
def check_availability(
    assignee: Assignee,
    slot: BookingSlot,
    blackouts: Iterable[UnavailabilityWindow],
) -> Result[None, UnavailableError]:
    """
    Fail with ``UnavailableError`` if any part of the slot is blacked out.

    Windows belonging to other assignees are ignored. A full-day window
    blocks any slot touching its date; a sub-day window blocks slots whose
    interval on that date overlaps it.
    """
    daily = slot.daily_intervals()

    for window in blackouts:
        if window.assignee != assignee:
            continue
        interval = daily.get(window.date)
        if interval is None:
            continue
        if window.is_full_day or interval.overlaps_with(window.interval):
            logger.info(
                "Assignee unavailable",
                assignee=str(assignee),
                date=window.date.isoformat(),
                window=window.describe(),
            )
            return Failure(
                UnavailableError(
                    str(assignee),
                    window.date,
                    window.describe(),
                    window.reason.value if window.reason else None,
                )
            )

    return Success(None)
