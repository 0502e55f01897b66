"""
Booking Store Interface

Defines the contract the engine's callers rely on when reading existing
bookings and committing new ones.

Conflict checking reads, and committing writes, in two separate steps. Two
requests for the same assignee can both pass the check before either
commits, so every implementation must close that gap with both of:

* ``assignee_lock``: a per-assignee serialization point that callers hold
  across the check-then-write sequence, taken for every related assignee in
  a fixed order when team bookings occupy their members (an advisory lock
  keyed by assignee id in a database-backed store);
* ``add``: a commit that re-checks overlap for the assignee and raises
  ``ResourceConflictError`` when an overlapping active booking got there
  first (a transactional uniqueness constraint in a database-backed store).
"""

import datetime as dt
from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from ..entities.booking import Booking
from ..value_objects.assignee import Assignee, TeamMembers


class BookingStore(ABC):
    """Abstract repository interface for Booking entities."""

    @abstractmethod
    def bookings_for(
        self, assignee: Assignee, start_date: dt.date, end_date: dt.date
    ) -> list[Booking]:
        """
        Retrieve bookings for an assignee that occupy any date in a range.

        Args:
            assignee: Staff member or team
            start_date: First date of interest (inclusive)
            end_date: Last date of interest (inclusive)

        Returns:
            Matching bookings in every status
        """
        pass

    @abstractmethod
    def get_by_id(self, booking_id: str) -> Booking | None:
        """Retrieve a booking by its ID, or None if not found."""
        pass

    @abstractmethod
    def add(
        self,
        booking: Booking,
        *,
        allow_overlap: bool = False,
        team_members: TeamMembers | None = None,
    ) -> Booking:
        """
        Commit a new booking and assign its ID.

        Args:
            booking: Booking to store
            allow_overlap: Skip the overlap re-check, for bookings accepted
                under the warn conflict policy
            team_members: Team id to member staff ids; when given, the
                re-check also covers the staff and teams the booking occupies

        Returns:
            The stored booking, carrying its new ID

        Raises:
            ResourceConflictError: If an overlapping active booking for the
                same assignee, or one sharing its time, was committed first
        """
        pass

    @abstractmethod
    def update(self, booking: Booking) -> Booking:
        """
        Replace a stored booking.

        Raises:
            KeyError: If the booking does not exist
        """
        pass

    @abstractmethod
    def assignee_lock(self, assignee: Assignee) -> AbstractContextManager[None]:
        """Serialize check-then-write sequences for one assignee."""
        pass
