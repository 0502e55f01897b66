"""
Availability Source Interface

Defines the contract for reading staff and team blackout windows.
"""

import datetime as dt
from abc import ABC, abstractmethod

from ..value_objects.assignee import Assignee
from ..value_objects.availability import UnavailabilityWindow


class AvailabilitySource(ABC):
    """Abstract source of unavailability windows (the staff-availability store)."""

    @abstractmethod
    def windows_for(
        self, assignee: Assignee, start_date: dt.date, end_date: dt.date
    ) -> list[UnavailabilityWindow]:
        """
        Retrieve blackout windows for an assignee.

        Args:
            assignee: Staff member or team
            start_date: First date of interest (inclusive)
            end_date: Last date of interest (inclusive)

        Returns:
            Windows falling on any date in the range
        """
        pass
