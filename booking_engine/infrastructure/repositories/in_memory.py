"""
In-Memory Repositories

Process-local implementations of the domain repository interfaces, used
by tests and by single-process deployments. The booking store keeps one
lock per assignee for check-then-write sequences and re-checks overlap on
every commit.
"""

import datetime as dt
import threading
import uuid
from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from ...core.observability import get_logger
from ...domain.booking.entities.booking import Booking
from ...domain.booking.repositories.availability_repository import AvailabilitySource
from ...domain.booking.repositories.booking_repository import BookingStore
from ...domain.booking.repositories.package_repository import PackageCatalog
from ...domain.booking.services.conflict_detector import occupied_resources
from ...domain.booking.value_objects.assignee import Assignee, TeamMembers
from ...domain.booking.value_objects.availability import UnavailabilityWindow
from ...domain.booking.value_objects.pricing import ServicePackage
from ...domain.shared.exceptions import ResourceConflictError

logger = get_logger(__name__)


class InMemoryPackageCatalog(PackageCatalog):
    def __init__(self, packages: Iterable[ServicePackage] = ()) -> None:
        self._packages = {package.id: package for package in packages}

    def add(self, package: ServicePackage) -> None:
        self._packages[package.id] = package

    def get_package(self, package_id: str) -> ServicePackage | None:
        package = self._packages.get(package_id)
        if package is None or not package.is_active:
            return None
        return package


class InMemoryAvailabilitySource(AvailabilitySource):
    def __init__(self, windows: Iterable[UnavailabilityWindow] = ()) -> None:
        self._windows = list(windows)

    def add(self, window: UnavailabilityWindow) -> None:
        self._windows.append(window)

    def windows_for(
        self, assignee: Assignee, start_date: dt.date, end_date: dt.date
    ) -> list[UnavailabilityWindow]:
        return [
            window
            for window in self._windows
            if window.assignee == assignee and start_date <= window.date <= end_date
        ]


class InMemoryBookingStore(BookingStore):
    """
    Thread-safe booking store held in a dict.

    ``add`` refuses a booking that overlaps an active booking for any staff
    member or team it occupies, which stands in for the uniqueness constraint a database
    would enforce at commit.
    """

    def __init__(self, bookings: Iterable[Booking] = ()) -> None:
        self._bookings: dict[str, Booking] = {}
        self._data_lock = threading.RLock()
        self._assignee_locks: dict[Assignee, threading.RLock] = {}
        self._locks_guard = threading.Lock()
        for booking in bookings:
            stored = booking if booking.id else booking.model_copy(
                update={"id": str(uuid.uuid4())}
            )
            self._bookings[stored.id] = stored  # type: ignore[index]

    def __len__(self) -> int:
        return len(self._bookings)

    def all(self) -> list[Booking]:
        with self._data_lock:
            return list(self._bookings.values())

    def bookings_for(
        self, assignee: Assignee, start_date: dt.date, end_date: dt.date
    ) -> list[Booking]:
        with self._data_lock:
            return [
                booking
                for booking in self._bookings.values()
                if booking.assignee == assignee
                and booking.date <= end_date
                and booking.slot.last_date >= start_date
            ]

    def get_by_id(self, booking_id: str) -> Booking | None:
        with self._data_lock:
            return self._bookings.get(booking_id)

    def add(
        self,
        booking: Booking,
        *,
        allow_overlap: bool = False,
        team_members: TeamMembers | None = None,
    ) -> Booking:
        with self._data_lock:
            if not allow_overlap:
                self._check_overlap(booking, team_members)
            stored = booking.model_copy(update={"id": str(uuid.uuid4())})
            self._bookings[stored.id] = stored  # type: ignore[index]

        logger.debug("Booking stored", booking_id=stored.id, slot=str(stored.slot))
        return stored

    def update(self, booking: Booking) -> Booking:
        with self._data_lock:
            if booking.id is None or booking.id not in self._bookings:
                raise KeyError(booking.id)
            self._bookings[booking.id] = booking
        return booking

    @contextmanager
    def assignee_lock(self, assignee: Assignee) -> Iterator[None]:
        with self._locks_guard:
            lock = self._assignee_locks.setdefault(assignee, threading.RLock())
        with lock:
            yield

    def _check_overlap(
        self, booking: Booking, team_members: TeamMembers | None
    ) -> None:
        assignee = booking.assignee
        if assignee is None or not booking.is_active:
            return

        resources = occupied_resources(booking, team_members)
        slot = booking.slot
        for other in self._bookings.values():
            if (
                other.is_active
                and not resources.isdisjoint(occupied_resources(other, team_members))
                and slot.overlaps_with(other.slot)
            ):
                raise ResourceConflictError(
                    f"{assignee} already has booking {other.id} at {other.slot}",
                    {"assignee": str(assignee), "booking_id": other.id},
                )
