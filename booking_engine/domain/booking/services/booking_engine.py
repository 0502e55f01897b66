"""
Booking Engine

Single entry point over the scheduling-integrity rules. The engine holds
only its package catalog; every other input is passed per call, so one
instance can serve many threads.
"""

from collections.abc import Iterable

from ....custom_types import Result
from ...shared.base import DomainService
from ...shared.exceptions import (
    DomainError,
    IllegalTransitionError,
    PriceError,
    UnavailableError,
    ValidationError,
)
from ..entities.booking import Booking, BookingTemplate
from ..repositories.package_repository import PackageCatalog
from ..value_objects.assignee import Assignee
from ..value_objects.availability import UnavailabilityWindow
from ..value_objects.enums import BookingStatus, ConflictPolicy
from ..value_objects.pricing import PriceRequest, ResolvedPrice
from ..value_objects.recurrence import RecurrenceRule
from ..value_objects.time_interval import BookingSlot
from . import availability_guard, conflict_detector, recurring_series_generator, status_machine
from .booking_pipeline import BookingPipeline, PreparedBooking
from .conflict_detector import ConflictSet, TeamMembers
from .price_resolution_service import PriceResolutionService
from .recurring_series_generator import SeriesResult


class BookingEngine(DomainService):
    """
    Facade composing price resolution, availability, conflicts, status
    changes and recurring series.

    Example:
        >>> engine = BookingEngine(catalog)
        >>> result = engine.prepare_booking(candidate, existing, blackouts)
        >>> if isinstance(result, Success):
        ...     store.add(result.value.booking)
    """

    def __init__(self, package_catalog: PackageCatalog) -> None:
        self._price_service = PriceResolutionService(package_catalog)
        self._pipeline = BookingPipeline(self._price_service)

    def resolve_price(self, request: PriceRequest) -> Result[ResolvedPrice, PriceError]:
        return self._price_service.resolve(request)

    def check_availability(
        self,
        assignee: Assignee,
        slot: BookingSlot,
        blackouts: Iterable[UnavailabilityWindow],
    ) -> Result[None, UnavailableError]:
        return availability_guard.check_availability(assignee, slot, blackouts)

    def find_conflicts(
        self,
        assignee: Assignee,
        candidate: Booking,
        existing: Iterable[Booking],
        *,
        exclude_booking_id: str | None = None,
        team_members: TeamMembers | None = None,
    ) -> ConflictSet:
        return conflict_detector.find_conflicts(
            assignee,
            candidate,
            existing,
            exclude_booking_id=exclude_booking_id,
            team_members=team_members,
        )

    def transition_status(
        self, current: BookingStatus | str, requested: BookingStatus | str
    ) -> Result[BookingStatus, IllegalTransitionError]:
        return status_machine.transition(current, requested)

    def prepare_booking(
        self,
        candidate: Booking,
        existing: Iterable[Booking],
        blackouts: Iterable[UnavailabilityWindow],
        policy: ConflictPolicy | None = None,
        *,
        exclude_booking_id: str | None = None,
        team_members: TeamMembers | None = None,
    ) -> Result[PreparedBooking, DomainError]:
        return self._pipeline.prepare(
            candidate,
            existing,
            blackouts,
            policy,
            exclude_booking_id=exclude_booking_id,
            team_members=team_members,
        )

    def generate_series(
        self,
        rule: RecurrenceRule,
        template: BookingTemplate,
        existing: Iterable[Booking],
        blackouts: Iterable[UnavailabilityWindow],
        policy: ConflictPolicy | None = None,
        *,
        max_occurrences: int | None = None,
        team_members: TeamMembers | None = None,
    ) -> Result[SeriesResult, ValidationError]:
        return recurring_series_generator.generate_series(
            rule,
            template,
            existing,
            blackouts,
            self._pipeline,
            policy,
            max_occurrences=max_occurrences,
            team_members=team_members,
        )
