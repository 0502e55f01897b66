"""
Tests for the booking pipeline through the BookingEngine facade.
"""

from datetime import date, time
from decimal import Decimal
from unittest.mock import Mock

import pytest

from booking_engine.custom_types import Failure, Success
from booking_engine.domain.booking.entities.booking import BookingTemplate
from booking_engine.domain.booking.repositories.package_repository import PackageCatalog
from booking_engine.domain.booking.services.booking_engine import BookingEngine
from booking_engine.domain.booking.value_objects.assignee import Assignee
from booking_engine.domain.booking.value_objects.availability import UnavailabilityWindow
from booking_engine.domain.booking.value_objects.enums import (
    BookingStatus,
    ConflictPolicy,
    PriceMode,
    RecurrencePattern,
    Weekday,
)
from booking_engine.domain.booking.value_objects.pricing import PriceRequest
from booking_engine.domain.booking.value_objects.recurrence import RecurrenceRule
from booking_engine.domain.shared.exceptions import (
    BookingValidationError,
    ConflictDetectedError,
    ErrorType,
    InvalidAssignmentError,
    MissingPackageError,
    UnavailableError,
)

STAFF = Assignee.staff("staff-1")


class TestPrepareBooking:
    """Test the validate, price, availability and conflict pipeline."""

    def test_prepares_priced_pending_booking(self, engine, make_booking):
        result = engine.prepare_booking(make_booking(), [], [])

        assert isinstance(result, Success)
        prepared = result.value
        assert prepared.booking.resolved_price == Decimal("1500")
        assert prepared.booking.status is BookingStatus.PENDING
        assert prepared.booking.id is None
        assert not prepared.has_warnings

    def test_invalid_assignment_rejected_before_catalog(self, make_booking):
        """Test that a booking with staff and team never reaches the catalog."""
        catalog = Mock(spec=PackageCatalog)
        engine = BookingEngine(catalog)

        result = engine.prepare_booking(make_booking(team_id="team-1"), [], [])

        assert isinstance(result, Failure)
        assert isinstance(result.error, BookingValidationError)
        assert result.error.error_codes == ["INVALID_ASSIGNMENT"]
        catalog.get_package.assert_not_called()

    def test_unassigned_booking_is_a_failure_not_an_exception(
        self, engine, make_booking, monkeypatch
    ):
        """Test that a missing assignee is returned even if validation lets it by."""
        monkeypatch.setattr(
            "booking_engine.domain.booking.services.booking_pipeline.validate_booking",
            lambda booking, is_new=True: Success(booking),
        )

        result = engine.prepare_booking(make_booking(staff_id=None), [], [])

        assert isinstance(result, Failure)
        assert isinstance(result.error, InvalidAssignmentError)

    def test_unknown_package(self, engine, make_booking):
        result = engine.prepare_booking(make_booking(package_id="pkg-missing"), [], [])

        assert isinstance(result.error, MissingPackageError)
        assert result.error.package_id == "pkg-missing"

    def test_unavailable_before_conflicts(self, engine, make_booking):
        """Test that availability is checked before conflicts."""
        existing = [make_booking(id="b1")]
        blackout = UnavailabilityWindow(assignee=STAFF, date=date(2025, 6, 10))

        result = engine.prepare_booking(make_booking(), existing, [blackout])

        assert isinstance(result.error, UnavailableError)
        assert result.error.error_type is ErrorType.AVAILABILITY

    def test_block_policy_fails_on_conflict(self, engine, make_booking):
        existing = [make_booking(id="b1", start_time=time(11, 0), end_time=time(13, 0))]

        result = engine.prepare_booking(
            make_booking(), existing, [], ConflictPolicy.BLOCK
        )

        assert isinstance(result, Failure)
        assert isinstance(result.error, ConflictDetectedError)
        assert result.error.conflicting_ids == ["b1"]
        assert result.error.assignee == "staff:staff-1"

    def test_warn_policy_returns_conflicts(self, engine, make_booking):
        existing = [make_booking(id="b1", start_time=time(11, 0), end_time=time(13, 0))]

        result = engine.prepare_booking(make_booking(), existing, [], ConflictPolicy.WARN)

        assert isinstance(result, Success)
        assert result.value.has_warnings
        assert result.value.conflicts.conflicting_ids() == ["b1"]

    def test_default_policy_blocks(self, engine, make_booking):
        existing = [make_booking(id="b1")]
        result = engine.prepare_booking(make_booking(), existing, [])
        assert isinstance(result.error, ConflictDetectedError)

    def test_editing_excludes_original(self, engine, make_booking):
        existing = [make_booking(id="b1")]

        result = engine.prepare_booking(
            make_booking(end_time=time(13, 0)), existing, [], exclude_booking_id="b1"
        )

        assert isinstance(result, Success)

    def test_custom_price(self, engine, make_booking):
        booking = make_booking(
            price_mode=PriceMode.CUSTOM,
            package_id=None,
            job_name="Post-renovation clean",
            custom_price=Decimal("4200"),
        )

        result = engine.prepare_booking(booking, [], [])

        assert result.value.booking.resolved_price == Decimal("4200")

    def test_tiered_price(self, engine, make_booking):
        booking = make_booking(package_id="pkg-tiered", area_sqm=Decimal("80"), frequency=4)

        result = engine.prepare_booking(booking, [], [])

        assert result.value.booking.resolved_price == Decimal("5000")


class TestEngineFacade:
    """Test the facade's pass-through operations."""

    def test_resolve_price(self, engine):
        result = engine.resolve_price(
            PriceRequest(price_mode=PriceMode.PACKAGE, package_id="pkg-fixed")
        )
        assert result.value.amount == Decimal("1500")

    def test_check_availability(self, engine, make_booking):
        blackout = UnavailabilityWindow(assignee=STAFF, date=date(2025, 6, 10))
        result = engine.check_availability(STAFF, make_booking().slot, [blackout])
        assert isinstance(result, Failure)

    def test_find_conflicts(self, engine, make_booking):
        conflicts = engine.find_conflicts(STAFF, make_booking(), [make_booking(id="b1")])
        assert conflicts.conflicting_ids() == ["b1"]

    def test_transition_status(self, engine):
        assert engine.transition_status("pending", "confirmed") == Success(
            BookingStatus.CONFIRMED
        )
        assert isinstance(engine.transition_status("cancelled", "pending"), Failure)

    @pytest.mark.parametrize("span_days", [0, 1])
    def test_generate_series(self, engine, span_days):
        template = BookingTemplate(
            start_time=time(9, 0),
            end_time=time(12, 0),
            span_days=span_days,
            staff_id="staff-1",
            package_id="pkg-fixed",
        )
        rule = RecurrenceRule(
            pattern=RecurrencePattern.WEEKLY,
            start_date=date(2025, 1, 1),
            end_date=date(2025, 1, 31),
            days_of_week=[Weekday.MONDAY, Weekday.WEDNESDAY],
        )

        result = engine.generate_series(rule, template, [], [])

        assert len(result.value.created) == 9
        if span_days:
            assert all(b.end_date is not None for b in result.value.created)
