"""
Tests for booking shape validation.
"""

from datetime import date, time
from decimal import Decimal

from booking_engine.custom_types import Failure, Success
from booking_engine.domain.booking.services.booking_validation_service import (
    validate_booking,
)
from booking_engine.domain.booking.value_objects.enums import BookingStatus, PriceMode
from booking_engine.domain.shared.exceptions import (
    BookingValidationError,
    InvalidAssignmentError,
    InvalidScheduleError,
    InvalidStatusError,
    MissingPackageError,
)


class TestValidateBooking:
    """Test validate_booking."""

    def test_valid_booking(self, make_booking):
        booking = make_booking()
        assert validate_booking(booking) == Success(booking)

    def test_staff_and_team_rejected(self, make_booking):
        result = validate_booking(make_booking(team_id="team-1"))

        assert isinstance(result, Failure)
        assert isinstance(result.error, BookingValidationError)
        assert result.error.error_codes == ["INVALID_ASSIGNMENT"]
        assert isinstance(result.error.errors[0], InvalidAssignmentError)

    def test_no_assignee_rejected(self, make_booking):
        result = validate_booking(make_booking(staff_id=None))
        assert result.error.error_codes == ["INVALID_ASSIGNMENT"]

    def test_blank_ids_count_as_missing(self, make_booking):
        result = validate_booking(make_booking(staff_id=" ", team_id=""))
        assert result.error.error_codes == ["INVALID_ASSIGNMENT"]

    def test_end_before_start(self, make_booking):
        result = validate_booking(make_booking(start_time=time(12, 0), end_time=time(9, 0)))

        assert isinstance(result.error.errors[0], InvalidScheduleError)
        assert result.error.errors[0].field_name == "end_time"

    def test_zero_length_single_day_rejected(self, make_booking):
        result = validate_booking(make_booking(start_time=time(9, 0), end_time=time(9, 0)))
        assert result.error.error_codes == ["INVALID_SCHEDULE"]

    def test_end_date_before_date(self, make_booking):
        result = validate_booking(make_booking(end_date=date(2025, 6, 9)))

        assert result.error.errors[0].field_name == "end_date"

    def test_multi_day_end_time_may_precede_start_time(self, make_booking):
        booking = make_booking(
            end_date=date(2025, 6, 11), start_time=time(18, 0), end_time=time(8, 0)
        )
        assert isinstance(validate_booking(booking), Success)

    def test_new_booking_must_be_pending(self, make_booking):
        result = validate_booking(make_booking(status=BookingStatus.CONFIRMED))

        assert isinstance(result.error.errors[0], InvalidStatusError)

    def test_existing_booking_may_have_any_status(self, make_booking):
        booking = make_booking(status=BookingStatus.CONFIRMED)
        assert isinstance(validate_booking(booking, is_new=False), Success)

    def test_collects_every_failure_in_order(self, make_booking):
        """Test that every failed check is reported, assignment first."""
        booking = make_booking(
            team_id="team-1",
            package_id=None,
            start_time=time(12, 0),
            end_time=time(9, 0),
            status=BookingStatus.COMPLETED,
        )

        result = validate_booking(booking)

        assert result.error.error_codes == [
            "INVALID_ASSIGNMENT",
            "MISSING_PACKAGE",
            "INVALID_SCHEDULE",
            "INVALID_STATUS",
        ]
        assert isinstance(result.error.errors[1], MissingPackageError)

    def test_to_dict_lists_nested_errors(self, make_booking):
        result = validate_booking(
            make_booking(
                price_mode=PriceMode.CUSTOM,
                package_id=None,
                job_name="",
                custom_price=Decimal("100"),
            )
        )

        data = result.error.to_dict()
        assert data["code"] == "BOOKING_INVALID"
        assert [error["code"] for error in data["errors"]] == ["MISSING_JOB_NAME"]
