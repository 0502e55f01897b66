"""
Property-Based Testing for Booking Rules

Using Hypothesis to explore intervals, status transitions, conflict maps
and recurrence expansion across generated inputs.
"""

from datetime import date, time, timedelta
from decimal import Decimal

from hypothesis import given, settings, strategies as st

from booking_engine.custom_types import Failure, Success
from booking_engine.domain.booking.entities.booking import Booking
from booking_engine.domain.booking.services.conflict_detector import (
    build_conflict_map,
    find_conflicts,
)
from booking_engine.domain.booking.services.price_resolution_service import (
    PriceResolutionService,
)
from booking_engine.domain.booking.services.recurring_series_generator import (
    generate_dates,
)
from booking_engine.domain.booking.services.status_machine import transition
from booking_engine.domain.booking.value_objects.assignee import Assignee
from booking_engine.domain.booking.value_objects.enums import (
    BookingStatus,
    PriceMode,
    PricingModel,
    RecurrencePattern,
    Weekday,
)
from booking_engine.domain.booking.value_objects.pricing import (
    PriceRequest,
    PricingTier,
    ServicePackage,
)
from booking_engine.domain.booking.value_objects.recurrence import RecurrenceRule
from booking_engine.domain.booking.value_objects.time_interval import (
    MINUTES_PER_DAY,
    TimeInterval,
    overlaps,
)
from booking_engine.domain.shared.exceptions import SeriesTooLargeError
from booking_engine.infrastructure.repositories.in_memory import InMemoryPackageCatalog

BASE_DATE = date(2025, 6, 1)


# Custom Hypothesis strategies for domain-specific types
@st.composite
def intervals(draw):
    """Generate intervals within one day, empty ones included."""
    start = draw(st.integers(min_value=0, max_value=MINUTES_PER_DAY))
    end = draw(st.integers(min_value=start, max_value=MINUTES_PER_DAY))
    return TimeInterval(start=start, end=end)


@st.composite
def bookings(draw, booking_id: str):
    """Generate single-day bookings on a handful of dates and assignees."""
    start = draw(st.integers(min_value=0, max_value=47)) * 30
    length = draw(st.integers(min_value=30, max_value=8 * 60))
    end = min(start + length, MINUTES_PER_DAY - 1)
    return Booking(
        id=booking_id,
        date=BASE_DATE + timedelta(days=draw(st.integers(min_value=0, max_value=3))),
        start_time=time(start // 60, start % 60),
        end_time=time(end // 60, end % 60),
        staff_id=draw(st.sampled_from(["staff-1", "staff-2"])),
        package_id="pkg-fixed",
        status=draw(st.sampled_from(list(BookingStatus))),
    )


@st.composite
def booking_lists(draw):
    count = draw(st.integers(min_value=0, max_value=12))
    return [draw(bookings(f"b{index}")) for index in range(count)]


@st.composite
def recurrence_rules(draw):
    start = BASE_DATE + timedelta(days=draw(st.integers(min_value=0, max_value=400)))
    end = start + timedelta(days=draw(st.integers(min_value=0, max_value=500)))
    days = draw(st.lists(st.sampled_from(list(Weekday)), max_size=7))
    pattern = draw(st.sampled_from(list(RecurrencePattern)))
    return RecurrenceRule(pattern=pattern, start_date=start, end_date=end, days_of_week=days)


class TestIntervalProperties:
    @given(intervals(), intervals())
    def test_overlap_is_symmetric(self, a, b):
        assert overlaps(a, b) == overlaps(b, a)

    @given(intervals())
    def test_interval_overlaps_itself_unless_empty(self, a):
        assert overlaps(a, a) == (not a.is_empty)

    @given(st.integers(min_value=0, max_value=MINUTES_PER_DAY))
    def test_touching_intervals_never_overlap(self, split):
        left = TimeInterval(start=0, end=split)
        right = TimeInterval(start=split, end=MINUTES_PER_DAY)
        assert not overlaps(left, right)


class TestStatusProperties:
    @given(
        st.sampled_from([s for s in BookingStatus if s.is_terminal]),
        st.sampled_from(list(BookingStatus)),
    )
    def test_terminal_statuses_are_absorbing(self, terminal, requested):
        assert isinstance(transition(terminal, requested), Failure)

    @given(st.sampled_from(list(BookingStatus)), st.sampled_from(list(BookingStatus)))
    def test_success_only_for_listed_targets(self, current, requested):
        result = transition(current, requested)
        assert isinstance(result, Success) == (requested in current.valid_transitions())


class TestConflictProperties:
    @given(booking_lists())
    @settings(max_examples=50)
    def test_conflict_map_is_symmetric(self, booking_list):
        conflicts = build_conflict_map(booking_list)

        for booking_id, others in conflicts.conflicts.items():
            assert booking_id not in others
            for other in others:
                assert booking_id in conflicts.ids_for(other)

    @given(booking_lists())
    @settings(max_examples=50)
    def test_conflicts_stay_within_assignee_and_active(self, booking_list):
        by_id = {b.id: b for b in booking_list}
        conflicts = build_conflict_map(booking_list)

        for booking_id, others in conflicts.conflicts.items():
            booking = by_id[booking_id]
            assert booking.is_active
            for other in others:
                assert by_id[other].staff_id == booking.staff_id
                assert by_id[other].is_active

    @given(booking_lists(), bookings("candidate"))
    @settings(max_examples=50)
    def test_find_conflicts_agrees_with_map(self, booking_list, candidate):
        assignee = Assignee.staff(candidate.staff_id)
        found = find_conflicts(assignee, candidate, booking_list)
        full = build_conflict_map([*booking_list, candidate])

        assert set(found.conflicting_ids()) == set(full.ids_for("candidate"))


class TestRecurrenceProperties:
    @given(recurrence_rules())
    @settings(max_examples=100)
    def test_dates_ordered_unique_and_bounded(self, rule):
        result = generate_dates(rule)

        if isinstance(result, Failure):
            assert isinstance(result.error, SeriesTooLargeError)
            assert result.error.count > 50
            return

        dates = result.value
        assert dates == sorted(set(dates))
        assert len(dates) <= 50
        assert all(rule.start_date <= d <= rule.end_date for d in dates)
        filtered = rule.pattern is not RecurrencePattern.DAILY or rule.days_of_week
        if rule.pattern is not RecurrencePattern.MONTHLY and filtered:
            assert all(d.weekday() in rule.effective_days() for d in dates)

    @given(recurrence_rules())
    @settings(max_examples=100)
    def test_refused_count_matches_expansion(self, rule):
        dates = generate_dates(rule, max_occurrences=1000).value
        refused = generate_dates(rule, max_occurrences=1)

        if len(dates) > 1:
            assert refused.error.count == len(dates)
        else:
            assert isinstance(refused, Success)


class TestPriceProperties:
    @given(
        st.decimals(min_value=0, max_value=100, places=1, allow_nan=False),
        st.sampled_from([None, 1, 2, 4]),
    )
    def test_resolved_prices_are_never_negative(self, area, frequency):
        package = ServicePackage(
            id="pkg",
            name="Tiered",
            pricing_model=PricingModel.TIERED,
            tiers=(
                PricingTier(
                    area_min=Decimal("0"),
                    area_max=Decimal("100"),
                    frequency_prices={1: Decimal("900"), 4: Decimal("3000")},
                ),
            ),
        )
        service = PriceResolutionService(InMemoryPackageCatalog([package]))

        result = service.resolve(
            PriceRequest(
                price_mode=PriceMode.PACKAGE,
                package_id="pkg",
                area_sqm=area,
                frequency=frequency,
            )
        )

        if isinstance(result, Success):
            assert result.value.amount >= 0
            assert frequency in (None, 1, 4)
        else:
            assert frequency == 2
