"""
Domain Services

Stateless rules over bookings. Each service takes everything it needs as
arguments and reports rule violations as ``Failure`` values; the
``BookingEngine`` facade composes them.
"""

from .availability_guard import check_availability
from .booking_engine import BookingEngine
from .booking_pipeline import BookingPipeline, PreparedBooking
from .booking_validation_service import validate_booking
from .conflict_detector import ConflictSet, build_conflict_map, find_conflicts
from .price_resolution_service import PriceResolutionService, check_completeness
from .recurring_series_generator import (
    SeriesDateError,
    SeriesResult,
    SeriesSummary,
    generate_dates,
    generate_series,
    group_by_recurring_group,
    occurrence_for,
    summarize_series,
)
from .status_machine import (
    available_statuses,
    transition,
    transition_message,
    valid_transitions,
)

__all__ = [
    "BookingEngine",
    "BookingPipeline",
    "PreparedBooking",
    "PriceResolutionService",
    "check_completeness",
    "check_availability",
    "validate_booking",
    "ConflictSet",
    "find_conflicts",
    "build_conflict_map",
    "SeriesDateError",
    "SeriesResult",
    "SeriesSummary",
    "generate_dates",
    "generate_series",
    "summarize_series",
    "group_by_recurring_group",
    "occurrence_for",
    "transition",
    "valid_transitions",
    "available_statuses",
    "transition_message",
]
