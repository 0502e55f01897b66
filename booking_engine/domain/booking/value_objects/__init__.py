"""
Value Objects

Immutable objects defined by their values: time intervals and slots,
assignees, pricing, availability windows and recurrence rules.
"""

from .assignee import Assignee
from .availability import UnavailabilityWindow
from .enums import (
    AssigneeKind,
    BookingStatus,
    ConflictPolicy,
    PriceMode,
    PricingModel,
    RecurrencePattern,
    UnavailabilityReason,
    Weekday,
)
from .pricing import PriceRequest, PricingTier, ResolvedPrice, ServicePackage
from .recurrence import RecurrenceRule
from .time_interval import (
    BookingSlot,
    TimeInterval,
    calculate_end_time,
    duration_minutes,
    overlaps,
    parse_time,
)

__all__ = [
    "Assignee",
    "AssigneeKind",
    "BookingSlot",
    "BookingStatus",
    "ConflictPolicy",
    "PriceMode",
    "PriceRequest",
    "PricingModel",
    "PricingTier",
    "RecurrencePattern",
    "RecurrenceRule",
    "ResolvedPrice",
    "ServicePackage",
    "TimeInterval",
    "UnavailabilityReason",
    "UnavailabilityWindow",
    "Weekday",
    "calculate_end_time",
    "duration_minutes",
    "overlaps",
    "parse_time",
]
