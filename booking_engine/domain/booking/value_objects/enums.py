"""Domain enums for bookings."""

from enum import Enum, IntEnum


class BookingStatus(str, Enum):
    """Booking status enumeration."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]

    @property
    def is_terminal(self) -> bool:
        """Check if booking status is terminal (cannot transition further)."""
        return self in {
            BookingStatus.COMPLETED,
            BookingStatus.CANCELLED,
            BookingStatus.NO_SHOW,
        }

    @property
    def blocks_schedule(self) -> bool:
        """Cancelled and no-show work never blocks or is blocked."""
        return self not in {BookingStatus.CANCELLED, BookingStatus.NO_SHOW}

    def valid_transitions(self) -> list["BookingStatus"]:
        """Statuses reachable from this one, in workflow order."""
        return list(_VALID_TRANSITIONS[self])

    def can_transition_to(self, target_status: "BookingStatus") -> bool:
        """Check if booking can transition from current status to target status."""
        return target_status in _VALID_TRANSITIONS[self]


_VALID_TRANSITIONS: dict[BookingStatus, tuple[BookingStatus, ...]] = {
    BookingStatus.PENDING: (BookingStatus.CONFIRMED, BookingStatus.CANCELLED),
    BookingStatus.CONFIRMED: (
        BookingStatus.IN_PROGRESS,
        BookingStatus.CANCELLED,
        BookingStatus.NO_SHOW,
    ),
    BookingStatus.IN_PROGRESS: (BookingStatus.COMPLETED, BookingStatus.CANCELLED),
    BookingStatus.COMPLETED: (),  # Terminal state
    BookingStatus.CANCELLED: (),  # Terminal state
    BookingStatus.NO_SHOW: (),  # Terminal state
}

_STATUS_LABELS: dict[BookingStatus, str] = {
    BookingStatus.PENDING: "Pending",
    BookingStatus.CONFIRMED: "Confirmed",
    BookingStatus.IN_PROGRESS: "In Progress",
    BookingStatus.COMPLETED: "Completed",
    BookingStatus.CANCELLED: "Cancelled",
    BookingStatus.NO_SHOW: "No Show",
}


class PriceMode(str, Enum):
    """How a booking's price is determined."""

    PACKAGE = "package"  # Looked up from the package's tier table
    OVERRIDE = "override"  # Package kept for reference, price set by hand
    CUSTOM = "custom"  # No package, named job with a quoted price

    @property
    def requires_package(self) -> bool:
        return self is not PriceMode.CUSTOM

    @property
    def requires_custom_price(self) -> bool:
        return self is not PriceMode.PACKAGE


class PricingModel(str, Enum):
    """Pricing model of a service package."""

    FIXED = "fixed"
    TIERED = "tiered"


class RecurrencePattern(str, Enum):
    """Recurrence pattern enumeration."""

    DAILY = "daily"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"

    @property
    def uses_days_of_week(self) -> bool:
        return self is not RecurrencePattern.MONTHLY


class Weekday(IntEnum):
    """Day of week, numbered like ``date.weekday()``."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6


class AssigneeKind(str, Enum):
    """Who a booking is allocated to."""

    STAFF = "staff"
    TEAM = "team"


class UnavailabilityReason(str, Enum):
    """Why an assignee is unavailable."""

    SICK_LEAVE = "sick_leave"
    HOLIDAY = "holiday"
    TRAINING = "training"
    PERSONAL = "personal"
    OTHER = "other"


class ConflictPolicy(str, Enum):
    """What the booking pipeline does with detected conflicts."""

    BLOCK = "block"
    WARN = "warn"
