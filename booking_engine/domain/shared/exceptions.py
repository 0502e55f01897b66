"""
Domain Errors with Type Discrimination

Every rule the engine enforces has its own error class. Engine operations
return these inside ``Failure`` values; they are still ``Exception``
subclasses so a caller that prefers exceptions can simply ``raise`` them.
"""

from datetime import date
from enum import Enum

DetailValue = str | int | bool | None


class ErrorType(str, Enum):
    """Error type enumeration for discriminated unions."""

    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_CONFLICT = "resource_conflict"
    AVAILABILITY = "availability"
    PRICING = "pricing"
    CONCURRENCY = "concurrency"


class DomainError(Exception):
    """Base class for all domain errors with type discrimination."""

    default_code = "DOMAIN_ERROR"

    def __init__(
        self,
        message: str,
        error_type: ErrorType,
        details: dict[str, DetailValue] | None = None,
        error_code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.error_code = error_code or self.default_code
        self.details = details or {}

    def to_dict(self) -> dict[str, str | dict[str, DetailValue]]:
        """Convert error to dictionary for API responses."""
        return {
            "type": self.error_type.value,
            "code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(DomainError):
    """Raised when domain validation rules are violated."""

    default_code = "VALIDATION_ERROR"

    def __init__(
        self,
        field_name: str,
        value: object,
        message: str,
        error_code: str | None = None,
        details: dict[str, DetailValue] | None = None,
    ) -> None:
        self.field_name = field_name
        self.value = value

        full_message = f"Validation failed for field '{field_name}': {message}"
        details = details or {}
        details.update(
            {
                "field": field_name,
                "value": str(value) if value is not None else None,
            }
        )

        super().__init__(full_message, ErrorType.VALIDATION, details, error_code)


# Status errors
class IllegalTransitionError(DomainError):
    """A status change that the transition table does not allow."""

    default_code = "ILLEGAL_TRANSITION"

    def __init__(self, current: str, requested: str, allowed: list[str]) -> None:
        if allowed:
            message = (
                f"Cannot change status from '{current}' to '{requested}'; "
                f"allowed: {', '.join(allowed)}"
            )
        else:
            message = (
                f"Cannot change status from '{current}' to '{requested}'; "
                f"'{current}' is a terminal status"
            )
        super().__init__(
            message,
            ErrorType.BUSINESS_RULE,
            {"current": current, "requested": requested, "allowed": ",".join(allowed)},
        )
        self.current = current
        self.requested = requested
        self.allowed = allowed


class InvalidStatusError(ValidationError):
    """A booking carries a status it may not be created with."""

    default_code = "INVALID_STATUS"

    def __init__(self, status: str, message: str) -> None:
        super().__init__("status", status, message)


# Pricing errors
class PriceError(ValidationError):
    """Base class for price resolution failures."""

    default_code = "PRICE_ERROR"


class MissingPackageError(PriceError):
    """Package or override pricing without a usable package reference."""

    default_code = "MISSING_PACKAGE"

    def __init__(self, package_id: str | None, price_mode: str) -> None:
        if package_id:
            message = f"package '{package_id}' does not exist"
        else:
            message = f"a package is required for '{price_mode}' pricing"
        super().__init__(
            "package_id", package_id, message, details={"price_mode": price_mode}
        )
        self.package_id = package_id


class MissingJobNameError(PriceError):
    """Custom pricing without a job name."""

    default_code = "MISSING_JOB_NAME"

    def __init__(self, job_name: str | None) -> None:
        super().__init__(
            "job_name", job_name, "a job name is required for custom pricing"
        )


class InvalidPriceError(PriceError):
    """Override or custom pricing with a missing or negative price."""

    default_code = "INVALID_PRICE"

    def __init__(self, price: object, price_mode: str) -> None:
        if price is None:
            message = f"a price is required for '{price_mode}' pricing"
        else:
            message = "price must be zero or greater"
        super().__init__(
            "custom_price", price, message, details={"price_mode": price_mode}
        )


class PricingTierNotFoundError(PriceError):
    """A tiered package has no tier or frequency price for the request."""

    default_code = "PRICING_TIER_NOT_FOUND"

    def __init__(
        self,
        package_id: str,
        area_sqm: object,
        frequency: int | None,
        message: str,
    ) -> None:
        super().__init__(
            "area_sqm",
            area_sqm,
            message,
            details={"package_id": package_id, "frequency": frequency},
        )


# Booking shape errors
class InvalidAssignmentError(ValidationError):
    """A booking assigned to both a staff member and a team, or to neither."""

    default_code = "INVALID_ASSIGNMENT"

    def __init__(self, staff_id: str | None, team_id: str | None) -> None:
        if staff_id and team_id:
            message = "a booking cannot be assigned to both a staff member and a team"
        else:
            message = "a booking must be assigned to a staff member or a team"
        super().__init__(
            "staff_id",
            staff_id,
            message,
            details={"team_id": team_id},
        )


class InvalidScheduleError(ValidationError):
    """Dates or times out of order."""

    default_code = "INVALID_SCHEDULE"


class BookingValidationError(ValidationError):
    """One or more of the booking sub-checks failed."""

    default_code = "BOOKING_INVALID"

    def __init__(self, errors: list[ValidationError]) -> None:
        self.errors = errors
        messages = "; ".join(error.message for error in errors)
        super().__init__(
            "booking",
            None,
            messages,
            details={
                "error_count": len(errors),
                "error_codes": ",".join(self.error_codes),
            },
        )

    @property
    def error_codes(self) -> list[str]:
        return [error.error_code for error in self.errors]

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["errors"] = [error.to_dict() for error in self.errors]
        return data


# Scheduling errors
class SeriesTooLargeError(ValidationError):
    """A recurrence rule expands to more dates than allowed."""

    default_code = "SERIES_TOO_LARGE"

    def __init__(self, count: int, limit: int) -> None:
        super().__init__(
            "end_date",
            count,
            f"recurrence produces {count} dates; the maximum is {limit}",
            details={"count": count, "limit": limit},
        )
        self.count = count
        self.limit = limit


class UnavailableError(DomainError):
    """The assignee has a blackout window over the requested time."""

    default_code = "UNAVAILABLE"

    def __init__(
        self,
        assignee: str,
        on_date: date,
        window: str,
        reason: str | None = None,
    ) -> None:
        super().__init__(
            f"{assignee} is unavailable on {on_date.isoformat()} ({window})",
            ErrorType.AVAILABILITY,
            {
                "assignee": assignee,
                "date": on_date.isoformat(),
                "window": window,
                "reason": reason,
            },
        )
        self.assignee = assignee
        self.date = on_date
        self.reason = reason


class ConflictDetectedError(DomainError):
    """A booking overlaps existing work for the same assignee."""

    default_code = "BOOKING_CONFLICT"

    def __init__(self, assignee: str, conflicting_ids: list[str]) -> None:
        super().__init__(
            f"{assignee} is already booked at this time",
            ErrorType.RESOURCE_CONFLICT,
            {"assignee": assignee, "conflicting_ids": ",".join(conflicting_ids)},
        )
        self.assignee = assignee
        self.conflicting_ids = conflicting_ids


class ResourceConflictError(DomainError):
    """Raised by a booking store when a commit would double-book an assignee."""

    default_code = "COMMIT_CONFLICT"

    def __init__(
        self, message: str, details: dict[str, DetailValue] | None = None
    ) -> None:
        super().__init__(message, ErrorType.CONCURRENCY, details)
