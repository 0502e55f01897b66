"""
Booking scheduling-integrity engine.

Pure rules for price resolution, status transitions, availability,
double-booking detection and recurring series, plus an application
service that commits bookings through a locking store.
"""

from .application.services import BookingService
from .custom_types import Failure, Result, Success
from .domain.booking.services import BookingEngine, PreparedBooking

__all__ = [
    "BookingEngine",
    "BookingService",
    "PreparedBooking",
    "Result",
    "Success",
    "Failure",
]
