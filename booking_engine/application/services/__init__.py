"""
Application services for coordinating booking use cases.

These services read from the stores, run the booking engine and commit
its decisions under the store's per-assignee lock.
"""

from .booking_service import BookingService

__all__ = ["BookingService"]
