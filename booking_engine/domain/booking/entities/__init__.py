from .booking import Booking, BookingTemplate

__all__ = ["Booking", "BookingTemplate"]
