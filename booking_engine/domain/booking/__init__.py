"""Booking bounded context."""
