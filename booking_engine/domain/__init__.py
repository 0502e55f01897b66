"""
Domain Layer

Business rules for scheduling bookings, independent of storage and
transport. Components:

- booking/: bookings, pricing, availability and recurrence rules
- shared/: base classes and domain errors shared across contexts
"""
