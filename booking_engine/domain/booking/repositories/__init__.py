"""
Repository Interfaces

Abstract collaborators the engine's callers supply: the package catalog,
the availability source and the booking store.
"""

from .availability_repository import AvailabilitySource
from .booking_repository import BookingStore
from .package_repository import PackageCatalog

__all__ = ["AvailabilitySource", "BookingStore", "PackageCatalog"]
