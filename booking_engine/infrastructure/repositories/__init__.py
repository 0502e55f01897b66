from .in_memory import (
    InMemoryAvailabilitySource,
    InMemoryBookingStore,
    InMemoryPackageCatalog,
)

__all__ = [
    "InMemoryAvailabilitySource",
    "InMemoryBookingStore",
    "InMemoryPackageCatalog",
]
