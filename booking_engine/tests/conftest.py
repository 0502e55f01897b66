from collections.abc import Callable
from datetime import date, time
from decimal import Decimal

import pytest

from booking_engine.domain.booking.entities.booking import Booking
from booking_engine.domain.booking.services.booking_engine import BookingEngine
from booking_engine.domain.booking.value_objects.enums import PricingModel
from booking_engine.domain.booking.value_objects.pricing import (
    PricingTier,
    ServicePackage,
)
from booking_engine.infrastructure.repositories.in_memory import (
    InMemoryAvailabilitySource,
    InMemoryBookingStore,
    InMemoryPackageCatalog,
)


@pytest.fixture
def fixed_package() -> ServicePackage:
    return ServicePackage(
        id="pkg-fixed",
        name="Standard Clean",
        pricing_model=PricingModel.FIXED,
        base_price=Decimal("1500"),
        duration_minutes=120,
    )


@pytest.fixture
def tiered_package() -> ServicePackage:
    return ServicePackage(
        id="pkg-tiered",
        name="Deep Clean",
        pricing_model=PricingModel.TIERED,
        tiers=(
            PricingTier(
                area_min=Decimal("0"),
                area_max=Decimal("50"),
                required_staff=2,
                estimated_hours=Decimal("3"),
                frequency_prices={
                    1: Decimal("1000"),
                    2: Decimal("1800"),
                    4: Decimal("3200"),
                },
            ),
            PricingTier(
                area_min=Decimal("51"),
                area_max=Decimal("100"),
                required_staff=3,
                estimated_hours=Decimal("4.5"),
                frequency_prices={1: Decimal("1500"), 4: Decimal("5000")},
            ),
        ),
    )


@pytest.fixture
def catalog(fixed_package, tiered_package) -> InMemoryPackageCatalog:
    return InMemoryPackageCatalog([fixed_package, tiered_package])


@pytest.fixture
def engine(catalog) -> BookingEngine:
    return BookingEngine(catalog)


@pytest.fixture
def store() -> InMemoryBookingStore:
    return InMemoryBookingStore()


@pytest.fixture
def availability_source() -> InMemoryAvailabilitySource:
    return InMemoryAvailabilitySource()


@pytest.fixture
def make_booking() -> Callable[..., Booking]:
    """Factory for a valid pending staff booking; keyword arguments override."""

    def _make(**overrides: object) -> Booking:
        fields: dict[str, object] = {
            "customer_id": "cust-1",
            "date": date(2025, 6, 10),
            "start_time": time(9, 0),
            "end_time": time(12, 0),
            "staff_id": "staff-1",
            "package_id": "pkg-fixed",
        }
        fields.update(overrides)
        return Booking(**fields)

    return _make
