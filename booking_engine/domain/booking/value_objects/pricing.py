"""
Pricing Value Objects

Service packages with fixed or area-tiered pricing, the request handed to
price resolution, and the resolved price it produces.
"""

from decimal import Decimal

from pydantic import Field, model_validator
from typing_extensions import Self

from ...shared.base import ValueObject
from .enums import PriceMode, PricingModel

DEFAULT_FREQUENCY = 1


class PricingTier(ValueObject):
    """
    One area band of a tiered package.

    ``area_min`` and ``area_max`` are both inclusive. ``frequency_prices``
    maps visits per month to the package price for that many visits.
    """

    area_min: Decimal = Field(ge=0)
    area_max: Decimal = Field(ge=0)
    required_staff: int = Field(default=1, ge=1)
    estimated_hours: Decimal | None = None
    frequency_prices: dict[int, Decimal] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_range(self) -> Self:
        if self.area_min > self.area_max:
            raise ValueError("area_min must not exceed area_max")
        return self

    def covers(self, area_sqm: Decimal) -> bool:
        return self.area_min <= area_sqm <= self.area_max

    def price_for(self, frequency: int) -> Decimal | None:
        return self.frequency_prices.get(frequency)

    def available_frequencies(self) -> list[int]:
        return sorted(self.frequency_prices)


class ServicePackage(ValueObject):
    id: str
    name: str
    pricing_model: PricingModel = PricingModel.FIXED
    base_price: Decimal | None = None
    duration_minutes: int | None = None
    tiers: tuple[PricingTier, ...] = ()
    is_active: bool = True

    def tier_for_area(self, area_sqm: Decimal) -> PricingTier | None:
        """First tier, by ascending ``area_min``, whose band covers the area."""
        for tier in sorted(self.tiers, key=lambda t: t.area_min):
            if tier.covers(area_sqm):
                return tier
        return None


class PriceRequest(ValueObject):
    """Everything price resolution needs; which fields matter depends on the mode."""

    price_mode: PriceMode
    package_id: str | None = None
    area_sqm: Decimal | None = None
    # Visits per month
    frequency: int | None = Field(default=None, ge=1)
    custom_price: Decimal | None = None
    job_name: str | None = None


class ResolvedPrice(ValueObject):
    amount: Decimal = Field(ge=0)
    price_mode: PriceMode
    package_id: str | None = None
    tier: PricingTier | None = None
    required_staff: int | None = None
    estimated_hours: Decimal | None = None
