"""
Price Resolution Service

Turns a price request into a single non-negative price. Missing inputs are
always hard failures; the service never falls back to a default price.
"""

from decimal import Decimal

from ....custom_types import Failure, Result, Success
from ....core.observability import get_logger, monitor_operation
from ...shared.base import DomainService
from ...shared.exceptions import (
    InvalidPriceError,
    MissingJobNameError,
    MissingPackageError,
    PriceError,
    PricingTierNotFoundError,
)
from ..repositories.package_repository import PackageCatalog
from ..value_objects.enums import PriceMode, PricingModel
from ..value_objects.pricing import (
    DEFAULT_FREQUENCY,
    PriceRequest,
    ResolvedPrice,
    ServicePackage,
)

logger = get_logger(__name__)


def check_completeness(request: PriceRequest) -> Result[PriceRequest, PriceError]:
    """
    Check the field rules for the request's price mode without any lookup.

    * package: a package id
    * override: a package id and a price of zero or more
    * custom: a non-blank job name and a price of zero or more
    """
    mode = request.price_mode

    if mode.requires_package and not (request.package_id or "").strip():
        return Failure(MissingPackageError(None, mode.value))

    if mode is PriceMode.CUSTOM and not (request.job_name or "").strip():
        return Failure(MissingJobNameError(request.job_name))

    if mode.requires_custom_price and (
        request.custom_price is None or request.custom_price < 0
    ):
        return Failure(InvalidPriceError(request.custom_price, mode.value))

    return Success(request)


class PriceResolutionService(DomainService):
    """Resolves booking prices against a package catalog."""

    def __init__(self, package_catalog: PackageCatalog) -> None:
        self._package_catalog = package_catalog

    @monitor_operation("resolve_price")
    def resolve(self, request: PriceRequest) -> Result[ResolvedPrice, PriceError]:
        complete = check_completeness(request)
        if isinstance(complete, Failure):
            logger.info(
                "Price request incomplete",
                price_mode=request.price_mode.value,
                error_code=complete.error.error_code,
            )
            return complete

        if request.price_mode is PriceMode.CUSTOM:
            return Success(
                ResolvedPrice(
                    amount=request.custom_price,  # type: ignore[arg-type]
                    price_mode=PriceMode.CUSTOM,
                )
            )

        package = self._package_catalog.get_package(request.package_id)  # type: ignore[arg-type]
        if package is None:
            logger.info("Unknown package", package_id=request.package_id)
            return Failure(
                MissingPackageError(request.package_id, request.price_mode.value)
            )

        if request.price_mode is PriceMode.OVERRIDE:
            return Success(
                ResolvedPrice(
                    amount=request.custom_price,  # type: ignore[arg-type]
                    price_mode=PriceMode.OVERRIDE,
                    package_id=package.id,
                )
            )

        return self._package_price(package, request)

    def _package_price(
        self, package: ServicePackage, request: PriceRequest
    ) -> Result[ResolvedPrice, PriceError]:
        if package.pricing_model is PricingModel.FIXED:
            if package.base_price is None:
                return Failure(
                    PricingTierNotFoundError(
                        package.id,
                        request.area_sqm,
                        request.frequency,
                        f"package '{package.id}' has no base price",
                    )
                )
            return Success(
                ResolvedPrice(
                    amount=package.base_price,
                    price_mode=PriceMode.PACKAGE,
                    package_id=package.id,
                )
            )

        if request.area_sqm is None:
            return Failure(
                PricingTierNotFoundError(
                    package.id,
                    None,
                    request.frequency,
                    f"package '{package.id}' is priced by area; an area is required",
                )
            )

        tier = package.tier_for_area(Decimal(request.area_sqm))
        if tier is None:
            return Failure(
                PricingTierNotFoundError(
                    package.id,
                    request.area_sqm,
                    request.frequency,
                    f"no pricing tier of package '{package.id}' covers {request.area_sqm} sqm",
                )
            )

        frequency = (
            DEFAULT_FREQUENCY if request.frequency is None else request.frequency
        )
        price = tier.price_for(frequency)
        if price is None:
            available = ", ".join(str(f) for f in tier.available_frequencies())
            return Failure(
                PricingTierNotFoundError(
                    package.id,
                    request.area_sqm,
                    frequency,
                    f"no price for {frequency} visit(s) per month; available: {available}",
                )
            )

        return Success(
            ResolvedPrice(
                amount=price,
                price_mode=PriceMode.PACKAGE,
                package_id=package.id,
                tier=tier,
                required_staff=tier.required_staff,
                estimated_hours=tier.estimated_hours,
            )
        )
