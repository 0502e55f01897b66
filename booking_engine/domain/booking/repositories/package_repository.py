"""
Package Catalog Interface

Defines the contract for looking up service packages and their pricing
tiers during price resolution.
"""

from abc import ABC, abstractmethod

from ..value_objects.pricing import ServicePackage


class PackageCatalog(ABC):
    """
    Abstract read-only source of service packages.

    Price resolution calls this once per package or override request and
    never writes through it.
    """

    @abstractmethod
    def get_package(self, package_id: str) -> ServicePackage | None:
        """
        Retrieve a package with its pricing tiers.

        Args:
            package_id: Package identifier

        Returns:
            The package, or None if it does not exist
        """
        pass
