"""Catalogue source port (abstract interface).

The storefront reads products, farmers and combo packs through this
contract. The feed is a snapshot loaded once; adapters never mutate it.
"""

from abc import ABC, abstractmethod


class ProductNotFoundError(LookupError):
    """No product with the requested id exists in the catalogue."""


class FarmerNotFoundError(LookupError):
    """No farmer with the requested id exists in the catalogue."""


class CatalogueSource(ABC):
    """Abstract read-only catalogue interface."""

    @abstractmethod
    def list_products(self, category: str | None = None) -> list:
        """Return all products, optionally restricted to one category."""
        ...

    @abstractmethod
    def get_product(self, product_id: str):
        """Return one product.

        Raises:
            ProductNotFoundError: the id is unknown.
        """
        ...

    @abstractmethod
    def list_farmers(self) -> list:
        """Return all partner farmers."""
        ...

    @abstractmethod
    def get_farmer(self, farmer_id: str):
        """Return one farmer.

        Raises:
            FarmerNotFoundError: the id is unknown.
        """
        ...

    @abstractmethod
    def combo_packs(self) -> list:
        """Return the combo packs on offer."""
        ...

    def featured_products(self, count: int = 6) -> list:
        return self.list_products()[:count]

    def list_categories(self) -> list[str]:
        from catalogue.product.product import ProductCategory

        return [category.value for category in ProductCategory]

    def products_by_farmer(self, farmer_id: str) -> list:
        return [p for p in self.list_products() if str(p.farmer_id) == str(farmer_id)]

    def get_combo_pack(self, combo_id: str):
        combo = next((c for c in self.combo_packs() if str(c.id) == str(combo_id)), None)
        if combo is None:
            raise ProductNotFoundError(f"Combo pack {combo_id!r} not found")
        return combo
