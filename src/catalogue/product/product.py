"""Product aggregate — an immutable catalogue record sourced from the product feed."""

from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, Float, Identifier, Integer, List, String, Text

from catalogue.domain import catalogue


class ProductCategory(Enum):
    """Enumeration of storefront product categories."""

    VEGETABLES = "Vegetables"
    FRUITS = "Fruits"
    GRAINS = "Grains"
    DAIRY = "Dairy"
    DESI_NONVEG = "Desi Non-Veg"
    LOCAL_PROCESSED = "Local Processed Foods"


class ProductUnit(Enum):
    """Enumeration of selling units."""

    KG = "kg"
    LITER = "liter"
    DOZEN = "dozen"
    BUNDLE = "bundle"
    PIECE = "piece"
    JAR = "jar"


# Raw feed category -> storefront category
FEED_CATEGORIES = {
    "vegetable": ProductCategory.VEGETABLES,
    "herb": ProductCategory.VEGETABLES,
    "fruit": ProductCategory.FRUITS,
    "pulses_grains": ProductCategory.GRAINS,
    "dairy": ProductCategory.DAIRY,
    "oils_spices": ProductCategory.LOCAL_PROCESSED,
    "locery": ProductCategory.LOCAL_PROCESSED,
    "nonveg_local": ProductCategory.DESI_NONVEG,
}

# Raw feed unit -> selling unit
FEED_UNITS = {
    "kg": ProductUnit.KG,
    "litre": ProductUnit.LITER,
    "liter": ProductUnit.LITER,
    "dozen": ProductUnit.DOZEN,
    "bundle": ProductUnit.BUNDLE,
    "piece": ProductUnit.PIECE,
    "jar": ProductUnit.JAR,
}

DEFAULT_DELIVERY_DAYS = ["Monday", "Wednesday", "Friday"]


@catalogue.aggregate
class Product:
    """A farm product offered on the storefront.

    Products are loaded from the catalogue feed and never change afterwards.
    The farmer is referenced by id only.
    """

    id: Identifier(identifier=True)
    name: String(required=True, max_length=200)
    description: Text()
    category: String(required=True, choices=ProductCategory)
    unit: String(required=True, choices=ProductUnit)
    price: Float(required=True)
    images: List(content_type=String)
    is_organic: Boolean(default=False)
    is_seasonal: Boolean(default=False)
    certification: String(max_length=100, default="Standard")
    benefits: List(content_type=String)
    delivery_days: List(content_type=String)
    stock: Integer(min_value=0, default=0)
    farmer_id: Identifier()
    off_reference: String(max_length=100)

    @invariant.post
    def price_must_be_positive(self):
        if self.price is not None and self.price <= 0:
            raise ValidationError({"price": ["Price must be a positive amount"]})

    @classmethod
    def from_feed(cls, record):
        """Build a Product from a raw feed record.

        Unknown categories fall back to Vegetables and unknown units to kg.
        """
        category = FEED_CATEGORIES.get(record.get("category"), ProductCategory.VEGETABLES)
        unit = FEED_UNITS.get(record.get("quantity_units"), ProductUnit.KG)
        local_only = bool(record.get("local_only", False))
        description = record.get("description")

        images = list(record.get("images") or [])
        if not images and record.get("image"):
            images = [record["image"]]

        benefits = [
            description,
            "Locally sourced" if local_only else "Fresh produce",
            "Farmer direct" if record.get("farmer_sold") else "Quality assured",
        ]

        return cls(
            id=record["id"],
            name=record["name"],
            description=description,
            category=category.value,
            unit=unit.value,
            price=record["price"],
            images=images,
            is_organic=local_only,
            is_seasonal=bool(record.get("seasonal", False)),
            certification="Local Certified" if local_only else "Standard",
            benefits=[b for b in benefits if b],
            delivery_days=list(record.get("delivery_days") or DEFAULT_DELIVERY_DAYS),
            stock=record.get("stock", 0),
            farmer_id=record.get("farmer_id"),
            off_reference=record.get("off_reference"),
        )

    @property
    def primary_image(self):
        return self.images[0] if self.images else None
