"""Static catalogue adapter: products and farmers from bundled JSON files.

Mirrors the storefront's original data feed: a list of raw product records
(``products.json``) and the partner farmers (``farmers.json``). Both are read
once, on first access, and cached for the life of the adapter.
"""

import json
from pathlib import Path

import structlog
from protean.exceptions import ValidationError

from catalogue.combo.combo import build_combo_packs
from catalogue.domain import catalogue
from catalogue.farmer.farmer import Farmer
from catalogue.product.product import Product
from catalogue.source.port import CatalogueSource, FarmerNotFoundError, ProductNotFoundError

logger = structlog.get_logger(__name__)

DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class StaticCatalogue(CatalogueSource):
    """Catalogue backed by JSON files on disk."""

    def __init__(self, data_dir: str | Path | None = None) -> None:
        self.data_dir = Path(data_dir) if data_dir else DEFAULT_DATA_DIR
        self._products: list[Product] | None = None
        self._farmers: list[Farmer] | None = None
        self._combos: list | None = None

    def _read_records(self, filename: str) -> list[dict]:
        path = self.data_dir / filename
        try:
            records = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.error("Could not read catalogue feed", path=str(path), error=str(exc))
            return []
        if not isinstance(records, list):
            logger.error("Catalogue feed is not a list", path=str(path))
            return []
        return records

    def _load(self) -> None:
        if self._products is not None:
            return

        products = []
        farmers = []
        with catalogue.domain_context():
            for record in self._read_records("products.json"):
                try:
                    products.append(Product.from_feed(record))
                except (KeyError, TypeError, ValidationError) as exc:
                    logger.warning("Skipping malformed product record", record_id=record.get("id"), error=str(exc))

            for record in self._read_records("farmers.json"):
                try:
                    farmers.append(Farmer.from_feed(record))
                except (KeyError, TypeError, ValidationError) as exc:
                    logger.warning("Skipping malformed farmer record", record_id=record.get("id"), error=str(exc))

            combos = build_combo_packs(products)

        self._products = products
        self._farmers = farmers
        self._combos = combos
        logger.info(
            "Catalogue loaded",
            products=len(products),
            farmers=len(farmers),
            combos=len(combos),
        )

    def list_products(self, category: str | None = None) -> list[Product]:
        self._load()
        if category:
            return [p for p in self._products if p.category == category]
        return list(self._products)

    def get_product(self, product_id: str) -> Product:
        self._load()
        product = next((p for p in self._products if str(p.id) == str(product_id)), None)
        if product is None:
            raise ProductNotFoundError(f"Product {product_id!r} not found")
        return product

    def list_farmers(self) -> list[Farmer]:
        self._load()
        return list(self._farmers)

    def get_farmer(self, farmer_id: str) -> Farmer:
        self._load()
        farmer = next((f for f in self._farmers if str(f.id) == str(farmer_id)), None)
        if farmer is None:
            raise FarmerNotFoundError(f"Farmer {farmer_id!r} not found")
        return farmer

    def combo_packs(self) -> list:
        self._load()
        return list(self._combos)
