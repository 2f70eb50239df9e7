"""Tests for the Product aggregate and its feed mapping."""

import pytest
from catalogue.product.product import DEFAULT_DELIVERY_DAYS, Product, ProductCategory, ProductUnit
from protean.exceptions import ValidationError


def _record(**overrides):
    record = {
        "id": "veg_tomato",
        "name": "Desi Tomato",
        "description": "Juicy country tomatoes",
        "category": "vegetable",
        "quantity_units": "kg",
        "price": 50,
        "image": "/tomato.jpg",
        "local_only": True,
        "farmer_sold": True,
        "stock": 80,
        "farmer_id": "farmer-1",
    }
    record.update(overrides)
    return record


class TestProductConstruction:
    def test_minimal_product(self):
        product = Product(id="p-1", name="Okra", category="Vegetables", unit="kg", price=60.0)
        assert product.id == "p-1"
        assert product.certification == "Standard"
        assert product.stock == 0
        assert product.is_organic is False

    def test_price_must_be_positive(self):
        with pytest.raises(ValidationError):
            Product(id="p-1", name="Okra", category="Vegetables", unit="kg", price=0.0)

    def test_category_must_be_known(self):
        with pytest.raises(ValidationError):
            Product(id="p-1", name="Okra", category="Snacks", unit="kg", price=10.0)

    def test_unit_must_be_known(self):
        with pytest.raises(ValidationError):
            Product(id="p-1", name="Okra", category="Vegetables", unit="packet", price=10.0)

    def test_primary_image(self):
        product = Product(id="p-1", name="Okra", category="Vegetables", unit="kg", price=10.0, images=["/a.jpg", "/b.jpg"])
        assert product.primary_image == "/a.jpg"

    def test_primary_image_without_images(self):
        product = Product(id="p-1", name="Okra", category="Vegetables", unit="kg", price=10.0)
        assert product.primary_image is None


class TestFromFeed:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("vegetable", ProductCategory.VEGETABLES),
            ("herb", ProductCategory.VEGETABLES),
            ("fruit", ProductCategory.FRUITS),
            ("pulses_grains", ProductCategory.GRAINS),
            ("dairy", ProductCategory.DAIRY),
            ("oils_spices", ProductCategory.LOCAL_PROCESSED),
            ("locery", ProductCategory.LOCAL_PROCESSED),
            ("nonveg_local", ProductCategory.DESI_NONVEG),
            ("snacks", ProductCategory.VEGETABLES),
        ],
    )
    def test_category_mapping(self, raw, expected):
        assert Product.from_feed(_record(category=raw)).category == expected.value

    @pytest.mark.parametrize(
        "raw, expected",
        [("kg", ProductUnit.KG), ("litre", ProductUnit.LITER), ("jar", ProductUnit.JAR), ("packet", ProductUnit.KG)],
    )
    def test_unit_mapping(self, raw, expected):
        assert Product.from_feed(_record(quantity_units=raw)).unit == expected.value

    def test_local_only_means_organic_and_local_certified(self):
        product = Product.from_feed(_record(local_only=True))
        assert product.is_organic is True
        assert product.certification == "Local Certified"

    def test_not_local_is_standard(self):
        product = Product.from_feed(_record(local_only=False))
        assert product.is_organic is False
        assert product.certification == "Standard"

    def test_single_image_becomes_image_list(self):
        assert Product.from_feed(_record()).images == ["/tomato.jpg"]

    def test_benefits(self):
        product = Product.from_feed(_record(farmer_sold=False, local_only=False))
        assert product.benefits == ["Juicy country tomatoes", "Fresh produce", "Quality assured"]

    def test_default_delivery_days(self):
        assert Product.from_feed(_record()).delivery_days == DEFAULT_DELIVERY_DAYS

    def test_explicit_delivery_days(self):
        product = Product.from_feed(_record(delivery_days=["Tuesday"]))
        assert product.delivery_days == ["Tuesday"]

    def test_farmer_reference(self):
        assert Product.from_feed(_record()).farmer_id == "farmer-1"

    def test_missing_name_is_a_key_error(self):
        record = _record()
        del record["name"]
        with pytest.raises(KeyError):
            Product.from_feed(record)

    def test_non_positive_price_is_rejected(self):
        with pytest.raises(ValidationError):
            Product.from_feed(_record(price=-5))
