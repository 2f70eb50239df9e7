"""Tests for WeeklyCart.snapshot() / WeeklyCart.restore()."""

import json

import pytest
from ordering.cart.cart import WeeklyCart
from protean.exceptions import ValidationError


class TestSnapshot:
    def test_snapshot_is_json_compatible(self, cart, tomato, rice):
        cart.add_item(tomato, 2, delivery_day="Friday")
        cart.add_item(rice, 1, combo_id="combo-x")

        data = json.loads(json.dumps(cart.snapshot()))

        assert data["cart_id"] == str(cart.id)
        assert data["lines"][0] == {
            "product_id": "veg_tomato",
            "name": "Desi Tomato",
            "unit_price": 50,
            "quantity": 2,
            "delivery_day": "Friday",
            "is_combo_item": False,
            "combo_id": None,
        }
        assert data["lines"][1]["combo_id"] == "combo-x"
        assert data["lines"][1]["is_combo_item"] is True

    def test_empty_cart_snapshot_has_no_lines(self, cart):
        assert cart.snapshot()["lines"] == []


class TestRestore:
    def test_round_trip_keeps_lines_and_totals(self, cart, tomato, rice):
        cart.add_item(tomato, 2)
        cart.add_item(rice, 1)

        restored = WeeklyCart.restore(json.loads(json.dumps(cart.snapshot())))

        assert str(restored.id) == str(cart.id)
        assert restored.get_item_count() == 3
        assert restored.get_cart_total() == 180
        assert restored.snapshot()["lines"] == cart.snapshot()["lines"]

    def test_restore_raises_no_events(self, cart, tomato):
        cart.add_item(tomato, 2)
        restored = WeeklyCart.restore(cart.snapshot())
        assert restored._events == []

    def test_restore_without_id_generates_one(self):
        restored = WeeklyCart.restore({"lines": []})
        assert restored.id is not None
        assert restored.is_empty

    def test_restore_rejects_invalid_line(self):
        with pytest.raises(ValidationError):
            WeeklyCart.restore({"lines": [{"product_id": "veg_tomato", "unit_price": 50, "quantity": 0}]})
