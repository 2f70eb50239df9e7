"""WeeklyCart aggregate — the items a shopper intends to request this week.

The cart lives on the shopper's device. It is mutated in memory and then
flushed to local storage by the CartStore; it converts into a WeeklyRequest
when submitted.

Lines are keyed by product id. Adding a product that already has a
standalone line increases that line's quantity. Combo-sourced lines are kept
apart from standalone lines for the same product and are keyed by
(product id, combo id) instead.
"""

from datetime import UTC, datetime
from enum import Enum

import structlog
from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String

from ordering.cart.events import (
    CartCleared,
    CartItemAdded,
    CartItemRemoved,
    CartQuantityUpdated,
    ComboAddedToCart,
)
from ordering.domain import ordering

logger = structlog.get_logger(__name__)


class DeliveryDay(Enum):
    """Days the weekly basket can be delivered. There is no Sunday delivery."""

    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"


class CartState(Enum):
    EMPTY = "Empty"
    NON_EMPTY = "NonEmpty"


def _is_positive_quantity(value):
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


def _check_delivery_day(value):
    if value and value not in {day.value for day in DeliveryDay}:
        raise ValidationError({"delivery_day": [f"No delivery on {value!r}"]})


def _key(value):
    return str(value) if value else None


@ordering.entity(part_of="WeeklyCart")
class CartLine:
    product_id = Identifier(required=True)
    name = String(max_length=200)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    delivery_day = String(choices=DeliveryDay)
    is_combo_item = Boolean(default=False)
    combo_id = Identifier()

    @property
    def line_total(self):
        return self.unit_price * self.quantity

    def matches(self, product_id, is_combo_item=False, combo_id=None):
        return (
            str(self.product_id) == str(product_id)
            and bool(self.is_combo_item) == bool(is_combo_item)
            and _key(self.combo_id) == _key(combo_id)
        )

    def snapshot(self):
        return {
            "product_id": str(self.product_id),
            "name": self.name,
            "unit_price": self.unit_price,
            "quantity": self.quantity,
            "delivery_day": self.delivery_day,
            "is_combo_item": bool(self.is_combo_item),
            "combo_id": _key(self.combo_id),
        }


@ordering.aggregate
class WeeklyCart:
    lines = HasMany(CartLine)
    updated_at = DateTime()

    @invariant.post
    def one_line_per_product_and_combo(self):
        keys = [(str(line.product_id), bool(line.is_combo_item), _key(line.combo_id)) for line in self.lines]
        if len(keys) != len(set(keys)):
            raise ValidationError({"lines": ["A product can appear only once per combo grouping"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls):
        return cls(updated_at=datetime.now(UTC))

    # -------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------
    @property
    def state(self):
        return CartState.NON_EMPTY if self.lines else CartState.EMPTY

    @property
    def is_empty(self):
        return self.state == CartState.EMPTY

    def get_item_count(self):
        """Sum of quantities across all lines."""
        return sum(line.quantity for line in self.lines)

    def get_cart_total(self):
        """Sum of unit price times quantity across all lines."""
        return round(sum(line.line_total for line in self.lines), 2)

    def get_item_quantity(self, product_id):
        """Quantity of a product in the cart, standalone and combo lines together."""
        return sum(line.quantity for line in self.lines if str(line.product_id) == str(product_id))

    def find_line(self, product_id, combo_id=None):
        """Locate the line an update should target.

        With a combo id, only that combo's line matches. Without one, the
        standalone line is preferred, falling back to the first line for the
        product.
        """
        if combo_id:
            return next((line for line in self.lines if line.matches(product_id, True, combo_id)), None)
        standalone = next((line for line in self.lines if line.matches(product_id)), None)
        if standalone is not None:
            return standalone
        return next((line for line in self.lines if str(line.product_id) == str(product_id)), None)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def _merge_line(self, product_id, name, unit_price, quantity, delivery_day, is_combo_item, combo_id):
        _check_delivery_day(delivery_day)
        existing = next(
            (line for line in self.lines if line.matches(product_id, is_combo_item, combo_id)),
            None,
        )
        if existing:
            existing.quantity += quantity
            if delivery_day:
                existing.delivery_day = delivery_day
            return existing

        line = CartLine(
            product_id=product_id,
            name=name,
            unit_price=unit_price,
            quantity=quantity,
            delivery_day=delivery_day,
            is_combo_item=is_combo_item,
            combo_id=combo_id,
        )
        self.add_lines(line)
        return line

    def add_item(self, product, quantity=1, delivery_day=None, is_combo_item=False, combo_id=None):
        """Add a product to the cart (or increase the matching line's quantity).

        A quantity that is not a positive integer makes the call a no-op.
        """
        if not _is_positive_quantity(quantity):
            logger.warning("Ignoring add to cart with invalid quantity", product_id=str(product.id), quantity=quantity)
            return self

        if combo_id:
            is_combo_item = True

        self._merge_line(
            product_id=product.id,
            name=product.name,
            unit_price=product.price,
            quantity=quantity,
            delivery_day=delivery_day,
            is_combo_item=bool(is_combo_item),
            combo_id=combo_id,
        )
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                product_id=str(product.id),
                quantity=quantity,
                delivery_day=delivery_day,
                combo_id=_key(combo_id),
            )
        )
        return self

    def add_combo(self, combo, delivery_day=None):
        """Add one of every combo item, tagged with the combo's id, as a single change."""
        if not combo.items:
            logger.warning("Ignoring empty combo pack", combo_id=str(combo.id))
            return self

        with atomic_change(self):
            for item in combo.items:
                self._merge_line(
                    product_id=item.product_id,
                    name=item.name,
                    unit_price=item.price,
                    quantity=1,
                    delivery_day=delivery_day,
                    is_combo_item=True,
                    combo_id=combo.id,
                )
            self.updated_at = datetime.now(UTC)

        for item in combo.items:
            self.raise_(
                CartItemAdded(
                    cart_id=str(self.id),
                    product_id=str(item.product_id),
                    quantity=1,
                    delivery_day=delivery_day,
                    combo_id=str(combo.id),
                )
            )
        self.raise_(
            ComboAddedToCart(
                cart_id=str(self.id),
                combo_id=str(combo.id),
                items_count=len(combo.items),
            )
        )
        return self

    def update_quantity(self, product_id, new_quantity, combo_id=None):
        """Set a line's quantity. Values below 1 are clamped to 1, never removed."""
        line = self.find_line(product_id, combo_id)
        if line is None:
            logger.warning("Cart line not found for quantity update", product_id=str(product_id), combo_id=combo_id)
            return self

        if not isinstance(new_quantity, int) or isinstance(new_quantity, bool):
            logger.warning("Ignoring non-integer quantity", product_id=str(product_id), quantity=new_quantity)
            return self

        quantity = max(1, new_quantity)
        previous_quantity = line.quantity
        if quantity == previous_quantity:
            return self

        line.quantity = quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
                combo_id=_key(line.combo_id),
            )
        )
        return self

    def remove_item(self, product_id, combo_id=None):
        """Remove a product's lines. Removing an absent product is a no-op.

        Without a combo id every line for the product goes, standalone and
        combo-sourced alike.
        """
        targets = [
            line
            for line in self.lines
            if str(line.product_id) == str(product_id) and (combo_id is None or _key(line.combo_id) == _key(combo_id))
        ]
        if not targets:
            return self

        for line in targets:
            self.remove_lines(line)
            self.raise_(
                CartItemRemoved(
                    cart_id=str(self.id),
                    product_id=str(line.product_id),
                    quantity=line.quantity,
                    combo_id=_key(line.combo_id),
                )
            )
        self.updated_at = datetime.now(UTC)
        return self

    def clear(self):
        """Remove every line."""
        lines_cleared = len(self.lines)
        if not lines_cleared:
            return self

        for line in list(self.lines):
            self.remove_lines(line)
        self.updated_at = datetime.now(UTC)

        self.raise_(CartCleared(cart_id=str(self.id), lines_cleared=lines_cleared))
        return self

    def drain_events(self):
        """Return the events raised since the last drain and forget them."""
        events = list(self._events)
        self._events.clear()
        return events

    # -------------------------------------------------------------------
    # Serialization for local storage
    # -------------------------------------------------------------------
    def snapshot(self):
        return {
            "cart_id": str(self.id),
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "lines": [line.snapshot() for line in self.lines],
        }

    @classmethod
    def restore(cls, data):
        """Rebuild a cart from a snapshot without raising events."""
        kwargs = {}
        if data.get("cart_id"):
            kwargs["id"] = data["cart_id"]
        if data.get("updated_at"):
            kwargs["updated_at"] = datetime.fromisoformat(data["updated_at"])

        cart = cls(**kwargs)
        for line in data.get("lines", []):
            cart.add_lines(CartLine(**line))
        return cart
