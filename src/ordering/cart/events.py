"""Domain events for the WeeklyCart aggregate.

Together these form the "cart changed" signal that UI badges listen to.
"""

from protean.fields import Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="WeeklyCart")
class CartItemAdded:
    """A product was added to the weekly cart (or its quantity increased)."""

    __version__ = "v1"

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    delivery_day = String()
    combo_id = Identifier()


@ordering.event(part_of="WeeklyCart")
class CartQuantityUpdated:
    """The quantity of a cart line was set to a new value."""

    __version__ = "v1"

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)
    combo_id = Identifier()


@ordering.event(part_of="WeeklyCart")
class CartItemRemoved:
    """A line was removed from the weekly cart."""

    __version__ = "v1"

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    combo_id = Identifier()


@ordering.event(part_of="WeeklyCart")
class ComboAddedToCart:
    """Every item of a combo pack was added to the cart in one step."""

    __version__ = "v1"

    cart_id = Identifier(required=True)
    combo_id = Identifier(required=True)
    items_count = Integer(required=True)


@ordering.event(part_of="WeeklyCart")
class CartCleared:
    """All lines were removed, normally after a successful submission."""

    __version__ = "v1"

    cart_id = Identifier(required=True)
    lines_cleared = Integer(required=True)
