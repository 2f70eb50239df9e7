"""Persistence of the weekly cart in local storage.

Saving is an explicit step, separate from mutating the cart. A failed write
(quota exceeded, read-only disk) never fails the mutation that preceded it:
the store logs a warning and marks itself degraded, and the cart carries on
as a session-only cart.
"""

import json

import structlog
from protean.exceptions import ValidationError

from ordering.cart.cart import WeeklyCart
from ordering.domain import ordering
from shared.storage import StorageWriteError

logger = structlog.get_logger(__name__)

CART_KEY = "cart"


class CartStore:
    def __init__(self, storage, key=CART_KEY):
        self.storage = storage
        self.key = key
        self.degraded = False

    def load(self):
        """Return the persisted cart, or a new empty one.

        Unreadable data is logged and replaced by an empty cart.
        """
        raw = self.storage.get(self.key)
        with ordering.domain_context():
            if not raw:
                return WeeklyCart.create()
            try:
                cart = WeeklyCart.restore(json.loads(raw))
            except (ValueError, KeyError, TypeError, AttributeError, ValidationError) as exc:
                logger.warning("Discarding corrupt persisted cart", key=self.key, error=str(exc))
                return WeeklyCart.create()

        logger.debug("Cart rehydrated", cart_id=str(cart.id), lines=len(cart.lines))
        return cart

    def save(self, cart):
        """Write the cart. Returns False when the write failed."""
        try:
            self.storage.set(self.key, json.dumps(cart.snapshot()))
        except StorageWriteError as exc:
            if not self.degraded:
                logger.warning("Cart could not be persisted, continuing with a session-only cart", error=str(exc))
            self.degraded = True
            return False

        self.degraded = False
        return True

    def discard(self):
        self.storage.remove(self.key)
