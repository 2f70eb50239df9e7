"""Cart management — the shopper-facing entry point for cart changes.

CartManager checks the auth session before every change, applies it to the
WeeklyCart inside the ordering domain context, hands the raised events to
listeners and then flushes the cart to its store (immediately with
``autosave=True``, or when ``flush()`` is called).
"""

import structlog

from ordering.domain import ordering

logger = structlog.get_logger(__name__)


class CartManager:
    def __init__(self, cart, store, auth, autosave=True):
        self.cart = cart
        self.store = store
        self.auth = auth
        self.autosave = autosave
        self.cart_changed = False
        self._dirty = False
        self._listeners = []

    # -------------------------------------------------------------------
    # Change notification
    # -------------------------------------------------------------------
    def add_listener(self, listener):
        """Register a callable invoked with each event the cart raises."""
        self._listeners.append(listener)

    def remove_listener(self, listener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def acknowledge_change(self):
        """Reset the transient cart-changed flag once the UI has reacted to it."""
        self.cart_changed = False

    def _apply(self, mutation, *args, **kwargs):
        self.auth.require_authenticated()

        with ordering.domain_context():
            mutation(*args, **kwargs)

        events = self.cart.drain_events()
        if not events:
            return self.cart

        self.cart_changed = True
        self._dirty = True
        for event in events:
            for listener in self._listeners:
                listener(event)

        if self.autosave:
            self.flush()
        return self.cart

    # -------------------------------------------------------------------
    # Cart operations
    # -------------------------------------------------------------------
    def add_item(self, product, quantity=1, delivery_day=None, is_combo_item=False, combo_id=None):
        return self._apply(
            self.cart.add_item,
            product,
            quantity=quantity,
            delivery_day=delivery_day,
            is_combo_item=is_combo_item,
            combo_id=combo_id,
        )

    def add_combo(self, combo, delivery_day=None):
        return self._apply(self.cart.add_combo, combo, delivery_day=delivery_day)

    def update_quantity(self, product_id, new_quantity, combo_id=None):
        return self._apply(self.cart.update_quantity, product_id, new_quantity, combo_id=combo_id)

    def remove_item(self, product_id, combo_id=None):
        return self._apply(self.cart.remove_item, product_id, combo_id=combo_id)

    def clear(self):
        return self._apply(self.cart.clear)

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    def get_item_count(self):
        return self.cart.get_item_count()

    def get_cart_total(self):
        return self.cart.get_cart_total()

    def get_item_quantity(self, product_id):
        return self.cart.get_item_quantity(product_id)

    # -------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------
    @property
    def has_unsaved_changes(self):
        return self._dirty

    def flush(self):
        """Persist the cart. A failed write leaves the changes marked unsaved."""
        if self.store.save(self.cart):
            self._dirty = False
            return True
        logger.info("Cart kept in memory only", cart_id=str(self.cart.id))
        return False
