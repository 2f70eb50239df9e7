"""ShopperSession — everything one shopper's device needs, wired together.

The session is built explicitly and passed around; nothing holds cart or
login state in module globals, so tests and parallel sessions never share
state by accident.

    session = ShopperSession.start(StorefrontConfig.from_env())
    session.auth.send_otp("98765 43210")
    session.auth.verify_otp("123456")
    session.cart.add_item(session.catalogue.get_product("veg_tomato"), 2)
"""

import structlog

from catalogue.source import create_catalogue
from identity.provider import create_identity_provider
from identity.session import AuthSession
from ordering.cart.management import CartManager
from ordering.cart.store import CartStore
from ordering.request.submission import RequestSubmission
from ordering.service import create_order_service
from shared.logging import add_context, clear_context
from shared.storage import open_storage
from storefront.bootstrap import init_domains
from storefront.config import StorefrontConfig

logger = structlog.get_logger(__name__)


class ShopperSession:
    def __init__(self, catalogue, auth, cart, requests, storage, config=None):
        self.catalogue = catalogue
        self.auth = auth
        self.cart = cart
        self.requests = requests
        self.storage = storage
        self.config = config

    @classmethod
    def start(
        cls,
        config=None,
        *,
        storage=None,
        catalogue=None,
        identity_provider=None,
        order_service=None,
        autosave=True,
    ):
        """Build a session and rehydrate login and cart from local storage.

        Collaborators passed in explicitly win over the ones the config
        would build.
        """
        config = config or StorefrontConfig()
        init_domains()

        storage = storage if storage is not None else open_storage(config.storage_path)
        catalogue = catalogue or create_catalogue(config.catalogue_path)
        identity_provider = identity_provider or create_identity_provider(
            config.identity_provider,
            base_url=config.api_base_url,
            timeout=config.request_timeout,
        )
        order_service = order_service or create_order_service(
            config.order_service,
            base_url=config.api_base_url,
            timeout=config.request_timeout,
        )

        auth = AuthSession(identity_provider, storage)
        if auth.restore():
            add_context(user_id=str(auth.shopper.user_id))

        store = CartStore(storage)
        cart = CartManager(store.load(), store, auth, autosave=autosave)
        requests = RequestSubmission(cart, auth, order_service)

        logger.info(
            "Shopper session started",
            authenticated=auth.is_authenticated,
            cart_items=cart.get_item_count(),
            environment=config.environment,
        )
        return cls(catalogue, auth, cart, requests, storage, config)

    def submit_request(self, delivery_day):
        return self.requests.submit_request(delivery_day)

    def list_requests(self):
        return self.requests.list_requests()

    def logout(self):
        """Log out, flushing pending cart changes first. The cart stays on the device."""
        if self.cart.has_unsaved_changes:
            self.cart.flush()
        self.auth.logout()
        clear_context()
