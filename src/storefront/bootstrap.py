"""Domain initialization shared by the session and the mock API."""

import structlog

from catalogue.domain import catalogue as catalogue_domain
from identity.domain import identity as identity_domain
from ordering.domain import ordering as ordering_domain

logger = structlog.get_logger(__name__)

_initialized = False


def init_domains():
    """Register every element with its domain. Safe to call more than once."""
    global _initialized
    if _initialized:
        return

    # Element modules register themselves with their domain on import.
    from catalogue.combo import combo as _combo  # noqa: F401
    from catalogue.farmer import farmer as _farmer  # noqa: F401
    from catalogue.product import product as _product  # noqa: F401
    from identity.shared import phone as _phone  # noqa: F401
    from identity.shopper import shopper as _shopper  # noqa: F401
    from ordering.cart import cart as _cart  # noqa: F401
    from ordering.request import request as _request  # noqa: F401

    domains = (catalogue_domain, identity_domain, ordering_domain)
    for domain in domains:
        domain.init(traverse=False)
    _initialized = True
    logger.info("Domains initialized", domains=[domain.name for domain in domains])
