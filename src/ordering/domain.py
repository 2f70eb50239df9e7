"""Ordering bounded context — the weekly cart and request submission.

Holds the shopper's weekly cart (persisted to local storage) and the flow
that turns it into a request for the Order Service.
"""

import structlog
from protean.domain import Domain

from shared.logging import configure_logging

configure_logging()

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
