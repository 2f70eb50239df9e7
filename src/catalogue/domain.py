"""Catalogue bounded context — products, farmers and combo packs.

The catalogue is a read-only feed loaded once at startup. Nothing in this
context mutates after load; other contexts reference products by id only.
"""

from protean.domain import Domain

from shared.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
catalogue = Domain(name="catalogue")
