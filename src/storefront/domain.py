"""Domain initialization and configuration.

A single domain holds customers, the catalogue and ordering: checkout reads the
customer's address, decrements product stock and moves the order forward inside
one Unit of Work, so all three aggregates must share a transaction boundary.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
