"""Domain initialization and configuration.

A single Protean domain composes the whole storefront: catalogue, identity
(profiles and roles), ordering (cart, orders, checkout) and payments.
PROTEAN_ENV selects the configuration overlay from ``domain.toml``.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
