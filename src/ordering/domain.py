"""Ordering bounded context — order lifecycle and reservation consistency.

Owns the Order aggregate, the commands that mutate it, and the coordination
with the inventory reservation service and the payment processor.
"""

from protean.domain import Domain

from ordering.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
ordering = Domain(name="ordering")
logger.debug("Domain created", domain=ordering.name)
