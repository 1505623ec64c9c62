"""Ordering bounded context: the shopping cart, checkout and placed orders.

The cart lives on this device only; orders are written through to the shared
object store and mirrored in memory.
"""

from protean.domain import Domain

from shared.utils.logging import configure_logging, get_logger

configure_logging()

ordering = Domain(name="ordering")

logger = get_logger(__name__)
