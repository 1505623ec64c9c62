"""Identity bounded context: who is using the storefront.

Identity itself is delegated to an external provider; this context tracks the
session's tri-state and the principal it resolved to.
"""

from protean.domain import Domain

from shared.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

identity = Domain(name="identity")
