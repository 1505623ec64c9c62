"""Identity domain API package."""

from identity.api.guards import require_principal
from identity.api.routes import router

__all__ = ["require_principal", "router"]
