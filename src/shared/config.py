"""Storefront configuration, loaded from the environment and `.env`."""

import json
from enum import Enum

from pydantic_settings import BaseSettings


class Backend(Enum):
    """Which family of collaborator adapters the storefront is wired with."""

    MEMORY = "memory"
    SUPABASE = "supabase"


class Settings(BaseSettings):
    """Storefront settings."""

    STOREFRONT_BACKEND: str = Backend.MEMORY.value

    # Managed backend (database, auth and file storage)
    SUPABASE_URL: str = ""
    SUPABASE_ANON_KEY: str = ""
    SUPABASE_STORAGE_BUCKET: str = "product-images"

    # Browser-local storage analogue for the cart
    LOCAL_STORE_DIR: str = ".storefront"

    # Seller contact used by new-order notifications
    SELLER_EMAIL: str = "seller@example.com"
    SELLER_WHATSAPP: str = "+10000000000"

    # Product description helper
    ANTHROPIC_API_KEY: str = ""
    CLAUDE_MODEL: str = "claude-haiku-4-5-20251001"

    # Comma-separated string or JSON array
    ALLOWED_ORIGINS: str = "http://localhost:3000"

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def backend(self) -> Backend:
        return Backend(self.STOREFRONT_BACKEND)

    def get_allowed_origins(self) -> list[str]:
        """Parse ALLOWED_ORIGINS into a list of origins."""
        if not self.ALLOWED_ORIGINS:
            return []

        if self.ALLOWED_ORIGINS.lstrip().startswith("["):
            return [str(origin) for origin in json.loads(self.ALLOWED_ORIGINS)]

        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]
