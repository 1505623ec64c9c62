"""Catalogue domain API package."""

from catalogue.api.routes import product_router, seller_router

__all__ = ["product_router", "seller_router"]
