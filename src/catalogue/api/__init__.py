"""Catalogue domain API package."""

from catalogue.api.routes import combo_router, farmer_router, product_router

__all__ = ["product_router", "farmer_router", "combo_router"]
