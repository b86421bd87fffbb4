"""Storefront domain API package."""

from storefront.api.routes import category_router, gallery_router, product_router, settings_router

__all__ = ["product_router", "category_router", "gallery_router", "settings_router"]
