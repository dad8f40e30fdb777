"""Catalogue API package."""

from storefront.catalogue.api.routes import admin_catalogue_router, catalogue_router

__all__ = ["catalogue_router", "admin_catalogue_router"]
