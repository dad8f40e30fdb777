"""Ordering API package."""

from storefront.ordering.api.routes import account_order_router, admin_order_router, cart_router, checkout_router

__all__ = ["cart_router", "checkout_router", "account_order_router", "admin_order_router"]
