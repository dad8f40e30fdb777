"""Identity API package."""

from storefront.identity.api.routes import account_profile_router, admin_user_router

__all__ = ["account_profile_router", "admin_user_router"]
