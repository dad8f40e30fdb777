"""Back-office dashboard figures."""

from dataclasses import dataclass

from protean.utils.globals import current_domain

from storefront.catalogue.category.category import Category
from storefront.catalogue.product.product import Product
from storefront.identity.users import count_users
from storefront.ordering.order.history import order_totals


@dataclass(frozen=True)
class DashboardStats:
    total_products: int
    total_categories: int
    total_users: int
    total_orders: int
    total_revenue: float
    pending_orders: int


def dashboard_stats() -> DashboardStats:
    orders = order_totals()
    return DashboardStats(
        total_products=current_domain.repository_for(Product).count(),
        total_categories=current_domain.repository_for(Category).count(),
        total_users=count_users(),
        total_orders=orders["total_orders"],
        total_revenue=orders["total_revenue"],
        pending_orders=orders["pending_orders"],
    )
