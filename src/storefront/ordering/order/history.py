"""Order queries for customers and the back-office."""

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.ordering.order.order import Order, OrderStatus


def _newest_first(orders):
    return sorted(orders, key=lambda o: o.created_at, reverse=True)


def orders_for_user(user_id: str) -> list[Order]:
    return _newest_first(current_domain.repository_for(Order).for_user(user_id))


def list_orders(status: str | None = None, search: str | None = None) -> list[Order]:
    """All orders, newest first, optionally narrowed by status and an id fragment."""
    if status and status not in {s.value for s in OrderStatus}:
        raise ValidationError({"status": [f"Status must be one of: {', '.join(s.value for s in OrderStatus)}"]})

    orders = current_domain.repository_for(Order).all_orders()
    if status:
        orders = [o for o in orders if o.status == status]

    term = (search or "").strip().lower()
    if term:
        orders = [o for o in orders if term in str(o.id).lower()]

    return _newest_first(orders)


def order_totals() -> dict:
    """Order count, revenue and pending count across all orders."""
    orders = current_domain.repository_for(Order).all_orders()
    return {
        "total_orders": len(orders),
        "total_revenue": round(sum(o.total or 0.0 for o in orders), 2),
        "pending_orders": sum(1 for o in orders if o.is_pending),
    }
