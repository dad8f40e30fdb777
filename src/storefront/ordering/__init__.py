"""Ordering: session carts, orders and checkout.

Importing the element modules registers them with the storefront domain.
"""

import storefront.ordering.cart.cart  # noqa: F401
import storefront.ordering.cart.events  # noqa: F401
import storefront.ordering.cart.management  # noqa: F401
import storefront.ordering.cart.repository  # noqa: F401
import storefront.ordering.order.events  # noqa: F401
import storefront.ordering.order.order  # noqa: F401
import storefront.ordering.order.payment  # noqa: F401
import storefront.ordering.order.placement  # noqa: F401
import storefront.ordering.order.repository  # noqa: F401
import storefront.ordering.order.status  # noqa: F401
