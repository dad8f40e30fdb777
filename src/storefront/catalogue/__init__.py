"""Catalogue: categories, products, stock movements and the about page.

Importing the element modules registers them with the storefront domain.
"""

import storefront.catalogue.about.about  # noqa: F401
import storefront.catalogue.category.category  # noqa: F401
import storefront.catalogue.category.events  # noqa: F401
import storefront.catalogue.category.management  # noqa: F401
import storefront.catalogue.category.repository  # noqa: F401
import storefront.catalogue.product.events  # noqa: F401
import storefront.catalogue.product.management  # noqa: F401
import storefront.catalogue.product.product  # noqa: F401
import storefront.catalogue.product.repository  # noqa: F401
import storefront.catalogue.product.stock  # noqa: F401
