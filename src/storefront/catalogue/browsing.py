"""Read-side queries for the public catalogue.

Listing, search and sorting over products, plus the combo seed picker.
"""

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from storefront.catalogue.category.category import Category
from storefront.catalogue.product.product import Product

SORT_OPTIONS = {
    "newest": (lambda p: p.created_at, True),
    "price-asc": (lambda p: p.price, False),
    "price-desc": (lambda p: p.price, True),
    "name": (lambda p: p.name.lower(), False),
}
DEFAULT_SORT = "newest"


def _matches(product: Product, term: str) -> bool:
    haystack = f"{product.name} {product.description or ''}".lower()
    return term in haystack


def list_products(
    category_slug: str | None = None,
    search: str | None = None,
    sort: str | None = None,
) -> list[Product]:
    """Products, optionally narrowed to a category and a search term, in the requested order.

    An unknown category slug yields an empty listing rather than an error.
    """
    sort = sort or DEFAULT_SORT
    if sort not in SORT_OPTIONS:
        raise ValidationError({"sort": [f"Sort must be one of: {', '.join(SORT_OPTIONS)}"]})

    repo = current_domain.repository_for(Product)
    if category_slug:
        category = current_domain.repository_for(Category).find_by_slug(category_slug)
        if category is None:
            return []
        products = repo.in_category(str(category.id))
    else:
        products = repo.all_products()

    term = (search or "").strip().lower()
    if term:
        products = [p for p in products if _matches(p, term)]

    key, reverse = SORT_OPTIONS[sort]
    return sorted(products, key=key, reverse=reverse)


def featured_products() -> list[Product]:
    """New or promotional products, in display order."""
    products = current_domain.repository_for(Product).all_products()
    featured = [p for p in products if p.is_new or p.is_promo]
    return sorted(featured, key=lambda p: (p.display_order, p.name.lower()))


def product_by_slug(slug: str) -> Product:
    product = current_domain.repository_for(Product).find_by_slug(slug)
    if product is None:
        raise ObjectNotFoundError({"slug": [f"Product with slug `{slug}` does not exist"]})
    return product


def combo_by_slug(slug: str) -> Product:
    product = product_by_slug(slug)
    if not product.is_combo:
        raise ObjectNotFoundError({"slug": [f"Combo with slug `{slug}` does not exist"]})
    return product


def eligible_seeds(combo: Product) -> list[Product]:
    """In-stock, non-combo products from the category the combo bundles."""
    category = current_domain.repository_for(Category).find_by_slug(combo.combo_seed_type)
    if category is None:
        return []
    seeds = current_domain.repository_for(Product).in_category(str(category.id))
    return sorted(
        (p for p in seeds if not p.is_combo and p.in_stock),
        key=lambda p: p.name.lower(),
    )


def list_categories() -> list[Category]:
    return current_domain.repository_for(Category).list_by_name()
