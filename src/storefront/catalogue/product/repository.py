"""Repository for the Product aggregate."""

from storefront.catalogue.product.product import Product
from storefront.domain import storefront
from storefront.shared.listing import LISTING_LIMIT


@storefront.repository(part_of=Product)
class ProductRepository:
    def find_by_slug(self, slug: str) -> Product | None:
        """Return the product with ``slug``, or None when there is none."""
        if not slug:
            return None
        return self._dao.query.filter(slug=slug).all().first

    def all_products(self) -> list[Product]:
        return self._dao.query.limit(LISTING_LIMIT).all().items

    def in_category(self, category_id: str) -> list[Product]:
        return self._dao.query.filter(category_id=category_id).limit(LISTING_LIMIT).all().items

    def count(self) -> int:
        return len(self.all_products())
