"""Repository for the Category aggregate."""

from storefront.catalogue.category.category import Category
from storefront.domain import storefront
from storefront.shared.listing import LISTING_LIMIT


@storefront.repository(part_of=Category)
class CategoryRepository:
    def find_by_slug(self, slug: str) -> Category | None:
        """Return the category with ``slug``, or None when there is none."""
        if not slug:
            return None
        return self._dao.query.filter(slug=slug).all().first

    def list_by_name(self) -> list[Category]:
        categories = self._dao.query.limit(LISTING_LIMIT).all().items
        return sorted(categories, key=lambda c: c.name.lower())

    def count(self) -> int:
        return len(self._dao.query.limit(LISTING_LIMIT).all().items)
