"""Category aggregate root for grouping products in the catalogue."""

from datetime import datetime

from protean import invariant
from protean.fields import DateTime, String, Text

from storefront.domain import storefront
from storefront.shared.slug import check_slug, slugify


@storefront.aggregate
class Category:
    """A flat grouping of products, addressed publicly by its slug.

    Combo products refer to a category by slug (``combo_seed_type``) to decide
    which seeds a customer may pick for the bundle.
    """

    name: String(required=True, max_length=100)
    slug: String(required=True, max_length=120)
    description: Text()
    image_url: String(max_length=500)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def slug_must_be_url_safe(self):
        check_slug(self.slug)

    @classmethod
    def create(cls, name, slug=None, description=None, image_url=None):
        from storefront.catalogue.category.events import CategoryCreated

        now = datetime.now()
        category = cls(
            name=name,
            slug=slug or slugify(name),
            description=description,
            image_url=image_url,
            created_at=now,
            updated_at=now,
        )
        category.raise_(
            CategoryCreated(
                category_id=category.id,
                name=category.name,
                slug=category.slug,
                created_at=now,
            )
        )
        return category

    def update_details(self, name=None, slug=None, description=None, image_url=None):
        from storefront.catalogue.category.events import CategoryDetailsUpdated

        if name is not None:
            self.name = name
        if slug is not None:
            self.slug = slug
        if description is not None:
            self.description = description
        if image_url is not None:
            self.image_url = image_url

        self.updated_at = datetime.now()

        self.raise_(
            CategoryDetailsUpdated(
                category_id=self.id,
                name=self.name,
                slug=self.slug,
                updated_at=self.updated_at,
            )
        )
