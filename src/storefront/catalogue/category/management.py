"""Category management: commands and handlers."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.category.category import Category
from storefront.domain import storefront
from storefront.shared.slug import slugify
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Category")
class CreateCategory:
    name: String(required=True, max_length=100)
    slug: String(max_length=120)
    description: Text()
    image_url: String(max_length=500)


@storefront.command(part_of="Category")
class UpdateCategory:
    category_id: Identifier(required=True)
    name: String(max_length=100)
    slug: String(max_length=120)
    description: Text()
    image_url: String(max_length=500)


@storefront.command(part_of="Category")
class DeleteCategory:
    category_id: Identifier(required=True)


def _ensure_slug_available(repo, slug, category_id=None):
    existing = repo.find_by_slug(slug)
    if existing is not None and str(existing.id) != str(category_id):
        raise ValidationError({"slug": [f"Slug '{slug}' is already in use"]})


@storefront.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        repo = current_domain.repository_for(Category)
        slug = command.slug or slugify(command.name)
        _ensure_slug_available(repo, slug)

        category = Category.create(
            name=command.name,
            slug=slug,
            description=command.description,
            image_url=command.image_url,
        )
        repo.add(category)
        return str(category.id)

    @handle(UpdateCategory)
    def update_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        if command.slug:
            _ensure_slug_available(repo, command.slug, category.id)

        category.update_details(
            name=command.name,
            slug=command.slug,
            description=command.description,
            image_url=command.image_url,
        )
        repo.add(category)

    @handle(DeleteCategory)
    def delete_category(self, command):
        from storefront.catalogue.product.product import Product

        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)

        # Products outlive their category; they become uncategorised
        product_repo = current_domain.repository_for(Product)
        detached = 0
        for product in product_repo.in_category(str(category.id)):
            product.detach_from_category()
            product_repo.add(product)
            detached += 1

        repo._dao.delete(category)
        logger.info("category_deleted", category_id=str(category.id), detached_products=detached)
