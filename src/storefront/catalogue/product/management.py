"""Product management: creation, partial updates and deletion."""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import DEFAULT_COMBO_QUANTITY, Product
from storefront.domain import storefront
from storefront.shared.slug import slugify
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Product")
class CreateProduct:
    name: String(required=True, max_length=255)
    slug: String(max_length=255)
    description: Text()
    price: Float(required=True, min_value=0.01)
    original_price: Float()
    category_id: Identifier()
    images: Text()  # JSON array of URLs
    stock: Integer(default=0)
    is_new: Boolean(default=False)
    is_promo: Boolean(default=False)
    genetics: String(max_length=100)
    flowering_time: String(max_length=100)
    thc_level: String(max_length=50)
    cbd_level: String(max_length=50)
    yield_info: String(max_length=100)
    is_combo: Boolean(default=False)
    combo_seed_type: String(max_length=120)
    combo_quantity: Integer(default=DEFAULT_COMBO_QUANTITY)
    display_order: Integer(default=0)


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    changes: Text(required=True)  # JSON object; null values clear the field


@storefront.command(part_of="Product")
class DeleteProduct:
    product_id: Identifier(required=True)


def _ensure_slug_available(repo, slug, product_id=None):
    existing = repo.find_by_slug(slug)
    if existing is not None and str(existing.id) != str(product_id):
        raise ValidationError({"slug": [f"Slug '{slug}' is already in use"]})


def _ensure_category_exists(category_id):
    if category_id:
        from storefront.catalogue.category.category import Category

        current_domain.repository_for(Category).get(category_id)


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        repo = current_domain.repository_for(Product)
        slug = command.slug or slugify(command.name)
        _ensure_slug_available(repo, slug)
        _ensure_category_exists(command.category_id)

        images = None
        if command.images:
            try:
                images = json.loads(command.images)
            except json.JSONDecodeError:
                raise ValidationError({"images": ["Images must be a JSON array of URLs"]}) from None

        product = Product.create(
            name=command.name,
            slug=slug,
            description=command.description,
            price=command.price,
            original_price=command.original_price,
            category_id=command.category_id,
            images=images,
            stock=command.stock,
            is_new=command.is_new,
            is_promo=command.is_promo,
            genetics=command.genetics,
            flowering_time=command.flowering_time,
            thc_level=command.thc_level,
            cbd_level=command.cbd_level,
            yield_info=command.yield_info,
            is_combo=command.is_combo,
            combo_seed_type=command.combo_seed_type,
            combo_quantity=command.combo_quantity,
            display_order=command.display_order,
        )
        repo.add(product)
        logger.info("product_created", product_id=str(product.id), slug=product.slug)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        try:
            changes = json.loads(command.changes)
        except json.JSONDecodeError:
            raise ValidationError({"changes": ["Changes must be a JSON object"]}) from None
        if not isinstance(changes, dict):
            raise ValidationError({"changes": ["Changes must be a JSON object"]})

        if changes.get("slug"):
            _ensure_slug_available(repo, changes["slug"], product.id)
        if "category_id" in changes:
            _ensure_category_exists(changes["category_id"])

        product.update_details(**changes)
        repo.add(product)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        repo._dao.delete(product)
        logger.info("product_deleted", product_id=str(product.id))
