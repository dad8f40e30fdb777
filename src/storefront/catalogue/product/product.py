"""Product aggregate root."""

import json
from datetime import datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.shared.slug import check_slug, slugify

DEFAULT_COMBO_QUANTITY = 3

# Attributes an administrator may change through ``update_details``
EDITABLE_FIELDS = (
    "name",
    "slug",
    "description",
    "price",
    "original_price",
    "category_id",
    "images",
    "stock",
    "is_new",
    "is_promo",
    "genetics",
    "flowering_time",
    "thc_level",
    "cbd_level",
    "yield_info",
    "is_combo",
    "combo_seed_type",
    "combo_quantity",
    "display_order",
)


def _dump_images(images):
    if images is None:
        return None
    if isinstance(images, str):
        return images
    return json.dumps(list(images))


@storefront.aggregate
class Product:
    """A sellable item: a single seed variety or a combo bundle of seeds.

    ``images`` holds a JSON array of URLs; the first one is the primary image.
    ``stock`` is mutated by checkout through ``decrement_stock`` and
    ``restore_stock`` only, both of which refuse to take it below zero.
    """

    name: String(required=True, max_length=255)
    slug: String(required=True, max_length=255)
    description: Text()
    price: Float(required=True, min_value=0.01)
    original_price: Float(min_value=0.0)
    category_id: Identifier()
    images: Text()
    stock: Integer(default=0, min_value=0)
    is_new: Boolean(default=False)
    is_promo: Boolean(default=False)
    genetics: String(max_length=100)
    flowering_time: String(max_length=100)
    thc_level: String(max_length=50)
    cbd_level: String(max_length=50)
    yield_info: String(max_length=100)
    is_combo: Boolean(default=False)
    combo_seed_type: String(max_length=120)
    combo_quantity: Integer(default=DEFAULT_COMBO_QUANTITY, min_value=1)
    display_order: Integer(default=0)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def slug_must_be_url_safe(self):
        check_slug(self.slug)

    @invariant.post
    def combo_must_name_its_seed_category(self):
        if self.is_combo and not self.combo_seed_type:
            raise ValidationError({"combo_seed_type": ["Combo products must declare the seed category they bundle"]})

    @invariant.post
    def images_must_be_a_list_of_urls(self):
        if not self.images:
            return
        try:
            images = json.loads(self.images)
        except (json.JSONDecodeError, TypeError):
            raise ValidationError({"images": ["Images must be a JSON array of URLs"]}) from None
        if not isinstance(images, list) or not all(isinstance(url, str) for url in images):
            raise ValidationError({"images": ["Images must be a JSON array of URLs"]})

    @classmethod
    def create(
        cls,
        name,
        price,
        slug=None,
        description=None,
        original_price=None,
        category_id=None,
        images=None,
        stock=0,
        is_new=False,
        is_promo=False,
        genetics=None,
        flowering_time=None,
        thc_level=None,
        cbd_level=None,
        yield_info=None,
        is_combo=False,
        combo_seed_type=None,
        combo_quantity=DEFAULT_COMBO_QUANTITY,
        display_order=0,
    ):
        from storefront.catalogue.product.events import ProductCreated

        now = datetime.now()
        product = cls(
            name=name,
            slug=slug or slugify(name),
            description=description,
            price=price,
            original_price=original_price,
            category_id=category_id,
            images=_dump_images(images),
            stock=stock,
            is_new=is_new,
            is_promo=is_promo,
            genetics=genetics,
            flowering_time=flowering_time,
            thc_level=thc_level,
            cbd_level=cbd_level,
            yield_info=yield_info,
            is_combo=is_combo,
            combo_seed_type=combo_seed_type,
            combo_quantity=combo_quantity or DEFAULT_COMBO_QUANTITY,
            display_order=display_order,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                name=product.name,
                slug=product.slug,
                price=product.price,
                stock=product.stock,
                category_id=category_id,
                created_at=now,
            )
        )
        return product

    def update_details(self, **changes):
        """Apply a partial update. A key mapped to None clears that attribute."""
        from storefront.catalogue.product.events import ProductDetailsUpdated

        unknown = sorted(set(changes) - set(EDITABLE_FIELDS))
        if unknown:
            raise ValidationError({"changes": [f"Unknown product fields: {', '.join(unknown)}"]})
        if not changes:
            return

        if "images" in changes:
            changes["images"] = _dump_images(changes["images"])
        if "combo_quantity" in changes and changes["combo_quantity"] is None:
            changes["combo_quantity"] = DEFAULT_COMBO_QUANTITY

        with atomic_change(self):
            for field_name, value in changes.items():
                setattr(self, field_name, value)
            self.updated_at = datetime.now()

        self.raise_(
            ProductDetailsUpdated(
                product_id=self.id,
                changed_fields=json.dumps(sorted(changes)),
                updated_at=self.updated_at,
            )
        )

    def detach_from_category(self):
        self.update_details(category_id=None)

    def decrement_stock(self, quantity, order_id=None):
        """Take ``quantity`` units out of stock, refusing to oversell."""
        from storefront.catalogue.product.events import StockDecremented

        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})
        if self.stock < quantity:
            raise ValidationError(
                {"stock": [f"Insufficient stock for '{self.name}': requested {quantity}, available {self.stock}"]}
            )

        previous = self.stock
        self.stock = previous - quantity
        self.updated_at = datetime.now()

        self.raise_(
            StockDecremented(
                product_id=self.id,
                quantity=quantity,
                previous_stock=previous,
                new_stock=self.stock,
                order_id=order_id,
            )
        )

    def restore_stock(self, quantity, order_id=None):
        from storefront.catalogue.product.events import StockRestored

        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        previous = self.stock
        self.stock = previous + quantity
        self.updated_at = datetime.now()

        self.raise_(
            StockRestored(
                product_id=self.id,
                quantity=quantity,
                previous_stock=previous,
                new_stock=self.stock,
                order_id=order_id,
            )
        )

    @property
    def image_list(self) -> list[str]:
        return json.loads(self.images) if self.images else []

    @property
    def primary_image(self) -> str | None:
        images = self.image_list
        return images[0] if images else None

    @property
    def in_stock(self) -> bool:
        return self.stock > 0

    @property
    def has_discount(self) -> bool:
        return bool(self.original_price) and self.original_price > self.price

    @property
    def discount_percent(self) -> int:
        if not self.has_discount:
            return 0
        return round((1 - self.price / self.original_price) * 100)
