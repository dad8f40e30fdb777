"""Shopping Cart aggregate: the per-session selection of products before checkout.

The cart keeps a snapshot of each product (name, price, image, stock) taken
when it was last added, and is the source of truth for totals until an order
is created from it. Quantities never exceed the snapshot stock.
"""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.ordering.cart.events import (
    CartCleared,
    CartItemAdded,
    CartItemRemoved,
    CartQuantityUpdated,
)


@storefront.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    unit_price = Float(required=True, min_value=0.0)
    image = String(max_length=500)
    stock = Integer(required=True, min_value=0)
    quantity = Integer(required=True, min_value=1)
    selection_note = Text()  # e.g. the seeds picked for a combo
    added_at = DateTime()

    @property
    def subtotal(self):
        return round(self.unit_price * self.quantity, 2)


@storefront.aggregate
class ShoppingCart:
    session_id = String(required=True, max_length=255, unique=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def quantities_must_fit_in_stock(self):
        for item in self.items:
            if item.quantity > item.stock:
                raise ValidationError(
                    {"quantity": [f"Only {item.stock} units of '{item.product_name}' are available"]}
                )

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, session_id):
        now = datetime.now(UTC)
        return cls(session_id=session_id, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def find_item(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    @property
    def total(self):
        return round(sum(item.unit_price * item.quantity for item in self.items), 2)

    @property
    def item_count(self):
        return sum(item.quantity for item in self.items)

    @property
    def is_empty(self):
        return not self.items

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product_id, name, price, stock, quantity=1, image=None, selection_note=None):
        """Add a product, or top up the existing entry for it.

        The snapshot is refreshed from the given product details and the
        resulting quantity is clipped to the available stock.
        """
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})
        if stock <= 0:
            raise ValidationError({"product_id": [f"'{name}' is out of stock"]})

        now = datetime.now(UTC)
        existing = self.find_item(product_id)

        if existing:
            new_quantity = min(existing.quantity + quantity, stock)
            with atomic_change(self):
                existing.product_name = name
                existing.unit_price = price
                existing.image = image
                existing.stock = stock
                existing.quantity = new_quantity
                if selection_note is not None:
                    existing.selection_note = selection_note
        else:
            new_quantity = min(quantity, stock)
            self.add_items(
                CartItem(
                    product_id=product_id,
                    product_name=name,
                    unit_price=price,
                    image=image,
                    stock=stock,
                    quantity=new_quantity,
                    selection_note=selection_note,
                    added_at=now,
                )
            )

        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                product_id=str(product_id),
                quantity=quantity,
                new_quantity=new_quantity,
            )
        )
        return new_quantity

    def update_quantity(self, product_id, quantity, stock=None):
        """Set an entry's quantity. Zero or less removes the entry.

        ``stock`` is the product's current stock; when given it replaces the
        snapshot before the quantity is clipped to it.
        """
        item = self.find_item(product_id)
        if item is None:
            raise ValidationError({"product_id": ["Item not found in cart"]})

        if quantity <= 0:
            self.remove_item(product_id)
            return 0

        if stock is not None and stock <= 0:
            raise ValidationError({"product_id": [f"'{item.product_name}' is out of stock"]})

        previous_quantity = item.quantity
        with atomic_change(self):
            if stock is not None:
                item.stock = stock
            item.quantity = min(quantity, item.stock)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=item.quantity,
            )
        )
        return item.quantity

    def remove_item(self, product_id):
        item = self.find_item(product_id)
        if item is None:
            raise ValidationError({"product_id": ["Item not found in cart"]})

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                product_id=str(product_id),
            )
        )

    def clear(self):
        removed = len(self.items)
        for item in list(self.items):
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                session_id=self.session_id,
                items_removed=removed,
            )
        )
