"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductCreated:
    """A product was added to the catalogue."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    slug: String(required=True)
    price: Float(required=True)
    stock: Integer(required=True)
    category_id: Identifier()
    created_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductDetailsUpdated:
    """One or more product attributes changed. ``changed_fields`` is a JSON list."""

    __version__ = 1

    product_id: Identifier(required=True)
    changed_fields: Text(required=True)
    updated_at: DateTime(required=True)


@storefront.event(part_of="Product")
class StockDecremented:
    """Units were taken out of stock for an order."""

    __version__ = 1

    product_id: Identifier(required=True)
    quantity: Integer(required=True)
    previous_stock: Integer(required=True)
    new_stock: Integer(required=True)
    order_id: Identifier()


@storefront.event(part_of="Product")
class StockRestored:
    """Units taken for an order were put back."""

    __version__ = 1

    product_id: Identifier(required=True)
    quantity: Integer(required=True)
    previous_stock: Integer(required=True)
    new_stock: Integer(required=True)
    order_id: Identifier()
