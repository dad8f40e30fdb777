"""Stock movements driven by checkout.

Each movement is its own command so the stock check and the write happen in
the same unit of work.
"""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.domain import storefront


@storefront.command(part_of="Product")
class DecrementStock:
    product_id: Identifier(required=True)
    quantity: Integer(required=True, min_value=1)
    order_id: Identifier()


@storefront.command(part_of="Product")
class RestoreStock:
    product_id: Identifier(required=True)
    quantity: Integer(required=True, min_value=1)
    order_id: Identifier()


@storefront.command_handler(part_of=Product)
class StockMovementHandler:
    @handle(DecrementStock)
    def decrement_stock(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.decrement_stock(command.quantity, order_id=command.order_id)
        repo.add(product)
        return product.stock

    @handle(RestoreStock)
    def restore_stock(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.restore_stock(command.quantity, order_id=command.order_id)
        repo.add(product)
        return product.stock
