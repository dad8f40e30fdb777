"""Order placement and its compensations: commands and handler."""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.order.order import MAX_REASON_LENGTH, Order


@storefront.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON: [{product_id, product_name, product_price, quantity}]
    shipping_address = Text(required=True)  # JSON object


@storefront.command(part_of="Order")
class RecordPaymentSession:
    order_id = Identifier(required=True)
    payment_session_id = String(required=True, max_length=255)


@storefront.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    reason = String(required=True, max_length=MAX_REASON_LENGTH)


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        try:
            items = json.loads(command.items)
            address = json.loads(command.shipping_address)
        except json.JSONDecodeError:
            raise ValidationError({"order": ["Items and shipping address must be valid JSON"]}) from None

        order = Order.create(
            user_id=command.user_id,
            items_data=items,
            shipping_address=address,
        )
        current_domain.repository_for(Order).add(order)
        return str(order.id)

    @handle(RecordPaymentSession)
    def record_payment_session(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.record_payment_session(command.payment_session_id)
        repo.add(order)

    @handle(CancelOrder)
    def cancel_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.cancel(command.reason)
        repo.add(order)
