"""Payment confirmation for orders: command and handler."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.order.order import Order
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Order")
class ConfirmOrderPayment:
    order_id = Identifier(required=True)
    payment_session_id = String(max_length=255)


@storefront.command_handler(part_of=Order)
class ConfirmOrderPaymentHandler:
    @handle(ConfirmOrderPayment)
    def confirm_payment(self, command):
        """Mark the order paid. Returns the order status after the attempt."""
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        if order.is_paid:
            logger.info("order_already_paid", order_id=str(order.id))
            return order.status

        if not order.mark_paid():
            logger.warning(
                "payment_confirmed_for_inactive_order",
                order_id=str(order.id),
                status=order.status,
                payment_session_id=command.payment_session_id,
            )
            return order.status

        repo.add(order)
        logger.info("order_paid", order_id=str(order.id), total=order.total)
        return order.status
