"""Checkout orchestration: turns a session's cart into a pending order and a
hosted payment session, and later confirms payment for it.

Each side effect is its own command (own unit of work), sequenced by a saga:

    create_order            undo: cancel the order
    decrement_stock         undo: restore what was taken
    create_payment_session  (nothing to undo)

On success the cart is cleared; on failure it is left as it was. With
compensation disabled (CHECKOUT_COMPENSATE=false) a failed checkout leaves the
order pending and the stock decremented.
"""

import json
from dataclasses import dataclass

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.catalogue.product.stock import DecrementStock, RestoreStock
from storefront.config import CheckoutSettings
from storefront.ordering.cart.cart import ShoppingCart
from storefront.ordering.cart.management import ClearCart
from storefront.ordering.checkout.address import validate_address
from storefront.ordering.checkout.saga import Saga, SagaFailed, SagaStep
from storefront.ordering.order.order import MAX_REASON_LENGTH, Order
from storefront.ordering.order.payment import ConfirmOrderPayment
from storefront.ordering.order.placement import CancelOrder, PlaceOrder, RecordPaymentSession
from storefront.payments.gateway import get_gateway
from storefront.payments.gateway.port import CheckoutRequest, LineItem, PaymentGateway
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CheckoutFailed(SagaFailed):
    """Checkout aborted at ``step``; ``error`` is the original cause."""


@dataclass(frozen=True)
class CheckoutResult:
    order_id: str
    payment_session_id: str
    checkout_url: str
    total: float


@dataclass(frozen=True)
class VerificationResult:
    paid: bool
    status: str
    order_id: str | None = None
    customer_email: str | None = None


class CheckoutService:
    def __init__(self, gateway: PaymentGateway | None = None, settings: CheckoutSettings | None = None) -> None:
        self.gateway = gateway or get_gateway()
        self.settings = settings or CheckoutSettings.from_env()

    # -------------------------------------------------------------------
    # Order placement
    # -------------------------------------------------------------------
    def place_order(
        self,
        user_id: str,
        session_id: str,
        shipping_address: dict,
        customer_email: str | None = None,
    ) -> CheckoutResult:
        if not user_id:
            raise ValidationError({"user_id": ["You must be signed in to check out"]})

        # Validation failures stop here, before any write or gateway call
        address = validate_address(shipping_address)

        cart = current_domain.repository_for(ShoppingCart).find_by_session(session_id)
        if cart is None or cart.is_empty:
            raise ValidationError({"cart": ["Cart is empty"]})

        items = [
            {
                "product_id": str(item.product_id),
                "product_name": item.product_name,
                "product_price": item.unit_price,
                "quantity": item.quantity,
                "image": item.image,
            }
            for item in cart.items
        ]
        context = {
            "user_id": user_id,
            "items": items,
            "address": address,
            "customer_email": customer_email,
            "decremented": [],
        }

        saga = Saga(
            "checkout",
            [
                SagaStep("create_order", self._create_order, self._cancel_order),
                SagaStep("decrement_stock", self._decrement_stock, self._restore_stock),
                SagaStep("create_payment_session", self._create_payment_session),
            ],
            compensate=self.settings.compensate_on_failure,
            failure_cls=CheckoutFailed,
        )

        logger.info("checkout_started", user_id=user_id, session_id=session_id, items=len(items), total=cart.total)
        try:
            saga.run(context)
        except CheckoutFailed as exc:
            logger.error(
                "checkout_failed",
                user_id=user_id,
                order_id=context.get("order_id"),
                step=exc.step,
                error=str(exc.error),
                compensated=self.settings.compensate_on_failure,
                compensation_failures=len(exc.compensation_errors),
            )
            raise

        current_domain.process(ClearCart(session_id=session_id), asynchronous=False)
        logger.info(
            "checkout_completed",
            order_id=context["order_id"],
            payment_session_id=context["session"].session_id,
        )

        return CheckoutResult(
            order_id=context["order_id"],
            payment_session_id=context["session"].session_id,
            checkout_url=context["session"].url,
            total=round(sum(i["product_price"] * i["quantity"] for i in items), 2),
        )

    def _create_order(self, context):
        snapshot = [{k: v for k, v in item.items() if k != "image"} for item in context["items"]]
        context["order_id"] = current_domain.process(
            PlaceOrder(
                user_id=context["user_id"],
                items=json.dumps(snapshot),
                shipping_address=json.dumps(context["address"]),
            ),
            asynchronous=False,
        )

    def _cancel_order(self, context):
        if not context.get("order_id"):
            return

        session = context.get("session")
        if session is not None:
            # The hosted session is still open at the provider and must be expired there
            logger.error(
                "payment_session_orphaned",
                order_id=context["order_id"],
                payment_session_id=session.session_id,
                checkout_url=session.url,
            )

        reason = f"Checkout failed at {context.get('failed_step', 'unknown step')}: {context.get('error', '')}"
        current_domain.process(
            CancelOrder(order_id=context["order_id"], reason=reason[:MAX_REASON_LENGTH]),
            asynchronous=False,
        )

    def _decrement_stock(self, context):
        for item in context["items"]:
            current_domain.process(
                DecrementStock(
                    product_id=item["product_id"],
                    quantity=item["quantity"],
                    order_id=context["order_id"],
                ),
                asynchronous=False,
            )
            context["decremented"].append((item["product_id"], item["quantity"]))

    def _restore_stock(self, context):
        while context["decremented"]:
            product_id, quantity = context["decremented"].pop()
            current_domain.process(
                RestoreStock(product_id=product_id, quantity=quantity, order_id=context.get("order_id")),
                asynchronous=False,
            )

    def _create_payment_session(self, context):
        request = CheckoutRequest(
            order_id=context["order_id"],
            line_items=[
                LineItem(
                    name=item["product_name"],
                    unit_price=item["product_price"],
                    quantity=item["quantity"],
                    image=item["image"],
                )
                for item in context["items"]
            ],
            success_url=self.settings.success_url,
            cancel_url=self.settings.cancel_url,
            currency=self.settings.currency,
            customer_email=context["customer_email"],
            shipping_address=context["address"],
        )
        session = self.gateway.create_checkout_session(request)
        context["session"] = session
        current_domain.process(
            RecordPaymentSession(order_id=context["order_id"], payment_session_id=session.session_id),
            asynchronous=False,
        )

    # -------------------------------------------------------------------
    # Payment verification
    # -------------------------------------------------------------------
    def verify_payment(self, payment_session_id: str) -> VerificationResult:
        if not payment_session_id:
            raise ValidationError({"session_id": ["No session ID provided"]})

        session = self.gateway.retrieve_session(payment_session_id)
        logger.info(
            "payment_session_retrieved",
            payment_session_id=payment_session_id,
            payment_status=session.payment_status,
            order_id=session.order_id,
        )

        if not session.is_paid:
            return VerificationResult(paid=False, status=session.payment_status, order_id=session.order_id)

        # Sessions without order metadata are matched through the recorded session id
        order_id = session.order_id
        if not order_id:
            order = current_domain.repository_for(Order).find_by_payment_session(payment_session_id)
            order_id = str(order.id) if order is not None else None

        status = session.payment_status
        if order_id:
            status = current_domain.process(
                ConfirmOrderPayment(order_id=order_id, payment_session_id=payment_session_id),
                asynchronous=False,
            )
        else:
            logger.warning("paid_session_without_order", payment_session_id=payment_session_id)

        return VerificationResult(
            paid=True,
            status=status,
            order_id=order_id,
            customer_email=session.customer_email,
        )
