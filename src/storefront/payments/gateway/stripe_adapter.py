"""Stripe hosted checkout adapter.

Talks to Stripe's REST API directly: sessions are created with a
form-encoded POST to /v1/checkout/sessions and looked up with a GET on the
session id. Amounts are sent in the currency's minor unit.
"""

import httpx

from storefront.payments.gateway.port import (
    CheckoutRequest,
    CheckoutSession,
    PaymentGateway,
    PaymentGatewayError,
    SessionStatus,
)
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

SESSIONS_PATH = "/v1/checkout/sessions"


def _to_minor_units(amount: float) -> int:
    return int(round(amount * 100))


def session_form(request: CheckoutRequest) -> dict[str, str]:
    """Flatten a checkout request into Stripe's bracketed form encoding."""
    form = {
        "mode": "payment",
        "success_url": request.success_url,
        "cancel_url": request.cancel_url,
        "metadata[order_id]": request.order_id,
    }
    if request.customer_email:
        form["customer_email"] = request.customer_email

    for index, item in enumerate(request.line_items):
        prefix = f"line_items[{index}]"
        form[f"{prefix}[quantity]"] = str(item.quantity)
        form[f"{prefix}[price_data][currency]"] = request.currency
        form[f"{prefix}[price_data][unit_amount]"] = str(_to_minor_units(item.unit_price))
        form[f"{prefix}[price_data][product_data][name]"] = item.name
        if item.image:
            form[f"{prefix}[price_data][product_data][images][0]"] = item.image

    for key, value in request.shipping_address.items():
        if value:
            form[f"metadata[shipping_{key}]"] = str(value)

    return form


class StripeGateway(PaymentGateway):
    """Production Stripe gateway adapter."""

    def __init__(
        self,
        api_key: str,
        api_base: str = "https://api.stripe.com",
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if not api_key:
            raise ValueError("StripeGateway requires an API key (STRIPE_SECRET_KEY)")
        self.api_key = api_key
        self.api_base = api_base
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(
            base_url=self.api_base,
            timeout=self.timeout,
            headers={"Authorization": f"Bearer {self.api_key}"},
            transport=self.transport,
        )

    def _handle_response(self, response: httpx.Response) -> dict:
        if response.is_success:
            return response.json()

        try:
            message = response.json().get("error", {}).get("message", "Unknown error")
        except ValueError:
            message = response.text or "Unknown error"
        raise PaymentGatewayError(message, status_code=response.status_code)

    def create_checkout_session(self, request: CheckoutRequest) -> CheckoutSession:
        try:
            with self._client() as client:
                response = client.post(SESSIONS_PATH, data=session_form(request))
        except httpx.RequestError as exc:
            logger.warning("stripe_request_failed", operation="create_session", error=str(exc))
            raise PaymentGatewayError(f"Payment provider unreachable: {exc}") from exc

        data = self._handle_response(response)
        return CheckoutSession(session_id=data["id"], url=data["url"])

    def retrieve_session(self, session_id: str) -> SessionStatus:
        try:
            with self._client() as client:
                response = client.get(f"{SESSIONS_PATH}/{session_id}")
        except httpx.RequestError as exc:
            logger.warning("stripe_request_failed", operation="retrieve_session", error=str(exc))
            raise PaymentGatewayError(f"Payment provider unreachable: {exc}") from exc

        data = self._handle_response(response)
        return SessionStatus(
            session_id=data["id"],
            payment_status=data.get("payment_status") or "unpaid",
            order_id=(data.get("metadata") or {}).get("order_id"),
            customer_email=data.get("customer_email") or (data.get("customer_details") or {}).get("email"),
        )
