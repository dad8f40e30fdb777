"""Configurable fake payment gateway for development and testing.

Simulates hosted checkout without external calls. It can be told to fail
session creation, and to report sessions as paid or unpaid on retrieval,
either at runtime through /payments/gateway/configure or directly in tests.
"""

from uuid import uuid4

from storefront.payments.gateway.port import (
    CheckoutRequest,
    CheckoutSession,
    PaymentGateway,
    PaymentGatewayError,
    SessionStatus,
)

FAKE_CHECKOUT_BASE_URL = "https://checkout.fake.local/pay"


class FakeGateway(PaymentGateway):
    """Configurable fake hosted-checkout gateway."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Payment provider unavailable"
        self.payment_status: str = "paid"
        self.sessions: dict[str, CheckoutRequest] = {}
        self.calls: list[dict] = []

    def configure(
        self,
        should_succeed: bool = True,
        failure_reason: str = "Payment provider unavailable",
        payment_status: str = "paid",
    ) -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.payment_status = payment_status

    def create_checkout_session(self, request: CheckoutRequest) -> CheckoutSession:
        self.calls.append({"method": "create_checkout_session", "request": request})

        if not self.should_succeed:
            raise PaymentGatewayError(self.failure_reason)

        session_id = f"cs_fake_{uuid4().hex[:16]}"
        self.sessions[session_id] = request
        return CheckoutSession(session_id=session_id, url=f"{FAKE_CHECKOUT_BASE_URL}/{session_id}")

    def retrieve_session(self, session_id: str) -> SessionStatus:
        self.calls.append({"method": "retrieve_session", "session_id": session_id})

        request = self.sessions.get(session_id)
        if request is None:
            raise PaymentGatewayError(f"No such checkout session: {session_id}", status_code=404)

        return SessionStatus(
            session_id=session_id,
            payment_status=self.payment_status,
            order_id=request.order_id,
            customer_email=request.customer_email,
        )
