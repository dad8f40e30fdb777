"""Payment gateway port (abstract interface).

Defines the contract every hosted-checkout adapter implements, so checkout
can switch between FakeGateway (dev/test) and StripeGateway (production)
without touching domain or application code.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


class PaymentGatewayError(Exception):
    """The gateway rejected a request or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


@dataclass(frozen=True)
class LineItem:
    """One line of the hosted checkout page."""

    name: str
    unit_price: float
    quantity: int
    image: str | None = None


@dataclass(frozen=True)
class CheckoutSession:
    """A hosted checkout session the customer is redirected to."""

    session_id: str
    url: str


@dataclass(frozen=True)
class SessionStatus:
    """What the gateway reports about a checkout session."""

    session_id: str
    payment_status: str
    order_id: str | None = None
    customer_email: str | None = None

    @property
    def is_paid(self) -> bool:
        return self.payment_status == "paid"


@dataclass(frozen=True)
class CheckoutRequest:
    """Everything the gateway needs to open a hosted checkout session."""

    order_id: str
    line_items: list[LineItem]
    success_url: str
    cancel_url: str
    currency: str
    customer_email: str | None = None
    shipping_address: dict = field(default_factory=dict)


class PaymentGateway(ABC):
    """Abstract hosted-checkout gateway interface."""

    @abstractmethod
    def create_checkout_session(self, request: CheckoutRequest) -> CheckoutSession:
        """Open a hosted checkout session carrying the order id as metadata."""
        ...

    @abstractmethod
    def retrieve_session(self, session_id: str) -> SessionStatus:
        """Look up the payment status of a previously created session."""
        ...
