"""Payment gateway factory.

Provides get_gateway() / set_gateway() to swap implementations:
- FakeGateway for development and testing (PAYMENT_GATEWAY=fake, the default)
- StripeGateway for production (PAYMENT_GATEWAY=stripe)
"""

from storefront.config import GatewaySettings
from storefront.payments.gateway.fake_adapter import FakeGateway
from storefront.payments.gateway.port import PaymentGateway, PaymentGatewayError

_current_gateway: PaymentGateway | None = None


def _build_gateway(settings: GatewaySettings) -> PaymentGateway:
    if settings.adapter == "fake":
        return FakeGateway()
    if settings.adapter == "stripe":
        from storefront.payments.gateway.stripe_adapter import StripeGateway

        return StripeGateway(
            api_key=settings.stripe_secret_key,
            api_base=settings.stripe_api_base,
            timeout=settings.timeout,
        )
    raise ValueError(f"Unknown payment gateway adapter: {settings.adapter}")


def get_gateway() -> PaymentGateway:
    """Return the current payment gateway, built from the environment on first use."""
    global _current_gateway
    if _current_gateway is None:
        _current_gateway = _build_gateway(GatewaySettings.from_env())
    return _current_gateway


def set_gateway(gateway: PaymentGateway) -> None:
    """Override the active payment gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    """Reset to the environment-configured gateway."""
    global _current_gateway
    _current_gateway = None


__all__ = ["PaymentGatewayError", "get_gateway", "reset_gateway", "set_gateway"]
