"""Runtime settings read from the environment.

Persistence, brokers and event processing are configured in ``domain.toml``;
the values here cover what Protean does not own: payment gateway selection,
redirect URLs and checkout policy.
"""

import os
from dataclasses import dataclass

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def is_production() -> bool:
    return os.environ.get("PROTEAN_ENV") == "production"


@dataclass(frozen=True)
class CheckoutSettings:
    """Checkout policy and hosted-payment redirect configuration."""

    storefront_url: str = "http://localhost:5173"
    currency: str = "brl"
    compensate_on_failure: bool = True

    @property
    def success_url(self) -> str:
        # The gateway substitutes {CHECKOUT_SESSION_ID} on redirect
        return f"{self.storefront_url}/checkout/sucesso?session_id={{CHECKOUT_SESSION_ID}}"

    @property
    def cancel_url(self) -> str:
        return f"{self.storefront_url}/carrinho"

    @classmethod
    def from_env(cls) -> "CheckoutSettings":
        return cls(
            storefront_url=os.environ.get("STOREFRONT_URL", cls.storefront_url).rstrip("/"),
            currency=os.environ.get("CHECKOUT_CURRENCY", cls.currency).lower(),
            compensate_on_failure=_env_flag("CHECKOUT_COMPENSATE", cls.compensate_on_failure),
        )


@dataclass(frozen=True)
class GatewaySettings:
    """Payment gateway adapter selection and credentials."""

    adapter: str = "fake"
    stripe_secret_key: str = ""
    stripe_api_base: str = "https://api.stripe.com"
    timeout: float = 10.0

    @classmethod
    def from_env(cls) -> "GatewaySettings":
        return cls(
            adapter=os.environ.get("PAYMENT_GATEWAY", cls.adapter).lower(),
            stripe_secret_key=os.environ.get("STRIPE_SECRET_KEY", ""),
            stripe_api_base=os.environ.get("STRIPE_API_BASE", cls.stripe_api_base).rstrip("/"),
            timeout=float(os.environ.get("GATEWAY_TIMEOUT", cls.timeout)),
        )
