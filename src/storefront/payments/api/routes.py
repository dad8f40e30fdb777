"""FastAPI routes for Payments: runtime control of the fake gateway."""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from storefront.config import is_production
from storefront.payments.gateway import get_gateway
from storefront.payments.gateway.fake_adapter import FakeGateway

payment_router = APIRouter(prefix="/payments", tags=["payments"])


class ConfigureGatewayRequest(BaseModel):
    should_succeed: bool = True
    failure_reason: str = "Payment provider unavailable"
    payment_status: str = "paid"


class GatewayConfigResponse(BaseModel):
    gateway: str
    should_succeed: bool
    failure_reason: str
    payment_status: str


@payment_router.post("/gateway/configure", response_model=GatewayConfigResponse)
async def configure_gateway(body: ConfigureGatewayRequest) -> GatewayConfigResponse:
    """Configure the FakeGateway behavior (non-production only).

    Toggles whether session creation succeeds and which payment status
    retrieved sessions report, for manual checkout testing.
    """
    if is_production():
        raise HTTPException(status_code=403, detail="Gateway configuration not available in production")

    gateway = get_gateway()
    if not isinstance(gateway, FakeGateway):
        raise HTTPException(status_code=400, detail="Gateway configuration only available for FakeGateway")

    gateway.configure(
        should_succeed=body.should_succeed,
        failure_reason=body.failure_reason,
        payment_status=body.payment_status,
    )
    return GatewayConfigResponse(
        gateway=type(gateway).__name__,
        should_succeed=gateway.should_succeed,
        failure_reason=gateway.failure_reason,
        payment_status=gateway.payment_status,
    )
