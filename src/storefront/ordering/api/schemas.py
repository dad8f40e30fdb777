"""Pydantic request/response schemas for the Ordering API.

These are external contracts, separate from the internal Protean commands.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = Field(ge=1, default=1)


class UpdateCartQuantityRequest(BaseModel):
    quantity: int


class AddComboRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "combo_id": "prod-combo-auto-3",
                    "seed_ids": ["prod-gorilla-auto", "prod-ak47-auto", "prod-northern-lights-auto"],
                }
            ]
        }
    }

    combo_id: str
    seed_ids: list[str]


class CartItemResponse(BaseModel):
    product_id: str
    name: str
    price: float
    image: str | None = None
    stock: int
    quantity: int
    subtotal: float
    selection_note: str | None = None


class CartResponse(BaseModel):
    session_id: str
    items: list[CartItemResponse] = []
    total: float = 0.0
    item_count: int = 0

    @classmethod
    def from_cart(cls, session_id, cart):
        if cart is None:
            return cls(session_id=session_id)
        return cls(
            session_id=session_id,
            items=[
                CartItemResponse(
                    product_id=str(item.product_id),
                    name=item.product_name,
                    price=item.unit_price,
                    image=item.image,
                    stock=item.stock,
                    quantity=item.quantity,
                    subtotal=item.subtotal,
                    selection_note=item.selection_note,
                )
                for item in cart.items
            ],
            total=cart.total,
            item_count=cart.item_count,
        )


# ---------------------------------------------------------------------------
# Checkout
# ---------------------------------------------------------------------------
class CheckoutRequest(BaseModel):
    """Address fields are validated by the checkout itself so every problem
    comes back as one field-keyed error map."""

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "shipping_address": {
                        "street": "Rua das Flores",
                        "number": "123",
                        "complement": "Apto 45",
                        "neighborhood": "Centro",
                        "city": "São Paulo",
                        "state": "SP",
                        "zip_code": "01310-100",
                    },
                    "customer_email": "cliente@example.com",
                }
            ]
        }
    }

    shipping_address: dict = {}
    customer_email: str | None = None


class CheckoutResponse(BaseModel):
    order_id: str
    checkout_url: str
    payment_session_id: str
    total: float


class VerifyPaymentRequest(BaseModel):
    session_id: str


class VerifyPaymentResponse(BaseModel):
    paid: bool
    status: str
    order_id: str | None = None
    customer_email: str | None = None


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class OrderItemResponse(BaseModel):
    product_id: str | None = None
    product_name: str
    product_price: float
    quantity: int
    subtotal: float


class OrderResponse(BaseModel):
    id: str
    user_id: str
    status: str
    total: float
    items: list[OrderItemResponse]
    shipping_address: dict | None = None
    payment_session_id: str | None = None
    cancellation_reason: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_order(cls, order):
        return cls(
            id=str(order.id),
            user_id=str(order.user_id),
            status=order.status,
            total=order.total,
            items=[
                OrderItemResponse(
                    product_id=str(item.product_id) if item.product_id else None,
                    product_name=item.product_name,
                    product_price=item.product_price,
                    quantity=item.quantity,
                    subtotal=item.subtotal,
                )
                for item in order.items
            ],
            shipping_address=order.shipping_address.to_dict() if order.shipping_address else None,
            payment_session_id=order.payment_session_id,
            cancellation_reason=order.cancellation_reason,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class UpdateOrderStatusRequest(BaseModel):
    status: str


class StatusResponse(BaseModel):
    status: str = "ok"
