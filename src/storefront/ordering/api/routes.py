"""FastAPI routes for Ordering: cart, checkout, order history and order administration."""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.deps import admin_user_id, cart_session_id, current_user_id
from storefront.ordering.api.schemas import (
    AddComboRequest,
    AddToCartRequest,
    CartResponse,
    CheckoutRequest,
    CheckoutResponse,
    OrderResponse,
    StatusResponse,
    UpdateCartQuantityRequest,
    UpdateOrderStatusRequest,
    VerifyPaymentRequest,
    VerifyPaymentResponse,
)
from storefront.ordering.cart.cart import ShoppingCart
from storefront.ordering.cart.management import (
    AddComboToCart,
    AddToCart,
    ClearCart,
    RemoveFromCart,
    UpdateCartQuantity,
)
from storefront.ordering.checkout.service import CheckoutService
from storefront.ordering.order.history import list_orders, orders_for_user
from storefront.ordering.order.status import UpdateOrderStatus


def _cart_response(session_id: str) -> CartResponse:
    cart = current_domain.repository_for(ShoppingCart).find_by_session(session_id)
    return CartResponse.from_cart(session_id, cart)


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
async def get_cart(session_id: str = Depends(cart_session_id)) -> CartResponse:
    return _cart_response(session_id)


@cart_router.post("/items", status_code=201, response_model=CartResponse)
async def add_to_cart(body: AddToCartRequest, session_id: str = Depends(cart_session_id)) -> CartResponse:
    command = AddToCart(session_id=session_id, product_id=body.product_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return _cart_response(session_id)


@cart_router.put("/items/{product_id}", response_model=CartResponse)
async def update_cart_quantity(
    product_id: str,
    body: UpdateCartQuantityRequest,
    session_id: str = Depends(cart_session_id),
) -> CartResponse:
    command = UpdateCartQuantity(session_id=session_id, product_id=product_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return _cart_response(session_id)


@cart_router.delete("/items/{product_id}", response_model=CartResponse)
async def remove_from_cart(product_id: str, session_id: str = Depends(cart_session_id)) -> CartResponse:
    current_domain.process(RemoveFromCart(session_id=session_id, product_id=product_id), asynchronous=False)
    return _cart_response(session_id)


@cart_router.delete("", response_model=CartResponse)
async def clear_cart(session_id: str = Depends(cart_session_id)) -> CartResponse:
    current_domain.process(ClearCart(session_id=session_id), asynchronous=False)
    return _cart_response(session_id)


@cart_router.post("/combos", status_code=201, response_model=CartResponse)
async def add_combo(body: AddComboRequest, session_id: str = Depends(cart_session_id)) -> CartResponse:
    command = AddComboToCart(session_id=session_id, combo_id=body.combo_id, seed_ids=json.dumps(body.seed_ids))
    current_domain.process(command, asynchronous=False)
    return _cart_response(session_id)


# ---------------------------------------------------------------------------
# Checkout Router
# ---------------------------------------------------------------------------
checkout_router = APIRouter(prefix="/checkout", tags=["checkout"])


@checkout_router.post("", status_code=201, response_model=CheckoutResponse)
def checkout(
    body: CheckoutRequest,
    user_id: str = Depends(current_user_id),
    session_id: str = Depends(cart_session_id),
) -> CheckoutResponse:
    """Create a pending order from the session's cart and open a hosted payment session."""
    result = CheckoutService().place_order(
        user_id=user_id,
        session_id=session_id,
        shipping_address=body.shipping_address,
        customer_email=body.customer_email,
    )
    return CheckoutResponse(
        order_id=result.order_id,
        checkout_url=result.checkout_url,
        payment_session_id=result.payment_session_id,
        total=result.total,
    )


@checkout_router.post("/verify", response_model=VerifyPaymentResponse)
def verify_payment(body: VerifyPaymentRequest) -> VerifyPaymentResponse:
    """Called when the customer returns from the hosted payment page."""
    result = CheckoutService().verify_payment(body.session_id)
    return VerifyPaymentResponse(
        paid=result.paid,
        status=result.status,
        order_id=result.order_id,
        customer_email=result.customer_email,
    )


# ---------------------------------------------------------------------------
# Account Router
# ---------------------------------------------------------------------------
account_order_router = APIRouter(prefix="/account", tags=["account"])


@account_order_router.get("/orders", response_model=list[OrderResponse])
async def my_orders(user_id: str = Depends(current_user_id)) -> list[OrderResponse]:
    return [OrderResponse.from_order(o) for o in orders_for_user(user_id)]


# ---------------------------------------------------------------------------
# Admin Router
# ---------------------------------------------------------------------------
admin_order_router = APIRouter(prefix="/admin/orders", tags=["admin"], dependencies=[Depends(admin_user_id)])


@admin_order_router.get("", response_model=list[OrderResponse])
async def admin_list_orders(status: str | None = None, search: str | None = None) -> list[OrderResponse]:
    return [OrderResponse.from_order(o) for o in list_orders(status=status, search=search)]


@admin_order_router.put("/{order_id}/status", response_model=StatusResponse)
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest) -> StatusResponse:
    result = current_domain.process(UpdateOrderStatus(order_id=order_id, status=body.status), asynchronous=False)
    return StatusResponse(status=result)
