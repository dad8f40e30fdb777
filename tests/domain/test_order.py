"""Tests for the Order aggregate."""

import pytest
from protean.exceptions import ValidationError

from storefront.ordering.order.events import (
    OrderCancelled,
    OrderPaid,
    OrderPlaced,
    OrderStatusChanged,
    PaymentSessionRecorded,
)
from storefront.ordering.order.order import Order, OrderStatus

ADDRESS = {
    "street": "Rua das Flores",
    "number": "123",
    "complement": None,
    "neighborhood": "Centro",
    "city": "São Paulo",
    "state": "SP",
    "zip_code": "01310-100",
}


def _make_order(items=None):
    items = items or [
        {"product_id": "prod-001", "product_name": "Product A", "product_price": 100.0, "quantity": 2},
    ]
    return Order.create(user_id="user-001", items_data=items, shipping_address=ADDRESS)


class TestCreation:
    def test_starts_pending(self):
        order = _make_order()
        assert order.status == OrderStatus.PENDING.value
        assert order.is_pending

    def test_total_is_sum_of_snapshots(self):
        order = _make_order(
            [
                {"product_id": "prod-001", "product_name": "A", "product_price": 100.0, "quantity": 2},
                {"product_id": "prod-002", "product_name": "B", "product_price": 35.5, "quantity": 3},
            ]
        )
        assert order.total == 306.5
        assert order.total == sum(i.product_price * i.quantity for i in order.items)

    def test_items_snapshot_name_and_price(self):
        order = _make_order()
        item = order.items[0]
        assert item.product_name == "Product A"
        assert item.product_price == 100.0
        assert item.quantity == 2

    def test_shipping_address_recorded(self):
        order = _make_order()
        assert order.shipping_address.city == "São Paulo"
        assert order.shipping_address.to_dict()["zip_code"] == "01310-100"

    def test_needs_items(self):
        with pytest.raises(ValidationError) as exc:
            Order.create(user_id="user-001", items_data=[], shipping_address=ADDRESS)
        assert "items" in exc.value.messages

    def test_invalid_zip_rejected(self):
        with pytest.raises(ValidationError):
            Order.create(
                user_id="user-001",
                items_data=[{"product_name": "A", "product_price": 1.0, "quantity": 1}],
                shipping_address={**ADDRESS, "zip_code": "123"},
            )

    def test_raises_order_placed(self):
        order = _make_order()
        placed = order._events[0]
        assert isinstance(placed, OrderPlaced)
        assert placed.total == 200.0
        assert placed.item_count == 2


class TestPayment:
    def test_record_payment_session(self):
        order = _make_order()
        order.record_payment_session("cs_test_001")
        assert order.payment_session_id == "cs_test_001"
        assert isinstance(order._events[-1], PaymentSessionRecorded)

    def test_mark_paid(self):
        order = _make_order()
        assert order.mark_paid() is True
        assert order.is_paid
        assert isinstance(order._events[-1], OrderPaid)

    def test_mark_paid_twice_is_a_no_op(self):
        order = _make_order()
        order.mark_paid()
        events_before = len(order._events)
        assert order.mark_paid() is False
        assert order.is_paid
        assert len(order._events) == events_before

    def test_cancelled_order_is_not_marked_paid(self):
        order = _make_order()
        order.cancel("Checkout failed")
        assert order.mark_paid() is False
        assert order.status == OrderStatus.CANCELLED.value


class TestCancellation:
    def test_cancel_pending(self):
        order = _make_order()
        order.cancel("Payment session could not be created")
        assert order.status == OrderStatus.CANCELLED.value
        assert order.cancellation_reason == "Payment session could not be created"
        assert isinstance(order._events[-1], OrderCancelled)

    def test_cancel_twice_is_a_no_op(self):
        order = _make_order()
        order.cancel("first")
        events_before = len(order._events)
        order.cancel("second")
        assert order.cancellation_reason == "first"
        assert len(order._events) == events_before

    def test_cannot_cancel_paid_order(self):
        order = _make_order()
        order.mark_paid()
        with pytest.raises(ValidationError):
            order.cancel("too late")


class TestAdministrativeStatus:
    @pytest.mark.parametrize("target", ["paid", "shipped", "delivered", "cancelled"])
    def test_any_status_from_pending(self, target):
        order = _make_order()
        order.change_status(target)
        assert order.status == target

    def test_any_status_from_delivered(self):
        order = _make_order()
        order.change_status("delivered")
        order.change_status("pending")
        assert order.status == "pending"

    def test_records_status_change(self):
        order = _make_order()
        order.change_status("shipped")
        event = order._events[-1]
        assert isinstance(event, OrderStatusChanged)
        assert event.previous_status == "pending"
        assert event.new_status == "shipped"

    def test_same_status_raises_nothing(self):
        order = _make_order()
        events_before = len(order._events)
        order.change_status("pending")
        assert len(order._events) == events_before

    def test_unknown_status_rejected(self):
        order = _make_order()
        with pytest.raises(ValidationError):
            order.change_status("refunded")
