"""Order aggregate: the durable record of a purchase once checkout starts.

Items carry a snapshot of product name and price taken from the cart, so the
order total never moves when catalogue prices change later.

Lifecycle:
    PENDING → PAID → SHIPPED → DELIVERED
    PENDING → CANCELLED (checkout compensation)
Administrators may force any status from any status.
"""

import json
import re
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from storefront.domain import storefront
from storefront.ordering.order.events import (
    OrderCancelled,
    OrderPaid,
    OrderPlaced,
    OrderStatusChanged,
    PaymentSessionRecorded,
)

ZIP_CODE_PATTERN = re.compile(r"^\d{5}-?\d{3}$")
MAX_REASON_LENGTH = 500


class OrderStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="Order")
class ShippingAddress:
    """Delivery address captured at checkout. Immutable once on the order."""

    street = String(required=True, max_length=255)
    number = String(required=True, max_length=20)
    complement = String(max_length=255)
    neighborhood = String(required=True, max_length=100)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=2)
    zip_code = String(required=True, max_length=9)

    @invariant.post
    def zip_code_must_be_valid(self):
        if self.zip_code and not ZIP_CODE_PATTERN.match(self.zip_code):
            raise ValidationError({"zip_code": ["Invalid ZIP code"]})

    def to_dict(self):
        return {
            "street": self.street,
            "number": self.number,
            "complement": self.complement,
            "neighborhood": self.neighborhood,
            "city": self.city,
            "state": self.state,
            "zip_code": self.zip_code,
        }


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    product_id = Identifier()  # Product may be deleted later; the snapshot remains
    product_name = String(required=True, max_length=255)
    product_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)

    @property
    def subtotal(self):
        return round(self.product_price * self.quantity, 2)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    user_id = Identifier(required=True)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    items = HasMany(OrderItem)
    shipping_address = ValueObject(ShippingAddress)
    total = Float(default=0.0, min_value=0.0)
    payment_session_id = String(max_length=255)
    cancellation_reason = String(max_length=MAX_REASON_LENGTH)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id, items_data, shipping_address):
        """Create a pending order.

        Args:
            user_id: The customer placing the order.
            items_data: List of dicts with product_id, product_name,
                        product_price, quantity.
            shipping_address: Dict with the ShippingAddress fields.
        """
        if not items_data:
            raise ValidationError({"items": ["An order needs at least one item"]})

        now = datetime.now(UTC)
        items = [
            OrderItem(
                product_id=item.get("product_id"),
                product_name=item["product_name"],
                product_price=item["product_price"],
                quantity=item["quantity"],
            )
            for item in items_data
        ]
        order = cls(
            user_id=user_id,
            status=OrderStatus.PENDING.value,
            items=items,
            shipping_address=ShippingAddress(**shipping_address),
            total=round(sum(i.product_price * i.quantity for i in items), 2),
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                items=json.dumps(items_data),
                item_count=sum(i.quantity for i in items),
                total=order.total,
                placed_at=now,
            )
        )
        return order

    @property
    def is_pending(self):
        return self.status == OrderStatus.PENDING.value

    @property
    def is_paid(self):
        return self.status == OrderStatus.PAID.value

    # -------------------------------------------------------------------
    # Payment
    # -------------------------------------------------------------------
    def record_payment_session(self, payment_session_id):
        if not self.is_pending:
            raise ValidationError({"status": ["A payment session can only be attached to a pending order"]})

        self.payment_session_id = payment_session_id
        self.updated_at = datetime.now(UTC)

        self.raise_(
            PaymentSessionRecorded(
                order_id=str(self.id),
                payment_session_id=payment_session_id,
            )
        )

    def mark_paid(self):
        """Move a pending order to paid.

        Returns True when the status changed. A paid order is left untouched,
        as is an order in any other status.
        """
        if not self.is_pending:
            return False

        now = datetime.now(UTC)
        self.status = OrderStatus.PAID.value
        self.updated_at = now

        self.raise_(
            OrderPaid(
                order_id=str(self.id),
                payment_session_id=self.payment_session_id,
                total=self.total,
                paid_at=now,
            )
        )
        return True

    # -------------------------------------------------------------------
    # Administration
    # -------------------------------------------------------------------
    def change_status(self, new_status):
        """Force the order into ``new_status``, whatever the current one is."""
        valid = {s.value for s in OrderStatus}
        if new_status not in valid:
            raise ValidationError({"status": [f"Status must be one of: {', '.join(sorted(valid))}"]})
        if new_status == self.status:
            return

        previous = self.status
        now = datetime.now(UTC)
        self.status = new_status
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                new_status=new_status,
                changed_at=now,
            )
        )

    def cancel(self, reason):
        if self.status == OrderStatus.CANCELLED.value:
            return
        if not self.is_pending:
            raise ValidationError({"status": [f"Cannot cancel an order that is {self.status}"]})

        now = datetime.now(UTC)
        self.status = OrderStatus.CANCELLED.value
        self.cancellation_reason = reason[:MAX_REASON_LENGTH]
        self.updated_at = now

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                reason=self.cancellation_reason,
                cancelled_at=now,
            )
        )
