"""Repository for the Order aggregate."""

from storefront.domain import storefront
from storefront.ordering.order.order import Order
from storefront.shared.listing import LISTING_LIMIT


@storefront.repository(part_of=Order)
class OrderRepository:
    def all_orders(self) -> list[Order]:
        return self._dao.query.limit(LISTING_LIMIT).all().items

    def for_user(self, user_id: str) -> list[Order]:
        return self._dao.query.filter(user_id=str(user_id)).limit(LISTING_LIMIT).all().items

    def find_by_payment_session(self, payment_session_id: str) -> Order | None:
        if not payment_session_id:
            return None
        return self._dao.query.filter(payment_session_id=payment_session_id).all().first
