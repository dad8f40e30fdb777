"""Repository for the ShoppingCart aggregate."""

from storefront.domain import storefront
from storefront.ordering.cart.cart import ShoppingCart


@storefront.repository(part_of=ShoppingCart)
class ShoppingCartRepository:
    def find_by_session(self, session_id: str) -> ShoppingCart | None:
        """Return the cart for a client session, or None if it was never used."""
        if not session_id:
            return None
        return self._dao.query.filter(session_id=session_id).all().first

    def for_session(self, session_id: str) -> ShoppingCart:
        """Return the session's cart, starting an empty one on first use."""
        return self.find_by_session(session_id) or ShoppingCart.create(session_id=session_id)
