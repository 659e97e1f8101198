"""Repository for the ShoppingCart aggregate."""

from protean.exceptions import ObjectNotFoundError

from storefront.cart.cart import ShoppingCart
from storefront.domain import storefront


@storefront.repository(part_of=ShoppingCart)
class ShoppingCartRepository:
    def for_user(self, user_id) -> ShoppingCart | None:
        """The user's cart, or None if they have never added anything."""
        carts = self._dao.query.filter(user_id=str(user_id)).all().items
        return carts[0] if carts else None

    def get_for_user(self, user_id) -> ShoppingCart:
        cart = self.for_user(user_id)
        if cart is None:
            raise ObjectNotFoundError({"cart": [f"Cart not found for user {user_id}"]})
        return cart
