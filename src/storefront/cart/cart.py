"""Shopping cart aggregate: one per user, created lazily on the first add.

Lines hold only (product, quantity). Prices, titles and images are joined
from the catalogue when the cart is read, and snapshotted into an Order at
checkout.
"""

import json
from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer

from storefront.cart.events import (
    CartCreated,
    CartItemAdded,
    CartItemRemoved,
    CartQuantityUpdated,
    CartReconciled,
)
from storefront.domain import storefront


@storefront.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@storefront.aggregate
class ShoppingCart:
    user_id = Identifier(required=True, unique=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        cart = cls(user_id=user_id, created_at=now, updated_at=now)
        cart.raise_(CartCreated(cart_id=str(cart.id), user_id=str(user_id)))
        return cart

    def find_item(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product_id, quantity):
        """Add a product, or increase its quantity if it is already in the cart."""
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        now = datetime.now(UTC)
        existing = self.find_item(product_id)
        if existing:
            existing.quantity += quantity
            line_quantity = existing.quantity
        else:
            self.add_items(CartItem(product_id=product_id, quantity=quantity, added_at=now))
            line_quantity = quantity

        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                product_id=str(product_id),
                quantity=quantity,
                line_quantity=line_quantity,
            )
        )

    def set_quantity(self, product_id, quantity):
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        item = self.find_item(product_id)
        if item is None:
            raise ObjectNotFoundError({"product_id": ["Cart item not present"]})

        previous_quantity = item.quantity
        item.quantity = quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def remove_item(self, product_id):
        """Take a product out of the cart. Returns False when it was not there."""
        item = self.find_item(product_id)
        if item is None:
            return False

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(CartItemRemoved(cart_id=str(self.id), product_id=str(product_id)))
        return True

    def drop_dangling_items(self, missing_product_ids):
        """Remove every line whose product is in ``missing_product_ids``."""
        missing = {str(pid) for pid in missing_product_ids}
        dangling = [i for i in self.items if str(i.product_id) in missing]
        if not dangling:
            return 0

        for item in dangling:
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        removed = sorted(str(i.product_id) for i in dangling)
        self.raise_(
            CartReconciled(
                cart_id=str(self.id),
                removed_product_ids=json.dumps(removed),
                removed_count=len(removed),
            )
        )
        return len(removed)
