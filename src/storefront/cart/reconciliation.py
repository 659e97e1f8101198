"""Drop cart lines whose product has been removed from the catalogue."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.catalogue.product import Product
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


@storefront.command(part_of="ShoppingCart")
class ReconcileCart:
    user_id = Identifier(required=True)


def missing_products(product_ids) -> list[str]:
    """Ids from ``product_ids`` that are no longer in the catalogue."""
    repo = current_domain.repository_for(Product)
    missing = []
    for product_id in product_ids:
        try:
            repo.get(product_id)
        except ObjectNotFoundError:
            missing.append(str(product_id))
    return missing


@storefront.command_handler(part_of=ShoppingCart)
class ReconcileCartHandler:
    @handle(ReconcileCart)
    def reconcile_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get_for_user(command.user_id)

        missing = missing_products(item.product_id for item in cart.items)
        removed = cart.drop_dangling_items(missing)
        if removed:
            repo.add(cart)
            logger.info("Cart reconciled", cart_id=str(cart.id), removed_count=removed)
        return removed
