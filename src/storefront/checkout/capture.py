"""CapturePayment: finalize an approved payment and confirm the order.

Every line is checked before anything changes: each product must still
exist and hold enough stock for the quantity ordered across all lines. Only
then is the gateway asked to capture, after which stock is taken out, the
order marked confirmed and paid, and the user's cart deleted. All of
it commits in the handler's unit of work.

Capturing an order that is already paid is a no-op.
"""

from collections import Counter

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.exceptions import GatewayError, InsufficientStockError
from storefront.order.order import Order
from storefront.order.view import order_to_dict
from storefront.payments.gateway import get_gateway

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class CapturePayment:
    order_id = Identifier(required=True)
    payment_id = String(required=True, max_length=255)
    payer_id = String(required=True, max_length=255)


def _products_with_stock_for(order) -> dict[str, Product]:
    """Load every product on the order, refusing if any is gone or short of stock."""
    wanted = Counter()
    for item in order.items:
        wanted[str(item.product_id)] += item.quantity

    repo = current_domain.repository_for(Product)
    products = {}
    for product_id, quantity in wanted.items():
        product = repo.get(product_id)
        if not product.has_stock_for(quantity):
            raise InsufficientStockError(
                {
                    "total_stock": [
                        f"Not enough stock for {product.title}: {product.total_stock} left, {quantity} ordered"
                    ]
                }
            )
        products[product_id] = product
    return products


def _discard_cart(order):
    """Delete the ordering user's cart. Carts belonging to anyone else are never touched."""
    repo = current_domain.repository_for(ShoppingCart)
    cart = repo.for_user(order.user_id)
    if cart is None:
        logger.debug("Cart already gone", user_id=str(order.user_id), cart_id=str(order.cart_id))
        return
    repo._dao.delete(cart)


@storefront.command_handler(part_of=Order)
class CapturePaymentHandler:
    @handle(CapturePayment)
    def capture_payment(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        if order.is_paid():
            logger.info("Order already paid, capture skipped", order_id=str(order.id))
            return order_to_dict(order)

        order.assert_capturable()
        products = _products_with_stock_for(order)

        result = get_gateway().capture(command.payment_id, command.payer_id)
        if not result.success:
            logger.warning(
                "Payment capture failed",
                order_id=str(order.id),
                payment_id=command.payment_id,
                reason=result.failure_reason,
            )
            raise GatewayError({"payment": [result.failure_reason or "Error while capturing payment"]})

        for item in order.items:
            products[str(item.product_id)].decrement_stock(item.quantity)

        product_repo = current_domain.repository_for(Product)
        for product in products.values():
            product_repo.add(product)

        order.confirm_payment(payment_id=command.payment_id, payer_id=command.payer_id)
        _discard_cart(order)
        repo.add(order)

        logger.info(
            "Payment captured, order confirmed",
            order_id=str(order.id),
            payment_id=command.payment_id,
            line_count=len(order.items),
        )
        return order_to_dict(order)
