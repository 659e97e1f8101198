"""InitiateCheckout: turn the client's cart snapshot into an authorized order.

The order is built in memory and only stored once the gateway has
authorized the payment. A refused or failed authorization leaves nothing
behind.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.checkout.pricing import quote_checkout
from storefront.config import get_settings
from storefront.domain import storefront
from storefront.exceptions import GatewayError
from storefront.order.order import Order
from storefront.payments.currency import get_exchange_rates
from storefront.payments.gateway import get_gateway

logger = structlog.get_logger(__name__)

_LINE_FIELDS = ("product_id", "title", "image", "price", "sale_price", "quantity")
_ADDRESS_FIELDS = ("address_id", "address", "city", "pincode", "phone", "notes")


@storefront.command(part_of="Order")
class InitiateCheckout:
    user_id = Identifier(required=True)
    cart_id = Identifier()
    items = Text()  # JSON: list of {product_id, title, image, price, sale_price, quantity}
    address = Text()  # JSON: {address_id, address, city, pincode, phone, notes}
    payment_method = String(max_length=50, default="paypal")


def _load(raw, field_name):
    if not raw:
        return None
    if not isinstance(raw, str):
        return raw
    try:
        return json.loads(raw)
    except ValueError:
        raise ValidationError({field_name: ["Malformed JSON"]})


def _as_number(value, cast):
    try:
        return cast(value)
    except (TypeError, ValueError):
        return None


def _clean_lines(items):
    """Validate the snapshot lines and return them with numeric price, sale_price and quantity."""
    if not isinstance(items, list):
        raise ValidationError({"items": ["Cart items must be a list"]})

    lines = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            raise ValidationError({"items": [f"Line {index} must be an object"]})
        missing = [key for key in ("product_id", "title", "price", "quantity") if item.get(key) in (None, "")]
        if missing:
            raise ValidationError({"items": [f"Line {index} is missing {', '.join(missing)}"]})

        quantity = _as_number(item["quantity"], int)
        if quantity is None:
            raise ValidationError({"items": [f"Line {index} quantity must be a whole number"]})
        if quantity < 1:
            raise ValidationError({"items": [f"Line {index} quantity must be at least 1"]})

        line = {key: item.get(key) for key in _LINE_FIELDS}
        line["quantity"] = quantity
        for key in ("price", "sale_price"):
            if item.get(key) in (None, ""):
                line[key] = 0.0
                continue
            line[key] = _as_number(item[key], float)
            if line[key] is None:
                raise ValidationError({"items": [f"Line {index} {key} must be a number"]})
        lines.append(line)
    return lines


def _resolve_cart_id(user_id, claimed_cart_id):
    """The id of the user's own cart. A client-supplied id must name that cart."""
    cart = current_domain.repository_for(ShoppingCart).for_user(user_id)
    if claimed_cart_id and (cart is None or str(cart.id) != str(claimed_cart_id)):
        raise ValidationError({"cart_id": [f"Cart {claimed_cart_id} does not belong to user {user_id}"]})
    return cart.id if cart is not None else None


@storefront.command_handler(part_of=Order)
class InitiateCheckoutHandler:
    @handle(InitiateCheckout)
    def initiate_checkout(self, command):
        items = _load(command.items, "items") or []
        if not items:
            raise ValidationError({"items": ["Cart is empty"]})
        lines = _clean_lines(items)

        address = _load(command.address, "address")
        if not isinstance(address, dict) or not address:
            raise ValidationError({"address": ["Select an address to proceed"]})

        cart_id = _resolve_cart_id(command.user_id, command.cart_id)

        settings = get_settings()
        rate = get_exchange_rates().rate(settings.store_currency, settings.settlement_currency)
        quote = quote_checkout(
            lines,
            rate,
            settings.settlement_currency,
        )

        order = Order.create(
            user_id=command.user_id,
            cart_id=cart_id,
            items_data=quote.lines,
            address={key: address.get(key) for key in _ADDRESS_FIELDS},
            payment_method=command.payment_method,
            total_amount=float(quote.total_amount),
            currency=settings.store_currency,
            settlement_amount=float(quote.settlement_amount),
            settlement_currency=quote.settlement_currency,
        )

        result = get_gateway().authorize(
            line_items=quote.gateway_items,
            total_amount=f"{quote.settlement_amount:.2f}",
            currency=quote.settlement_currency,
            return_url=settings.paypal_return_url,
            cancel_url=settings.paypal_cancel_url,
        )
        if not result.success:
            logger.warning(
                "Payment authorization failed",
                user_id=str(command.user_id),
                reason=result.failure_reason,
            )
            raise GatewayError({"payment": [result.failure_reason or "Error while creating payment"]})

        order.record_authorization(result.gateway_order_ref)
        current_domain.repository_for(Order).add(order)

        logger.info(
            "Order placed, awaiting payment approval",
            order_id=str(order.id),
            user_id=str(order.user_id),
            total_amount=order.total_amount,
            settlement_amount=order.settlement_amount,
            settlement_currency=order.settlement_currency,
        )
        return {"order_id": str(order.id), "approval_url": result.approval_url}
