"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A checkout was authorized by the gateway and the order stored."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    cart_id = Identifier()
    items = Text(required=True)  # JSON: list of line dicts
    item_count = Integer(required=True)
    total_amount = Float(required=True)
    currency = String(max_length=3, required=True)
    settlement_amount = Float(required=True)
    settlement_currency = String(max_length=3, required=True)
    gateway_order_ref = String(max_length=255)
    placed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class PaymentCaptured:
    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    payment_id = String(max_length=255, required=True)
    payer_id = String(max_length=255, required=True)
    total_amount = Float(required=True)
    captured_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    """An administrator moved a paid order along the fulfillment path."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(max_length=50, required=True)
    new_status = String(max_length=50, required=True)
    changed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderExpired:
    """A checkout was never approved and has been written off."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    order_date = DateTime()
    expired_at = DateTime(required=True)
