"""Order aggregate: a priced snapshot of a cart, tracked through payment and fulfillment.

Line items and the delivery address are copied in at checkout and never
change afterwards. Only the status fields and the gateway correlation ids
move.

Order status:
    pending → confirmed (payment captured) | rejected (checkout expired)
    confirmed → inProcess | inShipping | delivered | rejected
    inProcess → inShipping | delivered | rejected
    inShipping → delivered

Payment status:
    pending → paid | failed
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import (
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
    ValueObject,
)

from storefront.domain import storefront
from storefront.order.events import (
    OrderExpired,
    OrderPlaced,
    OrderStatusChanged,
    PaymentCaptured,
)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    REJECTED = "rejected"
    IN_PROCESS = "inProcess"
    IN_SHIPPING = "inShipping"
    DELIVERED = "delivered"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"


# Transitions an administrator may apply once the order is paid
_FULFILLMENT_TRANSITIONS = {
    OrderStatus.PENDING: set(),
    OrderStatus.CONFIRMED: {
        OrderStatus.IN_PROCESS,
        OrderStatus.IN_SHIPPING,
        OrderStatus.DELIVERED,
        OrderStatus.REJECTED,
    },
    OrderStatus.IN_PROCESS: {
        OrderStatus.IN_SHIPPING,
        OrderStatus.DELIVERED,
        OrderStatus.REJECTED,
    },
    OrderStatus.IN_SHIPPING: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.REJECTED: set(),  # Terminal
}


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="Order")
class DeliveryAddress:
    """The address the order ships to, copied from the user's address book at checkout."""

    address_id = Identifier()
    address = String(required=True, max_length=500)
    city = String(required=True, max_length=100)
    pincode = String(required=True, max_length=20)
    phone = String(required=True, max_length=30)
    notes = Text()


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    title = String(required=True, max_length=255)
    image = String(max_length=1024)
    price = Float(required=True, min_value=0.0)
    sale_price = Float(default=0.0, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    settlement_price = Float(min_value=0.0)  # Unit price in the settlement currency


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    user_id = Identifier(required=True)
    cart_id = Identifier()
    items = HasMany(OrderItem)
    address = ValueObject(DeliveryAddress)
    payment_method = String(max_length=50, default="paypal")
    total_amount = Float(required=True, min_value=0.0)
    currency = String(max_length=3, required=True)
    settlement_amount = Float(min_value=0.0)
    settlement_currency = String(max_length=3)
    order_status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    gateway_order_ref = String(max_length=255)
    payment_id = String(max_length=255)
    payer_id = String(max_length=255)
    order_date = DateTime()
    order_update_date = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        user_id,
        cart_id,
        items_data,
        address,
        payment_method,
        total_amount,
        currency,
        settlement_amount,
        settlement_currency,
    ):
        """Build a pending order from a checkout.

        Args:
            items_data: List of dicts with product_id, title, image, price,
                        sale_price, quantity and settlement_price.
            address: Dict with address_id, address, city, pincode, phone, notes.
        """
        if not items_data:
            raise ValidationError({"items": ["Cart is empty"]})

        now = datetime.now(UTC)
        return cls(
            user_id=user_id,
            cart_id=cart_id,
            items=[OrderItem(**item) for item in items_data],
            address=DeliveryAddress(**address),
            payment_method=payment_method or "paypal",
            total_amount=total_amount,
            currency=currency,
            settlement_amount=settlement_amount,
            settlement_currency=settlement_currency,
            order_date=now,
            order_update_date=now,
        )

    # -------------------------------------------------------------------
    # Payment
    # -------------------------------------------------------------------
    def record_authorization(self, gateway_order_ref):
        """Remember the gateway's reference for this checkout and announce the order."""
        self.gateway_order_ref = gateway_order_ref

        self.raise_(
            OrderPlaced(
                order_id=str(self.id),
                user_id=str(self.user_id),
                cart_id=str(self.cart_id) if self.cart_id else None,
                items=json.dumps(
                    [
                        {
                            "product_id": str(item.product_id),
                            "title": item.title,
                            "price": item.price,
                            "sale_price": item.sale_price,
                            "quantity": item.quantity,
                        }
                        for item in self.items
                    ]
                ),
                item_count=len(self.items),
                total_amount=self.total_amount,
                currency=self.currency,
                settlement_amount=self.settlement_amount,
                settlement_currency=self.settlement_currency,
                gateway_order_ref=gateway_order_ref,
                placed_at=self.order_date,
            )
        )

    def is_paid(self):
        return self.payment_status == PaymentStatus.PAID.value

    def is_awaiting_payment(self):
        return (
            self.order_status == OrderStatus.PENDING.value
            and self.payment_status == PaymentStatus.PENDING.value
        )

    def assert_capturable(self):
        if not self.is_awaiting_payment():
            raise ValidationError(
                {
                    "order_status": [
                        f"Order {self.id} cannot be captured in status "
                        f"{self.order_status}/{self.payment_status}"
                    ]
                }
            )

    def confirm_payment(self, payment_id, payer_id):
        """Mark the order confirmed and paid. Refused unless it is still awaiting payment."""
        self.assert_capturable()

        now = datetime.now(UTC)
        self.payment_status = PaymentStatus.PAID.value
        self.order_status = OrderStatus.CONFIRMED.value
        self.payment_id = payment_id
        self.payer_id = payer_id
        self.order_update_date = now

        self.raise_(
            PaymentCaptured(
                order_id=str(self.id),
                user_id=str(self.user_id),
                payment_id=payment_id,
                payer_id=payer_id,
                total_amount=self.total_amount,
                captured_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Fulfillment
    # -------------------------------------------------------------------
    def update_status(self, new_status):
        try:
            target = OrderStatus(new_status)
        except ValueError:
            raise ValidationError({"order_status": [f"Unknown order status {new_status}"]})

        current = OrderStatus(self.order_status)
        if target not in _FULFILLMENT_TRANSITIONS.get(current, set()):
            raise ValidationError({"order_status": [f"Cannot transition from {current.value} to {target.value}"]})

        now = datetime.now(UTC)
        self.order_status = target.value
        self.order_update_date = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=current.value,
                new_status=target.value,
                changed_at=now,
            )
        )

    def expire(self):
        """Write off a checkout that was never approved."""
        self.assert_capturable()

        now = datetime.now(UTC)
        self.order_status = OrderStatus.REJECTED.value
        self.payment_status = PaymentStatus.FAILED.value
        self.order_update_date = now

        self.raise_(
            OrderExpired(
                order_id=str(self.id),
                user_id=str(self.user_id),
                order_date=self.order_date,
                expired_at=now,
            )
        )
