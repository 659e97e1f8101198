"""Repository for the Order aggregate."""

from storefront.domain import storefront
from storefront.order.order import Order, OrderStatus, PaymentStatus


def _newest_first(orders):
    return sorted(orders, key=lambda o: o.order_date.timestamp() if o.order_date else 0.0, reverse=True)


@storefront.repository(part_of=Order)
class OrderRepository:
    def for_user(self, user_id) -> list[Order]:
        """All of a user's orders, most recent first. Empty when they have none."""
        return _newest_first(self._dao.query.filter(user_id=str(user_id)).all().items)

    def everything(self) -> list[Order]:
        return _newest_first(self._dao.query.all().items)

    def awaiting_payment(self) -> list[Order]:
        return self._dao.query.filter(
            order_status=OrderStatus.PENDING.value,
            payment_status=PaymentStatus.PENDING.value,
        ).all().items

    def paid_for_user(self, user_id) -> list[Order]:
        return self._dao.query.filter(
            user_id=str(user_id),
            payment_status=PaymentStatus.PAID.value,
        ).all().items
