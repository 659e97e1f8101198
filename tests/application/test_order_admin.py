"""Application tests for order reads, admin status updates and expiry of stale checkouts."""

from datetime import UTC, datetime, timedelta

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.checkout.capture import CapturePayment
from storefront.order.expiry import ExpirePendingOrders
from storefront.order.fulfillment import UpdateOrderStatus
from storefront.order.order import Order
from storefront.order.view import list_all_orders, list_orders, order_details


@pytest.fixture()
def place(make_product, add_to_cart, checkout):
    def _place(user_id="user-001", quantity=1):
        add_to_cart(user_id, make_product(title=f"Tee for {user_id}"), quantity)
        return checkout(user_id)["order_id"]

    return _place


def _pay(order_id):
    current_domain.process(
        CapturePayment(order_id=order_id, payment_id="PAYID-1", payer_id="PAYER-1"),
        asynchronous=False,
    )


def _set_status(order_id, status):
    current_domain.process(UpdateOrderStatus(order_id=order_id, order_status=status), asynchronous=False)


class TestOrderReads:
    def test_user_without_orders_gets_empty_list(self):
        assert list_orders("user-nobody") == []

    def test_lists_only_the_users_orders(self, place):
        mine = place("user-001")
        place("user-002")

        orders = list_orders("user-001")
        assert [o["order_id"] for o in orders] == [mine]

    def test_details(self, place):
        order_id = place("user-001", quantity=3)
        details = order_details(order_id)
        assert details["order_id"] == order_id
        assert details["items"][0]["quantity"] == 3
        assert details["address"]["city"] == "Bengaluru"
        assert details["order_status"] == "pending"

    def test_details_of_missing_order(self):
        with pytest.raises(ObjectNotFoundError):
            order_details("order-missing")

    def test_admin_sees_every_order(self, place):
        ids = {place("user-001"), place("user-002")}
        assert {o["order_id"] for o in list_all_orders()} == ids


class TestUpdateOrderStatus:
    def test_paid_order_moves_through_fulfillment(self, place):
        order_id = place()
        _pay(order_id)

        for status in ("inProcess", "inShipping", "delivered"):
            _set_status(order_id, status)

        assert current_domain.repository_for(Order).get(order_id).order_status == "delivered"

    def test_pending_order_cannot_be_advanced(self, place):
        order_id = place()
        with pytest.raises(ValidationError):
            _set_status(order_id, "inShipping")

    def test_delivered_is_terminal(self, place):
        order_id = place()
        _pay(order_id)
        _set_status(order_id, "delivered")
        with pytest.raises(ValidationError):
            _set_status(order_id, "rejected")

    def test_missing_order(self):
        with pytest.raises(ObjectNotFoundError):
            _set_status("order-missing", "inProcess")


class TestExpirePendingOrders:
    def _age(self, order_id, hours):
        repo = current_domain.repository_for(Order)
        order = repo.get(order_id)
        order.order_date = datetime.now(UTC) - timedelta(hours=hours)
        repo.add(order)

    def test_stale_pending_orders_are_rejected(self, place):
        stale = place("user-001")
        fresh = place("user-002")
        self._age(stale, 48)

        expired = current_domain.process(ExpirePendingOrders(idle_threshold_hours=24), asynchronous=False)

        assert expired == 1
        repo = current_domain.repository_for(Order)
        assert repo.get(stale).order_status == "rejected"
        assert repo.get(stale).payment_status == "failed"
        assert repo.get(fresh).order_status == "pending"

    def test_paid_orders_are_left_alone(self, place):
        order_id = place()
        _pay(order_id)
        self._age(order_id, 48)

        expired = current_domain.process(ExpirePendingOrders(idle_threshold_hours=24), asynchronous=False)

        assert expired == 0
        assert current_domain.repository_for(Order).get(order_id).payment_status == "paid"

    def test_as_of_controls_the_cutoff(self, place):
        order_id = place()

        expired = current_domain.process(
            ExpirePendingOrders(idle_threshold_hours=24, as_of=datetime.now(UTC) + timedelta(days=2)),
            asynchronous=False,
        )

        assert expired == 1
        assert current_domain.repository_for(Order).get(order_id).order_status == "rejected"

    def test_nothing_to_expire(self):
        assert current_domain.process(ExpirePendingOrders(), asynchronous=False) == 0
