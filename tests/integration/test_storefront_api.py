"""Integration tests for the Storefront API endpoints via TestClient."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean.integrations.fastapi import register_exception_handlers

from storefront.api import register_storefront_exception_handlers, routers


@pytest.fixture()
def client(gateway, exchange_rates):
    app = FastAPI()
    for router in routers:
        app.include_router(router)
    register_exception_handlers(app)
    register_storefront_exception_handlers(app)
    return TestClient(app)


_ADDRESS = {
    "address_id": "addr-001",
    "address": "12 MG Road",
    "city": "Bengaluru",
    "pincode": "560001",
    "phone": "9876543210",
    "notes": "Ring the bell",
}


def _add_product(client, **overrides):
    body = {"title": "Cotton T-Shirt", "price": 100.0, "sale_price": 0.0, "total_stock": 10, "image": "https://img/t.png"}
    body.update(overrides)
    response = client.post("/products", json=body)
    assert response.status_code == 201
    return response.json()["product_id"]


def _add_to_cart(client, user_id, product_id, quantity=1):
    response = client.post("/cart/add", json={"user_id": user_id, "product_id": product_id, "quantity": quantity})
    assert response.status_code == 200
    return response.json()["cart_id"]


def _create_order(client, user_id):
    cart = client.get(f"/cart/get/{user_id}").json()
    return client.post(
        "/order/create",
        json={
            "user_id": user_id,
            "cart_id": cart["cart_id"],
            "cart_items": cart["items"],
            "address_info": _ADDRESS,
            "payment_method": "paypal",
        },
    )


class TestCartAPI:
    def test_add_and_get(self, client):
        product_id = _add_product(client)
        _add_to_cart(client, "user-001", product_id, 2)
        _add_to_cart(client, "user-001", product_id, 1)

        response = client.get("/cart/get/user-001")

        assert response.status_code == 200
        items = response.json()["items"]
        assert len(items) == 1
        assert items[0]["quantity"] == 3
        assert items[0]["title"] == "Cotton T-Shirt"

    def test_add_unknown_product_returns_404(self, client):
        response = client.post("/cart/add", json={"user_id": "user-001", "product_id": "nope", "quantity": 1})
        assert response.status_code == 404

    def test_get_missing_cart_returns_404(self, client):
        assert client.get("/cart/get/user-nobody").status_code == 404

    def test_update_quantity(self, client):
        product_id = _add_product(client)
        _add_to_cart(client, "user-001", product_id)

        response = client.put(
            "/cart/update-cart",
            json={"user_id": "user-001", "product_id": product_id, "quantity": 4},
        )

        assert response.status_code == 200
        assert client.get("/cart/get/user-001").json()["items"][0]["quantity"] == 4

    def test_remove_is_idempotent(self, client):
        product_id = _add_product(client)
        _add_to_cart(client, "user-001", product_id)

        assert client.delete(f"/cart/user-001/{product_id}").status_code == 200
        assert client.delete(f"/cart/user-001/{product_id}").status_code == 200
        assert client.get("/cart/get/user-001").json()["items"] == []

    def test_reconcile_after_product_removal(self, client):
        product_id = _add_product(client)
        _add_to_cart(client, "user-001", product_id)
        assert client.delete(f"/products/{product_id}").status_code == 200

        assert client.get("/cart/get/user-001").json()["items"] == []
        assert client.post("/cart/user-001/reconcile").json() == {"removed": 1}
        assert client.post("/cart/user-001/reconcile").json() == {"removed": 0}


class TestOrderAPI:
    def test_checkout_and_capture(self, client):
        product_id = _add_product(client, total_stock=5)
        _add_to_cart(client, "user-001", product_id, 2)

        created = _create_order(client, "user-001")
        assert created.status_code == 201
        order_id = created.json()["order_id"]
        assert created.json()["approval_url"]

        captured = client.post(
            "/order/capture",
            json={"payment_id": "PAYID-1", "payer_id": "PAYER-1", "order_id": order_id},
        )
        assert captured.status_code == 200
        assert captured.json()["order_status"] == "confirmed"
        assert captured.json()["payment_status"] == "paid"

        assert client.get(f"/products/{product_id}").json()["total_stock"] == 3
        assert client.get("/cart/get/user-001").status_code == 404

        orders = client.get("/order/list/user-001").json()
        assert [o["order_id"] for o in orders] == [order_id]
        details = client.get(f"/order/details/{order_id}").json()
        assert details["total_amount"] == 200.0
        assert details["settlement_amount"] == 2.4
        assert details["settlement_currency"] == "USD"

    def test_empty_cart_returns_400(self, client):
        response = client.post(
            "/order/create",
            json={"user_id": "user-001", "cart_items": [], "address_info": _ADDRESS},
        )
        assert response.status_code == 400
        assert client.get("/order/list/user-001").json() == []

    def test_missing_address_returns_400(self, client):
        product_id = _add_product(client)
        response = client.post(
            "/order/create",
            json={
                "user_id": "user-001",
                "cart_items": [{"product_id": product_id, "title": "Tee", "price": 10.0, "quantity": 1}],
            },
        )
        assert response.status_code == 400

    def test_gateway_failure_returns_502(self, client, gateway):
        product_id = _add_product(client)
        _add_to_cart(client, "user-001", product_id)
        gateway.configure(should_succeed=False)

        response = _create_order(client, "user-001")

        assert response.status_code == 502
        assert client.get("/order/list/user-001").json() == []

    def test_capture_missing_order_returns_404(self, client):
        response = client.post(
            "/order/capture",
            json={"payment_id": "PAYID-1", "payer_id": "PAYER-1", "order_id": "order-missing"},
        )
        assert response.status_code == 404

    def test_capture_with_insufficient_stock_returns_409(self, client):
        product_id = _add_product(client, total_stock=1)
        _add_to_cart(client, "user-001", product_id, 2)
        order_id = _create_order(client, "user-001").json()["order_id"]

        response = client.post(
            "/order/capture",
            json={"payment_id": "PAYID-1", "payer_id": "PAYER-1", "order_id": order_id},
        )

        assert response.status_code == 409
        assert client.get(f"/order/details/{order_id}").json()["payment_status"] == "pending"

    def test_someone_elses_cart_id_returns_400(self, client):
        product_id = _add_product(client)
        _add_to_cart(client, "user-001", product_id)
        other_cart_id = _add_to_cart(client, "user-002", product_id, 2)
        cart = client.get("/cart/get/user-001").json()

        response = client.post(
            "/order/create",
            json={
                "user_id": "user-001",
                "cart_id": other_cart_id,
                "cart_items": cart["items"],
                "address_info": _ADDRESS,
            },
        )

        assert response.status_code == 400
        assert "cart_id" in response.json()["error"]
        assert client.get("/cart/get/user-002").json()["items"][0]["quantity"] == 2


class TestProductAPI:
    def test_filter_and_sort(self, client):
        _add_product(client, title="Cotton Tee", price=499.0, category="men", need="casual")
        _add_product(client, title="Linen Kurta", price=1299.0, category="men", need="festive")
        _add_product(client, title="Silk Saree", price=4999.0, category="women", need="festive")

        response = client.get(
            "/products",
            params={"category": "men,women", "need": "festive", "sort_by": "price-hightolow"},
        )

        assert response.status_code == 200
        assert [p["title"] for p in response.json()] == ["Silk Saree", "Linen Kurta"]

    def test_listing_defaults_to_cheapest_first(self, client):
        _add_product(client, title="Dear", price=900.0)
        _add_product(client, title="Cheap", price=90.0)

        assert [p["title"] for p in client.get("/products").json()] == ["Cheap", "Dear"]

    def test_search(self, client):
        _add_product(client, title="Silk Saree", category="women", need="festive")
        _add_product(client, title="Cotton Tee", category="men", need="casual")

        response = client.get("/products/search/FESTIVE")

        assert response.status_code == 200
        [product] = response.json()
        assert product["title"] == "Silk Saree"
        assert product["need"] == "festive"

    def test_blank_search_returns_400(self, client):
        assert client.get("/products/search/%20").status_code == 400


class TestAdminAPI:
    def _paid_order(self, client):
        product_id = _add_product(client)
        _add_to_cart(client, "user-001", product_id)
        order_id = _create_order(client, "user-001").json()["order_id"]
        client.post("/order/capture", json={"payment_id": "P", "payer_id": "Q", "order_id": order_id})
        return order_id

    def test_lists_all_orders(self, client):
        order_id = self._paid_order(client)
        response = client.get("/admin/orders")
        assert [o["order_id"] for o in response.json()] == [order_id]
        assert client.get(f"/admin/orders/{order_id}").json()["order_id"] == order_id

    def test_update_status(self, client):
        order_id = self._paid_order(client)
        response = client.put(f"/admin/orders/{order_id}/status", json={"order_status": "inShipping"})
        assert response.status_code == 200
        assert response.json()["order_status"] == "inShipping"

    def test_invalid_transition_returns_400(self, client):
        order_id = self._paid_order(client)
        client.put(f"/admin/orders/{order_id}/status", json={"order_status": "delivered"})
        response = client.put(f"/admin/orders/{order_id}/status", json={"order_status": "inProcess"})
        assert response.status_code == 400

    def test_expire_stale_orders(self, client):
        product_id = _add_product(client)
        _add_to_cart(client, "user-001", product_id)
        order_id = _create_order(client, "user-001").json()["order_id"]

        response = client.post("/admin/orders/expire", json={"idle_threshold_hours": 0})

        assert response.json() == {"expired": 1}
        assert client.get(f"/order/details/{order_id}").json()["order_status"] == "rejected"


class TestAddressAndReviewAPI:
    def test_address_book(self, client):
        ids = []
        for city in ("Bengaluru", "Mumbai", "Pune"):
            response = client.post("/address/add", json={**_ADDRESS, "user_id": "user-001", "city": city})
            assert response.status_code == 201
            ids.append(response.json()["address_id"])

        fourth = client.post("/address/add", json={**_ADDRESS, "user_id": "user-001", "city": "Chennai"})
        assert fourth.status_code == 400

        assert client.delete(f"/address/user-002/{ids[0]}").status_code == 404
        assert client.delete(f"/address/user-001/{ids[0]}").status_code == 200
        assert len(client.get("/address/get/user-001").json()) == 2

    def test_review_after_purchase(self, client):
        product_id = _add_product(client)
        _add_to_cart(client, "user-001", product_id)
        order_id = _create_order(client, "user-001").json()["order_id"]

        review = {"product_id": product_id, "user_id": "user-001", "user_name": "Asha", "message": "Nice", "rating": 4}
        assert client.post("/review/add", json=review).status_code == 400

        client.post("/order/capture", json={"payment_id": "P", "payer_id": "Q", "order_id": order_id})
        assert client.post("/review/add", json=review).status_code == 201
        assert client.post("/review/add", json=review).status_code == 400

        assert [r["rating"] for r in client.get(f"/review/{product_id}").json()] == [4]
        assert client.get(f"/products/{product_id}").json()["average_review"] == 4.0


class TestGatewayConfigureAPI:
    def test_configure_fake_gateway(self, client, gateway):
        response = client.post(
            "/payments/gateway/configure",
            json={"should_succeed": False, "failure_reason": "Declined for testing"},
        )
        assert response.status_code == 200
        assert response.json() == {
            "gateway": "FakeGateway",
            "should_succeed": False,
            "failure_reason": "Declined for testing",
        }
        assert gateway.should_succeed is False

    def test_refused_in_production(self, client, monkeypatch):
        from storefront.config import get_settings

        monkeypatch.setenv("PROTEAN_ENV", "production")
        get_settings.cache_clear()

        response = client.post("/payments/gateway/configure", json={"should_succeed": False})
        assert response.status_code == 403
