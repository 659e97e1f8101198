"""Checkout load test scenarios.

Two stateful SequentialTaskSet journeys: a shopper who goes all the way
from product to captured payment, and a browser who fiddles with a cart
and walks away. Run against a server using the fake gateway
(PAYMENT_GATEWAY unset) so authorization and capture stay local.
"""

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import (
    address_data,
    capture_data,
    cart_item_data,
    order_data,
    product_data,
    review_data,
    shopper_id,
)
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import CartState, ShopperState


class CheckoutJourney(SequentialTaskSet):
    """Add Product -> Add To Cart -> Save Address -> Create Order -> Capture -> Review.

    Every completed journey decrements stock and deletes the shopper's cart.
    """

    def on_start(self):
        self.state = ShopperState(user_id=shopper_id())

    @task
    def create_product(self):
        with self.client.post(
            "/products",
            json=product_data(),
            catch_response=True,
            name="POST /products",
        ) as resp:
            if resp.status_code == 201:
                self.state.product_ids.append(resp.json()["product_id"])
            else:
                resp.failure(f"Create product failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def add_to_cart(self):
        with self.client.post(
            "/cart/add",
            json=cart_item_data(self.state.user_id, self.state.product_ids[0]),
            catch_response=True,
            name="POST /cart/add",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Add to cart failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def fetch_cart(self):
        with self.client.get(
            f"/cart/get/{self.state.user_id}",
            catch_response=True,
            name="GET /cart/get/{user_id}",
        ) as resp:
            if resp.status_code == 200 and resp.json()["items"]:
                self.state.cart = resp.json()
            else:
                resp.failure(f"Fetch cart failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def add_address(self):
        payload = address_data(self.state.user_id)
        with self.client.post(
            "/address/add",
            json=payload,
            catch_response=True,
            name="POST /address/add",
        ) as resp:
            if resp.status_code == 201:
                self.state.address = {**payload, "address_id": resp.json()["address_id"]}
            else:
                resp.failure(f"Add address failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def create_order(self):
        with self.client.post(
            "/order/create",
            json=order_data(self.state.user_id, self.state.cart, self.state.address),
            catch_response=True,
            name="POST /order/create",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_id = resp.json()["order_id"]
            else:
                resp.failure(f"Create order failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def capture_payment(self):
        with self.client.post(
            "/order/capture",
            json=capture_data(self.state.order_id),
            catch_response=True,
            name="POST /order/capture",
        ) as resp:
            if resp.status_code != 200 or resp.json()["payment_status"] != "paid":
                resp.failure(f"Capture failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def review_product(self):
        with self.client.post(
            "/review/add",
            json=review_data(self.state.user_id, self.state.product_ids[0]),
            catch_response=True,
            name="POST /review/add",
        ) as resp:
            if resp.status_code != 201:
                resp.failure(f"Review failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def list_orders(self):
        self.client.get(f"/order/list/{self.state.user_id}", name="GET /order/list/{user_id}")

    @task
    def done(self):
        self.interrupt()


class CartBrowsingJourney(SequentialTaskSet):
    """Add Product -> Add To Cart (x2) -> Update Quantity -> Remove Line -> Abandon."""

    def on_start(self):
        self.state = CartState(user_id=shopper_id())

    @task
    def create_product(self):
        with self.client.post(
            "/products",
            json=product_data(),
            catch_response=True,
            name="POST /products",
        ) as resp:
            if resp.status_code == 201:
                self.state.product_id = resp.json()["product_id"]
            else:
                resp.failure(f"Create product failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def add_item_1(self):
        with self.client.post(
            "/cart/add",
            json=cart_item_data(self.state.user_id, self.state.product_id),
            catch_response=True,
            name="POST /cart/add",
        ) as resp:
            if resp.status_code == 200:
                self.state.line_count = 1
            else:
                resp.failure(f"Add to cart failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def add_item_again(self):
        with self.client.post(
            "/cart/add",
            json=cart_item_data(self.state.user_id, self.state.product_id),
            catch_response=True,
            name="POST /cart/add",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Add to cart again failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def update_quantity(self):
        with self.client.put(
            "/cart/update-cart",
            json={"user_id": self.state.user_id, "product_id": self.state.product_id, "quantity": 1},
            catch_response=True,
            name="PUT /cart/update-cart",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Update quantity failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def remove_item(self):
        with self.client.delete(
            f"/cart/{self.state.user_id}/{self.state.product_id}",
            catch_response=True,
            name="DELETE /cart/{user_id}/{product_id}",
        ) as resp:
            if resp.status_code == 200:
                self.state.line_count = 0
            else:
                resp.failure(f"Remove item failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class ShopperUser(HttpUser):
    """Mixed storefront traffic: most visitors browse, a minority buy."""

    wait_time = between(0.5, 3.0)
    tasks = {
        CartBrowsingJourney: 3,
        CheckoutJourney: 1,
    }
