"""Ordering load test scenarios.

A shopper fills a cart from the live catalogue, adjusts it, checks out and
reads their order history. Orders that lose a race for stock are expected
under load and are not counted as failures.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import auth_headers, cart_item_data, order_data, user_tokens
from loadtests.helpers.response import extract_error_detail, is_insufficient_stock
from loadtests.helpers.state import ShopperState


class CartToCheckoutJourney(SequentialTaskSet):
    """Browse -> Add 2 items -> Update quantity -> Checkout -> Order history."""

    def on_start(self):
        self.state = ShopperState(token=random.choice(user_tokens()))
        self.headers = auth_headers(self.state.token)

    @task
    def browse(self):
        with self.client.get("/products", catch_response=True, name="GET /products") as resp:
            if resp.status_code != 200:
                resp.failure(f"List products failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()
            in_stock = [p["id"] for p in resp.json() if p["stock_quantity"] > 0]
            if not in_stock:
                self.interrupt()
            self.state.product_ids = random.sample(in_stock, k=min(2, len(in_stock)))

    @task
    def add_items(self):
        for product_id in self.state.product_ids:
            with self.client.post(
                "/cart",
                json=cart_item_data(product_id),
                headers=self.headers,
                catch_response=True,
                name="POST /cart",
            ) as resp:
                if resp.status_code == 200:
                    self.state.cart_item_ids.append(resp.json()["cartItemId"])
                elif resp.status_code == 404:
                    # Product deleted between browse and add
                    resp.success()
                else:
                    resp.failure(f"Add to cart failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def update_quantity(self):
        if not self.state.cart_item_ids:
            self.interrupt()
        with self.client.put(
            f"/cart/{self.state.cart_item_ids[0]}",
            json={"quantity": 1},
            headers=self.headers,
            catch_response=True,
            name="PUT /cart/{id}",
        ) as resp:
            if resp.status_code not in (200, 404):
                resp.failure(f"Update cart failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def checkout(self):
        cart = self.client.get("/cart", headers=self.headers, name="GET /cart").json()
        if not cart:
            self.interrupt()

        with self.client.post(
            "/orders",
            json=order_data(cart),
            headers=self.headers,
            catch_response=True,
            name="POST /orders",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_ids.append(resp.json()["orderId"])
            elif is_insufficient_stock(resp):
                resp.success()
                self.client.delete("/cart/clear", headers=self.headers, name="DELETE /cart/clear")
            else:
                resp.failure(f"Place order failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def order_history(self):
        with self.client.get("/orders/my", headers=self.headers, catch_response=True, name="GET /orders/my") as resp:
            if resp.status_code != 200:
                resp.failure(f"Order history failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class OrderingUser(HttpUser):
    wait_time = between(1, 3)
    tasks = [CartToCheckoutJourney]
