"""Catalogue load test scenarios.

Anonymous browsing (list, search, detail) and an admin journey that creates,
edits and deletes a product.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import admin_token, auth_headers, product_data, search_term
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import ProductState


class BrowseCatalogueJourney(SequentialTaskSet):
    """List -> Search -> View a product."""

    @task
    def list_products(self):
        with self.client.get("/products", catch_response=True, name="GET /products") as resp:
            if resp.status_code == 200:
                self.product_ids = [p["id"] for p in resp.json()]
            else:
                resp.failure(f"List products failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def search_products(self):
        self.client.get("/products", params={"q": search_term()}, name="GET /products?q=")

    @task
    def view_product(self):
        if not self.product_ids:
            self.interrupt()
        product_id = random.choice(self.product_ids)
        with self.client.get(f"/products/{product_id}", catch_response=True, name="GET /products/{id}") as resp:
            # Deleted by a concurrent admin journey
            if resp.status_code == 404:
                resp.success()

    @task
    def done(self):
        self.interrupt()


class ProductAdminJourney(SequentialTaskSet):
    """Create Product -> Update -> Delete."""

    def on_start(self):
        self.state = ProductState()
        self.headers = auth_headers(admin_token())

    @task
    def create_product(self):
        payload = product_data()
        with self.client.post(
            "/products",
            json=payload,
            headers=self.headers,
            catch_response=True,
            name="POST /products",
        ) as resp:
            if resp.status_code == 201:
                self.state.product_id = resp.json()["productId"]
                self.state.stock_quantity = payload["stock_quantity"]
            else:
                resp.failure(f"Create product failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def update_product(self):
        with self.client.put(
            f"/products/{self.state.product_id}",
            json=product_data(stock_quantity=self.state.stock_quantity + 10),
            headers=self.headers,
            catch_response=True,
            name="PUT /products/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Update product failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def delete_product(self):
        with self.client.delete(
            f"/products/{self.state.product_id}",
            headers=self.headers,
            catch_response=True,
            name="DELETE /products/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Delete product failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class CatalogueUser(HttpUser):
    """Mostly browsing, occasional admin edits."""

    wait_time = between(0.5, 2)
    tasks = {BrowseCatalogueJourney: 9, ProductAdminJourney: 1}
