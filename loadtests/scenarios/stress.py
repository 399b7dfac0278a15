"""Stress scenario for the conditional stock decrement.

CheckoutRushUser models a limited drop: one product with a handful of units
and many shoppers ordering it at once. The API must hand out exactly as many
orders as there were units; every other attempt gets the insufficient-stock
rejection. Compare the "placed" counter against the initial stock when the
run ends.
"""

import random

import requests
from locust import HttpUser, constant_pacing, events, task

from loadtests.data_generators import (
    address_data,
    admin_token,
    auth_headers,
    product_data,
    user_tokens,
)
from loadtests.helpers.response import extract_error_detail, is_insufficient_stock
from loadtests.helpers.state import CheckoutRushState

RUSH_STOCK = 25

_rush = CheckoutRushState()


@events.test_start.add_listener
def create_rush_product(environment, **_kwargs):
    """Create the limited product once per run."""
    if environment.host is None:
        return

    resp = requests.post(
        f"{environment.host}/products",
        json=product_data(stock_quantity=RUSH_STOCK),
        headers=auth_headers(admin_token()),
        timeout=10,
    )
    if resp.status_code == 201:
        _rush.product_id = resp.json()["productId"]
        print(f"[CHECKOUT RUSH] Product {_rush.product_id} created with {RUSH_STOCK} units")
    else:
        print(f"[CHECKOUT RUSH] Could not create product: {resp.status_code} - {extract_error_detail(resp)}")


@events.test_stop.add_listener
def report_rush(**_kwargs):
    if _rush.product_id is None:
        return
    print(f"[CHECKOUT RUSH] placed={_rush.placed} rejected={_rush.rejected} stock={RUSH_STOCK}")
    if _rush.placed > RUSH_STOCK:
        print("[CHECKOUT RUSH] OVERSOLD")


class CheckoutRushUser(HttpUser):
    """Every task orders one unit of the rush product directly."""

    wait_time = constant_pacing(0.2)

    def on_start(self):
        self.headers = auth_headers(random.choice(user_tokens()))

    @task
    def buy_last_units(self):
        if _rush.product_id is None:
            return
        payload = {
            "items": [{"product_id": _rush.product_id, "quantity": 1, "product_price": "0"}],
            "totalAmount": "0",
            "shippingAddress": address_data(),
        }
        with self.client.post(
            "/orders",
            json=payload,
            headers=self.headers,
            catch_response=True,
            name="[RUSH] POST /orders",
        ) as resp:
            if resp.status_code == 201:
                _rush.placed += 1
            elif is_insufficient_stock(resp):
                _rush.rejected += 1
                resp.success()
            else:
                resp.failure(f"Rush order failed: {resp.status_code} - {extract_error_detail(resp)}")
