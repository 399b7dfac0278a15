"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the API's request validation and
use the exact field names (and camelCase aliases) the Pydantic schemas expect.
"""

import os
import random
import uuid

from faker import Faker

fake = Faker()


# ---------- Auth ----------


def user_tokens() -> list[str]:
    """Bearer tokens for shoppers, from ``LOADTEST_USER_TOKENS`` (comma separated).

    The server must know them too, via ``STOREFRONT_AUTH_TOKENS``.
    """
    raw = os.environ.get("LOADTEST_USER_TOKENS", "dev-user")
    return [token.strip() for token in raw.split(",") if token.strip()]


def admin_token() -> str:
    return os.environ.get("LOADTEST_ADMIN_TOKEN", "dev-admin")


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


# ---------- Identity ----------


def valid_phone() -> str:
    """Ten-digit phone number."""
    return f"{random.randint(6, 9)}{random.randint(100000000, 999999999)}"


def address_data() -> dict:
    """Generate an AddressSchema payload using the client's aliases."""
    payload = {
        "fullName": fake.name()[:255],
        "address1": fake.street_address()[:255],
        "city": fake.city()[:100],
        "state": fake.state()[:100],
        "pincode": fake.postcode()[:20],
        "phone": valid_phone(),
    }
    if random.random() < 0.3:
        payload["address2"] = fake.secondary_address()[:255]
    return payload


# ---------- Catalogue ----------


def product_data(stock_quantity: int | None = None) -> dict:
    """Generate a ProductRequest payload."""
    return {
        "name": f"{fake.word().title()} {fake.word()} {uuid.uuid4().hex[:4]}",
        "description": fake.sentence(nb_words=12),
        "price": f"{random.uniform(1, 500):.2f}",
        "stock_quantity": stock_quantity if stock_quantity is not None else random.randint(50, 500),
        "category": random.choice(["apparel", "home", "accessories", "art"]),
    }


def search_term() -> str:
    return fake.word()[:4]


# ---------- Ordering ----------


def cart_item_data(product_id: int) -> dict:
    return {"productId": product_id, "quantity": random.randint(1, 3)}


def order_data(cart: list[dict]) -> dict:
    """Build a POST /orders payload from a GET /cart response."""
    items = [
        {
            "product_id": line["product_id"],
            "quantity": line["quantity"],
            "product_price": line["product_price"],
        }
        for line in cart
    ]
    total = sum(line["product_price"] * line["quantity"] for line in cart)
    return {
        "items": items,
        "totalAmount": f"{total:.2f}",
        "shippingAddress": address_data(),
    }
