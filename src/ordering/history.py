"""Order history: flat join rows folded into nested order views."""

import json

import structlog
from sqlalchemy import Connection, select

from catalogue.tables import products
from identity.tables import users
from ordering.tables import order_items, orders

logger = structlog.get_logger(__name__)


def parse_shipping_address(raw, order_id):
    """Decode a stored shipping address, or None if it is not a JSON object."""
    if isinstance(raw, dict):
        return raw
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("Could not parse shipping address", order_id=order_id, raw=raw)
        return None
    if not isinstance(parsed, dict):
        logger.warning("Shipping address is not an object", order_id=order_id, raw=raw)
        return None
    return parsed


def group_order_rows(rows, include_customer: bool = False) -> list[dict]:
    """Fold order/line rows into one view per order, keeping first-seen order."""
    grouped: dict = {}

    for row in rows:
        order_id = row["order_id"]
        order = grouped.get(order_id)
        if order is None:
            order = {
                "order_id": order_id,
                "order_date": row["order_date"],
                "total_amount": float(row["total_amount"]),
                "status": row["status"],
                "shipping_address": parse_shipping_address(row["shipping_address"], order_id),
                "items": [],
            }
            if include_customer:
                order["customer"] = {
                    "username": row["customer_username"],
                    "email": row["customer_email"],
                }
            grouped[order_id] = order

        order["items"].append(
            {
                "product_id": row["product_id"],
                "product_name": row["product_name"],
                "quantity": row["quantity"],
                "item_price": float(row["item_price"]),
                "image_url": row["product_image_url"],
            }
        )

    return list(grouped.values())


def get_orders(conn: Connection, user_id: int | None = None) -> list[dict]:
    """Orders for one user, or for every user (annotated with the customer) when ``user_id`` is None."""
    include_customer = user_id is None

    columns = [
        orders.c.id.label("order_id"),
        orders.c.order_date,
        orders.c.total_amount,
        orders.c.status,
        orders.c.shipping_address,
        order_items.c.product_id,
        order_items.c.quantity,
        order_items.c.price.label("item_price"),
        products.c.name.label("product_name"),
        products.c.image_url.label("product_image_url"),
    ]
    joined = orders.join(order_items, order_items.c.order_id == orders.c.id).join(
        products, products.c.id == order_items.c.product_id
    )

    if include_customer:
        columns += [users.c.username.label("customer_username"), users.c.email.label("customer_email")]
        joined = joined.join(users, users.c.id == orders.c.user_id)

    query = (
        select(*columns)
        .select_from(joined)
        .order_by(orders.c.order_date.desc(), orders.c.id.desc(), order_items.c.id)
    )
    if not include_customer:
        query = query.where(orders.c.user_id == user_id)

    return group_order_rows((row._mapping for row in conn.execute(query)), include_customer=include_customer)
