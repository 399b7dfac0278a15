"""Shopping cart: one line per (user, product), read back as a checkout snapshot.

All operations run on a caller-supplied connection. Mutations of a single line
are scoped by ``user_id`` as well as the line id: a line that is missing and a
line that belongs to someone else are both reported as ``NotFoundError``.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal

import structlog
from sqlalchemy import Connection, delete, select, update
from sqlalchemy.dialects import postgresql, sqlite

from catalogue.tables import products
from ordering.tables import cart_items
from shared.errors import NotFoundError, PersistenceError, ValidationError
from shared.values import MAX_QUANTITY

logger = structlog.get_logger(__name__)

_NOT_FOUND = "Cart item not found or does not belong to the user."

# Dialects with INSERT ... ON CONFLICT DO UPDATE
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


@dataclass(frozen=True)
class CartLine:
    cart_item_id: int
    product_id: int
    quantity: int
    product_name: str
    product_price: Decimal
    product_image_url: str | None
    product_stock_quantity: int


@dataclass(frozen=True)
class AddToCartResult:
    cart_item_id: int
    quantity: int
    created: bool


def _require_positive(quantity) -> None:
    if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity <= 0:
        raise ValidationError({"quantity": ["A positive quantity is required"]})
    if quantity > MAX_QUANTITY:
        raise ValidationError({"quantity": [f"Quantity must not exceed {MAX_QUANTITY}"]})


def get_cart_lines(conn: Connection, user_id: int) -> list[CartLine]:
    rows = conn.execute(
        select(
            cart_items.c.id.label("cart_item_id"),
            cart_items.c.product_id,
            cart_items.c.quantity,
            products.c.name.label("product_name"),
            products.c.price.label("product_price"),
            products.c.image_url.label("product_image_url"),
            products.c.stock_quantity.label("product_stock_quantity"),
        )
        .select_from(cart_items.join(products, products.c.id == cart_items.c.product_id))
        .where(cart_items.c.user_id == user_id)
        .order_by(cart_items.c.id)
    )
    return [CartLine(**row._mapping) for row in rows]


def add_item(conn: Connection, user_id: int, product_id: int, quantity: int) -> AddToCartResult:
    """Add ``quantity`` of a product, summing into the existing line if there is one."""
    _require_positive(quantity)

    if conn.execute(select(products.c.id).where(products.c.id == product_id)).first() is None:
        raise NotFoundError("Product not found.")

    dialect_insert = _UPSERT_INSERTS.get(conn.dialect.name)
    if dialect_insert is None:
        raise PersistenceError(f"Cart upsert is not supported on {conn.dialect.name}")

    stmt = dialect_insert(cart_items).values(
        user_id=user_id,
        product_id=product_id,
        quantity=quantity,
        created_at=datetime.now(UTC),
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["user_id", "product_id"],
        set_={"quantity": cart_items.c.quantity + stmt.excluded.quantity},
        where=cart_items.c.quantity <= MAX_QUANTITY - stmt.excluded.quantity,
    ).returning(cart_items.c.id, cart_items.c.quantity)

    row = conn.execute(stmt).first()
    if row is None:
        raise ValidationError({"quantity": [f"Quantity in cart must not exceed {MAX_QUANTITY}"]})
    result = AddToCartResult(cart_item_id=row.id, quantity=row.quantity, created=row.quantity == quantity)

    logger.debug(
        "Cart item added",
        user_id=user_id,
        product_id=product_id,
        cart_item_id=result.cart_item_id,
        quantity=result.quantity,
    )
    return result


def update_quantity(conn: Connection, cart_item_id: int, user_id: int, quantity: int) -> None:
    _require_positive(quantity)

    result = conn.execute(
        update(cart_items)
        .where(cart_items.c.id == cart_item_id, cart_items.c.user_id == user_id)
        .values(quantity=quantity)
    )
    if result.rowcount == 0:
        raise NotFoundError(_NOT_FOUND)
    logger.debug("Cart item quantity updated", user_id=user_id, cart_item_id=cart_item_id, quantity=quantity)


def remove_item(conn: Connection, cart_item_id: int, user_id: int) -> None:
    result = conn.execute(
        delete(cart_items).where(cart_items.c.id == cart_item_id, cart_items.c.user_id == user_id)
    )
    if result.rowcount == 0:
        raise NotFoundError(_NOT_FOUND)
    logger.debug("Cart item removed", user_id=user_id, cart_item_id=cart_item_id)


def clear_cart(conn: Connection, user_id: int) -> int:
    """Delete every line in the user's cart and return how many were removed."""
    result = conn.execute(delete(cart_items).where(cart_items.c.user_id == user_id))
    logger.debug("Cart cleared", user_id=user_id, removed=result.rowcount)
    return result.rowcount
