"""Order placement: converts a cart snapshot into a persisted order.

One placement is one transaction:

    1. insert the order header (status ``pending``)
    2. for each line, in the order supplied: take the stock out of the
       inventory ledger, then insert the order line with its frozen price
    3. clear the user's cart
    4. commit

Any failure after the transaction opens rolls back all of it, so a
failed attempt leaves no header, no lines, no decremented stock and an
untouched cart. The pooled connection goes back to the pool on every path.
Input is validated before a connection is acquired. Nothing is retried; the
caller may resubmit.
"""

import json
from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum

import structlog
from sqlalchemy import insert

from inventory.ledger import decrement_stock
from ordering.cart import clear_cart
from ordering.tables import order_items, orders
from shared.address import Address
from shared.database import Database
from shared.errors import InsufficientStockError, OrderPlacementError, PersistenceError, ValidationError
from shared.values import MAX_MONEY, MAX_QUANTITY

logger = structlog.get_logger(__name__)

CENTS = Decimal("0.01")


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class OrderLine:
    product_id: int
    quantity: int
    price: Decimal


@dataclass(frozen=True)
class PlacedOrder:
    order_id: int
    total_amount: Decimal
    line_count: int


def _as_money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENTS)


def _storable_money(value) -> Decimal | None:
    """``value`` rounded to cents, or None when it is not an amount a money column can hold."""
    try:
        amount = _as_money(value)
    except (InvalidOperation, TypeError, ValueError):
        return None
    if not amount.is_finite() or abs(amount) > MAX_MONEY:
        return None
    return amount


def _line_errors(index: int, line) -> list[str]:
    errors = []
    quantity = line.quantity
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        errors.append(f"Item {index} must have a positive quantity.")
    elif quantity > MAX_QUANTITY:
        errors.append(f"Item {index} quantity must not exceed {MAX_QUANTITY}.")

    price = _storable_money(line.price)
    if price is None:
        errors.append(f"Item {index} must have a valid price of at most {MAX_MONEY}.")
    elif price < 0:
        errors.append(f"Item {index} must have a non-negative price.")
    return errors


def validate_order(lines, shipping_address, total_amount) -> None:
    errors: dict[str, list[str]] = {}

    if not lines:
        errors["items"] = ["Order must contain at least one item."]
    else:
        for index, line in enumerate(lines):
            line_errors = _line_errors(index, line)
            if line_errors:
                errors.setdefault("items", []).extend(line_errors)

    if total_amount is None:
        errors["total_amount"] = ["Total amount is required."]
    elif _storable_money(total_amount) is None:
        errors["total_amount"] = [f"Total amount must be a number no greater than {MAX_MONEY}."]
    if shipping_address is None:
        errors["shipping_address"] = ["Shipping address is required."]

    if not errors and order_total(lines) > MAX_MONEY:
        errors["items"] = [f"Order total must not exceed {MAX_MONEY}."]

    if errors:
        raise ValidationError(errors)


def order_total(lines) -> Decimal:
    """Sum of unit price times quantity, rounded to cents."""
    return sum((_as_money(line.price) * line.quantity for line in lines), Decimal("0")).quantize(CENTS)


def place_order(
    database: Database,
    user_id: int,
    lines: list[OrderLine],
    shipping_address: Address,
    total_amount,
) -> PlacedOrder:
    """Atomically turn ``lines`` into an order for ``user_id``.

    The persisted total is recomputed from the line prices. ``total_amount``
    is the client's figure; a mismatch is logged and otherwise ignored.

    Raises:
        ValidationError: input is incomplete; nothing was touched.
        InsufficientStockError: a line could not be covered by stock.
        OrderPlacementError: any other storage failure.
    """
    validate_order(lines, shipping_address, total_amount)

    total = order_total(lines)
    if _as_money(total_amount) != total:
        logger.warning(
            "order_total_mismatch",
            user_id=user_id,
            client_total=str(total_amount),
            computed_total=str(total),
        )

    try:
        with database.transaction() as conn:
            order_id = conn.execute(
                insert(orders).values(
                    user_id=user_id,
                    total_amount=total,
                    shipping_address=json.dumps(shipping_address.to_dict()),
                    status=OrderStatus.PENDING.value,
                    order_date=datetime.now(UTC),
                )
            ).inserted_primary_key[0]

            for line in lines:
                # Decrement before inserting the line so a product that vanished
                # since it was carted reports as insufficient stock.
                decrement_stock(conn, line.product_id, line.quantity)
                conn.execute(
                    insert(order_items).values(
                        order_id=order_id,
                        product_id=line.product_id,
                        quantity=line.quantity,
                        price=_as_money(line.price),
                    )
                )

            clear_cart(conn, user_id)
    except InsufficientStockError as exc:
        logger.info("Order rejected", user_id=user_id, product_id=exc.product_id, reason="insufficient_stock")
        raise
    except PersistenceError as exc:
        raise OrderPlacementError() from exc

    logger.info("Order placed", order_id=order_id, user_id=user_id, total_amount=str(total), lines=len(lines))
    return PlacedOrder(order_id=order_id, total_amount=total, line_count=len(lines))
