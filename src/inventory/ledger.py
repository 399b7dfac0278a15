"""Inventory ledger: conditional stock decrement.

Stock is never checked and then written in two steps. The guard
``stock_quantity >= quantity`` lives in the same UPDATE statement as the
subtraction, so the storage engine applies check and write atomically and two
concurrent orders can never both spend the last unit, whatever the number of
worker processes.
"""

from datetime import UTC, datetime

import structlog
from sqlalchemy import Connection, update

from catalogue.tables import products
from shared.errors import InsufficientStockError, ValidationError
from shared.values import MAX_QUANTITY

logger = structlog.get_logger(__name__)


def decrement_stock(conn: Connection, product_id: int, quantity: int) -> None:
    """Take ``quantity`` units of ``product_id`` out of stock.

    Runs on the caller's connection so it joins the caller's transaction.

    Raises:
        ValidationError: ``quantity`` is not a positive integer within column range.
        InsufficientStockError: the product does not exist or holds fewer
            than ``quantity`` units. The two causes are not distinguished.
    """
    if isinstance(quantity, bool) or not isinstance(quantity, int) or not 0 < quantity <= MAX_QUANTITY:
        raise ValidationError({"quantity": [f"Quantity must be a positive integer no greater than {MAX_QUANTITY}"]})

    result = conn.execute(
        update(products)
        .where(products.c.id == product_id, products.c.stock_quantity >= quantity)
        .values(
            stock_quantity=products.c.stock_quantity - quantity,
            updated_at=datetime.now(UTC),
        )
    )

    if result.rowcount == 0:
        logger.info("Stock decrement refused", product_id=product_id, quantity=quantity)
        raise InsufficientStockError(product_id)

    logger.debug("Stock decremented", product_id=product_id, quantity=quantity)
