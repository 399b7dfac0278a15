"""Product catalogue.

Reads and creation run on a caller-supplied connection. Updates and deletes
own their transaction because they clean up hosted images, which must only
happen after the catalogue change has committed.
"""

from datetime import UTC, datetime
from decimal import Decimal

import structlog
from pydantic import Field
from sqlalchemy import Connection, delete, insert, or_, select, update

from catalogue.images import get_image_host, public_id_from_url
from catalogue.tables import products
from shared.database import Database
from shared.errors import NotFoundError, TransientUpstreamError
from shared.values import MAX_QUANTITY, MONEY_DECIMAL_PLACES, MONEY_MAX_DIGITS, ValueObject

logger = structlog.get_logger(__name__)


class ProductData(ValueObject):
    name: str = Field(..., min_length=1, max_length=255)
    price: Decimal = Field(..., ge=0, max_digits=MONEY_MAX_DIGITS, decimal_places=MONEY_DECIMAL_PLACES)
    stock_quantity: int = Field(..., ge=0, le=MAX_QUANTITY)
    description: str | None = None
    category: str | None = Field(None, max_length=100)
    image_url: str | None = Field(None, max_length=512)


def _columns():
    return (
        products.c.id,
        products.c.name,
        products.c.description,
        products.c.price,
        products.c.stock_quantity,
        products.c.image_url,
        products.c.category,
        products.c.created_at,
        products.c.updated_at,
    )


def list_products(conn: Connection, search: str | None = None) -> list[dict]:
    query = select(*_columns()).order_by(products.c.created_at.desc(), products.c.id.desc())
    if search:
        query = query.where(
            or_(
                products.c.name.icontains(search, autoescape=True),
                products.c.description.icontains(search, autoescape=True),
            )
        )
    return [dict(row._mapping) for row in conn.execute(query)]


def get_product(conn: Connection, product_id: int) -> dict:
    row = conn.execute(select(*_columns()).where(products.c.id == product_id)).first()
    if row is None:
        raise NotFoundError("Product not found.")
    return dict(row._mapping)


def create_product(conn: Connection, data: ProductData) -> int:
    now = datetime.now(UTC)
    result = conn.execute(
        insert(products).values(
            name=data.name,
            description=data.description,
            price=Decimal(data.price),
            stock_quantity=data.stock_quantity,
            image_url=data.image_url,
            category=data.category,
            created_at=now,
            updated_at=now,
        )
    )
    product_id = result.inserted_primary_key[0]
    logger.info("Product created", product_id=product_id, stock_quantity=data.stock_quantity)
    return product_id


def update_product(database: Database, product_id: int, data: ProductData) -> dict:
    with database.transaction() as conn:
        row = conn.execute(select(products.c.image_url).where(products.c.id == product_id)).first()
        if row is None:
            raise NotFoundError("Product not found.")
        old_image_url = row.image_url

        conn.execute(
            update(products)
            .where(products.c.id == product_id)
            .values(
                name=data.name,
                description=data.description,
                price=Decimal(data.price),
                stock_quantity=data.stock_quantity,
                image_url=data.image_url,
                category=data.category,
                updated_at=datetime.now(UTC),
            )
        )
        product = get_product(conn, product_id)

    if old_image_url and old_image_url != data.image_url:
        discard_image(old_image_url)
    return product


def delete_product(database: Database, product_id: int) -> None:
    with database.transaction() as conn:
        row = conn.execute(select(products.c.image_url).where(products.c.id == product_id)).first()
        if row is None:
            raise NotFoundError("Product not found.")
        conn.execute(delete(products).where(products.c.id == product_id))

    logger.info("Product deleted", product_id=product_id)
    if row.image_url:
        discard_image(row.image_url)


def discard_image(image_url: str) -> bool:
    """Best-effort removal of a hosted image. Host failures are logged, never raised."""
    public_id = public_id_from_url(image_url)
    if public_id is None:
        return False

    try:
        deleted = get_image_host().delete(public_id)
    except TransientUpstreamError as exc:
        logger.warning("Image host unavailable, image left behind", public_id=public_id, error=str(exc))
        return False

    if not deleted:
        logger.warning("Image host did not delete image", public_id=public_id)
    return deleted
