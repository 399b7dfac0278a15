"""Saved shipping addresses.

Every query is scoped by ``user_id`` as well as the address id, so a caller can
never read or modify another user's address. A scope mismatch is reported the
same way as a missing row.
"""

from datetime import UTC, datetime

import structlog
from sqlalchemy import Connection, delete, insert, select, update

from identity.tables import user_addresses
from shared.address import Address
from shared.errors import NotFoundError

logger = structlog.get_logger(__name__)

_NOT_FOUND = "Address not found or you do not have permission to modify it."


def list_addresses(conn: Connection, user_id: int) -> list[dict]:
    rows = conn.execute(
        select(
            user_addresses.c.id,
            user_addresses.c.full_name,
            user_addresses.c.address_line1,
            user_addresses.c.address_line2,
            user_addresses.c.city,
            user_addresses.c.state,
            user_addresses.c.postal_code,
            user_addresses.c.phone,
        )
        .where(user_addresses.c.user_id == user_id)
        .order_by(user_addresses.c.id.desc())
    )
    return [dict(row._mapping) for row in rows]


def add_address(conn: Connection, user_id: int, address: Address) -> int:
    result = conn.execute(
        insert(user_addresses).values(
            user_id=user_id,
            created_at=datetime.now(UTC),
            **address.to_dict(),
        )
    )
    address_id = result.inserted_primary_key[0]
    logger.info("Address added", user_id=user_id, address_id=address_id)
    return address_id


def update_address(conn: Connection, address_id: int, user_id: int, address: Address) -> None:
    result = conn.execute(
        update(user_addresses)
        .where(user_addresses.c.id == address_id, user_addresses.c.user_id == user_id)
        .values(**address.to_dict())
    )
    if result.rowcount == 0:
        raise NotFoundError(_NOT_FOUND)


def delete_address(conn: Connection, address_id: int, user_id: int) -> None:
    result = conn.execute(
        delete(user_addresses).where(user_addresses.c.id == address_id, user_addresses.c.user_id == user_id)
    )
    if result.rowcount == 0:
        raise NotFoundError(_NOT_FOUND)
    logger.info("Address deleted", user_id=user_id, address_id=address_id)
