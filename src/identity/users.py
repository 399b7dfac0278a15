"""User accounts.

Credentials are owned by the authentication provider; this module only keeps
the identity and role that orders and carts hang off.
"""

from datetime import UTC, datetime
from enum import Enum

import structlog
from sqlalchemy import Connection, insert, select

from identity.tables import users
from shared.errors import NotFoundError, ValidationError

logger = structlog.get_logger(__name__)


class Role(Enum):
    USER = "user"
    ADMIN = "admin"


def create_user(conn: Connection, username: str, email: str, role: Role = Role.USER) -> int:
    if not username or not email:
        raise ValidationError({"user": ["Username and email are required"]})

    result = conn.execute(
        insert(users).values(
            username=username,
            email=email.strip().lower(),
            role=Role(role).value,
            created_at=datetime.now(UTC),
        )
    )
    user_id = result.inserted_primary_key[0]
    logger.info("User created", user_id=user_id, role=Role(role).value)
    return user_id


def get_user(conn: Connection, user_id: int) -> dict:
    row = conn.execute(
        select(users.c.id, users.c.username, users.c.email, users.c.role, users.c.created_at).where(
            users.c.id == user_id
        )
    ).first()
    if row is None:
        raise NotFoundError("User not found.")
    return dict(row._mapping)
