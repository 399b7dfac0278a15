"""Identity tables."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Table

from shared.database import metadata

users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("username", String(255), nullable=False),
    Column("email", String(255), nullable=False, unique=True),
    Column("role", String(20), nullable=False, default="user"),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

user_addresses = Table(
    "user_addresses",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("full_name", String(255), nullable=False),
    Column("address_line1", String(255), nullable=False),
    Column("address_line2", String(255)),
    Column("city", String(100), nullable=False),
    Column("state", String(100), nullable=False),
    Column("postal_code", String(20), nullable=False),
    Column("phone", String(20), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
)
