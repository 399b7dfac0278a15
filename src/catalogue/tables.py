"""Catalogue tables."""

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, Numeric, String, Table, Text

from shared.database import metadata

products = Table(
    "products",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False),
    Column("description", Text),
    Column("price", Numeric(10, 2), nullable=False),
    Column("stock_quantity", Integer, nullable=False, default=0),
    Column("image_url", String(512)),
    Column("category", String(100)),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
    CheckConstraint("stock_quantity >= 0", name="ck_products_stock_non_negative"),
)
