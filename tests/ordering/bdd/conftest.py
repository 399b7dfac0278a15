"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from pytest_bdd import given, parsers, then
from sqlalchemy import func, select

from catalogue.tables import products
from ordering.cart import add_item, get_cart_lines, update_quantity
from ordering.tables import orders


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def catalog():
    """Product name to product id, filled in by the Given steps."""
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.parse('a product "{name}" priced {price} with {stock:d} in stock'))
def _(make_product, catalog, name, price, stock):
    catalog[name] = make_product(name=name, price=price, stock_quantity=stock)


@given(parsers.parse('the customer has {first_qty:d} of "{first}" and {second_qty:d} of "{second}" in their cart'))
def _(database, user_id, catalog, first_qty, first, second_qty, second):
    with database.transaction() as conn:
        add_item(conn, user_id, catalog[first], first_qty)
        add_item(conn, user_id, catalog[second], second_qty)


@given(parsers.parse('the customer changes "{name}" in their cart to {quantity:d}'))
def _(database, user_id, catalog, name, quantity):
    with database.transaction() as conn:
        line = next(line for line in get_cart_lines(conn, user_id) if line.product_id == catalog[name])
        update_quantity(conn, line.cart_item_id, user_id, quantity)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.parse('"{name}" has {stock:d} in stock'))
def _(database, catalog, name, stock):
    with database.transaction() as conn:
        current = conn.execute(
            select(products.c.stock_quantity).where(products.c.id == catalog[name])
        ).scalar_one()
    assert current == stock


@then("the customer's cart is empty")
def _(database, user_id):
    with database.transaction() as conn:
        assert get_cart_lines(conn, user_id) == []


@then(parsers.parse("the customer's cart still has {count:d} lines"))
def _(database, user_id, count):
    with database.transaction() as conn:
        assert len(get_cart_lines(conn, user_id)) == count


@then("no order is recorded")
def _(database):
    with database.transaction() as conn:
        assert conn.execute(select(func.count()).select_from(orders)).scalar_one() == 0
