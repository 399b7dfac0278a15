"""Application tests for order placement against a real database."""

import json
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest
from sqlalchemy import func, select

from catalogue.tables import products
from ordering.cart import add_item, get_cart_lines
from ordering.placement import OrderLine, place_order
from ordering.tables import order_items, orders
from shared.errors import InsufficientStockError, OrderPlacementError, ValidationError


def _stock(database, product_id):
    with database.transaction() as conn:
        return conn.execute(select(products.c.stock_quantity).where(products.c.id == product_id)).scalar_one()


def _count(database, table):
    with database.transaction() as conn:
        return conn.execute(select(func.count()).select_from(table)).scalar_one()


def _cart(database, user_id):
    with database.transaction() as conn:
        return get_cart_lines(conn, user_id)


@pytest.fixture()
def stocked(make_product):
    """Two products: A at 10.00 with 5 in stock, B at 4.50 with 2 in stock."""
    return make_product(name="A", price="10.00", stock_quantity=5), make_product(
        name="B", price="4.50", stock_quantity=2
    )


@pytest.fixture()
def carted(database, user_id, stocked):
    product_a, product_b = stocked
    with database.transaction() as conn:
        add_item(conn, user_id, product_a, 3)
        add_item(conn, user_id, product_b, 1)
    return stocked


class TestSuccessfulPlacement:
    def test_order_is_persisted_with_lines(self, database, user_id, carted, shipping_address):
        product_a, product_b = carted
        lines = [
            OrderLine(product_id=product_a, quantity=3, price=Decimal("10.00")),
            OrderLine(product_id=product_b, quantity=1, price=Decimal("4.50")),
        ]

        placed = place_order(database, user_id, lines, shipping_address, Decimal("34.50"))

        assert placed.total_amount == Decimal("34.50")
        assert placed.line_count == 2
        with database.transaction() as conn:
            order = conn.execute(select(orders).where(orders.c.id == placed.order_id)).one()
            items = conn.execute(
                select(order_items.c.product_id, order_items.c.quantity, order_items.c.price)
                .where(order_items.c.order_id == placed.order_id)
                .order_by(order_items.c.id)
            ).all()

        assert order.status == "pending"
        assert order.total_amount == Decimal("34.50")
        assert json.loads(order.shipping_address)["postal_code"] == "576101"
        assert [tuple(item) for item in items] == [
            (product_a, 3, Decimal("10.00")),
            (product_b, 1, Decimal("4.50")),
        ]

    def test_stock_is_decremented_and_cart_cleared(self, database, user_id, carted, shipping_address):
        product_a, product_b = carted
        lines = [OrderLine(product_a, 3, Decimal("10.00")), OrderLine(product_b, 1, Decimal("4.50"))]

        place_order(database, user_id, lines, shipping_address, Decimal("34.50"))

        assert _stock(database, product_a) == 2
        assert _stock(database, product_b) == 1
        assert _cart(database, user_id) == []

    def test_line_price_is_frozen_at_purchase(self, database, user_id, carted, shipping_address):
        product_a, _ = carted
        placed = place_order(database, user_id, [OrderLine(product_a, 1, Decimal("10.00"))], shipping_address, 10)

        with database.transaction() as conn:
            conn.execute(products.update().where(products.c.id == product_a).values(price=Decimal("99.00")))
            price = conn.execute(
                select(order_items.c.price).where(order_items.c.order_id == placed.order_id)
            ).scalar_one()

        assert price == Decimal("10.00")

    def test_client_total_mismatch_keeps_computed_total(self, database, user_id, carted, shipping_address):
        product_a, _ = carted

        placed = place_order(database, user_id, [OrderLine(product_a, 2, Decimal("10.00"))], shipping_address, 1)

        assert placed.total_amount == Decimal("20.00")


class TestRejectedPlacement:
    def test_short_second_line_rolls_back_everything(self, database, user_id, carted, shipping_address):
        product_a, product_b = carted
        lines = [OrderLine(product_a, 3, Decimal("10.00")), OrderLine(product_b, 5, Decimal("4.50"))]

        with pytest.raises(InsufficientStockError) as exc_info:
            place_order(database, user_id, lines, shipping_address, Decimal("52.50"))

        assert exc_info.value.product_id == product_b
        assert _stock(database, product_a) == 5
        assert _stock(database, product_b) == 2
        assert _count(database, orders) == 0
        assert _count(database, order_items) == 0
        assert len(_cart(database, user_id)) == 2

    def test_product_deleted_after_carting(self, database, user_id, carted, shipping_address):
        product_a, product_b = carted
        with database.transaction() as conn:
            conn.execute(products.delete().where(products.c.id == product_b))

        with pytest.raises(InsufficientStockError) as exc_info:
            place_order(
                database,
                user_id,
                [OrderLine(product_a, 1, Decimal("10.00")), OrderLine(product_b, 1, Decimal("4.50"))],
                shipping_address,
                Decimal("14.50"),
            )

        assert exc_info.value.product_id == product_b
        assert _stock(database, product_a) == 5
        assert _count(database, orders) == 0

    def test_invalid_input_touches_nothing(self, database, user_id, carted):
        product_a, _ = carted

        with pytest.raises(ValidationError):
            place_order(database, user_id, [OrderLine(product_a, 1, Decimal("10.00"))], None, Decimal("10.00"))

        assert _stock(database, product_a) == 5
        assert _count(database, orders) == 0
        assert len(_cart(database, user_id)) == 2

    def test_validation_happens_before_any_connection_is_used(self, user_id, shipping_address):
        class Unreachable:
            def transaction(self):
                raise AssertionError("validation should reject before touching the database")

        with pytest.raises(ValidationError):
            place_order(Unreachable(), user_id, [], shipping_address, Decimal("0"))

    def test_single_line_short_of_stock(self, database, user_id, make_product, shipping_address):
        product_id = make_product(price="10.00", stock_quantity=2)
        with database.transaction() as conn:
            add_item(conn, user_id, product_id, 3)

        with pytest.raises(InsufficientStockError) as exc_info:
            place_order(database, user_id, [OrderLine(product_id, 3, Decimal("10.00"))], shipping_address, 30)

        assert exc_info.value.product_id == product_id
        assert _stock(database, product_id) == 2
        assert _count(database, orders) == 0
        assert [line.quantity for line in _cart(database, user_id)] == [3]

    def test_storage_failure_is_reported_generically(self, database, carted, shipping_address):
        product_a, _ = carted

        with pytest.raises(OrderPlacementError) as exc_info:
            # No such user, the order header violates its foreign key
            place_order(database, 9999, [OrderLine(product_a, 1, Decimal("10.00"))], shipping_address, 10)

        assert exc_info.value.public_message == "Failed to place order."
        assert _stock(database, product_a) == 5
        assert _count(database, orders) == 0


class TestConcurrentPlacement:
    def test_last_units_are_sold_once(self, database, make_user, make_product, shipping_address):
        product_id = make_product(price="10.00", stock_quantity=3)
        buyers = [make_user() for _ in range(8)]

        def attempt(buyer):
            try:
                place_order(database, buyer, [OrderLine(product_id, 1, Decimal("10.00"))], shipping_address, 10)
            except InsufficientStockError:
                return False
            return True

        with ThreadPoolExecutor(max_workers=4) as pool:
            outcomes = list(pool.map(attempt, buyers))

        assert outcomes.count(True) == 3
        assert _stock(database, product_id) == 0
        assert _count(database, orders) == 3
        assert _count(database, order_items) == 3
