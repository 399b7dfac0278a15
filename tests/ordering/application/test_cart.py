from decimal import Decimal

import pytest

from ordering.cart import add_item, clear_cart, get_cart_lines, remove_item, update_quantity
from shared.errors import NotFoundError, ValidationError
from shared.values import MAX_QUANTITY


class TestAddItem:
    def test_first_add_creates_a_line(self, database, user_id, make_product):
        product_id = make_product(name="Mug", price="9.50", stock_quantity=6)

        with database.transaction() as conn:
            result = add_item(conn, user_id, product_id, 2)
            lines = get_cart_lines(conn, user_id)

        assert result.created
        assert result.quantity == 2
        (line,) = lines
        assert line.cart_item_id == result.cart_item_id
        assert line.product_name == "Mug"
        assert line.product_price == Decimal("9.50")
        assert line.product_stock_quantity == 6

    def test_adding_again_sums_into_the_same_line(self, database, user_id, make_product):
        product_id = make_product()

        with database.transaction() as conn:
            first = add_item(conn, user_id, product_id, 2)
            second = add_item(conn, user_id, product_id, 3)
            lines = get_cart_lines(conn, user_id)

        assert not second.created
        assert second.cart_item_id == first.cart_item_id
        assert [line.quantity for line in lines] == [5]

    def test_unknown_product(self, database, user_id):
        with pytest.raises(NotFoundError):
            with database.transaction() as conn:
                add_item(conn, user_id, 404, 1)

    @pytest.mark.parametrize("quantity", [0, -1, True, 2**31])
    def test_quantity_outside_column_range(self, database, user_id, make_product, quantity):
        product_id = make_product()

        with pytest.raises(ValidationError):
            with database.transaction() as conn:
                add_item(conn, user_id, product_id, quantity)

    def test_summed_quantity_cannot_overflow(self, database, user_id, make_product):
        product_id = make_product()
        with database.transaction() as conn:
            add_item(conn, user_id, product_id, MAX_QUANTITY)

        with pytest.raises(ValidationError):
            with database.transaction() as conn:
                add_item(conn, user_id, product_id, 1)

        with database.transaction() as conn:
            assert get_cart_lines(conn, user_id)[0].quantity == MAX_QUANTITY

    def test_carts_are_per_user(self, database, user_id, make_user, make_product):
        other = make_user()
        product_id = make_product()

        with database.transaction() as conn:
            add_item(conn, other, product_id, 1)
            assert get_cart_lines(conn, user_id) == []


class TestChangeCart:
    @pytest.fixture()
    def cart_item_id(self, database, user_id, make_product):
        with database.transaction() as conn:
            return add_item(conn, user_id, make_product(), 1).cart_item_id

    def test_update_quantity(self, database, user_id, cart_item_id):
        with database.transaction() as conn:
            update_quantity(conn, cart_item_id, user_id, 4)
            assert get_cart_lines(conn, user_id)[0].quantity == 4

    def test_update_someone_elses_line(self, database, user_id, make_user, cart_item_id):
        intruder = make_user()

        with pytest.raises(NotFoundError):
            with database.transaction() as conn:
                update_quantity(conn, cart_item_id, intruder, 4)

        with database.transaction() as conn:
            assert get_cart_lines(conn, user_id)[0].quantity == 1

    def test_update_to_zero_is_rejected(self, database, user_id, cart_item_id):
        with pytest.raises(ValidationError):
            with database.transaction() as conn:
                update_quantity(conn, cart_item_id, user_id, 0)

    def test_remove_item(self, database, user_id, cart_item_id):
        with database.transaction() as conn:
            remove_item(conn, cart_item_id, user_id)
            assert get_cart_lines(conn, user_id) == []

    def test_remove_someone_elses_line(self, database, user_id, make_user, cart_item_id):
        intruder = make_user()

        with pytest.raises(NotFoundError):
            with database.transaction() as conn:
                remove_item(conn, cart_item_id, intruder)

        with database.transaction() as conn:
            assert [line.quantity for line in get_cart_lines(conn, user_id)] == [1]

    def test_remove_missing_item(self, database, user_id):
        with pytest.raises(NotFoundError):
            with database.transaction() as conn:
                remove_item(conn, 404, user_id)

    def test_clear_cart_reports_removed_lines(self, database, user_id, make_product, cart_item_id):
        with database.transaction() as conn:
            add_item(conn, user_id, make_product(name="Second"), 1)
            assert clear_cart(conn, user_id) == 2
            assert clear_cart(conn, user_id) == 0
