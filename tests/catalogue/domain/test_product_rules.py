from decimal import Decimal

import pytest

from catalogue.images import public_id_from_url
from catalogue.products import ProductData
from shared.errors import ValidationError


class TestProductData:
    def test_valid_product(self):
        data = ProductData(name="Mug", price=Decimal("9.00"), stock_quantity=0)
        assert data.stock_quantity == 0

    def test_name_is_required(self):
        with pytest.raises(ValidationError) as exc_info:
            ProductData(name="  ", price=Decimal("1.00"), stock_quantity=1)
        assert "name" in exc_info.value.messages

    def test_price_cannot_be_negative(self):
        with pytest.raises(ValidationError) as exc_info:
            ProductData(name="Mug", price=Decimal("-0.01"), stock_quantity=1)
        assert "price" in exc_info.value.messages

    def test_stock_cannot_be_negative(self):
        with pytest.raises(ValidationError) as exc_info:
            ProductData(name="Mug", price=Decimal("1.00"), stock_quantity=-1)
        assert "stock_quantity" in exc_info.value.messages

    @pytest.mark.parametrize(
        "overrides, field",
        [
            ({"name": "N" * 256}, "name"),
            ({"price": Decimal("100000000.00")}, "price"),
            ({"price": Decimal("1.005")}, "price"),
            ({"stock_quantity": 2**31}, "stock_quantity"),
            ({"category": "c" * 101}, "category"),
        ],
    )
    def test_values_beyond_column_limits(self, overrides, field):
        values = {"name": "Mug", "price": Decimal("1.00"), "stock_quantity": 1, **overrides}

        with pytest.raises(ValidationError) as exc_info:
            ProductData(**values)
        assert field in exc_info.value.messages

    def test_name_is_stripped(self):
        assert ProductData(name=" Mug ", price=Decimal("1.00"), stock_quantity=1).name == "Mug"


class TestPublicIdFromUrl:
    def test_extracts_folder_and_name(self):
        url = "https://res.cloudinary.com/demo/image/upload/v1712345678/storefront/shirt.jpg"
        assert public_id_from_url(url) == "storefront/shirt"

    def test_without_folder(self):
        url = "https://res.cloudinary.com/demo/image/upload/v1/mug.png"
        assert public_id_from_url(url) == "mug"

    @pytest.mark.parametrize(
        "url",
        [
            None,
            "",
            "https://cdn.example.com/images/shirt.jpg",
            "https://res.cloudinary.com/demo/image/fetch/shirt.jpg",
            "https://res.cloudinary.com/demo/image/upload/v1712",
            "https://res.cloudinary.com/demo/image/upload/v1712/no-extension",
        ],
    )
    def test_unrecognised_urls_yield_none(self, url):
        assert public_id_from_url(url) is None
