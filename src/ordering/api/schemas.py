"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer), separate from the
internal dataclasses the cart and placement modules work with. Field aliases
keep the storefront client's camelCase keys working.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from identity.api.schemas import AddressSchema


# ---------------------------------------------------------------------------
# Cart Request Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: int = Field(..., alias="productId")
    quantity: StrictInt = 1


class UpdateCartQuantityRequest(BaseModel):
    quantity: StrictInt


# ---------------------------------------------------------------------------
# Order Request Schemas
# ---------------------------------------------------------------------------
class OrderItemSchema(BaseModel):
    product_id: int
    quantity: StrictInt
    product_price: Decimal


class CreateOrderRequest(BaseModel):
    """All fields are optional here so that missing ones are reported by the
    order validator with the same 400 messages as empty ones."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "items": [
                        {"product_id": 1, "quantity": 3, "product_price": "10.00"},
                        {"product_id": 2, "quantity": 1, "product_price": "4.50"},
                    ],
                    "totalAmount": "34.50",
                    "shippingAddress": {
                        "fullName": "Asha Shetty",
                        "address1": "12 Car Street",
                        "city": "Udupi",
                        "state": "Karnataka",
                        "pincode": "576101",
                        "phone": "9876543210",
                    },
                }
            ]
        },
    )

    items: list[OrderItemSchema] | None = None
    total_amount: Decimal | None = Field(None, alias="totalAmount")
    shipping_address: AddressSchema | None = Field(None, alias="shippingAddress")


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class CartLineResponse(BaseModel):
    cart_item_id: int
    product_id: int
    quantity: int
    product_name: str
    product_price: float
    product_image_url: str | None = None
    product_stock_quantity: int


class CartItemIdResponse(BaseModel):
    message: str
    cart_item_id: int = Field(..., serialization_alias="cartItemId")


class ClearCartResponse(BaseModel):
    message: str = "Cart cleared successfully."
    affected_rows: int = Field(..., serialization_alias="affectedRows")


class StatusResponse(BaseModel):
    message: str


class OrderIdResponse(BaseModel):
    message: str = "Order placed successfully!"
    order_id: int = Field(..., serialization_alias="orderId")


class OrderItemView(BaseModel):
    product_id: int
    product_name: str
    quantity: int
    item_price: float
    image_url: str | None = None


class CustomerView(BaseModel):
    username: str
    email: str


class OrderView(BaseModel):
    order_id: int
    order_date: datetime
    total_amount: float
    status: str
    shipping_address: dict | None = None
    customer: CustomerView | None = None
    items: list[OrderItemView]
