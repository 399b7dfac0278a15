"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from catalogue.products import ProductData

# --- Product Request Schemas ---


class ProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Mangalore Tiles Coaster Set",
                    "description": "Set of four terracotta coasters.",
                    "price": "499.00",
                    "stock_quantity": 25,
                    "category": "Home",
                    "image_url": "https://res.cloudinary.com/demo/image/upload/v1712/tulunad-store-products/coasters.jpg",
                }
            ]
        }
    }

    name: str
    description: str | None = None
    price: Decimal
    stock_quantity: int
    category: str | None = None
    image_url: str | None = None

    def to_data(self) -> ProductData:
        return ProductData(
            name=self.name,
            description=self.description,
            price=self.price,
            stock_quantity=self.stock_quantity,
            category=self.category,
            image_url=self.image_url,
        )


# --- Response Schemas ---


class ProductResponse(BaseModel):
    id: int
    name: str
    description: str | None = None
    price: float
    stock_quantity: int
    category: str | None = None
    image_url: str | None = None
    created_at: datetime
    updated_at: datetime


class ProductIdResponse(BaseModel):
    message: str = "Product created successfully!"
    product_id: int = Field(..., serialization_alias="productId")
    image_url: str | None = None


class StatusResponse(BaseModel):
    message: str
