"""FastAPI endpoints for the Catalogue domain."""

from fastapi import APIRouter, Depends

from catalogue.api.schemas import ProductIdResponse, ProductRequest, ProductResponse, StatusResponse
from catalogue.products import create_product, delete_product, get_product, list_products, update_product
from identity.api.dependencies import require_admin
from identity.auth import Principal
from shared.database import Database
from shared.dependencies import get_database

product_router = APIRouter(prefix="/products", tags=["products"])


# --- Public endpoints ---


@product_router.get("", response_model=list[ProductResponse])
def read_products(q: str | None = None, database: Database = Depends(get_database)) -> list[dict]:
    with database.transaction() as conn:
        return list_products(conn, search=q)


@product_router.get("/{product_id}", response_model=ProductResponse)
def read_product(product_id: int, database: Database = Depends(get_database)) -> dict:
    with database.transaction() as conn:
        return get_product(conn, product_id)


# --- Admin endpoints ---


@product_router.post("", status_code=201, response_model=ProductIdResponse)
def add_product(
    body: ProductRequest,
    _admin: Principal = Depends(require_admin),
    database: Database = Depends(get_database),
) -> ProductIdResponse:
    data = body.to_data()
    with database.transaction() as conn:
        product_id = create_product(conn, data)
    return ProductIdResponse(product_id=product_id, image_url=data.image_url)


@product_router.put("/{product_id}", response_model=ProductResponse)
def replace_product(
    product_id: int,
    body: ProductRequest,
    _admin: Principal = Depends(require_admin),
    database: Database = Depends(get_database),
) -> dict:
    return update_product(database, product_id, body.to_data())


@product_router.delete("/{product_id}", response_model=StatusResponse)
def remove_product(
    product_id: int,
    _admin: Principal = Depends(require_admin),
    database: Database = Depends(get_database),
) -> StatusResponse:
    delete_product(database, product_id)
    return StatusResponse(message="Product deleted successfully.")
