"""FastAPI routes for the Ordering domain: cart and orders."""

from fastapi import APIRouter, Depends

from identity.api.dependencies import current_principal, require_admin
from identity.auth import Principal
from ordering.api.schemas import (
    AddToCartRequest,
    CartItemIdResponse,
    CartLineResponse,
    ClearCartResponse,
    CreateOrderRequest,
    OrderIdResponse,
    OrderView,
    StatusResponse,
    UpdateCartQuantityRequest,
)
from ordering.cart import add_item, clear_cart, get_cart_lines, remove_item, update_quantity
from ordering.history import get_orders
from ordering.placement import OrderLine, place_order
from shared.database import Database
from shared.dependencies import get_database

# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=list[CartLineResponse])
def read_cart(
    principal: Principal = Depends(current_principal),
    database: Database = Depends(get_database),
):
    with database.transaction() as conn:
        return get_cart_lines(conn, principal.user_id)


@cart_router.post("", response_model=CartItemIdResponse)
def add_cart_item(
    body: AddToCartRequest,
    principal: Principal = Depends(current_principal),
    database: Database = Depends(get_database),
) -> CartItemIdResponse:
    with database.transaction() as conn:
        result = add_item(conn, principal.user_id, body.product_id, body.quantity)

    message = "Product added to cart successfully." if result.created else "Cart item quantity updated successfully."
    return CartItemIdResponse(message=message, cart_item_id=result.cart_item_id)


# Registered before "/{cart_item_id}" routes; the int converter would reject "clear" anyway
@cart_router.delete("/clear", response_model=ClearCartResponse)
def clear_user_cart(
    principal: Principal = Depends(current_principal),
    database: Database = Depends(get_database),
) -> ClearCartResponse:
    with database.transaction() as conn:
        removed = clear_cart(conn, principal.user_id)
    return ClearCartResponse(affected_rows=removed)


@cart_router.put("/{cart_item_id}", response_model=StatusResponse)
def update_cart_item(
    cart_item_id: int,
    body: UpdateCartQuantityRequest,
    principal: Principal = Depends(current_principal),
    database: Database = Depends(get_database),
) -> StatusResponse:
    with database.transaction() as conn:
        update_quantity(conn, cart_item_id, principal.user_id, body.quantity)
    return StatusResponse(message="Cart item quantity updated successfully.")


@cart_router.delete("/{cart_item_id}", response_model=StatusResponse)
def remove_cart_item(
    cart_item_id: int,
    principal: Principal = Depends(current_principal),
    database: Database = Depends(get_database),
) -> StatusResponse:
    with database.transaction() as conn:
        remove_item(conn, cart_item_id, principal.user_id)
    return StatusResponse(message="Product removed from cart successfully.")


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderIdResponse)
def create_order(
    body: CreateOrderRequest,
    principal: Principal = Depends(current_principal),
    database: Database = Depends(get_database),
) -> OrderIdResponse:
    lines = [
        OrderLine(product_id=item.product_id, quantity=item.quantity, price=item.product_price)
        for item in body.items or []
    ]
    shipping_address = body.shipping_address.to_address() if body.shipping_address else None

    placed = place_order(database, principal.user_id, lines, shipping_address, body.total_amount)
    return OrderIdResponse(order_id=placed.order_id)


@order_router.get("/my", response_model=list[OrderView])
def read_my_orders(
    principal: Principal = Depends(current_principal),
    database: Database = Depends(get_database),
):
    with database.transaction() as conn:
        return get_orders(conn, user_id=principal.user_id)


@order_router.get("/all", response_model=list[OrderView])
def read_all_orders(
    _admin: Principal = Depends(require_admin),
    database: Database = Depends(get_database),
):
    with database.transaction() as conn:
        return get_orders(conn)
