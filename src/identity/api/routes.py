"""FastAPI endpoints for the Identity domain."""

from fastapi import APIRouter, Depends

from identity.addresses import add_address, delete_address, list_addresses, update_address
from identity.api.dependencies import current_principal
from identity.api.schemas import AddressIdResponse, AddressSchema, MessageResponse, UserResponse
from identity.auth import Principal
from identity.users import get_user
from shared.database import Database
from shared.dependencies import get_database

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
def read_current_user(
    principal: Principal = Depends(current_principal),
    database: Database = Depends(get_database),
) -> UserResponse:
    with database.transaction() as conn:
        user = get_user(conn, principal.user_id)
    return UserResponse(**user)


@router.get("/addresses")
def read_addresses(
    principal: Principal = Depends(current_principal),
    database: Database = Depends(get_database),
) -> list[dict]:
    with database.transaction() as conn:
        return list_addresses(conn, principal.user_id)


@router.post("/addresses", status_code=201, response_model=AddressIdResponse)
def create_address(
    body: AddressSchema,
    principal: Principal = Depends(current_principal),
    database: Database = Depends(get_database),
) -> AddressIdResponse:
    address = body.to_address()
    with database.transaction() as conn:
        address_id = add_address(conn, principal.user_id, address)
    return AddressIdResponse(address_id=address_id)


@router.put("/addresses/{address_id}", response_model=MessageResponse)
def replace_address(
    address_id: int,
    body: AddressSchema,
    principal: Principal = Depends(current_principal),
    database: Database = Depends(get_database),
) -> MessageResponse:
    address = body.to_address()
    with database.transaction() as conn:
        update_address(conn, address_id, principal.user_id, address)
    return MessageResponse(message="Address updated successfully!")


@router.delete("/addresses/{address_id}", response_model=MessageResponse)
def remove_address(
    address_id: int,
    principal: Principal = Depends(current_principal),
    database: Database = Depends(get_database),
) -> MessageResponse:
    with database.transaction() as conn:
        delete_address(conn, address_id, principal.user_id)
    return MessageResponse(message="Address deleted successfully!")
