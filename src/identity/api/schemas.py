"""Pydantic request/response schemas for the Identity API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from shared.address import Address

# --- Request Schemas ---


class AddressSchema(BaseModel):
    """Postal address as sent by clients.

    Accepts both the storefront's camelCase keys (``fullName``, ``address1``,
    ``pincode``) and the snake_case field names.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "fullName": "Asha Shetty",
                    "address1": "12 Car Street",
                    "address2": "Near Temple",
                    "city": "Udupi",
                    "state": "Karnataka",
                    "pincode": "576101",
                    "phone": "9876543210",
                }
            ]
        },
    )

    full_name: str = Field(..., alias="fullName")
    address_line1: str = Field(..., alias="address1")
    address_line2: str | None = Field(None, alias="address2")
    city: str
    state: str
    postal_code: str = Field(..., alias="pincode")
    phone: str

    def to_address(self) -> Address:
        return Address(
            full_name=self.full_name,
            address_line1=self.address_line1,
            address_line2=self.address_line2,
            city=self.city,
            state=self.state,
            postal_code=self.postal_code,
            phone=self.phone,
        )


# --- Response Schemas ---


class AddressIdResponse(BaseModel):
    message: str = "Address added successfully!"
    address_id: int = Field(..., serialization_alias="addressId")


class MessageResponse(BaseModel):
    message: str


class UserResponse(BaseModel):
    id: int
    username: str
    email: str
    role: str
