"""Postal address value, used for saved addresses and order shipping addresses."""

from pydantic import Field

from shared.values import ValueObject


class Address(ValueObject):
    full_name: str = Field(..., min_length=1, max_length=255)
    address_line1: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=100)
    postal_code: str = Field(..., min_length=1, max_length=20)
    phone: str = Field(..., min_length=1, max_length=20)
    address_line2: str | None = Field(None, max_length=255)

    @classmethod
    def from_dict(cls, data: dict) -> "Address":
        return cls(**{name: data.get(name) for name in cls.model_fields})
