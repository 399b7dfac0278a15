"""Base for immutable domain values and the numeric limits the schema can store.

Values are pydantic models. Field constraints are declared on the model; a
failed construction raises the shared ``ValidationError`` so callers see one
error type whichever layer built the value.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from shared.errors import ValidationError

# INTEGER columns
MAX_QUANTITY = 2**31 - 1

# NUMERIC(10, 2) columns
MONEY_MAX_DIGITS = 10
MONEY_DECIMAL_PLACES = 2
MAX_MONEY = Decimal("99999999.99")


class ValueObject(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True, extra="forbid")

    def __init__(self, **data):
        try:
            super().__init__(**data)
        except PydanticValidationError as exc:
            raise ValidationError.from_pydantic(exc) from exc

    def to_dict(self) -> dict:
        return self.model_dump()
